#!/usr/bin/env python3
"""
Lazy infinite processes and their combinators.

A Process is an immutable node: ``v`` is the current value and ``evolve`` is
the node for the next time step. Nothing is mutated when a process evolves; the
successor of a node is built once and then returned on every later access, so a
node can be shared by several combinators without their evolutions diverging.

Usage:
    counter = count(0)
    doubled = fmap(lambda x: 2 * x)(counter)
    take(3, doubled)                                  # [0, 2, 4]
    take(2, aggregate(3, lambda *w: sum(w))(counter)) # [3, 12]
"""

from typing import Any, Callable, Generic, Iterator, List, Tuple, TypeVar

T = TypeVar('T')
S = TypeVar('S')

_UNSET = object()


class Process(Generic[T]):
    """
    Node of a lazy infinite sequence.

    Parameters:
    -----------
    value : T
        Current value of the process
    step : Callable[[], Process[T]]
        Pure function building the next node; called at most once
    """

    __slots__ = ('_value', '_compute', '_next', '_step')

    def __init__(self, value: T, step: Callable[[], 'Process[T]']):
        self._value = value
        self._compute = None
        self._next = None
        self._step = step

    @classmethod
    def deferred(cls,
                 compute: Callable[[], T],
                 step: Callable[[], 'Process[T]']) -> 'Process[T]':
        """Node whose value is computed on first access of ``v``."""
        node = cls(_UNSET, step)
        node._compute = compute
        return node

    @property
    def v(self) -> T:
        """Current value."""
        if self._value is _UNSET:
            self._value = self._compute()
            self._compute = None
        return self._value

    @property
    def evolve(self) -> 'Process[T]':
        """Process advanced by one step."""
        if self._next is None:
            self._next = self._step()
            self._step = None
        return self._next

    def __iter__(self) -> Iterator[T]:
        node = self
        while True:
            yield node.v
            node = node.evolve

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return f"{self.__class__.__name__}(<deferred>)"
        return f"{self.__class__.__name__}({self._value!r})"


def constant(value: T) -> Process[T]:
    """Process that yields ``value`` forever."""
    node: Process[T] = Process(value, lambda: node)
    return node


def fmap(transform: Callable[..., T]) -> Callable[..., Process[T]]:
    """
    Lift a function of n values to a function of n processes.

    Evolving the result evolves every input; the transform runs only when the
    value of a node is read.
    """
    def lifted(*processes: Process[Any]) -> Process[T]:
        return Process.deferred(
            lambda: transform(*(p.v for p in processes)),
            lambda: lifted(*(p.evolve for p in processes))
        )
    return lifted


def zip_processes(*processes: Process[Any]) -> Process[Tuple[Any, ...]]:
    """Process of tuples holding the current value of every input."""
    return fmap(lambda *values: values)(*processes)


def stateful_fold(transition: Callable[..., S]) -> Callable[..., Process[S]]:
    """
    Build a process carrying an explicit state.

    Each node emits its current state; evolving applies
    ``transition(state, *input_values)`` and evolves the inputs.

    Example:
    --------
    >>> running_sum = stateful_fold(lambda total, x: total + x)(0, count(1))
    >>> take(4, running_sum)
    [0, 1, 3, 6]
    """
    def folded(state: S, *processes: Process[Any]) -> Process[S]:
        return Process(
            state,
            lambda: folded(transition(state, *(p.v for p in processes)),
                           *(p.evolve for p in processes))
        )
    return folded


def count(starting: float) -> Process[float]:
    """Counter starting at ``starting`` and increasing by one every step."""
    return stateful_fold(lambda u, v: u + v)(starting, constant(1))


def take(num: int, process: Process[T]) -> List[T]:
    """Materialise the first ``num`` values (empty list when ``num <= 0``)."""
    result = []
    for _ in range(num):
        result.append(process.v)
        process = process.evolve
    return result


def aggregate(frequency: int,
              reducer: Callable[..., T]) -> Callable[[Process[T]], Process[T]]:
    """
    Downsample a process by reducing windows of ``frequency`` elements.

    Every node of the result covers the next ``frequency`` source elements and
    its value is ``reducer(*window)``. The reducer only runs when a value is
    read, never when the process is built or evolved.

    Raises:
    -------
    ValueError
        If frequency is not positive
    """
    if frequency <= 0:
        raise ValueError(f"need positive frequency to sample, got {frequency}")

    def skip(source: Process[T]) -> Tuple[List[Process[T]], Process[T]]:
        window = []
        for _ in range(frequency):
            window.append(source)
            source = source.evolve
        return window, source

    def sampler(source: Process[T]) -> Process[T]:
        skipped = None

        def window() -> Tuple[List[Process[T]], Process[T]]:
            nonlocal skipped
            if skipped is None:
                skipped = skip(source)
            return skipped

        return Process.deferred(
            lambda: reducer(*(node.v for node in window()[0])),
            lambda: sampler(window()[1])
        )

    return sampler


def sample(frequency: int) -> Callable[[Process[T]], Process[T]]:
    """Keep the last element of every window of ``frequency`` elements."""
    return aggregate(frequency, lambda *window: window[-1])
