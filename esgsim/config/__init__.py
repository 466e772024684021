# Configuration package
"""
Configuration handling utilities.

Modules:
- simulation_config: SimulationConfig dataclass and JSON loading
"""

from .simulation_config import SimulationConfig, load_simulation_config, DEFAULT_SIMULATION_CONFIG

__all__ = [
    'SimulationConfig',
    'load_simulation_config',
    'DEFAULT_SIMULATION_CONFIG',
]
