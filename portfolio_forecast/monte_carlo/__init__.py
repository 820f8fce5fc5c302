"""
Monte Carlo Simulation Module
"""

from .simulator import (
    PortfolioSimulator,
    SimulationError,
    InvalidInputError,
    InvalidConfigurationError,
    NotYetSimulatedError,
)
from .models import SimulationConfig, SimulationResult, SimulationStatistics

__all__ = [
    # Simulator
    "PortfolioSimulator",
    "SimulationError",
    "InvalidInputError",
    "InvalidConfigurationError",
    "NotYetSimulatedError",
    # Models
    "SimulationConfig",
    "SimulationResult",
    "SimulationStatistics",
]
