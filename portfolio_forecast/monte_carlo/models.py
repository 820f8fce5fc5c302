"""
Data models for Monte Carlo portfolio simulation
"""

from typing import Dict, List, Optional
import numpy as np
from pydantic import BaseModel, Field


class SimulationConfig(BaseModel):
    """Configuration for Monte Carlo simulation

    Range checks happen when a simulation runs, so out-of-range values
    are accepted here.
    """
    simulation_count: int = Field(default=10000, description="Number of Monte Carlo trials")
    inflation_rate_percent: float = Field(default=3.5, description="Annual inflation rate (%)")
    random_seed: Optional[int] = Field(default=None)


class SimulationStatistics(BaseModel):
    """Statistical summary of the raw trial distribution"""
    mean: float = Field(description="Mean trial value")
    std: float = Field(description="Standard deviation")
    median: float = Field(description="Median trial value")
    min_value: float = Field(description="Minimum value")
    max_value: float = Field(description="Maximum value")
    probability_loss: float = Field(description="Probability a trial ends below the investment (0-1)")
    probability_gain: float = Field(description="Probability a trial ends above the investment (0-1)")
    skewness: float = Field(description="Distribution skewness")
    kurtosis: float = Field(description="Distribution excess kurtosis")


class SimulationResult(BaseModel):
    """Snapshot of the most recent simulation run"""

    # Configuration used
    config: SimulationConfig = Field(default_factory=SimulationConfig)
    mean: float = Field(default=0.0, description="Expected annual return (%)")
    standard_deviation: float = Field(default=0.0, description="Annual volatility (%)")

    # Inputs
    investment_amount: float = Field(default=0.0)
    years_ahead: int = Field(default=0)

    # Outcomes
    expected_future_value: float = Field(
        default=0.0,
        description="Investment plus mean inflation-adjusted trial value"
    )
    best_case: float = Field(default=0.0, description="90th percentile raw trial value")
    worst_case: float = Field(default=0.0, description="10th percentile raw trial value")

    # Raw trial values, ascending
    trial_results: List[float] = Field(default_factory=list)

    statistics: Optional[SimulationStatistics] = None

    def get_trial_array(self) -> np.ndarray:
        """Get trial values as numpy array"""
        return np.array(self.trial_results)

    def summary(self) -> Dict:
        """Get summary dictionary"""
        summary = {
            "investment": round(self.investment_amount, 2),
            "years": self.years_ahead,
            "mean_pct": self.mean,
            "std_dev_pct": self.standard_deviation,
            "simulations": len(self.trial_results),
            "inflation_rate_pct": self.config.inflation_rate_percent,
            "expected_future_value": round(self.expected_future_value, 2),
            "best_case_p90": round(self.best_case, 2),
            "worst_case_p10": round(self.worst_case, 2),
        }
        if self.statistics is not None:
            summary["prob_loss_pct"] = round(self.statistics.probability_loss * 100, 1)
            summary["prob_gain_pct"] = round(self.statistics.probability_gain * 100, 1)
        return summary
