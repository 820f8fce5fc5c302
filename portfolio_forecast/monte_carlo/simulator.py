"""
Portfolio Simulator - Monte Carlo future value engine
"""

import numbers
from typing import Optional
import numpy as np
from scipy import stats as scipy_stats
from loguru import logger

from .models import SimulationConfig, SimulationResult, SimulationStatistics


# Inflation is always compounded over this many years, whatever horizon
# the caller asks for. years_ahead is validated but not used here.
INFLATION_YEARS = 20

BEST_CASE_PERCENTILE = 90
WORST_CASE_PERCENTILE = 10


class SimulationError(Exception):
    """Base class for simulation errors"""
    pass


class InvalidInputError(SimulationError, ValueError):
    """Caller-supplied argument out of range"""
    pass


class InvalidConfigurationError(SimulationError, ValueError):
    """Simulator parameters out of range at run time"""
    pass


class NotYetSimulatedError(SimulationError):
    """Result queried before any successful run"""
    pass


class PortfolioSimulator:
    """
    Monte Carlo Portfolio Simulator

    Draws one Gaussian annual return per trial, applies it to the
    investment, and reports the mean inflation-adjusted outcome along
    with percentile-based best/worst cases.

    The value returned by run_simulation() averages inflation-adjusted
    trials, while percentiles index into the raw (unadjusted) trials.
    Callers rely on both; do not unify them.
    """

    def __init__(
        self,
        mean: float,
        standard_deviation: float,
        config: Optional[SimulationConfig] = None,
        simulation_count: Optional[int] = None,
        inflation_rate_percent: Optional[float] = None,
        random_seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize Portfolio Simulator

        Args:
            mean: Expected annual return (%)
            standard_deviation: Annual return volatility (%)
            config: Base configuration (defaults applied if None)
            simulation_count: Overrides config.simulation_count
            inflation_rate_percent: Overrides config.inflation_rate_percent
            random_seed: Overrides config.random_seed; None draws OS entropy
            rng: Pre-built generator, takes precedence over any seed
        """
        self._mean = mean
        self._standard_deviation = standard_deviation

        self.config = config.model_copy() if config is not None else SimulationConfig()
        if simulation_count is not None:
            self.config.simulation_count = simulation_count
        if inflation_rate_percent is not None:
            self.config.inflation_rate_percent = inflation_rate_percent
        if random_seed is not None:
            self.config.random_seed = random_seed

        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)

        self._trial_results = np.empty(0)
        self._result: Optional[SimulationResult] = None

        logger.debug(
            f"PortfolioSimulator initialized: mean={mean}%, sd={standard_deviation}%, "
            f"{self.config.simulation_count} simulations, seed={self.config.random_seed}"
        )

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def standard_deviation(self) -> float:
        return self._standard_deviation

    @property
    def simulation_count(self) -> int:
        return self.config.simulation_count

    @simulation_count.setter
    def simulation_count(self, value: int) -> None:
        self.config.simulation_count = value

    @property
    def inflation_rate_percent(self) -> float:
        return self.config.inflation_rate_percent

    @inflation_rate_percent.setter
    def inflation_rate_percent(self, value: float) -> None:
        self.config.inflation_rate_percent = value

    @property
    def trial_results(self) -> np.ndarray:
        """Sorted raw trial values from the last run (read-only view)"""
        view = self._trial_results.view()
        view.flags.writeable = False
        return view

    @property
    def has_results(self) -> bool:
        return self._trial_results.size > 0

    def _validate(self, investment_amount: float, years_ahead: int) -> None:
        if not isinstance(years_ahead, numbers.Integral):
            raise InvalidInputError(f"years must be a whole number, got {years_ahead!r}")
        # Written as "not >=" so NaN is rejected too
        if not years_ahead >= 1:
            raise InvalidInputError(f"years must be >= 1, got {years_ahead}")
        if not investment_amount >= 1:
            raise InvalidInputError(f"investment must be >= 1, got {investment_amount}")
        if not self._mean >= 0:
            raise InvalidConfigurationError(f"mean must be >= 0, got {self._mean}")
        if not self._standard_deviation >= 1:
            raise InvalidConfigurationError(
                f"standard deviation must be >= 1, got {self._standard_deviation}"
            )
        if not isinstance(self.config.simulation_count, numbers.Integral):
            raise InvalidConfigurationError(
                f"simulation count must be a whole number, got {self.config.simulation_count!r}"
            )
        if not self.config.simulation_count >= 1:
            raise InvalidConfigurationError(
                f"simulation count must be >= 1, got {self.config.simulation_count}"
            )
        if not self.config.inflation_rate_percent >= 1:
            raise InvalidConfigurationError(
                f"inflation rate must be >= 1, got {self.config.inflation_rate_percent}"
            )

    def adjust_for_inflation(self, values: np.ndarray) -> np.ndarray:
        """
        Compound values by the inflation rate, once per year

        Args:
            values: Nominal values

        Returns:
            Values compounded over INFLATION_YEARS
        """
        rate = self.config.inflation_rate_percent
        adjusted = np.array(values, dtype=float)
        for _ in range(INFLATION_YEARS):
            adjusted += adjusted * rate / 100
        return adjusted

    def run_simulation(self, investment_amount: float, years_ahead: int) -> float:
        """
        Run a fresh batch of trials and return the expected future value

        Args:
            investment_amount: Amount invested today
            years_ahead: Years into the future (validated only)

        Returns:
            investment_amount plus the mean inflation-adjusted trial value

        Raises:
            InvalidInputError: years_ahead not a whole number, or years_ahead
                or investment_amount below 1
            InvalidConfigurationError: mean, standard deviation, simulation
                count or inflation rate out of range
        """
        self._validate(investment_amount, years_ahead)

        config = self.config.model_copy()
        num_trials = config.simulation_count = int(config.simulation_count)

        logger.debug(
            f"Simulating {num_trials} trials: investment={investment_amount:,.2f}, "
            f"mu={self._mean}%, sigma={self._standard_deviation}%"
        )

        # One Normal(mean, sd) annual return per trial, in percent
        z = self.rng.standard_normal(num_trials)
        raw_values = investment_amount * (1 + ((z * self._standard_deviation + self._mean) / 100))

        # The aggregate uses adjusted values; percentiles use raw values
        adjusted_values = self.adjust_for_inflation(raw_values)
        expected_future_value = float(investment_amount + adjusted_values.sum() / num_trials)

        trial_results = np.sort(raw_values)

        result = SimulationResult(
            config=config,
            mean=self._mean,
            standard_deviation=self._standard_deviation,
            investment_amount=investment_amount,
            years_ahead=int(years_ahead),
            expected_future_value=expected_future_value,
            best_case=self._percentile_of(trial_results, BEST_CASE_PERCENTILE),
            worst_case=self._percentile_of(trial_results, WORST_CASE_PERCENTILE),
            trial_results=trial_results.tolist(),
            statistics=self._calculate_statistics(trial_results, investment_amount)
        )

        # Publish only after everything above has succeeded
        self._trial_results = trial_results
        self._result = result

        logger.info(
            f"Simulation complete: {num_trials} trials, "
            f"expected value ${expected_future_value:,.2f}, "
            f"P10 ${result.worst_case:,.2f}, P90 ${result.best_case:,.2f}"
        )

        return expected_future_value

    @staticmethod
    def _percentile_of(trial_results: np.ndarray, n: float) -> float:
        size = trial_results.size
        # round() is half-to-even; clamp keeps n near 100 inside the array
        idx = int(round(n * size / 100))
        idx = min(max(idx, 0), size - 1)
        return float(trial_results[idx])

    def get_percentile(self, n: float) -> float:
        """
        Value at the n-th percentile of the last run's raw trials

        Args:
            n: Percentile in [0, 100]

        Returns:
            Trial value at index round(n * trials / 100)
        """
        if not self.has_results:
            raise NotYetSimulatedError("No simulations run yet")
        if not 0 <= n <= 100:
            raise InvalidInputError(f"percentile must be between 0 and 100, got {n}")
        return self._percentile_of(self._trial_results, n)

    def get_best_case(self) -> float:
        """90th percentile of the last run"""
        return self.get_percentile(BEST_CASE_PERCENTILE)

    def get_worst_case(self) -> float:
        """10th percentile of the last run"""
        return self.get_percentile(WORST_CASE_PERCENTILE)

    def get_result(self) -> SimulationResult:
        """Snapshot of the last run"""
        if self._result is None:
            raise NotYetSimulatedError("No simulations run yet")
        return self._result

    def _calculate_statistics(
        self,
        trial_results: np.ndarray,
        investment_amount: float
    ) -> SimulationStatistics:
        """Calculate summary statistics from raw trial values"""

        if trial_results.size > 1 and np.ptp(trial_results) > 0:
            skewness = float(scipy_stats.skew(trial_results))
            kurtosis = float(scipy_stats.kurtosis(trial_results))
        else:
            skewness = 0.0
            kurtosis = 0.0

        return SimulationStatistics(
            mean=float(np.mean(trial_results)),
            std=float(np.std(trial_results)),
            median=float(np.median(trial_results)),
            min_value=float(trial_results[0]),
            max_value=float(trial_results[-1]),
            probability_loss=float(np.mean(trial_results < investment_amount)),
            probability_gain=float(np.mean(trial_results > investment_amount)),
            skewness=skewness,
            kurtosis=kurtosis
        )
