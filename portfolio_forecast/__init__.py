"""
Portfolio Forecast

Monte Carlo estimate of an investment portfolio's future value, with
percentile-based best and worst case outcomes.
"""

__version__ = "0.1.0"
__author__ = "Portfolio Forecast Team"
