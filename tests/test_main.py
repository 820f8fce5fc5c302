"""
Tests for the command-line entry point
"""

import json

import pytest
import yaml

from portfolio_forecast.main import load_config, run_forecast, main
from portfolio_forecast.monte_carlo import SimulationResult


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "simulation": {
            "mean": 6.4324,
            "standard_deviation": 7.6785,
            "simulation_count": 500,
            "inflation_rate_percent": 2.0,
            "random_seed": 42,
        },
        "portfolio": {
            "investment": 50000,
            "years": 10,
        },
    }))
    return str(path)


class TestLoadConfig:
    """Test YAML config loading"""

    def test_missing_file_returns_empty(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yaml")) == {}

    def test_empty_file_returns_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)) == {}

    def test_loads_sections(self, config_file):
        config = load_config(config_file)

        assert config["simulation"]["simulation_count"] == 500
        assert config["portfolio"]["investment"] == 50000


class TestRunForecast:
    """Test forecast orchestration"""

    def test_uses_config_values(self, config_file):
        result = run_forecast(config_path=config_file)

        assert isinstance(result, SimulationResult)
        assert result.investment_amount == 50000
        assert result.years_ahead == 10
        assert result.mean == 6.4324
        assert result.config.simulation_count == 500
        assert result.config.inflation_rate_percent == 2.0

    def test_arguments_override_config(self, config_file):
        result = run_forecast(
            investment=1000,
            simulation_count=200,
            config_path=config_file
        )

        assert result.investment_amount == 1000
        assert result.config.simulation_count == 200
        assert result.config.inflation_rate_percent == 2.0

    def test_seeded_config_is_reproducible(self, config_file):
        first = run_forecast(config_path=config_file)
        second = run_forecast(config_path=config_file)

        assert first.expected_future_value == second.expected_future_value

    def test_defaults_without_config(self, tmp_path):
        result = run_forecast(
            simulation_count=100,
            config_path=str(tmp_path / "missing.yaml")
        )

        assert result.investment_amount == 100000
        assert result.years_ahead == 20
        assert result.config.inflation_rate_percent == 3.5


class TestMain:
    """Test CLI exit codes and output"""

    def test_success(self, config_file):
        assert main(["--config", config_file]) == 0

    def test_json_output(self, config_file, capsys):
        assert main(["--config", config_file, "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["investment_amount"] == 50000
        assert payload["best_case"] > payload["worst_case"]
        assert "trial_results" not in payload

    def test_invalid_configuration_exit_code(self, config_file):
        assert main(["--config", config_file, "--mean", "0", "--std", "0"]) == 1

    def test_invalid_input_exit_code(self, config_file):
        assert main(["--config", config_file, "--years", "0"]) == 1

    def test_keyboard_interrupt_exit_code(self, monkeypatch):
        def interrupted(**kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("portfolio_forecast.main.run_forecast", interrupted)

        assert main([]) == 1

    def test_unexpected_error_exit_code(self, monkeypatch):
        def broken(**kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("portfolio_forecast.main.run_forecast", broken)

        assert main([]) == 1
