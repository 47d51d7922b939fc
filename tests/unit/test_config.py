"""
Unit tests for the dashboard configuration models.
"""

import json

import pytest
from pydantic import ValidationError

from telemetry.config import ChargingSpec, DashboardConfig, PowerFlowSpec, RefreshSpec, load_config


class TestDefaults:
    """Test default configuration values."""

    def test_power_flow_defaults(self):
        spec = PowerFlowSpec()
        assert spec.generation_min_kw == 50.0
        assert spec.generation_max_kw == 150.0
        assert spec.transmission_loss == (0.02, 0.05)
        assert spec.distribution_loss == (0.03, 0.07)
        assert spec.consumption_loss == (0.01, 0.02)

    def test_charging_defaults(self):
        spec = ChargingSpec()
        assert spec.n_stations == 12
        assert spec.max_power_kw == 150.0
        assert spec.tick_seconds == 2.0
        assert len(spec.vehicle_types) == 4

    def test_refresh_defaults(self):
        spec = RefreshSpec()
        assert spec.realtime is True
        assert spec.interval_seconds == 30

    def test_dashboard_defaults(self):
        config = DashboardConfig()
        assert config.seed is None
        assert config.alert_probability == pytest.approx(0.2)
        assert config.history_length == 60


class TestValidation:
    """Test that invalid values are rejected."""

    def test_loss_range_must_be_ordered(self):
        with pytest.raises(ValidationError):
            PowerFlowSpec(transmission_loss=(0.05, 0.02))

    def test_loss_must_be_below_one(self):
        with pytest.raises(ValidationError):
            PowerFlowSpec(distribution_loss=(0.5, 1.0))

    def test_generation_bounds_ordered(self):
        with pytest.raises(ValidationError):
            PowerFlowSpec(generation_min_kw=200.0, generation_max_kw=100.0)

    @pytest.mark.parametrize("interval", [25, 65, 33])
    def test_refresh_interval_rejected(self, interval):
        with pytest.raises(ValidationError):
            RefreshSpec(interval_seconds=interval)

    @pytest.mark.parametrize("interval", [30, 45, 60])
    def test_refresh_interval_accepted(self, interval):
        assert RefreshSpec(interval_seconds=interval).interval_seconds == interval

    def test_at_least_one_station(self):
        with pytest.raises(ValidationError):
            ChargingSpec(n_stations=0)

    def test_vehicle_types_not_empty(self):
        with pytest.raises(ValidationError):
            ChargingSpec(vehicle_types=[])

    def test_alert_probability_bounds(self):
        with pytest.raises(ValidationError):
            DashboardConfig(alert_probability=1.5)


class TestLoadConfig:
    """Test loading configuration from JSON files."""

    def test_no_path_returns_defaults(self):
        assert load_config(None) == DashboardConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"seed": 5, "charging": {"n_stations": 3}}))

        config = load_config(str(path))

        assert config.seed == 5
        assert config.charging.n_stations == 3
        assert config.charging.max_power_kw == 150.0
        assert config.refresh.interval_seconds == 30

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_config(str(path))

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"refresh": {"interval_seconds": 10}}))
        with pytest.raises(ValidationError):
            load_config(str(path))
