"""
Unit tests for the EV charging station model.
"""

import numpy as np
import pytest

from telemetry.charging import (
    MAX_CATCHUP_TICKS,
    ChargingNetwork,
    ChargingStation,
    StationStatus,
    demand_profile,
    generate_stations,
    is_night_hour,
    is_peak_hour,
    summarize,
)
from telemetry.config import ChargingSpec


def _station(status=StationStatus.CHARGING, power=50.0, level=50.0, remaining=90, max_power=150.0):
    return ChargingStation(
        id="CS-001",
        name="Station 1",
        status=status,
        current_power_kw=power,
        max_power_kw=max_power,
        vehicle_type="Nissan Leaf",
        charge_level_pct=level,
        time_remaining_min=remaining,
    )


class TestChargingStation:
    """Test single station behavior."""

    def test_power_above_rating_rejected(self):
        with pytest.raises(ValueError):
            _station(power=200.0)

    def test_level_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            _station(level=101.0)

    def test_time_remaining_label(self):
        assert _station(remaining=135).time_remaining_label == "2h 15m"
        assert _station(remaining=0).time_remaining_label == "0h 0m"

    def test_power_utilization(self):
        assert _station(power=75.0).power_utilization_pct == pytest.approx(50.0)

    def test_to_dict_status_value(self):
        assert _station().to_dict()["status"] == "charging"

    @pytest.mark.parametrize("status", [StationStatus.AVAILABLE, StationStatus.OFFLINE])
    def test_idle_station_unchanged(self, rng, status):
        station = _station(status=status, power=0.0, level=0.0, remaining=0)
        assert station.advance(rng) is station

    def test_advance_below_80(self, rng):
        station = _station(power=60.0, level=40.0, remaining=30)
        nxt = station.advance(rng)
        assert nxt.status is StationStatus.CHARGING
        assert 40.0 <= nxt.charge_level_pct <= 42.0
        assert nxt.current_power_kw == 60.0
        assert nxt.time_remaining_min == 29

    def test_power_tapers_above_80(self, rng):
        nxt = _station(power=60.0, level=85.0).advance(rng)
        assert nxt.current_power_kw == pytest.approx(48.0)

    def test_time_remaining_floor(self, rng):
        assert _station(level=10.0, remaining=0).advance(rng).time_remaining_min == 0

    def test_full_battery_frees_station(self, rng):
        station = _station(power=60.0, level=100.0, remaining=5)
        nxt = station.advance(rng)
        assert nxt.status is StationStatus.AVAILABLE
        assert nxt.charge_level_pct == 100.0
        assert nxt.current_power_kw == 0.0
        assert nxt.time_remaining_min == 0

    def test_level_never_exceeds_100(self, rng):
        station = _station(level=99.5)
        for _ in range(10):
            station = station.advance(rng)
            assert station.charge_level_pct <= 100.0


class TestGenerateStations:
    """Test initial fleet generation."""

    def test_count_and_ids(self, rng, charging_spec):
        stations = generate_stations(rng, charging_spec)
        assert len(stations) == 6
        assert stations[0].id == "CS-001"
        assert stations[-1].name == "Station 6"

    def test_offline_draws_no_power(self, rng):
        spec = ChargingSpec(n_stations=50, offline_probability=0.5)
        for s in generate_stations(rng, spec):
            if s.status is not StationStatus.CHARGING:
                assert s.current_power_kw == 0.0
                assert s.time_remaining_min == 0

    def test_charging_ranges(self, rng):
        spec = ChargingSpec(n_stations=50)
        for s in generate_stations(rng, spec):
            if s.status is StationStatus.CHARGING:
                assert 20.0 <= s.current_power_kw <= 150.0
                assert 20.0 <= s.charge_level_pct <= 80.0
                assert 0 <= s.time_remaining_min < 180

    def test_all_offline(self, rng):
        spec = ChargingSpec(n_stations=5, offline_probability=1.0)
        assert all(s.status is StationStatus.OFFLINE for s in generate_stations(rng, spec))

    def test_none_charging(self, rng):
        spec = ChargingSpec(n_stations=5, charging_probability=0.0, offline_probability=0.0)
        assert all(s.status is StationStatus.AVAILABLE for s in generate_stations(rng, spec))

    def test_low_rated_chargers(self, rng):
        spec = ChargingSpec(n_stations=20, max_power_kw=10.0, charging_probability=1.0, offline_probability=0.0)
        for s in generate_stations(rng, spec):
            assert s.current_power_kw <= 10.0


class TestSummary:
    """Test network summary indicators."""

    def test_counts_and_power(self):
        stations = [
            _station(power=50.0, level=40.0),
            _station(power=100.0, level=60.0),
            _station(status=StationStatus.AVAILABLE, power=0.0, level=0.0, remaining=0),
            _station(status=StationStatus.OFFLINE, power=0.0, level=0.0, remaining=0),
        ]
        summary = summarize(stations)

        assert summary.total_power_kw == pytest.approx(150.0)
        assert (summary.active, summary.available, summary.offline) == (2, 1, 1)
        assert summary.n_stations == 4
        assert summary.station_utilization_pct == pytest.approx(50.0)
        assert summary.power_utilization_pct == pytest.approx(25.0)
        assert summary.average_charge_level_pct == pytest.approx(50.0)
        assert summary.projected_daily_mwh == pytest.approx(3.6)
        assert summary.peak_demand_kw == pytest.approx(225.0)
        assert summary.off_peak_demand_kw == pytest.approx(90.0)
        assert summary.average_session_hours == 2.5

    def test_empty_fleet(self):
        summary = summarize([])
        assert summary.total_power_kw == 0.0
        assert summary.station_utilization_pct == 0.0
        assert summary.power_utilization_pct == 0.0
        assert summary.average_charge_level_pct == 0.0


class TestDemandProfile:
    """Test the 24-hour demand profile."""

    def test_peak_and_night_hours(self):
        assert is_peak_hour(7) and is_peak_hour(9) and is_peak_hour(17) and is_peak_hour(20)
        assert not is_peak_hour(10)
        assert is_night_hour(22) and is_night_hour(0) and is_night_hour(6)
        assert not is_night_hour(7)

    def test_profile_ranges(self, rng):
        profile = demand_profile(rng)
        assert profile.shape == (24,)
        for hour, kw in enumerate(profile):
            if is_peak_hour(hour):
                assert 800.0 <= kw <= 1200.0
            elif is_night_hour(hour):
                assert 1200.0 <= kw <= 1800.0
            else:
                assert 200.0 <= kw <= 500.0


class TestChargingNetwork:
    """Test the fixed-interval clock of the station fleet."""

    def test_first_advance_sets_clock(self, rng, charging_spec):
        network = ChargingNetwork.create(charging_spec, rng)
        assert network.advance_to(100.0) == 0
        assert network.last_tick == 100.0

    def test_whole_intervals_applied(self, rng, charging_spec):
        network = ChargingNetwork.create(charging_spec, rng, now=0.0)
        assert network.advance_to(1.9) == 0
        assert network.advance_to(5.0) == 2
        assert network.last_tick == pytest.approx(4.0)
        assert network.advance_to(6.0) == 1

    def test_catch_up_capped(self, rng, charging_spec):
        network = ChargingNetwork.create(charging_spec, rng, now=0.0)
        assert network.advance_to(10_000.0) == MAX_CATCHUP_TICKS
        assert network.last_tick == pytest.approx(10_000.0)

    def test_tick_changes_only_charging(self, charging_spec):
        network = ChargingNetwork.create(charging_spec, np.random.default_rng(3))
        before = list(network.stations)
        network.tick()
        for old, new in zip(before, network.stations):
            if old.status is not StationStatus.CHARGING:
                assert new is old

    def test_to_frame(self, rng, charging_spec):
        frame = ChargingNetwork.create(charging_spec, rng).to_frame()
        assert len(frame) == 6
        assert list(frame.columns)[:3] == ["id", "name", "status"]
        assert set(frame["status"]) <= {"charging", "available", "offline"}

    def test_to_frame_empty(self, rng, charging_spec):
        network = ChargingNetwork(spec=charging_spec, rng=rng)
        assert network.to_frame().empty
