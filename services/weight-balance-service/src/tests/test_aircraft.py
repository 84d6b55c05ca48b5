# services/weight-balance-service/src/tests/test_aircraft.py
"""
Aircraft Configuration Tests
"""

import pytest
from dataclasses import fields
from decimal import Decimal

from apps.core.aircraft import (
    AIRCRAFT_CONFIGS,
    AircraftConfig,
    AircraftType,
    AxisTicks,
    StationKey,
    UnknownAircraftType,
    aircraft_type_choices,
    get_aircraft_config,
)


class TestAircraftRegistry:
    """Tests for aircraft type resolution."""

    def test_both_types_registered(self):
        assert set(AIRCRAFT_CONFIGS) == {AircraftType.C150, AircraftType.C172}
        assert aircraft_type_choices() == [('C-150', 'C-150'), ('C-172', 'C-172')]

    def test_resolve_by_string(self):
        config = get_aircraft_config('C-172')

        assert config.aircraft_type == AircraftType.C172
        assert config.scale_factor == 1000
        assert config.max_fuel == Decimal('240')

    @pytest.mark.parametrize('value', ['B-737', '', None, 'c-150'])
    def test_unknown_type(self, value):
        with pytest.raises(UnknownAircraftType):
            get_aircraft_config(value)


class TestAircraftConfig:
    """Tests for per-type station and envelope data."""

    def test_c150_stations(self):
        config = get_aircraft_config('C-150')

        assert not config.has_rear_pax
        assert not config.has_station(StationKey.REAR_PAX)
        assert not config.has_station('baggage2')
        assert not config.has_station('nonsense')
        assert config.station('fuel').max_weight == Decimal('95')
        assert config.station('basicEmpty').arm_editable

    def test_missing_station_raises(self):
        with pytest.raises(KeyError):
            get_aircraft_config('C-150').station(StationKey.BAGGAGE_2)

    def test_c172_defaults(self):
        config = get_aircraft_config('C-172')
        basic = config.station(StationKey.BASIC_EMPTY)

        assert basic.default_weight == '1467'
        assert basic.arm == '41.09'
        assert config.station(StationKey.BAGGAGE_2).max_weight == Decimal('50')

    def test_max_takeoff_weight(self):
        defaults = {f.name: f.default for f in fields(AircraftConfig)}

        assert defaults['max_takeoff_weight'] == Decimal('0')
        assert get_aircraft_config('C-150').max_takeoff_weight == Decimal('750')
        assert get_aircraft_config('C-172').max_takeoff_weight == Decimal('2300')

    def test_fuel_burn_label(self):
        assert get_aircraft_config('C-150').fuel_burn_label == 'EST FUEL BURN OFF 14 KGS/HR'
        assert get_aircraft_config('C-172').fuel_burn_label == 'EST FUEL BURN OFF 48 LBS/HR'

    def test_rings_are_closed(self):
        for config in AIRCRAFT_CONFIGS.values():
            for ring in config.envelope.rings:
                assert ring.is_closed

    def test_c172_ring_moments_are_scaled(self):
        rings = get_aircraft_config('C-172').envelope.rings

        assert [ring.name for ring in rings] == ['normal', 'utility']
        assert rings[0].points[0].weight == 1500
        assert rings[0].points[0].moment == pytest.approx(52.5)

    def test_c150_ring_moments(self):
        ring = get_aircraft_config('C-150').envelope.rings[0]

        assert ring.points[2].moment == pytest.approx(628.5)


class TestAxisTicks:
    """Tests for chart tick labelling."""

    def test_label_every(self):
        ticks = AxisTicks((400, 410, 450), label_every=50)

        assert ticks.label(450) == '450'
        assert ticks.label(410) == ''

    def test_label_all(self):
        assert AxisTicks((50, 55)).label(55) == '55'
