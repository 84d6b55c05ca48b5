# services/weight-balance-service/src/tests/test_calculator.py
"""
Calculator Service Tests
"""

import pytest
from dataclasses import fields
from decimal import Decimal

from apps.core.aircraft import StationKey, UnknownAircraftType
from apps.core.services import (
    EnvelopeStatus,
    SheetResult,
    calculate_moment,
    calculate_sheet,
    center_of_gravity,
    clamp_weight,
    is_numeric_text,
    parse_number,
)


class TestArithmetic:
    """Tests for the arithmetic helpers."""

    def test_moment_unscaled(self):
        assert calculate_moment('450', '0.4') == Decimal('180.00')

    def test_moment_scaled(self):
        assert calculate_moment('1467', '41.09', 1000) == Decimal('60.28')

    def test_moment_rounds_half_up(self):
        assert calculate_moment('1', '0.005') == Decimal('0.01')

    def test_cog_zero_weight(self):
        assert center_of_gravity('100', '0') == 0
        assert center_of_gravity('0', '') == 0

    def test_cog(self):
        assert center_of_gravity(Decimal('422.7'), Decimal('680')) == Decimal('0.62')

    @pytest.mark.parametrize('text,expected', [
        ('', Decimal('0')),
        ('.', Decimal('0')),
        ('12.', Decimal('12')),
        ('.5', Decimal('0.5')),
        (None, Decimal('0')),
        (60, Decimal('60')),
    ])
    def test_parse_number(self, text, expected):
        assert parse_number(text) == expected

    def test_parse_number_rejects_bool(self):
        with pytest.raises(TypeError):
            parse_number(True)

    @pytest.mark.parametrize('text,ok', [
        ('12', True), ('12.5', True), ('', True), ('.', True),
        ('-1', False), ('1e3', False), ('abc', False), ('1.2.3', False),
        ('1234567890', True), ('1' + '0' * 10, False), ('1' + '0' * 30, False),
    ])
    def test_is_numeric_text(self, text, ok):
        assert is_numeric_text(text) is ok

    def test_clamp_weight(self):
        assert clamp_weight('999', Decimal('95')) == Decimal('95')
        assert clamp_weight('50', Decimal('95')) == Decimal('50')
        assert clamp_weight('999') == Decimal('999')


class TestCalculateSheet:
    """Tests for full sheet calculation."""

    def test_out_of_envelope_totals(self, c150_out_of_envelope_stations):
        result = calculate_sheet('C-150', c150_out_of_envelope_stations)

        assert result.total_weight == Decimal('680')
        assert result.total_moment == Decimal('422.70')
        assert result.takeoff_cog == Decimal('0.62')
        assert result.takeoff_envelope.status == EnvelopeStatus.OUT
        assert result.takeoff_envelope.label == 'OUT OF ENVELOPE'

    def test_fuel_clamped_to_capacity(self):
        result = calculate_sheet('C-150', {'fuel': {'weight': '999'}})
        fuel = result.station(StationKey.FUEL)

        assert fuel.weight == Decimal('95')
        assert fuel.moment == Decimal('101.65')

    def test_within_envelope_with_fuel_burn(self, c150_result):
        assert c150_result.total_weight == Decimal('680')
        assert c150_result.total_moment == Decimal('602.70')
        assert c150_result.fuel_burn_weight == Decimal('30')
        assert c150_result.fuel_burn_moment == Decimal('32.10')
        assert c150_result.landing_weight == Decimal('650')
        assert c150_result.landing_moment == Decimal('570.60')
        assert c150_result.takeoff_envelope.status == EnvelopeStatus.WITHIN
        assert c150_result.landing_envelope.status == EnvelopeStatus.WITHIN

    def test_fuel_burn_limited_to_fuel_on_board(self):
        result = calculate_sheet('C-150', {'fuel': {'weight': '20'}, 'fuelBurn': {'weight': '50'}})

        assert result.fuel_burn_weight == Decimal('20')

    def test_fuel_burn_limited_to_capacity_without_fuel(self):
        result = calculate_sheet('C-150', {'fuelBurn': {'weight': '200'}})

        assert result.fuel_burn_weight == Decimal('95')

    def test_fixed_arm_ignores_input(self):
        result = calculate_sheet('C-150', {'pilotPax': {'weight': '100', 'arm': '5'}})

        assert result.station('pilotPax').arm == Decimal('0.99')

    def test_c172_defaults(self):
        result = calculate_sheet('C-172')

        assert result.total_weight == Decimal('1467')
        assert result.total_moment == Decimal('60.28')
        assert result.takeoff_cog == Decimal('41.09')

    def test_station_moment_invariant(self, c150_result):
        scale = c150_result.scale_factor
        for station in c150_result.stations:
            if station.key == StationKey.FUEL_BURN:
                continue
            assert station.moment == calculate_moment(station.weight, station.arm, scale)

    def test_to_record(self, c150_result):
        record = c150_result.to_record(date='2024-05-01', pilot_name='J. Smith', route='ENGM-ENBR')

        assert record['aircraftType'] == 'C-150'
        assert record['totalTakeoffWeight'] == 680.0
        assert record['fuelBurnOff'] == 30.0
        assert record['pilotName'] == 'J. Smith'
        assert len(record['entries']) == 5
        assert record['entries'][-1]['description'] == 'FUEL BURN'

    def test_to_dict(self, c150_result):
        data = c150_result.to_dict()

        assert data['units'] == {'weight': 'KGS', 'arm': 'MTS.', 'moment': 'MTS.KG'}
        assert 'fuelBurn' in data['stations']
        assert data['takeoffEnvelope']['withinEnvelope'] is True

    def test_load_stations_exclude_fuel_burn(self, c150_result):
        keys = [station.key for station in c150_result.load_stations]

        assert StationKey.FUEL_BURN not in keys
        assert len(keys) == len(c150_result.stations) - 1
        assert c150_result.fuel_burn.weight == Decimal('30')

    def test_default_tolerance(self):
        defaults = {f.name: f.default for f in fields(SheetResult)}

        assert defaults['tolerance'] == 1

    def test_long_weight_does_not_break_rounding(self):
        result = calculate_sheet('C-150', {'pilotPax': {'weight': '9' * 10}})

        assert result.total_weight == Decimal('9' * 10)

    def test_unknown_aircraft(self):
        with pytest.raises(UnknownAircraftType):
            calculate_sheet('PA-28')
