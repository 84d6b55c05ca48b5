# services/weight-balance-service/src/tests/test_envelope.py
"""
Envelope Service Tests
"""

import pytest

from apps.core.aircraft import EnvelopePoint, get_aircraft_config
from apps.core.services import (
    EnvelopeStatus,
    check_envelope,
    get_tolerance,
    is_point_in_polygon,
    is_within_envelope,
)


@pytest.fixture
def c150_ring():
    return get_aircraft_config('C-150').envelope.rings[0]


@pytest.fixture
def c172_rings():
    return get_aircraft_config('C-172').envelope.rings


class TestPointInPolygon:
    """Tests for the strict containment test."""

    def test_inside(self, c150_ring):
        assert is_point_in_polygon(EnvelopePoint(weight=680, moment=600), c150_ring)

    def test_forward_of_envelope(self, c150_ring):
        assert not is_point_in_polygon(EnvelopePoint(weight=680, moment=422.7), c150_ring)

    def test_above_max_weight(self, c150_ring):
        assert not is_point_in_polygon(EnvelopePoint(weight=760, moment=650), c150_ring)

    def test_open_ring_same_result(self, c150_ring):
        open_points = c150_ring.points[:-1]
        point = EnvelopePoint(weight=680, moment=600)

        assert is_point_in_polygon(point, open_points) == is_point_in_polygon(point, c150_ring)


class TestCheckEnvelope:
    """Tests for envelope checks with tolerance."""

    def test_within(self, c150_ring):
        check = check_envelope(EnvelopePoint(weight=680, moment=600), [c150_ring])

        assert check.status == EnvelopeStatus.WITHIN
        assert check.ring == 'normal'
        assert check.label == 'WITHIN ENVELOPE'

    def test_marginal_near_vertex(self, c150_ring):
        point = EnvelopePoint(weight=750.5, moment=629)
        check = check_envelope(point, [c150_ring], tolerance=1)

        assert check.status == EnvelopeStatus.MARGINAL
        assert check.within_envelope
        assert check.label == 'MARGINAL'
        assert is_within_envelope(point, c150_ring, tolerance=1)

    def test_tolerance_too_small(self, c150_ring):
        check = check_envelope(EnvelopePoint(weight=750.5, moment=629), [c150_ring], tolerance=0.1)

        assert check.status == EnvelopeStatus.OUT
        assert not check.within_envelope
        assert check.ring is None

    def test_utility_ring_tested_independently(self, c172_rings):
        # Inside the utility category, just forward of the normal category line
        check = check_envelope(EnvelopePoint(weight=1999.5, moment=71.05), c172_rings, tolerance=0)

        assert check.status == EnvelopeStatus.WITHIN
        assert check.ring == 'utility'

    def test_strict_hit_beats_tolerance(self, c172_rings):
        check = check_envelope(EnvelopePoint(weight=1500.5, moment=53), c172_rings, tolerance=2)

        assert check.status == EnvelopeStatus.WITHIN
        assert check.ring == 'normal'

    def test_inputs_rounded_to_two_places(self, c150_ring):
        first = check_envelope(EnvelopePoint(weight=680.004, moment=600.001), [c150_ring])
        second = check_envelope(EnvelopePoint(weight=680, moment=600), [c150_ring])

        assert first == second

    def test_repeatable(self, c150_ring):
        point = EnvelopePoint(weight=750.5, moment=629)

        assert check_envelope(point, [c150_ring]) == check_envelope(point, [c150_ring])

    def test_to_dict(self, c150_ring):
        data = check_envelope(EnvelopePoint(weight=680, moment=422.7), [c150_ring]).to_dict()

        assert data == {
            'status': 'out',
            'label': 'OUT OF ENVELOPE',
            'withinEnvelope': False,
            'ring': None,
        }


class TestTolerance:
    """Tests for configured tolerance."""

    def test_default_per_aircraft(self):
        assert get_tolerance(get_aircraft_config('C-150')) == 1
        assert get_tolerance(get_aircraft_config('C-172')) == 2

    def test_settings_override(self, settings):
        settings.WEIGHT_BALANCE = {'ENVELOPE_TOLERANCE': {'C-150': 5}}

        assert get_tolerance(get_aircraft_config('C-150')) == 5
        assert get_tolerance(get_aircraft_config('C-172')) == 2
