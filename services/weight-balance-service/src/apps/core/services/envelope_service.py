# services/weight-balance-service/src/apps/core/services/envelope_service.py
"""
Envelope Service

Containment of a (moment, weight) point in the certified C.O.G. envelope.

The strict test is classic ray casting on the (moment, weight) plane. A point
the strict test rejects is still accepted when it sits within ``tolerance``
of any envelope vertex on both axes; such a result is reported as
``marginal`` so callers can tell it apart from a clean ``within``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from django.conf import settings

from ..aircraft import AircraftConfig, EnvelopePoint, EnvelopeRing

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1


class EnvelopeStatus(str, Enum):
    """Outcome of an envelope check."""
    WITHIN = 'within'
    MARGINAL = 'marginal'
    OUT = 'out'


@dataclass(frozen=True)
class EnvelopeCheck:
    """Result of testing one point against an aircraft's envelope rings."""
    status: EnvelopeStatus
    ring: Optional[str] = None

    @property
    def within_envelope(self) -> bool:
        return self.status != EnvelopeStatus.OUT

    @property
    def label(self) -> str:
        if self.status == EnvelopeStatus.WITHIN:
            return 'WITHIN ENVELOPE'
        if self.status == EnvelopeStatus.MARGINAL:
            return 'MARGINAL'
        return 'OUT OF ENVELOPE'

    def to_dict(self):
        return {
            'status': self.status.value,
            'label': self.label,
            'withinEnvelope': self.within_envelope,
            'ring': self.ring,
        }


def _points(ring) -> Sequence[EnvelopePoint]:
    return ring.points if isinstance(ring, EnvelopeRing) else ring


def _rounded(point: EnvelopePoint) -> EnvelopePoint:
    return EnvelopePoint(weight=round(float(point.weight), 2), moment=round(float(point.moment), 2))


def is_point_in_polygon(point: EnvelopePoint, ring) -> bool:
    """
    Strict ray-casting test with x = moment and y = weight.

    The ring is treated as closed whether or not the last vertex repeats the
    first. Points exactly on an edge may land on either side.
    """
    vertices = _points(ring)
    x, y = float(point.moment), float(point.weight)
    inside = False

    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i].moment, vertices[i].weight
        xj, yj = vertices[j].moment, vertices[j].weight
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i

    return inside


def is_near_vertex(point: EnvelopePoint, ring, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when any vertex lies within ``tolerance`` of the point on both axes."""
    x, y = float(point.moment), float(point.weight)
    return any(
        abs(vertex.moment - x) <= tolerance and abs(vertex.weight - y) <= tolerance
        for vertex in _points(ring)
    )


def is_within_envelope(point: EnvelopePoint, ring, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Strict containment, falling back to the near-vertex allowance."""
    point = _rounded(point)
    if is_point_in_polygon(point, ring):
        return True
    return is_near_vertex(point, ring, tolerance)


def check_envelope(
    point: EnvelopePoint,
    rings: Iterable[EnvelopeRing],
    tolerance: float = DEFAULT_TOLERANCE,
) -> EnvelopeCheck:
    """
    Test a point against every ring of an envelope.

    Each ring is an independent membership test; being inside any of them
    counts. A strict hit in any ring wins over a tolerance-only hit.

    Args:
        point: Computed takeoff or landing position
        rings: Envelope rings of the aircraft (one or two categories)
        tolerance: Absolute near-vertex allowance on both axes

    Returns:
        EnvelopeCheck with status and the name of the matching ring
    """
    point = _rounded(point)
    rings = list(rings)

    for ring in rings:
        if is_point_in_polygon(point, ring):
            return EnvelopeCheck(status=EnvelopeStatus.WITHIN, ring=ring.name)

    for ring in rings:
        if is_near_vertex(point, ring, tolerance):
            logger.debug(
                f"Point ({point.moment}, {point.weight}) accepted by tolerance "
                f"{tolerance} on ring '{ring.name}'"
            )
            return EnvelopeCheck(status=EnvelopeStatus.MARGINAL, ring=ring.name)

    return EnvelopeCheck(status=EnvelopeStatus.OUT)


def get_tolerance(config: AircraftConfig) -> float:
    """Near-vertex tolerance for an aircraft, honouring settings overrides."""
    overrides = getattr(settings, 'WEIGHT_BALANCE', {}).get('ENVELOPE_TOLERANCE') or {}
    return overrides.get(config.aircraft_type.value, config.tolerance)
