# services/weight-balance-service/src/apps/core/aircraft.py
"""
Aircraft Configuration Table

Static per-type data for the supported aircraft: load stations and their arms,
station weight limits, certified C.O.G. envelope rings, chart axes and units.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple


class AircraftType(str, Enum):
    """Supported aircraft types."""
    C150 = 'C-150'
    C172 = 'C-172'


class StationKey(str, Enum):
    """Load stations that may appear on a sheet."""
    BASIC_EMPTY = 'basicEmpty'
    PILOT_PAX = 'pilotPax'
    REAR_PAX = 'rearPax'
    FUEL = 'fuel'
    BAGGAGE_1 = 'baggage1'
    BAGGAGE_2 = 'baggage2'
    FUEL_BURN = 'fuelBurn'


class UnknownAircraftType(LookupError):
    """Raised when an aircraft type is not registered."""
    pass


class EnvelopeConfigError(ValueError):
    """Raised when an envelope ring is malformed."""
    pass


@dataclass(frozen=True)
class EnvelopePoint:
    """A (weight, moment) pair on the envelope plane."""
    weight: float
    moment: float


@dataclass(frozen=True)
class EnvelopeRing:
    """One closed certification category polygon."""
    name: str
    points: Tuple[EnvelopePoint, ...]
    label_anchor: Optional[EnvelopePoint] = None

    @property
    def is_closed(self) -> bool:
        return len(self.points) >= 4 and self.points[0] == self.points[-1]


@dataclass(frozen=True)
class StationSpec:
    """Definition of a single load station."""
    key: StationKey
    description: str
    arm: str
    default_weight: str = ''
    arm_editable: bool = False
    max_weight: Optional[Decimal] = None
    in_takeoff_total: bool = True
    loading_graph_max: Optional[Decimal] = None


@dataclass(frozen=True)
class UnitLabels:
    weight: str
    arm: str
    moment: str


@dataclass(frozen=True)
class EnvelopeConfig:
    min_weight: int
    max_weight: int
    forward_limit: float
    aft_limit: float
    moment_min: int
    moment_max: int
    weight_axis_max: int
    rings: Tuple[EnvelopeRing, ...]


@dataclass(frozen=True)
class AxisTicks:
    ticks: Tuple[float, ...]
    label_every: Optional[float] = None

    def label(self, value: float) -> str:
        """Tick label; blank for minor ticks."""
        if self.label_every is None:
            return f'{value:.0f}'
        if value % self.label_every == 0:
            return f'{value:.0f}'
        return ''


@dataclass(frozen=True)
class ChartAxes:
    envelope_x: AxisTicks
    envelope_y: AxisTicks
    loading_x: AxisTicks
    loading_y: AxisTicks


@dataclass(frozen=True)
class LoadingGraphConfig:
    max_weight: int
    max_moment: float


@dataclass(frozen=True)
class FuelPlanningConfig:
    gallons_per_hour: Decimal
    max_gallons: Decimal
    max_endurance_hours: Decimal


@dataclass(frozen=True)
class AircraftConfig:
    """Static configuration record for one aircraft type."""
    aircraft_type: AircraftType
    scale_factor: int
    max_fuel: Decimal
    max_baggage_1: Decimal
    max_baggage_2: Decimal
    has_rear_pax: bool
    fuel_burn_rate: int
    unit_labels: UnitLabels
    stations: Tuple[StationSpec, ...]
    envelope: EnvelopeConfig
    tolerance: float
    loading_graph: LoadingGraphConfig
    axes: ChartAxes
    fuel_planning: FuelPlanningConfig
    max_takeoff_weight: Decimal = Decimal('0')

    def station(self, key) -> StationSpec:
        """Return the station spec for ``key``; KeyError if absent on this type."""
        key = StationKey(key)
        for spec in self.stations:
            if spec.key == key:
                return spec
        raise KeyError(f"{self.aircraft_type.value} has no station {key.value}")

    def has_station(self, key) -> bool:
        try:
            self.station(key)
        except (KeyError, ValueError):
            return False
        return True

    @property
    def fuel_burn_label(self) -> str:
        return f"EST FUEL BURN OFF {self.fuel_burn_rate} {self.unit_labels.weight}/HR"


def _ring(name: str, vertices: List[Tuple[float, float]], scale: int = 1,
          label_anchor: Optional[Tuple[float, float]] = None) -> EnvelopeRing:
    """Build a ring from (weight, arm) vertices; moment = weight * arm / scale."""
    points = tuple(
        EnvelopePoint(weight=float(weight), moment=round(weight * arm / scale, 4))
        for weight, arm in vertices
    )
    anchor = EnvelopePoint(*label_anchor) if label_anchor else None
    return EnvelopeRing(name=name, points=points, label_anchor=anchor)


def _ticks(start: float, step: float, count: int) -> Tuple[float, ...]:
    return tuple(start + i * step for i in range(count))


# =============================================================================
# Cessna 150 (metric, moment in m.kg)
# =============================================================================

C150_CONFIG = AircraftConfig(
    aircraft_type=AircraftType.C150,
    scale_factor=1,
    max_fuel=Decimal('95'),
    max_baggage_1=Decimal('54'),
    max_baggage_2=Decimal('0'),
    has_rear_pax=False,
    fuel_burn_rate=14,
    unit_labels=UnitLabels(weight='KGS', arm='MTS.', moment='MTS.KG'),
    stations=(
        StationSpec(StationKey.BASIC_EMPTY, 'BASIC EMPTY WEIGHT', arm='', arm_editable=True),
        StationSpec(StationKey.PILOT_PAX, 'PILOT & PAX', arm='0.99',
                    loading_graph_max=Decimal('170')),
        StationSpec(StationKey.FUEL, 'FUEL', arm='1.07', max_weight=Decimal('95'),
                    loading_graph_max=Decimal('95')),
        StationSpec(StationKey.BAGGAGE_1, 'BAGGAGE AREA 1', arm='1.5', max_weight=Decimal('54'),
                    loading_graph_max=Decimal('54')),
        StationSpec(StationKey.FUEL_BURN, 'FUEL BURN', arm='1.07', in_takeoff_total=False),
    ),
    envelope=EnvelopeConfig(
        min_weight=500,
        max_weight=750,
        forward_limit=0.838,
        aft_limit=0.952,
        moment_min=400,
        moment_max=750,
        weight_axis_max=800,
        rings=(
            _ring('normal', [
                (500, 0.8), (610, 0.8), (750, 0.838),
                (750, 0.952), (610, 0.952), (500, 0.952), (500, 0.8),
            ]),
        ),
    ),
    tolerance=1,
    loading_graph=LoadingGraphConfig(max_weight=180, max_moment=180),
    axes=ChartAxes(
        envelope_x=AxisTicks(_ticks(400, 10, 36), label_every=50),
        envelope_y=AxisTicks(_ticks(500, 5, 61), label_every=50),
        loading_x=AxisTicks(_ticks(0, 5, 37), label_every=20),
        loading_y=AxisTicks(_ticks(0, 5, 37), label_every=20),
    ),
    fuel_planning=FuelPlanningConfig(
        gallons_per_hour=Decimal('5.75'),
        max_gallons=Decimal('23'),
        max_endurance_hours=Decimal('4'),
    ),
    max_takeoff_weight=Decimal('750'),
)


# =============================================================================
# Cessna 172 (imperial, moment in lb.in / 1000)
# =============================================================================

C172_CONFIG = AircraftConfig(
    aircraft_type=AircraftType.C172,
    scale_factor=1000,
    max_fuel=Decimal('240'),
    max_baggage_1=Decimal('120'),
    max_baggage_2=Decimal('50'),
    has_rear_pax=True,
    fuel_burn_rate=48,
    unit_labels=UnitLabels(weight='LBS', arm='INCHES', moment='LBS.INCHES/1000'),
    stations=(
        StationSpec(StationKey.BASIC_EMPTY, 'BASIC EMPTY WEIGHT', arm='41.09',
                    default_weight='1467', arm_editable=True),
        StationSpec(StationKey.PILOT_PAX, 'PILOT & PAX', arm='37',
                    loading_graph_max=Decimal('400')),
        StationSpec(StationKey.REAR_PAX, 'REAR PAX', arm='73',
                    loading_graph_max=Decimal('340')),
        StationSpec(StationKey.FUEL, 'FUEL', arm='46', max_weight=Decimal('240'),
                    loading_graph_max=Decimal('240')),
        StationSpec(StationKey.BAGGAGE_1, 'BAGGAGE AREA 1', arm='95', max_weight=Decimal('120'),
                    loading_graph_max=Decimal('120')),
        StationSpec(StationKey.BAGGAGE_2, 'BAGGAGE AREA 2', arm='123', max_weight=Decimal('50'),
                    loading_graph_max=Decimal('50')),
        StationSpec(StationKey.FUEL_BURN, 'FUEL BURN', arm='46', in_takeoff_total=False),
    ),
    envelope=EnvelopeConfig(
        min_weight=1500,
        max_weight=2300,
        forward_limit=35,
        aft_limit=47.3,
        moment_min=50,
        moment_max=120,
        weight_axis_max=2400,
        rings=(
            _ring('normal', [
                (1500, 35), (1950, 35), (2300, 38.5),
                (2300, 47.3), (1950, 47.3), (1500, 47.3), (1500, 35),
            ], scale=1000, label_anchor=(2070, 88)),
            _ring('utility', [
                (1500, 35.0), (1950, 35.0), (2000, 35.5),
                (2000, 40.5), (1950, 40.5), (1500, 40.5), (1500, 35.0),
            ], scale=1000, label_anchor=(1900, 72)),
        ),
    ),
    tolerance=2,
    loading_graph=LoadingGraphConfig(max_weight=450, max_moment=35),
    axes=ChartAxes(
        envelope_x=AxisTicks(_ticks(50, 5, 14)),
        envelope_y=AxisTicks(_ticks(1500, 100, 10)),
        loading_x=AxisTicks(_ticks(0, 5, 8)),
        loading_y=AxisTicks(_ticks(0, 50, 10), label_every=50),
    ),
    fuel_planning=FuelPlanningConfig(
        gallons_per_hour=Decimal('11.78'),
        max_gallons=Decimal('53'),
        max_endurance_hours=Decimal('4.5'),
    ),
    max_takeoff_weight=Decimal('2300'),
)


AIRCRAFT_CONFIGS: Dict[AircraftType, AircraftConfig] = {
    AircraftType.C150: C150_CONFIG,
    AircraftType.C172: C172_CONFIG,
}


def _check_rings() -> None:
    for config in AIRCRAFT_CONFIGS.values():
        for ring in config.envelope.rings:
            if not ring.is_closed:
                raise EnvelopeConfigError(
                    f"{config.aircraft_type.value} envelope ring '{ring.name}' is not closed"
                )


_check_rings()


def get_aircraft_config(aircraft_type) -> AircraftConfig:
    """
    Resolve an aircraft type identifier to its configuration.

    Args:
        aircraft_type: AircraftType or its string value ('C-150', 'C-172')

    Returns:
        AircraftConfig

    Raises:
        UnknownAircraftType: If the identifier is not registered
    """
    try:
        return AIRCRAFT_CONFIGS[AircraftType(aircraft_type)]
    except (ValueError, KeyError):
        raise UnknownAircraftType(f"Unknown aircraft type: {aircraft_type!r}")


def aircraft_type_choices() -> List[Tuple[str, str]]:
    return [(t.value, t.value) for t in AircraftType]
