# services/weight-balance-service/src/apps/core/services/calculator_service.py
"""
Calculator Service

Linear weight and moment arithmetic for a load sheet.

All values are Decimal and rounded half-up to two places, so
``moment == round2(weight * arm / scale_factor)`` holds exactly.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from shared.common.validators import MAX_NUMERIC_DIGITS, NUMERIC_TEXT_RE, count_digits

from ..aircraft import (
    AircraftConfig,
    EnvelopePoint,
    StationKey,
    get_aircraft_config,
)
from .envelope_service import EnvelopeCheck, check_envelope, get_tolerance

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0')


def round2(value) -> Decimal:
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def is_numeric_text(text) -> bool:
    """Accept blank or unsigned decimal text such as '12', '12.' or '.5'."""
    if text is None:
        return True
    text = str(text).strip()
    return bool(NUMERIC_TEXT_RE.match(text)) and count_digits(text) <= MAX_NUMERIC_DIGITS


def parse_number(value) -> Decimal:
    """Parse form text or a JSON number; blank and '.' read as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a number")
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    text = str(value).strip()
    if not text:
        return ZERO
    try:
        return Decimal(text)
    except InvalidOperation:
        return ZERO


def clamp_weight(weight, maximum=None) -> Decimal:
    weight = parse_number(weight)
    if maximum is not None and weight > maximum:
        return Decimal(maximum)
    return weight


def calculate_moment(weight, arm, scale_factor: int = 1) -> Decimal:
    return round2(parse_number(weight) * parse_number(arm) / Decimal(scale_factor))


def center_of_gravity(total_moment, total_weight, scale_factor: int = 1) -> Decimal:
    """C.O.G. in arm units; zero when there is no weight to divide by."""
    total_weight = parse_number(total_weight)
    if total_weight <= 0:
        return ZERO
    return round2(parse_number(total_moment) * Decimal(scale_factor) / total_weight)


def fuel_burn_limit(config: AircraftConfig, fuel_weight) -> Decimal:
    """Fuel burn cannot exceed the fuel on board, or tank capacity when none is entered."""
    fuel_weight = parse_number(fuel_weight)
    return fuel_weight if fuel_weight > 0 else config.max_fuel


@dataclass
class LoadStation:
    """A computed station row."""
    key: StationKey
    description: str
    weight: Decimal
    arm: Decimal
    moment: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'weight': float(self.weight),
            'arm': float(self.arm),
            'moment': float(self.moment),
        }


@dataclass
class SheetResult:
    """Fully derived load sheet for one aircraft."""
    config: AircraftConfig
    stations: List[LoadStation]
    total_weight: Decimal
    total_moment: Decimal
    takeoff_cog: Decimal
    fuel_burn_weight: Decimal
    fuel_burn_moment: Decimal
    landing_weight: Decimal
    landing_moment: Decimal
    landing_cog: Decimal
    takeoff_envelope: EnvelopeCheck
    landing_envelope: EnvelopeCheck
    tolerance: float = 1

    @property
    def aircraft_type(self):
        return self.config.aircraft_type

    @property
    def scale_factor(self) -> int:
        return self.config.scale_factor

    @property
    def takeoff_point(self) -> EnvelopePoint:
        return EnvelopePoint(weight=float(self.total_weight), moment=float(self.total_moment))

    @property
    def landing_point(self) -> EnvelopePoint:
        return EnvelopePoint(weight=float(self.landing_weight), moment=float(self.landing_moment))

    @property
    def load_stations(self) -> List[LoadStation]:
        """Stations that make up the takeoff total, without the burn row."""
        return [s for s in self.stations if s.key != StationKey.FUEL_BURN]

    @property
    def fuel_burn(self) -> Optional[LoadStation]:
        return self.station(StationKey.FUEL_BURN)

    def station(self, key) -> Optional[LoadStation]:
        key = StationKey(key)
        for station in self.stations:
            if station.key == key:
                return station
        return None

    def to_record(
        self,
        date=None,
        pilot_name: str = '',
        route: str = '',
        registration: str = '',
        prepared_by: str = '',
        license_no: str = '',
    ) -> Dict[str, Any]:
        """Payload accepted by the save endpoint."""
        return {
            'date': date,
            'pilotName': pilot_name,
            'route': route,
            'registration': registration,
            'aircraftType': self.aircraft_type.value,
            'entries': [station.to_dict() for station in self.stations],
            'totalTakeoffWeight': float(self.total_weight),
            'takeoffCOG': float(self.takeoff_cog),
            'takeoffMoment': float(self.total_moment),
            'fuelBurnOff': float(self.fuel_burn_weight),
            'landingWeight': float(self.landing_weight),
            'landingCOG': float(self.landing_cog),
            'landingMoment': float(self.landing_moment),
            'preparedBy': prepared_by,
            'licenseNo': license_no,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full derived state for API responses."""
        labels = self.config.unit_labels
        return {
            'aircraftType': self.aircraft_type.value,
            'scaleFactor': self.scale_factor,
            'units': {'weight': labels.weight, 'arm': labels.arm, 'moment': labels.moment},
            'stations': {
                station.key.value: station.to_dict() for station in self.stations
            },
            'totalWeight': float(self.total_weight),
            'totalMoment': float(self.total_moment),
            'takeoffCOG': float(self.takeoff_cog),
            'fuelBurnWeight': float(self.fuel_burn_weight),
            'fuelBurnMoment': float(self.fuel_burn_moment),
            'landingWeight': float(self.landing_weight),
            'landingMoment': float(self.landing_moment),
            'landingCOG': float(self.landing_cog),
            'takeoffEnvelope': self.takeoff_envelope.to_dict(),
            'landingEnvelope': self.landing_envelope.to_dict(),
            'tolerance': self.tolerance,
        }


def calculate_sheet(
    aircraft_type,
    stations: Optional[Mapping[str, Mapping[str, Any]]] = None,
    tolerance: Optional[float] = None,
) -> SheetResult:
    """
    Compute every derived value of a load sheet.

    Args:
        aircraft_type: 'C-150' or 'C-172'
        stations: ``{station_key: {'weight': ..., 'arm': ...}}``; missing
            stations take their configured defaults, arms of non-editable
            stations are always the configured ones
        tolerance: Envelope near-vertex allowance; defaults to the
            aircraft's configured value

    Returns:
        SheetResult

    Raises:
        UnknownAircraftType: If the aircraft type is not registered
    """
    config = get_aircraft_config(aircraft_type)
    stations = stations or {}
    if tolerance is None:
        tolerance = get_tolerance(config)

    def station_input(spec):
        values = stations.get(spec.key.value) or {}
        weight = values.get('weight', spec.default_weight)
        arm = values.get('arm', spec.arm) if spec.arm_editable else spec.arm
        return weight, arm

    rows: List[LoadStation] = []
    fuel_weight = ZERO
    burn_row = None

    for spec in config.stations:
        weight, arm = station_input(spec)
        if spec.key == StationKey.FUEL_BURN:
            burn_row = (spec, weight, arm)
            continue
        weight = clamp_weight(weight, spec.max_weight)
        if spec.key == StationKey.FUEL:
            fuel_weight = weight
        rows.append(LoadStation(
            key=spec.key,
            description=spec.description,
            weight=weight,
            arm=parse_number(arm),
            moment=calculate_moment(weight, arm, config.scale_factor),
        ))

    total_weight = sum((row.weight for row in rows), ZERO)
    total_moment = round2(sum((row.moment for row in rows), ZERO))

    fuel_arm = parse_number(config.station(StationKey.FUEL).arm)
    burn_weight = ZERO
    burn_moment = ZERO
    if burn_row is not None:
        spec, weight, arm = burn_row
        burn_weight = clamp_weight(weight, fuel_burn_limit(config, fuel_weight))
        burn_moment = calculate_moment(burn_weight, fuel_arm, config.scale_factor)
        rows.append(LoadStation(
            key=spec.key,
            description=spec.description,
            weight=burn_weight,
            arm=parse_number(arm),
            moment=burn_moment,
        ))

    landing_weight = total_weight - burn_weight
    landing_moment = round2(total_moment - burn_moment)

    rings = config.envelope.rings
    takeoff_envelope = check_envelope(
        EnvelopePoint(weight=float(total_weight), moment=float(total_moment)), rings, tolerance
    )
    landing_envelope = check_envelope(
        EnvelopePoint(weight=float(landing_weight), moment=float(landing_moment)), rings, tolerance
    )

    return SheetResult(
        config=config,
        stations=rows,
        total_weight=total_weight,
        total_moment=total_moment,
        takeoff_cog=center_of_gravity(total_moment, total_weight, config.scale_factor),
        fuel_burn_weight=burn_weight,
        fuel_burn_moment=burn_moment,
        landing_weight=landing_weight,
        landing_moment=landing_moment,
        landing_cog=center_of_gravity(landing_moment, landing_weight, config.scale_factor),
        takeoff_envelope=takeoff_envelope,
        landing_envelope=landing_envelope,
        tolerance=tolerance,
    )
