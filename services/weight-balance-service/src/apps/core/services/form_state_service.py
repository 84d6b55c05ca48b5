# services/weight-balance-service/src/apps/core/services/form_state_service.py
"""
Form State Service

Per-aircraft load sheet input state and its edit transitions.

Each aircraft type owns one LoadSheetState. Edits are pure transitions
(validate text, clamp to the station maximum, recompute the station moment)
that return a new state; totals and envelope flags are always derived from
the whole state through ``LoadSheetState.result()``.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from ..aircraft import AircraftType, StationKey, get_aircraft_config
from .calculator_service import (
    SheetResult,
    calculate_moment,
    calculate_sheet,
    clamp_weight,
    fuel_burn_limit,
    is_numeric_text,
    parse_number,
)

logger = logging.getLogger(__name__)

SESSION_KEY = 'weight_balance_form'


class EditField(str, Enum):
    WEIGHT = 'weight'
    ARM = 'arm'


class EditRejection(str, Enum):
    """Why an edit left the state unchanged."""
    NOT_NUMERIC = 'not_numeric'
    UNKNOWN_STATION = 'unknown_station'
    UNKNOWN_FIELD = 'unknown_field'
    ARM_NOT_EDITABLE = 'arm_not_editable'


def _format_decimal(value: Decimal) -> str:
    text = format(value, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


@dataclass(frozen=True)
class StationState:
    """Raw input text of a station plus its derived moment."""
    weight: str
    arm: str
    moment: Decimal = Decimal('0')

    def to_dict(self) -> Dict[str, Any]:
        return {'weight': self.weight, 'arm': self.arm, 'moment': str(self.moment)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StationState':
        return cls(
            weight=str(data.get('weight', '')),
            arm=str(data.get('arm', '')),
            moment=parse_number(data.get('moment')),
        )


@dataclass(frozen=True)
class LoadSheetState:
    """Authoritative input record for one aircraft type."""
    aircraft_type: AircraftType
    stations: Dict[str, StationState] = field(default_factory=dict)

    @classmethod
    def initial(cls, aircraft_type) -> 'LoadSheetState':
        """Defaults from the aircraft configuration."""
        config = get_aircraft_config(aircraft_type)
        stations = {}
        for spec in config.stations:
            weight = clamp_weight(spec.default_weight, spec.max_weight)
            stations[spec.key.value] = StationState(
                weight=spec.default_weight,
                arm=spec.arm,
                moment=calculate_moment(weight, spec.arm, config.scale_factor),
            )
        return cls(aircraft_type=config.aircraft_type, stations=stations)

    @property
    def config(self):
        return get_aircraft_config(self.aircraft_type)

    def station_inputs(self) -> Dict[str, Dict[str, str]]:
        return {
            key: {'weight': station.weight, 'arm': station.arm}
            for key, station in self.stations.items()
        }

    def result(self, tolerance: Optional[float] = None) -> SheetResult:
        """Totals, C.O.G. and envelope flags derived from the current inputs."""
        return calculate_sheet(self.aircraft_type, self.station_inputs(), tolerance=tolerance)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'aircraftType': self.aircraft_type.value,
            'stations': {key: station.to_dict() for key, station in self.stations.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoadSheetState':
        state = cls.initial(data.get('aircraftType'))
        stations = dict(state.stations)
        for key, value in (data.get('stations') or {}).items():
            if key in stations and isinstance(value, dict):
                stations[key] = StationState.from_dict(value)
        return replace(state, stations=stations)


@dataclass(frozen=True)
class EditResult:
    state: LoadSheetState
    accepted: bool
    rejection: Optional[EditRejection] = None


def _with_station(state: LoadSheetState, key: str, weight: str, arm: str) -> LoadSheetState:
    config = state.config
    spec = config.station(key)
    if spec.key == StationKey.FUEL_BURN:
        fuel = state.stations[StationKey.FUEL.value]
        limit = fuel_burn_limit(config, fuel.weight)
        moment_arm = config.station(StationKey.FUEL).arm
    else:
        limit = spec.max_weight
        moment_arm = arm

    if limit is not None and parse_number(weight) > limit:
        weight = _format_decimal(Decimal(limit))

    stations = dict(state.stations)
    stations[key] = StationState(
        weight=weight,
        arm=arm,
        moment=calculate_moment(weight, moment_arm, config.scale_factor),
    )
    return replace(state, stations=stations)


def apply_edit(state: LoadSheetState, station_key: str, field_name: str, value) -> EditResult:
    """
    Apply one field edit to a load sheet state.

    Args:
        state: Current state (left untouched)
        station_key: Station identifier, e.g. 'fuel'
        field_name: 'weight' or 'arm'
        value: Raw input text

    Returns:
        EditResult with the new state, or the unchanged state and the
        rejection reason
    """
    config = state.config
    if not config.has_station(station_key):
        return EditResult(state=state, accepted=False, rejection=EditRejection.UNKNOWN_STATION)
    try:
        field_name = EditField(field_name)
    except ValueError:
        return EditResult(state=state, accepted=False, rejection=EditRejection.UNKNOWN_FIELD)

    text = '' if value is None else str(value).strip()
    if not is_numeric_text(text):
        return EditResult(state=state, accepted=False, rejection=EditRejection.NOT_NUMERIC)

    spec = config.station(station_key)
    current = state.stations[spec.key.value]

    if field_name == EditField.ARM:
        if not spec.arm_editable:
            return EditResult(state=state, accepted=False, rejection=EditRejection.ARM_NOT_EDITABLE)
        new_state = _with_station(state, spec.key.value, current.weight, text)
    else:
        new_state = _with_station(state, spec.key.value, text, current.arm)

    # Lowering the fuel load re-clamps the planned burn.
    if spec.key == StationKey.FUEL and config.has_station(StationKey.FUEL_BURN):
        burn = new_state.stations[StationKey.FUEL_BURN.value]
        new_state = _with_station(new_state, StationKey.FUEL_BURN.value, burn.weight, burn.arm)

    return EditResult(state=new_state, accepted=True)


class FormSession:
    """
    Load sheet states for every aircraft type plus the active one.

    Switching type swaps in that type's own state; entries never leak
    between types.
    """

    def __init__(self, active=AircraftType.C150, states: Optional[Dict[str, LoadSheetState]] = None):
        self.active = get_aircraft_config(active).aircraft_type
        self.states: Dict[str, LoadSheetState] = dict(states or {})

    @property
    def state(self) -> LoadSheetState:
        return self.get(self.active)

    def get(self, aircraft_type) -> LoadSheetState:
        aircraft_type = get_aircraft_config(aircraft_type).aircraft_type
        if aircraft_type.value not in self.states:
            self.states[aircraft_type.value] = LoadSheetState.initial(aircraft_type)
        return self.states[aircraft_type.value]

    def switch(self, aircraft_type) -> LoadSheetState:
        self.active = get_aircraft_config(aircraft_type).aircraft_type
        return self.state

    def edit(self, station_key: str, field_name: str, value) -> EditResult:
        outcome = apply_edit(self.state, station_key, field_name, value)
        if outcome.accepted:
            self.states[self.active.value] = outcome.state
        else:
            logger.debug(
                f"Rejected edit {station_key}.{field_name}={value!r} "
                f"on {self.active.value}: {outcome.rejection.value}"
            )
        return outcome

    def reset(self, aircraft_type=None) -> LoadSheetState:
        aircraft_type = get_aircraft_config(aircraft_type or self.active).aircraft_type
        self.states[aircraft_type.value] = LoadSheetState.initial(aircraft_type)
        return self.states[aircraft_type.value]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'active': self.active.value,
            'states': {key: state.to_dict() for key, state in self.states.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'FormSession':
        """Restore from session storage; unknown types and bad payloads fall back to defaults."""
        data = data or {}
        session = cls()
        try:
            session.active = get_aircraft_config(data.get('active', AircraftType.C150)).aircraft_type
        except LookupError:
            logger.warning(f"Discarding unknown active aircraft type {data.get('active')!r}")

        for key, value in (data.get('states') or {}).items():
            try:
                state = LoadSheetState.from_dict(value)
            except (LookupError, AttributeError, TypeError):
                logger.warning(f"Discarding stored form state for {key!r}")
                continue
            session.states[state.aircraft_type.value] = state
        return session

    @classmethod
    def load(cls, django_session) -> 'FormSession':
        return cls.from_dict(django_session.get(SESSION_KEY))

    def save(self, django_session) -> None:
        django_session[SESSION_KEY] = self.to_dict()
