# services/weight-balance-service/src/apps/core/services/fuel_planning_service.py
"""
Fuel Planning Service

Minimum legal fuel table: destination, alternate, 10% contingency of
destination + alternate, reserve and extra, in hours/minutes and US gallons.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ..aircraft import AircraftConfig, get_aircraft_config
from .calculator_service import round2

logger = logging.getLogger(__name__)

MAX_MINUTES = 59
CONTINGENCY_RATIO = Decimal('0.1')
DEFAULT_RESERVE_MINUTES = 45


class FuelCategory(str, Enum):
    """Rows of the fuel table, in display order."""
    DESTINATION = 'Destination'
    ALTERNATE = 'Alternate'
    CONTINGENCY = '10% of D&A'
    RESERVE = 'Reserve'
    EXTRA = 'Extra'


EDITABLE_CATEGORIES = (
    FuelCategory.DESTINATION,
    FuelCategory.ALTERNATE,
    FuelCategory.RESERVE,
    FuelCategory.EXTRA,
)


@dataclass
class FuelRow:
    hours: int = 0
    minutes: int = 0
    gallons: Decimal = Decimal('0')

    @property
    def duration(self) -> Decimal:
        return Decimal(self.hours) + Decimal(self.minutes) / 60

    def to_dict(self) -> Dict[str, Any]:
        return {'hr': self.hours, 'min': self.minutes, 'usg': float(self.gallons)}


@dataclass
class FuelPlan:
    aircraft_type: str
    rows: Dict[FuelCategory, FuelRow]
    last_edited: Optional[FuelCategory] = None
    endurance_trimmed: bool = False
    gallons_trimmed: bool = False

    @property
    def total_gallons(self) -> Decimal:
        return round2(sum((row.gallons for row in self.rows.values()), Decimal('0')))

    @property
    def total_time(self) -> Tuple[int, int]:
        """Summed hours and minutes, minutes carried into hours."""
        hours = sum(row.hours for row in self.rows.values())
        minutes = sum(row.minutes for row in self.rows.values())
        return hours + minutes // 60, minutes % 60

    def to_dict(self) -> Dict[str, Any]:
        hours, minutes = self.total_time
        return {
            'aircraftType': self.aircraft_type,
            'rows': {category.value: self.rows[category].to_dict() for category in FuelCategory},
            'total': {'hr': hours, 'min': minutes, 'usg': float(self.total_gallons)},
            'lastEdited': self.last_edited.value if self.last_edited else None,
            'enduranceTrimmed': self.endurance_trimmed,
            'gallonsTrimmed': self.gallons_trimmed,
        }


def split_hours(hours: Decimal) -> Tuple[int, int]:
    """Decimal hours to whole hours and rounded minutes."""
    hours = max(Decimal(hours), Decimal('0'))
    whole = int(hours.to_integral_value(rounding=ROUND_FLOOR))
    minutes = int(((hours - whole) * 60).to_integral_value(rounding=ROUND_HALF_UP))
    if minutes >= 60:
        whole, minutes = whole + 1, minutes - 60
    return whole, minutes


class FuelPlanningService:
    """Builds the minimum legal fuel table for an aircraft."""

    @staticmethod
    def gallons_for(config: AircraftConfig, hours, minutes) -> Decimal:
        duration = Decimal(hours or 0) + Decimal(minutes or 0) / 60
        return round2(duration * config.fuel_planning.gallons_per_hour)

    @classmethod
    def _row(cls, config: AircraftConfig, hours, minutes) -> FuelRow:
        hours = max(int(hours or 0), 0)
        minutes = min(max(int(minutes or 0), 0), MAX_MINUTES)
        return FuelRow(hours=hours, minutes=minutes, gallons=cls.gallons_for(config, hours, minutes))

    @classmethod
    def _derive_contingency(cls, config: AircraftConfig, rows: Dict[FuelCategory, FuelRow]) -> None:
        gallons = (
            rows[FuelCategory.DESTINATION].gallons + rows[FuelCategory.ALTERNATE].gallons
        ) * CONTINGENCY_RATIO
        hours, minutes = split_hours(gallons / config.fuel_planning.gallons_per_hour)
        rows[FuelCategory.CONTINGENCY] = FuelRow(hours=hours, minutes=minutes, gallons=round2(gallons))

    @classmethod
    def default_plan(cls, aircraft_type) -> FuelPlan:
        return cls.plan(aircraft_type, {})

    @classmethod
    def plan(
        cls,
        aircraft_type,
        rows: Mapping[str, Mapping[str, Any]],
        last_edited: Optional[str] = None,
    ) -> FuelPlan:
        """
        Compute the fuel table from entered durations.

        Args:
            aircraft_type: 'C-150' or 'C-172'
            rows: ``{category: {'hr': int, 'min': int}}`` for the editable
                categories; a missing Reserve row defaults to 45 minutes
            last_edited: Category the user changed last; it absorbs any
                excess over the endurance or tank limits

        Returns:
            FuelPlan
        """
        config = get_aircraft_config(aircraft_type)
        limits = config.fuel_planning
        last = FuelCategory(last_edited) if last_edited else None
        if last is not None and last not in EDITABLE_CATEGORIES:
            last = None

        table: Dict[FuelCategory, FuelRow] = {}
        for category in EDITABLE_CATEGORIES:
            values = rows.get(category.value)
            if values is None and category == FuelCategory.RESERVE:
                values = {'hr': 0, 'min': DEFAULT_RESERVE_MINUTES}
            values = values or {}
            table[category] = cls._row(config, values.get('hr'), values.get('min'))
        cls._derive_contingency(config, table)

        plan = FuelPlan(aircraft_type=config.aircraft_type.value, rows=table, last_edited=last)

        endurance = sum((row.duration for row in table.values()), Decimal('0'))
        if endurance > limits.max_endurance_hours and last is not None:
            excess = endurance - limits.max_endurance_hours
            hours, minutes = split_hours(max(table[last].duration - excess, Decimal('0')))
            table[last] = cls._row(config, hours, minutes)
            cls._derive_contingency(config, table)
            plan.endurance_trimmed = True
            logger.debug(f"Trimmed {last.value} by {excess:.2f} h to stay within endurance")

        total = sum((row.gallons for row in table.values()), Decimal('0'))
        if total > limits.max_gallons and last is not None:
            excess = total - limits.max_gallons
            gallons = round2(max(table[last].gallons - excess, Decimal('0')))
            hours, minutes = split_hours(gallons / limits.gallons_per_hour)
            table[last] = FuelRow(hours=hours, minutes=min(minutes, MAX_MINUTES), gallons=gallons)
            cls._derive_contingency(config, table)
            plan.gallons_trimmed = True
            logger.debug(f"Trimmed {last.value} by {excess:.2f} gal to stay within tank capacity")

        return plan
