# services/weight-balance-service/src/tests/test_fuel_planning.py
"""
Fuel Planning Service Tests
"""

from decimal import Decimal

from apps.core.services import FuelCategory, FuelPlanningService
from apps.core.services.fuel_planning_service import split_hours


class TestSplitHours:

    def test_split(self):
        assert split_hours(Decimal('2.25')) == (2, 15)
        assert split_hours(Decimal('0.9999')) == (1, 0)
        assert split_hours(Decimal('-1')) == (0, 0)


class TestFuelPlanningService:
    """Tests for the minimum legal fuel table."""

    def test_default_plan_has_reserve(self):
        plan = FuelPlanningService.default_plan('C-150')
        reserve = plan.rows[FuelCategory.RESERVE]

        assert (reserve.hours, reserve.minutes) == (0, 45)
        assert reserve.gallons == Decimal('4.31')
        assert plan.total_gallons == Decimal('4.31')
        assert plan.total_time == (0, 45)

    def test_contingency_from_destination_and_alternate(self):
        plan = FuelPlanningService.plan('C-150', {
            'Destination': {'hr': 1, 'min': 0},
            'Alternate': {'hr': 0, 'min': 30},
        })
        contingency = plan.rows[FuelCategory.CONTINGENCY]

        assert plan.rows[FuelCategory.DESTINATION].gallons == Decimal('5.75')
        assert plan.rows[FuelCategory.ALTERNATE].gallons == Decimal('2.88')
        assert contingency.gallons == Decimal('0.86')
        assert (contingency.hours, contingency.minutes) == (0, 9)

    def test_minutes_capped(self):
        plan = FuelPlanningService.plan('C-150', {'Extra': {'hr': 0, 'min': 75}})

        assert plan.rows[FuelCategory.EXTRA].minutes == 59

    def test_no_trim_without_last_edited(self):
        plan = FuelPlanningService.plan('C-150', {'Destination': {'hr': 10, 'min': 0}})

        assert not plan.endurance_trimmed
        assert plan.rows[FuelCategory.DESTINATION].hours == 10

    def test_endurance_trims_last_edited(self):
        plan = FuelPlanningService.plan(
            'C-150',
            {'Destination': {'hr': 10, 'min': 0}},
            last_edited='Destination',
        )
        destination = plan.rows[FuelCategory.DESTINATION]

        assert plan.endurance_trimmed
        assert not plan.gallons_trimmed
        assert (destination.hours, destination.minutes) == (2, 15)
        assert plan.total_gallons <= Decimal('23')

    def test_c172_endurance_limit(self):
        plan = FuelPlanningService.plan(
            'C-172',
            {'Destination': {'hr': 2, 'min': 0}, 'Extra': {'hr': 3, 'min': 0}},
            last_edited='Extra',
        )
        extra = plan.rows[FuelCategory.EXTRA]

        assert plan.endurance_trimmed
        assert (extra.hours, extra.minutes) == (1, 33)
        assert plan.total_time == (4, 30)
        assert plan.total_gallons <= Decimal('53')

    def test_contingency_is_never_last_edited(self):
        plan = FuelPlanningService.plan('C-150', {}, last_edited='10% of D&A')

        assert plan.last_edited is None

    def test_to_dict(self):
        data = FuelPlanningService.default_plan('C-172').to_dict()

        assert list(data['rows']) == ['Destination', 'Alternate', '10% of D&A', 'Reserve', 'Extra']
        assert data['rows']['Reserve'] == {'hr': 0, 'min': 45, 'usg': 8.84}
        assert data['total'] == {'hr': 0, 'min': 45, 'usg': 8.84}
        assert data['lastEdited'] is None
