# services/weight-balance-service/src/tests/test_models.py
"""
Model Tests
"""

import pytest

from apps.core.models import WeightBalanceSheet

pytestmark = pytest.mark.django_db


class TestWeightBalanceSheet:
    """Tests for WeightBalanceSheet model."""

    def test_create_with_defaults(self):
        sheet = WeightBalanceSheet.objects.create()

        assert sheet.id is not None
        assert sheet.entries == []
        assert sheet.pilot_name == ''
        assert sheet.total_takeoff_weight is None
        assert sheet.created_at is not None

    def test_str(self, sample_sheet):
        assert str(sample_sheet) == f"C-150 sheet {sample_sheet.id}"
        assert str(WeightBalanceSheet()).startswith('Unknown sheet')

    def test_entries_round_trip(self, sample_sheet):
        sheet = WeightBalanceSheet.objects.get(id=sample_sheet.id)

        assert sheet.entries[0]['moment'] == 64.2

    def test_default_ordering(self, sample_sheet):
        newer = WeightBalanceSheet.objects.create(aircraft_type='C-172')

        assert list(WeightBalanceSheet.objects.all()) == [sample_sheet, newer]
