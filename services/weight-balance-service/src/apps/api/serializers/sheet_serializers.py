# services/weight-balance-service/src/apps/api/serializers/sheet_serializers.py
"""
Weight & Balance Sheet Serializers

Stored sheets use camelCase keys on the wire.
"""

from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import serializers

from apps.core.models import WeightBalanceSheet


class FlexibleDateTimeField(serializers.DateTimeField):
    """Accepts ISO datetimes and plain ISO dates (read as midnight)."""

    def to_internal_value(self, value):
        try:
            return super().to_internal_value(value)
        except serializers.ValidationError:
            parsed = parse_date(value) if isinstance(value, str) else None
            if parsed is None:
                raise
            moment = datetime.combine(parsed, time.min)
            return timezone.make_aware(moment) if timezone.is_naive(moment) else moment


class LoadStationEntrySerializer(serializers.Serializer):
    """One station row of a stored sheet."""

    description = serializers.CharField(required=False, allow_blank=True, default='')
    weight = serializers.FloatField(required=False, allow_null=True)
    arm = serializers.FloatField(required=False, allow_null=True)
    moment = serializers.FloatField(required=False, allow_null=True)


class WeightBalanceSheetSerializer(serializers.ModelSerializer):
    """Serializer for stored sheets."""

    date = FlexibleDateTimeField(required=False, allow_null=True)
    pilotName = serializers.CharField(source='pilot_name', required=False, allow_blank=True, max_length=255)
    route = serializers.CharField(required=False, allow_blank=True, max_length=255)
    registration = serializers.CharField(required=False, allow_blank=True, max_length=50)
    aircraftType = serializers.CharField(source='aircraft_type', required=False, allow_blank=True, max_length=20)
    entries = LoadStationEntrySerializer(many=True, required=False)
    totalTakeoffWeight = serializers.FloatField(source='total_takeoff_weight', required=False, allow_null=True)
    takeoffCOG = serializers.FloatField(source='takeoff_cog', required=False, allow_null=True)
    takeoffMoment = serializers.FloatField(source='takeoff_moment', required=False, allow_null=True)
    fuelBurnOff = serializers.FloatField(source='fuel_burn_off', required=False, allow_null=True)
    landingWeight = serializers.FloatField(source='landing_weight', required=False, allow_null=True)
    landingCOG = serializers.FloatField(source='landing_cog', required=False, allow_null=True)
    landingMoment = serializers.FloatField(source='landing_moment', required=False, allow_null=True)
    preparedBy = serializers.CharField(source='prepared_by', required=False, allow_blank=True, max_length=255)
    licenseNo = serializers.CharField(source='license_no', required=False, allow_blank=True, max_length=100)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = WeightBalanceSheet
        fields = [
            'id',
            'date',
            'pilotName',
            'route',
            'registration',
            'aircraftType',
            'entries',
            'totalTakeoffWeight',
            'takeoffCOG',
            'takeoffMoment',
            'fuelBurnOff',
            'landingWeight',
            'landingCOG',
            'landingMoment',
            'preparedBy',
            'licenseNo',
            'createdAt',
        ]
        read_only_fields = ['id', 'createdAt']

    def create(self, validated_data):
        entries = validated_data.pop('entries', [])
        return WeightBalanceSheet.objects.create(
            entries=[dict(entry) for entry in entries],
            **validated_data
        )
