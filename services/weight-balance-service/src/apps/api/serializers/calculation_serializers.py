# services/weight-balance-service/src/apps/api/serializers/calculation_serializers.py
"""
Calculation Serializers

Request payloads for sheet calculation, form edits, charts and fuel planning,
plus the aircraft configuration listing.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.core.aircraft import StationKey, aircraft_type_choices, get_aircraft_config
from apps.core.services.form_state_service import EditField
from apps.core.services.fuel_planning_service import EDITABLE_CATEGORIES
from shared.common.validators import validate_numeric_text


def _numeric_text(value, field_name):
    try:
        return validate_numeric_text(value, field_name)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.messages)


class StationInputSerializer(serializers.Serializer):
    """Raw weight/arm text of one station."""

    weight = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    arm = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)

    def validate_weight(self, value):
        return _numeric_text(value, 'weight')

    def validate_arm(self, value):
        return _numeric_text(value, 'arm')


class SheetCalculationSerializer(serializers.Serializer):
    """Stateless calculation request."""

    aircraftType = serializers.ChoiceField(source='aircraft_type', choices=aircraft_type_choices())
    stations = serializers.DictField(child=StationInputSerializer(), required=False, default=dict)

    def validate(self, attrs):
        config = get_aircraft_config(attrs['aircraft_type'])
        unknown = [key for key in attrs.get('stations', {}) if not config.has_station(key)]
        if unknown:
            raise serializers.ValidationError({
                'stations': f"Unknown station(s) for {config.aircraft_type.value}: {', '.join(sorted(unknown))}"
            })
        return attrs


class AircraftTypeSerializer(serializers.Serializer):
    aircraftType = serializers.ChoiceField(source='aircraft_type', choices=aircraft_type_choices())


class FormEditSerializer(serializers.Serializer):
    """
    One field edit.

    ``value`` is not checked here: non-numeric text is reported back as a
    rejected edit with the state unchanged.
    """

    aircraftType = serializers.ChoiceField(source='aircraft_type', choices=aircraft_type_choices())
    station = serializers.ChoiceField(choices=[(key.value, key.value) for key in StationKey])
    field = serializers.ChoiceField(choices=[(f.value, f.value) for f in EditField])
    value = serializers.CharField(allow_blank=True, allow_null=True, trim_whitespace=False)


class FuelRowInputSerializer(serializers.Serializer):
    hr = serializers.IntegerField(min_value=0, required=False, default=0)
    min = serializers.IntegerField(min_value=0, required=False, default=0)


class FuelPlanSerializer(serializers.Serializer):
    """Minimum legal fuel request."""

    aircraftType = serializers.ChoiceField(source='aircraft_type', choices=aircraft_type_choices())
    rows = serializers.DictField(child=FuelRowInputSerializer(), required=False, default=dict)
    lastEdited = serializers.ChoiceField(
        source='last_edited',
        choices=[(c.value, c.value) for c in EDITABLE_CATEGORIES],
        required=False,
        allow_null=True,
    )

    def validate_rows(self, value):
        allowed = {c.value for c in EDITABLE_CATEGORIES}
        unknown = [key for key in value if key not in allowed]
        if unknown:
            raise serializers.ValidationError(f"Unknown fuel categories: {', '.join(sorted(unknown))}")
        return value


# =============================================================================
# Aircraft configuration (read only)
# =============================================================================

class StationSpecSerializer(serializers.Serializer):
    key = serializers.CharField(source='key.value')
    description = serializers.CharField()
    arm = serializers.CharField()
    defaultWeight = serializers.CharField(source='default_weight')
    armEditable = serializers.BooleanField(source='arm_editable')
    maxWeight = serializers.FloatField(source='max_weight', allow_null=True)
    inTakeoffTotal = serializers.BooleanField(source='in_takeoff_total')


class AircraftConfigSerializer(serializers.Serializer):
    """Everything a client needs to render the form for one aircraft."""

    aircraftType = serializers.CharField(source='aircraft_type.value')
    scaleFactor = serializers.IntegerField(source='scale_factor')
    maxFuel = serializers.FloatField(source='max_fuel')
    maxBaggage1 = serializers.FloatField(source='max_baggage_1')
    maxBaggage2 = serializers.FloatField(source='max_baggage_2')
    hasRearPax = serializers.BooleanField(source='has_rear_pax')
    fuelBurnLabel = serializers.CharField(source='fuel_burn_label')
    tolerance = serializers.FloatField()
    units = serializers.SerializerMethodField()
    stations = StationSpecSerializer(many=True)
    envelope = serializers.SerializerMethodField()
    fuelPlanning = serializers.SerializerMethodField()

    def get_units(self, config):
        labels = config.unit_labels
        return {'weight': labels.weight, 'arm': labels.arm, 'moment': labels.moment}

    def get_envelope(self, config):
        envelope = config.envelope
        return {
            'minWeight': envelope.min_weight,
            'maxWeight': envelope.max_weight,
            'forwardLimit': envelope.forward_limit,
            'aftLimit': envelope.aft_limit,
            'momentMin': envelope.moment_min,
            'momentMax': envelope.moment_max,
            'rings': [
                {
                    'name': ring.name,
                    'points': [{'weight': p.weight, 'moment': p.moment} for p in ring.points],
                }
                for ring in envelope.rings
            ],
        }

    def get_fuelPlanning(self, config):
        planning = config.fuel_planning
        return {
            'gallonsPerHour': float(planning.gallons_per_hour),
            'maxGallons': float(planning.max_gallons),
            'maxEnduranceHours': float(planning.max_endurance_hours),
        }
