# services/weight-balance-service/src/apps/api/serializers/pdf_serializers.py
"""
PDF Generation Serializers
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.core.exceptions import InvalidGraphImage
from apps.core.services.pdf_service import validate_graph_image
from shared.common.validators import validate_email as check_email_format

MAX_GRAPH_IMAGES = 10


class GeneratePDFSerializer(serializers.Serializer):
    """
    PDF generation request.

    ``email`` is required unless ``download`` is true. Every graph image
    must be null or a base64 PNG data URI; anything else rejects the request.
    """

    html = serializers.CharField(trim_whitespace=False)
    aircraftType = serializers.CharField(source='aircraft_type', max_length=50)
    date = serializers.CharField(max_length=100)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    download = serializers.BooleanField(required=False, default=False)
    graphImages = serializers.ListField(
        source='graph_images',
        child=serializers.CharField(allow_null=True, trim_whitespace=False),
        required=False,
        default=list,
        max_length=MAX_GRAPH_IMAGES,
    )
    pilotName = serializers.CharField(source='pilot_name', required=False, allow_blank=True, default='')
    route = serializers.CharField(required=False, allow_blank=True, default='')
    registration = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_email(self, value):
        if not value:
            return None
        try:
            return check_email_format(value)
        except DjangoValidationError:
            raise serializers.ValidationError("Invalid recipient email address")

    def validate_graphImages(self, value):
        decoded = []
        for index, image in enumerate(value):
            try:
                decoded.append(validate_graph_image(image))
            except InvalidGraphImage as e:
                raise serializers.ValidationError(f"Graph image {index + 1}: {e.detail}")
        return decoded

    def validate(self, attrs):
        if not attrs.get('download') and not attrs.get('email'):
            raise serializers.ValidationError({'email': "Email is required unless download is requested."})
        return attrs
