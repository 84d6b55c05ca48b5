# services/weight-balance-service/src/apps/api/views/sheet_views.py
"""
Sheet Views

Save and list stored load sheets.
"""

import logging

from django.db import DatabaseError, transaction
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import SheetFetchFailed, SheetSaveFailed
from apps.core.models import WeightBalanceSheet
from apps.api.serializers import WeightBalanceSheetSerializer

logger = logging.getLogger(__name__)


class SheetListView(APIView):
    """
    List every stored sheet, oldest first, unpaginated.

    GET /api/weightbalance/
    """

    def get(self, request):
        try:
            sheets = list(WeightBalanceSheet.objects.order_by('created_at'))
        except DatabaseError as e:
            logger.exception("Failed to fetch weight & balance sheets")
            raise SheetFetchFailed(extra_data={'errors': str(e)})

        serializer = WeightBalanceSheetSerializer(sheets, many=True)
        return Response(serializer.data)


class SheetSaveView(APIView):
    """
    Store a computed sheet.

    POST /api/weightbalance/save
    """

    def post(self, request):
        serializer = WeightBalanceSheetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            with transaction.atomic():
                sheet = serializer.save()
        except DatabaseError as e:
            logger.exception("Failed to save weight & balance sheet")
            raise SheetSaveFailed(extra_data={'errors': str(e)})

        logger.info(f"Saved weight & balance sheet {sheet.id} ({sheet.aircraft_type})")
        return Response({'message': 'Saved', 'id': str(sheet.id)}, status=status.HTTP_200_OK)
