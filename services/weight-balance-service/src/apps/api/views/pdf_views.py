# services/weight-balance-service/src/apps/api/views/pdf_views.py
"""
PDF Views

Builds the load sheet PDF and either streams it back or emails it.
"""

import logging

from django.http import HttpResponse
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import MailService, PDFService, build_pdf_filename
from apps.api.serializers import GeneratePDFSerializer

logger = logging.getLogger(__name__)


class GeneratePDFView(APIView):
    """
    Generate a load sheet PDF.

    POST /api/generate-pdf

    With ``download`` true the PDF is returned as an attachment and no mail
    is sent; otherwise it is emailed to ``email``.
    """

    def post(self, request):
        serializer = GeneratePDFSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        pdf_bytes = PDFService.build_sheet_pdf(
            html=data['html'],
            aircraft_type=data['aircraft_type'],
            date=data['date'],
            graph_images=data['graph_images'],
            pilot_name=data['pilot_name'],
            route=data['route'],
            registration=data['registration'],
        )

        if data['download']:
            filename = build_pdf_filename(data['aircraft_type'], data['date'])
            response = HttpResponse(pdf_bytes, content_type='application/pdf')
            response['Content-Disposition'] = f'attachment; filename="{filename}"'
            response['Content-Length'] = str(len(pdf_bytes))
            return response

        MailService.send_sheet_pdf(
            email=data['email'],
            aircraft_type=data['aircraft_type'],
            date=data['date'],
            pdf_bytes=pdf_bytes,
        )
        return Response({'success': True, 'message': 'PDF sent successfully'})
