# services/weight-balance-service/src/apps/api/views/form_views.py
"""
Form State Views

Server-held form state, one record per aircraft type, kept in the
Django session.
"""

import logging
from typing import Optional

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import EditResult, FormSession
from apps.api.serializers import AircraftTypeSerializer, FormEditSerializer

logger = logging.getLogger(__name__)


class FormSessionMixin:
    """Load and store the FormSession of the current request."""

    def load_form(self) -> FormSession:
        return FormSession.load(self.request.session)

    def form_response(self, form: FormSession, outcome: Optional[EditResult] = None) -> Response:
        form.save(self.request.session)
        state = form.state
        body = {
            'activeAircraftType': form.active.value,
            'state': state.to_dict(),
            'result': state.result().to_dict(),
        }
        if outcome is not None:
            body['accepted'] = outcome.accepted
            body['rejection'] = outcome.rejection.value if outcome.rejection else None
        return Response(body)


class FormStateView(FormSessionMixin, APIView):
    """
    Current form state; ``?aircraftType=`` switches the active aircraft.

    GET /api/weightbalance/form/
    """

    def get(self, request):
        form = self.load_form()
        if 'aircraftType' in request.query_params:
            serializer = AircraftTypeSerializer(data=request.query_params)
            serializer.is_valid(raise_exception=True)
            form.switch(serializer.validated_data['aircraft_type'])
        return self.form_response(form)


class FormEditView(FormSessionMixin, APIView):
    """
    Apply one field edit and return the fully derived state.

    POST /api/weightbalance/form/edit
    """

    def post(self, request):
        serializer = FormEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        form = self.load_form()
        form.switch(data['aircraft_type'])
        outcome = form.edit(data['station'], data['field'], data['value'])
        return self.form_response(form, outcome)


class FormResetView(FormSessionMixin, APIView):
    """
    Restore one aircraft's defaults.

    POST /api/weightbalance/form/reset
    """

    def post(self, request):
        serializer = AircraftTypeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        form = self.load_form()
        form.reset(serializer.validated_data['aircraft_type'])
        form.switch(serializer.validated_data['aircraft_type'])
        return self.form_response(form)
