# shared/common/clients.py
"""
Weight & Balance HTTP Client

Async client used to store sheets and request PDFs from the
weight & balance service.
"""

import os
import httpx
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from django.conf import settings
from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')


class WeightBalanceClientError(Exception):
    """
    Raised when a call to the service fails.

    ``message`` is safe to show to the user; the call may be retried by
    resubmitting, nothing is retried automatically.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, retryable: bool = True):
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)


def _number_filter(value) -> str:
    if value is None or value == '':
        return ''
    value = Decimal(str(value))
    text = format(value.quantize(Decimal('0.01')), 'f')
    return text.rstrip('0').rstrip('.') if '.' in text else text


# =============================================================================
# BASE SERVICE CLIENT
# =============================================================================

class BaseServiceClient:
    """
    Base class for HTTP communication with a service.
    """

    def __init__(
        self,
        service_name: str,
        base_url: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.service_name = service_name
        self.base_url = (base_url or self._get_service_url(service_name)).rstrip('/')
        self.timeout = httpx.Timeout(30.0, connect=5.0)
        self.transport = transport

    def _get_service_url(self, service_name: str) -> str:
        """Get service URL from settings"""
        service_urls = getattr(settings, 'SERVICE_URLS', {})
        return service_urls.get(service_name, f'http://{service_name}:5000')

    def _get_headers(self, extra_headers: Dict = None) -> Dict:
        """Build request headers"""
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'X-Source-Service': getattr(settings, 'SERVICE_NAME', 'unknown'),
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Dict = None,
        data: Any = None,
        headers: Dict = None
    ) -> httpx.Response:
        """Make HTTP request to service; raises on 4xx/5xx"""
        url = f"{self.base_url}{path}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=data,
                    headers=self._get_headers(headers)
                )
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"HTTP error calling {self.service_name}: {e.response.status_code}",
                    extra={'url': url, 'status_code': e.response.status_code}
                )
                raise
            except httpx.RequestError as e:
                logger.error(f"Request error calling {self.service_name}: {e}")
                raise


# =============================================================================
# WEIGHT & BALANCE CLIENT
# =============================================================================

class WeightBalanceClient(BaseServiceClient):
    """Client for the weight & balance service."""

    SAVE_FAILED_MESSAGE = "Failed to save sheet."
    FETCH_FAILED_MESSAGE = "Failed to fetch sheets."
    PDF_FAILED_MESSAGE = "Failed to generate PDF."

    def __init__(
        self,
        base_url: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        chart_renderer: Optional[Callable[[Any], Sequence[str]]] = None,
    ):
        super().__init__('weight-balance-service', base_url=base_url, transport=transport)
        self.jinja_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(['html']),
        )
        self.jinja_env.filters['number'] = _number_filter
        self.chart_renderer = chart_renderer

    @staticmethod
    def _error_message(exc: Exception, default: str) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            try:
                body = exc.response.json()
            except ValueError:
                return default
            if isinstance(body, dict) and body.get('message'):
                return str(body['message'])
        return default

    @staticmethod
    def _status_code(exc: Exception) -> Optional[int]:
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code
        return None

    # ==========================================================================
    # Sheets
    # ==========================================================================

    async def save_sheet(self, sheet, **metadata) -> str:
        """
        Store a sheet.

        Args:
            sheet: SheetResult (converted with ``to_record``) or a record dict
            **metadata: date, pilot_name, route, registration, prepared_by,
                license_no when ``sheet`` is a SheetResult

        Returns:
            Identifier assigned by the service

        Raises:
            WeightBalanceClientError: With the user-facing "Failed to save sheet."
        """
        if hasattr(sheet, 'to_record'):
            metadata.setdefault('date', datetime.now(timezone.utc).isoformat())
            record = sheet.to_record(**metadata)
        else:
            record = dict(sheet)

        try:
            response = await self._request('POST', '/api/weightbalance/save', data=record)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            raise WeightBalanceClientError(self.SAVE_FAILED_MESSAGE, self._status_code(e)) from e
        return response.json()['id']

    async def list_sheets(self) -> List[Dict]:
        try:
            response = await self._request('GET', '/api/weightbalance/')
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            raise WeightBalanceClientError(self.FETCH_FAILED_MESSAGE, self._status_code(e)) from e
        return response.json()

    # ==========================================================================
    # PDF / Email
    # ==========================================================================

    def render_sheet_html(self, result) -> str:
        """Load sheet table markup in the shape the PDF endpoint parses."""
        template = self.jinja_env.get_template('load_sheet.html')
        return template.render(
            result=result,
            units=result.config.unit_labels,
            load_stations=result.load_stations,
            fuel_burn=result.fuel_burn,
            fuel_burn_label=result.config.fuel_burn_label,
        )

    def _default_graph_images(self, result) -> List[str]:
        if self.chart_renderer is None:
            return []
        return list(self.chart_renderer(result))

    def _pdf_payload(
        self,
        result,
        graph_images: Optional[Sequence[Optional[str]]],
        date: Optional[str],
        pilot_name: str,
        route: str,
        registration: str,
    ) -> Dict[str, Any]:
        if graph_images is None:
            graph_images = self._default_graph_images(result)
        return {
            'html': self.render_sheet_html(result),
            'aircraftType': result.aircraft_type.value,
            'date': date or datetime.now(timezone.utc).strftime('%Y-%m-%d'),
            'graphImages': list(graph_images),
            'pilotName': pilot_name,
            'route': route,
            'registration': registration,
        }

    async def send_pdf(
        self,
        result,
        email: str,
        graph_images: Optional[Sequence[Optional[str]]] = None,
        date: Optional[str] = None,
        pilot_name: str = '',
        route: str = '',
        registration: str = '',
    ) -> Dict:
        """
        Ask the service to email the sheet PDF.

        Raises:
            WeightBalanceClientError: With the service's message and status
                code (400 payload, 401 credentials, 429 rate limit, 500)
        """
        payload = self._pdf_payload(result, graph_images, date, pilot_name, route, registration)
        payload['email'] = email
        payload['download'] = False
        try:
            response = await self._request('POST', '/api/generate-pdf', data=payload)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            status_code = self._status_code(e)
            raise WeightBalanceClientError(
                self._error_message(e, self.PDF_FAILED_MESSAGE),
                status_code,
                retryable=status_code in (None, 429) or (status_code or 0) >= 500,
            ) from e
        return response.json()

    async def download_pdf(
        self,
        result,
        graph_images: Optional[Sequence[Optional[str]]] = None,
        date: Optional[str] = None,
        pilot_name: str = '',
        route: str = '',
        registration: str = '',
    ) -> bytes:
        payload = self._pdf_payload(result, graph_images, date, pilot_name, route, registration)
        payload['download'] = True
        try:
            response = await self._request(
                'POST', '/api/generate-pdf', data=payload, headers={'Accept': 'application/pdf'}
            )
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            raise WeightBalanceClientError(
                self._error_message(e, self.PDF_FAILED_MESSAGE), self._status_code(e)
            ) from e
        return response.content
