# services/weight-balance-service/src/tests/test_client.py
"""
HTTP Client Tests
"""

import asyncio
import inspect
import json
import pytest

import httpx

from apps.core.services import parse_sheet_table, render_charts
from shared.common import clients
from shared.common.clients import WeightBalanceClient, WeightBalanceClientError

BASE_URL = 'http://weight-balance.test'


def sheet_charts(result):
    charts = render_charts(result)
    return [charts['envelope'], charts['loading']]


def make_client(handler, requests=None, chart_renderer=None):
    def record(request):
        if requests is not None:
            requests.append(request)
        return handler(request)

    return WeightBalanceClient(
        base_url=BASE_URL, transport=httpx.MockTransport(record), chart_renderer=chart_renderer
    )


class TestSheetCalls:
    """Tests for save and list."""

    def test_save_sheet(self, c150_result):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json={'message': 'Saved', 'id': 'abc'}), requests)

        sheet_id = asyncio.run(client.save_sheet(c150_result, pilot_name='J. Smith', date='2024-05-01'))

        assert sheet_id == 'abc'
        request = requests[0]
        assert request.method == 'POST'
        assert request.url.path == '/api/weightbalance/save'
        assert request.headers['X-Source-Service'] == 'weight-balance-service'
        body = json.loads(request.content)
        assert body['aircraftType'] == 'C-150'
        assert body['pilotName'] == 'J. Smith'
        assert body['totalTakeoffWeight'] == 680.0

    def test_save_record_dict(self):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json={'id': 'xyz'}), requests)

        assert asyncio.run(client.save_sheet({'route': 'ENGM-ENBR'})) == 'xyz'
        assert json.loads(requests[0].content) == {'route': 'ENGM-ENBR'}

    def test_save_failure(self, c150_result):
        client = make_client(lambda r: httpx.Response(500, json={'message': 'Error saving sheet'}))

        with pytest.raises(WeightBalanceClientError) as exc_info:
            asyncio.run(client.save_sheet(c150_result))

        assert exc_info.value.message == 'Failed to save sheet.'
        assert exc_info.value.status_code == 500

    def test_save_connection_error(self, c150_result):
        def refuse(request):
            raise httpx.ConnectError('refused', request=request)

        client = make_client(refuse)

        with pytest.raises(WeightBalanceClientError) as exc_info:
            asyncio.run(client.save_sheet(c150_result))

        assert exc_info.value.message == 'Failed to save sheet.'
        assert exc_info.value.status_code is None

    def test_list_sheets(self):
        client = make_client(lambda r: httpx.Response(200, json=[{'id': 'a'}, {'id': 'b'}]))

        assert [s['id'] for s in asyncio.run(client.list_sheets())] == ['a', 'b']


class TestPDFCalls:
    """Tests for PDF download and email requests."""

    def test_render_sheet_html(self, c150_result):
        html = WeightBalanceClient(base_url=BASE_URL).render_sheet_html(c150_result)
        rows = parse_sheet_table(html)

        assert rows[0] == ['DESCRIPTION', 'WEIGHT (KGS)', 'ARM (MTS.)', 'MOMENT (MTS.KG)']
        assert ['FUEL', '60', '1.07', '64.2'] in rows
        assert ['TOTAL TAKEOFF WEIGHT', '680', '0.89', '602.7'] in rows
        assert ['EST FUEL BURN OFF 14 KGS/HR', '30', '1.07', '32.1'] in rows
        assert ['LANDING WEIGHT', '650', '0.88', '570.6'] in rows
        assert ['TAKEOFF C.O.G.', 'WITHIN ENVELOPE', '-', '-'] in rows

    def test_download_pdf(self, c150_result):
        requests = []
        client = make_client(
            lambda r: httpx.Response(200, content=b'%PDF-1.4', headers={'Content-Type': 'application/pdf'}),
            requests,
        )

        content = asyncio.run(client.download_pdf(c150_result, graph_images=[], date='2024-05-01'))

        assert content == b'%PDF-1.4'
        body = json.loads(requests[0].content)
        assert requests[0].url.path == '/api/generate-pdf'
        assert body['download'] is True
        assert body['date'] == '2024-05-01'
        assert body['graphImages'] == []
        assert 'email' not in body

    def test_send_pdf_renders_charts(self, c150_result):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json={'success': True}), requests, sheet_charts)

        asyncio.run(client.send_pdf(c150_result, 'pilot@example.com'))

        body = json.loads(requests[0].content)
        assert body['email'] == 'pilot@example.com'
        assert body['download'] is False
        assert len(body['graphImages']) == 2
        assert all(image.startswith('data:image/png;base64,') for image in body['graphImages'])

    def test_send_pdf_without_chart_renderer(self, c150_result):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json={'success': True}), requests)

        asyncio.run(client.send_pdf(c150_result, 'pilot@example.com'))

        assert json.loads(requests[0].content)['graphImages'] == []

    def test_client_module_independent_of_service_apps(self):
        source = inspect.getsource(clients)

        assert 'from apps' not in source
        assert 'import apps' not in source

    def test_send_pdf_rate_limited(self, c150_result):
        client = make_client(lambda r: httpx.Response(
            429, json={'success': False, 'message': 'Email rate limit exceeded. Please try again later.'}
        ))

        with pytest.raises(WeightBalanceClientError) as exc_info:
            asyncio.run(client.send_pdf(c150_result, 'pilot@example.com', graph_images=[]))

        assert exc_info.value.status_code == 429
        assert exc_info.value.message == 'Email rate limit exceeded. Please try again later.'
        assert exc_info.value.retryable

    def test_send_pdf_bad_payload_not_retryable(self, c150_result):
        client = make_client(lambda r: httpx.Response(400, text='bad'))

        with pytest.raises(WeightBalanceClientError) as exc_info:
            asyncio.run(client.send_pdf(c150_result, 'pilot@example.com', graph_images=[]))

        assert exc_info.value.message == 'Failed to generate PDF.'
        assert not exc_info.value.retryable
