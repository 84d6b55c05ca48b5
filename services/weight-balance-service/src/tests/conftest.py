# services/weight-balance-service/src/tests/conftest.py
"""
Pytest Configuration and Fixtures
"""

import base64
import pytest

from rest_framework.test import APIClient


# Smallest valid PNG (1x1 transparent pixel)
TINY_PNG_B64 = (
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=='
)


@pytest.fixture
def api_client():
    """Return API test client."""
    return APIClient()


@pytest.fixture
def tiny_png():
    """Return raw PNG bytes."""
    return base64.b64decode(TINY_PNG_B64)


@pytest.fixture
def png_data_uri():
    """Return a PNG data URI as captured from a chart."""
    return 'data:image/png;base64,' + TINY_PNG_B64


@pytest.fixture
def c150_out_of_envelope_stations():
    """C-150 loading that sits forward of the envelope."""
    return {
        'basicEmpty': {'weight': '450', 'arm': '0.4'},
        'pilotPax': {'weight': '150'},
        'fuel': {'weight': '60'},
        'baggage1': {'weight': '20'},
    }


@pytest.fixture
def c150_stations():
    """C-150 loading inside the envelope with a planned fuel burn."""
    return {
        'basicEmpty': {'weight': '450', 'arm': '0.8'},
        'pilotPax': {'weight': '150'},
        'fuel': {'weight': '60'},
        'baggage1': {'weight': '20'},
        'fuelBurn': {'weight': '30'},
    }


@pytest.fixture
def c150_result(c150_stations):
    """Computed C-150 sheet."""
    from apps.core.services import calculate_sheet
    return calculate_sheet('C-150', c150_stations)


@pytest.fixture
def sheet_html():
    """Load sheet table markup as posted by the form."""
    return (
        '<div id="weight-balance-section"><table>'
        '<tr><th>DESCRIPTION</th><th>WEIGHT</th><th>ARM</th><th>MOMENT</th></tr>'
        '<tr><td>FUEL</td><td><input value="60"></td><td><input value="1.07"></td>'
        '<td><input value="64.2"></td></tr>'
        '<tr><td>TOTAL TAKEOFF WEIGHT</td><td><span>680</span></td><td></td>'
        '<td><span>602.7</span></td></tr>'
        '</table></div>'
    )


@pytest.fixture
def sample_sheet(db):
    """Create a stored sheet."""
    from apps.core.models import WeightBalanceSheet

    return WeightBalanceSheet.objects.create(
        pilot_name='J. Smith',
        route='ENGM-ENBR',
        registration='LN-ABC',
        aircraft_type='C-150',
        entries=[{'description': 'FUEL', 'weight': 60.0, 'arm': 1.07, 'moment': 64.2}],
        total_takeoff_weight=680.0,
        takeoff_cog=0.89,
        takeoff_moment=602.7,
    )
