import csv
import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

HEADER = [
    'forecourts.node_id',
    'forecourts.trading_name',
    'forecourts.brand_name',
    'forecourts.location.address_line_1',
    'forecourts.location.address_line_2',
    'forecourts.location.city',
    'forecourts.location.county',
    'forecourts.location.postcode',
    'forecourts.location.latitude',
    'forecourts.location.longitude',
    'latest_update_timestamp',
    'forecourts.fuel_price.E5',
    'forecourts.fuel_price.E10',
    'forecourts.fuel_price.B7P',
    'forecourts.fuel_price.B7S',
    'forecourts.fuel_price.B10',
    'forecourts.fuel_price.HVO',
]

SAMPLE_ROWS = [
    {
        'forecourts.node_id': 'node-leeds',
        'forecourts.trading_name': 'Leeds Service Station',
        'forecourts.brand_name': 'Shell',
        'forecourts.location.address_line_1': '1 High St',
        'forecourts.location.city': 'Leeds',
        'forecourts.location.county': 'West Yorkshire',
        'forecourts.location.postcode': 'LS1 1AA',
        'forecourts.location.latitude': '53.8',
        'forecourts.location.longitude': '-1.55',
        'latest_update_timestamp': '2025-01-01T10:00:00',
        'forecourts.fuel_price.E5': "'152.9",
        'forecourts.fuel_price.E10': '142.9',
        'forecourts.fuel_price.B7S': '155.9',
    },
    {
        'forecourts.brand_name': 'BP',
        'forecourts.location.address_line_1': '2 Main Rd',
        'forecourts.location.city': 'York',
        'forecourts.location.postcode': 'YO1 7HH',
        'forecourts.location.latitude': '53.96',
        'forecourts.location.longitude': '-1.08',
        'forecourts.fuel_price.B7S': '148.9',
    },
    {
        'forecourts.node_id': 'node-nowhere',
        'forecourts.trading_name': 'No Location',
        'forecourts.brand_name': 'Esso',
        'forecourts.location.latitude': '',
        'forecourts.location.longitude': '-2.0',
        'forecourts.fuel_price.E10': '139.9',
    },
    {
        'forecourts.node_id': 'node-tesco',
        'forecourts.trading_name': 'Tesco Extra',
        'forecourts.brand_name': 'Tesco',
        'forecourts.location.city': 'Bristol',
        'forecourts.location.latitude': '51.45',
        'forecourts.location.longitude': '-2.59',
    },
]


def make_csv(rows):
    """Render forecourt rows as CSV text with the full export header."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=HEADER, restval='')
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


@pytest.fixture
def forecourt_csv():
    """
    CSV text with three located forecourts and one without coordinates.

    Returns:
        str: CSV content.
    """
    return make_csv(SAMPLE_ROWS)


@pytest.fixture
def csv_upload(forecourt_csv):
    """
    Fixture that wraps the sample CSV in an uploaded file.

    Returns:
        SimpleUploadedFile: 'prices.csv' upload.
    """
    return SimpleUploadedFile('prices.csv', forecourt_csv.encode('utf-8'), content_type='text/csv')


@pytest.fixture
def html_upload():
    """An HTML error page saved with a .csv name."""
    content = b'<!DOCTYPE html>\n<html><body>Sign in, please</body></html>'
    return SimpleUploadedFile('prices.csv', content, content_type='text/csv')


@pytest.fixture
def priced_csv():
    """
    CSV text with three forecourts priced 130p, 140p and 150p for E10.

    Returns:
        str: CSV content.
    """
    rows = [
        {
            'forecourts.node_id': f'node-{pence}',
            'forecourts.trading_name': f'Site {pence}',
            'forecourts.brand_name': 'Test Brand',
            'forecourts.location.latitude': '52.0',
            'forecourts.location.longitude': str(-1.0 - index),
            'forecourts.fuel_price.E10': str(pence),
        }
        for index, pence in enumerate([130, 140, 150])
    ]
    return make_csv(rows)
