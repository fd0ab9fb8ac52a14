# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'

from app import create_app
from models.entities import ApplicationDataSnapshot
from services.data_provider import StaticDataProvider
from services.data_store import ApplicationDataStore


@pytest.fixture
def sample_static_texts():
    """Static texts in two languages."""
    return [
        {
            "language": "Ro",
            "generalInfo": "Informații generale",
            "votersGuide": {
                "title": "Ghidul alegătorului",
                "sections": [
                    {"title": "Înainte de vot", "steps": ["Verifică secția", "Ia buletinul"]}
                ]
            }
        },
        {
            "language": "En",
            "generalInfo": "General information",
            "votersGuide": {
                "title": "Voter guide",
                "sections": [
                    {"title": "Before voting", "steps": ["Check your station", "Bring your ID"]}
                ]
            }
        }
    ]


@pytest.fixture
def sample_polling_stations():
    """Polling stations covering exact, street-only and locality-only matches."""
    return [
        {
            "id": "st-street-only",
            "pollingStationNumber": "2",
            "county": "București",
            "locality": "Sector 1",
            "street": "Calea Victoriei",
            "number": "155",
            "institution": "Școala Gimnazială nr. 1"
        },
        {
            "id": "st-locality-only",
            "pollingStationNumber": "3",
            "county": "București",
            "locality": "Sector 1",
            "street": "Strada Ion Câmpineanu",
            "number": "22"
        },
        {
            "id": "st-exact",
            "pollingStationNumber": "1",
            "county": "București",
            "locality": "Sector 1",
            "street": "Calea Victoriei",
            "number": "10",
            "institution": "Colegiul Național Gheorghe Lazăr",
            "capacity": 1800
        },
        {
            "id": "st-other-sector",
            "pollingStationNumber": "45",
            "county": "București",
            "locality": "Sector 3",
            "street": "Calea Victoriei",
            "number": "10"
        },
        {
            "id": "st-cluj",
            "pollingStationNumber": "112",
            "county": "Cluj",
            "locality": "Cluj-Napoca",
            "street": "Strada Memorandumului",
            "number": 28
        }
    ]


@pytest.fixture
def sample_payload(sample_static_texts, sample_polling_stations):
    """Raw application data as stored on disk."""
    return {
        "staticTexts": sample_static_texts,
        "pollingStationsInfo": sample_polling_stations
    }


@pytest.fixture
def snapshot(sample_payload):
    """Validated application data snapshot."""
    return ApplicationDataSnapshot.model_validate(sample_payload)


@pytest.fixture
def data_store(sample_payload):
    """Data store with the sample snapshot loaded."""
    store = ApplicationDataStore(StaticDataProvider(sample_payload))
    store.reload()
    return store


@pytest.fixture
def app(data_store):
    """Application wired to the sample data."""
    application = create_app(
        {
            'TESTING': True,
            'ENVIRONMENT': 'test',
            'OTEL_ENABLED': False,
            'BASE_URL': 'https://api.example.com'
        },
        data_store=data_store
    )
    yield application
    data_store.stop_background_reload()


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client
