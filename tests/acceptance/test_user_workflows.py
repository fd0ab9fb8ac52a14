"""
Acceptance tests for Vot Romania.

Walks the citizen journeys end to end: the web client loads application
content from the API, switches language and looks up the polling station
for an address.
"""

import os
from urllib.parse import urlsplit

import pytest

os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('OTEL_ENABLED', 'false')

from app import create_app
from services.api_client import VotRomaniaClient
from services.content_session import ContentSession
from services.data_provider import StaticDataProvider
from services.data_store import ApplicationDataStore

BASE_URL = 'https://api.example.com'

APPLICATION_DATA = {
    "staticTexts": [
        {
            "language": "Ro",
            "generalInfo": "Alegerile au loc duminică, între orele 7 și 21.",
            "votersGuide": {
                "title": "Ghidul alegătorului",
                "sections": [
                    {"title": "La secția de votare", "steps": ["Prezintă actul de identitate", "Semnează în listă"]}
                ]
            }
        },
        {
            "language": "En",
            "generalInfo": "Elections are held on Sunday, between 7 AM and 9 PM.",
            "votersGuide": {
                "title": "Voter guide",
                "sections": [
                    {"title": "At the polling station", "steps": ["Show your ID", "Sign the list"]}
                ]
            }
        }
    ],
    "pollingStationsInfo": [
        {
            "id": "B-S1-002",
            "pollingStationNumber": "2",
            "county": "București",
            "locality": "Sector 1",
            "street": "Calea Victoriei",
            "number": "155"
        },
        {
            "id": "B-S1-001",
            "pollingStationNumber": "1",
            "county": "București",
            "locality": "Sector 1",
            "street": "Calea Victoriei",
            "number": "10",
            "institution": "Colegiul Național Gheorghe Lazăr"
        },
        {
            "id": "IS-001",
            "pollingStationNumber": "1",
            "county": "Iași",
            "locality": "Iași",
            "street": "Bulevardul Ștefan cel Mare și Sfânt",
            "number": "1"
        }
    ]
}


class FlaskTestSession:
    """Routes the HTTP client's requests into a Flask test client."""

    class Response:
        def __init__(self, response):
            self.status_code = response.status_code
            self._payload = response.get_json(silent=True)

        def json(self):
            if self._payload is None:
                raise ValueError("Response body is not JSON")
            return self._payload

    def __init__(self, test_client):
        self.test_client = test_client

    def get(self, url, params=None, timeout=None):
        return self.Response(self.test_client.get(urlsplit(url).path, query_string=params))


@pytest.fixture
def app():
    store = ApplicationDataStore(StaticDataProvider(APPLICATION_DATA))
    application = create_app(
        {
            'TESTING': True,
            'ENVIRONMENT': 'test',
            'OTEL_ENABLED': False,
            'BASE_URL': BASE_URL,
            'SEARCH_STRATEGY': 'indexed',
            'DATA_RELOAD_INTERVAL_SECONDS': 0
        },
        data_store=store
    )
    return application


@pytest.fixture
def api_client(app):
    with app.test_client() as test_client:
        yield VotRomaniaClient(BASE_URL, session=FlaskTestSession(test_client))


class TestLanguageSwitchingJourney:
    """A citizen opens the app and reads the guide in another language."""

    def test_content_follows_selected_language(self, api_client):
        session = ContentSession()

        state = session.load(api_client.fetch_snapshot)
        assert state.selected_language == "Ro"
        assert state.general_info == "Alegerile au loc duminică, între orele 7 și 21."
        assert state.voting_guide.title == "Ghidul alegătorului"
        assert state.languages == ("Ro", "En")

        state = session.change_language("En")
        assert state.selected_language == "En"
        assert state.general_info == "Elections are held on Sunday, between 7 AM and 9 PM."
        assert state.voting_guide.sections[0].steps == ("Show your ID", "Sign the list")

        unchanged = session.change_language("Fr")
        assert unchanged is state
        assert unchanged.selected_language == "En"

    def test_reload_keeps_selected_language(self, api_client):
        session = ContentSession()
        session.load(api_client.fetch_snapshot)
        session.change_language("En")

        state = session.load(api_client.fetch_snapshot)

        assert state.selected_language == "En"
        assert state.general_info == "Elections are held on Sunday, between 7 AM and 9 PM."

    def test_unavailable_server_keeps_displayed_content(self, app, api_client):
        session = ContentSession()
        session.load(api_client.fetch_snapshot)

        app.data_store._snapshot = None
        app.data_store.last_error = "Application data has not been loaded"
        state = session.load(api_client.fetch_snapshot)

        assert state.error == "Application data has not been loaded"
        assert state.general_info == "Alegerile au loc duminică, între orele 7 și 21."


class TestPollingStationLookupJourney:
    """A citizen types an address and finds where to vote."""

    def test_free_form_address(self, api_client):
        items = api_client.search_polling_stations(q="Calea Victoriei nr. 10, Sector 1")

        assert [item["id"] for item in items] == ["B-S1-001", "B-S1-002"]
        assert items[0]["exact"] is True
        assert items[0]["institution"] == "Colegiul Național Gheorghe Lazăr"
        assert items[1]["matchLevel"] == "street"

    def test_address_without_diacritics(self, api_client):
        items = api_client.search_polling_stations(
            locality="iasi", street="bulevardul stefan cel mare si sfant", number="1"
        )

        assert [item["id"] for item in items] == ["IS-001"]

    def test_unknown_address(self, api_client):
        assert api_client.search_polling_stations(locality="Cluj-Napoca") == []
