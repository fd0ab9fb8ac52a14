# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for application content endpoints.
"""

from services.data_provider import DataLoadError, DataProvider, JsonFileDataProvider, StaticDataProvider


class BrokenProvider(DataProvider):
    def load(self):
        raise DataLoadError("Application data file is not valid JSON: Expecting value")


class TestApplicationContentEndpoint:
    """Test GET /api/application-content."""

    def test_full_snapshot(self, client):
        response = client.get('/api/application-content')

        body = response.get_json()
        assert response.status_code == 200
        assert [entry['language'] for entry in body['staticTexts']] == ['Ro', 'En']
        assert body['staticTexts'][0]['generalInfo'] == 'Informații generale'
        assert len(body['pollingStationsInfo']) == 5
        assert body['pollingStationsInfo'][4]['number'] == '28'
        assert 'loadedAt' in body


class TestLanguagesEndpoint:

    def test_languages(self, client):
        response = client.get('/api/application-content/languages')

        body = response.get_json()
        assert body['languages'] == ['Ro', 'En']
        assert body['defaultLanguage'] == 'Ro'
        assert body['_links']['En']['href'] == 'https://api.example.com/api/application-content/En'


class TestStaticDataEndpoint:

    def test_known_language(self, client):
        response = client.get('/api/application-content/En')

        body = response.get_json()
        assert response.status_code == 200
        assert body['generalInfo'] == 'General information'
        assert body['votersGuide']['title'] == 'Voter guide'

    def test_unknown_language(self, client):
        response = client.get('/api/application-content/Fr')

        assert response.status_code == 404
        assert response.get_json()['detail'] == "No content available for language 'Fr'"


class TestReloadEndpoint:
    """Test POST /api/application-content/reload."""

    def test_reload(self, client, app, sample_payload):
        sample_payload['staticTexts'].append({'language': 'Hu', 'generalInfo': 'Általános információk'})
        app.data_store.provider = StaticDataProvider(sample_payload)

        response = client.post('/api/application-content/reload')

        body = response.get_json()
        assert response.status_code == 200
        assert body['languages'] == ['Ro', 'En', 'Hu']
        assert body['pollingStations'] == 5
        assert client.get('/api/application-content/Hu').status_code == 200

    def test_failed_reload_keeps_serving_previous_data(self, client, app):
        app.data_store.provider = BrokenProvider()

        response = client.post('/api/application-content/reload')

        body = response.get_json()
        assert response.status_code == 503
        assert body['detail'] == 'Reload failed: Application data file is not valid JSON: Expecting value'
        assert client.get('/api/application-content/languages').get_json()['languages'] == ['Ro', 'En']

    def test_undecodable_file_reload_is_unavailable(self, client, app, tmp_path):
        path = tmp_path / "application_data.json"
        path.write_bytes(b'\xff\xfe garbage')
        app.data_store.provider = JsonFileDataProvider(path)

        response = client.post('/api/application-content/reload')

        assert response.status_code == 503
        assert response.get_json()['detail'] == 'Reload failed: Application data file is not valid UTF-8 text'
        assert client.get('/api/application-content/En').status_code == 200


class TestDataVersionHeader:

    def test_header_tracks_snapshot(self, client, app):
        response = client.get('/api/application-content/languages')

        assert response.headers['X-Data-Loaded-At'] == app.data_store.snapshot.loaded_at.isoformat()
