"""Tests for request-level checks, error shaping and service plumbing."""

from digipin.abstractions.types import Failure
from digipin.api import failure_to_api_error
from digipin.grid_systems import try_decode, try_encode


class TestContentType:
    """Test the JSON content-type requirement on POST routes."""

    def test_wrong_content_type(self, client, api_url):
        response = client.post(
            api_url('/encode'),
            content='latitude=28.6&longitude=77.2',
            headers={'Content-Type': 'application/x-www-form-urlencoded'}
        )

        assert response.status_code == 415
        body = response.json()
        assert body['code'] == 'INVALID_CONTENT_TYPE'
        assert body['receivedContentType'] == 'application/x-www-form-urlencoded'
        assert body['expectedContentType'] == 'application/json'

    def test_missing_content_type(self, client, api_url):
        response = client.post(api_url('/decode'), content=b'{}')

        assert response.status_code == 415
        assert response.json()['receivedContentType'] == 'none'

    def test_charset_suffix_allowed(self, client, api_url):
        response = client.post(
            api_url('/decode'),
            content='{"digipin": "39J-438-TJC7"}',
            headers={'Content-Type': 'application/json; charset=utf-8'}
        )

        assert response.status_code == 200

    def test_get_not_checked(self, client, api_url):
        response = client.get(api_url('/encode'), params={'latitude': 20, 'longitude': 80})

        assert response.status_code == 200


class TestJsonBody:
    """Test malformed and non-object bodies."""

    def test_malformed_json(self, client, api_url):
        response = client.post(
            api_url('/encode'),
            content='{"latitude": 28.6,',
            headers={'Content-Type': 'application/json'}
        )

        assert response.status_code == 400
        body = response.json()
        assert body['code'] == 'INVALID_JSON_SYNTAX'
        assert body['details'] == 'Ensure your JSON is properly formatted with correct syntax'

    def test_array_body(self, client, api_url):
        response = client.post(api_url('/decode'), json=['39J-438-TJC7'])

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_JSON_BODY'


class TestErrorShape:
    """Test the common error body and HTTP-level errors."""

    def test_every_error_has_error_and_code(self, client, api_url):
        responses = [
            client.post(api_url('/encode'), json={}),
            client.get(api_url('/decode')),
            client.post(api_url('/decode'), json={'digipin': 'XYZ'}),
        ]

        for response in responses:
            body = response.json()
            assert isinstance(body['error'], str)
            assert isinstance(body['code'], str)

    def test_unknown_route(self, client):
        response = client.get('/api/digipin/unknown')

        assert response.status_code == 404
        assert response.json()['code'] == 'NOT_FOUND'

    def test_wrong_method(self, client, api_url):
        response = client.delete(api_url('/encode'))

        assert response.status_code == 405
        assert response.json()['code'] == 'METHOD_NOT_ALLOWED'


class TestFailureMapping:
    """Test the core-failure to response mapping."""

    def test_each_kind_has_distinct_code(self):
        failures = [
            try_encode(50.0, 80.0),
            try_encode(20.0, 120.0),
            try_decode('39J'),
            try_decode('39J-438-TJCZ'),
        ]
        codes = set()
        for outcome in failures:
            assert isinstance(outcome, Failure)
            error = failure_to_api_error(outcome)
            assert error.status_code == 400
            codes.add(error.code)

        assert codes == {
            'LATITUDE_OUT_OF_RANGE', 'LONGITUDE_OUT_OF_RANGE',
            'INVALID_DIGIPIN_LENGTH', 'INVALID_DIGIPIN_CHARACTER'
        }


class TestServicePlumbing:
    """Test docs, CORS and request ids."""

    def test_docs_served(self, client):
        response = client.get('/api-docs')

        assert response.status_code == 200
        assert 'text/html' in response.headers['content-type']

    def test_openapi_lists_routes(self, client):
        schema = client.get('/api-docs/openapi.json').json()

        assert '/api/digipin/encode' in schema['paths']
        assert '/api/digipin/decode' in schema['paths']
        assert set(schema['paths']['/api/digipin/encode']) == {'get', 'post'}

    def test_cors_header(self, client, api_url):
        response = client.get(
            api_url('/decode'),
            params={'digipin': '39J-438-TJC7'},
            headers={'Origin': 'https://example.org'}
        )

        assert response.headers['access-control-allow-origin'] == '*'

    def test_request_id_echoed(self, client, api_url):
        response = client.get(
            api_url('/decode'),
            params={'digipin': '39J-438-TJC7'},
            headers={'X-Request-ID': 'trace-123'}
        )

        assert response.headers['x-request-id'] == 'trace-123'

    def test_request_id_generated(self, client, api_url):
        response = client.get(api_url('/decode'), params={'digipin': '39J-438-TJC7'})

        assert response.headers['x-request-id']
