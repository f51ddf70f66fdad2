"""Tests for the synchronous catalog client."""
import requests

from bookfinder.client import CatalogClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self._bad_json = bad_json
    
    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False
    
    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {}), timeout))
        if self.error:
            raise self.error
        return self.response
    
    def close(self):
        self.closed = True


def make_client(session, **kwargs):
    client = CatalogClient(base_url="https://books.test/v1/", **kwargs)
    client.session = session
    return client


def test_search_request_shape():
    """Test search hits the volumes endpoint with the result cap."""
    session = FakeSession(FakeResponse(payload={"items": []}))
    client = make_client(session, timeout=5)
    
    assert client.search("dune", max_results=40) == {"items": []}
    
    url, params, timeout = session.calls[0]
    assert url == "https://books.test/v1/volumes"
    assert params == {"q": "dune", "maxResults": 9}
    assert timeout == 5


def test_api_key_sent():
    """Test the optional API key is passed as a query parameter."""
    session = FakeSession(FakeResponse(payload={}))
    client = make_client(session, api_key="secret")
    
    client.get_volume("abc")
    
    assert session.calls[0][1] == {"key": "secret"}


def test_get_volume_url():
    """Test volume ids are placed in the path."""
    session = FakeSession(FakeResponse(payload={"volumeInfo": {}}))
    client = make_client(session)
    
    assert client.get_volume("zyTCAlFPjgYC") == {"volumeInfo": {}}
    assert session.calls[0][0] == "https://books.test/v1/volumes/zyTCAlFPjgYC"


def test_blank_query_not_sent():
    """Test whitespace-only queries skip the request."""
    session = FakeSession(FakeResponse(payload={}))
    client = make_client(session)
    
    assert client.search("   ") is None
    assert session.calls == []


def test_non_2xx_is_no_data():
    """Test error statuses are reported as None."""
    client = make_client(FakeSession(FakeResponse(status_code=503)))
    assert client.search("dune") is None


def test_malformed_json_is_no_data():
    """Test unparseable bodies are reported as None."""
    client = make_client(FakeSession(FakeResponse(bad_json=True)))
    assert client.get_volume("abc") is None


def test_network_error_is_no_data():
    """Test connection failures and timeouts are reported as None."""
    client = make_client(FakeSession(error=requests.exceptions.ConnectionError("down")))
    assert client.search("dune") is None
    
    client = make_client(FakeSession(error=requests.exceptions.Timeout("slow")))
    assert client.search("dune") is None


def test_context_manager_closes_session():
    """Test the session is closed on exit."""
    session = FakeSession()
    with make_client(session):
        pass
    assert session.closed
