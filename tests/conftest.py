"""Pytest fixtures: a fake Spotify HTTP session and a controllable clock."""

import pytest
from fastapi.testclient import TestClient

from track_proxy.main import create_app
from track_proxy.services.spotify_search_service import SpotifySearchClient
from track_proxy.services.spotify_token_service import CredentialBroker

CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"
START_MS = 1_700_000_000_000


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, headers=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text if text is not None else str(self._payload)
        self.headers = headers or {}

    def json(self):
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses and records calls."""

    def __init__(self):
        self.token_responses = []
        self.search_responses = []
        self.posts = []
        self.gets = []

    def post(self, url, data=None, headers=None, **kwargs):
        self.posts.append({"url": url, "data": data, "headers": headers})
        response = self.token_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, headers=None, params=None, **kwargs):
        self.gets.append({"url": url, "headers": headers, "params": params})
        response = self.search_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeClock:
    def __init__(self, now_ms=START_MS):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms

    def advance(self, seconds):
        self.now_ms += int(seconds * 1000)


def token_response(access_token="token-1", expires_in=3600):
    return FakeResponse(200, {
        "access_token": access_token,
        "token_type": "Bearer",
        "expires_in": expires_in,
    })


def make_track(track_id="0VjIjW4GlUZAMYd2vXMi3b", name="Blinding Lights", isrc="USUG11904206", images=True):
    album = {
        "name": "After Hours",
        "release_date": "2020-03-20",
        "images": [{"url": f"https://i.scdn.co/image/{track_id}", "height": 640, "width": 640}] if images else [],
    }
    track = {
        "id": track_id,
        "name": name,
        "artists": [{"id": "1Xyo4u8uXC1ZmMpatF05PJ", "name": "The Weeknd"}],
        "album": album,
        "popularity": 91,
        "preview_url": None,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "duration_ms": 200040,
        "explicit": False,
    }
    if isrc:
        track["external_ids"] = {"isrc": isrc}
    return track


def search_response(tracks, total=None, status_code=200):
    return FakeResponse(status_code, {
        "tracks": {
            "items": tracks,
            "total": len(tracks) if total is None else total,
        }
    })


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def broker(session, clock):
    return CredentialBroker(
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        token_url="https://accounts.example.test/api/token",
        http=session,
        clock=clock,
    )


@pytest.fixture
def search_client(broker):
    return SpotifySearchClient(broker, api_base="https://api.example.test/v1")


@pytest.fixture
def make_client(broker):
    def _make(environment="production"):
        app = create_app(broker=broker, environment=environment)
        return TestClient(app, raise_server_exceptions=False)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
