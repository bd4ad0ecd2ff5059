# track_proxy/services/spotify_search_service.py
import logging
from typing import Dict, Optional, Union

import requests

from track_proxy.config import settings
from track_proxy.services.errors import AuthError, RateLimitError, UnexpectedError
from track_proxy.services.spotify_token_service import CredentialBroker

logger = logging.getLogger(__name__)


class SearchOk:
    def __init__(self, data: Dict):
        self.data = data


class UnauthorizedUpstream:
    """Spotify 回 401：token 被拒絕，需要換新 token 再試一次"""

    def __init__(self, body: str = ""):
        self.body = body


SearchOutcome = Union[SearchOk, UnauthorizedUpstream]


class SpotifySearchClient:
    def __init__(self, broker: CredentialBroker, api_base: Optional[str] = None, http=None):
        self.broker = broker
        self.api_base = api_base or settings.SPOTIFY_API_BASE
        self.http = http or broker.http

    def _search_once(self, access_token: str, params: Dict) -> SearchOutcome:
        url = f"{self.api_base}/search"
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            r = self.http.get(url, headers=headers, params=params)
        except requests.RequestException as e:
            raise UnexpectedError("Could not reach Spotify API", detail=str(e))

        if r.status_code == 401:
            return UnauthorizedUpstream(r.text)

        if r.status_code == 429:
            raise RateLimitError(retry_after=r.headers.get("Retry-After"))

        if r.status_code != 200:
            raise UnexpectedError(
                "Spotify API returned an error",
                detail=f"Spotify error {r.status_code}: {r.text}",
            )

        return SearchOk(r.json())

    def search(self, query: str, type: str = "track", limit: int = 10) -> Dict:
        """
        打 Spotify /search，token 被拒絕時只重試一次：

        1. broker 拿 token → 呼叫
        2. 401 → 清掉快取、換新 token、再呼叫一次
        3. 還是 401 → AuthError，不再重試
        """
        params = {"q": query, "type": type, "limit": limit}

        outcome = self._search_once(self.broker.acquire_token(), params)

        if isinstance(outcome, UnauthorizedUpstream):
            logger.warning("Spotify rejected cached token, refreshing and retrying once")
            self.broker.invalidate()
            outcome = self._search_once(self.broker.acquire_token(), params)

        if isinstance(outcome, UnauthorizedUpstream):
            self.broker.invalidate()
            raise AuthError(
                "Spotify API rejected a freshly issued token",
                detail=outcome.body,
                status_code=401,
            )

        return outcome.data
