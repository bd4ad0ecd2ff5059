# track_proxy/services/spotify_token_service.py
import base64
import logging
import time
from typing import Callable, Optional

import requests

from track_proxy.config import settings
from track_proxy.models.token_model import CachedToken
from track_proxy.services.errors import AuthError

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CredentialBroker:
    """
    Client Credentials flow 的 token 快取。

    - acquire_token()：快取內且未過期 → 直接回傳，不打 Spotify
    - 過期 / 沒有 → 跟 Spotify 換一個新的並存起來
    - invalidate()：Spotify 回 401 時由呼叫端清掉快取

    沒有加 lock：同時 cache miss 最多多換幾次 token，不影響正確性。
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        http=None,
        clock: Callable[[], int] = _now_ms,
        margin_seconds: int = settings.TOKEN_EXPIRY_MARGIN_SECONDS,
    ):
        self.client_id = client_id if client_id is not None else settings.SPOTIFY_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.SPOTIFY_CLIENT_SECRET
        self.token_url = token_url or settings.SPOTIFY_TOKEN_URL
        self.http = http or requests.Session()
        self.clock = clock
        self.margin_seconds = margin_seconds
        self._cached: Optional[CachedToken] = None

    @property
    def cached(self) -> Optional[CachedToken]:
        return self._cached

    def invalidate(self) -> None:
        self._cached = None

    def _basic_auth_header(self) -> str:
        auth_string = f"{self.client_id}:{self.client_secret}"
        return "Basic " + base64.b64encode(auth_string.encode()).decode()

    def acquire_token(self) -> str:
        if self._cached and self._cached.is_valid(self.clock()):
            return self._cached.value

        headers = {
            "Authorization": self._basic_auth_header(),
            "Content-Type": "application/x-www-form-urlencoded",
        }

        try:
            r = self.http.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                headers=headers,
            )
        except requests.RequestException as e:
            self._cached = None
            logger.error(f"Error obtaining Spotify token: {e}")
            raise AuthError("Failed to authenticate with Spotify API", detail=str(e))

        if not 200 <= r.status_code < 300:
            self._cached = None
            logger.error(f"Error obtaining Spotify token: {r.status_code} {r.text}")
            raise AuthError("Failed to authenticate with Spotify API", detail=r.text)

        token_data = r.json()
        if "access_token" not in token_data:
            self._cached = None
            raise AuthError("Failed to authenticate with Spotify API", detail=r.text)

        issued_at = self.clock()
        # 提早 5 分鐘視為過期
        expires_at = issued_at + (int(token_data["expires_in"]) - self.margin_seconds) * 1000

        self._cached = CachedToken(
            value=token_data["access_token"],
            expires_at_ms=expires_at,
        )
        logger.info("Spotify token obtained successfully")
        return self._cached.value
