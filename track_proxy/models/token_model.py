# track_proxy/models/token_model.py
from pydantic import BaseModel

class CachedToken(BaseModel):
    value: str
    expires_at_ms: int   # epoch 毫秒，已扣掉安全邊際

    def is_valid(self, now_ms: int) -> bool:
        return now_ms < self.expires_at_ms
