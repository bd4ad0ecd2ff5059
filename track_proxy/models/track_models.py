# track_proxy/models/track_models.py
from pydantic import BaseModel, Field
from typing import Optional, List

# 前端拿到的單首歌格式（Spotify track 的精簡版）
class TrackRecord(BaseModel):
    id: str
    name: str
    artists: List[str] = Field(..., description="Artist names in Spotify's order")
    album: Optional[str] = None
    album_image: Optional[str] = Field(None, description="First (largest) album image URL")
    popularity: int
    preview_url: Optional[str] = None
    spotify_url: str
    isrc: Optional[str] = None
    duration_ms: int
    release_date: Optional[str] = None
    explicit: bool

class SearchResponse(BaseModel):
    total: int = Field(..., description="Spotify 回報的總筆數")
    limit: int
    items: List[TrackRecord]

class HealthResponse(BaseModel):
    status: str
    timestamp: int   # epoch ms
    environment: str
    version: str
