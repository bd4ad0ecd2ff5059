# track_proxy/services/track_service.py
import re
from typing import Dict, Optional

from track_proxy.models.track_models import SearchResponse, TrackRecord
from track_proxy.services.errors import NotFoundError, ValidationError
from track_proxy.services.isrc import ISRC_FORMAT_HINT, is_valid_isrc, normalize_isrc
from track_proxy.services.spotify_search_service import SpotifySearchClient

MIN_LIMIT = 1
MAX_LIMIT = 50
DEFAULT_LIMIT = "10"
LIMIT_PATTERN = re.compile(r"[0-9]+")


def format_track(track: Dict) -> TrackRecord:
    album = track.get("album") or {}
    images = album.get("images") or []
    album_image = images[0]["url"] if images else None

    return TrackRecord(
        id=track["id"],
        name=track["name"],
        artists=[artist["name"] for artist in track.get("artists", [])],
        album=album.get("name"),
        album_image=album_image,
        popularity=track.get("popularity", 0),
        preview_url=track.get("preview_url"),
        spotify_url=(track.get("external_urls") or {}).get("spotify"),
        isrc=(track.get("external_ids") or {}).get("isrc"),
        duration_ms=track["duration_ms"],
        release_date=album.get("release_date"),
        explicit=track.get("explicit", False),
    )


def _track_items(data: Dict):
    tracks = data.get("tracks") or {}
    return tracks.get("items") or [], tracks.get("total", 0)


def parse_limit(limit: Optional[str]) -> int:
    if limit is None:
        limit = DEFAULT_LIMIT

    text = str(limit).strip()
    try:
        parsed = int(text) if LIMIT_PATTERN.fullmatch(text) else None
    except ValueError:
        # 超過 int 字串轉換上限的超長數字
        parsed = None

    if parsed is None or parsed < MIN_LIMIT or parsed > MAX_LIMIT:
        raise ValidationError(
            "Invalid limit parameter",
            f"Limit must be between {MIN_LIMIT} and {MAX_LIMIT}",
        )
    return parsed


def lookup_by_code(client: SpotifySearchClient, code: Optional[str]) -> TrackRecord:
    if not code:
        raise ValidationError(
            "Missing ISRC parameter",
            "Please provide an ISRC code in the query string: ?code=CODE",
        )

    if not is_valid_isrc(code):
        raise ValidationError("Invalid ISRC format", ISRC_FORMAT_HINT, {"provided": code})

    normalized = normalize_isrc(code)
    data = client.search(f"isrc:{normalized}", type="track", limit=1)

    items, _ = _track_items(data)
    if not items:
        raise NotFoundError(
            "Track not found",
            f"No track found with ISRC: {normalized}",
            {"isrc": normalized},
        )

    return format_track(items[0])


def search_by_text(client: SpotifySearchClient, query: Optional[str], limit: Optional[str] = DEFAULT_LIMIT) -> SearchResponse:
    if not query:
        raise ValidationError(
            "Missing query parameter",
            "Please provide a search query: ?query=YOUR_SEARCH",
        )

    parsed_limit = parse_limit(limit)
    data = client.search(query, type="track", limit=parsed_limit)

    items, total = _track_items(data)
    if not items:
        raise NotFoundError(
            "No tracks found",
            f'No tracks found for query: "{query}"',
            {"query": query},
        )

    return SearchResponse(
        total=total,
        limit=parsed_limit,
        items=[format_track(track) for track in items],
    )
