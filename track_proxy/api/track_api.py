# track_proxy/api/track_api.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from track_proxy.models.track_models import SearchResponse, TrackRecord
from track_proxy.services.spotify_search_service import SpotifySearchClient
from track_proxy.services.track_service import DEFAULT_LIMIT, lookup_by_code, search_by_text

router = APIRouter()


def get_search_client(request: Request) -> SpotifySearchClient:
    # main.create_app() 把 client（含 token broker）掛在 app.state 上
    return request.app.state.search_client


@router.get(
    "/search-by-code",
    summary="Look up a single track by ISRC",
    description="Hyphens are optional, e.g. US-UM7-1505639 or USUM71505639.",
    response_model=TrackRecord,
)
def search_by_code(
    code: Optional[str] = Query(None, description="ISRC code"),
    client: SpotifySearchClient = Depends(get_search_client),
):
    return lookup_by_code(client, code)


# limit 用字串接，超出範圍要回 400 而不是 FastAPI 預設的 422
@router.get("/search", summary="Free-text track search", response_model=SearchResponse)
def search(
    query: Optional[str] = Query(None, description="Free text, e.g. blinding lights"),
    limit: str = Query(DEFAULT_LIMIT, description="1 to 50"),
    client: SpotifySearchClient = Depends(get_search_client),
):
    return search_by_text(client, query, limit)
