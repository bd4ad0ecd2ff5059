import pytest

from conftest import make_track, search_response, token_response
from track_proxy.services.errors import NotFoundError, ValidationError
from track_proxy.services.track_service import (
    format_track,
    lookup_by_code,
    parse_limit,
    search_by_text,
)


def test_format_track_projects_spotify_fields():
    record = format_track(make_track())

    assert record.id == "0VjIjW4GlUZAMYd2vXMi3b"
    assert record.artists == ["The Weeknd"]
    assert record.album == "After Hours"
    assert record.album_image == "https://i.scdn.co/image/0VjIjW4GlUZAMYd2vXMi3b"
    assert record.spotify_url == "https://open.spotify.com/track/0VjIjW4GlUZAMYd2vXMi3b"
    assert record.isrc == "USUG11904206"
    assert record.release_date == "2020-03-20"
    assert record.preview_url is None


def test_format_track_optional_fields_default_to_none():
    record = format_track(make_track(isrc=None, images=False))

    assert record.album_image is None
    assert record.isrc is None


@pytest.mark.parametrize("limit,expected", [("1", 1), ("50", 50), (" 25 ", 25), (None, 10), (7, 7)])
def test_parse_limit_accepts_range(limit, expected):
    assert parse_limit(limit) == expected


@pytest.mark.parametrize("limit", ["0", "51", "-1", "abc", "", "1.5", "1_0", "+5", "9" * 5000])
def test_parse_limit_rejects_out_of_range(limit):
    with pytest.raises(ValidationError):
        parse_limit(limit)


@pytest.mark.parametrize("code", [None, "", "NOT-AN-ISRC"])
def test_bad_code_fails_before_any_network_call(search_client, session, code):
    with pytest.raises(ValidationError):
        lookup_by_code(search_client, code)

    assert session.posts == []
    assert session.gets == []


def test_lookup_searches_normalized_code_for_one_match(search_client, session):
    session.token_responses.append(token_response())
    session.search_responses.append(search_response([make_track()]))

    record = lookup_by_code(search_client, "us-ug1-1904206")

    assert record.name == "Blinding Lights"
    assert session.gets[0]["params"] == {"q": "isrc:USUG11904206", "type": "track", "limit": 1}


def test_lookup_without_match_is_not_found(search_client, session):
    session.token_responses.append(token_response())
    session.search_responses.append(search_response([]))

    with pytest.raises(NotFoundError) as exc_info:
        lookup_by_code(search_client, "USUM71505639")

    assert exc_info.value.extra == {"isrc": "USUM71505639"}


def test_search_reports_upstream_total(search_client, session):
    session.token_responses.append(token_response())
    session.search_responses.append(search_response([make_track(), make_track(track_id="x2")], total=812))

    result = search_by_text(search_client, "blinding lights", "2")

    assert result.total == 812
    assert result.limit == 2
    assert [item.id for item in result.items] == ["0VjIjW4GlUZAMYd2vXMi3b", "x2"]


def test_search_without_query_fails_before_any_network_call(search_client, session):
    with pytest.raises(ValidationError):
        search_by_text(search_client, "", "10")

    assert session.gets == []


def test_search_without_matches_is_not_found(search_client, session):
    session.token_responses.append(token_response())
    session.search_responses.append(search_response([]))

    with pytest.raises(NotFoundError):
        search_by_text(search_client, "zzzzqqqq", "10")


def test_format_track_tolerates_null_album():
    track = make_track()
    track["album"] = None

    record = format_track(track)

    assert record.album is None
    assert record.album_image is None
    assert record.release_date is None
