import pytest

from media_stream_system.video.application.response_composer import compose_response_head
from media_stream_system.video.domain.models import StreamRange
from media_stream_system.video.domain.outcomes import (
    FullContent,
    PartialContent,
    NotFound,
    Gone,
    RangeNotSatisfiable,
    BytesUnavailable,
)


def test_full_content_head():
    head = compose_response_head(FullContent(total_length=500), "video/mp4")

    assert head.status_code == 200
    assert head.headers == {"Accept-Ranges": "bytes", "Content-Length": "500", "Content-Type": "video/mp4"}
    assert head.has_body


def test_partial_content_head():
    head = compose_response_head(PartialContent(range=StreamRange(200, 299), total_length=1000), "video/mp4")

    assert head.status_code == 206
    assert head.headers == {
        "Content-Range": "bytes 200-299/1000",
        "Accept-Ranges": "bytes",
        "Content-Length": "100",
        "Content-Type": "video/mp4",
    }
    assert head.has_body


def test_content_type_is_passed_through():
    head = compose_response_head(FullContent(total_length=1), "video/webm")
    assert head.headers["Content-Type"] == "video/webm"


@pytest.mark.parametrize("outcome,detail", [
    (NotFound(), "Video not found"),
    (Gone(), "File missing on server"),
])
def test_missing_media_heads(outcome, detail):
    head = compose_response_head(outcome, "video/mp4")

    assert head.status_code == 404
    assert head.detail == detail
    assert "Content-Range" not in head.headers
    assert not head.has_body


def test_range_not_satisfiable_head():
    head = compose_response_head(RangeNotSatisfiable(total_length=500), "video/mp4")

    assert head.status_code == 416
    assert head.headers == {"Content-Range": "bytes */500"}
    assert not head.has_body


def test_bytes_unavailable_head():
    head = compose_response_head(BytesUnavailable(), "video/mp4")

    assert head.status_code == 503
    assert head.headers == {}
    assert not head.has_body


def test_same_outcome_gives_same_head():
    outcome = PartialContent(range=StreamRange(0, 9), total_length=10)
    assert compose_response_head(outcome, "video/mp4") == compose_response_head(outcome, "video/mp4")


def test_unknown_outcome_is_rejected():
    with pytest.raises(TypeError):
        compose_response_head(object(), "video/mp4")
