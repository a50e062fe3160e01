from pathlib import Path

import pytest

from media_stream_system.video.application.streaming_service import StreamingService
from media_stream_system.video.domain.exceptions import ResourceUnavailable
from media_stream_system.video.domain.models import StreamRange
from media_stream_system.video.domain.outcomes import (
    FullContent,
    PartialContent,
    NotFound,
    Gone,
    RangeNotSatisfiable,
    BytesUnavailable,
)
from media_stream_system.video.infrastructure.readers import FilePartialReader
from media_stream_system.video.infrastructure.repositories import FileSystemMediaRepository

from ..helpers import make_payload


@pytest.fixture
def streaming_service(storage_manager):
    return StreamingService(
        media_repository=FileSystemMediaRepository(storage_manager),
        partial_reader=FilePartialReader(chunk_size=128),
        content_type="video/mp4",
        chunk_size_bytes=128,
    )


async def read_body(streaming_service, plan):
    body = await streaming_service.open_body(plan)
    async with body:
        return b"".join([chunk async for chunk in body])


@pytest.mark.asyncio
async def test_unknown_media_is_not_found(streaming_service):
    plan = await streaming_service.plan_stream("does-not-exist", "bytes=0-")

    assert plan.outcome == NotFound()
    assert plan.head.status_code == 404
    assert await streaming_service.open_body(plan) is None


@pytest.mark.asyncio
async def test_record_without_file_is_gone(streaming_service, store_media, config):
    media_id = store_media("clip.mp4", make_payload(100))
    (Path(config.storage.media_root) / "uploads" / "clip.mp4").unlink()

    plan = await streaming_service.plan_stream(media_id)

    assert plan.outcome == Gone()
    assert plan.head.status_code == 404
    assert plan.head.detail == "File missing on server"


@pytest.mark.asyncio
async def test_external_only_record_is_gone(streaming_service, storage_manager):
    media_id = storage_manager.register_media(title="remote", external_url="https://cdn.example.com/remote.mp4")

    plan = await streaming_service.plan_stream(media_id)

    assert isinstance(plan.outcome, Gone)


@pytest.mark.asyncio
async def test_truncated_file_is_unavailable(streaming_service, store_media, config):
    media_id = store_media("clip.mp4", make_payload(1000))
    (Path(config.storage.media_root) / "uploads" / "clip.mp4").write_bytes(make_payload(10))

    plan = await streaming_service.plan_stream(media_id, "bytes=0-99")

    assert plan.outcome == BytesUnavailable()
    assert plan.head.status_code == 503


@pytest.mark.asyncio
async def test_no_range_is_full_content(streaming_service, store_media):
    payload = make_payload(500)
    media_id = store_media("clip.mp4", payload)

    plan = await streaming_service.plan_stream(media_id)

    assert plan.outcome == FullContent(total_length=500)
    assert plan.byte_range == StreamRange(0, 499)
    assert await read_body(streaming_service, plan) == payload


@pytest.mark.asyncio
async def test_range_is_partial_content(streaming_service, store_media):
    payload = make_payload(1000)
    media_id = store_media("clip.mp4", payload)

    plan = await streaming_service.plan_stream(media_id, "bytes=200-299")

    assert plan.outcome == PartialContent(range=StreamRange(200, 299), total_length=1000)
    assert plan.head.headers["Content-Range"] == "bytes 200-299/1000"
    assert await read_body(streaming_service, plan) == payload[200:300]


@pytest.mark.asyncio
async def test_range_covering_whole_resource_is_still_partial(streaming_service, store_media):
    media_id = store_media("clip.mp4", make_payload(500))

    plan = await streaming_service.plan_stream(media_id, "bytes=0-")

    assert plan.head.status_code == 206
    assert plan.head.headers["Content-Range"] == "bytes 0-499/500"


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["bytes=9999-", "bytes=0-1,5-9", "pages=1-2"])
async def test_unsatisfiable_range(streaming_service, store_media, header):
    media_id = store_media("clip.mp4", make_payload(500))

    plan = await streaming_service.plan_stream(media_id, header)

    assert plan.outcome == RangeNotSatisfiable(total_length=500)
    assert plan.head.headers == {"Content-Range": "bytes */500"}
    assert await streaming_service.open_body(plan) is None


@pytest.mark.asyncio
async def test_empty_file_has_no_body(streaming_service, store_media):
    media_id = store_media("empty.mp4", b"")

    plan = await streaming_service.plan_stream(media_id)

    assert plan.outcome == FullContent(total_length=0)
    assert plan.head.headers["Content-Length"] == "0"
    assert await streaming_service.open_body(plan) is None


@pytest.mark.asyncio
async def test_file_removed_after_planning_is_unavailable(streaming_service, store_media, config):
    media_id = store_media("clip.mp4", make_payload(500))
    plan = await streaming_service.plan_stream(media_id, "bytes=0-9")
    (Path(config.storage.media_root) / "uploads" / "clip.mp4").unlink()

    with pytest.raises(ResourceUnavailable):
        await streaming_service.open_body(plan)


@pytest.mark.asyncio
async def test_stream_info(streaming_service, store_media, storage_manager):
    media_id = store_media("clip.mp4", make_payload(321))
    remote_id = storage_manager.register_media(title="remote", external_url="https://cdn.example.com/remote.mp4")

    backing = await streaming_service.get_stream_info(media_id)

    assert backing.total_length == 321
    assert await streaming_service.get_stream_info(remote_id) is None
    assert await streaming_service.get_stream_info("does-not-exist") is None
