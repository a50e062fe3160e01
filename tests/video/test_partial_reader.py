import pytest

from media_stream_system.video.domain.exceptions import ResourceUnavailable
from media_stream_system.video.domain.models import BackingBytes, StreamRange
from media_stream_system.video.infrastructure.readers import FilePartialReader

from ..helpers import make_payload


PAYLOAD = make_payload(1000)


@pytest.fixture
def backing(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(PAYLOAD)
    return BackingBytes(media_id="clip", path=path, total_length=len(PAYLOAD))


async def read_all(stream):
    async with stream:
        return b"".join([chunk async for chunk in stream])


@pytest.mark.asyncio
async def test_reads_exact_interval(backing):
    reader = FilePartialReader(chunk_size=64)

    data = await read_all(await reader.open_interval(backing, StreamRange(200, 299)))

    assert data == PAYLOAD[200:300]


@pytest.mark.asyncio
async def test_adjacent_intervals_concatenate_to_their_union(backing):
    reader = FilePartialReader(chunk_size=33)

    first = await read_all(await reader.open_interval(backing, StreamRange(10, 499)))
    second = await read_all(await reader.open_interval(backing, StreamRange(500, 777)))
    union = await read_all(await reader.open_interval(backing, StreamRange(10, 777)))

    assert first + second == union == PAYLOAD[10:778]


@pytest.mark.asyncio
async def test_full_interval_equals_partials_joined(backing):
    reader = FilePartialReader(chunk_size=100)
    parts = [StreamRange(0, 0), StreamRange(1, 333), StreamRange(334, 998), StreamRange(999, 999)]

    joined = b"".join([await read_all(await reader.open_interval(backing, part)) for part in parts])

    assert joined == await read_all(await reader.open_interval(backing, backing.full_range())) == PAYLOAD


@pytest.mark.asyncio
async def test_chunks_never_exceed_chunk_size_or_interval(backing):
    reader = FilePartialReader(chunk_size=64)
    stream = await reader.open_interval(backing, StreamRange(5, 204))

    sizes = []
    async with stream:
        async for chunk in stream:
            sizes.append(len(chunk))

    assert all(0 < size <= 64 for size in sizes)
    assert sum(sizes) == 200
    assert stream.bytes_sent == 200
    assert stream.closed


@pytest.mark.asyncio
async def test_exhausted_stream_closes_handle(backing):
    stream = await FilePartialReader(chunk_size=1024).open_interval(backing, StreamRange(0, 9))

    chunks = [chunk async for chunk in stream]

    assert chunks == [PAYLOAD[:10]]
    assert stream.closed


@pytest.mark.asyncio
async def test_early_close_releases_handle(backing):
    stream = await FilePartialReader(chunk_size=16).open_interval(backing, StreamRange(0, 999))

    first = await stream.__anext__()
    await stream.aclose()
    await stream.aclose()

    assert first == PAYLOAD[:16]
    assert stream.closed
    assert stream.bytes_sent == 16
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_context_manager_closes_on_error(backing):
    stream = await FilePartialReader(chunk_size=16).open_interval(backing, StreamRange(0, 999))

    with pytest.raises(RuntimeError):
        async with stream:
            async for _ in stream:
                raise RuntimeError("consumer failed")

    assert stream.closed


@pytest.mark.asyncio
async def test_file_shorter_than_interval_is_unavailable(tmp_path):
    path = tmp_path / "short.mp4"
    path.write_bytes(PAYLOAD[:100])
    backing = BackingBytes(media_id="short", path=path, total_length=1000)
    stream = await FilePartialReader(chunk_size=64).open_interval(backing, StreamRange(0, 199))

    received = []
    with pytest.raises(ResourceUnavailable):
        async for chunk in stream:
            received.append(chunk)

    assert b"".join(received) == PAYLOAD[:100]
    assert stream.closed


@pytest.mark.asyncio
async def test_missing_file_is_unavailable(tmp_path):
    backing = BackingBytes(media_id="gone", path=tmp_path / "missing.mp4", total_length=10)

    with pytest.raises(ResourceUnavailable):
        await FilePartialReader().open_interval(backing, StreamRange(0, 9))


def test_chunk_size_must_be_positive():
    with pytest.raises(ValueError):
        FilePartialReader(chunk_size=0)
