"""Tests for the streaming line decoder."""

import asyncio

import pytest
from hypothesis import given, strategies as st

from a2ui_engine.core import IdleTimeout
from a2ui_engine.streaming import LineDecoder, StreamDecoder, decode_lines, decode_lines_sync


def split_at(text, cuts):
    """Split text at the given offsets."""
    points = sorted({c % (len(text) + 1) for c in cuts})
    pieces, start = [], 0
    for point in points:
        pieces.append(text[start:point])
        start = point
    pieces.append(text[start:])
    return pieces


async def collect(source, idle_timeout=1.0):
    return [line async for line in decode_lines(source, idle_timeout)]


@pytest.mark.unit
def test_line_decoder_buffers_partial_lines():
    """Test complete lines are emitted and the tail stays buffered."""
    decoder = LineDecoder()

    assert decoder.feed('{"a":1}\n{"b"') == ['{"a":1}']
    assert decoder.buffer == '{"b"'
    assert decoder.feed(":2}\n") == ['{"b":2}']
    assert decoder.finish() == []


@pytest.mark.unit
def test_line_decoder_drops_blank_and_fence_lines():
    """Test blanks and markdown fences are dropped without counting as lines."""
    decoder = LineDecoder()

    lines = decoder.feed('```json\n\n   \n{"a":1}\n```\n')

    assert lines == ['{"a":1}']
    assert decoder.lines_decoded == 1
    assert decoder.fences_dropped == 2
    assert decoder.blanks_dropped == 2


@pytest.mark.unit
def test_line_decoder_flushes_final_partial_line():
    """Test the unterminated last line is emitted at stream end."""
    decoder = LineDecoder()

    assert decoder.feed('{"a":1}') == []
    assert decoder.finish() == ['{"a":1}']


@pytest.mark.unit
def test_line_decoder_bytes_split_inside_character():
    """Test multi-byte characters split across byte fragments."""
    data = '{"t":"café €"}\n'.encode("utf-8")
    decoder = LineDecoder()

    lines = []
    for i in range(len(data)):
        lines.extend(decoder.feed(data[i : i + 1]))

    assert lines == ['{"t":"café €"}']


@pytest.mark.unit
def test_decode_lines_sync():
    """Test sync decoding over a chunk iterable."""
    assert list(decode_lines_sync(["a\nb", "\nc"])) == ["a", "b", "c"]


@given(
    st.lists(st.text(alphabet="ab{}\" `", max_size=12), max_size=8),
    st.lists(st.integers(min_value=0, max_value=200), max_size=20),
)
def test_fragmentation_invariance(lines, cuts):
    """Property test: any fragmentation yields the same candidate lines."""
    text = "\n".join(lines)

    whole = list(decode_lines_sync([text]))
    fragmented = list(decode_lines_sync(split_at(text, cuts)))

    assert fragmented == whole


@given(st.text(max_size=60), st.lists(st.integers(min_value=0, max_value=60), max_size=10))
def test_fragmentation_invariance_bytes(text, cuts):
    """Property test: byte fragmentation matches text decoding."""
    data = text.encode("utf-8")
    points = sorted({c % (len(data) + 1) for c in cuts})
    chunks, start = [], 0
    for point in points:
        chunks.append(data[start:point])
        start = point
    chunks.append(data[start:])

    assert list(decode_lines_sync(chunks)) == list(decode_lines_sync([text]))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_decode_lines_async():
    """Test async decoding with a final flush."""
    async def stream():
        for chunk in ['{"a":', '1}\n{"b":2', "}"]:
            yield chunk

    assert await collect(stream()) == ['{"a":1}', '{"b":2}']


@pytest.mark.unit
@pytest.mark.asyncio
async def test_idle_timeout():
    """Scenario E: a stalled producer ends the stream with IdleTimeout."""
    closed = asyncio.Event()
    seen = []

    async def stalled():
        try:
            yield '{"a":1}\n'
            await asyncio.sleep(10)
            yield '{"late":true}\n'
        finally:
            closed.set()

    decoder = StreamDecoder(idle_timeout=0.05)
    with pytest.raises(IdleTimeout) as exc_info:
        async for line in decoder.decode(stalled()):
            seen.append(line)

    assert seen == ['{"a":1}']
    assert exc_info.value.lines_decoded == 1
    assert decoder.timed_out
    assert closed.is_set()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_idle_timeout_before_first_fragment():
    """Test the timer is armed before the first fragment."""
    async def silent():
        await asyncio.sleep(10)
        yield "never\n"

    with pytest.raises(IdleTimeout):
        await collect(silent(), idle_timeout=0.05)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timer_rearmed_per_fragment():
    """Test slow but steady producers do not time out."""
    async def steady():
        for i in range(4):
            await asyncio.sleep(0.02)
            yield f'{{"n":{i}}}\n'

    lines = await collect(steady(), idle_timeout=0.1)

    assert len(lines) == 4


@pytest.mark.unit
@pytest.mark.asyncio
async def test_first_line_and_empty_stream_signals():
    """Test time-to-first-line is recorded and empty output is observable."""
    async def stream(*chunks):
        for chunk in chunks:
            yield chunk

    decoder = StreamDecoder(idle_timeout=1.0)
    assert [line async for line in decoder.decode(stream('{"a":1}\n'))] == ['{"a":1}']
    assert decoder.time_to_first_line is not None

    empty = StreamDecoder(idle_timeout=1.0)
    assert [line async for line in empty.decode(stream("```\n", "\n"))] == []
    assert empty.lines_decoded == 0
    assert empty.time_to_first_line is None
