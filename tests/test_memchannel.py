import itertools
import os
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress

import pytest

from ipcdemo import memchannel
from ipcdemo.memchannel import (
    attach_segment,
    create_segment,
    mark_done,
    read_string,
    reader_main,
    segment_name,
    wait_for_done,
    write_string,
    writer_main,
)

_KEYS = itertools.count(os.getpid() * 100)


@pytest.fixture
def key():
    value = next(_KEYS)
    yield value
    with suppress(FileNotFoundError, ValueError):
        segment = attach_segment(value)
        segment.close()
        segment.unlink()


def test_segment_name_is_stable_and_distinct():
    assert segment_name(7) == segment_name(7)
    assert segment_name(7) != segment_name(8)


def test_write_read_round_trip():
    buffer = bytearray(memchannel.SHM_SIZE)
    write_string(buffer, memchannel.WRITER_MESSAGE)
    assert read_string(buffer) == memchannel.WRITER_MESSAGE


def test_write_overwrites_shorter_prefix():
    buffer = bytearray(32)
    write_string(buffer, "long message here")
    write_string(buffer, "hi")
    assert read_string(buffer) == "hi"


def test_write_too_long_raises():
    with pytest.raises(ValueError):
        write_string(bytearray(4), "abcd")


def test_read_without_terminator_returns_everything():
    assert read_string(bytearray(b"abc")) == "abc"


def test_mark_done_replaces_first_byte():
    buffer = bytearray(16)
    write_string(buffer, "hello")
    mark_done(buffer)
    assert read_string(buffer) == "*ello"


def test_wait_for_done_returns_when_marked():
    buffer = bytearray(8)
    mark_done(buffer)
    wait_for_done(buffer, 0.01, 1.0)
    assert buffer[0] == memchannel.DONE_MARK


def test_wait_for_done_times_out():
    with pytest.raises(TimeoutError):
        wait_for_done(bytearray(8), 0.01, 0.05)


def test_segments_share_contents(key):
    creator = create_segment(key)
    try:
        write_string(creator.buf, "shared text")
        reader = attach_segment(key)
        try:
            assert read_string(reader.buf) == "shared text"
            mark_done(reader.buf)
        finally:
            reader.close()
        assert read_string(creator.buf) == "*hared text"
    finally:
        creator.close()
        creator.unlink()


def test_create_attaches_to_existing(key):
    first = create_segment(key)
    try:
        write_string(first.buf, "first")
        second = create_segment(key)
        try:
            assert read_string(second.buf) == "first"
        finally:
            second.close()
    finally:
        first.close()
        first.unlink()


def test_attach_missing_segment_raises(key):
    with pytest.raises(FileNotFoundError):
        attach_segment(key)


def _wait_until_written(key, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        assert time.monotonic() < deadline, "writer did not publish in time"
        try:
            segment = attach_segment(key)
        except (FileNotFoundError, ValueError):
            time.sleep(0.01)
            continue
        try:
            text = read_string(segment.buf)
        finally:
            segment.close()
        if text:
            return text
        time.sleep(0.01)


def test_writer_and_reader_mains_exchange(key, capsys):
    args = ["--key", str(key), "--interval", "0.01"]
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(writer_main, args)
        assert _wait_until_written(key) == memchannel.WRITER_MESSAGE
        assert reader_main(args) == 0
        assert future.result(timeout=5) == 0
    out = capsys.readouterr().out
    assert f'Leitor: Mensagem lida: "{memchannel.WRITER_MESSAGE}"' in out
    assert "Escritor: Memória compartilhada liberada." in out
    with pytest.raises(FileNotFoundError):
        attach_segment(key)


def test_reader_main_without_segment_fails(key):
    assert reader_main(["--key", str(key)]) == 1