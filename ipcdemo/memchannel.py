"""Message passing between two processes through a named shared-memory segment."""

from __future__ import annotations

import argparse
import sys
import time
from contextlib import suppress
from multiprocessing.shared_memory import SharedMemory

SHM_SIZE = 1024
SHM_KEY = 1234
DONE_MARK = ord("*")
WRITER_MESSAGE = "Olá, Memória Compartilhada!"


def segment_name(key) -> str:
    """Return the shared-memory name used for ``key``."""
    return f"ipcdemo_{int(key)}"


def create_segment(key=SHM_KEY, size=SHM_SIZE) -> SharedMemory:
    """Create the segment for ``key``, or attach to it if it already exists."""
    name = segment_name(key)
    try:
        return SharedMemory(name=name, create=True, size=size)
    except FileExistsError:
        return SharedMemory(name=name)


def attach_segment(key=SHM_KEY) -> SharedMemory:
    """Attach to an existing segment; raises FileNotFoundError if there is none."""
    return SharedMemory(name=segment_name(key))


def write_string(buffer, text) -> None:
    """Store ``text`` as a NUL-terminated UTF-8 string at the start of ``buffer``."""
    data = text.encode("utf-8") + b"\0"
    if len(data) > len(buffer):
        raise ValueError(f"string of {len(data)} bytes does not fit in {len(buffer)} bytes")
    buffer[: len(data)] = data


def read_string(buffer) -> str:
    """Return the NUL-terminated UTF-8 string at the start of ``buffer``."""
    raw = bytes(buffer).split(b"\0", 1)[0]
    return raw.decode("utf-8", errors="replace")


def mark_done(buffer) -> None:
    """Signal the writer by replacing the first byte with '*'."""
    buffer[0] = DONE_MARK


def wait_for_done(buffer, interval=1.0, timeout=None) -> None:
    """Poll every ``interval`` seconds until the first byte of ``buffer`` is '*'."""
    deadline = None if timeout is None else time.monotonic() + timeout
    while buffer[0] != DONE_MARK:
        if deadline is not None and time.monotonic() >= deadline:
            raise TimeoutError(f"reader did not finish within {timeout} seconds")
        time.sleep(interval)


def _parse(argv, description):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--key", type=int, default=SHM_KEY)
    parser.add_argument("--size", type=int, default=SHM_SIZE)
    parser.add_argument("--interval", type=float, default=1.0)
    return parser.parse_args(argv)


def writer_main(argv=None) -> int:
    args = _parse(argv, "Write a message to shared memory and wait until it is read.")
    try:
        segment = create_segment(args.key, args.size)
    except (OSError, ValueError) as exc:
        print(f"shmget: {exc}", file=sys.stderr)
        return 1
    try:
        write_string(segment.buf, WRITER_MESSAGE)
        print("Escritor: Mensagem escrita na memória compartilhada.")
        print("Escritor: Aguardando leitura...")
        wait_for_done(segment.buf, args.interval)
    finally:
        segment.close()
        with suppress(FileNotFoundError):
            segment.unlink()
    print("Escritor: Memória compartilhada liberada.")
    return 0


def reader_main(argv=None) -> int:
    args = _parse(argv, "Read a message from shared memory and mark it as read.")
    try:
        segment = attach_segment(args.key)
    except (OSError, ValueError) as exc:
        print(f"shmget: {exc}", file=sys.stderr)
        return 1
    try:
        print(f'Leitor: Mensagem lida: "{read_string(segment.buf)}"')
        mark_done(segment.buf)
    finally:
        segment.close()
    print("Leitor: Finalizado.")
    return 0