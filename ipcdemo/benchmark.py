"""Timing of a writer and a reader thread sharing a file or a shared-memory block."""

from __future__ import annotations

import argparse
import re
import sys
import threading
import time
from array import array
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from multiprocessing.shared_memory import SharedMemory
from typing import IO, Iterator

NUM_OPERATIONS = 1_000_000
DEFAULT_PATH = "test.txt"

_INTEGER = re.compile(r"[+-]?\d+")
_INT_SIZE = array("i").itemsize


def _emit_numbers(handle: IO[str], operations: int) -> None:
    handle.writelines(f"{value}\n" for value in range(operations))


def write_numbers(path, operations=NUM_OPERATIONS) -> None:
    """Write the integers 0..operations-1 to ``path``, one per line."""
    with open(path, "w", encoding="ascii") as handle:
        _emit_numbers(handle, operations)


def _tokens(handle: IO[str]) -> Iterator[str]:
    for line in handle:
        yield from line.split()


def read_numbers(path, operations=NUM_OPERATIONS) -> list[int]:
    """Read up to ``operations`` whitespace-separated integers from ``path``.

    Reading stops at the first token that does not start with an integer;
    a token with trailing garbage yields its leading integer and ends the read.
    """
    values: list[int] = []
    with open(path, encoding="utf-8", errors="replace") as handle:
        for token in islice(_tokens(handle), operations):
            match = _INTEGER.match(token)
            if match is None:
                break
            values.append(int(match.group()))
            if match.end() != len(token):
                break
    return values


def file_benchmark(path=DEFAULT_PATH, operations=NUM_OPERATIONS) -> float:
    """Run a writer and a reader thread on one file; return the elapsed seconds."""
    created = threading.Event()

    def writer() -> None:
        try:
            handle = open(path, "w", encoding="ascii")
        finally:
            created.set()
        with handle:
            _emit_numbers(handle, operations)

    def reader() -> None:
        created.wait()
        read_numbers(path, operations)

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(writer), pool.submit(reader)]
    elapsed = time.perf_counter() - start
    for future in futures:
        future.result()
    return elapsed


def _fill(view: memoryview, operations: int) -> None:
    for value in range(operations):
        view[value] = value


def _scan(view: memoryview, operations: int) -> None:
    for _ in view[:operations]:
        pass


def shared_memory_benchmark(operations=NUM_OPERATIONS) -> float:
    """Run a writer and a reader thread on a shared-memory block of ints."""
    if operations < 1:
        raise ValueError("operations must be at least 1")
    segment = SharedMemory(create=True, size=operations * _INT_SIZE)
    try:
        view = segment.buf.cast("i")
        try:
            start = time.perf_counter()
            with ThreadPoolExecutor(max_workers=2) as pool:
                futures = [
                    pool.submit(_fill, view, operations),
                    pool.submit(_scan, view, operations),
                ]
            elapsed = time.perf_counter() - start
            for future in futures:
                future.result()
        finally:
            view.release()
    finally:
        segment.close()
        segment.unlink()
    return elapsed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Time file and shared-memory exchanges between two threads."
    )
    parser.add_argument("mode", nargs="?", choices=("file", "memory", "both"), default="both")
    parser.add_argument("--operations", type=int, default=NUM_OPERATIONS)
    parser.add_argument("--path", default=DEFAULT_PATH)
    args = parser.parse_args(argv)

    if args.mode in ("file", "both"):
        try:
            elapsed = file_benchmark(args.path, args.operations)
        except OSError as exc:
            print(f"Failed to open file: {exc}", file=sys.stderr)
            return 1
        print(f"File operations with threads took {elapsed:.4f} seconds")
    if args.mode in ("memory", "both"):
        try:
            elapsed = shared_memory_benchmark(args.operations)
        except (OSError, ValueError) as exc:
            print(f"shared memory failed: {exc}", file=sys.stderr)
            return 1
        print(f"Shared memory operations with threads took {elapsed:.4f} seconds")
    return 0