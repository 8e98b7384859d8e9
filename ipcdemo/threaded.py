"""Writer and reader threads synchronised by a ready/processed handshake."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from multiprocessing.shared_memory import SharedMemory
from pathlib import Path

from ipcdemo.filechannel import FILENAME, TEMPNAME, write_message
from ipcdemo.memchannel import SHM_SIZE, read_string, write_string

FILE_MESSAGE = "Olá, comunicação via arquivo com threads!\n"
MEMORY_MESSAGE = "Olá, Memória Compartilhada com Threads!"
FILE_READ_LIMIT = 1023


class Handshake:
    """Rendezvous of one producer and one consumer: data ready, then data processed."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._ready = False
        self._processed = False

    @property
    def ready(self) -> bool:
        with self._condition:
            return self._ready

    @property
    def processed(self) -> bool:
        with self._condition:
            return self._processed

    def publish(self) -> None:
        """Mark the data as ready and wake the consumer."""
        with self._condition:
            self._ready = True
            self._condition.notify_all()

    def wait_ready(self, timeout=None) -> None:
        """Block until the data is published; TimeoutError after ``timeout`` seconds."""
        with self._condition:
            if not self._condition.wait_for(lambda: self._ready, timeout):
                raise TimeoutError("data was not published in time")

    def acknowledge(self) -> None:
        """Mark the data as processed and wake the producer."""
        with self._condition:
            self._processed = True
            self._condition.notify_all()

    def wait_processed(self, timeout=None) -> None:
        """Block until the consumer acknowledges; TimeoutError after ``timeout`` seconds."""
        with self._condition:
            if not self._condition.wait_for(lambda: self._processed, timeout):
                raise TimeoutError("data was not processed in time")


def _run_pair(writer, reader):
    with ThreadPoolExecutor(max_workers=2) as pool:
        written = pool.submit(writer)
        received = pool.submit(reader)
    written.result()
    return received.result()


def run_file_exchange(directory=".", message=FILE_MESSAGE) -> str:
    """Pass ``message`` from a writer thread to a reader thread through a file.

    Returns the text the reader received; no files are left behind.
    """
    base = Path(directory)
    source = base / FILENAME
    done = base / TEMPNAME
    source.unlink(missing_ok=True)
    done.unlink(missing_ok=True)
    handshake = Handshake()

    def writer() -> None:
        try:
            write_message(source, message)
            print("Escritor: Mensagem escrita no arquivo.")
        finally:
            handshake.publish()
        handshake.wait_processed()
        print("Escritor: Finalizado.")

    def reader() -> str:
        try:
            handshake.wait_ready()
            with source.open("rb") as handle:
                text = handle.read(FILE_READ_LIMIT).decode("utf-8", errors="replace")
            print(f"Leitor: Mensagem recebida:\n{text}", end="")
            os.replace(source, done)
            print(f"Leitor: Arquivo renomeado para {TEMPNAME}")
        finally:
            handshake.acknowledge()
        print("Leitor: Finalizado.")
        return text

    try:
        return _run_pair(writer, reader)
    finally:
        done.unlink(missing_ok=True)


def run_memory_exchange(message=MEMORY_MESSAGE, size=SHM_SIZE) -> str:
    """Pass ``message`` between two threads through a shared-memory segment."""
    segment = SharedMemory(create=True, size=size)
    handshake = Handshake()

    def writer() -> None:
        try:
            write_string(segment.buf, message)
            print("Escritor: Mensagem escrita na memória compartilhada.")
        finally:
            handshake.publish()
        handshake.wait_processed()
        print("Escritor: Finalizado.")

    def reader() -> str:
        try:
            handshake.wait_ready()
            text = read_string(segment.buf)
            print(f'Leitor: Mensagem lida: "{text}"')
        finally:
            handshake.acknowledge()
        print("Leitor: Finalizado.")
        return text

    try:
        return _run_pair(writer, reader)
    finally:
        segment.close()
        segment.unlink()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Exchange a message between two threads via a file or shared memory."
    )
    parser.add_argument("mode", nargs="?", choices=("file", "memory", "both"), default="both")
    parser.add_argument("--directory", default=".")
    args = parser.parse_args(argv)
    try:
        if args.mode in ("file", "both"):
            run_file_exchange(args.directory)
        if args.mode in ("memory", "both"):
            run_memory_exchange()
    except (OSError, ValueError) as exc:
        print(f"exchange failed: {exc}", file=sys.stderr)
        return 1
    return 0