"""Message passing between two processes through a file that is renamed when read."""

from __future__ import annotations

import argparse
import os
import sys
import time

FILENAME = "comunicacao.txt"
TEMPNAME = "comunicacao.lida"
WRITER_MESSAGE = "Olá, comunicação via arquivo!\n"
READ_LIMIT = 1024


def write_message(path, message) -> None:
    """Create or truncate ``path`` and write ``message`` to it as UTF-8."""
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(message)


def wait_until_consumed(path, interval=1.0, timeout=None) -> None:
    """Poll every ``interval`` seconds until ``path`` no longer exists.

    Raises TimeoutError if ``timeout`` seconds pass while the file remains.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    while os.path.exists(path):
        if deadline is not None and time.monotonic() >= deadline:
            raise TimeoutError(f"{path} was not consumed within {timeout} seconds")
        time.sleep(interval)


def read_message(path, done_path) -> str:
    """Read up to READ_LIMIT bytes from ``path``, then rename it to ``done_path``."""
    with open(path, "rb") as handle:
        data = handle.read(READ_LIMIT)
    os.replace(path, done_path)
    return data.decode("utf-8", errors="replace")


def _parse(argv, description):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--path", default=FILENAME)
    parser.add_argument("--done-path", default=TEMPNAME)
    parser.add_argument("--interval", type=float, default=1.0)
    return parser.parse_args(argv)


def writer_main(argv=None) -> int:
    args = _parse(argv, "Write a message to a file and wait until it is read.")
    try:
        write_message(args.path, WRITER_MESSAGE)
    except OSError as exc:
        print(f"fopen: {exc}", file=sys.stderr)
        return 1
    print("Escritor: Mensagem escrita no arquivo.")
    print("Escritor: Aguardando leitura...")
    wait_until_consumed(args.path, args.interval)
    print("Escritor: Arquivo lido e removido. Finalizado.")
    return 0


def reader_main(argv=None) -> int:
    args = _parse(argv, "Read a message from a file and mark it as read.")
    try:
        text = read_message(args.path, args.done_path)
    except OSError as exc:
        print(f"Leitor: {exc}", file=sys.stderr)
        return 1
    print(f"Leitor: Mensagem lida:\n{text}", end="")
    print(f"Leitor: Arquivo renomeado para {args.done_path}. Finalizado.")
    return 0