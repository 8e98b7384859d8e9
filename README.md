# ipcdemo

Small, readable demonstrations of how two parties can hand data to each other.
They can use a file on disk or a named shared-memory segment. Two threads can
also do it, coordinated by a condition-variable handshake. A benchmark times
writing and reading a run of integers through a file, and the same through
shared memory.

It uses only the standard library.

## Installation

```
pip install .
```

## Commands

### Benchmark

```
ipcdemo-benchmark [file|memory|both] [--operations N] [--path PATH]
```

The command first runs a writer thread and a reader thread over a file of
integers. The default file is `test.txt`, and it is left in place. It then runs
the same two threads over a shared-memory block of C ints. For each run it
prints the elapsed time, for example:

```
File operations with threads took 0.4123 seconds
Shared memory operations with threads took 0.1876 seconds
```

`--operations` sets the count of integers, which is 1,000,000 by default.

### File hand-off between two processes

In one terminal:

```
ipcdemo-file-writer [--path PATH] [--done-path PATH] [--interval SECONDS]
```

This writes a message to `comunicacao.txt` by default. It then checks every
`--interval` seconds, 1 by default, until that file no longer exists. In a
second terminal, in the same directory:

```
ipcdemo-file-reader [--path PATH] [--done-path PATH]
```

The reader reads up to 1024 bytes and prints them. It then renames the file to
`comunicacao.lida` by default. Once the file is gone, the writer finishes.

### Shared-memory hand-off between two processes

```
ipcdemo-mem-writer [--key N] [--size BYTES] [--interval SECONDS]
```

This creates a named shared-memory segment, or attaches to it if it already
exists. The name is `ipcdemo_<key>` and the default key is 1234. The segment
holds 1024 bytes by default. The writer stores a NUL-terminated message in it
and checks the first byte until it becomes `*`. It then closes and removes the
segment. In a second terminal:

```
ipcdemo-mem-reader [--key N]
```

The reader attaches to the existing segment and prints the message. It then
sets the first byte to `*`. If there is no such segment, it exits with status 1.

### Threaded hand-off

```
ipcdemo-threaded [file|memory|both] [--directory DIR]
```

This runs a writer thread and a reader thread in one process. With `both`, the
default, it does so twice: once through a file in `--directory` and once
through an anonymous shared-memory segment. The two threads coordinate through
a `Handshake`. No files or segments are left behind.

## Library use

```python
from ipcdemo.threaded import Handshake, run_file_exchange, run_memory_exchange

handshake = Handshake()
handshake.publish()
handshake.wait_ready(timeout=1)      # returns at once; raises TimeoutError if not published
assert handshake.ready

print(run_memory_exchange("hello", 1024))    # -> "hello"
print(run_file_exchange("/tmp", "hi\n"))     # -> "hi\n"
```

Other building blocks:

- `ipcdemo.filechannel`:
  - `write_message(path, message)`
  - `read_message(path, done_path)`, which reads up to 1024 bytes and then renames the file
  - `wait_until_consumed(path, interval, timeout)`, which raises `TimeoutError` when the timeout passes
- `ipcdemo.memchannel`:
  - `segment_name`, `create_segment` and `attach_segment`
  - `write_string`, which raises `ValueError` if the text does not fit, and `read_string`
  - `mark_done`, and `wait_for_done`, which raises `TimeoutError`
- `ipcdemo.benchmark`:
  - `write_numbers` and `read_numbers`
  - `file_benchmark` and `shared_memory_benchmark`, which return elapsed seconds

## What it does not do

The hand-offs between processes synchronise only by polling, either the file's
existence or the segment's first byte. They use no locks or semaphores shared
between processes. Each exchange carries one message; there is no queue or
continuing channel.