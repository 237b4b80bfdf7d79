# sigtalk

sigtalk moves a text message from one process to another on the same machine.
It uses nothing but the two user signals. Each bit goes over as one signal:
`SIGUSR1` carries a 1 and `SIGUSR2` carries a 0, most significant bit first.
The receiver sends back `SIGUSR1` after every bit, and the sender waits for
that reply before it sends the next bit.

A transfer has two parts: first the message length plus one, as a
little-endian signed 32-bit integer, then the UTF-8 message bytes followed by
a terminating zero byte.

Both ends wait for signals with `signal.sigtimedwait`, so they need a
platform that provides it, such as Linux. Without it the server command
prints `Fail to handle signal.` and exits.

## Installation

```
pip install .
```

## Usage

Start the server in one terminal. It prints its PID and then waits for
messages:

```
$ sigtalk-server
Server PID: 4242
Waiting for message from client...
```

Send a message from a second terminal:

```
$ sigtalk-client 4242 "hello there"
Message length: 11
Finish sending.
```

The server prints what it received and then waits for the next client:

```
Message length: 11
[Message:hello there]
Waiting for message from client...
```

The server takes bits only from the process that started the current
transfer. Signals from other processes are ignored until that transfer ends.
Stop the server with Ctrl-C.

If the client is given the wrong number of arguments it prints a usage line
and exits with status 1. If no process exists at the given PID it prints
`Error: Invalid PID.` and exits with status 1.

### Confirmation mode

Pass `--confirm` to both commands:

```
$ sigtalk-server --confirm
$ sigtalk-client --confirm 4242 "hello there"
[Message length: 11]
Finish sending.
Server already receive message.
```

In this mode the server writes the length line in brackets and sends
`SIGUSR2` once a whole message has arrived; the client waits for that signal
before it exits. Both sides must run in the same mode.

### Timeouts

If an acknowledgement does not arrive within ten seconds, the client prints
`Time out: ack signal from server may missing.` and exits with status 1. If
the sender goes quiet in the middle of a message, the server prints
`Timeout: signal from client may missing.`, drops the partial message and
waits for a new client. While idle, the server prints the waiting line again
every ten seconds.

## Library use

The pieces the commands use can also be imported on their own:

- `sigtalk.protocol`: `encode_message`, `decode_length`, `byte_to_bits` and
  `bits_to_byte`, the constants `TIMEOUT`, `BITS_PER_BYTE` and `LENGTH_SIZE`,
  and the exceptions `ProtocolError` (a `ValueError`) and `TransferTimeout`
  (a `TimeoutError`).
- `sigtalk.client.Client(pid, timeout=10.0, confirm=False)`: `send_byte`,
  `send` and `send_message`, which returns the text length in bytes and
  raises `ProcessLookupError` when nothing answers at the PID,
  `TransferTimeout` when an acknowledgement is missing and `ConnectionError`
  when a signal cannot be sent.
- `sigtalk.server.Server(timeout=10.0, confirm=False, out=None)`:
  `receive_byte`, `receive(size)`, `receive_message`, which prints and
  returns one message or returns `None`, and `serve_forever`.
- `sigtalk.printf`: `sprintf` and `printf`, a small formatter for
  `%c %s %p %d %i %u %x %X`, plus `format_digit` and `format_pointer`.
- `sigtalk.linereader`: `LineReader(stream, buffer_size=10)` with
  `next_line()`, and `read_lines`. Both read a file object or a file
  descriptor one line at a time, newline included, through a fixed read size.
- `sigtalk.textutils`: string helpers with C library conventions: `atoi`,
  `itoa`, `split`, `strtrim`, `substr`, `strnstr`, `strncmp`, `memcmp`,
  `strlcpy`, `strlcat`, `strchr` and `strrchr`. The search functions return
  an index or `None`; `strlcpy` and `strlcat` return the resulting text and
  the length they tried to create.
- `sigtalk.chars`: `isalpha`, `isdigit`, `isalnum`, `isascii`, `isprint`,
  `toupper` and `tolower`, each taking a character code or a one-character
  string.

## What it does not do

The server handles one sender at a time and only on the local machine. It
does not encrypt, store or queue messages. Each message is printed to the
server's output and then discarded.

## Running the tests

```
pip install .[test]
pytest
```