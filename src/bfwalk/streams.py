from __future__ import annotations

import io
from typing import Any, Callable, Iterable, Iterator, Optional

# Input sources expose next_char() -> Optional[str]; sinks expose write_byte(int).


class StringSource:
    def __init__(self, chars: Iterable[str]):
        self._chars: Iterator[str] = iter(chars)

    def next_char(self) -> Optional[str]:
        return next(self._chars, None)


class StreamSource:
    def __init__(self, stream: Any):
        self._stream = stream

    def next_char(self) -> Optional[str]:
        data = self._stream.read(1)
        if not data:
            return None
        if isinstance(data, (bytes, bytearray)):
            return chr(data[0])
        return data


class BufferSink:
    """Collects output; the evaluator keeps its own copy as well."""

    def __init__(self):
        self.data = bytearray()

    def write_byte(self, value: int) -> None:
        self.data.append(value)


class NullSink:
    def write_byte(self, value: int) -> None:
        pass


class StreamSink:
    """Writes each byte to ``stream`` as soon as it is produced.

    Binary streams get the raw byte. A text stream that wraps a binary
    buffer (``sys.stdout``, ``io.TextIOWrapper``) has its pending text
    flushed and the raw byte written to the buffer. Any other text stream
    gets ``chr(value)``, so bytes 128-255 arrive as latin-1 characters, not
    raw bytes. When neither the type nor ``mode`` tells, the first write
    tries bytes and falls back to text on ``TypeError``.
    """

    def __init__(self, stream: Any, *, flush: bool = True):
        self._stream = stream
        self._raw: Any = None
        self._text: Optional[bool] = None
        mode = getattr(stream, 'mode', None)
        if isinstance(stream, io.TextIOBase) or (isinstance(mode, str) and 'b' not in mode):
            self._text = True
            buffer = getattr(stream, 'buffer', None)
            if buffer is not None and hasattr(buffer, 'write'):
                self._raw = buffer
        self._flush = flush

    def write_byte(self, value: int) -> None:
        data = bytes((value,))
        target = self._stream
        if self._raw is not None:
            if hasattr(self._stream, 'flush'):
                self._stream.flush()
            target = self._raw
            target.write(data)
        elif self._text:
            target.write(chr(value))
        elif self._text is None:
            try:
                target.write(data)
            except TypeError:
                self._text = True
                target.write(chr(value))
            else:
                self._text = False
        else:
            target.write(data)
        if self._flush and hasattr(target, 'flush'):
            target.flush()


class CallbackSink:
    def __init__(self, callback: Callable[[int], Any]):
        self._callback = callback

    def write_byte(self, value: int) -> None:
        self._callback(value)


def as_source(obj: Any):
    if obj is None:
        return StringSource('')
    if hasattr(obj, 'next_char'):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return StringSource(bytes(obj).decode('latin-1'))
    if isinstance(obj, str):
        return StringSource(obj)
    if hasattr(obj, 'read'):
        return StreamSource(obj)
    try:
        return StringSource(obj)
    except TypeError:
        raise TypeError(f"cannot read input from {type(obj).__name__}") from None


def as_sink(obj: Any):
    if obj is None:
        return NullSink()
    if hasattr(obj, 'write_byte'):
        return obj
    if hasattr(obj, 'write'):
        return StreamSink(obj)
    if callable(obj):
        return CallbackSink(obj)
    raise TypeError(f"cannot write output to {type(obj).__name__}")
