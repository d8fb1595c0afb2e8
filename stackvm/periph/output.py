"""
stackvm — Output Sinks

The only external interface of the machine: the byte/character stream
written by the PRINT_* standard calls.

  BufferSink  collects every byte written, for programmatic inspection
              (tests, embedding)
  StreamSink  forwards to a text stream, default sys.stdout; characters
              the stream's encoding lacks are written as backslash escapes

Bytes map to characters 1:1 (Latin-1), matching how PushString lays
text onto the stack.
"""

import sys
from typing import Optional, TextIO


class OutputSink:
    """Destination for standard-call output."""

    def write(self, data: bytes):
        raise NotImplementedError

    def write_byte(self, value: int):
        self.write(bytes([value & 0xFF]))

    def write_text(self, text: str):
        self.write(text.encode('latin-1'))


class BufferSink(OutputSink):
    """Captures output in memory."""

    def __init__(self):
        self.data: bytearray = bytearray()

    def write(self, data: bytes):
        self.data.extend(data)

    @property
    def text(self) -> str:
        return self.data.decode('latin-1')

    def reset(self):
        self.data.clear()


class StreamSink(OutputSink):
    """Writes straight through to a text stream and flushes."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys swap of sys.stdout is honored
        return self._stream if self._stream is not None else sys.stdout

    def write(self, data: bytes):
        stream = self.stream
        text = data.decode('latin-1')
        # Bytes the stream cannot encode come out as \xNN escapes
        encoding = getattr(stream, 'encoding', None)
        if encoding:
            text = text.encode(encoding, 'backslashreplace').decode(encoding)
        stream.write(text)
        stream.flush()
