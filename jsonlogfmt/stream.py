"""
Line-at-a-time conversion of a JSON log stream to logfmt.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Iterator, Optional

import click

from jsonlogfmt.config import ANSI_RESET, ANSI_WARNING, RenderConfig
from jsonlogfmt.errors import DecodeError, LineTooLongError
from jsonlogfmt.render import Renderer

# Reader buffer; a line plus its newline must fit
BUFFER_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


def read_lines(stream: BinaryIO, buffer_size: int = BUFFER_SIZE) -> Iterator[bytes]:
    """
    Yield non-empty lines from a binary stream, without line terminators.

    Args:
        stream: Binary input stream
        buffer_size: Line buffer size; the longest accepted line is one byte
            shorter, terminator excluded

    Raises:
        LineTooLongError: If a line does not fit in the buffer
    """
    while True:
        # Room for the longest line plus a CRLF terminator
        raw = stream.readline(buffer_size + 1)
        if not raw:
            return

        line = raw
        if line.endswith(b'\n'):
            line = line[:-1]
        if line.endswith(b'\r'):
            line = line[:-1]

        if len(line) >= buffer_size:
            raise LineTooLongError(buffer_size)

        if line:
            yield line


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _parse_finite_int(text: str) -> int:
    value = int(text)
    # Same range as a float: anything larger cannot be rendered as a number
    _parse_finite_float(text)
    return value


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant: {name}")


def decode_record(line: bytes) -> Dict[str, Any]:
    """
    Strictly decode one line as a JSON object.

    Args:
        line: Raw input line

    Returns:
        dict: Decoded record

    Raises:
        DecodeError: If the line is not valid JSON or not a JSON object.
            Invalid UTF-8 bytes are replaced with U+FFFD, not rejected
    """
    try:
        text = line.decode('utf-8', errors='replace')
        data = json.loads(
            text,
            parse_float=_parse_finite_float,
            parse_int=_parse_finite_int,
            parse_constant=_reject_constant,
        )
    except (ValueError, RecursionError) as e:
        raise DecodeError(str(e)) from e

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")

    return data


@dataclass
class StreamStats:
    """Counters for one run"""
    lines: int = 0
    records: int = 0
    decode_errors: int = 0
    empty_records: int = 0


class LogfmtStream:
    """Reads JSON lines, writes logfmt lines and echoes undecodable input"""

    def __init__(
        self,
        config: RenderConfig,
        stdin: BinaryIO,
        stdout: BinaryIO,
        stderr: BinaryIO,
        buffer_size: int = BUFFER_SIZE
    ):
        self.config = config
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.buffer_size = buffer_size
        self.renderer = Renderer(config)
        self.stats = StreamStats()

    def run(self) -> StreamStats:
        """
        Process the input until it ends.

        Decode errors are handled per line. Anything else raised here
        (LineTooLongError, UnsupportedValueError, OSError on write) ends
        the run.
        """
        for line in read_lines(self.stdin, self.buffer_size):
            self.stats.lines += 1
            self.process_line(line)

        return self.stats

    def process_line(self, line: bytes) -> Optional[str]:
        """Convert a single raw line, returning the rendered text if any"""
        try:
            record = decode_record(line)
        except DecodeError as e:
            self.stats.decode_errors += 1
            logger.debug("Passing through undecodable line", extra={'context': {'line': self.stats.lines, 'error': str(e)}})
            self._echo_error_line(line)
            return None

        rendered = self.renderer.render_record(record)
        if rendered is None:
            self.stats.empty_records += 1
            return None

        click.echo(rendered.encode('utf-8'), file=self.stdout)
        self.stats.records += 1
        return rendered

    def _echo_error_line(self, line: bytes):
        if self.config.color:
            line = ANSI_WARNING.encode() + line + ANSI_RESET.encode()
        click.echo(line, file=self.stderr)
