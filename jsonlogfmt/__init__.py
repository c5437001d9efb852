"""
jsonlogfmt: Convert newline-delimited JSON logs to human-readable logfmt

Reads one JSON object per line and writes it back as a single key=value line,
keys sorted with "at" first, values quoted only when necessary.
"""

__version__ = '1.0.0'

from jsonlogfmt.config import RenderConfig, build_config, load_config
from jsonlogfmt.errors import (
    ConfigError,
    DecodeError,
    LineTooLongError,
    LogfmtError,
    UnsupportedValueError,
)
from jsonlogfmt.keys import ExclusionSet, select_keys, sorted_keys
from jsonlogfmt.quoting import quote, unquote
from jsonlogfmt.render import Renderer, format_number
from jsonlogfmt.stream import LogfmtStream, decode_record, read_lines

__all__ = [
    'ConfigError',
    'DecodeError',
    'ExclusionSet',
    'LineTooLongError',
    'LogfmtError',
    'LogfmtStream',
    'RenderConfig',
    'Renderer',
    'UnsupportedValueError',
    'build_config',
    'decode_record',
    'format_number',
    'load_config',
    'quote',
    'read_lines',
    'select_keys',
    'sorted_keys',
    'unquote',
]
