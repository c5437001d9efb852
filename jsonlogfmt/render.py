"""
Rendering of JSON values into logfmt text.

Nested arrays and objects are walked with an explicit work stack, so any
record the decoder accepts renders regardless of depth.
"""

from typing import Any, Dict, List, Optional

from jsonlogfmt.config import ANSI_KEY, ANSI_RESET, RenderConfig
from jsonlogfmt.errors import UnsupportedValueError
from jsonlogfmt.keys import select_keys, sorted_keys
from jsonlogfmt.quoting import format_string

# Work stack entries: (_TEXT, str) is written as-is, (_VALUE, value) is rendered
_TEXT = 0
_VALUE = 1


def format_number(value, precision: int = 4) -> str:
    """
    Format a JSON number in general ('g') notation.

    Lossy: 3.14159 renders as 3.142 with the default precision.
    Integers go through the same rule since JSON has a single number type.
    """
    return '%.*g' % (precision, float(value))


class Renderer:
    """Converts decoded JSON values to logfmt tokens"""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render_value(self, value: Any) -> str:
        """
        Render any JSON value.

        Args:
            value: bool, int, float, str, None, list or dict

        Returns:
            logfmt text for value

        Raises:
            UnsupportedValueError: If value (or anything nested in it) is
                outside the JSON value model
        """
        parts: List[str] = []
        stack = [(_VALUE, value)]

        while stack:
            kind, item = stack.pop()
            if kind == _TEXT:
                parts.append(item)
            elif isinstance(item, list):
                self._push_array(stack, item)
            elif isinstance(item, dict):
                self._push_object(stack, item)
            else:
                parts.append(self._render_scalar(item))

        return ''.join(parts)

    def _render_scalar(self, value: Any) -> str:
        # bool before numbers: bool is a subclass of int
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (int, float)):
            return format_number(value, self.config.precision)
        if isinstance(value, str):
            return format_string(value)
        if value is None:
            return 'null'

        raise UnsupportedValueError(value)

    def _push_array(self, stack: list, values: List[Any]):
        # Pushed in reverse so the opening bracket is popped first
        stack.append((_TEXT, ']'))
        for i in range(len(values) - 1, -1, -1):
            stack.append((_VALUE, values[i]))
            if i > 0:
                stack.append((_TEXT, ' '))
        stack.append((_TEXT, '['))

    def _push_object(self, stack: list, obj: Dict[str, Any]):
        opening, closing = self.config.object_brackets
        keys = sorted_keys(obj, pin_at=self.config.pin_at)

        stack.append((_TEXT, closing))
        for i in range(len(keys) - 1, -1, -1):
            stack.append((_VALUE, obj[keys[i]]))
            stack.append((_TEXT, format_string(keys[i]) + '='))
            if i > 0:
                stack.append((_TEXT, ' '))
        stack.append((_TEXT, opening))

    def _render_pair(self, key: str, value: Any, color: bool) -> str:
        prefix = format_string(key) + '='
        if color:
            prefix = ANSI_KEY + prefix + ANSI_RESET
        return prefix + self.render_value(value)

    def render_record(self, record: Dict[str, Any]) -> Optional[str]:
        """
        Render a top-level record as one logfmt line (without newline).

        Exclusion globs and key coloring apply here only, never to nested
        objects.

        Returns:
            The line, or None if no key is left to emit
        """
        keys = select_keys(record, self.config.exclude, pin_at=self.config.pin_at)
        if not keys:
            return None

        return ' '.join(
            self._render_pair(k, record[k], color=self.config.color)
            for k in keys
        )
