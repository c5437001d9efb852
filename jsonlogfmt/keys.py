"""
Key ordering and exclusion for logfmt records.
"""

from fnmatch import fnmatchcase
from typing import Any, Dict, Iterable, List, Tuple

PINNED_KEY = 'at'


def _normalize_glob(pattern: str) -> str:
    """Rewrite [^...] classes as [!...], the negation fnmatch understands"""
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        out.append(char)
        i += 1
        if char != '[':
            continue

        # A ']' right after the opening (or its negation) is a member
        j = i
        if j < n and pattern[j] in '!^':
            j += 1
        if j < n and pattern[j] == ']':
            j += 1
        end = pattern.find(']', j)
        if end < 0:
            # Unclosed: fnmatch reads the '[' literally
            continue

        members = pattern[i:end]
        if members.startswith('^'):
            members = '!' + members[1:]
        out.append(members + ']')
        i = end + 1

    return ''.join(out)


class ExclusionSet:
    """Ordered, immutable set of shell-style glob patterns for key names"""

    def __init__(self, patterns: Iterable[str] = ()):
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._compiled = tuple(_normalize_glob(p) for p in self._patterns)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def match(self, key: str) -> bool:
        """Return True if any pattern matches key"""
        return any(fnmatchcase(key, pattern) for pattern in self._compiled)

    def extend(self, patterns: Iterable[str]) -> 'ExclusionSet':
        """Return a new set with patterns appended"""
        return ExclusionSet(self._patterns + tuple(patterns))

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self):
        return iter(self._patterns)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExclusionSet):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"ExclusionSet({list(self._patterns)!r})"


def sorted_keys(record: Dict[str, Any], pin_at: bool = True) -> List[str]:
    """
    Return record's keys, sorted mostly alphabetically.

    Args:
        record: Decoded JSON object
        pin_at: Move the "at" key to the front when present

    Returns:
        Keys in emission order
    """
    if not pin_at:
        return sorted(record)

    keys = sorted(k for k in record if k != PINNED_KEY)
    if PINNED_KEY in record:
        keys.insert(0, PINNED_KEY)
    return keys


def select_keys(
    record: Dict[str, Any],
    exclude: ExclusionSet,
    pin_at: bool = True
) -> List[str]:
    """Sorted keys of record with excluded keys skipped"""
    return [k for k in sorted_keys(record, pin_at=pin_at) if not exclude.match(k)]
