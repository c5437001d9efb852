"""
Runtime settings for the converter.

Settings come from an optional YAML file and from command line options and
are frozen into a RenderConfig once at startup.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional

import yaml

from jsonlogfmt.errors import ConfigError
from jsonlogfmt.keys import ExclusionSet

OBJECT_BRACKETS = ('{}', '[]')
DEFAULT_PRECISION = 4

ANSI_KEY = '\033[0;36m'
ANSI_WARNING = '\033[0;33m'
ANSI_RESET = '\033[0m'


@dataclass(frozen=True)
class RenderConfig:
    """Immutable rendering settings shared by the renderer and the stream"""
    exclude: ExclusionSet = field(default_factory=ExclusionSet)
    color: bool = False
    pin_at: bool = True
    object_brackets: str = '{}'
    precision: int = DEFAULT_PRECISION

    def __post_init__(self):
        if self.object_brackets not in OBJECT_BRACKETS:
            raise ConfigError(
                f"Invalid object_brackets: {self.object_brackets!r}. Must be one of {list(OBJECT_BRACKETS)}"
            )
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ConfigError(f"Invalid precision: {self.precision!r}. Must be an integer >= 1")


# key -> accepted types
_FILE_SCHEMA = {
    'exclude': list,
    'color': bool,
    'pin_at': bool,
    'object_brackets': str,
    'precision': int,
}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Parse and validate a YAML settings file.

    Example file:

        exclude:
          - pid
          - "req.*"
        color: false
        pin_at: true
        object_brackets: "{}"
        precision: 4

    Args:
        config_path: Path to the YAML file

    Returns:
        dict: Validated settings (only the keys present in the file)

    Raises:
        ConfigError: If the file is missing or the configuration is invalid
    """
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}")

    # An empty file is an empty configuration
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")

    for key, value in data.items():
        if key not in _FILE_SCHEMA:
            raise ConfigError(f"Unknown config key: {key}. Must be one of {sorted(_FILE_SCHEMA)}")

        expected = _FILE_SCHEMA[key]
        # bool is a subclass of int
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Invalid {key}: expected {expected.__name__}, got {type(value).__name__}")

    for pattern in data.get('exclude', []):
        if not isinstance(pattern, str):
            raise ConfigError(f"Invalid exclude pattern: {pattern!r}")

    return data


def build_config(
    settings: Optional[Dict[str, Any]] = None,
    exclude: Iterable[str] = (),
    color: Optional[bool] = None,
    pin_at: Optional[bool] = None,
    object_brackets: Optional[str] = None,
    isatty: bool = False
) -> RenderConfig:
    """
    Merge file settings with command line options.

    Command line globs are appended to the file's globs; any other option
    given on the command line overrides the file. Color falls back to
    terminal detection when neither source sets it.

    Args:
        settings: Output of load_config(), or None
        exclude: Globs from the command line
        color: Forced color mode, or None
        pin_at: Forced pinning mode, or None
        object_brackets: Forced bracket style, or None
        isatty: Whether the output stream is an interactive terminal

    Returns:
        RenderConfig
    """
    settings = dict(settings or {})

    config = RenderConfig(
        exclude=ExclusionSet(settings.get('exclude', [])).extend(exclude),
        color=settings.get('color', isatty),
        pin_at=settings.get('pin_at', True),
        object_brackets=settings.get('object_brackets', '{}'),
        precision=settings.get('precision', DEFAULT_PRECISION),
    )

    overrides = {}
    if color is not None:
        overrides['color'] = color
    if pin_at is not None:
        overrides['pin_at'] = pin_at
    if object_brackets is not None:
        overrides['object_brackets'] = object_brackets

    return replace(config, **overrides)
