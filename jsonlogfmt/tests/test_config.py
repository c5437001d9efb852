"""
Unit tests for settings loading and merging.
"""

import pytest

from jsonlogfmt.config import RenderConfig, build_config, load_config
from jsonlogfmt.errors import ConfigError
from jsonlogfmt.keys import ExclusionSet


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a config file and return its path"""
    def _write(text):
        path = tmp_path / 'jsonlogfmt.yml'
        path.write_text(text)
        return str(path)
    return _write


class TestRenderConfig:
    """Test RenderConfig validation"""

    def test_defaults(self):
        """Should default to pinned "at", braces, 4 digits, no color"""
        config = RenderConfig()

        assert config.exclude == ExclusionSet()
        assert config.color is False
        assert config.pin_at is True
        assert config.object_brackets == '{}'
        assert config.precision == 4

    def test_invalid_brackets(self):
        with pytest.raises(ConfigError):
            RenderConfig(object_brackets='()')

    @pytest.mark.parametrize('precision', [0, -1, True, 2.5])
    def test_invalid_precision(self, precision):
        with pytest.raises(ConfigError):
            RenderConfig(precision=precision)

    def test_frozen(self):
        """Should not allow mutation after startup"""
        config = RenderConfig()
        with pytest.raises(AttributeError):
            config.color = True


class TestLoadConfig:
    """Test load_config"""

    def test_full_config(self, write_config):
        """Should parse every supported key"""
        path = write_config("""
exclude:
  - pid
  - "req_*"
color: true
pin_at: false
object_brackets: "[]"
precision: 6
""")
        settings = load_config(path)

        assert settings['exclude'] == ['pid', 'req_*']
        assert settings['color'] is True
        assert settings['pin_at'] is False
        assert settings['object_brackets'] == '[]'
        assert settings['precision'] == 6

    def test_empty_file(self, write_config):
        """Should treat an empty file as no settings"""
        assert load_config(write_config('')) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match='not found'):
            load_config(str(tmp_path / 'missing.yml'))

    def test_invalid_yaml(self, write_config):
        with pytest.raises(ConfigError, match='Invalid YAML'):
            load_config(write_config('exclude: [unclosed'))

    def test_not_a_mapping(self, write_config):
        with pytest.raises(ConfigError):
            load_config(write_config('- pid\n- host\n'))

    def test_unknown_key(self, write_config):
        with pytest.raises(ConfigError, match='Unknown config key'):
            load_config(write_config('colour: true\n'))

    @pytest.mark.parametrize('text', [
        'exclude: pid\n',
        'exclude: [1, 2]\n',
        'color: "yes please"\n',
        'precision: true\n',
        'precision: "4"\n',
    ])
    def test_wrong_types(self, write_config, text):
        with pytest.raises(ConfigError):
            load_config(write_config(text))


class TestBuildConfig:
    """Test build_config"""

    def test_defaults(self):
        """Should produce the default configuration"""
        assert build_config() == RenderConfig()

    def test_color_follows_terminal(self):
        """Should enable color only for terminals by default"""
        assert build_config(isatty=True).color is True
        assert build_config(isatty=False).color is False

    def test_color_override(self):
        """Should let an explicit option beat terminal detection"""
        assert build_config(color=False, isatty=True).color is False
        assert build_config(color=True, isatty=False).color is True

    def test_file_color_beats_terminal(self):
        assert build_config({'color': False}, isatty=True).color is False

    def test_cli_globs_appended(self):
        """Should append command line globs to file globs"""
        config = build_config({'exclude': ['pid']}, exclude=('host', 'req_*'))

        assert config.exclude.patterns == ('pid', 'host', 'req_*')

    def test_cli_overrides_file(self):
        """Should let command line options override file settings"""
        settings = {'pin_at': True, 'object_brackets': '{}', 'precision': 6}
        config = build_config(settings, pin_at=False, object_brackets='[]')

        assert config.pin_at is False
        assert config.object_brackets == '[]'
        assert config.precision == 6

    def test_invalid_file_value(self):
        with pytest.raises(ConfigError):
            build_config({'object_brackets': '<>'})
