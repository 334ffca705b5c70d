"""
Unit tests for the YAML key configuration loader.

Tests loading, scheme overrides, fallback on bad files and validation.
"""
import pytest

from uncursed.core.input import DEFAULT_KEY_NAMES, KeyAction
from uncursed.core.input_system import KeyConfigLoader
from uncursed.core.log_manager import LogCategory
from uncursed.renderers.buffer_surface import BUFFER_KEY_CODES


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file and return its path."""
    def _write(text):
        path = tmp_path / "keys.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


def _texts(log_manager, category):
    return [msg.text for msg in log_manager.get_messages(categories={category})]


class TestShippedConfig:
    """Test the key_mappings.yaml shipped with the project."""

    def test_loads(self, log_manager):
        loader = KeyConfigLoader(log_manager=log_manager)

        assert loader.load_config()
        assert loader.get_active_scheme() == "default"
        assert loader.get_available_schemes() == ["default", "vi"]

    def test_every_key_resolves(self, log_manager):
        loader = KeyConfigLoader(log_manager=log_manager)
        loader.load_config()
        keys = loader.get_bindings(BUFFER_KEY_CODES)

        assert _texts(log_manager, LogCategory.WARNING) == []
        assert keys.is_select(BUFFER_KEY_CODES["KEY_ENTER"])
        assert keys.is_up(ord("w"))

    def test_vi_scheme(self, log_manager):
        loader = KeyConfigLoader(log_manager=log_manager)
        loader.load_config()

        assert loader.set_active_scheme("vi")
        keys = loader.get_bindings(BUFFER_KEY_CODES)

        assert loader.get_key_names(KeyAction.UP) == ["UP", "k"]
        assert keys.is_up(ord("k"))
        assert not keys.is_up(ord("w"))
        assert keys.is_cancel(ord("q"))
        # Actions without overrides keep the base bindings
        assert keys.is_select(32)

    def test_validates_cleanly(self):
        loader = KeyConfigLoader()
        loader.load_config()
        result = loader.validate_config()

        assert result["valid"]
        assert result["errors"] == []
        assert result["warnings"] == []
        assert result["active_scheme"] == "default"


class TestFallback:
    """Test recovery from unusable configuration files."""

    def test_missing_file(self, tmp_path, log_manager):
        loader = KeyConfigLoader(str(tmp_path / "absent.yaml"), log_manager)

        assert not loader.load_config()
        assert "not found" in _texts(log_manager, LogCategory.WARNING)[0]
        assert loader.get_key_names(KeyAction.CANCEL) == DEFAULT_KEY_NAMES[KeyAction.CANCEL]

    def test_malformed_yaml(self, write_config, log_manager):
        loader = KeyConfigLoader(write_config("bindings: [unclosed\n  up: ]]"), log_manager)

        assert not loader.load_config()
        assert _texts(log_manager, LogCategory.ERROR)[0].startswith("Error loading key config")
        assert loader.get_active_scheme() == "default"
        assert loader.get_bindings(BUFFER_KEY_CODES).is_up(BUFFER_KEY_CODES["UP"])

    def test_not_a_mapping(self, write_config, log_manager):
        loader = KeyConfigLoader(write_config("- up\n- down\n"), log_manager)

        assert not loader.load_config()
        assert "must be a mapping" in _texts(log_manager, LogCategory.ERROR)[0]

    def test_empty_file_uses_defaults(self, write_config):
        loader = KeyConfigLoader(write_config(""))

        assert loader.load_config()
        keys = loader.get_bindings(BUFFER_KEY_CODES)
        assert keys.is_cancel(27)

    @pytest.mark.parametrize("text,section", [
        ("config: vi\nbindings:\n  up: [UP]\n", "'config'"),
        ("bindings:\n  - up\n  - down\n", "'bindings'"),
        ("schemes: [vi]\n", "'schemes'"),
        ("schemes:\n  vi: [UP, k]\n", "scheme 'vi'"),
        ("schemes:\n  vi:\n    overrides: [UP, k]\n", "overrides of scheme 'vi'"),
    ])
    def test_section_not_a_mapping(self, write_config, log_manager, text, section):
        loader = KeyConfigLoader(write_config(text), log_manager)

        assert not loader.load_config()
        errors = _texts(log_manager, LogCategory.ERROR)
        assert errors[0].startswith("Malformed key config")
        assert section in errors[0]
        assert loader.get_active_scheme() == "default"
        assert loader.get_available_schemes() == ["default"]
        keys = loader.get_bindings(BUFFER_KEY_CODES)
        assert keys.is_up(ord("w"))
        assert keys.is_cancel(27)

    def test_bindings_before_load(self):
        loader = KeyConfigLoader("does/not/matter.yaml")
        keys = loader.get_bindings(BUFFER_KEY_CODES)
        assert keys.is_down(ord("s"))


class TestParsing:
    """Test how bindings and overrides are read."""

    def test_partial_bindings_keep_defaults(self, write_config):
        loader = KeyConfigLoader(write_config("bindings:\n  up: ['i']\n"))
        loader.load_config()
        keys = loader.get_bindings(BUFFER_KEY_CODES)

        assert keys.is_up(ord("i"))
        assert not keys.is_up(ord("w"))
        assert keys.is_down(ord("s"))

    def test_scalar_binding(self, write_config):
        loader = KeyConfigLoader(write_config("bindings:\n  cancel: TAB\n"))
        loader.load_config()
        assert loader.get_key_names(KeyAction.CANCEL) == ["TAB"]
        assert loader.get_bindings(BUFFER_KEY_CODES).is_cancel(9)

    def test_unknown_action_warns(self, write_config, log_manager):
        loader = KeyConfigLoader(write_config("bindings:\n  jump: [SPACE]\n"), log_manager)
        loader.load_config()

        assert "Unknown action 'jump'" in _texts(log_manager, LogCategory.WARNING)[0]
        result = loader.validate_config()
        assert not result["valid"]
        assert "Unknown action in config: jump" in result["errors"]

    def test_unknown_key_warns(self, write_config, log_manager):
        loader = KeyConfigLoader(write_config("bindings:\n  up: [NOPE]\n"), log_manager)
        loader.load_config()
        keys = loader.get_bindings(BUFFER_KEY_CODES)

        assert keys.bindings[KeyAction.UP] == set()
        assert "Unknown key 'NOPE' for action 'up'" in _texts(log_manager, LogCategory.WARNING)

    def test_active_scheme_from_file(self, write_config):
        text = (
            "config:\n  active_scheme: arrows\n"
            "bindings:\n  up: [UP, 'w']\n"
            "schemes:\n  arrows:\n    overrides:\n      up: [UP]\n"
        )
        loader = KeyConfigLoader(write_config(text))
        loader.load_config()

        assert loader.get_active_scheme() == "arrows"
        assert loader.get_key_names(KeyAction.UP) == ["UP"]

    def test_undefined_active_scheme_reported(self, write_config):
        loader = KeyConfigLoader(write_config("config:\n  active_scheme: emacs\n"))
        assert loader.load_config()

        result = loader.validate_config()
        assert "Active scheme 'emacs' is not defined" in result["errors"]
        assert loader.get_key_names(KeyAction.UP) == DEFAULT_KEY_NAMES[KeyAction.UP]

    def test_set_unknown_scheme(self):
        loader = KeyConfigLoader()
        loader.load_config()
        assert not loader.set_active_scheme("emacs")
        assert loader.get_active_scheme() == "default"

    def test_switch_back_to_default(self):
        loader = KeyConfigLoader()
        loader.load_config()
        loader.set_active_scheme("vi")
        loader.set_active_scheme("default")
        assert loader.get_key_names(KeyAction.UP) == ["UP", "w", "W"]

    def test_missing_actions_are_warnings(self, write_config):
        loader = KeyConfigLoader(write_config("bindings:\n  up: [UP]\n"))
        loader.load_config()
        result = loader.validate_config()

        assert result["valid"]
        assert len(result["warnings"]) == len(KeyAction) - 1

    def test_reload_picks_up_changes(self, tmp_path):
        path = tmp_path / "keys.yaml"
        path.write_text("bindings:\n  up: ['i']\n", encoding="utf-8")
        loader = KeyConfigLoader(str(path))
        loader.load_config()

        path.write_text("bindings:\n  up: ['o']\n", encoding="utf-8")
        assert loader.reload_config()
        assert loader.get_key_names(KeyAction.UP) == ["o"]
