"""Tests for ConfigManager persistence and project registration."""
import json
from pathlib import Path
from unittest.mock import patch
from cdbflags.utils.config import ConfigManager, DEFAULT_CONFIG


def _manager(config_dir: Path) -> ConfigManager:
    with patch.object(ConfigManager, "__init__", lambda self: None):
        mgr = ConfigManager()
    mgr.config_dir = config_dir
    mgr.config_file = config_dir / "config.json"
    mgr.config = mgr.load_config()
    return mgr


class TestConfigDefaults:

    def test_default_database_name(self):
        assert DEFAULT_CONFIG["database_name"] == "compile_commands.json"

    def test_fallback_enabled_by_default(self):
        assert DEFAULT_CONFIG["fallback"] is True

    def test_no_projects_by_default(self):
        assert DEFAULT_CONFIG["projects"] == {}


class TestConfigManagerLoadSave:

    def test_creates_config_dir(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        _manager(config_dir)
        assert config_dir.exists()

    def test_defaults_when_no_file(self, tmp_path):
        mgr = _manager(tmp_path / ".cdbflags")
        assert mgr.get("database_name") == "compile_commands.json"
        assert mgr.get("fallback") is True

    def test_merges_user_config(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"fallback": False}))
        mgr = _manager(config_dir)
        assert mgr.get("fallback") is False
        assert mgr.get("database_name") == "compile_commands.json"

    def test_corrupt_config_falls_back_to_defaults(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("NOT VALID JSON {{{")
        mgr = _manager(config_dir)
        assert mgr.get("fallback") is True

    def test_defaults_not_shared_between_managers(self, tmp_path):
        mgr = _manager(tmp_path / "one")
        mgr.config["projects"]["/x"] = "/x/db.json"
        assert DEFAULT_CONFIG["projects"] == {}

    def test_set_persists(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        mgr = _manager(config_dir)
        mgr.set("database_name", "cdb.json")
        assert _manager(config_dir).get("database_name") == "cdb.json"

    def test_get_missing_key_returns_default(self, tmp_path):
        mgr = _manager(tmp_path / ".cdbflags")
        assert mgr.get("nonexistent", "fallback") == "fallback"
        assert mgr.get("nonexistent") is None


class TestLogPath:

    def test_default_log_in_config_dir(self, tmp_path):
        mgr = _manager(tmp_path / ".cdbflags")
        assert mgr.log_path == tmp_path / ".cdbflags" / "cdbflags.log"

    def test_custom_log_file(self, tmp_path):
        mgr = _manager(tmp_path / ".cdbflags")
        mgr.config["log_file"] = str(tmp_path / "q.log")
        assert mgr.log_path == tmp_path / "q.log"


class TestProjects:

    def test_add_and_remove(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        mgr = _manager(config_dir)
        mgr.add_project("/proj", "/proj/build/compile_commands.json")
        assert _manager(config_dir).get("projects") == {"/proj": "/proj/build/compile_commands.json"}

        assert mgr.remove_project("/proj") is True
        assert _manager(config_dir).get("projects") == {}

    def test_remove_unknown(self, tmp_path):
        mgr = _manager(tmp_path / ".cdbflags")
        assert mgr.remove_project("/nowhere") is False


class TestWrongTypedValues:
    """Values of the wrong type fall back to the default, like corrupt JSON."""

    def test_projects_list_ignored(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"projects": ["/x"], "fallback": False}))
        mgr = _manager(config_dir)
        assert mgr.get("projects") == {}
        assert mgr.get("fallback") is False

    def test_database_name_number_ignored(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"database_name": 3}))
        assert _manager(config_dir).get("database_name") == "compile_commands.json"

    def test_unknown_keys_kept(self, tmp_path):
        config_dir = tmp_path / ".cdbflags"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"editor": "emacs"}))
        assert _manager(config_dir).get("editor") == "emacs"
