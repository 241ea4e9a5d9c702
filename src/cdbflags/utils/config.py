import copy
import json
from pathlib import Path
from typing import Any

DEFAULT_CONFIG = {
    "database_name": "compile_commands.json",
    "fallback": True,
    "projects": {},
    "log_file": "",
}


class ConfigManager:
    """
    Persistent user settings stored in ~/.cdbflags/config.json.
    Missing keys come from DEFAULT_CONFIG.
    """
    def __init__(self):
        self.config_dir = Path.home() / ".cdbflags"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> dict:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    user_config = json.load(f)
                if isinstance(user_config, dict):
                    config.update(self._valid_values(user_config))
            except (OSError, json.JSONDecodeError):
                # Corrupt config: keep defaults
                pass
        return config

    @staticmethod
    def _valid_values(user_config: dict) -> dict:
        """Drops known keys whose value has the wrong type, so the default applies."""
        return {
            key: value for key, value in user_config.items()
            if key not in DEFAULT_CONFIG or isinstance(value, type(DEFAULT_CONFIG[key]))
        }

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()

    @property
    def log_path(self) -> Path:
        """Query log location; an empty `log_file` means the config directory."""
        log_file = self.get("log_file")
        if log_file:
            return Path(log_file).expanduser()
        return self.config_dir / "cdbflags.log"

    def add_project(self, root: str, db_path: str):
        projects = dict(self.get("projects") or {})
        projects[root] = db_path
        self.set("projects", projects)

    def remove_project(self, root: str) -> bool:
        projects = dict(self.get("projects") or {})
        if root not in projects:
            return False
        del projects[root]
        self.set("projects", projects)
        return True
