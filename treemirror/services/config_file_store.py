import os

import yaml

from treemirror.exceptions import ConfigNotFoundError


class ConfigFileStore:
    """Filesystem/YAML IO for mirror job files.

    Responsibility: locate, read, and parse YAML files on disk. Relative
    paths resolve against `configs_dir`.
    """

    def __init__(self, *, configs_dir: str = "."):
        self.configs_dir = configs_dir

    def _resolve_path(self, config_path: str) -> str:
        return config_path if os.path.isabs(config_path) else os.path.join(self.configs_dir, config_path)

    def load_yaml_dict(self, config_path: str) -> dict:
        """Return the parsed YAML mapping stored at `config_path`."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            raise ConfigNotFoundError(config_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigNotFoundError(config_path, f"could not be read: {e}") from e
        if not isinstance(data, dict):
            raise ConfigNotFoundError(config_path, "is not a YAML mapping")
        return data
