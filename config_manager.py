"""JSON configuration for the puzzle generation tools.

``config.json`` has three sections, each optional:

- ``generation_settings``: ``max_attempts`` and ``seed`` handed to the generator.
- ``experiment_settings``: ``sizes``, ``runs_per_size``, ``num_processes`` and
  ``validate`` for benchmark runs.
- ``output_settings``: ``output_dir``, ``run_tag`` and ``date_in_filenames``.

Values are returned as plain dicts; range checks (e.g. supported board sizes)
belong to the caller.
"""
import json
from pathlib import Path


class ConfigManager:
    """Read and update a configuration file.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        File to load. It must exist; a missing file raises ``FileNotFoundError``.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        if not self.config_path.exists():
            raise FileNotFoundError(f"no configuration at {self.config_path}")
        with self.config_path.open() as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.config_path} must contain a JSON object")
        return data

    def save_config(self):
        with self.config_path.open("w") as f:
            json.dump(self.config, f, indent=2)

    def section(self, name):
        """Return one section as a dict (empty when the file omits it)."""
        return self.config.get(name, {})

    def get_generation_settings(self):
        return self.section("generation_settings")

    def get_experiment_settings(self):
        return self.section("experiment_settings")

    def get_output_settings(self):
        return self.section("output_settings")

    def update_setting(self, section, key, value):
        """Set ``section.key`` to ``value`` and write the file back."""
        self.config.setdefault(section, {})[key] = value
        self.save_config()
