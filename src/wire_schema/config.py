"""
Configuration files for wire-schema.

Settings come from up to two TOML files, the later one winning:

1. User config: ``~/.config/wire-schema/config.toml``
2. Project config: ``.wire-schema.toml`` or ``wire-schema.toml`` in the
   working directory or the nearest parent, searching no higher than the
   directory that holds ``.git``

Command-line flags override both. Example project file::

    [defaults]
    format = "json"

    [import]
    round_trip_mode = "normalized"
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from wire_schema.core.types import RoundTripMode
from wire_schema.exceptions import ConfigurationError
from wire_schema.schema import ImportOptions

CONFIG_FILENAMES = [".wire-schema.toml", "wire-schema.toml"]

USER_CONFIG_PATH = Path.home() / ".config" / "wire-schema" / "config.toml"


@dataclass
class DefaultsConfig:
    """``[defaults]``: output options shared by the commands."""

    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class ImportConfig:
    """``[import]``: importer behaviour."""

    verify_round_trip: bool = True
    round_trip_mode: str = "exact"
    strict: bool = False


# TOML table -> Config attribute ("import" is a keyword)
SECTIONS = {"defaults": "defaults", "import": "import_"}


@dataclass
class Config:
    """Defaults overlaid with the user config and then the project config."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    import_: ImportConfig = field(default_factory=ImportConfig)

    # "section.key" -> file the value came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Read the user config, then the project config nearest ``start_dir``.

        Args:
            start_dir: Where the project search begins (default: current directory)

        Raises:
            ConfigError: A file is unreadable, is not TOML, or holds a value
                of the wrong type
        """
        config = cls()
        user = USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None
        project = _find_project_config(start_dir or Path.cwd())
        for path in (user, project):
            if path is not None:
                config.merge(_load_toml_file(path), str(path))
        return config

    def merge(self, data: dict[str, Any], source: str) -> None:
        """
        Overlay one parsed config file.

        Unknown tables and keys produce a warning and are skipped.

        Raises:
            ConfigError: A known key holds a value of the wrong type
        """
        for section, table in data.items():
            if section not in SECTIONS:
                warnings.warn(f"Unknown config key '{section}' in {source}", stacklevel=2)
                continue
            if not isinstance(table, dict):
                raise ConfigError(
                    f"Config key '{section}' must be a table",
                    context={"source": source},
                )

            target = getattr(self, SECTIONS[section])
            expected = {f.name: type(f.default) for f in fields(target)}
            for key, value in table.items():
                name = f"{section}.{key}"
                if key not in expected:
                    warnings.warn(f"Unknown config key '{name}' in {source}", stacklevel=2)
                    continue
                if type(value) is not expected[key]:
                    raise ConfigError(
                        f"Config key '{name}' must be a {expected[key].__name__}",
                        context={"source": source, "value": value},
                    )
                setattr(target, key, value)
                self._sources[name] = source

    def get_source(self, key: str) -> str:
        """File a "section.key" setting was read from, or "default"."""
        return self._sources.get(key, "default")

    def import_options(self) -> ImportOptions:
        """
        Importer options from the ``[import]`` table.

        Raises:
            ConfigError: If round_trip_mode is not a known mode
        """
        try:
            mode = RoundTripMode.from_string(self.import_.round_trip_mode)
        except ValueError as e:
            raise ConfigError(
                str(e),
                context={"source": self.get_source("import.round_trip_mode")},
            ) from e
        return ImportOptions(
            verify_round_trip=self.import_.verify_round_trip,
            round_trip_mode=mode,
        )


class ConfigError(ConfigurationError):
    """Configuration file could not be read or holds an unusable value."""


def _find_project_config(start_dir: Path) -> Path | None:
    """Nearest project config at or above ``start_dir``, not searching past a ``.git`` root."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        if (directory / ".git").exists():
            return None
    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file.

    Raises:
        ConfigError: If the file is unreadable or not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def generate_template() -> str:
    """Commented-out config file listing every setting and its default."""
    return """# wire-schema configuration
# Save as .wire-schema.toml in a project, or as ~/.config/wire-schema/config.toml

[defaults]
# Output of `wire-schema check`: "table" or "json"
# format = "table"

# Debug logging for every command, like -v
# verbose = false

# Print only the issues, without summary lines
# quiet = false

[import]
# Export each imported file again and report differences from the input
# verify_round_trip = true

# "exact" compares byte for byte; "normalized" ignores line endings,
# extra whitespace, blank lines and comments
# round_trip_mode = "exact"

# Fail `wire-schema check` on warnings too
# strict = false
"""


def get_config_paths() -> dict[str, Path | None]:
    """Config files that Config.load() would read from the current directory."""
    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": _find_project_config(Path.cwd()),
    }
