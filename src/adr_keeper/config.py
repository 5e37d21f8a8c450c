"""
adr-keeper Configuration

Resolves where the record store lives and how records are named.

Sources, lowest priority first:
    1. Built-in defaults
    2. .adr-keeper.yaml in the working directory
    3. ADR_KEEPER_DIR environment variable
    4. Explicit store_dir argument (the CLI's --dir option)
"""

import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from adr_keeper.exceptions import ConfigError


CONFIG_FILENAME = ".adr-keeper.yaml"
DEFAULT_STORE_DIR = "docs/adr"


@dataclass
class StoreConfig:
    """Settings threaded into every store component."""
    store_dir: Path = Path(DEFAULT_STORE_DIR)
    index_file: str = "README.md"
    template_file: str = "template.md"
    record_prefix: str = "adr"
    record_extension: str = ".md"
    number_width: int = 3

    @property
    def index_path(self) -> Path:
        return self.store_dir / self.index_file

    @property
    def template_path(self) -> Path:
        return self.store_dir / self.template_file

    @property
    def reserved_files(self) -> tuple:
        return (self.index_file, self.template_file)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["store_dir"] = str(self.store_dir)
        return data


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {config_path}",
            remediation=f"Fix the syntax of {config_path}",
            details=str(e)
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read {config_path}",
            details=str(e)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{config_path} must contain a mapping of settings",
            remediation="Use 'key: value' lines, e.g. 'store_dir: docs/adr'"
        )
    return data


def load_config(
    config_path: Optional[Path] = None,
    store_dir: Optional[str] = None
) -> StoreConfig:
    """Build the store configuration.

    Args:
        config_path: YAML file to read (default: ./.adr-keeper.yaml if present)
        store_dir: Explicit store directory, overrides everything else

    Returns:
        Resolved StoreConfig

    Raises:
        ConfigError: If the file is invalid or holds unknown settings
    """
    values: Dict[str, Any] = {}

    if config_path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        config_path = candidate if candidate.exists() else None

    if config_path is not None:
        known = {f.name for f in fields(StoreConfig)}
        for key, value in _read_config_file(Path(config_path)).items():
            if key not in known:
                raise ConfigError(
                    f"Unknown setting '{key}'",
                    config_key=key,
                    details=f"Known settings: {', '.join(sorted(known))}"
                )
            values[key] = value

    env_dir = os.environ.get("ADR_KEEPER_DIR")
    if env_dir:
        values["store_dir"] = env_dir
    if store_dir:
        values["store_dir"] = store_dir

    if "store_dir" in values:
        values["store_dir"] = Path(str(values["store_dir"]))

    width = values.get("number_width", StoreConfig.number_width)
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise ConfigError(
            f"number_width must be a positive integer, got {width!r}",
            config_key="number_width"
        )

    for key in ("index_file", "template_file", "record_prefix", "record_extension"):
        if key in values and not isinstance(values[key], str):
            raise ConfigError(f"{key} must be a string", config_key=key)

    return StoreConfig(**values)
