"""Server configuration read from a TOML file."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from awkit.dirs import get_config_dir

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS = "127.0.0.1"
HEADER = "### DEFAULT SETTINGS ###\n"

_PORTS_BY_MODE = {False: 5600, True: 5666}


def default_port(testing: bool) -> int:
    """Return the default port, which differs in testing mode."""
    return _PORTS_BY_MODE[bool(testing)]


@dataclass
class AWConfig:
    """Address, port, CORS origins and custom static directories of the server."""

    address: str = DEFAULT_ADDRESS
    port: int = _PORTS_BY_MODE[False]
    testing: bool = False
    cors: list[str] = field(default_factory=list)
    custom_static: dict[str, str] = field(default_factory=dict)

    @classmethod
    def defaults(cls, testing: bool = False) -> AWConfig:
        """Return the default configuration for the given mode."""
        return cls(port=default_port(testing), testing=testing)

    @classmethod
    def from_toml(cls, text: str, testing: bool = False) -> AWConfig:
        """Parse a configuration; missing keys take their defaults."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as err:
            raise ValueError(f"Failed to parse config file: {err}") from err
        config = cls.defaults(testing)
        if "address" in data:
            config.address = _expect_str(data["address"], "address")
        if "port" in data:
            port = data["port"]
            if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
                raise ValueError(f"config value 'port' must be a port number, got {port!r}")
            config.port = port
        if "cors" in data:
            cors = data["cors"]
            if not isinstance(cors, list):
                raise ValueError("config value 'cors' must be a list of strings")
            config.cors = [_expect_str(origin, "cors") for origin in cors]
        if "custom_static" in data:
            mapping = data["custom_static"]
            if not isinstance(mapping, dict):
                raise ValueError("config value 'custom_static' must be a table")
            config.custom_static = {
                _expect_str(name, "custom_static"): _expect_str(path, "custom_static")
                for name, path in mapping.items()
            }
        return config

    def to_toml(self) -> str:
        """Serialize the configuration; the testing flag is not written."""
        return tomli_w.dumps(
            {
                "address": self.address,
                "port": self.port,
                "cors": list(self.cors),
                "custom_static": dict(self.custom_static),
            }
        )


def _expect_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"config value '{key}' must be a string, got {value!r}")
    return value


def commented_defaults(testing: bool) -> str:
    """Return the default configuration with every line commented out."""
    lines = AWConfig.defaults(testing).to_toml().splitlines()
    return HEADER + "".join(f"#{line}\n" for line in lines)


def create_config(testing: bool, config_dir: Path | str | None = None) -> AWConfig:
    """Load the configuration file, writing a commented-out default one first if absent."""
    directory = Path(config_dir) if config_dir is not None else get_config_dir()
    path = directory / ("config-testing.toml" if testing else "config.toml")
    if not path.is_file():
        logger.debug("Writing default commented out config at %s", path)
        path.write_text(commented_defaults(testing), encoding="utf-8")
    logger.debug("Reading config at %s", path)
    return AWConfig.from_toml(path.read_text(encoding="utf-8"), testing)


def parse_custom_static(text: str) -> dict[str, str]:
    """Parse ``name=/path,name2=/path2`` into a mapping."""
    mapping: dict[str, str] = {}
    for item in text.split(","):
        parts = item.split("=")
        if len(parts) < 2:
            raise ValueError(f"custom_static entry {item!r} is not of the form name=path")
        mapping[parts[0]] = parts[1]
    return mapping


def apply_custom_static(config: AWConfig, text: str) -> list[str]:
    """Add custom static paths from ``text`` and drop every entry whose path is missing.

    Returns the names that were dropped.
    """
    config.custom_static.update(parse_custom_static(text))
    removed = []
    for name, path in list(config.custom_static.items()):
        if not Path(path).exists():
            logger.error("custom_static path for %s does not exist (%s)", name, path)
            del config.custom_static[name]
            removed.append(name)
    return removed