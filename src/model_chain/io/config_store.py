"""Chain config file I/O.

Persists {"enabled": bool, "chain": [str, ...]} as JSON at
$MODEL_CHAIN_CONFIG, or XDG_CONFIG_HOME/antigravity-proxy/model-chain.json.

Loading never fails: a missing or unusable file yields the default config.
Saving is all-or-nothing and raises ConfigSaveError on failure.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import model_chain.catalog

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base class for chain config persistence failures."""


class ConfigSaveError(ConfigError):
    """Raised when the config could not be written. Nothing was persisted."""


@dataclass
class ChainConfig:
    """In-memory chain configuration owned by one editing session."""

    enabled: bool = False
    chain: list[str] = field(default_factory=model_chain.catalog.default_chain)

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def to_dict(self) -> dict:
        return {"enabled": bool(self.enabled), "chain": list(self.chain)}


def default_config() -> ChainConfig:
    return ChainConfig(enabled=False, chain=model_chain.catalog.default_chain())


def get_config_path() -> Path:
    """Return path to the chain config file.

    MODEL_CHAIN_CONFIG wins; otherwise XDG_CONFIG_HOME (default ~/.config)
    / antigravity-proxy / model-chain.json.
    """
    override = os.environ.get("MODEL_CHAIN_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "antigravity-proxy" / "model-chain.json"


def parse_config(data: object) -> ChainConfig:
    """Validate decoded JSON into a ChainConfig. Raises ValueError on bad shape."""
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    chain = data.get("chain")
    if not isinstance(chain, list) or not all(isinstance(item, str) for item in chain):
        raise ValueError("'chain' must be a list of model ids")
    if not chain:
        raise ValueError("'chain' must contain at least one model")
    enabled = data.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ValueError("'enabled' must be true or false")
    # Duplicates and uncataloged ids are kept as-is.
    return ChainConfig(enabled=enabled, chain=list(chain))


class ChainConfigStore:
    """File-backed store exposing load() -> ChainConfig and save(ChainConfig)."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None

    @property
    def path(self) -> Path:
        # Resolved lazily so environment overrides apply to default stores.
        return self._path if self._path is not None else get_config_path()

    def load(self) -> ChainConfig:
        path = self.path
        # [LAW:dataflow-not-control-flow] Always attempt read; default config is the "no data" value.
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default_config()
        except OSError as exc:
            logger.warning("Error loading config %s: %s", path, exc)
            return default_config()

        try:
            return parse_config(json.loads(raw))
        except (json.JSONDecodeError, ValueError) as exc:
            logger.warning("Error loading config %s: %s", path, exc)
            return default_config()

    def save(self, config: ChainConfig) -> Path:
        """Atomic write of config to JSON file. Returns the written path.

        Creates parent directories if needed. Writes to temp file then renames
        so a failed save leaves the previous file intact.
        """
        path = self.path
        payload = config.to_dict()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        except OSError as exc:
            raise ConfigSaveError(f"cannot write {path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
            os.replace(tmp_path, path)
        except OSError as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise ConfigSaveError(f"cannot write {path}: {exc}") from exc
        logger.info("saved chain config path=%s models=%d", path, len(payload["chain"]))
        return path

    def reset(self) -> ChainConfig:
        """Overwrite the persisted config with defaults and return them."""
        config = default_config()
        self.save(config)
        return config
