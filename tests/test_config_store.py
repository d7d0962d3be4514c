"""Tests for chain config persistence: defaults, validation, atomic saves."""

import json
import logging

import pytest

from model_chain.catalog import DEFAULT_CHAIN
from model_chain.io.config_store import (
    ChainConfig,
    ChainConfigStore,
    ConfigSaveError,
    default_config,
    get_config_path,
    parse_config,
)


class TestConfigPath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MODEL_CHAIN_CONFIG", str(tmp_path / "chain.json"))
        assert get_config_path() == tmp_path / "chain.json"

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MODEL_CHAIN_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "antigravity-proxy" / "model-chain.json"

    def test_default_store_follows_environment(self, config_path):
        assert ChainConfigStore().path == config_path


class TestLoad:
    def test_missing_file_returns_defaults(self, store):
        config = store.load()
        assert config == ChainConfig(enabled=False, chain=list(DEFAULT_CHAIN))

    def test_defaults_are_not_aliased(self, store):
        config = store.load()
        config.chain.append("extra")
        assert store.load().chain == list(DEFAULT_CHAIN)

    def test_loads_persisted_values(self, store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"enabled": True, "chain": ["gemini-3-flash", "x"]}))
        config = store.load()
        assert config.enabled is True
        assert config.chain == ["gemini-3-flash", "x"]

    def test_keeps_duplicates_and_unknown_ids(self, store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"enabled": False, "chain": ["a", "a", "b"]}))
        assert store.load().chain == ["a", "a", "b"]

    def test_missing_enabled_defaults_false(self, store, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"chain": ["a"]}))
        assert store.load().enabled is False

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            json.dumps({"enabled": "false", "chain": ["gemini-3-flash"]}),
            json.dumps({"enabled": True}),
            json.dumps({"enabled": True, "chain": "gemini-3-flash"}),
            json.dumps({"enabled": True, "chain": [1, 2]}),
            json.dumps({"enabled": True, "chain": []}),
        ],
    )
    def test_malformed_file_degrades_to_defaults(self, store, config_path, content, caplog):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(content)
        with caplog.at_level(logging.WARNING, logger="model_chain"):
            config = store.load()
        assert config == default_config()
        assert "Error loading config" in caplog.text

    def test_unreadable_path_degrades_to_defaults(self, tmp_path, caplog):
        # A directory in place of the file raises IsADirectoryError on read.
        path = tmp_path / "chain.json"
        path.mkdir()
        with caplog.at_level(logging.WARNING, logger="model_chain"):
            config = ChainConfigStore(path).load()
        assert config == default_config()
        assert "Error loading config" in caplog.text


class TestParseConfig:
    def test_accepts_real_booleans(self):
        assert parse_config({"enabled": True, "chain": ["a"]}).enabled is True
        assert parse_config({"enabled": False, "chain": ["a"]}).enabled is False

    @pytest.mark.parametrize("enabled", ["false", "true", 1, 0, None])
    def test_rejects_non_boolean_enabled(self, enabled):
        with pytest.raises(ValueError, match="enabled"):
            parse_config({"enabled": enabled, "chain": ["a"]})

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            parse_config(["a"])


class TestSave:
    def test_writes_json_and_creates_parents(self, store, config_path):
        written = store.save(ChainConfig(enabled=True, chain=["b", "a"]))
        assert written == config_path
        assert json.loads(config_path.read_text()) == {"enabled": True, "chain": ["b", "a"]}
        assert config_path.read_text().endswith("\n")

    def test_save_then_load(self, store):
        store.save(ChainConfig(enabled=True, chain=["gemini-2.5-flash"]))
        assert store.load() == ChainConfig(enabled=True, chain=["gemini-2.5-flash"])

    def test_overwrites_prior_state(self, store):
        store.save(ChainConfig(enabled=True, chain=["a", "b"]))
        store.save(ChainConfig(enabled=False, chain=["c"]))
        assert store.load() == ChainConfig(enabled=False, chain=["c"])

    def test_unwritable_directory_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = ChainConfigStore(blocker / "chain.json")
        with pytest.raises(ConfigSaveError):
            store.save(default_config())

    def test_failed_replace_keeps_previous_file(self, store, config_path, monkeypatch):
        store.save(ChainConfig(enabled=True, chain=["kept"]))

        def _fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("model_chain.io.config_store.os.replace", _fail)
        with pytest.raises(ConfigSaveError, match="disk full"):
            store.save(ChainConfig(enabled=False, chain=["lost"]))

        assert json.loads(config_path.read_text()) == {"enabled": True, "chain": ["kept"]}
        assert list(config_path.parent.glob("*.tmp")) == []


class TestReset:
    def test_reset_overwrites_with_defaults(self, store):
        store.save(ChainConfig(enabled=True, chain=["custom"]))
        config = store.reset()
        assert config == default_config()
        assert store.load() == ChainConfig(enabled=False, chain=list(DEFAULT_CHAIN))


class TestChainConfig:
    def test_toggle_flips_in_place(self):
        config = ChainConfig()
        assert config.toggle() is True
        assert config.enabled is True
        assert config.toggle() is False

    def test_default_instances_do_not_share_chain(self):
        first = ChainConfig()
        first.chain.append("x")
        assert ChainConfig().chain == list(DEFAULT_CHAIN)

    def test_to_dict_copies_chain(self):
        config = ChainConfig(enabled=True, chain=["a"])
        data = config.to_dict()
        data["chain"].append("b")
        assert config.chain == ["a"]
