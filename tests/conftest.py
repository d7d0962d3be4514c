"""Pytest configuration and shared fixtures for model-chain tests."""

import logging

import pytest
from rich.text import Text

import model_chain.io.logging_setup
from model_chain.io.config_store import ChainConfigStore


class ScriptedIO:
    """PromptIO that replays canned answers and records everything shown.

    Raises EOFError once the answers run out, like a closed stdin.
    """

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.shown: list[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def show(self, renderable) -> None:
        self.shown.append(renderable.plain if isinstance(renderable, Text) else str(renderable))

    @property
    def output(self) -> str:
        return "\n".join(self.shown)


@pytest.fixture
def scripted_io():
    """Factory for ScriptedIO instances."""
    return ScriptedIO


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Redirect the default chain config path to a temp file."""
    path = tmp_path / "antigravity-proxy" / "model-chain.json"
    monkeypatch.setenv("MODEL_CHAIN_CONFIG", str(path))
    return path


@pytest.fixture
def store(config_path):
    return ChainConfigStore(config_path)


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Keep CLI logging out of the home directory and undo configure() afterwards."""
    monkeypatch.setenv("MODEL_CHAIN_LOG_FILE", str(tmp_path / "logs" / "model-chain.log"))
    monkeypatch.setattr(model_chain.io.logging_setup, "_RUNTIME", None)
    yield
    logger = logging.getLogger("model_chain")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
