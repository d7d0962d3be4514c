"""CLI entry point for model-chain."""

from __future__ import annotations

import argparse
import logging

from rich.console import Console

import model_chain.display
import model_chain.fallback
import model_chain.io.logging_setup
from model_chain.editor import ChainEditor, ConsoleIO
from model_chain.io.config_store import ChainConfigStore, ConfigSaveError

logger = logging.getLogger(__name__)

COMMANDS = ("menu", "configure", "list", "reset", "next", "help")

USAGE = """
Usage:
  antigravity-claude-proxy models            Interactive configuration
  antigravity-claude-proxy models list       Show current chain
  antigravity-claude-proxy models reset      Reset to default chain
  antigravity-claude-proxy models next MODEL Show the fallback after MODEL

The model chain determines fallback order when models are rate-limited.
Start server with --models flag to enable chain mode."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="model-chain",
        description="Configure the model fallback chain",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="menu",
        help="One of: {} (default: menu)".format(", ".join(COMMANDS)),
    )
    parser.add_argument(
        "model",
        nargs="?",
        default=None,
        help="Model id for the 'next' command",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Chain config path (default: ~/.config/antigravity-proxy/model-chain.json). "
        "Env: MODEL_CHAIN_CONFIG",
    )
    return parser


def list_chain(store: ChainConfigStore, console: Console) -> None:
    config = store.load()
    console.print(model_chain.display.render_chain(config.chain, config.enabled))
    console.print(model_chain.display.render_by_tier(config.chain))
    console.print(f"\nConfig file: {store.path}", highlight=False, markup=False)


def reset_chain(store: ChainConfigStore, console: Console) -> None:
    config = store.reset()
    console.print(model_chain.display.success(f"Configuration saved to {store.path}"))
    console.print(model_chain.display.success("Model chain reset to default"))
    console.print(model_chain.display.render_chain(config.chain, config.enabled))


def show_next(store: ChainConfigStore, console: Console, model: str | None) -> None:
    if not model:
        console.print(model_chain.display.error("Usage: model-chain next MODEL"))
        return
    config = store.load()
    chain = model_chain.fallback.active_chain(config.enabled, config.chain)
    nxt = model_chain.fallback.next_fallback(model, chain)
    if nxt is None:
        console.print(model_chain.display.notice(f"No fallback after {model}: chain exhausted."))
        return
    console.print(f"{model} -> {nxt}", highlight=False, markup=False)
    remaining = model_chain.fallback.fallback_sequence(model, chain)
    console.print(
        "Remaining waterfall: " + " -> ".join(remaining), highlight=False, markup=False
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    command = str(args.command or "menu").strip().lower()

    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = model_chain.io.logging_setup.configure()
    logger.debug(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )

    console = Console(highlight=False)
    store = ChainConfigStore(args.config)
    console.print(model_chain.display.banner("Model Chain Configuration Manager"))

    if args.model is not None and command != "next" and command in COMMANDS:
        console.print(
            model_chain.display.error(f"Unexpected argument for '{command}': {args.model}")
        )
        console.print('Only "next" takes a MODEL argument.')
        return 0

    if command in ("menu", "configure"):
        editor = ChainEditor(store, ConsoleIO(console))
        try:
            editor.run()
        except ConfigSaveError as exc:
            logger.exception("Failed to save chain config")
            console.print(model_chain.display.error(f"Error saving config: {exc}"))
            return 1
        except KeyboardInterrupt:
            console.print("\nExiting without saving...")
    elif command == "list":
        list_chain(store, console)
    elif command == "reset":
        try:
            reset_chain(store, console)
        except ConfigSaveError as exc:
            logger.exception("Failed to reset chain config")
            console.print(model_chain.display.error(f"Error saving config: {exc}"))
            return 1
    elif command == "next":
        show_next(store, console, args.model)
    elif command == "help":
        console.print(USAGE, highlight=False, markup=False)
    else:
        console.print(f"Unknown command: {command}", highlight=False, markup=False)
        console.print("Valid commands: {}".format(", ".join(COMMANDS)))
        console.print('Run "antigravity-claude-proxy models help" for usage.')
    return 0
