"""Display text for the chain editor and CLI - pure functions returning rich Text.

Nothing here writes to the terminal; callers print the returned Text.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

import model_chain.catalog
from model_chain.catalog import ModelDescriptor

_BOX_WIDTH = 40

MENU_OPTIONS: tuple[tuple[str, str], ...] = (
    ("1", "Enable/Disable model chain"),
    ("2", "Build new chain"),
    ("3", "Reorder chain"),
    ("4", "Reset to default"),
    ("5", "Save and exit"),
    ("6", "Exit without saving"),
)


def banner(title: str) -> Text:
    """Boxed cyan title."""
    inner = title.center(_BOX_WIDTH)
    text = Text(style="cyan")
    text.append("╔" + "═" * _BOX_WIDTH + "╗\n")
    text.append("║" + inner + "║\n")
    text.append("╚" + "═" * _BOX_WIDTH + "╝")
    return text


def _model_line(position: int, model_id: str, name: str) -> Text:
    line = Text("  {}. {} ".format(position, name))
    line.append("({})".format(model_id), style="bright_black")
    return line


def render_status(enabled: bool) -> Text:
    text = Text("Status: ")
    # [LAW:dataflow-not-control-flow] Status label and color chosen from data.
    label, style = ("● ENABLED", "green") if enabled else ("○ DISABLED", "yellow")
    text.append(label, style=style)
    if enabled:
        text.append(" (use --models flag to activate)")
    return text


def render_chain(chain: Sequence[str], enabled: bool) -> Text:
    """Status line plus the chain with 1-based positions.

    Uncataloged ids are shown verbatim in place of a display name.
    """
    text = Text("\n")
    text.append_text(banner("Model Priority Chain"))
    text.append("\n\n")
    text.append_text(render_status(enabled))
    text.append("\n\nCurrent chain (highest to lowest priority):")
    for i, model_id in enumerate(chain, start=1):
        text.append("\n")
        text.append_text(_model_line(i, model_id, model_chain.catalog.display_name(model_id)))
    return text


def render_positions(chain: Sequence[str]) -> Text:
    """Compact numbered chain used while reordering."""
    text = Text("Current order:")
    for i, model_id in enumerate(chain, start=1):
        text.append("\n  {}. {}".format(i, model_chain.catalog.display_name(model_id)))
    return text


def render_available(models: Sequence[ModelDescriptor]) -> Text:
    text = Text("\nAvailable models:")
    for i, model in enumerate(models, start=1):
        text.append("\n")
        text.append_text(_model_line(i, model.id, model.name))
    return text


def render_menu() -> Text:
    text = Text("\nOptions:", style="cyan")
    for key, label in MENU_OPTIONS:
        text.append("\n  {}. {}".format(key, label), style="default")
    return text


def render_by_tier(chain: Sequence[str]) -> Text:
    """Chain entries grouped by catalog tier; uncataloged ids go under 'other'."""
    groups: dict[str, list[str]] = {}
    for tier in model_chain.catalog.tiers():
        tier_ids = {model.id for model in model_chain.catalog.models_by_tier(tier)}
        groups[tier] = [model_chain.catalog.display_name(m) for m in chain if m in tier_ids]
    groups["other"] = [m for m in chain if not model_chain.catalog.is_known_model(m)]
    text = Text("\nBy tier:")
    for tier, names in groups.items():
        if not names:
            continue
        text.append("\n  {}: ".format(tier), style="bold")
        text.append(", ".join(names))
    return text


def success(message: str) -> Text:
    return Text("✓ " + message, style="green")


def error(message: str) -> Text:
    return Text(message, style="red")


def notice(message: str) -> Text:
    return Text(message, style="yellow")
