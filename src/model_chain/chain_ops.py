"""Pure chain edits and answer parsing used by the interactive editor.

Nothing here prints or prompts. Bad input raises ChainEditError and leaves
every argument untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import model_chain.catalog
from model_chain.catalog import ModelDescriptor

FINISH_ANSWERS = frozenset({"0", "done"})


class ChainEditError(ValueError):
    """Recoverable validation error: report it and stay in the current state."""


def parse_position(answer: str, upper: int) -> int:
    """Convert a 1-based answer into a 0-based index within [1, upper]."""
    text = str(answer or "").strip()
    try:
        position = int(text, 10)
    except ValueError:
        raise ChainEditError(f"not a number: {text!r}") from None
    if position < 1 or position > upper:
        raise ChainEditError(f"{position} is out of range 1-{upper}")
    return position - 1


def is_finish_answer(answer: str) -> bool:
    return str(answer or "").strip().lower() in FINISH_ANSWERS


def available_models(excluded: Iterable[str] = ()) -> list[ModelDescriptor]:
    """Catalog models not already in excluded, in catalog order."""
    taken = set(excluded)
    return [model for model in model_chain.catalog.all_models() if model.id not in taken]


def move_model(chain: Sequence[str], source: int, destination: int) -> list[str]:
    """Move the entry at 1-based source to 1-based destination.

    A move, not a swap: entries between the two positions shift by one.
    Returns a new list.
    """
    size = len(chain)
    if not 1 <= source <= size:
        raise ChainEditError(f"position {source} is out of range 1-{size}")
    if not 1 <= destination <= size:
        raise ChainEditError(f"position {destination} is out of range 1-{size}")
    moved = list(chain)
    model = moved.pop(source - 1)
    moved.insert(destination - 1, model)
    return moved
