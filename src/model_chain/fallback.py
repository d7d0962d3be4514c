"""Fallback resolution for the universal waterfall.

Regardless of which model was requested, a failure advances along one ordered
chain until a call succeeds or the chain is exhausted:

- a model not in the chain restarts the waterfall at chain[0]
- a model in the chain moves to the entry after it
- the last entry has no fallback (None)

Everything here is a pure lookup. No cursor is kept between calls, so the
functions are safe to call from any number of request threads.
"""

from __future__ import annotations

from collections.abc import Sequence

import model_chain.catalog
from model_chain.catalog import DEFAULT_CHAIN


def next_fallback(current_model: str, chain: Sequence[str] = DEFAULT_CHAIN) -> str | None:
    """Return the model to try after current_model, or None when exhausted."""
    if not chain:
        return None
    try:
        index = list(chain).index(current_model)
    except ValueError:
        return chain[0]
    if index < len(chain) - 1:
        return chain[index + 1]
    return None


def has_fallback(current_model: str, chain: Sequence[str] = DEFAULT_CHAIN) -> bool:
    # [LAW:single-enforcer] Defined through next_fallback so the two never disagree.
    return next_fallback(current_model, chain) is not None


def fallback_sequence(current_model: str, chain: Sequence[str] = DEFAULT_CHAIN) -> list[str]:
    """Every model the waterfall would still try after current_model, in order.

    Bounded by len(chain): duplicate ids in a chain cannot make it cycle.
    """
    sequence: list[str] = []
    model = current_model
    for _ in range(len(chain)):
        model = next_fallback(model, chain)
        if model is None:
            break
        sequence.append(model)
    return sequence


def active_chain(enabled: bool, chain: Sequence[str]) -> list[str]:
    """Chain the proxy should walk for a persisted {enabled, chain} pair.

    A custom chain only takes effect once chain mode is enabled.
    """
    if enabled and chain:
        return list(chain)
    return model_chain.catalog.default_chain()
