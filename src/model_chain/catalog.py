"""Model catalog and default fallback chain.

// [LAW:one-source-of-truth] Known models and the default priority order live here.
// [LAW:single-enforcer] Unknown-id tolerance is enforced by find_model/display_name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelDescriptor:
    """Display metadata for one upstream model."""

    id: str
    name: str
    tier: str  # "opus" | "sonnet" | "pro" | "flash"


# // [LAW:one-source-of-truth] All models offered by the chain editor are declared here.
_MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor("claude-opus-4-5-thinking", "Claude Opus 4.5 (Thinking)", "opus"),
    ModelDescriptor("claude-sonnet-4-thinking", "Claude Sonnet 4 (Thinking)", "sonnet"),
    ModelDescriptor("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", "sonnet"),
    ModelDescriptor("gemini-3-pro-high", "Gemini 3 Pro High", "pro"),
    ModelDescriptor("gemini-3-pro-image", "Gemini 3 Pro Image", "pro"),
    ModelDescriptor("gemini-3-flash", "Gemini 3 Flash", "flash"),
    ModelDescriptor("gemini-2.5-pro", "Gemini 2.5 Pro", "pro"),
    ModelDescriptor("gemini-2.5-flash", "Gemini 2.5 Flash", "flash"),
)

_MODELS_BY_ID: dict[str, ModelDescriptor] = {model.id: model for model in _MODELS}

# Universal waterfall order, highest priority first. Never handed out directly.
DEFAULT_CHAIN: tuple[str, ...] = (
    "claude-opus-4-5-thinking",
    "claude-sonnet-4-thinking",
    "gemini-3-pro-high",
    "gemini-3-flash",
)


def all_models() -> tuple[ModelDescriptor, ...]:
    return _MODELS


def find_model(model_id: str) -> ModelDescriptor | None:
    """Return the descriptor for model_id, or None for uncataloged ids."""
    return _MODELS_BY_ID.get(str(model_id or ""))


def is_known_model(model_id: str) -> bool:
    return find_model(model_id) is not None


def display_name(model_id: str) -> str:
    """Human label for model_id; falls back to the raw id."""
    model = find_model(model_id)
    return model.name if model is not None else str(model_id)


def tiers() -> tuple[str, ...]:
    """Distinct tiers in catalog order."""
    return tuple(dict.fromkeys(model.tier for model in _MODELS))


def models_by_tier(tier: str) -> tuple[ModelDescriptor, ...]:
    normalized = str(tier or "").strip().lower()
    return tuple(model for model in _MODELS if model.tier == normalized)


def default_chain() -> list[str]:
    """Fresh, caller-owned copy of DEFAULT_CHAIN."""
    return list(DEFAULT_CHAIN)
