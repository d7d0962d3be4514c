"""Interactive chain editor as an explicit state machine.

The editor owns one in-memory ChainConfig for the whole session. Menu actions
mutate that copy; the store is written only when the operator picks
"Save and exit". Input comes from a PromptIO, so the same machine runs against
a terminal (ConsoleIO) or a scripted driver in tests.

// [LAW:single-enforcer] store.save is called from exactly one place: run().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from rich.console import Console, RenderableType
from rich.text import Text

import model_chain.catalog
import model_chain.chain_ops
import model_chain.display
from model_chain.chain_ops import ChainEditError
from model_chain.io.config_store import ChainConfig, ChainConfigStore

logger = logging.getLogger(__name__)


class EditorState(Enum):
    MAIN_MENU = "main_menu"
    TOGGLING = "toggling"
    BUILDING = "building"
    REORDERING = "reordering"
    RESETTING = "resetting"
    SAVE_AND_EXIT = "save_and_exit"
    EXIT_WITHOUT_SAVING = "exit_without_saving"


TERMINAL_STATES = frozenset({EditorState.SAVE_AND_EXIT, EditorState.EXIT_WITHOUT_SAVING})

# // [LAW:one-source-of-truth] Menu keys map to states here; display.MENU_OPTIONS labels them.
MENU_TRANSITIONS: dict[str, EditorState] = {
    "1": EditorState.TOGGLING,
    "2": EditorState.BUILDING,
    "3": EditorState.REORDERING,
    "4": EditorState.RESETTING,
    "5": EditorState.SAVE_AND_EXIT,
    "6": EditorState.EXIT_WITHOUT_SAVING,
}


class PromptIO(Protocol):
    """Line-based request/response channel the editor talks through."""

    def ask(self, prompt: str) -> str:
        """Return one line of input. Raises EOFError when input is exhausted."""
        ...

    def show(self, renderable: RenderableType) -> None:
        ...


class ConsoleIO:
    """PromptIO backed by a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def ask(self, prompt: str) -> str:
        return self.console.input(Text(prompt))

    def show(self, renderable: RenderableType) -> None:
        self.console.print(renderable)


@dataclass(frozen=True)
class EditorResult:
    saved: bool
    config: ChainConfig


class ChainEditor:
    """Menu-driven editor for one ChainConfig.

    Transitions: MAIN_MENU dispatches on a menu key; every non-terminal action
    state returns to MAIN_MENU. Validation errors are reported and leave the
    state and config unchanged.
    """

    def __init__(
        self,
        store: ChainConfigStore,
        io: PromptIO,
        config: ChainConfig | None = None,
    ) -> None:
        self.store = store
        self.io = io
        self.config = config if config is not None else store.load()
        self.state = EditorState.MAIN_MENU
        self._handlers: dict[EditorState, Callable[[], EditorState]] = {
            EditorState.MAIN_MENU: self._main_menu,
            EditorState.TOGGLING: self._toggle,
            EditorState.BUILDING: self._build,
            EditorState.REORDERING: self._reorder,
            EditorState.RESETTING: self._reset,
        }

    def run(self) -> EditorResult:
        """Drive the machine to a terminal state.

        ConfigSaveError from the store propagates; the session is then not
        considered saved.
        """
        try:
            while self.state not in TERMINAL_STATES:
                self.state = self._handlers[self.state]()
        except EOFError:
            logger.debug("input closed in state=%s", self.state.value)
            self.state = EditorState.EXIT_WITHOUT_SAVING

        if self.state is EditorState.EXIT_WITHOUT_SAVING:
            self.io.show("\nExiting without saving...")
            return EditorResult(saved=False, config=self.config)

        path = self.store.save(self.config)
        self.io.show(model_chain.display.success(f"Configuration saved to {path}"))
        self.io.show("\nTo use model chain mode, start the server with:")
        self.io.show(model_chain.display.notice("  antigravity-claude-proxy start --models"))
        return EditorResult(saved=True, config=self.config)

    # ─── States ─────────────────────────────────────────────────────────

    def _main_menu(self) -> EditorState:
        self.io.show(model_chain.display.render_chain(self.config.chain, self.config.enabled))
        self.io.show(model_chain.display.render_menu())
        choice = self.io.ask("\nSelect option (1-6): ").strip()
        next_state = MENU_TRANSITIONS.get(choice)
        if next_state is None:
            self.io.show(model_chain.display.error("\nInvalid option."))
            return EditorState.MAIN_MENU
        return next_state

    def _toggle(self) -> EditorState:
        enabled = self.config.toggle()
        self.io.show(model_chain.display.success(
            "Model chain {}".format("ENABLED" if enabled else "DISABLED")
        ))
        return EditorState.MAIN_MENU

    def _build(self) -> EditorState:
        chain = self.build_chain()
        # An empty build keeps the previous chain.
        if chain:
            self.config.chain = chain
        return EditorState.MAIN_MENU

    def _reorder(self) -> EditorState:
        self.config.chain = self.reorder_chain(self.config.chain)
        return EditorState.MAIN_MENU

    def _reset(self) -> EditorState:
        self.config.chain = model_chain.catalog.default_chain()
        self.io.show(model_chain.display.success("Chain reset to default"))
        return EditorState.MAIN_MENU

    # ─── Sub-dialogs ────────────────────────────────────────────────────

    def build_chain(self) -> list[str]:
        """Collect a fresh chain from catalog picks. Never returns an empty chain
        unless the catalog itself is empty."""
        chain: list[str] = []
        self.io.show(model_chain.display.notice("\nBuild your model priority chain"))
        self.io.show("Models are tried in order. When one is rate-limited, the next is used.")
        self.io.show('Enter 0 or "done" when finished.\n')

        while True:
            available = model_chain.chain_ops.available_models(chain)
            if not available:
                self.io.show("\nNo more models available.")
                break
            self.io.show(model_chain.display.render_available(available))

            answer = self.io.ask(
                f"\nAdd model #{len(chain) + 1} (1-{len(available)}, or 0 to finish): "
            )
            if model_chain.chain_ops.is_finish_answer(answer):
                if not chain:
                    self.io.show(model_chain.display.error(
                        "\nError: Chain must have at least one model."
                    ))
                    continue
                break

            try:
                index = model_chain.chain_ops.parse_position(answer, len(available))
            except ChainEditError as exc:
                logger.debug("rejected build selection: %s", exc)
                self.io.show(model_chain.display.error("Invalid selection."))
                continue

            selected = available[index]
            chain.append(selected.id)
            self.io.show(model_chain.display.success(f"Added: {selected.name}"))

        return chain

    def reorder_chain(self, chain: list[str]) -> list[str]:
        """Ask for a source and destination position and move one entry.

        Returns the input list unchanged on any invalid answer.
        """
        self.io.show(model_chain.display.notice("\nReorder model chain"))
        if not chain:
            self.io.show(model_chain.display.error("Chain is empty; nothing to reorder."))
            return chain
        self.io.show("Enter new position for each model.\n")
        self.io.show(model_chain.display.render_positions(chain))

        try:
            source = model_chain.chain_ops.parse_position(
                self.io.ask("\nEnter model number to move: "), len(chain)
            )
        except ChainEditError as exc:
            logger.debug("rejected reorder source: %s", exc)
            self.io.show(model_chain.display.error("Invalid selection."))
            return chain

        name = model_chain.catalog.display_name(chain[source])
        try:
            destination = model_chain.chain_ops.parse_position(
                self.io.ask(f'Move "{name}" to position (1-{len(chain)}): '), len(chain)
            )
        except ChainEditError as exc:
            logger.debug("rejected reorder destination: %s", exc)
            self.io.show(model_chain.display.error("Invalid position."))
            return chain

        reordered = model_chain.chain_ops.move_model(chain, source + 1, destination + 1)
        self.io.show(model_chain.display.success("Chain reordered"))
        return reordered
