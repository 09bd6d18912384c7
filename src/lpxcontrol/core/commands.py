"""Command table and dispatcher for control pads."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple, Optional

from lpxcontrol.devices.launchpad import LaunchpadOutput

from .actions import ActionRunner
from .state import SurfaceState

logger = logging.getLogger(__name__)


class CommandEntry(NamedTuple):
    """Action names for one control pad."""

    activate: str
    deactivate: str


class CommandTable(Mapping[int, CommandEntry]):
    """Immutable mapping of control id to its actions. Missing ids are no-ops."""

    def __init__(self, entries: Mapping[int, CommandEntry]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def for_pads(cls, pads: Iterable[int]) -> "CommandTable":
        """Build the conventional `ON-CTL.<id>` / `OFF-CTL.<id>` table."""
        return cls({pad: CommandEntry(f"ON-CTL.{pad}", f"OFF-CTL.{pad}") for pad in pads})

    def __getitem__(self, identifier: int) -> CommandEntry:
        return self._entries[identifier]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def activate_action(self, identifier: int) -> Optional[str]:
        entry = self._entries.get(identifier)
        return entry.activate if entry else None

    def deactivate_action(self, identifier: int) -> Optional[str]:
        entry = self._entries.get(identifier)
        return entry.deactivate if entry else None


class Dispatcher:
    """
    Ties a control id to its actions with visual feedback.

    Each action runs while the outbound channel is held: the pad pulses,
    the program runs to completion, then the pad is painted its final
    colour. Nothing else can repaint pads in between.
    """

    def __init__(
        self,
        table: CommandTable,
        runner: ActionRunner,
        output: LaunchpadOutput,
        state: SurfaceState,
        enabled_colour: int = 87,
        selected_colour: int = 67,
    ):
        self.table = table
        self.runner = runner
        self.output = output
        self.state = state
        self.enabled_colour = enabled_colour
        self.selected_colour = selected_colour

    def activate(self, identifier: int) -> None:
        """
        Activate a control, deactivating the previously active one first.

        Activating the active control again runs its deactivate and then
        its activate action again. The control becomes active whether or
        not it has an action.
        """
        with self.state.lock:
            previous = self.state.active_identifier
            if previous is not None:
                deactivate = self.table.deactivate_action(previous)
                if deactivate:
                    self._run_with_feedback(previous, deactivate, self.enabled_colour)

            self.state.active_identifier = identifier

            activate = self.table.activate_action(identifier)
            if activate:
                self._run_with_feedback(identifier, activate, self.selected_colour)

            logger.info(f"Activated control {identifier} (previous={previous})")

    def _run_with_feedback(self, pad: int, action: str, final_colour: int) -> None:
        with self.output.exclusive():
            self.output.set_pad_pulsing(pad, self.selected_colour)
            self.runner.run(action)
            self.output.set_pad_static(pad, final_colour)
