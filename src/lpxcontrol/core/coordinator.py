"""
Control surface coordinator.

Wires the device event stream to the lock gesture, the activity timer and
the dispatcher::

    MIDI input callback
          │
          ↓
    Coordinator.handle_message
          │  control change                      note on
          ├──────────────────────┐      ┌─────────────────────────┐
          ↓                      │      ↓                         │
    below control floor?  drop   │  locked?  ignore               │
    timer suppressed?     drop   │  otherwise open debounce window│
          ↓                      │  (pads repaint disabled)       │
    LockSequence.advance         │                                │
          ↓ dispatch?            │                                │
    Dispatcher.activate ─────────┴── LaunchpadOutput ─────────────┘

Threads
-------

Two threads touch shared state: mido's input callback thread (the only
place dispatch happens, one event at a time) and the activity timer thread.
Locks are always taken in the order clock → state → output channel. A slow
external action holds the state lock and the output channel, so colour
updates and further events wait until it returns.
"""

import logging
from collections.abc import Sequence
from typing import Optional

import mido

from lpxcontrol.devices.launchpad import LaunchpadOutput
from lpxcontrol.models import AppConfig, ControlEvent, LockState

from .actions import ActionRunner
from .activity import ActivityTimer
from .commands import CommandTable, Dispatcher
from .lock_sequence import LockSequence
from .state import SurfaceState

logger = logging.getLogger(__name__)


class Coordinator:
    """Owns the surface state and routes device events to it."""

    def __init__(
        self,
        config: AppConfig,
        output: LaunchpadOutput,
        runner: Optional[ActionRunner] = None,
        table: Optional[CommandTable] = None,
    ):
        """
        Args:
            config: Application configuration
            output: Outbound channel for pad colours
            runner: Action runner (default: runs from `config.actions_dir`)
            table: Command table (default: `ON-CTL`/`OFF-CTL` for the control pads)
        """
        self.config = config
        self.output = output
        self.state = SurfaceState()
        self.lock_sequence = LockSequence(config.lock_sequence)
        self.timer = ActivityTimer(self._set_pads_enabled, tick_interval=config.tick_interval)
        self.dispatcher = Dispatcher(
            table=table if table is not None else CommandTable.for_pads(config.control_pads),
            runner=runner or ActionRunner(lambda: config.actions_dir),
            output=output,
            state=self.state,
            enabled_colour=config.enabled_colour,
            selected_colour=config.selected_colour,
        )

    # ================================================================
    # LIFECYCLE
    # ================================================================

    def start(self, run_timer: bool = True) -> None:
        """
        Paint every control pad enabled and start the activity timer.

        Args:
            run_timer: Start the background tick thread. Tests drive
                `timer.tick()` by hand instead.
        """
        with self.state.lock:
            self.state.pads_enabled = False  # Force the repaint below
            self.state.active_identifier = None
            self.state.last_identifier = None
        self._set_pads_enabled(True)

        if run_timer:
            self.timer.start()
        logger.info("Coordinator started")

    def stop(self) -> None:
        """Stop the activity timer."""
        self.timer.stop()
        logger.info("Coordinator stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    # ================================================================
    # EVENTS
    # ================================================================

    def handle_message(self, msg: mido.Message) -> None:
        """MIDI input callback."""
        event = ControlEvent.from_message(msg)
        if event is not None:
            self.handle_event(event)

    def handle_bytes(self, data: Sequence[int]) -> None:
        """Handle a raw `[status, id, value]` triple."""
        event = ControlEvent.from_bytes(data)
        if event is not None:
            self.handle_event(event)

    def handle_event(self, event: ControlEvent) -> None:
        """Route one device event."""
        if event.is_control_change:
            self._handle_control(event.identifier, event.value)
        elif event.is_note_on and event.value > 0:
            self._handle_note()

    def _handle_control(self, identifier: int, value: int) -> None:
        # Low ids are noise from the device; value 0 is a button release
        if identifier < self.config.control_floor or value == 0:
            return

        if self.timer.suppressed:
            logger.debug(f"Control {identifier} dropped: pads suppressed after note activity")
            return

        with self.state.lock:
            previous = self.state.lock_state
            last = self.state.last_identifier
            transition = self.lock_sequence.advance(previous, last, identifier)

            self.state.lock_state = transition.state
            self.state.last_identifier = identifier

            logger.debug(
                f"Control {identifier}: state={previous.value} -> {transition.state.value} "
                f"last={last} dispatch={transition.dispatch}"
            )
            if transition.state is not previous and transition.state in (
                LockState.LOCKED,
                LockState.UNLOCKED,
            ):
                logger.info(f"Surface {transition.state.value}")

            if transition.dispatch:
                self.dispatcher.activate(identifier)

    def _handle_note(self) -> None:
        with self.state.lock:
            locked = self.state.lock_state is LockState.LOCKED
        if locked:
            return
        self.timer.record_activity(self.config.cooldown_seconds)

    # ================================================================
    # COLOURS
    # ================================================================

    def _set_pads_enabled(self, enable: bool) -> None:
        """
        Repaint the control pads enabled or disabled, skipping the active pad.

        Does nothing if the pads already show the requested state.
        """
        with self.state.lock:
            if self.state.pads_enabled == enable:
                return

            colour = self.config.enabled_colour if enable else self.config.disabled_colour
            self.output.paint_pads(
                self.config.control_pads, colour, exclude=self.state.active_identifier
            )
            self.state.pads_enabled = enable
            logger.debug(
                f"Control pads {'enabled' if enable else 'disabled'} "
                f"(active={self.state.active_identifier})"
            )
