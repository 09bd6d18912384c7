"""Bidirectional MIDI connection to the control surface."""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Optional

import mido

from lpxcontrol.exceptions import DeviceConnectionError, SendError

logger = logging.getLogger(__name__)


class MidiConnection:
    """
    Named bidirectional connection to a MIDI device.

    Ports are selected by name prefix, so "Launchpad X:Launchpad X MIDI 1"
    matches "Launchpad X:Launchpad X MIDI 1 20:0". Inbound messages are
    delivered to a single callback in mido's I/O thread, in arrival order.

    Unlike a hot-plug manager this fails fast: if a port is missing when
    opened, DeviceConnectionError is raised.
    """

    def __init__(
        self,
        input_port: Optional[str] = None,
        output_port: Optional[str] = None,
        client_name: Optional[str] = None,
    ):
        """
        Initialize the connection (nothing is opened yet).

        Args:
            input_port: Input port name prefix (None = no input)
            output_port: Output port name prefix (None = no output)
            client_name: Client name to register with the MIDI backend
        """
        self._input_prefix = input_port
        self._output_prefix = output_port
        self._client_name = client_name
        self._inport: Optional[mido.ports.BaseInput] = None
        self._outport: Optional[mido.ports.BaseOutput] = None
        # Separate locks: closing the input joins the callback thread, which may be sending
        self._input_lock = threading.Lock()
        self._output_lock = threading.Lock()
        self._message_callback: Optional[Callable[[mido.Message], None]] = None

    @staticmethod
    def find_port(available: Sequence[str], prefix: str) -> Optional[str]:
        """Return the first port whose name starts with `prefix`."""
        for name in available:
            if name.startswith(prefix):
                return name
        return None

    @staticmethod
    def list_ports() -> dict:
        """
        List all available MIDI ports.

        Returns:
            Dictionary with 'input' and 'output' lists of port names
        """
        return {
            "input": mido.get_input_names(),
            "output": mido.get_output_names(),
        }

    def _open_kwargs(self) -> dict:
        return {"client_name": self._client_name} if self._client_name else {}

    def open_output(self) -> str:
        """
        Open the output port.

        Returns:
            Full name of the opened port

        Raises:
            DeviceConnectionError: If no port matches or it fails to open
        """
        if self._output_prefix is None:
            raise ValueError("No output port configured")

        port_name = self.find_port(mido.get_output_names(), self._output_prefix)
        if port_name is None:
            raise DeviceConnectionError(self._output_prefix, "output")

        with self._output_lock:
            try:
                self._outport = mido.open_output(port_name, **self._open_kwargs())
            except Exception as e:
                raise DeviceConnectionError(self._output_prefix, "output", str(e)) from e

        logger.info(f"Connected to MIDI output: {port_name}")
        return port_name

    def open_input(self, callback: Callable[[mido.Message], None]) -> str:
        """
        Open the input port and start delivering messages to `callback`.

        Callback is executed in mido's internal I/O thread.

        Returns:
            Full name of the opened port

        Raises:
            DeviceConnectionError: If no port matches or it fails to open
        """
        if self._input_prefix is None:
            raise ValueError("No input port configured")

        port_name = self.find_port(mido.get_input_names(), self._input_prefix)
        if port_name is None:
            raise DeviceConnectionError(self._input_prefix, "input")

        self._message_callback = callback
        with self._input_lock:
            try:
                self._inport = mido.open_input(
                    port_name, callback=self._midi_callback, **self._open_kwargs()
                )
            except Exception as e:
                raise DeviceConnectionError(self._input_prefix, "input", str(e)) from e

        logger.info(f"Connected to MIDI input: {port_name}")
        return port_name

    def _midi_callback(self, msg: mido.Message) -> None:
        """Called from mido's I/O thread; dispatches to the registered callback."""
        try:
            if self._message_callback:
                self._message_callback(msg)
        except Exception as e:
            logger.error(f"Error in MIDI input callback: {e}", exc_info=True)

    def send(self, frame: Sequence[int]) -> None:
        """
        Send a raw byte frame.

        SysEx frames (starting 0xF0) are sent with the framing bytes stripped,
        as mido expects.

        Raises:
            SendError: If the output is not open or the backend fails
        """
        data = list(frame)
        with self._output_lock:
            if self._outport is None:
                raise SendError(data, "output port is not open")
            try:
                if data and data[0] == 0xF0:
                    msg = mido.Message("sysex", data=data[1:-1])
                else:
                    msg = mido.Message.from_bytes(data)
                self._outport.send(msg)
            except Exception as e:
                raise SendError(data, str(e)) from e

    @property
    def is_connected(self) -> bool:
        """True if the output port is open."""
        with self._output_lock:
            return self._outport is not None

    def close(self) -> None:
        """
        Close any open ports, input first.

        Closing the input waits for mido's callback thread to return. That
        thread may still be sending, so no lock is held while it closes.
        """
        with self._input_lock:
            inport, self._inport = self._inport, None
        if inport is not None:
            self._close_port(inport)

        with self._output_lock:
            outport, self._outport = self._outport, None
            if outport is not None:
                self._close_port(outport)
        logger.debug("MidiConnection closed")

    @staticmethod
    def _close_port(port) -> None:
        try:
            port.close()
        except Exception as e:
            logger.error(f"Error closing MIDI port {port.name}: {e}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
