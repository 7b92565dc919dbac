"""
Touchscreen listener that feeds a pattern state machine from an evdev device.
"""

import time
import threading
import logging
from typing import Callable, List, Optional

from evdev import ecodes

from ..config.settings import PatternConfig
from ..device.device_manager import DeviceManager
from ..utils.logger import PatternLogger
from .state_machine import PatternResult, PatternStateMachine, PointerAction, PointerEvent

logger = logging.getLogger(__name__)


class TouchEventTranslator:
    """Turns raw evdev events into pointer events for a single contact.

    Only the primary multitouch slot is tracked; other fingers are
    ignored. Events are buffered until SYN_REPORT. A frame produces at most
    one down, one move and one up, except a frame that lifts a contact and
    lands a new one, which yields the up of the old contact then the down
    of the new one.
    """

    def __init__(self, multitouch: bool = True, primary_slot: int = 0):
        self.multitouch = multitouch
        self.primary_slot = primary_slot
        self.current_slot = 0
        self.x: Optional[float] = None
        self.y: Optional[float] = None
        self.touching = False
        self._pending_down = False
        self._pending_up = False
        self._moved = False
        # Whether the last contact change seen in this frame was a touch down
        self._ends_down = False
        # Position reported at the previous SYN_REPORT
        self._last_x: Optional[float] = None
        self._last_y: Optional[float] = None

    def feed(self, ev) -> List[PointerEvent]:
        """Consume one event; returns the pointer events completed by it."""
        if ev.type == ecodes.EV_ABS:
            self._handle_abs_event(ev)
        elif ev.type == ecodes.EV_KEY and ev.code == ecodes.BTN_TOUCH and not self.multitouch:
            if ev.value:
                self._pending_down = True
            else:
                self._pending_up = True
            self._ends_down = bool(ev.value)
        elif ev.type == ecodes.EV_SYN and ev.code == ecodes.SYN_REPORT:
            return self._flush()
        return []

    def _handle_abs_event(self, ev):
        if self.multitouch:
            if ev.code == ecodes.ABS_MT_SLOT:
                self.current_slot = ev.value
            elif self.current_slot != self.primary_slot:
                return
            elif ev.code == ecodes.ABS_MT_TRACKING_ID:
                if ev.value == -1:
                    self._pending_up = True
                else:
                    self._pending_down = True
                self._ends_down = ev.value != -1
            elif ev.code == ecodes.ABS_MT_POSITION_X:
                self.x = float(ev.value)
                self._moved = True
            elif ev.code == ecodes.ABS_MT_POSITION_Y:
                self.y = float(ev.value)
                self._moved = True
        else:
            if ev.code == ecodes.ABS_X:
                self.x = float(ev.value)
                self._moved = True
            elif ev.code == ecodes.ABS_Y:
                self.y = float(ev.value)
                self._moved = True

    def _flush(self) -> List[PointerEvent]:
        events = []
        now = time.time()
        has_position = self.x is not None and self.y is not None

        if self._pending_up and self._pending_down and self._ends_down:
            # The old contact lifted and a new one landed within this frame
            if self.touching:
                self.touching = False
                events.append(PointerEvent(PointerAction.UP, self._last_x, self._last_y, now))
            self._pending_up = False

        if self._pending_down and not self.touching and has_position:
            self.touching = True
            self._pending_down = False
            events.append(PointerEvent(PointerAction.DOWN, self.x, self.y, now))
        elif self.touching and self._moved and has_position:
            events.append(PointerEvent(PointerAction.MOVE, self.x, self.y, now))

        if self._pending_up:
            if self.touching:
                self.touching = False
                events.append(PointerEvent(PointerAction.UP, self.x, self.y, now))
            self._pending_up = False
            self._pending_down = False

        self._moved = False
        self._ends_down = False
        self._last_x, self._last_y = self.x, self.y
        return events

    def cancel(self) -> List[PointerEvent]:
        """Drop the current contact, e.g. when the device goes away."""
        self._pending_down = self._pending_up = self._moved = self._ends_down = False
        if not self.touching:
            return []
        self.touching = False
        return [PointerEvent(PointerAction.CANCEL, self.x or 0.0, self.y or 0.0, time.time())]


class PatternListener:
    """Reads a touchscreen on a background thread and drives a pattern state machine."""

    def __init__(self, config: Optional[PatternConfig] = None,
                 on_pattern_result: Optional[Callable[[PatternResult], None]] = None,
                 device_manager: Optional[DeviceManager] = None,
                 pattern_logger: Optional[PatternLogger] = None):
        self.config = config or PatternConfig()
        self.device_manager = device_manager or DeviceManager()
        self.logger = pattern_logger or PatternLogger()
        self.on_pattern_result = on_pattern_result

        self.state_machine = PatternStateMachine(
            config=self.config,
            on_drag_started=self.logger.log_drag_started,
            on_pattern_result=self._handle_result,
        )
        self.translator = TouchEventTranslator()

        # Thread management
        self.running = False
        self.thread = None
        self.state_lock = threading.Lock()

    def start(self) -> bool:
        """Start the touchscreen listener."""
        device = self.device_manager.find_device()
        if not device:
            print("❌ No touchscreen found")
            return False

        device_info = self.device_manager.get_device_info()
        self.translator = TouchEventTranslator(multitouch=device_info['multitouch'])
        with self.state_lock:
            self.state_machine.resize(device_info['viewport'])

        self.running = True
        self._print_startup_info(device_info)

        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the listener, finalizing any drag in progress."""
        self.running = False
        device = self.device_manager.device
        if device is not None:
            # Closing the device unblocks a reader waiting in read_loop
            device.close()
        if self.thread:
            self.thread.join(timeout=1)
        self._dispatch(self.translator.cancel())
        self.logger.close()

    def snapshot(self):
        """Current path and drag state, taken under the state lock."""
        with self.state_lock:
            return self.state_machine.path, self.state_machine.drag_state

    def _print_startup_info(self, device_info):
        grid = self.state_machine.grid
        print(f"✅ Found: {self.device_manager.device.name}")
        print(f"📺 Screen: {device_info['screen_width']}x{device_info['screen_height']}")
        print(f"🔢 Grid: {grid.size}x{grid.size} in a {int(grid.side)}px square")
        print(f"📏 Hit radius: {grid.radius:.0f}px")
        print(f"🔐 Minimum pattern length: {self.config.MIN_PATTERN_LENGTH}")
        print("🎯 Ready! Drag across the dots to enter a pattern")

    def _event_loop(self):
        """Main event processing loop."""
        try:
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break
                self._dispatch(self.translator.feed(event))
        except OSError as e:
            if not self.running:
                return
            logger.error(f"Error reading touchscreen: {e}")
            self._dispatch(self.translator.cancel())

    def _dispatch(self, pointer_events: List[PointerEvent]):
        """Deliver pointer events to the state machine in order."""
        if not pointer_events:
            return
        with self.state_lock:
            for pointer_event in pointer_events:
                self.state_machine.handle(pointer_event)

    def _handle_result(self, result: PatternResult):
        self.logger.log_pattern_result(result)
        if self.on_pattern_result:
            self.on_pattern_result(result)
