"""
Device management for touchscreen discovery and initialization.
"""

import evdev
from evdev import InputDevice, ecodes
import logging

logger = logging.getLogger(__name__)

class DeviceManager:
    """Manages touchscreen device discovery and initialization."""

    def __init__(self):
        self.device = None
        self.multitouch = False
        self.screen_width = 1920  # Default
        self.screen_height = 1080   # Default

    def find_device(self):
        """Find and configure the first touch-capable device.

        Multitouch panels (ABS_MT_SLOT) are preferred; single-touch
        devices reporting ABS_X/ABS_Y with BTN_TOUCH are accepted too.
        """
        devices = [InputDevice(path) for path in evdev.list_devices()]
        single_touch = None

        for device in devices:
            caps = device.capabilities()
            if ecodes.EV_ABS not in caps:
                continue

            abs_caps = caps.get(ecodes.EV_ABS, [])
            abs_info = {code: info for code, info in abs_caps}
            key_codes = caps.get(ecodes.EV_KEY, [])

            if ecodes.ABS_MT_SLOT in abs_info:
                self._configure(device, abs_info, ecodes.ABS_MT_POSITION_X, ecodes.ABS_MT_POSITION_Y)
                self.multitouch = True
                return device

            if single_touch is None and ecodes.BTN_TOUCH in key_codes and ecodes.ABS_X in abs_info:
                single_touch = (device, abs_info)

        if single_touch is not None:
            device, abs_info = single_touch
            self._configure(device, abs_info, ecodes.ABS_X, ecodes.ABS_Y)
            self.multitouch = False
            return device

        logger.error("No touchscreen device found")
        return None

    def _configure(self, device, abs_info, x_code, y_code):
        """Take the screen resolution from the device's axis ranges."""
        if x_code in abs_info:
            self.screen_width = abs_info[x_code].max + 1
        if y_code in abs_info:
            self.screen_height = abs_info[y_code].max + 1

        self.device = device
        logger.info(f"Found touchscreen: {device.name}")
        logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}")

    def get_device_info(self):
        """Get device and screen information."""
        return {
            'device': self.device,
            'multitouch': self.multitouch,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'viewport': min(self.screen_width, self.screen_height)
        }
