"""
Logging utilities for pattern events.
"""

import datetime
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class PatternLogger:
    """Handles logging of drag starts and pattern results."""

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")
                self.debug_file = None

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def log_drag_started(self, started: bool = True):
        """Log the start of a drag."""
        timestamp = self._timestamp()
        if started:
            print(f"[{timestamp}] 👆 DRAG STARTED")
        self._write_debug(f"[{timestamp}] drag_started={started}")

    def log_pattern_result(self, result):
        """Log an accepted or rejected pattern."""
        timestamp = self._timestamp()
        if result.accepted:
            print(f"[{timestamp}] 🔓 PATTERN ACCEPTED: {result.value} ({len(result)} nodes)")
        else:
            reason = result.reason.value if result.reason else 'unknown'
            print(f"[{timestamp}] 🔒 PATTERN REJECTED: {reason} ({len(result)} nodes)")

        for n, node in enumerate(result.nodes):
            print(f"   Node {n+1}: {node.node_id} at ({int(node.cx)}, {int(node.cy)})")

        self._write_debug(
            f"[{timestamp}] accepted={result.accepted} nodes={list(result.node_ids)} value={result.value}"
        )

    def _write_debug(self, message: str):
        if not self.debug_file:
            return
        try:
            self.debug_file.write(message + "\n")
            self.debug_file.flush()
        except (OSError, ValueError) as e:
            logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
