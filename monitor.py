#!/usr/bin/env python3
"""
Real-time pattern monitor.
Shows the live node path as you drag across the grid on your touchscreen.
"""

import time
from pattern_lock.core.listener import PatternListener

class PatternMonitor:
    def __init__(self):
        self.listener = PatternListener()
        self.running = False

    def start(self):
        """Start monitoring the pattern path."""
        if not self.listener.start():
            return False

        self.running = True
        print("🎯 Pattern Monitor Started")
        print("=" * 50)
        print("📱 Drag across the dots to see the path build up")
        print("🖱️  Press Ctrl+C to stop")
        print()

        try:
            self._monitor_loop()
        except KeyboardInterrupt:
            self.stop()

        return True

    def stop(self):
        """Stop monitoring."""
        self.running = False
        self.listener.stop()
        print("\n✅ Monitoring stopped")

    def _monitor_loop(self):
        """Main monitoring loop."""
        last_shown = None

        while self.running:
            path, drag_state = self.listener.snapshot()
            shown = (tuple(node.node_id for node in path), drag_state.phase, drag_state.moving_without_node)

            if shown != last_shown:
                self._display_path(path, drag_state)
                last_shown = shown

            time.sleep(0.1)  # Update every 100ms

    def _display_path(self, path, drag_state):
        """Display the current path."""
        print("\r" + " " * 80 + "\r", end="")

        if not drag_state.is_active:
            print("🤏 Waiting for a drag...", end="\r")
            return

        numbers = "-".join(str(node.number) for node in path) or "(none)"
        marker = " ~" if drag_state.moving_without_node else ""
        print(f"👆 {len(path)} node(s): {numbers}{marker}", end="\r")

def main():
    """Main entry point."""
    monitor = PatternMonitor()
    monitor.start()

if __name__ == "__main__":
    main()
