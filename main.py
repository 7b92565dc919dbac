#!/usr/bin/env python3
"""
Pattern Lock - Main Entry Point
Reads a touchscreen and reports grid patterns drawn on it.
"""

import logging
import time
from pattern_lock.core.listener import PatternListener

def main():
    """Main entry point for the touchscreen pattern listener."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    listener = PatternListener()

    if not listener.start():
        return

    try:
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()

if __name__ == "__main__":
    main()
