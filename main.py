"""
CHIP-8 emulator launcher.

    python main.py path/to/game.ch8
    python main.py path/to/game.ch8 --headless --frames 300 --dump-screen
"""

import sys

from octocore.cli import main

if __name__ == "__main__":
    sys.exit(main())
