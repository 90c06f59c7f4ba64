"""Collaborators the execution engine talks to.

The engine never renders, plays sound or polls input itself. It reads and
writes a :class:`Display`, queries a :class:`Keypad` and toggles an
:class:`Audio` device. The in-memory implementations below are used for
headless runs and tests; :mod:`octocore.frontend` provides pygame ones.
"""

import dataclasses
from typing import Optional, Protocol

import numpy as np

from octocore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, NUM_KEYS


class Display(Protocol):
    """Boolean pixel grid of ``SCREEN_WIDTH`` x ``SCREEN_HEIGHT``."""

    def get_pixel(self, x: int, y: int) -> bool: ...

    def set_pixel(self, x: int, y: int, on: bool) -> None: ...

    def clear(self) -> None: ...

    def mark_dirty(self) -> None: ...


class Keypad(Protocol):
    """The 16-key hexadecimal keypad."""

    def is_pressed(self, key: int) -> bool: ...

    def first_pressed(self) -> Optional[int]: ...


class Audio(Protocol):
    """Tone generator driven by the sound timer."""

    def set_tone_active(self, active: bool) -> None: ...


class FrameBuffer:
    """In-memory display, indexed ``pixels[x, y]`` like the CHIP-8 screen."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((width, height), dtype=np.bool_)
        self.dirty = False

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(self.pixels[x, y])

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self.pixels[x, y] = on

    def clear(self) -> None:
        self.pixels[:] = False
        self.dirty = True

    def mark_dirty(self) -> None:
        self.dirty = True

    def consume_dirty(self) -> bool:
        """Return whether a render was requested and reset the request."""
        dirty, self.dirty = self.dirty, False
        return dirty

    def to_text(self, on: str = "#", off: str = ".") -> str:
        """Render the grid as text, one line per row."""
        return "\n".join(
            "".join(on if self.pixels[x, y] else off for x in range(self.width))
            for y in range(self.height)
        )


class KeypadState:
    """In-memory keypad; keys are pressed and released explicitly."""

    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def press(self, key: int) -> None:
        self.keys[key] = True

    def release(self, key: int) -> None:
        self.keys[key] = False

    def release_all(self) -> None:
        self.keys = [False] * NUM_KEYS

    def is_pressed(self, key: int) -> bool:
        return 0 <= key < NUM_KEYS and self.keys[key]

    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None


class ToneFlag:
    """Audio stand-in that only remembers what it was asked to do."""

    def __init__(self):
        self.active = False
        self.transitions = 0

    def set_tone_active(self, active: bool) -> None:
        if active != self.active:
            self.transitions += 1
        self.active = active


@dataclasses.dataclass
class Peripherals:
    """Bundle of collaborators handed to every instruction."""
    display: Display = dataclasses.field(default_factory=FrameBuffer)
    keypad: Keypad = dataclasses.field(default_factory=KeypadState)
    audio: Audio = dataclasses.field(default_factory=ToneFlag)
