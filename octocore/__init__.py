"""CHIP-8 emulator package."""

from octocore.state import EmulatorState, create_state
from octocore.emulator import Processor, execute, execute_decoded, fetch, load_program, load_rom, tick_timers
from octocore.decode import DecodedInstruction, Operation, decode, decode_word, disassemble
from octocore.errors import (
    Chip8Error, DecodeError, StackOverflow, StackUnderflow, AddressOverflow, MemoryAccessError
)
from octocore.peripherals import (
    Display, Keypad, Audio, FrameBuffer, KeypadState, ToneFlag, Peripherals
)
from octocore.config import EmulatorConfig
from octocore.constants import *

__all__ = [
    "EmulatorState",
    "create_state",
    "Processor",
    "fetch",
    "execute",
    "execute_decoded",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "Operation",
    "decode",
    "decode_word",
    "disassemble",
    "Chip8Error",
    "DecodeError",
    "StackOverflow",
    "StackUnderflow",
    "AddressOverflow",
    "MemoryAccessError",
    "Display",
    "Keypad",
    "Audio",
    "FrameBuffer",
    "KeypadState",
    "ToneFlag",
    "Peripherals",
    "EmulatorConfig",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
