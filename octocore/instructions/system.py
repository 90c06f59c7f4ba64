"""CHIP-8 system instructions (0x0xxx)."""

from octocore.state import EmulatorState
from octocore.decode import DecodedInstruction
from octocore.peripherals import Peripherals
from octocore.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """00E0 - Clear display."""
    io.display.clear()
    io.display.mark_dirty()
    return state


def execute_return(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)
