"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from octocore.state import EmulatorState, set_register, read_bytes, write_bytes
from octocore.decode import DecodedInstruction
from octocore.peripherals import Peripherals
from octocore.constants import FONT_START, FONT_GLYPH_SIZE


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return set_register(state, instruction.x, int(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX1E - Add VX to I register, no flag."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(I=jnp.asarray(new_i, dtype=jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a key the program counter is moved back onto this instruction,
    so the next step executes it again while timers and the display keep
    running on the driver's schedule.
    """
    pressed_key = io.keypad.first_pressed()
    if pressed_key is None:
        return state.replace(pc=state.pc - 2)
    return set_register(state, instruction.x, pressed_key)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0x0F
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return write_bytes(state, int(state.I), digits)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    registers = state.V[:instruction.x + 1].tolist()
    return write_bytes(state, int(state.I), registers)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_bytes(state, int(state.I), instruction.x + 1)
    new_V = state.V.at[:instruction.x + 1].set(jnp.array(values, dtype=jnp.uint8))
    return state.replace(V=new_V)
