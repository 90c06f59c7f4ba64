"""CHIP-8 display operations."""

from octocore.state import EmulatorState, set_register, read_bytes
from octocore.decode import DecodedInstruction
from octocore.peripherals import Peripherals
from octocore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

SPRITE_WIDTH = 8


def execute_display(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Each sprite byte is one row of pixel flips, most significant bit first.
    A set bit toggles the pixel under it and VF becomes 1 if any toggle turns
    a lit pixel off. Sprites are clipped at the right and bottom edges
    instead of wrapping around.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    rows = read_bytes(state, int(state.I), instruction.n)

    state = set_register(state, FLAG_REGISTER, 0)
    display = io.display

    for row, sprite_byte in enumerate(rows):
        y = sprite_y + row
        if y >= SCREEN_HEIGHT:
            break
        for column in range(SPRITE_WIDTH):
            x = sprite_x + column
            if x >= SCREEN_WIDTH:
                break
            if not (sprite_byte >> (7 - column)) & 1:
                continue
            if display.get_pixel(x, y):
                display.set_pixel(x, y, False)
                state = set_register(state, FLAG_REGISTER, 1)
            else:
                display.set_pixel(x, y, True)

    display.mark_dirty()
    return state
