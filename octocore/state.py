"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, field, PyTreeNode

from octocore.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_REGISTERS, STACK_SIZE
)
from octocore.errors import MemoryAccessError


@dataclass
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state: memory and register file.

    The display, keypad and audio device are collaborators passed to the
    instructions separately; they are not part of the machine state.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: Optional[jax.Array] = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def set_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Write an 8-bit register, wrapping the value modulo 256."""
    return state.replace(V=state.V.at[index].set(value & 0xFF))


def check_range(address: int, length: int = 1) -> None:
    """Raise if ``length`` bytes from ``address`` fall outside memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)


def read_bytes(state: EmulatorState, address: int, length: int) -> list[int]:
    """Read ``length`` bytes of memory starting at ``address``."""
    check_range(address, length)
    return state.memory[address:address + length].tolist()


def write_bytes(state: EmulatorState, address: int, values) -> EmulatorState:
    """Write a sequence of bytes into memory starting at ``address``."""
    data = jnp.array(list(values), dtype=jnp.uint8)
    check_range(address, len(data))
    return state.replace(memory=state.memory.at[address:address + len(data)].set(data))
