"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from octocore.state import EmulatorState, set_register
from octocore.decode import DecodedInstruction
from octocore.peripherals import Peripherals


def execute_set(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return set_register(state, instruction.x, instruction.arg)


def execute_add(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping silently."""
    return set_register(state, instruction.x, int(state.V[instruction.x]) + instruction.arg)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(instruction.addr, dtype=jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    state = state.replace(rng=key)
    return set_register(state, instruction.x, random_value & instruction.arg)
