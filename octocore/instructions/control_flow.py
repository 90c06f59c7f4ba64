"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from octocore.state import EmulatorState
from octocore.decode import DecodedInstruction
from octocore.peripherals import Peripherals
from octocore.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.addr, dtype=jnp.uint16))


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.addr + int(state.V[0])
    return state.replace(pc=jnp.asarray(jump_address, dtype=jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction, io)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
        if condition_fn(state, instruction, io):
            return state.replace(pc=state.pc + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst, io: int(state.V[inst.x]) == inst.arg
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst, io: int(state.V[inst.x]) != inst.arg
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst, io: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst, io: int(state.V[inst.x]) != int(state.V[inst.y])
)

execute_skip_if_key = make_skip_instruction(
    lambda state, inst, io: io.keypad.is_pressed(int(state.V[inst.x]))
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst, io: not io.keypad.is_pressed(int(state.V[inst.x]))
)
