"""CHIP-8 stack operations."""

import jax.numpy as jnp
from octocore.constants import STACK_SIZE
from octocore.errors import StackOverflow, StackUnderflow
from octocore.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    pointer = int(stack.pointer)
    if pointer >= STACK_SIZE:
        raise StackOverflow(int(address), pointer)
    new_data = stack.data.at[pointer].set(address)
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if int(stack.pointer) == 0:
        raise StackUnderflow()
    new_pointer = int(stack.pointer) - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
