"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from octocore import create_state, Peripherals, Processor


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def io():
    """Provide in-memory display, keypad and audio collaborators."""
    return Peripherals()


@pytest.fixture
def processor(io):
    """Provide a processor wired to the in-memory collaborators."""
    return Processor(io=io)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=3)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def assemble(*words):
    """Turn 16-bit instruction words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
