"""Tests for system instructions (0xxx)."""

from octocore import execute


def test_execute_clear_screen(fresh_state, io):
    """Test 00E0 - Clear display."""
    io.display.set_pixel(0, 0, True)
    io.display.set_pixel(63, 31, True)

    state = execute(fresh_state, 0x00E0, io)

    assert not io.display.pixels.any()
    assert io.display.dirty
    assert state.pc == fresh_state.pc


def test_execute_call_and_return(fresh_state, io):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    # Call subroutine
    state = execute(state, 0x2300, io)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    # Return from subroutine
    state = execute(state, 0x00EE, io)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_return_in_order(fresh_state, io):
    """Returns unwind nested calls last in, first out."""
    state = fresh_state.replace(pc=fresh_state.pc + 2)

    state = execute(state, 0x2400, io)
    state = state.replace(pc=state.pc + 2)
    state = execute(state, 0x2500, io)
    assert state.pc == 0x500

    state = execute(state, 0x00EE, io)
    assert state.pc == 0x402
    state = execute(state, 0x00EE, io)
    assert state.pc == 0x202
