"""Tests for the fetch/decode/execute loop and timers."""

import pytest
import jax.numpy as jnp
from octocore import (
    Processor, DecodeError, MemoryAccessError, Operation, fetch, tick_timers, PROGRAM_START
)
from octocore.peripherals import ToneFlag
from conftest import assemble


class TestFetch:
    """Fetch reads big-endian words and advances PC first."""

    def test_fetch_advances_pc(self, fresh_state):
        state = fresh_state.replace(
            memory=fresh_state.memory.at[PROGRAM_START:PROGRAM_START + 2].set(jnp.array([0xA1, 0x23], dtype=jnp.uint8))
        )
        state, word = fetch(state)
        assert word == 0xA123
        assert state.pc == PROGRAM_START + 2

    def test_fetch_past_end_of_memory(self, fresh_state):
        with pytest.raises(MemoryAccessError):
            fetch(fresh_state.replace(pc=jnp.asarray(0xFFF, dtype=jnp.uint16)))


class TestStep:
    """Single steps through small programs."""

    def test_step_returns_instruction(self, processor):
        processor.load(assemble(0x6A42))
        instruction = processor.step()
        assert instruction.operation is Operation.LOAD
        assert processor.state.V[0xA] == 0x42
        assert processor.pc == 0x202
        assert processor.instruction_count == 1

    def test_skip_moves_past_next_instruction(self, processor):
        processor.load(assemble(0x3000, 0x6001, 0x6102))
        processor.step()
        assert processor.pc == 0x204
        processor.step()
        assert processor.state.V[0] == 0
        assert processor.state.V[1] == 2

    def test_call_return_round_trip(self, processor):
        # 200: CALL 206 / 202: LD V1, 1 / 204: JP 204 / 206: LD V0, 7 / 208: RET
        processor.load(assemble(0x2206, 0x6101, 0x1204, 0x6007, 0x00EE))
        processor.step()
        assert processor.pc == 0x206
        processor.step()
        processor.step()
        assert processor.pc == 0x202
        processor.step()
        assert processor.state.V[0] == 7
        assert processor.state.V[1] == 1

    def test_decode_error_reports_address_and_bytes(self, processor):
        processor.load(assemble(0x6000, 0xFFFF))
        processor.step()
        with pytest.raises(DecodeError) as excinfo:
            processor.step()
        error = excinfo.value
        assert error.address == 0x202
        assert (error.msb, error.lsb) == (0xFF, 0xFF)
        assert error.word == 0xFFFF
        assert "0xFFFF" in str(error)

    def test_empty_memory_is_a_decode_error(self, processor):
        with pytest.raises(DecodeError):
            processor.step()

    def test_tracer_sees_every_instruction(self, io):
        seen = []
        processor = Processor(io=io, tracer=lambda address, inst: seen.append((address, inst.raw)))
        processor.load(assemble(0x6001, 0x6102))
        processor.step()
        processor.step()
        assert seen == [(0x200, 0x6001), (0x202, 0x6102)]


class TestKeyWait:
    """FX0A parks the program counter until a key is pressed."""

    def test_waits_without_key(self, processor):
        processor.load(assemble(0xF30A, 0x6001))
        for _ in range(5):
            processor.step()
            assert processor.pc == 0x200
        assert processor.instruction_count == 5

    def test_key_press_releases_wait(self, processor, io):
        processor.load(assemble(0xF30A, 0x6001))
        processor.step()
        processor.step()
        io.keypad.press(0xC)
        io.keypad.press(0x7)
        processor.step()
        assert processor.pc == 0x202
        assert processor.state.V[3] == 0x7

    def test_timers_run_while_waiting(self, processor):
        processor.load(assemble(0x6005, 0xF015, 0xF30A))
        processor.step()
        processor.step()
        for _ in range(3):
            processor.step()
            processor.tick_timers()
        assert processor.state.delay_timer == 2
        assert processor.pc == 0x204


class TestTimers:
    """60 Hz timer ticks and the audio collaborator."""

    def test_delay_counts_down_to_zero(self, fresh_state):
        audio = ToneFlag()
        state = fresh_state.replace(delay_timer=jnp.asarray(2, dtype=jnp.uint8))
        for expected in (1, 0, 0):
            state = tick_timers(state, audio)
            assert state.delay_timer == expected

    def test_sound_enables_tone_until_it_expires(self, fresh_state):
        audio = ToneFlag()
        state = fresh_state.replace(sound_timer=jnp.asarray(2, dtype=jnp.uint8))

        state = tick_timers(state, audio)
        assert audio.active and state.sound_timer == 1
        state = tick_timers(state, audio)
        assert audio.active and state.sound_timer == 0
        state = tick_timers(state, audio)
        assert not audio.active
        assert audio.transitions == 2

    def test_processor_tick_reports_tone(self, processor, io):
        processor.load(assemble(0x6001, 0xF018))
        processor.step()
        processor.step()
        assert processor.sound_active
        assert processor.tick_timers() is True
        assert io.audio.active
        assert processor.tick_timers() is False
        assert not io.audio.active


class TestRunFrame:
    """A frame is a batch of steps followed by one timer tick."""

    def test_run_frame(self, io):
        processor = Processor(io=io, instructions_per_frame=4)
        processor.load(assemble(0x6003, 0xF015, 0x7101, 0x1204))
        processor.run_frame()
        assert processor.instruction_count == 4
        assert processor.frame_count == 1
        assert processor.state.delay_timer == 2
        assert processor.state.V[1] == 1

    def test_draw_marks_display_dirty(self, io):
        processor = Processor(io=io, instructions_per_frame=3)
        processor.load(assemble(0x00E0, 0xD015, 0x1204))
        io.display.dirty = False
        processor.run_frame()
        assert io.display.consume_dirty()
        assert not io.display.dirty
