"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Optional

import jax
import jax.numpy as jnp
from octocore.state import EmulatorState, create_state, check_range, write_bytes
from octocore.decode import DecodedInstruction, Operation, decode_word
from octocore.errors import AddressOverflow, DecodeError
from octocore.peripherals import Audio, Peripherals
from octocore.constants import PROGRAM_START, MAX_PROGRAM_SIZE, INSTRUCTION_SIZE
from octocore.instructions.system import execute_clear_screen, execute_return
from octocore.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from octocore.instructions.alu import execute_alu_operation
from octocore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octocore.instructions.display import execute_display
from octocore.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

InstructionFn = Callable[[EmulatorState, DecodedInstruction, Peripherals], EmulatorState]

DISPATCH_TABLE: dict[Operation, InstructionFn] = {
    Operation.CLS: execute_clear_screen,
    Operation.RET: execute_return,
    Operation.JUMP: execute_jump,
    Operation.CALL: execute_call,
    Operation.SKIP_EQ: execute_skip_if_equal_immediate,
    Operation.SKIP_NE: execute_skip_if_not_equal_immediate,
    Operation.SKIP_REG_EQ: execute_skip_if_equal_register,
    Operation.LOAD: execute_set,
    Operation.ADD: execute_add,
    Operation.MOVE: execute_alu_operation,
    Operation.OR: execute_alu_operation,
    Operation.AND: execute_alu_operation,
    Operation.XOR: execute_alu_operation,
    Operation.ADD_REG: execute_alu_operation,
    Operation.SUB: execute_alu_operation,
    Operation.SHR: execute_alu_operation,
    Operation.RSUB: execute_alu_operation,
    Operation.SHL: execute_alu_operation,
    Operation.SKIP_REG_NE: execute_skip_if_not_equal_register,
    Operation.LOAD_INDEX: execute_set_index,
    Operation.JUMP_V0: execute_jump_with_offset,
    Operation.RAND: execute_random,
    Operation.DRAW: execute_display,
    Operation.SKIP_KEY: execute_skip_if_key,
    Operation.SKIP_NO_KEY: execute_skip_if_not_key,
    Operation.MOVE_DELAY: execute_get_delay_timer,
    Operation.WAIT_KEY: execute_wait_for_key,
    Operation.LOAD_DELAY: execute_set_delay_timer,
    Operation.LOAD_SOUND: execute_set_sound_timer,
    Operation.ADD_INDEX: execute_add_to_index,
    Operation.LOAD_CHAR: execute_font_character,
    Operation.BCD: execute_bcd_conversion,
    Operation.STORE: execute_store_registers,
    Operation.READ: execute_load_registers,
}


def execute_decoded(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """Apply an already decoded instruction.

    The program counter is expected to point past the instruction already,
    so an undecodable word is reported at ``pc - 2``.
    """
    if instruction.is_error:
        address = (int(state.pc) - INSTRUCTION_SIZE) & 0xFFFF
        raise DecodeError(address, instruction.raw >> 8, instruction.raw & 0xFF)
    return DISPATCH_TABLE[instruction.operation](state, instruction, io)


def execute(state: EmulatorState, instruction: int, io: Peripherals) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    return execute_decoded(state, decode_word(instruction), io)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a 16-bit word."""
    return (high << 8) | low


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance the program counter."""
    pc = int(state.pc)
    check_range(pc, INSTRUCTION_SIZE)
    high, low = state.memory[pc:pc + INSTRUCTION_SIZE].tolist()
    return state.replace(pc=state.pc + INSTRUCTION_SIZE), _pack_u16(high, low)


def tick_timers(state: EmulatorState, audio: Audio) -> EmulatorState:
    """Advance both timers by one 60 Hz tick.

    The tone plays for as long as the sound timer was non-zero at the tick.
    """
    delay = int(state.delay_timer)
    sound = int(state.sound_timer)
    if delay > 0:
        delay -= 1
    if sound > 0:
        sound -= 1
        audio.set_tone_active(True)
    else:
        audio.set_tone_active(False)
    return state.replace(
        delay_timer=jnp.asarray(delay, dtype=jnp.uint8),
        sound_timer=jnp.asarray(sound, dtype=jnp.uint8),
    )


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy raw program bytes into CHIP-8 memory starting at 0x200."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise AddressOverflow(len(program), MAX_PROGRAM_SIZE)
    return write_bytes(state, PROGRAM_START, bytes(program))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


class Processor:
    """Stateful wrapper that owns a machine state and its collaborators.

    A driver calls :meth:`step` several times per frame and :meth:`tick_timers`
    once per frame, or simply :meth:`run_frame`.
    """

    def __init__(
        self,
        io: Optional[Peripherals] = None,
        rng: Optional[jax.Array] = None,
        instructions_per_frame: int = 10,
        tracer: Optional[Callable[[int, DecodedInstruction], None]] = None,
    ):
        self.io = io if io is not None else Peripherals()
        self.state = create_state(rng)
        self.instructions_per_frame = instructions_per_frame
        self.tracer = tracer
        self.instruction_count = 0
        self.frame_count = 0

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def sound_active(self) -> bool:
        """Whether the next timer tick will enable the tone."""
        return int(self.state.sound_timer) > 0

    def load(self, program: bytes) -> None:
        self.state = load_program(self.state, program)

    def load_file(self, filename: str) -> None:
        self.state = load_rom(self.state, filename)

    def step(self) -> DecodedInstruction:
        """Fetch, decode and execute exactly one instruction."""
        address = self.pc
        state, word = fetch(self.state)
        instruction = decode_word(word)
        if self.tracer is not None:
            self.tracer(address, instruction)
        self.state = execute_decoded(state, instruction, self.io)
        self.instruction_count += 1
        return instruction

    def tick_timers(self) -> bool:
        """Run one 60 Hz timer tick and return whether the tone was enabled."""
        active = self.sound_active
        self.state = tick_timers(self.state, self.io.audio)
        return active

    def run_frame(self) -> None:
        """Run one frame worth of instructions followed by a timer tick."""
        for _ in range(self.instructions_per_frame):
            self.step()
        self.tick_timers()
        self.frame_count += 1
