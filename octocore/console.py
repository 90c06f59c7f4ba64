"""Driver loops that pace the processor and talk to the collaborators."""

import time
from typing import Optional

import jax
from tqdm import tqdm

from octocore.config import EmulatorConfig
from octocore.emulator import Processor
from octocore.errors import Chip8Error
from octocore.logging import EmulatorLogger
from octocore.peripherals import FrameBuffer, KeypadState, Peripherals, ToneFlag

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_LOAD_FAILED = 74


def create_processor(config: EmulatorConfig, io: Peripherals, logger: EmulatorLogger) -> Processor:
    """Build a processor wired to ``io`` according to ``config``."""
    return Processor(
        io=io,
        rng=jax.random.PRNGKey(config.seed),
        instructions_per_frame=config.instructions_per_frame,
        tracer=logger.log_trace if config.trace else None,
    )


def _load(processor: Processor, rom: str, logger: EmulatorLogger) -> bool:
    try:
        processor.load_file(rom)
    except (OSError, Chip8Error) as e:
        logger.error(f"Could not load {rom}: {e}")
        return False
    logger.info(f"Loaded: {rom}")
    return True


def _run_stats(processor: Processor, started: float) -> dict:
    elapsed = time.time() - started
    return {
        "frames": processor.frame_count,
        "instructions": processor.instruction_count,
        "seconds": elapsed,
        "instructions_per_second": processor.instruction_count / elapsed if elapsed > 0 else 0.0,
    }


def run_headless(
    rom: str,
    config: EmulatorConfig,
    frames: int,
    logger: Optional[EmulatorLogger] = None,
    dump_screen: bool = False,
    progress: bool = True,
) -> int:
    """Run ``frames`` frames without a window; returns an exit status."""
    logger = logger or EmulatorLogger(log_level=config.log_level)
    display = FrameBuffer()
    processor = create_processor(config, Peripherals(display, KeypadState(), ToneFlag()), logger)
    if not _load(processor, rom, logger):
        return EXIT_LOAD_FAILED

    logger.log_run_start(rom, config.to_dict())
    started = time.time()
    status = EXIT_OK
    try:
        for _ in tqdm(range(frames), desc="Emulating", unit="frame", disable=not progress):
            processor.run_frame()
            display.consume_dirty()
    except Chip8Error as e:
        logger.log_fatal(e, processor.pc)
        status = EXIT_FATAL

    logger.log_run_end(_run_stats(processor, started))
    if dump_screen:
        print(display.to_text(), file=logger.stream, flush=True)
    return status


def run_windowed(rom: str, config: EmulatorConfig, logger: Optional[EmulatorLogger] = None) -> int:
    """Run in a pygame window until it is closed; returns an exit status."""
    import pygame

    from octocore.frontend import PygameAudio, PygameKeypad, PygameScreen

    logger = logger or EmulatorLogger(log_level=config.log_level)
    pygame.init()
    screen = PygameScreen(config.scale, config.color_scheme, config.fade_factor)
    keypad = PygameKeypad()
    audio = PygameAudio()
    processor = create_processor(config, Peripherals(screen, keypad, audio), logger)

    if not _load(processor, rom, logger):
        pygame.quit()
        return EXIT_LOAD_FAILED

    logger.log_run_start(rom, config.to_dict())
    logger.info("Controls: 1234/QWER/ASDF/ZXCV = keypad, ESC = quit")
    clock = pygame.time.Clock()
    started = time.time()
    status = EXIT_OK
    running = True

    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    keypad.handle_event(event)
            if not running:
                break

            processor.run_frame()
            screen.refresh()
            clock.tick(config.fps)
    except Chip8Error as e:
        logger.log_fatal(e, processor.pc)
        status = EXIT_FATAL
    finally:
        audio.close()
        pygame.quit()

    logger.log_run_end(_run_stats(processor, started))
    return status
