"""
CHIP-8 emulator host: pygame window or headless run
"""

import argparse
import os
import sys

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from chip8 import Chip8Error, Interpreter, load_config
from chip8.logging import get_logger, set_log_level
from chip8.rendering import create_color_scheme, framebuffer_to_rgb, save_screenshot

logger = get_logger("chip8.host")


def build_key_map(pygame):
    """Map the left side of a QWERTY keyboard onto the hex keypad.

        1 2 3 C        1 2 3 4
        4 5 6 D   <-   Q W E R
        7 8 9 E        A S D F
        A 0 B F        Z X C V
    """
    return {
        pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
        pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
        pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
        pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
    }


def create_interpreter(rom_filename, config):
    interpreter = Interpreter(seed=config.seed, stack_depth=config.stack_depth)
    interpreter.load_file(rom_filename)
    return interpreter


def run_frame(interpreter, instructions_per_frame):
    """Run one frame worth of instructions, ticking the timers once."""
    for i in range(instructions_per_frame):
        interpreter.step(tick_timers=(i == 0))


def run_emulator(rom_filename, config):
    """Main emulator loop in a pygame window"""
    import pygame

    pygame.init()
    scale = config.scale
    screen = pygame.display.set_mode((64 * scale, 32 * scale))
    pygame.display.set_caption("CHIP-8")
    clock = pygame.time.Clock()
    key_map = build_key_map(pygame)
    on_color, off_color = create_color_scheme(config.color_scheme)

    try:
        interpreter = create_interpreter(rom_filename, config)
    except (OSError, Chip8Error) as e:
        logger.error(f"Cannot load {rom_filename}: {e}")
        pygame.quit()
        return 1

    ipf = config.instructions_per_frame
    running = True
    paused = False
    halted = False

    logger.info("Controls: ESC=Quit, P=Pause, R=Reset, +/-=Speed")

    while running:
        clock.tick(config.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_F5 or (event.key == pygame.K_r and pygame.key.get_mods() & pygame.KMOD_CTRL):
                    interpreter = create_interpreter(rom_filename, config)
                    halted = False
                    logger.info("Reset")
                elif event.key == pygame.K_EQUALS:
                    ipf = min(100, ipf + 2)
                    logger.info(f"Speed: {ipf} IPF")
                elif event.key == pygame.K_MINUS:
                    ipf = max(1, ipf - 2)
                    logger.info(f"Speed: {ipf} IPF")
                elif event.key in key_map:
                    interpreter.set_key(key_map[event.key], True)
            elif event.type == pygame.KEYUP:
                if event.key in key_map:
                    interpreter.set_key(key_map[event.key], False)

        if not paused and not halted:
            try:
                run_frame(interpreter, ipf)
            except Chip8Error as e:
                logger.error(f"{e} at pc={interpreter.pc:#06x}")
                halted = True

        rgb = framebuffer_to_rgb(interpreter.framebuffer(), scale, on_color, off_color)
        surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

    pygame.quit()
    return 0


def run_headless(rom_filename, config, steps, screenshot=None, progress=False):
    """Run a fixed number of instructions without a window."""
    try:
        interpreter = create_interpreter(rom_filename, config)
    except (OSError, Chip8Error) as e:
        logger.error(f"Cannot load {rom_filename}: {e}")
        return 1

    status = 0
    try:
        interpreter.run(steps, progress=progress)
    except Chip8Error as e:
        logger.error(f"{e} at pc={interpreter.pc:#06x}")
        status = 2

    print(interpreter)
    if screenshot:
        save_screenshot(interpreter.framebuffer(), screenshot, config.scale, config.color_scheme)
        logger.info(f"Screenshot saved: {screenshot}")
    return status


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="CHIP-8 interpreter")
    parser.add_argument("rom", help="Path to a CHIP-8 ROM image")
    parser.add_argument("--scale", type=int, help="Window pixels per CHIP-8 pixel")
    parser.add_argument("--ipf", type=int, dest="instructions_per_frame", help="Instructions per frame")
    parser.add_argument("--fps", type=int, help="Frames per second")
    parser.add_argument("--color-scheme", help="classic, amber, white, blue or retro")
    parser.add_argument("--seed", type=int, help="Seed for the random number source")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--steps", type=int, default=1000, help="Instructions to run in headless mode")
    parser.add_argument("--screenshot", help="Save the final screen to this image (headless mode)")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar (headless mode)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(
        scale=args.scale,
        instructions_per_frame=args.instructions_per_frame,
        fps=args.fps,
        color_scheme=args.color_scheme,
        seed=args.seed,
        log_level=args.log_level,
    )
    set_log_level(config.log_level)

    if args.headless:
        return run_headless(args.rom, config, args.steps, args.screenshot, args.progress)
    return run_emulator(args.rom, config)


if __name__ == "__main__":
    sys.exit(main())
