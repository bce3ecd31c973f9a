"""
Play a CHIP-8 ROM in a pygame window.

    python main.py ROM [--legacy] [--cpu-hz 700] [--scale 10] [--trace]
"""

import argparse
import sys

import numpy as np
import pygame

from chip8vm import Machine, Settings, Quirks, Clock, Chip8Error, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.logging import ConsoleLogger, TraceLogger
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme

# COSMAC VIP hex keypad laid out on the left of a QWERTY keyboard
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

MAX_STEPS_PER_FRAME = 64


def poll_keys() -> list[bool]:
    pressed = pygame.key.get_pressed()
    keys = [False] * 16
    for scancode, key in KEY_MAP.items():
        if pressed[scancode]:
            keys[key] = True
    return keys


def make_beep(frequency: int = 440, sample_rate: int = 44100) -> pygame.mixer.Sound:
    """One-second square wave, looped while the sound timer is running."""
    t = np.arange(sample_rate)
    wave = np.where((t * frequency // (sample_rate // 2)) % 2, 4096, -4096).astype(np.int16)
    return pygame.sndarray.make_sound(np.column_stack([wave, wave]))


def run_emulator(rom_filename, settings, scale=10, color_scheme="white", trace=False):
    """Main loop: instruction clock, 60 Hz timer clock and screen refresh."""
    log = ConsoleLogger("main")
    tracer = TraceLogger(log_level="DEBUG" if trace else "INFO")

    machine = Machine(settings, logger=tracer)
    try:
        machine.load_rom_file(rom_filename)
    except (OSError, Chip8Error) as e:
        log.error(f"Could not load {rom_filename}: {e}")
        return 1
    log.info(f"Loaded {rom_filename}")

    pygame.mixer.pre_init(44100, -16, 2)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption(f"CHIP-8 - {rom_filename}")
    beep = make_beep()
    on_color, off_color = create_color_scheme(color_scheme)

    cpu_clock = Clock(settings.cpu_hz)
    timer_clock = Clock(settings.timer_hz)
    frame_clock = pygame.time.Clock()

    running = True
    paused = False
    playing = False
    log.info("Controls: ESC=Quit, P=Pause, F5=Reset")

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_F5:
                    machine.reset()
                    log.info("Reset")

        if not paused:
            keys = poll_keys()
            try:
                for _ in range(cpu_clock.due(MAX_STEPS_PER_FRAME)):
                    machine.step(keys)
            except Chip8Error as e:
                log.error(f"Halted at 0x{machine.pc:03X}: {e}")
                paused = True
            for _ in range(timer_clock.due()):
                machine.tick_timers()

        if machine.sound_active and not playing:
            beep.play(loops=-1)
            playing = True
        elif not machine.sound_active and playing:
            beep.stop()
            playing = False

        rgb = chip8_display_to_rgb(machine.frame, scale, on_color, off_color)
        pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
        pygame.display.flip()
        frame_clock.tick(60)

    pygame.quit()
    tracer.log_summary()
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="CHIP-8 interpreter")
    parser.add_argument("rom", help="Path to a CHIP-8 ROM image")
    parser.add_argument("--legacy", action="store_true", help="Use COSMAC VIP quirks")
    parser.add_argument("--cpu-hz", type=int, default=700, help="Instructions per second")
    parser.add_argument("--scale", type=int, default=10, help="Window pixels per CHIP-8 pixel")
    parser.add_argument("--colors", default="white", help="Color scheme")
    parser.add_argument("--seed", type=int, default=0, help="Seed for CXNN")
    parser.add_argument("--trace", action="store_true", help="Print every executed instruction")
    args = parser.parse_args(argv)

    quirks = Quirks.legacy() if args.legacy else Quirks.modern()
    settings = Settings(cpu_hz=args.cpu_hz, quirks=quirks, seed=args.seed)
    return run_emulator(args.rom, settings, args.scale, args.colors, args.trace)


if __name__ == "__main__":
    sys.exit(main())
