"""
Run a CHIP-8 ROM without a window and dump the final screen.

    python examples/headless_run.py [ROM] [--steps 5000] [--png out.png] [--trace]

Without a ROM, a small built-in program draws the hex digits 0-F.
"""

import argparse

from chip8vm import Machine, Chip8Error, disassemble_rom
from chip8vm.logging import ConsoleLogger, TraceLogger
from chip8vm.rendering import display_to_text, save_frame


def digits_program() -> bytes:
    """Draw glyphs 0-F in two rows of eight, then spin."""
    words = [
        0x6000,  # 200: V0 = 0      digit
        0x6101,  # 202: V1 = 1      x
        0x6201,  # 204: V2 = 1      y
        0xF029,  # 206: I = glyph V0
        0xD125,  # 208: draw at (V1, V2)
        0x7106,  # 20A: x += 6
        0x7001,  # 20C: digit += 1
        0x3008,  # 20E: skip if digit == 8
        0x1216,  # 210: -> 216
        0x6101,  # 212: x = 1
        0x7207,  # 214: y += 7
        0x3010,  # 216: skip if digit == 16
        0x1206,  # 218: -> 206
        0x121A,  # 21A: spin
    ]
    return b"".join(word.to_bytes(2, "big") for word in words)


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("rom", nargs="?", help="ROM image (defaults to a built-in demo)")
    parser.add_argument("--steps", type=int, default=2000)
    parser.add_argument("--png", help="Save the final frame to this file")
    parser.add_argument("--trace", action="store_true", help="Log every instruction")
    parser.add_argument("--disassemble", action="store_true", help="Print the ROM listing and exit")
    args = parser.parse_args()

    log = ConsoleLogger("headless")
    rom = open(args.rom, "rb").read() if args.rom else digits_program()

    if args.disassemble:
        for address, word, text in disassemble_rom(rom):
            print(f"{address:03X}  {word:04X}  {text}")
        return

    tracer = TraceLogger(log_level="DEBUG" if args.trace else "INFO")
    machine = Machine(logger=tracer)
    machine.load_rom(rom)

    try:
        executed = machine.run(args.steps, progress=not args.trace)
    except Chip8Error as e:
        log.error(f"Stopped at 0x{machine.pc:03X}: {e}")
    else:
        if machine.awaiting_key:
            log.warning(f"Program is waiting for a key after {executed} steps")

    print(display_to_text(machine.frame))
    tracer.log_summary({"pc": f"0x{machine.pc:03X}", "I": f"0x{machine.index:03X}"})

    if args.png:
        save_frame(machine.frame, args.png)
        log.info(f"Saved {args.png}")


if __name__ == "__main__":
    main()
