"""Command line entry point: assemble a program, run it and show the registers."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from yourvm.bus import Bus, BusController
from yourvm.cpu import CPU, CPUError
from yourvm.encoder import encode_program
from yourvm.ram import RAM

DEFAULT_PROGRAM = (
    "MOV R1, R2",
    "MOVI R3, #42",
    "ADD R1, R3",
    "HALT",
)

SHOWN_REGISTERS = range(1, 5)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="yourvm", description="Assemble and run a program on the virtual machine."
    )
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        help="assembly file to run (a built-in demo program is used if omitted)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Assemble, print the machine words, execute and print registers 1-4."""
    args = _parse_args(argv)

    controller = BusController()
    controller.add_device(RAM())
    cpu = CPU(Bus(), controller)

    try:
        if args.source is None:
            lines = list(DEFAULT_PROGRAM)
        else:
            lines = args.source.read_text().splitlines()

        binary = encode_program(lines)
        for word in binary:
            print(f"{word:016b}")

        cpu.load_program(binary, 0x0000)
        cpu.execute()

        for index in SHOWN_REGISTERS:
            print(f"Register {index}: {cpu.register(index)}")
    except (ValueError, IndexError, CPUError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())