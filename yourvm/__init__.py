"""A small 16-bit virtual machine: assembler, decoder, CPU, memory bus and RAM."""

__version__ = "0.1.0"
__all__ = ["bus", "ram", "decoder", "encoder", "cpu", "cli"]