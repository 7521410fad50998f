"""Word-addressed random access memory attached to the bus."""

from __future__ import annotations

from yourvm.bus import Bus, BusDevice


class RAM(BusDevice):
    """32K words of 16-bit memory mapped from address 0."""

    MEM_SIZE = 0x8000
    BASE_ADDR = 0x0000

    def __init__(self) -> None:
        self._memory = [0] * self.MEM_SIZE

    def in_range(self, address: int) -> bool:
        return self.BASE_ADDR <= address < self.BASE_ADDR + self.MEM_SIZE

    def read(self, address: int, bus: Bus) -> None:
        self._check_range(address)
        bus.data = self._memory[address - self.BASE_ADDR]

    def write(self, address: int, bus: Bus) -> None:
        self._check_range(address)
        self._memory[address - self.BASE_ADDR] = bus.data & 0xFFFF

    def __len__(self) -> int:
        return self.MEM_SIZE

    def _check_range(self, address: int) -> None:
        if not self.in_range(address):
            raise IndexError(f"RAM address out of range: 0x{address:04X}")