"""The system bus, the devices attached to it and the controller that routes transfers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

#: Value placed on the data lines when a read hits no device.
OPEN_BUS_VALUE = 0xFFFF


@dataclass
class Bus:
    """Address, data and control lines shared by the CPU and devices."""

    address: int = 0
    data: int = 0
    read: bool = False
    write: bool = False


class BusDevice(ABC):
    """A device that answers bus transfers for a range of addresses."""

    @abstractmethod
    def in_range(self, address: int) -> bool:
        """Return True if the device answers at ``address``."""

    @abstractmethod
    def read(self, address: int, bus: Bus) -> None:
        """Place the word at ``address`` on ``bus.data``."""

    @abstractmethod
    def write(self, address: int, bus: Bus) -> None:
        """Store ``bus.data`` at ``address``."""


@dataclass
class BusController:
    """Dispatches each bus transfer to the first device that claims the address."""

    _devices: list[BusDevice] = field(default_factory=list)

    def add_device(self, device: BusDevice) -> None:
        """Attach a device; earlier devices take precedence on overlapping ranges."""
        self._devices.append(device)

    def tick(self, bus: Bus) -> None:
        """Carry out the transfer currently requested on ``bus``."""
        device = next((d for d in self._devices if d.in_range(bus.address)), None)
        if device is None:
            if bus.read:
                bus.data = OPEN_BUS_VALUE
            return
        if bus.write:
            device.write(bus.address, bus)
        elif bus.read:
            device.read(bus.address, bus)