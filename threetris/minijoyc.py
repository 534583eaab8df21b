"""Register-level driver for the Mini JoyC joystick unit on an I2C bus."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import Protocol

JOYC_ADDR = 0x54
ADC_VALUE_REG = 0x00
POS_VALUE_REG_10_BIT = 0x10
POS_VALUE_REG_8_BIT = 0x20
BUTTON_REG = 0x30
RGB_LED_REG = 0x40
CAL_REG = 0x50
FIRMWARE_VERSION_REG = 0xFE
I2C_ADDRESS_REG = 0xFF

CAL_MODE_STOP = 0
CAL_MODE_AUTO = 1
CAL_MODE_MANUAL = 2

CALIBRATION_SLOTS = 6
CALIBRATION_SETTLE_SECONDS = 1.0


class PosReadMode(IntEnum):
    BIT_8 = 0
    BIT_10 = 1


class I2CBus(Protocol):
    """A bus that writes and reads raw bytes; failures raise OSError."""

    def write(self, address: int, data: bytes) -> None:
        ...

    def read(self, address: int, length: int) -> bytes:
        ...


class MiniJoyC:
    """The joystick unit: ADC readings, positions, button, LED and calibration."""

    def __init__(
        self,
        bus: I2CBus,
        address: int = JOYC_ADDR,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.bus = bus
        self.address = address
        self._sleep = sleep

    def _write(self, reg: int, payload: bytes = b"") -> None:
        self.bus.write(self.address, bytes([reg]) + payload)

    def _read(self, reg: int, length: int) -> bytes:
        self._write(reg)
        return bytes(self.bus.read(self.address, length))

    def _read_u16(self, reg: int) -> int:
        return int.from_bytes(self._read(reg, 2), "little")

    def probe(self) -> bool:
        """Return True when the unit acknowledges its address."""
        try:
            self.bus.write(self.address, b"")
        except OSError:
            return False
        return True

    def adc_value(self, index: int) -> int:
        """Raw 12-bit ADC reading of channel 0-2; other channels read as 0."""
        if not 0 <= index <= 2:
            return 0
        return self._read_u16(ADC_VALUE_REG + index * 2)

    def position(self, index: int, mode: PosReadMode) -> int:
        if not 0 <= index <= 2:
            return 0
        if PosReadMode(mode) is PosReadMode.BIT_10:
            return self._read_u16(POS_VALUE_REG_10_BIT + index * 2)
        return self._read(POS_VALUE_REG_8_BIT + index, 1)[0]

    def button_status(self) -> bool:
        """Raw button line: False while the stick is pressed."""
        return bool(self._read(BUTTON_REG, 1)[0])

    def set_led_color(self, color: int) -> None:
        if not 0 <= color <= 0xFFFFFF:
            raise ValueError(f"not a 24-bit colour: {color!r}")
        self._write(RGB_LED_REG, color.to_bytes(3, "big"))

    @staticmethod
    def _u16(value: int) -> bytes:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"calibration value out of range: {value!r}")
        return value.to_bytes(2, "little")

    def set_calibration(self, index: int, value: int) -> None:
        self._write(CAL_REG + index * 2, self._u16(value))
        self._sleep(CALIBRATION_SETTLE_SECONDS)

    def set_all_calibration(self, values: Sequence[int]) -> None:
        if len(values) != CALIBRATION_SLOTS:
            raise ValueError(f"expected {CALIBRATION_SLOTS} calibration values")
        self._write(CAL_REG, b"".join(self._u16(v) for v in values))
        self._sleep(CALIBRATION_SETTLE_SECONDS)

    def calibration(self, index: int) -> int:
        if not 0 <= index < CALIBRATION_SLOTS:
            return 0
        return self._read_u16(CAL_REG + index * 2)

    def set_i2c_address(self, address: int) -> int:
        """Move the unit to a new address and talk to it there from now on."""
        if not 0 <= address <= 0xFF:
            raise ValueError(f"not an I2C address: {address!r}")
        self._write(I2C_ADDRESS_REG, bytes([address]))
        self.address = address
        return self.address

    def i2c_address(self) -> int:
        return self._read(I2C_ADDRESS_REG, 1)[0]

    def firmware_version(self) -> int:
        return self._read(FIRMWARE_VERSION_REG, 1)[0]