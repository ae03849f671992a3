"""RPi.GPIO backed pin controller.

The TM1638 driver only needs three things from the board: drive a pin
high or low, read a pin, and flip the DIO pin between output and input
while a key scan is read back. This module provides exactly that on top
of RPi.GPIO.
"""
import logging

log = logging.getLogger(__name__)

PULL_UP = "up"
PULL_DOWN = "down"
PULL_OFF = "off"


class PinReleasedError(RuntimeError):
    """A pin handle was used after the controller released it."""


class _Pin:
    def __init__(self, controller, pin, name):
        self.controller = controller
        self.pin = pin
        self.name = name
        self.released = False

    def _check(self):
        if self.released:
            raise PinReleasedError(f"pin {self.name} ({self.pin}) has been released")

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} pin={self.pin}>"


class OutputPin(_Pin):
    def set_high(self):
        self._check()
        self.controller.gpio.output(self.pin, self.controller.gpio.HIGH)

    def set_low(self):
        self._check()
        self.controller.gpio.output(self.pin, self.controller.gpio.LOW)

    def set_state(self, high):
        if high:
            self.set_high()
        else:
            self.set_low()


class InputPin(_Pin):
    def read_is_high(self):
        self._check()
        return bool(self.controller.gpio.input(self.pin))


class GpioController:
    """Hands out pin handles and keeps track of which pins are in use.

    ``mode`` is the RPi.GPIO numbering scheme, "BCM" or "BOARD". ``gpio``
    is the RPi.GPIO module itself; it is imported on first use so the rest
    of the package stays importable off the Pi.
    """

    def __init__(self, mode="BCM", gpio=None):
        if gpio is None:
            import RPi.GPIO as gpio  # pyright: ignore[reportMissingModuleSource]
        if mode not in ("BCM", "BOARD"):
            raise ValueError(f"unknown pin numbering mode {mode!r}")
        self.gpio = gpio
        self.pins = {}
        gpio.setwarnings(False)
        gpio.setmode(getattr(gpio, mode))

    def _pull(self, pull):
        if pull == PULL_UP:
            return self.gpio.PUD_UP
        if pull == PULL_DOWN:
            return self.gpio.PUD_DOWN
        if pull == PULL_OFF:
            return self.gpio.PUD_OFF
        raise ValueError(f"unknown pull resistance {pull!r}")

    def _check_free(self, pin):
        if pin in self.pins:
            raise ValueError(f"pin {pin} is already provisioned as {self.pins[pin]!r}")

    def provision_output(self, pin, name=None):
        self._check_free(pin)
        self.gpio.setup(pin, self.gpio.OUT)
        handle = OutputPin(self, pin, name or str(pin))
        self.pins[pin] = handle
        return handle

    def provision_input(self, pin, name=None, pull=PULL_UP):
        self._check_free(pin)
        self.gpio.setup(pin, self.gpio.IN, pull_up_down=self._pull(pull))
        handle = InputPin(self, pin, name or str(pin))
        self.pins[pin] = handle
        return handle

    def unprovision(self, handle):
        if self.pins.get(handle.pin) is not handle:
            raise ValueError(f"{handle!r} is not provisioned by this controller")
        del self.pins[handle.pin]
        handle.released = True

    def cleanup(self):
        """Release every pin still held and reset all channels this
        process has set up."""
        for handle in self.pins.values():
            handle.released = True
        log.debug("releasing GPIO pins %s", sorted(self.pins))
        self.pins.clear()
        self.gpio.cleanup()
