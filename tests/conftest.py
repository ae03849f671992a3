import pytest


def key_bits(values):
    """Bits the chip shifts out for the given key-scan bytes, LSB first."""
    return [bool((v >> i) & 1) for v in values for i in range(8)]


class FakeOutput:
    def __init__(self, bus, pin, name):
        self.bus = bus
        self.pin = pin
        self.name = name
        self.released = False

    def set_high(self):
        self.bus.set(self.name, 1)

    def set_low(self):
        self.bus.set(self.name, 0)

    def set_state(self, high):
        self.bus.set(self.name, 1 if high else 0)


class FakeInput:
    def __init__(self, bus, pin, name):
        self.bus = bus
        self.pin = pin
        self.name = name
        self.released = False

    def read_is_high(self):
        return self.bus.sample()


class FakeBus:
    """Pin controller double that decodes sent frames from the pin toggles.

    A frame is everything written while STB is low, as a list of bytes.
    Bits are taken on the rising CLK edge, LSB first, and only while DIO is
    an output. ``bits`` feeds the reads once DIO is turned around.
    """

    def __init__(self, bits=(), fail_reads=False):
        self.levels = {"DIO": 0, "CLK": 1, "STB": 1}
        self.frames = []
        self.events = []
        self.pins = {}
        self.bits = iter(bits)
        self.fail_reads = fail_reads
        self.dio_input = False
        self.rising_edges = 0
        self.cleaned = False
        self._sent = []

    def provision_output(self, pin, name=None):
        handle = FakeOutput(self, pin, name)
        self.pins[pin] = handle
        self.events.append(("out", name))
        if name == "DIO":
            self.dio_input = False
        return handle

    def provision_input(self, pin, name=None, pull=None):
        handle = FakeInput(self, pin, name)
        self.pins[pin] = handle
        self.events.append(("in", name, pull))
        if name == "DIO":
            self.dio_input = True
        return handle

    def unprovision(self, handle):
        assert self.pins.get(handle.pin) is handle
        del self.pins[handle.pin]
        handle.released = True
        self.events.append(("release", handle.name))

    def cleanup(self):
        self.cleaned = True

    def sample(self):
        if self.fail_reads:
            raise OSError("DIO read failed")
        return next(self.bits, False)

    def set(self, name, level):
        prev = self.levels[name]
        self.levels[name] = level
        if name == "STB":
            if prev == 1 and level == 0:
                self._sent = []
            elif prev == 0 and level == 1:
                self.frames.append([
                    sum(bit << i for i, bit in enumerate(self._sent[n:n + 8]))
                    for n in range(0, len(self._sent), 8)
                ])
        elif name == "CLK" and prev == 0 and level == 1:
            self.rising_edges += 1
            if self.levels["STB"] == 0 and not self.dio_input:
                self._sent.append(self.levels["DIO"])


@pytest.fixture
def bus():
    return FakeBus()
