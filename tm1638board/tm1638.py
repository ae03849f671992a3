import logging
import threading
import time

from .font import segment_mask
from .gpio import PULL_UP

log = logging.getLogger(__name__)

# Command bytes, see section 7 of the TM1638 datasheet
CMD_WRITE_AUTO = 0x40       # data command: write display, auto-increment address
CMD_WRITE_FIXED = 0x44      # data command: write display, fixed address
CMD_READ_KEYS = 0x42        # data command: read key-scan data
CMD_DISPLAY_CONTROL = 0x80  # display control, low 3 bits = pulse width
DISPLAY_ON = 0x08           # display control: display on
CMD_ADDRESS = 0xC0          # address command, low 4 bits = display register

DIGITS = 8
SEGMENTS = 7
KEY_BYTES = 4
MAX_INTENSITY = 7
INT_MAX = 2 ** 31 - 1


def pow2(power):
    # saturates like a signed 32-bit int, 2**30 is the largest exact result
    if power > 30:
        return INT_MAX
    return 1 << power


def rotr(num, bits):
    """Rotate the low ``bits`` bits of ``num`` right by one."""
    num &= pow2(bits) - 1
    bit = num & 1
    num >>= 1
    if bit:
        num |= 1 << (bits - 1)
    return num


def rotate_bits(num):
    """Reorder a segment byte for this board's wiring (swaps the nibbles)."""
    for _ in range(4):
        num = rotr(num, 8)
    return num


def dot_mask(text):
    """Return the dot byte for the first '.' in ``text``, 0 if there is none."""
    pos = text.find('.')
    if pos == -1:
        return 0
    # position after right alignment, dots are wired 8 4 2 1 128 64 32 16
    real_pos = pos + (DIGITS - len(text))
    if real_pos < 0:
        raise ValueError(f"not possible to render: {real_pos}: {pos}: {text}")
    if real_pos >= 4:
        return 128 >> (real_pos - 4)
    return 8 >> real_pos


class TM1638:
    """8 digit TM1638 board with up to 32 keys, driven over DIO/CLK/STB.

    ``controller`` provisions the pins (see ``gpio.GpioController``).
    ``edge_delay`` is slept after every clock edge; leave it at 0 unless the
    host toggles pins faster than the chip can follow.
    """

    def __init__(self, controller, dio, clk, stb, edge_delay=0.0):
        self.controller = controller
        self.dio = dio
        self.edge_delay = edge_delay
        self.lock = threading.RLock()
        self._dio = controller.provision_output(dio, "DIO")
        self._clk = controller.provision_output(clk, "CLK")
        self._stb = controller.provision_output(stb, "STB")
        self._closed = False

    def _pause(self):
        if self.edge_delay:
            time.sleep(self.edge_delay)

    def _write_byte(self, b):
        for i in range(8):
            self._clk.set_low()
            self._dio.set_state((b >> i) & 1)
            self._pause()
            self._clk.set_high()
            self._pause()

    def _write_command(self, cmd):
        self._stb.set_low()
        try:
            self._write_byte(cmd)
        finally:
            self._stb.set_high()

    def _write_data(self, addr, data):
        self._write_command(CMD_WRITE_FIXED)
        self._stb.set_low()
        try:
            self._write_byte(CMD_ADDRESS | addr)
            self._write_byte(data)
        finally:
            self._stb.set_high()

    def _read_byte(self):
        # DIO is handed to the chip for one byte, then taken back
        self.controller.unprovision(self._dio)
        dio_in = None
        try:
            dio_in = self.controller.provision_input(self.dio, "DIO", PULL_UP)
            temp = 0
            for _ in range(8):
                temp >>= 1
                self._clk.set_low()
                self._pause()
                if dio_in.read_is_high():
                    temp |= 0x80
                self._clk.set_high()
                self._pause()
        finally:
            if dio_in is not None:
                self.controller.unprovision(dio_in)
            self._dio = self.controller.provision_output(self.dio, "DIO")
        return temp

    def _read_keys(self):
        """Yield the four key-scan bytes inside one STB frame."""
        self._stb.set_low()
        try:
            self._write_byte(CMD_READ_KEYS)
            for _ in range(KEY_BYTES):
                yield self._read_byte()
        finally:
            self._stb.set_high()

    def enable(self, intensity=MAX_INTENSITY):
        """Turn the display on at ``intensity`` (0-7) and blank every digit."""
        level = max(0, min(MAX_INTENSITY, intensity))
        if level != intensity:
            log.warning("intensity %s clamped to %s", intensity, level)
        with self.lock:
            self._stb.set_high()
            self._clk.set_high()

            self._write_command(CMD_WRITE_AUTO)
            self._write_command(CMD_DISPLAY_CONTROL | DISPLAY_ON | level)

            self._stb.set_low()
            try:
                self._write_byte(CMD_ADDRESS)
                # 8 digits, 2 registers each
                for _ in range(DIGITS * 2):
                    self._write_byte(0x00)
            finally:
                self._stb.set_high()
        log.debug("display enabled, intensity %s", level)

    def send_char(self, pos, data, dot=False):
        """Write a raw segment byte to digit register ``pos``."""
        with self.lock:
            self._write_data(pos << 1, data | (128 if dot else 0))

    def set_text(self, text):
        """Show ``text`` right aligned, with at most one dot.

        Raises ValueError for characters without a glyph and for a dot that
        would land left of the first digit.
        """
        dots = dot_mask(text)
        shown = text
        text = text.replace('.', '')
        text = text[:DIGITS][::-1].rjust(DIGITS)
        # the two 4 digit displays on this board are swapped
        text = text[4:] + text[:4]
        masks = [0 if c == ' ' else segment_mask(c) for c in text]

        with self.lock:
            self.send_char(7, rotate_bits(dots))
            # each register holds one segment for all 8 digits
            for i in range(SEGMENTS):
                b = 0
                for p, mask in enumerate(masks):
                    b |= ((mask >> i) & 1) << p
                self.send_char(i, rotate_bits(b))
        log.debug("text set to %r", shown)

    def get_buttons(self):
        """Read the key scan, each byte OR'd in shifted by its index."""
        keys = 0
        with self.lock:
            for i, val in enumerate(self._read_keys()):
                keys |= val << i
        return keys

    def get_buttons64(self):
        """Read the key scan, one byte per 8 bits, first byte lowest."""
        keys = 0
        with self.lock:
            for i, val in enumerate(self._read_keys()):
                keys += val * pow2(i * 8)
        return keys

    def close(self):
        """Release the three pins back to the controller."""
        with self.lock:
            if self._closed:
                return
            for pin in (self._dio, self._clk, self._stb):
                # DIO can already be gone if turning it around failed
                if not getattr(pin, "released", False):
                    self.controller.unprovision(pin)
            self._closed = True
