"""Bit-banged driver for TM1638 8 digit LED/key boards."""
from .font import FONT, segment_mask
from .tm1638 import TM1638, dot_mask, pow2, rotate_bits

__version__ = "0.1.0"
