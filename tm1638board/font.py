from types import MappingProxyType

# 7-segment masks, bit 0 = segment a ... bit 6 = segment g, bit 7 = dot.
# Upper and lower case differ on purpose, lookups are case-sensitive.
FONT = MappingProxyType({
    '0': 0b00111111,
    '1': 0b00000110,
    '2': 0b01011011,
    '3': 0b01001111,
    '4': 0b01100110,
    '5': 0b01101101,
    '6': 0b01111101,
    '7': 0b00000111,
    '8': 0b01111111,
    '9': 0b01101111,

    'a': 0b01110111,
    'b': 0b01111100,
    'c': 0b01011000,
    'd': 0b01011110,
    'e': 0b01111001,
    'f': 0b01110001,
    'g': 0b01011111,
    'h': 0b01110100,
    'i': 0b00010000,
    'j': 0b00001110,
    'k': 0b01110101,
    'l': 0b00111000,
    'm': 0b01010101,
    'n': 0b01010100,
    'o': 0b01011100,
    'p': 0b01110011,
    'q': 0b01100111,
    'r': 0b01010000,
    's': 0b01101101,
    't': 0b01111000,
    'u': 0b00111110,
    'v': 0b00101010,
    'w': 0b00011101,
    'x': 0b01110110,
    'y': 0b01101110,
    'z': 0b01000111,

    ' ': 0b00000000,
    '!': 0b10000110,
    '"': 0b00100010,
    '(': 0b00110000,
    ')': 0b00000110,
    '-': 0b01000000,
    '.': 0b10000000,
    '/': 0b01010010,
    '=': 0b01001000,
    '?': 0b01010011,
    '@': 0b01011111,

    'A': 0b01110111,
    'B': 0b01111111,
    'C': 0b00111001,
    'D': 0b00111111,
    'E': 0b01111001,
    'F': 0b01110001,
    'G': 0b00111101,
    'H': 0b01110110,
    'I': 0b00000110,
    'J': 0b00011111,
    'K': 0b01101001,
    'L': 0b00111000,
    'M': 0b01010100,  # same as 'n', no real M on 7 segments
    'N': 0b00110111,
    'O': 0b00111111,
    'P': 0b01110011,
    'Q': 0b01100111,
    'R': 0b00110001,
    'S': 0b01101101,
    'T': 0b01111000,
    'U': 0b00111110,
    'V': 0b00101010,
    'W': 0b00011101,
    'X': 0b01110110,
    'Y': 0b01101110,
    'Z': 0b01011011,

    '[': 0b00111001,
    ']': 0b00001111,
    '_': 0b00001000,
    '`': 0b00100000,
    '{': 0b01000110,
    '|': 0b00000110,
    '}': 0b01110000,
    '~': 0b00000001,
})


def segment_mask(char):
    """Return the segment mask for one character.

    Raises ValueError when the character has no glyph.
    """
    try:
        return FONT[char]
    except KeyError:
        raise ValueError(f"no 7-segment glyph for {char!r}") from None
