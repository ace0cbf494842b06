import math


BLOCK_SIZE = 64
DIGEST_SIZE = 16
LENGTH_FIELD_SIZE = 8  # 64-bit little-endian bit count

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# Initial chaining values (RFC 1321, section 3.3)
INIT_STATE = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
)

PAD_BYTE = 0x80


def _make_shifts():
    rounds = (
        (7, 12, 17, 22),
        (5, 9, 14, 20),
        (4, 11, 16, 23),
        (6, 10, 15, 21),
    )
    return tuple(s for r in rounds for s in r * 4)


def _make_constants():
    # K[i] = floor(|sin(i + 1)| * 2**32)
    return tuple(int(abs(math.sin(i + 1)) * 4294967296) & MASK32 for i in range(64))


def _make_word_order():
    order = []
    for i in range(64):
        if i < 16:
            order.append(i)
        elif i < 32:
            order.append((5 * i + 1) % 16)
        elif i < 48:
            order.append((3 * i + 5) % 16)
        else:
            order.append((7 * i) % 16)
    return tuple(order)


SHIFTS = _make_shifts()
CONSTANTS = _make_constants()
WORD_ORDER = _make_word_order()
