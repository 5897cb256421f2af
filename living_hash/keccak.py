"""
Keccak-f[1600] permutation over a flat 25-lane state, plus the byte/lane
conversions and a one-shot Keccak-256 (Ethereum-style, not NIST SHA3-256).
"""

from functools import reduce
from operator import xor

from .padding import pad

# --------------------------------------------------------------------
#                          Constants & Helpers
# --------------------------------------------------------------------

RoundConstants = [
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
]

# RotationConstants[y][x]
RotationConstants = [
    [0, 1, 62, 28, 27],
    [36, 44, 6, 55, 20],
    [3, 10, 43, 25, 39],
    [41, 45, 15, 21, 8],
    [18, 2, 61, 56, 14],
]

LANES = 25
LANE_BYTES = 8
STATE_BYTES = LANES * LANE_BYTES
WIDTH_BITS = STATE_BYTES * 8
KECCAK256_RATE_BYTES = 136

Masks = [(1 << i) - 1 for i in range(65)]


def rol(value, left, bits=64):
    top = value >> (bits - left)
    bot = (value & Masks[bits - left]) << left
    return bot | top


def lanes_to_bytes(lanes) -> bytes:
    """Serialize 25 lanes as 200 little-endian bytes, lane (x, y) at offset 8*(x + 5*y)."""
    return b"".join(lane.to_bytes(LANE_BYTES, "little") for lane in lanes)


def bytes_to_lanes(data) -> list:
    """Inverse of lanes_to_bytes; shorter input is zero-extended to 200 bytes."""
    if len(data) > STATE_BYTES:
        raise ValueError(f"state is {STATE_BYTES} bytes, got {len(data)}")
    data = bytes(data) + bytes(STATE_BYTES - len(data))
    return [
        int.from_bytes(data[i : i + LANE_BYTES], "little")
        for i in range(0, STATE_BYTES, LANE_BYTES)
    ]


# --------------------------------------------------------------------
#                          Keccak Permutation
# --------------------------------------------------------------------

def _keccak_round(a, rc):
    # Theta
    c = [reduce(xor, a[x::5]) for x in range(5)]
    d = [c[(x - 1) % 5] ^ rol(c[(x + 1) % 5], 1) for x in range(5)]
    for i in range(LANES):
        a[i] ^= d[i % 5]

    # Rho & Pi
    b = [0] * LANES
    for y in range(5):
        for x in range(5):
            b[y + 5 * ((2 * x + 3 * y) % 5)] = rol(a[x + 5 * y], RotationConstants[y][x])

    # Chi
    for y in range(5):
        row = b[5 * y : 5 * y + 5]
        for x in range(5):
            a[x + 5 * y] = row[x] ^ ((~row[(x + 1) % 5]) & row[(x + 2) % 5])

    # Iota
    a[0] ^= rc


def keccak_f1600(lanes):
    """Apply the 24-round permutation to ``lanes`` in place."""
    if len(lanes) != LANES:
        raise ValueError(f"expected {LANES} lanes, got {len(lanes)}")
    for rc in RoundConstants:
        _keccak_round(lanes, rc)
    return lanes


# --------------------------------------------------------------------
#                          Keccak-256
# --------------------------------------------------------------------

def keccak256(data: bytes) -> bytes:
    padded = pad(data, KECCAK256_RATE_BYTES)
    lanes = [0] * LANES
    for offset in range(0, len(padded), KECCAK256_RATE_BYTES):
        block = bytes_to_lanes(padded[offset : offset + KECCAK256_RATE_BYTES])
        for i, lane in enumerate(block):
            lanes[i] ^= lane
        keccak_f1600(lanes)
    return lanes_to_bytes(lanes)[:32]


def keccak256_hex(data: bytes) -> str:
    return keccak256(data).hex()
