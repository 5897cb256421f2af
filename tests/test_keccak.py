"""Permutation and Keccak-256 checks against published vectors."""

from __future__ import annotations

import hashlib

import pytest

from living_hash.keccak import (
    LANES,
    STATE_BYTES,
    bytes_to_lanes,
    keccak256,
    keccak256_hex,
    keccak_f1600,
    lanes_to_bytes,
    rol,
)
from living_hash.padding import SHA3_DELIMITER, pad


def _sha3_256(data: bytes) -> bytes:
    rate = 136
    lanes = [0] * LANES
    padded = pad(data, rate, delimiter=SHA3_DELIMITER)
    for offset in range(0, len(padded), rate):
        for i, lane in enumerate(bytes_to_lanes(padded[offset : offset + rate])):
            lanes[i] ^= lane
        keccak_f1600(lanes)
    return lanes_to_bytes(lanes)[:32]


@pytest.mark.parametrize(
    "message, expected",
    [
        (b"", "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"),
        (b"abc", "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"),
        (b"hello world", "47173285a8d7341e5e972fc677286384f802f8ef42a5ec5f03bbfa254cb01fad"),
    ],
)
def test_keccak256_matches_published_vectors(message: bytes, expected: str) -> None:
    assert keccak256_hex(message) == expected


@pytest.mark.parametrize("length", [0, 1, 71, 134, 135, 136, 137, 272, 300])
def test_permutation_reproduces_hashlib_sha3_256(length: int) -> None:
    message = bytes((i * 7 + 3) % 256 for i in range(length))
    assert _sha3_256(message) == hashlib.sha3_256(message).digest()


def test_keccak_f1600_of_zero_state_first_lane() -> None:
    lanes = keccak_f1600([0] * LANES)
    # Keccak team's KeccakF-1600 intermediate values, zero input
    assert lanes[0] == 0xF1258F7940E1DDE7
    assert lanes[1] == 0x84D5CCF933C0478A


def test_keccak_f1600_rejects_wrong_width() -> None:
    with pytest.raises(ValueError):
        keccak_f1600([0] * 24)


def test_lane_byte_conversion_is_little_endian() -> None:
    lanes = bytes_to_lanes(b"\x01\x02")
    assert lanes[0] == 0x0201
    assert lanes[1:] == [0] * (LANES - 1)
    assert lanes_to_bytes(lanes)[:3] == b"\x01\x02\x00"
    assert len(lanes_to_bytes(lanes)) == STATE_BYTES


def test_bytes_to_lanes_rejects_oversized_input() -> None:
    with pytest.raises(ValueError):
        bytes_to_lanes(bytes(STATE_BYTES + 1))


def test_rol_wraps_high_bit() -> None:
    assert rol(1 << 63, 1) == 1
    assert rol(0x8000000000000001, 0) == 0x8000000000000001


def test_keccak256_accepts_bytearray() -> None:
    assert keccak256(bytearray(b"abc")) == keccak256(b"abc")
