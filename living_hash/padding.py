"""pad10*1 multi-rate padding."""

from .errors import PaddingAlignmentError

KECCAK_DELIMITER = 0x01
SHA3_DELIMITER = 0x06
TERMINATOR = 0x80


def padding_length(used_bytes, align_bytes):
    """Number of bytes pad10*1 appends to ``used_bytes`` of input; always at least one."""
    if align_bytes <= 0:
        raise ValueError(f"rate must be positive, got {align_bytes} bytes")
    padlen = align_bytes - (used_bytes % align_bytes)
    if padlen == 0:
        padlen = align_bytes
    return padlen


def multirate_padding(used_bytes, align_bytes, delimiter=KECCAK_DELIMITER):
    padlen = padding_length(used_bytes, align_bytes)
    if padlen == 1:
        # delimiter and terminator share the single free byte
        return bytes([delimiter | TERMINATOR])
    return bytes([delimiter]) + bytes(padlen - 2) + bytes([TERMINATOR])


def pad(data, rate_bytes, delimiter=KECCAK_DELIMITER) -> bytes:
    """
    Return ``data`` extended to a multiple of ``rate_bytes``.

    A full extra block is appended when ``data`` is already aligned, so the
    result is always strictly longer than the input.
    """
    padded = bytes(data) + multirate_padding(len(data), rate_bytes, delimiter)
    if len(padded) % rate_bytes != 0:
        raise PaddingAlignmentError(
            f"padded length {len(padded)} is not a multiple of the rate ({rate_bytes} bytes)"
        )
    return padded
