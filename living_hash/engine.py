"""
Traceable Keccak sponge.

:class:`LivingHash` absorbs and squeezes like an ordinary Keccak sponge but
appends a :class:`~living_hash.trace.StepRecord` for every call, holding the
state after the call and its lane-wise XOR against the state before it.

Absorb and squeeze calls may be interleaved freely. Each absorb call is padded
on its own, so ``absorb(m)`` followed by ``squeeze(32)`` on a fresh engine with
the default configuration yields Keccak-256(m).

The engine is not thread-safe; see :mod:`living_hash.shared`.
"""

from dataclasses import dataclass
import logging
from typing import Optional, Tuple

from .errors import ConfigurationError, OperationError
from .keccak import LANES, WIDTH_BITS, bytes_to_lanes, keccak_f1600, lanes_to_bytes
from .padding import pad
from .trace import Phase, StepRecord, TraceCommitment, lane_diff, trace_commitment

logger = logging.getLogger(__name__)

DEFAULT_RATE_BITS = 1088
DEFAULT_CAPACITY_BITS = 512


# --------------------------------------------------------------------
#                          Configuration
# --------------------------------------------------------------------

@dataclass(frozen=True)
class SpongeConfiguration:
    """Rate/capacity split of the 1600-bit state. Defaults to Keccak-256."""

    rate_bits: int = DEFAULT_RATE_BITS
    capacity_bits: int = DEFAULT_CAPACITY_BITS

    def __post_init__(self):
        for name in ("rate_bits", "capacity_bits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.rate_bits <= 0:
            raise ConfigurationError(f"rate must be positive, got {self.rate_bits} bits")
        if self.capacity_bits < 0:
            raise ConfigurationError(
                f"capacity must not be negative, got {self.capacity_bits} bits"
            )
        if self.rate_bits % 8 != 0:
            raise ConfigurationError(
                f"rate must be a whole number of bytes, got {self.rate_bits} bits"
            )
        if self.rate_bits + self.capacity_bits != WIDTH_BITS:
            raise ConfigurationError(
                f"rate and capacity must sum to {WIDTH_BITS} bits, "
                f"got {self.rate_bits} + {self.capacity_bits} = "
                f"{self.rate_bits + self.capacity_bits}"
            )

    @property
    def rate_bytes(self) -> int:
        return self.rate_bits // 8

    @property
    def capacity_bytes(self) -> int:
        return self.capacity_bits // 8


# --------------------------------------------------------------------
#                          Engine
# --------------------------------------------------------------------

class LivingHash:
    def __init__(self, config: Optional[SpongeConfiguration] = None):
        self.config = config if config is not None else SpongeConfiguration()
        self._lanes = [0] * LANES
        self._trace = []
        logger.info(
            "Living hash engine created (rate=%d bits, capacity=%d bits)",
            self.config.rate_bits,
            self.config.capacity_bits,
        )

    @classmethod
    def new(cls, config: Optional[SpongeConfiguration] = None) -> "LivingHash":
        return cls(config)

    @property
    def state(self) -> Tuple[int, ...]:
        return tuple(self._lanes)

    @property
    def step_count(self) -> int:
        return len(self._trace)

    def __len__(self):
        return len(self._trace)

    def _absorb_block(self, block):
        # block is rate_bytes long; the capacity lanes are XORed with zero
        for i, lane in enumerate(bytes_to_lanes(block)):
            self._lanes[i] ^= lane
        keccak_f1600(self._lanes)

    def _record(self, phase, data, before):
        after = tuple(self._lanes)
        record = StepRecord(
            step_index=len(self._trace),
            phase=phase,
            input_bytes=bytes(data),
            resulting_state=after,
            state_diff=lane_diff(before, after),
        )
        self._trace.append(record)
        return record

    def absorb(self, data) -> None:
        """Pad ``data`` and absorb it block by block, recording a single step."""
        if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
            raise OperationError(
                f"absorb expects a bytes-like object, got {type(data).__name__}"
            )
        rate = self.config.rate_bytes
        padded = pad(bytes(data), rate)
        before = tuple(self._lanes)
        for offset in range(0, len(padded), rate):
            self._absorb_block(padded[offset : offset + rate])
        record = self._record(Phase.ABSORB, padded, before)
        logger.debug(
            "step %d: absorbed %d bytes (%d padded, %d blocks)",
            record.step_index,
            len(data),
            len(padded),
            len(padded) // rate,
        )

    def squeeze(self, output_length: int) -> bytes:
        """Read ``output_length`` bytes, permuting after every rate-sized read."""
        if isinstance(output_length, bool) or not isinstance(output_length, int):
            raise OperationError(
                f"squeeze length must be an integer, got {output_length!r}"
            )
        if output_length < 0:
            raise OperationError(f"squeeze length must not be negative, got {output_length}")
        rate = self.config.rate_bytes
        before = tuple(self._lanes)
        out = b""
        permutations = 0
        while len(out) < output_length:
            out += lanes_to_bytes(self._lanes)[:rate]
            keccak_f1600(self._lanes)
            permutations += 1
        out = out[:output_length]
        record = self._record(Phase.SQUEEZE, out, before)
        logger.debug(
            "step %d: squeezed %d bytes (%d permutations)",
            record.step_index,
            output_length,
            permutations,
        )
        return out

    def get_trace(self) -> Tuple[StepRecord, ...]:
        return tuple(self._trace)

    def get_step(self, index: int) -> Optional[StepRecord]:
        """Return the record at ``index``, or None when there is no such step."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self._trace):
            return self._trace[index]
        return None

    def trace_commitment(self) -> TraceCommitment:
        return trace_commitment(self._trace)
