"""
Step records, lane-wise diffs and trace commitments.

A trace is an ordered tuple of :class:`StepRecord`, one per absorb or squeeze
call. :func:`trace_commitment` reduces a trace to a Keccak-256 digest and a
step count, which is what a ledger anchoring service consumes.
"""

from dataclasses import dataclass
from enum import Enum
import struct
from typing import Dict, Iterable, Sequence, Tuple

from .keccak import LANES, keccak256

_STEP_HEADER = struct.Struct(">QBQ")
_LANES_STRUCT = struct.Struct("<%dQ" % LANES)
_COUNT_STRUCT = struct.Struct(">Q")


class Phase(Enum):
    ABSORB = "absorb"
    SQUEEZE = "squeeze"


_PHASE_CODES = {Phase.ABSORB: 0, Phase.SQUEEZE: 1}


def lane_diff(previous: Sequence[int], current: Sequence[int]) -> Tuple[int, ...]:
    """XOR two 25-lane states lane by lane."""
    if len(previous) != LANES or len(current) != LANES:
        raise ValueError(
            f"expected two {LANES}-lane states, got {len(previous)} and {len(current)}"
        )
    return tuple(a ^ b for a, b in zip(previous, current))


@dataclass(frozen=True)
class StepRecord:
    """Effect of a single absorb or squeeze call on the sponge state."""

    step_index: int
    phase: Phase
    input_bytes: bytes
    resulting_state: Tuple[int, ...]
    state_diff: Tuple[int, ...]

    def changed_lanes(self) -> Tuple[int, ...]:
        return tuple(i for i, lane in enumerate(self.state_diff) if lane)

    def to_dict(self) -> Dict[str, object]:
        return {
            "step_index": self.step_index,
            "phase": self.phase.value,
            "input": self.input_bytes.hex(),
            "state": list(self.resulting_state),
            "diffs": list(self.state_diff),
        }

    def __str__(self) -> str:
        lines = [
            f"Step {self.step_index}: {self.phase.value}",
            f"Input: {self.input_bytes.hex()}",
            "State: " + " ".join(f"{lane:016x}" for lane in self.resulting_state),
            "Diffs: " + " ".join(f"{lane:016x}" for lane in self.state_diff),
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class TraceCommitment:
    digest: bytes
    step_count: int

    def hexdigest(self) -> str:
        return self.digest.hex()

    def to_dict(self) -> Dict[str, object]:
        return {"digest": self.hexdigest(), "step_count": self.step_count}


def encode_step(record: StepRecord) -> bytes:
    """Canonical binary form of a record: header, input, then state and diff lanes."""
    header = _STEP_HEADER.pack(
        record.step_index, _PHASE_CODES[record.phase], len(record.input_bytes)
    )
    return b"".join(
        (
            header,
            record.input_bytes,
            _LANES_STRUCT.pack(*record.resulting_state),
            _LANES_STRUCT.pack(*record.state_diff),
        )
    )


def trace_commitment(records: Iterable[StepRecord]) -> TraceCommitment:
    records = tuple(records)
    payload = _COUNT_STRUCT.pack(len(records)) + b"".join(encode_step(r) for r in records)
    return TraceCommitment(digest=keccak256(payload), step_count=len(records))
