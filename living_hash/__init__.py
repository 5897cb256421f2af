"""Traceable Keccak sponge: absorb and squeeze while recording every state transition."""

__version__ = "0.1.0"

from .engine import LivingHash, SpongeConfiguration
from .errors import ConfigurationError, LivingHashError, OperationError, PaddingAlignmentError
from .keccak import keccak256, keccak_f1600
from .padding import pad
from .shared import SharedLivingHash
from .trace import Phase, StepRecord, TraceCommitment, lane_diff, trace_commitment

__all__ = [
    "LivingHash",
    "SpongeConfiguration",
    "SharedLivingHash",
    "Phase",
    "StepRecord",
    "TraceCommitment",
    "lane_diff",
    "trace_commitment",
    "pad",
    "keccak256",
    "keccak_f1600",
    "LivingHashError",
    "ConfigurationError",
    "OperationError",
    "PaddingAlignmentError",
]
