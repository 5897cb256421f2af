"""Serialized access to a single engine from several threads."""

from contextlib import contextmanager
import threading
from typing import Iterator, Optional, Tuple

from .engine import LivingHash, SpongeConfiguration
from .trace import StepRecord, TraceCommitment


class SharedLivingHash:
    """Guards one :class:`LivingHash` with a coarse lock held for each whole call."""

    def __init__(
        self,
        engine: Optional[LivingHash] = None,
        config: Optional[SpongeConfiguration] = None,
    ) -> None:
        if engine is not None and config is not None:
            raise ValueError("pass either an engine or a configuration, not both")
        self._engine = engine if engine is not None else LivingHash(config)
        self._lock = threading.Lock()

    @property
    def config(self) -> SpongeConfiguration:
        return self._engine.config

    @contextmanager
    def locked(self) -> Iterator[LivingHash]:
        with self._lock:
            yield self._engine

    def absorb(self, data) -> None:
        with self._lock:
            self._engine.absorb(data)

    def squeeze(self, output_length: int) -> bytes:
        with self._lock:
            return self._engine.squeeze(output_length)

    def get_trace(self) -> Tuple[StepRecord, ...]:
        with self._lock:
            return self._engine.get_trace()

    def get_step(self, index: int) -> Optional[StepRecord]:
        with self._lock:
            return self._engine.get_step(index)

    def trace_commitment(self) -> TraceCommitment:
        with self._lock:
            return self._engine.trace_commitment()
