"""Settings schema for fastls."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fastls.fs.pool import MAX_WORKERS, QUEUE_FACTOR, WORKERS_PER_CPU, default_worker_count
from fastls.fs.reader import DEFAULT_BATCH_SIZE


class PoolSettings(BaseModel):
    max_workers: int | None = Field(default=None, ge=1, le=MAX_WORKERS, description="Worker ceiling")
    workers_per_cpu: int = Field(default=WORKERS_PER_CPU, ge=1, le=MAX_WORKERS)
    queue_factor: int = Field(default=QUEUE_FACTOR, ge=0, le=16)

    def effective_workers(self, override: int | None = None) -> int:
        if override is not None:
            return max(1, min(MAX_WORKERS, override))
        return default_worker_count(workers_per_cpu=self.workers_per_cpu, ceiling=self.max_workers)


class ReaderSettings(BaseModel):
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1, le=100_000)


class DisplaySettings(BaseModel):
    recent_window_days: int = Field(default=182, ge=1, description="Window for the short time format")
    column_padding: int = Field(default=2, ge=1, le=16)


class AppSettings(BaseModel):
    schema_version: int = Field(default=1)
    pool: PoolSettings = Field(default_factory=PoolSettings)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
