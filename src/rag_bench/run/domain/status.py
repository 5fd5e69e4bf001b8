"""Run lifecycle enumerations."""

from enum import StrEnum


class RunStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class RunType(StrEnum):
    FULL = "full"
    RETRIEVAL_ONLY = "retrieval_only"
    GENERATION_ONLY = "generation_only"
