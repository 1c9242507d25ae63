"""
Run status tracking for the batch processor.

RunStatus is created at the start of a run and mutated only by the
BatchProcessor. Progress callbacks and the statistics summary receive
copies, so nothing outside the processor can change the live state.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional


@dataclass
class RunStatus:
    """
    Live state of a translation run.

    Attributes:
        total: Number of terms the run will hold when finished, including
            terms carried over from a checkpoint.
        completed_count: Terms finished so far (success or fallback).
        failed_count: Sub-field translations that fell back to source text.
        failed_terms: Terms with at least one fallback sub-field.
        current_term_id: Id of the last term handed to the term translator.
        current_batch: 1-indexed number of the batch in progress.
        total_batches: Number of batches in this run.
        errors: One message per fallback, in arrival order.
    """
    total: int = 0
    completed_count: int = 0
    failed_count: int = 0
    failed_terms: int = 0
    current_term_id: Optional[str] = None
    current_batch: int = 0
    total_batches: int = 0
    errors: List[str] = field(default_factory=list)
    start_time: Optional[datetime] = None

    @property
    def progress_percent(self) -> float:
        """Overall progress as a percentage."""
        if self.total == 0:
            return 0.0
        return (self.completed_count / self.total) * 100

    @property
    def elapsed_time(self) -> Optional[timedelta]:
        if self.start_time is None:
            return None
        return datetime.now() - self.start_time

    def snapshot(self) -> "RunStatus":
        """Independent copy for readers outside the processor."""
        return copy.deepcopy(self)


@dataclass
class RunStatistics:
    """End-of-run summary."""
    total: int
    completed: int
    failed: int
    failed_terms: int
    success_rate: float
    errors: List[str]
    error_count: int

    @classmethod
    def from_status(cls, status: RunStatus, error_limit: int = 10) -> "RunStatistics":
        """
        Summarize a RunStatus.

        success_rate is the share of completed terms translated without any
        fallback, as a percentage.
        """
        if status.completed_count:
            succeeded = status.completed_count - status.failed_terms
            success_rate = (succeeded / status.completed_count) * 100
        else:
            success_rate = 0.0
        return cls(
            total=status.total,
            completed=status.completed_count,
            failed=status.failed_count,
            failed_terms=status.failed_terms,
            success_rate=success_rate,
            errors=list(status.errors[:error_limit]),
            error_count=len(status.errors),
        )
