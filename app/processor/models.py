from collections.abc import Sequence
from dataclasses import dataclass

from app.documents.models import ProcessedDocument, is_failure


@dataclass(frozen=True)
class Progress:
    """Position of a running batch; `started_at` is fixed when the batch starts."""

    current: int
    total: int
    started_at: float | None

    @classmethod
    def idle(cls) -> "Progress":
        return cls(current=0, total=0, started_at=None)

    @property
    def is_idle(self) -> bool:
        return self.started_at is None

    def elapsed_seconds(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, now - self.started_at)


@dataclass(frozen=True)
class BatchSummary:
    """Success/failure counts reported when a batch finishes."""

    succeeded: int
    failed: int
    skipped: int = 0

    @classmethod
    def from_documents(
        cls, documents: Sequence[ProcessedDocument], skipped: int = 0
    ) -> "BatchSummary":
        failed = sum(1 for doc in documents if is_failure(doc))
        return cls(succeeded=len(documents) - failed, failed=failed, skipped=skipped)

    @property
    def cancelled(self) -> bool:
        return self.skipped > 0

    def describe(self) -> str:
        message = f"{self.succeeded} succeeded"
        if self.failed:
            message += f", {self.failed} failed"
        if self.skipped:
            message += f", {self.skipped} skipped after cancellation"
        return message


@dataclass(frozen=True)
class BatchResult:
    """Terminal state of a batch run: the sorted documents plus the summary."""

    documents: tuple[ProcessedDocument, ...]
    summary: BatchSummary
    elapsed_seconds: float
