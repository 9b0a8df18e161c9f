from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from app.documents.models import (
    DocumentType,
    FailedDocument,
    ProcessedDocument,
    WorkOrderDocument,
)

UNCATEGORIZED = "SIN CATEGORÍA"


@dataclass(frozen=True)
class BatchStats:
    """Counts over a processed batch."""

    total: int
    successful: int
    failed: int
    by_type: dict[DocumentType, int] = field(default_factory=dict)
    categories: list[tuple[str, int]] = field(default_factory=list)

    def share(self, document_type: DocumentType) -> float:
        """Percentage of successful documents that are of `document_type`."""
        if self.successful == 0:
            return 0.0
        return self.by_type.get(document_type, 0) * 100 / self.successful


def compute_stats(documents: Sequence[ProcessedDocument]) -> BatchStats:
    failed = sum(1 for doc in documents if isinstance(doc, FailedDocument))
    by_type = {document_type: 0 for document_type in DocumentType}
    categories: Counter[str] = Counter()
    for doc in documents:
        if isinstance(doc, FailedDocument):
            continue
        by_type[doc.type] += 1
        if isinstance(doc, WorkOrderDocument):
            categories[doc.categoria.strip().upper() or UNCATEGORIZED] += 1

    # Counter.most_common keeps first-seen order among equal counts.
    return BatchStats(
        total=len(documents),
        successful=len(documents) - failed,
        failed=failed,
        by_type=by_type,
        categories=categories.most_common(),
    )
