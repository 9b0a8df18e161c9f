import asyncio
import dataclasses
from collections.abc import Callable, Iterable, Sequence

from app.documents.models import (
    FAILURE_MARKER,
    DocumentType,
    FailedDocument,
    ProcessedDocument,
    SuccessfulDocument,
    successful_of_type,
)
from app.processor.exceptions import DocumentEditError

_READ_ONLY_FIELDS = frozenset({"original_file_name", "error"})


class ResultStore:
    """The canonical, in-memory result sequence of a session.

    Every mutation is a read-modify-write applied under a lock to the latest
    state, so a retry or an edit never writes back a stale snapshot. Readers
    get immutable tuples.
    """

    def __init__(self, documents: Iterable[ProcessedDocument] = ()) -> None:
        self._documents: tuple[ProcessedDocument, ...] = tuple(documents)
        self._lock = asyncio.Lock()

    def snapshot(self) -> tuple[ProcessedDocument, ...]:
        return self._documents

    def __len__(self) -> int:
        return len(self._documents)

    async def update(
        self,
        transform: Callable[[tuple[ProcessedDocument, ...]], Iterable[ProcessedDocument]],
    ) -> tuple[ProcessedDocument, ...]:
        """Atomically replace the sequence with `transform(current)`."""
        async with self._lock:
            self._documents = tuple(transform(self._documents))
            return self._documents

    async def reset(self, documents: Sequence[ProcessedDocument] = ()) -> tuple[ProcessedDocument, ...]:
        return await self.update(lambda _current: documents)

    async def append(self, document: ProcessedDocument) -> tuple[ProcessedDocument, ...]:
        return await self.update(lambda current: (*current, document))

    async def replace_by_file_name(
        self, original_file_name: str, document: ProcessedDocument
    ) -> bool:
        """Replace the slot currently holding `original_file_name`.

        Returns False, leaving the store untouched, when no slot holds it.
        """
        replaced = False

        def transform(current: tuple[ProcessedDocument, ...]) -> tuple[ProcessedDocument, ...]:
            nonlocal replaced
            index = _index_of(current, original_file_name)
            if index is None:
                return current
            replaced = True
            return (*current[:index], document, *current[index + 1:])

        await self.update(transform)
        return replaced

    async def edit(
        self, original_file_name: str, field_name: str, value: str
    ) -> SuccessfulDocument:
        """Set one string field of a successful document.

        The target is resolved by original file name against the latest state.
        `orden` may not be set to the failure marker, which is reserved for
        failed documents.

        Raises:
            DocumentEditError: if the document is missing or failed, the
                field does not exist or is read-only, or the value is reserved.
        """
        async with self._lock:
            current = self._documents
            index = _index_of(current, original_file_name)
            if index is None:
                raise DocumentEditError(f"No document for file {original_file_name}")
            target = current[index]
            if isinstance(target, FailedDocument):
                raise DocumentEditError(f"Cannot edit failed document {original_file_name}")
            editable = {f.name for f in dataclasses.fields(target)} - _READ_ONLY_FIELDS
            if field_name not in editable:
                raise DocumentEditError(
                    f"Field '{field_name}' is not editable on {target.type.value}"
                )
            if field_name == "orden" and value.strip() == FAILURE_MARKER:
                raise DocumentEditError(
                    f"'{FAILURE_MARKER}' is reserved for failed documents"
                )
            edited = dataclasses.replace(target, **{field_name: value})
            self._documents = (*current[:index], edited, *current[index + 1:])
            return edited

    def index_of(self, original_file_name: str) -> int | None:
        return _index_of(self._documents, original_file_name)

    def filtered(self, document_type: DocumentType) -> list[SuccessfulDocument]:
        """Successful documents of one type, computed from the current state."""
        return successful_of_type(self._documents, document_type)


def _index_of(documents: Sequence[ProcessedDocument], original_file_name: str) -> int | None:
    for index, doc in enumerate(documents):
        if doc.original_file_name == original_file_name:
            return index
    return None
