import asyncio
from collections.abc import Sequence

from app.config.settings import Settings
from app.documents.models import InputFile, ProcessedDocument, is_failure
from app.logging.logger import Log
from app.processor.exceptions import RetryInProgressError, RetryLookupError
from app.processor.pacing import BasePacer, NoDelayPacer, build_retry_pacer
from app.processor.processor import DocumentProcessor
from app.processor.store import ResultStore


def find_input_file(files: Sequence[InputFile], original_file_name: str) -> InputFile:
    """Return the input file a document was produced from.

    Raises:
        RetryLookupError: if no file carries that name.
    """
    for file in files:
        if file.name == original_file_name:
            return file
    raise RetryLookupError(f"No input file named {original_file_name}")


class RetryController:
    """Re-runs classify -> extract -> normalize for single documents.

    The new record (success or a fresh failure) replaces the old one
    wholesale; a previous error is discarded, never chained.
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        pacer: BasePacer | None = None,
        max_concurrent: int = 4,
    ) -> None:
        self._processor = processor
        self._pacer = pacer if pacer is not None else NoDelayPacer()
        self._max_concurrent = max_concurrent
        self._in_flight: set[str] = set()

    async def retry(
        self,
        index: int,
        documents: Sequence[ProcessedDocument],
        files: Sequence[InputFile],
    ) -> tuple[ProcessedDocument, ...]:
        """Return `documents` with slot `index` re-processed.

        A bad index or a document whose file cannot be found is logged and
        leaves the sequence unchanged.
        """
        current = tuple(documents)
        if not 0 <= index < len(current):
            Log.error(f"Retry requested for index {index}, but there are {len(current)} documents")
            return current
        try:
            file = find_input_file(files, current[index].original_file_name)
        except RetryLookupError as exc:
            Log.error(f"Cannot retry document {index}: {exc}")
            return current

        replacement = await self._processor.process_file(file)
        return (*current[:index], replacement, *current[index + 1:])

    async def retry_in_store(
        self,
        index: int,
        store: ResultStore,
        files: Sequence[InputFile],
    ) -> ProcessedDocument | None:
        """Re-process the document at `index` of the store's current state.

        The result is written back to whichever slot holds the same original
        file when processing finishes, so reordering in the meantime is safe.

        Returns:
            The new record, or None when nothing was written.

        Raises:
            RetryInProgressError: if that document is already being retried.
        """
        current = store.snapshot()
        if not 0 <= index < len(current):
            Log.error(f"Retry requested for index {index}, but there are {len(current)} documents")
            return None
        return await self._retry_file_name(current[index].original_file_name, store, files)

    async def retry_failed(
        self,
        store: ResultStore,
        files: Sequence[InputFile],
    ) -> int:
        """Retry every failed document concurrently.

        At most `max_concurrent` retries run at once. The pacer spaces the
        starts of whole retries, not individual provider requests: each retry
        issues a classify call and then an extract call, so with more than one
        retry in flight requests from different retries may start closer
        together than the pacing delay. Returns how many now succeed.
        """
        names = [
            doc.original_file_name
            for doc in store.snapshot()
            if is_failure(doc)
        ]
        if not names:
            return 0
        Log.info(f"Retrying {len(names)} failed documents")
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def run_one(name: str) -> ProcessedDocument | None:
            async with semaphore:
                await self._pacer.wait()
                try:
                    return await self._retry_file_name(name, store, files)
                except RetryInProgressError as exc:
                    Log.warning(f"Skipping retry: {exc}")
                    return None

        results = await asyncio.gather(*(run_one(name) for name in names))
        recovered = sum(
            1 for doc in results if doc is not None and not is_failure(doc)
        )
        Log.info(f"Retry finished: {recovered}/{len(names)} recovered")
        return recovered

    async def _retry_file_name(
        self,
        original_file_name: str,
        store: ResultStore,
        files: Sequence[InputFile],
    ) -> ProcessedDocument | None:
        if original_file_name in self._in_flight:
            raise RetryInProgressError(f"{original_file_name} is already being retried")
        try:
            file = find_input_file(files, original_file_name)
        except RetryLookupError as exc:
            Log.error(f"Cannot retry {original_file_name}: {exc}")
            return None

        self._in_flight.add(original_file_name)
        try:
            replacement = await self._processor.process_file(file)
        finally:
            self._in_flight.discard(original_file_name)

        if not await store.replace_by_file_name(original_file_name, replacement):
            Log.warning(f"{original_file_name} left the result set during its retry; result dropped")
            return None
        Log.info(f"Retried {original_file_name}", file=original_file_name)
        return replacement


def build_retry_controller(settings: Settings, processor: DocumentProcessor) -> RetryController:
    return RetryController(
        processor=processor,
        pacer=build_retry_pacer(settings),
        max_concurrent=settings.max_concurrent_retries,
    )
