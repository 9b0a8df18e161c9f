import asyncio
import time
from collections.abc import Callable, Sequence

from app.documents.models import InputFile
from app.documents.sorter import sort_documents
from app.logging.logger import Log
from app.processor.models import BatchResult, BatchSummary, Progress
from app.processor.observer import BatchObserver, NullObserver
from app.processor.pacing import BasePacer
from app.processor.processor import DocumentProcessor
from app.processor.store import ResultStore


class BatchPipeline:
    """Processes input files one at a time and publishes every intermediate state.

    Per file: classify -> extract -> normalize (a failure becomes a
    FailedDocument), append, publish, then wait on the pacer. Once every file
    is done the accumulated sequence is sorted by document date.
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        pacer: BasePacer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._processor = processor
        self._pacer = pacer
        self._clock = clock

    async def process(
        self,
        files: Sequence[InputFile],
        store: ResultStore | None = None,
        observer: BatchObserver | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> BatchResult:
        """Run the batch.

        Args:
            files: Input files, processed strictly in this order.
            store: Receives the results; a fresh store is used when omitted.
                Its previous contents are discarded.
            observer: Notified of progress and of every accumulated state.
            cancel_event: When set, the batch stops before the next file.
                Skipped files get no record.
        """
        store = store if store is not None else ResultStore()
        observer = observer if observer is not None else NullObserver()
        total = len(files)
        started_at = self._clock()

        observer.on_results(await store.reset())
        if total == 0:
            Log.warning("No files to process")

        Log.info(f"Batch started: {total} files")
        processed = 0
        for index, file in enumerate(files, start=1):
            if cancel_event is not None and cancel_event.is_set():
                Log.warning(f"Batch cancelled before file {index}/{total}")
                break
            observer.on_progress(Progress(current=index, total=total, started_at=started_at))
            Log.info(f"Processing {index}/{total}: {file.name}", file=file.name)

            document = await self._processor.process_file(file)
            observer.on_results(await store.append(document))
            processed += 1

            await self._pacer.wait()

        documents = await store.update(sort_documents)
        observer.on_results(documents)
        observer.on_progress(Progress.idle())

        summary = BatchSummary.from_documents(documents, skipped=total - processed)
        elapsed = self._clock() - started_at
        Log.info(f"Batch finished in {elapsed:.1f}s: {summary.describe()}")
        return BatchResult(documents=documents, summary=summary, elapsed_seconds=elapsed)
