import time
from collections.abc import Callable

from app.documents.models import ProcessedDocument
from app.logging.logger import Log
from app.processor.models import Progress


class BatchObserver:
    """Receives the incremental state of a running batch.

    `on_results` is called with the full accumulated sequence after every
    file, and once more with the sorted sequence at the end.
    """

    def on_progress(self, progress: Progress) -> None:
        pass

    def on_results(self, documents: tuple[ProcessedDocument, ...]) -> None:
        pass


class NullObserver(BatchObserver):
    pass


class LoggingObserver(BatchObserver):
    """Logs progress with an estimate of the remaining time."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock

    def on_progress(self, progress: Progress) -> None:
        if progress.is_idle:
            return
        elapsed = progress.elapsed_seconds(self._clock())
        done = progress.current - 1
        message = f"Progress {progress.current}/{progress.total}"
        if done > 0:
            remaining = elapsed / done * (progress.total - done)
            message += f", about {remaining:.0f}s remaining"
        Log.info(message)
