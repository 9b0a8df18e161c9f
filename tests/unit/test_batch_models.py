import logging

import pytest

from app.documents.models import FailedDocument, InstallationDocument
from app.processor.models import BatchSummary, Progress
from app.processor.observer import LoggingObserver


def _make_installation(name: str) -> InstallationDocument:
    return InstallationDocument(
        orden="",
        archivo=name,
        serie="",
        fecha="",
        contador_bn="",
        link=name,
        comentarios="",
        original_file_name=name,
    )


class TestProgress:
    def test_idle(self) -> None:
        progress = Progress.idle()
        assert progress.is_idle
        assert progress.elapsed_seconds(50.0) == 0.0

    def test_elapsed(self) -> None:
        progress = Progress(current=2, total=4, started_at=10.0)
        assert not progress.is_idle
        assert progress.elapsed_seconds(13.5) == 3.5
        assert progress.elapsed_seconds(5.0) == 0.0


class TestBatchSummary:
    def test_from_documents(self) -> None:
        summary = BatchSummary.from_documents(
            [_make_installation("a.pdf"), FailedDocument(original_file_name="b.pdf", error="e")]
        )
        assert summary == BatchSummary(succeeded=1, failed=1)
        assert not summary.cancelled
        assert summary.describe() == "1 succeeded, 1 failed"

    def test_describe_cancelled(self) -> None:
        summary = BatchSummary(succeeded=2, failed=0, skipped=3)
        assert summary.cancelled
        assert summary.describe() == "2 succeeded, 3 skipped after cancellation"


class TestLoggingObserver:
    def test_logs_estimate_after_first_file(self, caplog: pytest.LogCaptureFixture) -> None:
        observer = LoggingObserver(clock=lambda: 20.0)
        with caplog.at_level(logging.INFO, logger="docscan"):
            observer.on_progress(Progress(current=1, total=3, started_at=10.0))
            observer.on_progress(Progress(current=3, total=3, started_at=10.0))
        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["Progress 1/3", "Progress 3/3, about 5s remaining"]

    def test_idle_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docscan"):
            LoggingObserver().on_progress(Progress.idle())
        assert caplog.records == []
