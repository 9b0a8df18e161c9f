from app.processor.batch import BatchPipeline
from app.processor.models import BatchResult, BatchSummary, Progress
from app.processor.processor import DocumentProcessor, build_processor
from app.processor.retry import RetryController, build_retry_controller
from app.processor.store import ResultStore

__all__ = [
    "BatchPipeline",
    "BatchResult",
    "BatchSummary",
    "DocumentProcessor",
    "Progress",
    "ResultStore",
    "RetryController",
    "build_processor",
    "build_retry_controller",
]
