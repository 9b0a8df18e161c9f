import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from app.config.settings import Settings
from app.documents.models import DocumentType, InputFile
from app.documents.stats import BatchStats, compute_stats
from app.export.archive import DEFAULT_ARCHIVE_NAMES, ArchiveBuilder
from app.export.exceptions import ExportError, NothingToExportError
from app.export.spreadsheet import DEFAULT_FILE_NAME, SpreadsheetExporter
from app.logging.logger import Log
from app.processor.batch import BatchPipeline
from app.processor.exceptions import ProcessorError
from app.processor.file_loader import FileLoader
from app.processor.observer import LoggingObserver
from app.processor.pacing import build_pacer
from app.processor.processor import build_processor
from app.processor.retry import build_retry_controller
from app.processor.store import ResultStore


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docscan",
        description="Classify scanned service records, extract their fields and export them.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="PDF files or directories of PDFs")
    parser.add_argument("--output", type=Path, default=None, help="Output directory")
    parser.add_argument(
        "--retry-failed",
        action="store_true",
        help="Retry every failed document once after the batch",
    )
    parser.add_argument(
        "--no-archives",
        action="store_true",
        help="Only write the spreadsheet, not the renamed-file archives",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Process the inputs and write the outputs. Returns the exit code."""
    try:
        files = FileLoader().load_paths(args.inputs)
    except (FileNotFoundError, ProcessorError) as exc:
        Log.error(f"Cannot load inputs: {exc}")
        return 1
    if not files:
        Log.error("No PDF files to process")
        return 1

    try:
        processor = build_processor(settings)
    except ValueError as exc:
        Log.error(f"Invalid configuration: {exc}")
        return 1
    pipeline = BatchPipeline(processor=processor, pacer=build_pacer(settings))
    store = ResultStore()
    await pipeline.process(files, store=store, observer=LoggingObserver())

    if args.retry_failed:
        await build_retry_controller(settings, processor).retry_failed(store, files)

    _log_stats(compute_stats(store.snapshot()))

    output_dir: Path = args.output or settings.output_dir
    ok = _write_spreadsheet(store, output_dir, settings)
    if not args.no_archives:
        ok = _write_archives(store, files, output_dir) and ok
    return 0 if ok else 1


def _log_stats(stats: BatchStats) -> None:
    Log.info(f"Documents: {stats.total} total, {stats.successful} successful, {stats.failed} failed")
    for document_type in DocumentType:
        count = stats.by_type.get(document_type, 0)
        if count:
            Log.info(f"  {document_type.value}: {count} ({stats.share(document_type):.0f}%)")
    for category, count in stats.categories:
        Log.info(f"  category {category}: {count}")


def _write_spreadsheet(store: ResultStore, output_dir: Path, settings: Settings) -> bool:
    try:
        SpreadsheetExporter().export(
            store.snapshot(),
            output_dir / DEFAULT_FILE_NAME,
            settings.link_base_urls(),
        )
    except NothingToExportError as exc:
        Log.warning(str(exc))
    except ExportError as exc:
        Log.error(f"Spreadsheet export failed: {exc}")
        return False
    return True


def _write_archives(store: ResultStore, files: list[InputFile], output_dir: Path) -> bool:
    ok = True
    builder = ArchiveBuilder()
    for document_type, file_name in DEFAULT_ARCHIVE_NAMES.items():
        if not store.filtered(document_type):
            continue
        try:
            builder.build(store.snapshot(), files, document_type, output_dir / file_name)
        except NothingToExportError as exc:
            Log.warning(str(exc))
        except ExportError as exc:
            Log.error(f"Archive generation failed: {exc}")
            ok = False
    return ok


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> batch -> exports."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
