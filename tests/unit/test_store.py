import asyncio

import pytest

from app.documents.models import (
    FAILURE_MARKER,
    DocumentType,
    FailedDocument,
    InstallationDocument,
    ProcessedDocument,
    WorkOrderDocument,
)
from app.processor.exceptions import DocumentEditError
from app.processor.store import ResultStore


def _make_work_order(name: str, orden: str = "OT-1") -> WorkOrderDocument:
    return WorkOrderDocument(
        orden=orden,
        archivo=f"{orden}.pdf",
        serie="",
        fecha_registro="",
        categoria="",
        descripcion="",
        fecha_cierre="",
        original_file_name=name,
    )


def _make_installation(name: str) -> InstallationDocument:
    return InstallationDocument(
        orden="F-1",
        archivo="F-1.pdf",
        serie="",
        fecha="",
        contador_bn="",
        link="F-1.pdf",
        comentarios="",
        original_file_name=name,
    )


def _failed(name: str) -> FailedDocument:
    return FailedDocument(original_file_name=name, error="boom")


def _names(documents: tuple[ProcessedDocument, ...]) -> list[str]:
    return [doc.original_file_name for doc in documents]


class TestResultStore:
    def test_snapshot_is_immutable_tuple(self) -> None:
        store = ResultStore([_failed("a.pdf")])
        assert isinstance(store.snapshot(), tuple)
        assert len(store) == 1

    def test_append_and_reset(self) -> None:
        store = ResultStore([_failed("old.pdf")])

        async def main() -> None:
            await store.reset()
            await store.append(_failed("a.pdf"))
            await store.append(_failed("b.pdf"))

        asyncio.run(main())
        assert _names(store.snapshot()) == ["a.pdf", "b.pdf"]

    def test_concurrent_updates_are_not_lost(self) -> None:
        store = ResultStore()

        async def main() -> None:
            await asyncio.gather(*(store.append(_failed(f"{i}.pdf")) for i in range(20)))

        asyncio.run(main())
        assert len(store) == 20

    def test_replace_by_file_name_targets_current_slot(self) -> None:
        store = ResultStore([_failed("a.pdf"), _failed("b.pdf")])

        async def main() -> bool:
            await store.update(lambda current: tuple(reversed(current)))
            return await store.replace_by_file_name("a.pdf", _make_work_order("a.pdf"))

        assert asyncio.run(main()) is True
        assert _names(store.snapshot()) == ["b.pdf", "a.pdf"]
        assert isinstance(store.snapshot()[1], WorkOrderDocument)

    def test_replace_missing_name_is_noop(self) -> None:
        store = ResultStore([_failed("a.pdf")])
        assert asyncio.run(store.replace_by_file_name("z.pdf", _failed("z.pdf"))) is False
        assert _names(store.snapshot()) == ["a.pdf"]

    def test_filtered_excludes_failures(self) -> None:
        good = _make_work_order("a.pdf")
        store = ResultStore([_failed("b.pdf"), good, _make_installation("c.pdf")])
        assert store.filtered(DocumentType.WORK_ORDER) == [good]

    def test_index_of(self) -> None:
        store = ResultStore([_failed("a.pdf"), _failed("b.pdf")])
        assert store.index_of("b.pdf") == 1
        assert store.index_of("c.pdf") is None


class TestResultStoreEdit:
    def test_edits_one_field(self) -> None:
        store = ResultStore([_make_work_order("a.pdf")])
        edited = asyncio.run(store.edit("a.pdf", "serie", "XYZ"))
        assert edited.serie == "XYZ"
        assert store.snapshot()[0] == edited

    def test_edit_of_failure_raises(self) -> None:
        store = ResultStore([_failed("a.pdf")])
        with pytest.raises(DocumentEditError, match="failed document"):
            asyncio.run(store.edit("a.pdf", "orden", "1"))

    def test_edit_of_missing_document_raises(self) -> None:
        with pytest.raises(DocumentEditError, match="No document"):
            asyncio.run(ResultStore().edit("a.pdf", "orden", "1"))

    @pytest.mark.parametrize("field_name", ["original_file_name", "error", "link_target"])
    def test_read_only_or_unknown_field_raises(self, field_name: str) -> None:
        store = ResultStore([_make_installation("a.pdf")])
        with pytest.raises(DocumentEditError, match="not editable"):
            asyncio.run(store.edit("a.pdf", field_name, "x"))
        assert store.snapshot()[0] == _make_installation("a.pdf")

    @pytest.mark.parametrize("value", [FAILURE_MARKER, f"  {FAILURE_MARKER} "])
    def test_failure_marker_is_not_a_valid_orden(self, value: str) -> None:
        store = ResultStore([_make_work_order("a.pdf")])
        with pytest.raises(DocumentEditError, match="reserved for failed documents"):
            asyncio.run(store.edit("a.pdf", "orden", value))
        assert store.snapshot()[0] == _make_work_order("a.pdf")
