import pytest

from app.documents.models import (
    DocumentType,
    ExtractedRecord,
    InstallationDocument,
    InstallationFields,
    SupplyRequestDocument,
    SupplyRequestFields,
    UninstallationDocument,
    UninstallationFields,
    WorkOrderDocument,
    WorkOrderFields,
)
from app.documents.normalizer import export_file_name, normalize


class TestExportFileName:
    def test_uses_identifier_when_present(self) -> None:
        assert export_file_name("4500123", "scan_001.pdf") == "4500123.pdf"

    def test_falls_back_to_original_name(self) -> None:
        assert export_file_name("", "scan_001.pdf") == "scan_001.pdf"


class TestNormalize:
    def test_work_order(self) -> None:
        record = WorkOrderFields(
            orden="OT-1",
            serie="S1",
            fecha_registro="01-02-24",
            categoria="CORRECTIVO",
            descripcion="Atasco",
            fecha_cierre="02-02-24",
        )
        doc = normalize(DocumentType.WORK_ORDER, record, "scan.pdf")
        assert doc == WorkOrderDocument(
            orden="OT-1",
            archivo="OT-1.pdf",
            serie="S1",
            fecha_registro="01-02-24",
            categoria="CORRECTIVO",
            descripcion="Atasco",
            fecha_cierre="02-02-24",
            original_file_name="scan.pdf",
        )
        assert doc.error is None

    def test_supply_request_copies_black_and_white_counter(self) -> None:
        record = SupplyRequestFields(orden="P-9", contador_bn="12000", fecha_registro="02/01/24")
        doc = normalize(DocumentType.SUPPLY_REQUEST, record, "p.pdf")
        assert isinstance(doc, SupplyRequestDocument)
        assert doc.contador == "12000"
        assert doc.archivo == "P-9.pdf"

    def test_uninstallation_uses_folio_and_links_to_file(self) -> None:
        record = UninstallationFields(folio="F-3", fecha="05-03-24", contador_color="77")
        doc = normalize(DocumentType.UNINSTALLATION, record, "u.pdf")
        assert isinstance(doc, UninstallationDocument)
        assert doc.orden == "F-3"
        assert doc.archivo == "F-3.pdf"
        assert doc.link == doc.archivo
        assert doc.contador_color == "77"

    def test_installation_without_folio_keeps_original_name(self) -> None:
        doc = normalize(DocumentType.INSTALLATION, InstallationFields(), "install 1.pdf")
        assert isinstance(doc, InstallationDocument)
        assert doc.orden == ""
        assert doc.archivo == "install 1.pdf"
        assert doc.link == "install 1.pdf"

    def test_is_deterministic(self) -> None:
        record = WorkOrderFields(orden="1")
        first = normalize(DocumentType.WORK_ORDER, record, "a.pdf")
        second = normalize(DocumentType.WORK_ORDER, record, "a.pdf")
        assert first == second

    def test_mismatched_record_raises(self) -> None:
        with pytest.raises(TypeError, match="cannot be normalized as installation"):
            normalize(DocumentType.INSTALLATION, WorkOrderFields(orden="1"), "a.pdf")

    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            (WorkOrderFields(), WorkOrderDocument),
            (SupplyRequestFields(), SupplyRequestDocument),
            (UninstallationFields(), UninstallationDocument),
            (InstallationFields(), InstallationDocument),
        ],
    )
    def test_record_shape_selects_variant(self, record: ExtractedRecord, expected: type) -> None:
        doc = normalize(record.document_type, record, "a.pdf")
        assert type(doc) is expected
        assert doc.type is record.document_type
