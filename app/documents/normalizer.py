"""Maps extracted AI records onto the canonical processed-document variants."""

from typing import assert_never

from app.documents.models import (
    DocumentType,
    ExtractedRecord,
    InstallationDocument,
    InstallationFields,
    SuccessfulDocument,
    SupplyRequestDocument,
    SupplyRequestFields,
    UninstallationDocument,
    UninstallationFields,
    WorkOrderDocument,
    WorkOrderFields,
)


def export_file_name(identifier: str, original_file_name: str) -> str:
    """`{identifier}.pdf` when the identifier was extracted, else the upload name."""
    if identifier:
        return f"{identifier}.pdf"
    return original_file_name


def normalize(
    document_type: DocumentType,
    record: ExtractedRecord,
    original_file_name: str,
) -> SuccessfulDocument:
    """Build the processed document for one extracted record.

    Pure: the output depends only on the arguments.

    Raises:
        TypeError: if the record shape does not belong to `document_type`.
    """
    if record.document_type is not document_type:
        raise TypeError(
            f"{type(record).__name__} cannot be normalized as {document_type.value}"
        )

    match record:
        case WorkOrderFields():
            return _work_order(record, original_file_name)
        case SupplyRequestFields():
            return _supply_request(record, original_file_name)
        case UninstallationFields():
            return _uninstallation(record, original_file_name)
        case InstallationFields():
            return _installation(record, original_file_name)
        case _:
            assert_never(record)


def _work_order(record: WorkOrderFields, original_file_name: str) -> WorkOrderDocument:
    return WorkOrderDocument(
        orden=record.orden,
        archivo=export_file_name(record.orden, original_file_name),
        serie=record.serie,
        fecha_registro=record.fecha_registro,
        categoria=record.categoria,
        descripcion=record.descripcion,
        fecha_cierre=record.fecha_cierre,
        original_file_name=original_file_name,
    )


def _supply_request(
    record: SupplyRequestFields, original_file_name: str
) -> SupplyRequestDocument:
    return SupplyRequestDocument(
        orden=record.orden,
        archivo=export_file_name(record.orden, original_file_name),
        serie=record.serie,
        fecha_registro=record.fecha_registro,
        contador=record.contador_bn,
        fecha_entrega=record.fecha_entrega,
        original_file_name=original_file_name,
    )


def _uninstallation(
    record: UninstallationFields, original_file_name: str
) -> UninstallationDocument:
    archivo = export_file_name(record.folio, original_file_name)
    return UninstallationDocument(
        orden=record.folio,
        archivo=archivo,
        serie=record.serie,
        fecha=record.fecha,
        contador_bn=record.contador_bn,
        contador_color=record.contador_color,
        contador_escaner=record.contador_escaner,
        link=archivo,
        comentarios=record.comentarios,
        original_file_name=original_file_name,
    )


def _installation(
    record: InstallationFields, original_file_name: str
) -> InstallationDocument:
    archivo = export_file_name(record.folio, original_file_name)
    return InstallationDocument(
        orden=record.folio,
        archivo=archivo,
        serie=record.serie,
        fecha=record.fecha,
        contador_bn=record.contador_bn,
        link=archivo,
        comentarios=record.comentarios,
        original_file_name=original_file_name,
    )
