"""Fixed sheet layout per document type."""

from dataclasses import dataclass
from typing import assert_never

from app.documents.models import (
    DocumentType,
    InstallationDocument,
    SuccessfulDocument,
    SupplyRequestDocument,
    UninstallationDocument,
    WorkOrderDocument,
)

FILE_COLUMN = "ARCHIVOS"


@dataclass(frozen=True)
class SheetLayout:
    title: str
    headers: tuple[str, ...]
    widths: tuple[int, ...]


SHEET_LAYOUTS: dict[DocumentType, SheetLayout] = {
    DocumentType.WORK_ORDER: SheetLayout(
        title="Órdenes de Trabajo",
        headers=("ORDEN", FILE_COLUMN, "SERIE", "FECHA REGISTRO", "CATEGORIA", "DESCRIPCION", "FECHA CIERRE"),
        widths=(15, 25, 20, 20, 20, 50, 20),
    ),
    DocumentType.SUPPLY_REQUEST: SheetLayout(
        title="Pedidos de Suministro",
        headers=("ORDEN", FILE_COLUMN, "SERIE", "FECHA REGISTRO", "CONTADOR", "FECHA ENTREGA"),
        widths=(15, 40, 20, 20, 15, 20),
    ),
    DocumentType.UNINSTALLATION: SheetLayout(
        title="Desinstalaciones",
        headers=(
            "FOLIO", FILE_COLUMN, "SERIE", "FECHA", "CONTADOR B/N", "CONTADOR COLOR",
            "CONTADOR ESCANER", "LINK", "COMENTARIOS",
        ),
        widths=(15, 25, 20, 20, 15, 15, 15, 30, 50),
    ),
    DocumentType.INSTALLATION: SheetLayout(
        title="Instalaciones",
        headers=("FOLIO", FILE_COLUMN, "SERIE", "FECHA", "CONTADOR B/N", "LINK", "COMENTARIOS"),
        widths=(15, 25, 20, 20, 15, 30, 50),
    ),
}


def to_row(document: SuccessfulDocument) -> tuple[str, ...]:
    """Cell values in the column order of the document's sheet."""
    if isinstance(document, WorkOrderDocument):
        return (
            document.orden, document.archivo, document.serie, document.fecha_registro,
            document.categoria, document.descripcion, document.fecha_cierre,
        )
    if isinstance(document, SupplyRequestDocument):
        return (
            document.orden, document.archivo, document.serie, document.fecha_registro,
            document.contador, document.fecha_entrega,
        )
    if isinstance(document, UninstallationDocument):
        return (
            document.orden, document.archivo, document.serie, document.fecha,
            document.contador_bn, document.contador_color, document.contador_escaner,
            document.link, document.comentarios,
        )
    if isinstance(document, InstallationDocument):
        return (
            document.orden, document.archivo, document.serie, document.fecha,
            document.contador_bn, document.link, document.comentarios,
        )
    assert_never(document)
