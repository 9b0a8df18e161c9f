from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Self

FAILURE_MARKER = "Fallo de Procesamiento"


class DocumentType(str, Enum):
    """The four record types the batch tool knows how to extract."""

    WORK_ORDER = "workOrder"
    SUPPLY_REQUEST = "supplyRequest"
    UNINSTALLATION = "uninstallation"
    INSTALLATION = "installation"


class Classification(str, Enum):
    """Classifier verdict: one of the document types or unknown."""

    WORK_ORDER = "workOrder"
    SUPPLY_REQUEST = "supplyRequest"
    UNINSTALLATION = "uninstallation"
    INSTALLATION = "installation"
    UNKNOWN = "unknown"

    @property
    def document_type(self) -> DocumentType | None:
        if self is Classification.UNKNOWN:
            return None
        return DocumentType(self.value)

    @classmethod
    def parse(cls, raw: str) -> "Classification":
        """Map a raw verdict string to a Classification, UNKNOWN when unrecognized."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class InputFile:
    """An uploaded PDF: original file name plus its raw bytes."""

    name: str
    content: bytes

    def __repr__(self) -> str:
        return f"InputFile(name={self.name!r}, size={len(self.content)})"


# --- Extracted records (raw AI output, one shape per type) ---


def _json_field(key: str) -> Any:
    return field(default="", metadata={"json_key": key})


@dataclass(frozen=True)
class _ExtractedFields:
    document_type: ClassVar[DocumentType]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> Self:
        """Build the record from parsed JSON, defaulting absent fields to ''."""
        values: dict[str, str] = {}
        for f in fields(cls):
            value = raw.get(f.metadata["json_key"])
            values[f.name] = "" if value is None else str(value).strip()
        return cls(**values)

    @classmethod
    def json_keys(cls) -> list[str]:
        return [f.metadata["json_key"] for f in fields(cls)]


@dataclass(frozen=True)
class WorkOrderFields(_ExtractedFields):
    document_type: ClassVar[DocumentType] = DocumentType.WORK_ORDER

    orden: str = _json_field("orden")
    serie: str = _json_field("serie")
    fecha_registro: str = _json_field("fechaRegistro")
    categoria: str = _json_field("categoria")
    descripcion: str = _json_field("descripcion")
    fecha_cierre: str = _json_field("fechaCierre")


@dataclass(frozen=True)
class SupplyRequestFields(_ExtractedFields):
    document_type: ClassVar[DocumentType] = DocumentType.SUPPLY_REQUEST

    orden: str = _json_field("orden")
    serie: str = _json_field("serie")
    fecha_registro: str = _json_field("fechaRegistro")
    contador_bn: str = _json_field("contadorBN")
    fecha_entrega: str = _json_field("fechaEntrega")


@dataclass(frozen=True)
class UninstallationFields(_ExtractedFields):
    document_type: ClassVar[DocumentType] = DocumentType.UNINSTALLATION

    folio: str = _json_field("folio")
    serie: str = _json_field("serie")
    fecha: str = _json_field("fecha")
    contador_bn: str = _json_field("contadorBN")
    contador_color: str = _json_field("contadorColor")
    contador_escaner: str = _json_field("contadorEscaner")
    comentarios: str = _json_field("comentarios")


@dataclass(frozen=True)
class InstallationFields(_ExtractedFields):
    document_type: ClassVar[DocumentType] = DocumentType.INSTALLATION

    folio: str = _json_field("folio")
    serie: str = _json_field("serie")
    fecha: str = _json_field("fecha")
    contador_bn: str = _json_field("contadorBN")
    comentarios: str = _json_field("comentarios")


ExtractedRecord = WorkOrderFields | SupplyRequestFields | UninstallationFields | InstallationFields

EXTRACTED_RECORD_TYPES: dict[DocumentType, type[ExtractedRecord]] = {
    DocumentType.WORK_ORDER: WorkOrderFields,
    DocumentType.SUPPLY_REQUEST: SupplyRequestFields,
    DocumentType.UNINSTALLATION: UninstallationFields,
    DocumentType.INSTALLATION: InstallationFields,
}


# --- Processed documents (canonical output) ---


@dataclass(frozen=True)
class WorkOrderDocument:
    type: ClassVar[DocumentType] = DocumentType.WORK_ORDER

    orden: str
    archivo: str
    serie: str
    fecha_registro: str
    categoria: str
    descripcion: str
    fecha_cierre: str
    original_file_name: str
    error: None = None


@dataclass(frozen=True)
class SupplyRequestDocument:
    type: ClassVar[DocumentType] = DocumentType.SUPPLY_REQUEST

    orden: str
    archivo: str
    serie: str
    fecha_registro: str
    contador: str
    fecha_entrega: str
    original_file_name: str
    error: None = None


@dataclass(frozen=True)
class UninstallationDocument:
    type: ClassVar[DocumentType] = DocumentType.UNINSTALLATION

    orden: str
    archivo: str
    serie: str
    fecha: str
    contador_bn: str
    contador_color: str
    contador_escaner: str
    link: str
    comentarios: str
    original_file_name: str
    error: None = None


@dataclass(frozen=True)
class InstallationDocument:
    type: ClassVar[DocumentType] = DocumentType.INSTALLATION

    orden: str
    archivo: str
    serie: str
    fecha: str
    contador_bn: str
    link: str
    comentarios: str
    original_file_name: str
    error: None = None


@dataclass(frozen=True)
class FailedDocument:
    """A file that could not be classified or extracted.

    Reports itself as a work order whose `orden` is FAILURE_MARKER so that
    consumers of the flat record shape keep working. Code inside this package
    tests for failure with `is_failure()` rather than comparing strings.
    """

    type: ClassVar[DocumentType] = DocumentType.WORK_ORDER

    original_file_name: str
    error: str

    @property
    def orden(self) -> str:
        return FAILURE_MARKER

    @property
    def archivo(self) -> str:
        return self.original_file_name


SuccessfulDocument = (
    WorkOrderDocument | SupplyRequestDocument | UninstallationDocument | InstallationDocument
)
ProcessedDocument = SuccessfulDocument | FailedDocument


def is_failure(document: ProcessedDocument) -> bool:
    return isinstance(document, FailedDocument)


def successful_of_type(
    documents: Iterable[ProcessedDocument], document_type: DocumentType
) -> list[SuccessfulDocument]:
    """Successful documents of one type, in their current order."""
    return [
        doc
        for doc in documents
        if not isinstance(doc, FailedDocument) and doc.type is document_type
    ]
