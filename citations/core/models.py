"""Data models for extracted citations and their derived views."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Tuple, Union

# Provider schema name for each ExtractedRecord field, in schema order.
WIRE_FIELDS: Dict[str, str] = {
    "plate": "placaPatenteUnica",
    "infraction": "infraccion",
    "location": "lugar",
    "date": "fecha",
    "time": "hora",
    "process_number": "procesoNumero",
    "owner_name": "propietario",
    "tax_id": "rut",
    "make": "marca",
    "model": "modelo",
    "color": "color",
    "year": "ano",
    "vehicle_type": "tipoVehiculo",
    "chassis_number": "numeroChasis",
    "engine_number": "numeroMotor",
    "street": "domicilioCalle",
    "street_number": "domicilioNumero",
    "municipality": "comuna",
}


@dataclass(frozen=True)
class ExtractedRecord:
    """One complaint paired with the registration certificate of the same plate."""

    plate: str = ""
    infraction: str = ""
    location: str = ""
    date: str = ""
    time: str = ""
    process_number: str = ""
    owner_name: str = ""
    tax_id: str = ""
    make: str = ""
    model: str = ""
    color: str = ""
    year: str = ""
    vehicle_type: str = ""
    chassis_number: str = ""
    engine_number: str = ""
    street: str = ""
    street_number: str = ""
    municipality: str = ""

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "ExtractedRecord":
        """Build a record from a provider JSON object, coercing values to text."""

        values = {}
        for name, wire_name in WIRE_FIELDS.items():
            raw = payload.get(wire_name)
            values[name] = "" if raw is None else str(raw).strip()
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CitationRecord(ExtractedRecord):
    """An extracted record with its generated oficio number."""

    oficio_number: str = ""

    @classmethod
    def from_extracted(cls, record: ExtractedRecord, oficio_number: str) -> "CitationRecord":
        values = {item.name: getattr(record, item.name) for item in fields(ExtractedRecord)}
        return cls(oficio_number=oficio_number, **values)

    @property
    def address(self) -> str:
        return f"{self.street} {self.street_number}"


@dataclass(frozen=True)
class Success:
    """Outcome variant holding a displayable citation."""

    citation: CitationRecord


@dataclass(frozen=True)
class Failure:
    """Outcome variant recording an extraction error and the files involved."""

    error_message: str
    source_files: Tuple[str, ...] = ()


ProcessingOutcome = Union[Success, Failure]


def successful_citations(outcomes: List[ProcessingOutcome]) -> List[CitationRecord]:
    """Return the citations of every ``Success`` outcome, keeping list order."""

    return [outcome.citation for outcome in outcomes if isinstance(outcome, Success)]


CORRESPONDENCE_HEADERS = [
    "N°",
    "NUMERO GUIA",
    "CERT.",
    "DEPTO.",
    "TIPO DCTO",
    "DCTO.",
    "DESTINATARIO",
    "DIRECCIÓN",
    "CIUDAD/COMUNA",
]


@dataclass(frozen=True)
class CorrespondenceRow:
    """One line of the certified-mail correspondence log."""

    sequence: int
    document_code: str
    addressee: str
    address: str
    municipality: str
    tracking_guide: str = ""
    certified: str = "CERT"
    department: str = "JPL"
    document_type: str = "2º CITACIÓN-ROL"

    def values(self) -> List[Any]:
        """Return cell values in ``CORRESPONDENCE_HEADERS`` order."""

        return [
            self.sequence,
            self.tracking_guide,
            self.certified,
            self.department,
            self.document_type,
            self.document_code,
            self.addressee,
            self.address,
            self.municipality,
        ]

    def to_dict(self) -> Dict[str, Any]:
        return dict(zip(CORRESPONDENCE_HEADERS, self.values()))


@dataclass
class NormalizedBatch:
    """Citations and correspondence rows derived from one extraction run."""

    citations: List[CitationRecord] = field(default_factory=list)
    correspondence: List[CorrespondenceRow] = field(default_factory=list)
