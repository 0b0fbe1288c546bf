"""Text content of a citation page, shared by the raster and print renderers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from citations.core.config import TemplateConfig
from citations.core.models import CitationRecord
from citations.processing.formatting import (
    format_hearing_date,
    format_infraction_date,
    format_plate,
    format_time_with_period,
)
from citations.review.selection import DisplayFields

PAGE_WIDTH_IN = 8.5
PAGE_HEIGHT_IN = 13.0
TITLE = "CITACIÓN AL JUZGADO DE POLICÍA LOCAL"
OWNER_SECTION = "1. DATOS DEL PROPIETARIO Y VEHÍCULO"
INFRACTION_SECTION = "2. DETALLES DE LA INFRACCIÓN"

# (text, emphasized) runs
Paragraph = List[Tuple[str, bool]]
Items = List[Tuple[str, str]]


@dataclass(frozen=True)
class CitationContent:
    oficio_text: str
    process_text: str
    city_label: str
    date_line: str
    municipality: str
    court: str
    left_column: Items
    right_column: Items
    infraction_items: Items
    legal_paragraphs: List[Paragraph]
    secretary_name: str
    secretary_title: str
    footer: str


def build_content(
    citation: CitationRecord, fields: DisplayFields, config: TemplateConfig
) -> CitationContent:
    """Assemble every string printed on the citation for ``citation``."""

    plate = format_plate(citation.plate)
    hearing = f"{format_hearing_date(config.hearing_date)} a las {config.hearing_time} horas"
    return CitationContent(
        oficio_text=fields.oficio_text,
        process_text=fields.process_text,
        city_label=f"{config.city.upper()},",
        date_line=fields.date_line,
        municipality=config.municipality,
        court=config.court,
        left_column=[
            ("Propietario:", citation.owner_name),
            ("Domicilio:", citation.address),
            ("Placa Patente:", plate),
            ("Marca/Modelo:", f"{citation.make} / {citation.model}"),
            ("Color:", citation.color),
        ],
        right_column=[
            ("Rut:", citation.tax_id),
            ("Comuna:", citation.municipality),
            ("Tipo de Vehículo:", citation.vehicle_type),
            ("Año:", citation.year),
        ],
        infraction_items=[
            ("Placa Patente Denunciada:", plate),
            ("Infracción:", citation.infraction.upper()),
            ("Lugar:", citation.location.upper()),
            ("Fecha:", format_infraction_date(citation.date)),
            ("Hora:", format_time_with_period(citation.time)),
        ],
        legal_paragraphs=[
            [
                ("Por orden de este Tribunal, se cita a Ud. a comparecer a la audiencia que se celebrará el día ", False),
                (hearing, True),
                (
                    f", en la secretaría del JUZGADO DE POLICÍA LOCAL, Ubicado en {config.hearing_address}.",
                    False,
                ),
            ],
            [
                (
                    "La presente citación se emite en conformidad a lo dispuesto en la Ley Nº 18.287 sobre "
                    "Procedimiento ante los Juzgados de Policía Local y la Ley de Tránsito N°18.290, por la "
                    "infracción cursada y detallada en la presente.",
                    False,
                )
            ],
            [
                (
                    "Deberá presentarse con su Cédula de identidad. La no comparecencia injustificada podrá dar "
                    "lugar a que se proceda en su rebeldía, pudiendo despacharse en su contra una orden de "
                    "arresto, según lo dispuesto en la ley.",
                    False,
                )
            ],
        ],
        secretary_name=config.secretary_name,
        secretary_title=config.secretary_title.upper(),
        footer=config.footer_contact_info,
    )
