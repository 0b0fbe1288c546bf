"""Template configuration printed on every citation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from citations.core.utils import get_config_value

DEFAULT_FOOTER = (
    "Correo electrónico: tribunal@elquisco.cl - Teléfonos: (35) 2 456119 - "
    "Celular: 9 94088296 - El Quisco V Región Chile."
)


def default_hearing_date(today: date | None = None) -> str:
    """Return the ISO date thirty days after ``today``."""

    return ((today or date.today()) + timedelta(days=30)).isoformat()


@dataclass
class TemplateConfig:
    """Court, secretary, and hearing details shared by all citations of a session."""

    municipality: str = "ILUSTRE MUNICIPALIDAD DE EL QUISCO"
    court: str = "JUZGADO DE POLICÍA LOCAL"
    city: str = "EL QUISCO"
    secretary_name: str = "Alejandro Carrasco Blanc"
    secretary_title: str = "SECRETARIO ABOGADO"
    hearing_date: str = field(default_factory=default_hearing_date)
    hearing_time: str = "09:00"
    hearing_address: str = "Avda. Francia N°011 El Quisco"
    start_oficio_number: str = "100"
    footer_contact_info: str = DEFAULT_FOOTER

    @property
    def hearing_year(self) -> int:
        return date.fromisoformat(self.hearing_date).year


def load_template_config() -> TemplateConfig:
    """Build a ``TemplateConfig`` whose defaults can be overridden per deployment."""

    defaults = TemplateConfig()
    return TemplateConfig(
        municipality=get_config_value("CITATIONS_MUNICIPALITY", defaults.municipality),
        court=get_config_value("CITATIONS_COURT", defaults.court),
        city=get_config_value("CITATIONS_CITY", defaults.city),
        secretary_name=get_config_value("CITATIONS_SECRETARY_NAME", defaults.secretary_name),
        secretary_title=get_config_value("CITATIONS_SECRETARY_TITLE", defaults.secretary_title),
        hearing_date=defaults.hearing_date,
        hearing_time=get_config_value("CITATIONS_HEARING_TIME", defaults.hearing_time),
        hearing_address=get_config_value("CITATIONS_HEARING_ADDRESS", defaults.hearing_address),
        start_oficio_number=get_config_value("CITATIONS_START_OFICIO", defaults.start_oficio_number),
        footer_contact_info=get_config_value("CITATIONS_FOOTER", defaults.footer_contact_info),
    )
