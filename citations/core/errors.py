"""Error taxonomy surfaced to the clerk as single user-facing messages."""


class CitationsError(Exception):
    """Base class for every error the dashboard converts into a message."""

    default_message = "Ocurrió un error desconocido."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class ConfigurationError(CitationsError):
    """Raised when required settings such as the provider API key are missing."""

    default_message = "Falta configurar la clave de la API (GEMINI_API_KEY)."


class ExtractionError(CitationsError):
    """Generic failure while asking the provider to extract citation data."""

    default_message = (
        "No se pudieron extraer los datos. Asegúrese de que los documentos sean claros y legibles."
    )


class ProviderEmptyResponse(ExtractionError):
    default_message = "La API no devolvió contenido. Verifique los documentos y vuelva a intentarlo."


class ProviderMalformedResponse(ExtractionError):
    default_message = "La API no devolvió un array de resultados. El formato es incorrecto."


class ProviderPolicyBlocked(ExtractionError):
    default_message = (
        "El contenido del documento fue bloqueado por políticas de seguridad. Pruebe con otro archivo."
    )


class WorkbookError(CitationsError):
    """Base class for correspondence spreadsheet failures."""


class TemplateSheetNotFound(WorkbookError):
    def __init__(self, sheet_name: str) -> None:
        self.sheet_name = sheet_name
        super().__init__(f"La hoja de cálculo '{sheet_name}' no se encontró en el archivo.")


class TemplateFileUnreadable(WorkbookError):
    default_message = "No se pudo leer el archivo Excel. Asegúrate de que no esté corrupto."


class BatchCaptureFailure(CitationsError):
    """A snapshot step failed while building a batch PDF or print document."""

    default_message = "Ocurrió un error al generar el PDF masivo."
