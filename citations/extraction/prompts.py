"""Prompts and response schemas sent to the extraction provider."""
from citations.core.models import WIRE_FIELDS

COUNT_PROMPT = """
Analiza los documentos PDF proporcionados.
Cuenta cuántas "Denuncias de Parte Empadronado por Infracción de Tránsito" distintas hay en total en los documentos.
Devuelve únicamente el número total como un objeto JSON con una sola clave "count". Por ejemplo: {"count": 3}.
No incluyas texto adicional ni explicaciones.
"""

EXTRACTION_PROMPT = """
Actúa como un experto en la lectura de documentos de tránsito chilenos. Tu objetivo es procesar documentos de forma masiva.
Analiza los dos documentos PDF proporcionados. Un PDF contiene MÚLTIPLES "Denuncias de Parte Empadronado por Infracción de Tránsito" y el otro PDF contiene MÚLTIPLES "Certificados de Inscripciones y Anotaciones Vigentes (CIAV)".

Tu tarea es procesar sistemáticamente CADA UNA de las denuncias que encuentres en el primer documento. Para cada denuncia:
1.  Identifica la Placa Patente Única.
2.  Busca el Certificado (CIAV) correspondiente a esa Placa Patente en el segundo documento.
3.  Una vez encontrada la pareja, extrae la siguiente información:
    - Del documento de denuncia: Placa Patente Única (formateada como XXXX-NN, ej. RHPT-14), infracción denunciada, lugar, fecha, hora y el "PROCESO N°". El "PROCESO N°" se encuentra usualmente en un recuadro en la parte superior del documento de denuncia que dice "JUZGADO DE POLICIA LOCAL".
    - Del documento CIAV: nombre del propietario, RUT, marca, modelo, color, año, tipo de vehículo, número de chasis, número de motor, domicilio (separando calle y número) y comuna.
4.  Añade el objeto JSON completo con toda la información extraída al array de resultados.

Repite este proceso para TODAS las denuncias presentes en el documento. Devuelve TODOS los registros encontrados como un array de objetos JSON, utilizando exclusivamente el schema proporcionado. Si no encuentras ninguna citación, devuelve un array vacío. No incluyas texto adicional, resúmenes ni explicaciones.
"""

FIELD_DESCRIPTIONS = {
    "placaPatenteUnica": "La Placa Patente Única del vehículo, formateada como XXXX-NN (ej. RHPT-14).",
    "infraccion": "La descripción de la infracción denunciada.",
    "lugar": "El lugar exacto donde ocurrió la infracción.",
    "fecha": "La fecha de la infracción en formato DD-MM-YYYY.",
    "hora": "La hora de la infracción en formato HH:MM.",
    "procesoNumero": 'El número de proceso de la denuncia, en el recuadro superior que dice "PROCESO N°".',
    "propietario": "El nombre completo del propietario del vehículo.",
    "rut": "El RUT (Rol Único Tributario) del propietario.",
    "marca": "La marca del vehículo.",
    "modelo": "El modelo del vehículo.",
    "color": "El color del vehículo.",
    "ano": "El año de fabricación del vehículo.",
    "tipoVehiculo": "El tipo de vehículo (ej. Automóvil, Jeep, Camioneta).",
    "numeroChasis": "El número de chasis (VIN) del vehículo.",
    "numeroMotor": "El número de motor del vehículo.",
    "domicilioCalle": "La calle de la dirección del propietario (sin el número).",
    "domicilioNumero": "El número de la dirección del propietario.",
    "comuna": "La comuna del domicilio del propietario.",
}

COUNT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "count": {"type": "INTEGER", "description": "El número total de denuncias encontradas."},
    },
    "required": ["count"],
}

CITATION_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            wire_name: {"type": "STRING", "description": FIELD_DESCRIPTIONS[wire_name]}
            for wire_name in WIRE_FIELDS.values()
        },
        "required": list(WIRE_FIELDS.values()),
    },
}
