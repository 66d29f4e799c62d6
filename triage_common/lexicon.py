"""Fixed urgency lexicons shared by every classification call.

All tables are tuples or compiled patterns so they can be read concurrently
without copying. Terms are matched by plain substring containment against
lower-cased text, so accents must be kept exactly as written here.
"""
from __future__ import annotations

import re
from typing import Tuple

HIGH_URGENCY_KEYWORDS: Tuple[str, ...] = (
    "no funciona",
    "caído",
    "crítico",
    "urgente",
    "emergencia",
    "parado",
    "bloqueado",
    "error grave",
    "no inicia",
    "caída",
    "inaccesible",
    "prioritario",
    "inmediato",
    "urgentemente",
    "asap",
    "rápido",
)

MEDIUM_URGENCY_KEYWORDS: Tuple[str, ...] = (
    "lento",
    "problema",
    "error",
    "falla",
    "no puedo",
    "dificultad",
    "incidente",
    "consultar",
    "pregunta",
    "ayuda",
    "soporte",
    "molesto",
    "incomodo",
    "difícil",
    "complicado",
)

# Each low urgency hit subtracts from the keyword score.
LOW_URGENCY_KEYWORDS: Tuple[str, ...] = (
    "consulta",
    "pregunta",
    "información",
    "sugerencia",
    "mejora",
    "futuro",
    "próximo",
    "cuando",
    "duda",
    "curiosidad",
    "opcional",
    "cuando pueda",
    "sin prisa",
)

TECHNICAL_TERMS: Tuple[str, ...] = (
    "servidor",
    "base de datos",
    "red",
    "wifi",
    "internet",
    "conexión",
    "sistema",
    "aplicación",
    "plataforma",
    "login",
    "acceso",
    "impresora",
    "proyector",
    "notebook",
    "equipo",
    "dispositivo",
)

HIGH_KEYWORD_POINTS = 3.0
MEDIUM_KEYWORD_POINTS = 1.5
LOW_KEYWORD_POINTS = -1.0
TECHNICAL_TERM_POINTS = 0.5

TIME_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+)\s*(horas?|hrs?)\s*(sin|sin poder)", re.IGNORECASE),
    re.compile(r"desde\s*(ayer|esta mañana|hoy temprano)", re.IGNORECASE),
    re.compile(r"todo el día", re.IGNORECASE),
    re.compile(r"varios días", re.IGNORECASE),
    re.compile(r"desde hace", re.IGNORECASE),
)
TIME_PATTERN_POINTS = 2.0

URGENT_TAGS: Tuple[str, ...] = ("urgente", "critico", "bloqueante", "prioritario")
MEDIUM_TAGS: Tuple[str, ...] = ("problema", "error", "falla")
URGENT_TAG_POINTS = 3.0
MEDIUM_TAG_POINTS = 1.5

MANUAL_FLAG_POINTS = 5.0

HISTORICAL_URGENT_PHRASES: Tuple[str, ...] = (
    "no funciona el sistema no puedo trabajar",
    "error crítico servidor caído",
    "urgencia inmediata bloqueado completamente",
    "problema grave impresora no imprime urgente",
)
HISTORICAL_WEIGHT = 2.0
HISTORICAL_REPORT_THRESHOLD = 0.3

HIGH_LEVEL_THRESHOLD = 8.0
MEDIUM_LEVEL_THRESHOLD = 4.0
