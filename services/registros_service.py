import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

PRIORITY_STYLES = {
    "urgente": {"color": "#f78da7", "label": "Urgente"},
    "prioritario": {"color": "#7ab7ff", "label": "Prioritario"},
    "rutinario": {"color": "#7adfa1", "label": "Rutinario"},
    "otros": {"color": "#d1d1d6", "label": "Otros"},
}

# substring -> group key
PRIORITY_GROUPS = (
    ("urg", "urgentes"),
    ("prior", "prioritarios"),
    ("ruti", "rutinarios"),
)

TABLE_COLUMNS = {
    "numero_hr": "N° H.R.",
    "referencia": "Referencia",
    "procedencia": "Procedencia",
    "nombre_solicitante": "Solicitante",
    "fecha_ingreso": "Ingreso",
    "prioridad": "Prioridad",
    "estado": "Estado",
    "ubicacion_actual": "Ubicación",
    "responsable_actual": "Responsable",
}


def priority_style(prioridad: Optional[str]) -> Dict[str, str]:
    return PRIORITY_STYLES.get((prioridad or "").strip().lower(), PRIORITY_STYLES["otros"])


def group_by_priority(hojas: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    groups = {key: [] for _, key in PRIORITY_GROUPS}
    for hoja in hojas:
        p = (hoja.get("prioridad") or "").lower()
        for needle, key in PRIORITY_GROUPS:
            if needle in p:
                groups[key].append(hoja)
    return groups


def is_field_match(value: Optional[str], query: Optional[str]) -> bool:
    if not value or not query:
        return False
    return query.lower() in str(value).lower()


def highlight_segments(text: Optional[str], query: Optional[str]) -> List[Tuple[str, bool]]:
    """Split text into (segment, is_match) pairs for the search query."""
    if not text:
        return []
    text = str(text)
    if not query:
        return [(text, False)]

    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return [(part, bool(pattern.fullmatch(part))) for part in pattern.split(text) if part]


def to_table(hojas: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(hojas))
    for col in TABLE_COLUMNS:
        if col not in df.columns:
            df[col] = ""
    df = df[list(TABLE_COLUMNS)].fillna("")
    return df.rename(columns=TABLE_COLUMNS)
