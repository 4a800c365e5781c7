"""
Extracción tolerante de campos desde el markdown de una receta.

El markdown que devuelve el modelo sigue una convención, no una gramática:

    **Ragi Banana Pancake (மரக்கழி வாழைப்பழ அடை)**
    A soft, naturally sweet pancake...
    **🕒 Estimated Time:** 25 minutes
    **🔥 Estimated Calories:** 180 kcal per serving
    **💪 Difficulty Level:** Easy
    ### Ingredients
    - 1 cup ragi flour
    ...
    **❤️ Healthy Tip:** Jaggery keeps the glycemic load lower than sugar.

Cualquier campo puede faltar. La ausencia de un marcador es un caso normal
y deja el campo en `None`; el extractor nunca lanza excepciones.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Set

from .domain_models import RecipeFields

logger = logging.getLogger(__name__)

# Conjunto canónico de marcadores (ícono + etiqueta)
TIME_ICON = "🕒"
CALORIES_ICON = "🔥"
DIFFICULTY_ICON = "💪"
HEALTHY_TIP_ICON = "\u2764\ufe0f"

TIME_MARKER = f"{TIME_ICON} Estimated Time"
CALORIES_MARKER = f"{CALORIES_ICON} Estimated Calories"
DIFFICULTY_MARKER = f"{DIFFICULTY_ICON} Difficulty Level"
HEALTHY_TIP_MARKER = f"{HEALTHY_TIP_ICON} Healthy Tip"

# El corazón llega con o sin el selector de variación U+FE0F
SENTINEL_ICONS = (TIME_ICON, CALORIES_ICON, DIFFICULTY_ICON, "\u2764")

_EMPHASIS = r"(?:\*\*|__)?"


def _field_pattern(icon: str, label: str) -> Pattern[str]:
    return re.compile(
        r"^[ \t]*(?:[-*+][ \t]+)?(?:#{1,6}[ \t]+)?"
        + _EMPHASIS
        + r"[ \t]*"
        + re.escape(icon)
        + "\ufe0f?"
        + r"[ \t]*"
        + re.escape(label)
        + r"[ \t]*"
        + _EMPHASIS
        + r"[ \t]*:?[ \t]*"
        + _EMPHASIS
        + r"[ \t]*(?P<value>.*?)[ \t]*$",
        re.IGNORECASE,
    )


_FIELD_PATTERNS: Dict[str, Pattern[str]] = {
    "time": _field_pattern(TIME_ICON, "Estimated Time"),
    "calories": _field_pattern(CALORIES_ICON, "Estimated Calories"),
    "difficulty": _field_pattern(DIFFICULTY_ICON, "Difficulty Level"),
    "healthy_tip": _field_pattern("\u2764", "Healthy Tip"),
}

_TITLE_RE = re.compile(r"^[ \t]*(?:#{1,6}[ \t]+)?\*\*(?P<title>(?:(?!\*\*).)+)\*\*[ \t]*$")
_HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]")
_MANY_BLANKS_RE = re.compile(r"\n(?:[ \t]*\n){2,}")
_BLANKS_BEFORE_HEADING_RE = re.compile(r"\n(?:[ \t]*\n)+(?=[ \t]*#{1,6}[ \t])")


def _has_sentinel(line: str) -> bool:
    return any(icon in line for icon in SENTINEL_ICONS)


def _clean_value(raw: str) -> str:
    return raw.strip().strip("*_").strip()


def _find_title(lines: List[str]) -> tuple[str, Optional[int]]:
    for idx, line in enumerate(lines):
        if _has_sentinel(line):
            continue
        m = _TITLE_RE.match(line)
        if m:
            return m.group("title").strip(), idx
    return "", None


def _match_field(line: str) -> tuple[Optional[str], str]:
    for key, pattern in _FIELD_PATTERNS.items():
        m = pattern.match(line)
        if m:
            return key, _clean_value(m.group("value"))
    return None, ""


def _normalize_body(text: str) -> str:
    text = _MANY_BLANKS_RE.sub("\n\n", text)
    text = _BLANKS_BEFORE_HEADING_RE.sub("\n", text)
    return text.strip()


def _extract(text: str) -> RecipeFields:
    lines = text.splitlines()
    title, title_idx = _find_title(lines)

    dropped: Set[int] = set() if title_idx is None else {title_idx}
    values: Dict[str, Optional[str]] = {}

    for idx, line in enumerate(lines):
        if idx in dropped:
            continue
        key, value = _match_field(line)
        if key is None:
            continue
        dropped.add(idx)

        # "**❤️ Healthy Tip:**" solo en su línea: el valor viene en la siguiente
        if not value:
            nxt = next((j for j in range(idx + 1, len(lines)) if lines[j].strip()), None)
            if (
                nxt is not None
                and not _HEADING_RE.match(lines[nxt])
                and _match_field(lines[nxt])[0] is None
            ):
                value = _clean_value(lines[nxt])
                dropped.add(nxt)

        # Si el marcador se repite, gana la primera aparición
        if values.get(key) is None:
            values[key] = value or None

    body = _normalize_body("\n".join(l for i, l in enumerate(lines) if i not in dropped))

    return RecipeFields(
        title=title,
        body=body,
        time=values.get("time"),
        calories=values.get("calories"),
        difficulty=values.get("difficulty"),
        healthy_tip=values.get("healthy_tip"),
    )


def extract_recipe_fields(markdown: object) -> RecipeFields:
    """
    Extrae título, metadatos y cuerpo del markdown de una receta.

    Args:
        markdown: Texto devuelto por el modelo. Se tolera `None` u otros tipos.

    Returns:
        RecipeFields. En el peor caso, `title=""`, cuerpo igual al texto
        original y todos los campos opcionales en `None`.
    """
    text = "" if markdown is None else str(markdown)
    try:
        return _extract(text)
    except Exception:
        logger.exception("No se pudo extraer campos de la receta; se devuelve el texto crudo")
        return RecipeFields(title="", body=text)


def extract_title(markdown: object) -> str:
    """Devuelve solo el título (texto de la primera línea en negrita) o ""."""
    return extract_recipe_fields(markdown).title
