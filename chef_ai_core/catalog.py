"""
Catálogo estático de opciones del formulario de preferencias.

Las etiquetas son bilingües (inglés / tamil) porque se muestran tal cual
en la UI y viajan tal cual en el prompt.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .domain_models import Ingredient, Language

MEAL_TYPES: List[str] = [
    "Breakfast (காலை உணவு)",
    "Lunch (மதிய உணவு)",
    "Dinner (இரவு உணவு)",
    "Snack (சிற்றுண்டி)",
    "Dessert (இனிப்பு)",
]

DIETARY_PREFERENCES: List[str] = [
    "Vegetarian (சைவம்)",
    "Non-Vegetarian (அசைவம்)",
    "Vegan (சைவ உணவு)",
    "Gluten-Free (பசையம் இல்லாதது)",
]

SPICE_LEVELS: List[str] = [
    "Mild (மிதமான)",
    "Medium (நடுத்தர)",
    "Spicy (காரம்)",
]

DIFFICULTY_LEVELS: List[str] = [
    "Easy (எளிதான)",
    "Medium (நடுத்தர)",
    "Hard (கடினமான)",
]

LANGUAGES: List[Language] = [
    Language(code="en", name="English"),
    Language(code="ta", name="தமிழ் (Tamil)"),
    Language(code="te", name="తెలుగు (Telugu)"),
    Language(code="kn", name="ಕನ್ನಡ (Kannada)"),
    Language(code="ml", name="മലയാളം (Malayalam)"),
    Language(code="hi", name="हिन्दी (Hindi)"),
]

DEFAULT_LANGUAGE: Language = LANGUAGES[0]

COMMON_INGREDIENTS: List[Ingredient] = [
    Ingredient("Rice", "அரிசி"),
    Ingredient("Ragi", "ராகி"),
    Ingredient("Banana", "வாழைப்பழம்"),
    Ingredient("Jaggery", "வெல்லம்"),
    Ingredient("Coconut", "தேங்காய்"),
    Ingredient("Drumstick", "முருங்கை"),
    Ingredient("Brinjal", "கத்திரிக்காய்"),
    Ingredient("Tomato", "தக்காளி"),
    Ingredient("Onion", "வெங்காயம்"),
    Ingredient("Tamarind", "புளி"),
    Ingredient("Lentils", "பருப்பு"),
    Ingredient("Chilli", "மிளகாய்"),
    Ingredient("Garlic", "பூண்டு"),
    Ingredient("Ginger", "இஞ்சி"),
    Ingredient("Coriander", "மல்லி"),
    Ingredient("Curry Leaves", "கறிவேப்பிலை"),
    Ingredient("Mustard Seeds", "கடுகு"),
    Ingredient("Turmeric", "மஞ்சள்"),
    Ingredient("Potato", "உருளைக்கிழங்கு"),
    Ingredient("Lady's Finger", "வெண்டைக்காய்"),
    Ingredient("Curd", "தயிர்"),
    Ingredient("Ghee", "நெய்"),
    Ingredient("Chicken", "கோழி"),
    Ingredient("Mutton", "மட்டன்"),
]

# Defaults del formulario
DEFAULT_MEAL_TYPE = MEAL_TYPES[0]
DEFAULT_DIETARY_PREFERENCE = DIETARY_PREFERENCES[0]
DEFAULT_SPICE_LEVEL = SPICE_LEVELS[1]
DEFAULT_DIFFICULTY_LEVEL = DIFFICULTY_LEVELS[0]

CATALOG_DOMAINS: Dict[str, List[str]] = {
    "meal_types": MEAL_TYPES,
    "dietary_preferences": DIETARY_PREFERENCES,
    "spice_levels": SPICE_LEVELS,
    "difficulty_levels": DIFFICULTY_LEVELS,
}


def find_language(name: str) -> Optional[Language]:
    """Busca un idioma por nombre visible (el valor del selector de la UI)."""
    for lang in LANGUAGES:
        if lang.name == name:
            return lang
    return None


def resolve_language(name: str | None) -> Language:
    """Como `find_language`, pero cae al idioma por defecto si no hay match."""
    return find_language(name or "") or DEFAULT_LANGUAGE


def search_ingredients(term: str) -> List[Ingredient]:
    """
    Filtra los ingredientes comunes por nombre en inglés o en tamil.

    La búsqueda es por substring e insensible a mayúsculas. Un término vacío
    devuelve la lista completa.
    """
    if not term:
        return list(COMMON_INGREDIENTS)
    t = term.lower()
    return [
        ing
        for ing in COMMON_INGREDIENTS
        if t in ing.name.lower() or t in ing.tamil_name.lower()
    ]


def combine_ingredients(selected: Iterable[str], other: str = "") -> str:
    """
    Une los chips seleccionados con el texto libre de "otros ingredientes".

    El texto libre se separa por comas; se descartan vacíos y duplicados
    respetando el orden de aparición.
    """
    others = [s.strip() for s in (other or "").split(",")]
    merged: List[str] = []
    for name in [*selected, *others]:
        if name and name not in merged:
            merged.append(name)
    return ", ".join(merged)
