"""
Endpoint para consultar el catálogo de opciones.

Este endpoint permite obtener las opciones disponibles para cada selector del
formulario (meal_types, dietary_preferences, spice_levels, difficulty_levels),
los idiomas de traducción y los ingredientes comunes.
"""

from fastapi import APIRouter, HTTPException

from chef_ai_core.catalog import CATALOG_DOMAINS, LANGUAGES, search_ingredients

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("")
def list_domains():
    """
    Lista todos los dominios disponibles en el catálogo.

    Returns:
        Lista de dominios
    """
    return {"domains": list(CATALOG_DOMAINS)}


@router.get("/languages")
def list_languages():
    return [{"code": lang.code, "name": lang.name} for lang in LANGUAGES]


@router.get("/ingredients")
def list_ingredients(q: str = ""):
    """
    Ingredientes comunes, filtrados por nombre en inglés o tamil.

    Args:
        q: Término de búsqueda (vacío devuelve todos)
    """
    return [
        {"name": ing.name, "tamil_name": ing.tamil_name}
        for ing in search_ingredients(q)
    ]


@router.get("/{domain}")
def get_catalog_options(domain: str):
    """
    Obtiene todas las opciones de un dominio del catálogo.

    Args:
        domain: Dominio del catálogo (ej: "meal_types", "spice_levels")

    Returns:
        Lista de opciones con label, value y sort_order
    """
    options = CATALOG_DOMAINS.get(domain)
    if options is None:
        raise HTTPException(status_code=404, detail=f"Dominio {domain} no encontrado")

    return [
        {
            "value": option,
            "label": option,
            "sort_order": index,
        }
        for index, option in enumerate(options)
    ]
