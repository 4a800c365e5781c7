"""
Endpoints del pedido de recetas.

- POST /api/v1/recipes: pide el texto; la imagen queda en segundo plano
- GET  /api/v1/recipes/{recipe_id}: estado actual (fase, receta, imagen, traducción)
- GET  /api/v1/recipes/{recipe_id}/image: imagen del plato (PNG)
- POST /api/v1/recipes/{recipe_id}/translate: traduce la receta
- GET  /api/v1/recipes/{recipe_id}/speech: texto y voz para leer en voz alta
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from chef_ai_core.catalog import resolve_language
from chef_ai_core.core.abstractions import ModelClient
from chef_ai_core.engine import RecipePhase, RecipeRequestPipeline
from chef_ai_core.speech import clean_text_for_speech

from ..dependencies import SessionStore, get_client, get_recipe_store
from ..models.requests import RecipeRequest, RecipeResponse, SpeechScriptResponse, TranslateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


@router.post("", response_model=RecipeResponse)
def create_recipe(
    request: RecipeRequest,
    background_tasks: BackgroundTasks,
    client: ModelClient = Depends(get_client),
    store: SessionStore[RecipeRequestPipeline] = Depends(get_recipe_store),
):
    """
    Pide una receta para las preferencias del formulario.

    La respuesta llega apenas está el texto (`phase = text_ready`); la imagen
    del plato se genera después en segundo plano y se consulta con
    `GET /api/v1/recipes/{recipe_id}`.

    Raises:
        422: Si no hay ingredientes.
        502: Si el modelo no devolvió la receta.
    """
    prefs = request.to_preferences()
    pipeline = RecipeRequestPipeline(client=client)

    try:
        state = pipeline.request_text(prefs)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if state.phase == RecipePhase.FAILED:
        raise HTTPException(status_code=502, detail=state.error)

    recipe_id = store.add(pipeline)
    if request.generate_image:
        background_tasks.add_task(pipeline.request_image)

    return RecipeResponse.from_state(recipe_id, state)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: str,
    store: SessionStore[RecipeRequestPipeline] = Depends(get_recipe_store),
):
    pipeline = store.get(recipe_id)
    return RecipeResponse.from_state(recipe_id, pipeline.state)


@router.get("/{recipe_id}/image")
def get_recipe_image(
    recipe_id: str,
    store: SessionStore[RecipeRequestPipeline] = Depends(get_recipe_store),
):
    """
    Devuelve la imagen del plato.

    Raises:
        404: Si la imagen todavía no está lista o no se pudo generar.
    """
    state = store.get(recipe_id).state
    if not state.image:
        raise HTTPException(
            status_code=404,
            detail=f"Imagen no disponible para {recipe_id} (fase: {state.phase.value})",
        )
    return Response(content=state.image, media_type="image/png")


@router.post("/{recipe_id}/translate", response_model=RecipeResponse)
def translate_recipe(
    recipe_id: str,
    request: TranslateRequest,
    store: SessionStore[RecipeRequestPipeline] = Depends(get_recipe_store),
):
    """
    Traduce la receta. Cada llamada reemplaza la traducción anterior.

    Raises:
        502: Si el modelo no devolvió la traducción.
    """
    pipeline = store.get(recipe_id)
    translation = pipeline.translate(request.language)
    if translation is None and pipeline.state.translation_error:
        raise HTTPException(status_code=502, detail=pipeline.state.translation_error)
    return RecipeResponse.from_state(recipe_id, pipeline.state)


@router.get("/{recipe_id}/speech", response_model=SpeechScriptResponse)
def get_recipe_speech(
    recipe_id: str,
    store: SessionStore[RecipeRequestPipeline] = Depends(get_recipe_store),
):
    """
    Devuelve lo que está en pantalla (receta o traducción) limpio para el
    sintetizador del navegador, junto con el código de idioma para elegir voz.
    """
    pipeline = store.get(recipe_id)
    language = resolve_language(pipeline.reading_language())
    return SpeechScriptResponse(
        text=clean_text_for_speech(pipeline.state.content_to_display),
        lang=language.code,
        language=language.name,
    )
