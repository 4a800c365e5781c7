from __future__ import annotations

"""
chef_ai_core.engine
===================

Orquestador del pedido de recetas.

Un pedido tiene tres fases con dominios de falla independientes:

1) Texto de la receta (`request_text`). Si falla, el pedido termina: se
   limpia el estado de carga, se publica un error visible y no se pide imagen.

2) Revelado progresivo: apenas llega el texto, la receta queda visible
   (`phase = TEXT_READY`) antes de pedir la imagen.

3) Imagen del plato (`request_image`). Es decorativa: si falla se loguea y el
   pedido queda en `IMAGE_FAILED`, sin error visible.

La traducción es independiente y se puede pedir cualquier cantidad de veces;
cada traducción reemplaza a la anterior y tiene su propio slot de error.

Este módulo NO sabe de HTTP: la capa `api` decide si la fase 3 corre en el
mismo request o en segundo plano.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .catalog import resolve_language
from .core.abstractions import ModelClient
from .domain_models import RecipeFields, UserPreferences
from .llm_client import ApiError
from .prompts import build_image_prompt, build_recipe_prompt, fallback_dish_title
from .recipe_parser import extract_recipe_fields
from .speech import RecipeReader, SpeechUtterance, reading_language

logger = logging.getLogger(__name__)

RECIPE_ERROR = "Sorry, I couldn't find a recipe. Please try again."
TRANSLATION_ERROR = "Sorry, I couldn't translate the recipe. Please try again."


class RecipePhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    TEXT_READY = "text_ready"
    IMAGE_READY = "image_ready"
    IMAGE_FAILED = "image_failed"
    FAILED = "failed"


@dataclass
class RecipeRequestState:
    """
    Estado visible de un pedido de receta.

    Se reinicia completo en cada `request_text`.
    """

    phase: RecipePhase = RecipePhase.IDLE
    preferences: Optional[UserPreferences] = None

    recipe: str = ""
    """Markdown devuelto por el modelo ("" hasta que la fase 1 termina bien)."""

    fields: Optional[RecipeFields] = None
    image: Optional[bytes] = None
    error: str = ""

    is_loading: bool = False
    is_generating_image: bool = False

    translated_recipe: str = ""
    translation_language: str = ""
    is_translating: bool = False
    translation_error: str = ""

    @property
    def content_to_display(self) -> str:
        return self.translated_recipe or self.recipe


Listener = Callable[[RecipeRequestState], None]


@dataclass
class RecipeRequestPipeline:
    """
    Pipeline de pedido de receta para una sesión de usuario.

    Args:
        client: Cliente del modelo (ver `core.abstractions.ModelClient`).
        listeners: Callbacks invocados en cada cambio de fase; permiten a la UI
            mostrar el texto antes de que llegue la imagen.
    """

    client: ModelClient
    listeners: List[Listener] = field(default_factory=list)
    state: RecipeRequestState = field(default_factory=RecipeRequestState)

    def _set_phase(self, phase: RecipePhase) -> None:
        self.state.phase = phase
        for listener in self.listeners:
            listener(self.state)

    def submit(self, prefs: UserPreferences) -> RecipeRequestState:
        """
        Ejecuta el pedido completo: texto y, si salió bien, imagen.
        """
        self.request_text(prefs)
        if self.state.phase == RecipePhase.TEXT_READY:
            self.request_image()
        return self.state

    def request_text(self, prefs: UserPreferences) -> RecipeRequestState:
        """
        Fase 1 y 2: pide el markdown de la receta y lo deja visible.

        Raises:
            ValueError: Si las preferencias no traen ingredientes.
        """
        prefs.validate()

        self.state = RecipeRequestState(preferences=prefs, is_loading=True)
        self._set_phase(RecipePhase.PENDING)

        try:
            recipe = self.client.generate_text(build_recipe_prompt(prefs))
        except ApiError as e:
            logger.error(f"Error generando receta: {e}")
            self.state.is_loading = False
            self.state.error = RECIPE_ERROR
            self._set_phase(RecipePhase.FAILED)
            return self.state

        self.state.recipe = recipe
        self.state.fields = extract_recipe_fields(recipe)
        self.state.is_loading = False
        self._set_phase(RecipePhase.TEXT_READY)
        return self.state

    def image_title(self) -> str:
        """Título para la imagen: el extraído de la receta o uno sintético."""
        title = self.state.fields.title if self.state.fields else ""
        if title:
            return title
        ingredients = self.state.preferences.ingredients if self.state.preferences else ""
        return fallback_dish_title(ingredients)

    def request_image(self) -> RecipeRequestState:
        """
        Fase 3: pide la imagen del plato. Solo corre con el texto ya visible.
        """
        if self.state.phase != RecipePhase.TEXT_READY:
            logger.debug(f"Imagen no solicitada: fase actual {self.state.phase.value}")
            return self.state

        self.state.is_generating_image = True
        try:
            image = self.client.generate_image(build_image_prompt(self.image_title()))
        except ApiError as e:
            # La receta es el contenido principal: la imagen no publica error
            logger.error(f"Could not generate image: {e}")
            self.state.is_generating_image = False
            self._set_phase(RecipePhase.IMAGE_FAILED)
            return self.state

        self.state.image = image
        self.state.is_generating_image = False
        self._set_phase(RecipePhase.IMAGE_READY)
        return self.state

    def translate(self, language_name: str) -> Optional[str]:
        """
        Traduce la receta al idioma indicado, reemplazando cualquier
        traducción anterior. Sin receta no hace nada.
        """
        if not self.state.recipe:
            return None

        language = resolve_language(language_name)
        self.state.is_translating = True
        self.state.translation_error = ""
        try:
            translation = self.client.translate_text(self.state.recipe, language.name)
        except ApiError as e:
            logger.error(f"Error traduciendo receta a {language.name}: {e}")
            self.state.translation_error = TRANSLATION_ERROR
            return None
        finally:
            self.state.is_translating = False

        self.state.translated_recipe = translation
        self.state.translation_language = language.name
        return translation

    def reading_language(self) -> str:
        return reading_language(self.state.translated_recipe, self.state.translation_language)

    def translate_and_speak(self, language_name: str, reader: RecipeReader) -> Optional[SpeechUtterance]:
        """Traduce y, si la traducción llegó, la lee en voz alta en ese idioma."""
        translation = self.translate(language_name)
        if translation is None:
            return None
        return reader.speak(translation, self.state.translation_language)

    def speak(self, reader: RecipeReader) -> Optional[SpeechUtterance]:
        """Alterna la lectura de lo que está en pantalla (receta o traducción)."""
        if not self.state.content_to_display:
            return None
        return reader.toggle(self.state.content_to_display, self.reading_language())
