"""
Modelos de request/response para la API.

Estos modelos validan los requests HTTP antes de pasarlos al core y dan
forma serializable al estado de los orquestadores.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from chef_ai_core.catalog import (
    DEFAULT_DIETARY_PREFERENCE,
    DEFAULT_DIFFICULTY_LEVEL,
    DEFAULT_LANGUAGE,
    DEFAULT_MEAL_TYPE,
    DEFAULT_SPICE_LEVEL,
    combine_ingredients,
)
from chef_ai_core.domain_models import ChatMessage, RecipeFields, UserPreferences
from chef_ai_core.engine import RecipePhase, RecipeRequestState


class RecipeRequest(BaseModel):
    """
    Preferencias del formulario.

    `ingredients` es la lista final ya combinada (chips + "otros"), separada
    por comas. Se puede mandar en cambio `selected_ingredients` +
    `other_ingredients` y la API la combina.
    """

    meal_type: str = Field(default=DEFAULT_MEAL_TYPE, description="Tipo de comida")
    dietary_preference: str = Field(default=DEFAULT_DIETARY_PREFERENCE)
    ingredients: str = Field(default="", description='Ej: "Rice, Onion, Tomato"')
    selected_ingredients: List[str] = Field(default_factory=list)
    other_ingredients: str = Field(default="", description="Texto libre separado por comas")
    spice_level: str = Field(default=DEFAULT_SPICE_LEVEL)
    difficulty_level: str = Field(default=DEFAULT_DIFFICULTY_LEVEL)
    allergies: str = Field(default="")
    other_requests: str = Field(default="")
    generate_image: bool = Field(default=True, description="Pedir la imagen del plato en segundo plano")

    def to_preferences(self) -> UserPreferences:
        ingredients = self.ingredients.strip()
        if self.selected_ingredients or self.other_ingredients:
            ingredients = combine_ingredients(
                [*self.selected_ingredients, *[s.strip() for s in ingredients.split(",")]],
                self.other_ingredients,
            )
        return UserPreferences(
            meal_type=self.meal_type,
            dietary_preference=self.dietary_preference,
            ingredients=ingredients,
            spice_level=self.spice_level,
            difficulty_level=self.difficulty_level,
            allergies=self.allergies,
            other_requests=self.other_requests,
        )


class RecipeFieldsResponse(BaseModel):
    title: str
    time: Optional[str] = None
    calories: Optional[str] = None
    difficulty: Optional[str] = None
    healthy_tip: Optional[str] = None
    body: str

    @classmethod
    def from_fields(cls, fields: RecipeFields) -> "RecipeFieldsResponse":
        return cls(
            title=fields.title,
            time=fields.time,
            calories=fields.calories,
            difficulty=fields.difficulty,
            healthy_tip=fields.healthy_tip,
            body=fields.body,
        )


class RecipeResponse(BaseModel):
    """
    Estado de un pedido de receta.

    `phase` sigue el ciclo: pending → text_ready → image_ready | image_failed
    (o failed si no se obtuvo el texto).
    """

    recipe_id: str = Field(..., description="ID del pedido")
    phase: RecipePhase
    recipe: str = ""
    details: Optional[RecipeFieldsResponse] = Field(default=None, description="Campos extraídos del markdown")
    image_url: Optional[str] = Field(default=None, description="URL de la imagen si ya está lista")
    is_generating_image: bool = False
    translated_recipe: str = ""
    translation_language: str = ""
    is_translating: bool = False
    error: str = ""
    translation_error: str = ""

    @classmethod
    def from_state(cls, recipe_id: str, state: RecipeRequestState) -> "RecipeResponse":
        return cls(
            recipe_id=recipe_id,
            phase=state.phase,
            recipe=state.recipe,
            details=RecipeFieldsResponse.from_fields(state.fields) if state.fields else None,
            image_url=f"/api/v1/recipes/{recipe_id}/image" if state.image else None,
            is_generating_image=state.is_generating_image,
            translated_recipe=state.translated_recipe,
            translation_language=state.translation_language,
            is_translating=state.is_translating,
            error=state.error,
            translation_error=state.translation_error,
        )


class TranslateRequest(BaseModel):
    language: str = Field(default=DEFAULT_LANGUAGE.name, description="Nombre visible del idioma")


class SpeechScriptResponse(BaseModel):
    """Texto listo para el sintetizador del navegador y el idioma de la voz."""

    text: str
    lang: str = Field(..., description="Código de idioma para elegir la voz (ej: 'ta')")
    language: str


class ChatMessageResponse(BaseModel):
    id: int
    role: str
    text: str
    status: str

    @classmethod
    def from_message(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(id=message.id, role=message.role, text=message.text, status=message.status.value)


class ChatSessionResponse(BaseModel):
    session_id: str
    is_loading: bool = False
    messages: List[ChatMessageResponse] = Field(default_factory=list)


class ChatMessageRequest(BaseModel):
    message: str = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("El mensaje no puede estar vacío")
        return value

