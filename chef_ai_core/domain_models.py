"""
Modelos de dominio del asistente de cocina.

Todas las entidades viven en memoria y son de alcance de sesión:
no hay capa de persistencia.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

Role = Literal["user", "model"]


@dataclass
class UserPreferences:
    meal_type: str
    dietary_preference: str
    ingredients: str           # lista separada por comas, ej: "Rice, Onion, Tomato"
    spice_level: str
    difficulty_level: str
    allergies: str = ""
    other_requests: str = ""

    def validate(self) -> None:
        if not (self.ingredients or "").strip():
            raise ValueError("Se requiere al menos un ingrediente para pedir una receta")


@dataclass(frozen=True)
class Language:
    code: str   # subtag primario, ej: "ta"
    name: str


@dataclass(frozen=True)
class Ingredient:
    name: str
    tamil_name: str


@dataclass
class RecipeFields:
    """
    Campos visibles extraídos del markdown de una receta.

    Los campos opcionales quedan en `None` cuando el marcador no aparece;
    la ausencia es un caso normal, no un error.
    """
    title: str
    body: str
    time: Optional[str] = None
    calories: Optional[str] = None
    difficulty: Optional[str] = None
    healthy_tip: Optional[str] = None


class MessageStatus(str, Enum):
    COMPOSING = "composing"
    SENT = "sent"
    STREAMING = "streaming"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class ChatMessage:
    id: int
    role: Role
    text: str = ""
    status: MessageStatus = MessageStatus.COMPLETE
