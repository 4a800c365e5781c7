"""
Dependencias de FastAPI.

Este módulo proporciona:
- El cliente del modelo (sobreescribible en tests con `app.dependency_overrides`)
- Los almacenes en memoria de sesiones (pedidos de receta y chats)

No hay persistencia: todo vive en memoria y se pierde al reiniciar el proceso.
"""

import logging
import uuid
from typing import Dict, Generic, TypeVar

from fastapi import HTTPException

from chef_ai_core.chat import ChatSession
from chef_ai_core.core.abstractions import ModelClient
from chef_ai_core.engine import RecipeRequestPipeline
from chef_ai_core.llm_client import get_model_client

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionStore(Generic[T]):
    """Diccionario id → sesión con 404 automático para ids desconocidos."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._items: Dict[str, T] = {}

    def add(self, item: T) -> str:
        item_id = str(uuid.uuid4())
        self._items[item_id] = item
        logger.info(f"Nueva sesión {self.kind}: {item_id}")
        return item_id

    def get(self, item_id: str) -> T:
        item = self._items.get(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"{self.kind} {item_id} no encontrado")
        return item

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


recipe_store: SessionStore[RecipeRequestPipeline] = SessionStore("Pedido de receta")
chat_store: SessionStore[ChatSession] = SessionStore("Chat")


def get_client() -> ModelClient:
    """Dependencia de FastAPI para obtener el cliente del modelo."""
    return get_model_client()


def get_recipe_store() -> SessionStore[RecipeRequestPipeline]:
    return recipe_store


def get_chat_store() -> SessionStore[ChatSession]:
    return chat_store
