"""Rutas de la API."""

from . import catalog, chat, image_edits, recipes

__all__ = ["catalog", "chat", "image_edits", "recipes"]
