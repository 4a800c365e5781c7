"""
Editor de imágenes: sube una foto y la edita con una instrucción en texto.

Es un flujo independiente del pedido de recetas; solo comparte el cliente
del modelo. Tiene su propio slot de error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .core.abstractions import ModelClient
from .llm_client import ApiError

logger = logging.getLogger(__name__)

ACCEPTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")

READ_ERROR = "Could not read the selected file. Please try another image."
EDIT_ERROR = "An unexpected error occurred while editing the image."


@dataclass
class UploadedImage:
    data: bytes
    mime_type: str
    filename: str = ""


class ImageEditorSession:
    def __init__(self, client: ModelClient) -> None:
        self.client = client
        self.original: Optional[UploadedImage] = None
        self.edited: Optional[bytes] = None
        self.is_loading = False
        self.error = ""

    def load(self, data: bytes, mime_type: str, filename: str = "") -> bool:
        """
        Carga la imagen a editar. Descarta cualquier resultado previo.

        Returns:
            True si la imagen se aceptó; False (con `error` seteado) si no.
        """
        self.error = ""
        self.edited = None
        if not data or mime_type not in ACCEPTED_MIME_TYPES:
            logger.warning(f"Archivo rechazado: {filename or 'sin nombre'} ({mime_type}, {len(data or b'')} bytes)")
            self.error = READ_ERROR
            return False
        self.original = UploadedImage(data=data, mime_type=mime_type, filename=filename)
        return True

    def edit(self, instruction: str) -> Optional[bytes]:
        """
        Aplica `instruction` a la imagen cargada.

        Sin imagen, con instrucción vacía o con una edición en curso no hace nada.
        """
        if self.original is None or not instruction.strip() or self.is_loading:
            return None

        self.is_loading = True
        self.error = ""
        self.edited = None
        try:
            self.edited = self.client.edit_image(
                self.original.data, self.original.mime_type, instruction
            )
        except ApiError as e:
            logger.error(f"Error editando imagen: {e}")
            self.error = str(e) or EDIT_ERROR
            return None
        finally:
            self.is_loading = False
        return self.edited

    def remove(self) -> None:
        self.original = None
        self.edited = None
        self.error = ""
