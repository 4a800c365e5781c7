"""
Endpoint del editor de imágenes.

Recibe una imagen (multipart) y una instrucción en texto, y devuelve la
imagen editada en PNG. Cada request usa su propia sesión del editor.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile

from chef_ai_core.core.abstractions import ModelClient
from chef_ai_core.image_editor import EDIT_ERROR, ImageEditorSession

from ..dependencies import get_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/image-edits", tags=["image-edits"])


@router.post("")
def edit_image(
    image: UploadFile = File(..., description="Imagen PNG, JPEG o WEBP"),
    instruction: str = Form(..., description='Ej: "Add a retro filter"'),
    client: ModelClient = Depends(get_client),
):
    """
    Edita una imagen con una instrucción.

    Raises:
        415: Si el archivo no es una imagen aceptada.
        422: Si la instrucción está vacía.
        502: Si el modelo no devolvió la imagen editada.
    """
    if not instruction.strip():
        raise HTTPException(status_code=422, detail="La instrucción no puede estar vacía")

    editor = ImageEditorSession(client)
    data = image.file.read()
    if not editor.load(data, image.content_type or "", image.filename or ""):
        raise HTTPException(status_code=415, detail=editor.error)

    edited = editor.edit(instruction)
    if edited is None:
        raise HTTPException(status_code=502, detail=editor.error or EDIT_ERROR)

    logger.info(f"Imagen editada: {image.filename} ({len(edited)} bytes)")
    return Response(content=edited, media_type="image/png")
