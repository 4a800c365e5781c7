from __future__ import annotations

import base64
import logging
from functools import lru_cache
from typing import Dict, Iterator, List

from openai import OpenAI, OpenAIError

from .config import get_settings
from .prompts import CHAT_SYSTEM_INSTRUCTION, build_translation_prompt

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Falla del modelo remoto (red, cuota, respuesta inválida)."""


def get_client() -> OpenAI:
    settings = get_settings()
    if not settings.openai_api_key:
        raise ApiError("OPENAI_API_KEY no está configurada en el .env")
    return OpenAI(api_key=settings.openai_api_key)


def _first_b64_image(response) -> bytes:
    for item in response.data or []:
        if getattr(item, "b64_json", None):
            return base64.b64decode(item.b64_json)
    raise ApiError("No image data found in the response.")


class OpenAIModelClient:
    """
    Implementación de `core.abstractions.ModelClient` sobre el SDK de OpenAI.

    Cada método traduce `OpenAIError` a `ApiError` con un mensaje apto para
    mostrar, y deja la causa original encadenada y logueada.
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_client()
        return self._client

    def _complete(self, messages: List[Dict[str, str]], temperature: float) -> str:
        settings = get_settings()
        completion = self.client.chat.completions.create(
            model=settings.openai_model_text,
            messages=messages,
            temperature=temperature,
        )
        return completion.choices[0].message.content or ""

    def generate_text(self, prompt: str) -> str:
        """
        Genera el markdown de una receta a partir del prompt ya armado.
        """
        try:
            return self._complete([{"role": "user", "content": prompt}], temperature=0.7)
        except OpenAIError as e:
            logger.error(f"Error generating recipe: {e}")
            raise ApiError("Failed to communicate with the AI model.") from e

    def generate_image(self, prompt: str) -> bytes:
        settings = get_settings()
        try:
            response = self.client.images.generate(
                model=settings.openai_model_image,
                prompt=prompt,
                size=settings.image_size,
                n=1,
            )
        except OpenAIError as e:
            logger.error(f"Error generating image: {e}")
            raise ApiError("Failed to generate recipe image.") from e
        return _first_b64_image(response)

    def translate_text(self, text: str, language: str) -> str:
        try:
            return self._complete(
                [{"role": "user", "content": build_translation_prompt(text, language)}],
                temperature=0.2,
            )
        except OpenAIError as e:
            logger.error(f"Error translating text: {e}")
            raise ApiError("Failed to communicate with the AI model for translation.") from e

    def stream_chat(self, messages: List[Dict[str, str]]) -> Iterator[str]:
        """
        Envía el historial del chat y devuelve los fragmentos de la respuesta
        a medida que llegan. Si `messages` no trae instrucción de sistema se
        antepone la del asistente.
        """
        settings = get_settings()
        if not messages or messages[0].get("role") != "system":
            messages = [{"role": "system", "content": CHAT_SYSTEM_INSTRUCTION}, *messages]

        try:
            stream = self.client.chat.completions.create(
                model=settings.openai_model_text,
                messages=messages,
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except OpenAIError as e:
            logger.error(f"Error streaming chat response: {e}")
            raise ApiError("Failed to communicate with the AI model.") from e

    def synthesize_speech(self, text: str) -> str:
        """
        Sintetiza voz en formato `pcm` (16-bit LE mono, 24 kHz) y la devuelve
        en base64.
        """
        settings = get_settings()
        try:
            response = self.client.audio.speech.create(
                model=settings.openai_model_tts,
                voice=settings.openai_tts_voice,
                input=text,
                response_format="pcm",
            )
        except OpenAIError as e:
            logger.error(f"Error generating speech: {e}")
            raise ApiError("Failed to generate speech.") from e

        data = response.content
        if not data:
            raise ApiError("No audio data found in the response.")
        return base64.b64encode(data).decode("ascii")

    def edit_image(self, image: bytes, mime_type: str, instruction: str) -> bytes:
        settings = get_settings()
        ext = mime_type.split("/")[-1] if "/" in mime_type else "png"
        try:
            response = self.client.images.edit(
                model=settings.openai_model_image,
                image=(f"upload.{ext}", image, mime_type),
                prompt=instruction,
            )
        except OpenAIError as e:
            logger.error(f"Error editing image: {e}")
            raise ApiError("Failed to edit the image. Please try again.") from e
        return _first_b64_image(response)


@lru_cache
def get_model_client() -> OpenAIModelClient:
    return OpenAIModelClient()
