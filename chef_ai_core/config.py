# chef_ai_core/config.py
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

"""
chef_ai_core.config
===================

Gestión centralizada de configuración de la aplicación.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults están pensados para desarrollo local.
- Si falta la API key, el error se lanza donde se usa el cliente, no acá.
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()


@dataclass
class Settings:
    """
    Contenedor tipado de configuración global de la aplicación.

    Attributes
    ----------
    openai_api_key:
        API key de OpenAI. Debe estar presente para cualquier llamada al modelo.
    openai_model_text:
        Modelo de texto para recetas, traducciones y el chat.
    openai_model_image:
        Modelo de imágenes (generación de la foto del plato y edición).
    openai_model_tts:
        Modelo de síntesis de voz para el asistente de chat.
    openai_tts_voice:
        Voz usada por el modelo de síntesis.
    tts_sample_rate:
        Frecuencia de muestreo del PCM devuelto por el endpoint de voz.
        El formato `pcm` de OpenAI es 16-bit little-endian mono a 24 kHz.
    image_size:
        Tamaño pedido al generar la imagen del plato.
    output_dir:
        Directorio base donde el CLI escribe recetas e imágenes.
    """

    # OpenAI
    openai_api_key: str
    openai_model_text: str
    openai_model_image: str
    openai_model_tts: str
    openai_tts_voice: str

    # Audio
    tts_sample_rate: int = 24000
    tts_channels: int = 1

    # Imágenes
    image_size: str = "1536x1024"

    # I/O
    output_dir: str = "output"


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - OPENAI_API_KEY
    - OPENAI_MODEL_TEXT (default: "gpt-4.1-mini")
    - OPENAI_MODEL_IMAGE (default: "gpt-image-1")
    - OPENAI_MODEL_TTS (default: "gpt-4o-mini-tts")
    - OPENAI_TTS_VOICE (default: "coral")
    - TTS_SAMPLE_RATE (default: 24000)
    - IMAGE_SIZE (default: "1536x1024")
    - OUTPUT_DIR (default: "output")
    """
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model_text=os.getenv("OPENAI_MODEL_TEXT", "gpt-4.1-mini"),
        openai_model_image=os.getenv("OPENAI_MODEL_IMAGE", "gpt-image-1"),

        # Voz
        openai_model_tts=os.getenv("OPENAI_MODEL_TTS", "gpt-4o-mini-tts"),
        openai_tts_voice=os.getenv("OPENAI_TTS_VOICE", "coral"),
        tts_sample_rate=int(os.getenv("TTS_SAMPLE_RATE", "24000")),

        image_size=os.getenv("IMAGE_SIZE", "1536x1024"),
        output_dir=os.getenv("OUTPUT_DIR", "output"),
    )
