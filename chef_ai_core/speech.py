"""
Lectura en voz alta de recetas con el sintetizador del navegador.

El texto de la receta (o de su traducción) se limpia de markdown y de los
íconos marcadores, los saltos de línea se convierten en pausas (". ") y se
elige una voz cuyo idioma coincida con el código del idioma destino. Si no
hay voz para ese idioma se deja que el navegador use la suya por defecto.

Solo puede sonar una locución a la vez: iniciar una nueva cancela la que
esté en curso (ver `playback.PlaybackChannel`).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .catalog import DEFAULT_LANGUAGE, resolve_language
from .core.abstractions import SpeechEngine, Voice
from .playback import PlaybackChannel
from .recipe_parser import SENTINEL_ICONS

logger = logging.getLogger(__name__)

INTERRUPTED = "interrupted"

_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_FORMATTING_RE = re.compile(
    r"(\*\*|__|#+\s|`|---|"
    + "|".join(re.escape(icon) for icon in SENTINEL_ICONS)
    + "|\ufe0f)"
)
_NEWLINES_RE = re.compile(r"(?:\r\n|\n|\r)+")


def clean_text_for_speech(markdown: str) -> str:
    """
    Prepara markdown para el sintetizador.

    - Los links quedan solo con su texto visible.
    - Se quitan negritas, encabezados, backticks, separadores e íconos.
    - Cada salto de línea (o grupo de saltos) pasa a ser ". " para forzar una pausa.
    """
    text = _LINK_RE.sub(r"\1", markdown or "")
    text = _FORMATTING_RE.sub("", text)
    text = _NEWLINES_RE.sub(". ", text.strip())
    return text


def select_voice(voices: Sequence[Voice], code: str) -> Optional[Voice]:
    """Primera voz cuyo `lang` empieza con el código de idioma (ej: "ta" → "ta-IN")."""
    prefix = code.lower()
    for voice in voices:
        if (voice.lang or "").lower().startswith(prefix):
            return voice
    return None


def reading_language(translated_text: str, selected_language: str) -> str:
    """
    Idioma en que se lee lo que está en pantalla: el de la traducción si hay
    una visible, o el idioma por defecto si se muestra la receta original.
    """
    return selected_language if translated_text else DEFAULT_LANGUAGE.name


@dataclass
class SpeechUtterance:
    text: str
    lang: str
    voice: Optional[Voice] = None
    on_end: Optional[Callable[[], None]] = None
    on_error: Optional[Callable[[str], None]] = None


class _ActiveUtterance:
    """Dueño del canal mientras una locución está sonando."""

    def __init__(self, engine: SpeechEngine, utterance: SpeechUtterance) -> None:
        self.engine = engine
        self.utterance = utterance

    def stop(self) -> None:
        self.engine.cancel()


class RecipeReader:
    """
    Orquesta el sintetizador para la vista de receta.

    Args:
        engine: Motor de síntesis (el `speechSynthesis` del navegador o un fake).
        channel: Canal exclusivo compartido con otros productores de audio de
            la misma superficie. Si no se pasa, se crea uno propio.
        alert: Callback para el aviso visible al usuario ante errores.
    """

    def __init__(
        self,
        engine: SpeechEngine,
        channel: Optional[PlaybackChannel] = None,
        alert: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.engine = engine
        self.channel = channel or PlaybackChannel("recipe")
        self.alert = alert or (lambda message: None)
        self.voices: List[Voice] = []
        self._active: Optional[_ActiveUtterance] = None
        self.refresh_voices()

    @property
    def is_speaking(self) -> bool:
        return self._active is not None and self.channel.current is self._active

    def refresh_voices(self) -> None:
        """
        Relee la lista de voces. Las voces pueden llegar tarde (evento
        `voiceschanged`): una lista vacía nunca pisa una ya cargada.
        """
        voices = list(self.engine.get_voices())
        if voices:
            self.voices = voices

    def speak(self, text: str, language_name: Optional[str] = None) -> SpeechUtterance:
        language = resolve_language(language_name)
        utterance = SpeechUtterance(text=clean_text_for_speech(text), lang=language.code)

        voice = select_voice(self.voices, language.code)
        if voice is not None:
            utterance.voice = voice
            utterance.lang = voice.lang
        else:
            logger.warning(f'No voice found for language code "{language.code}". Using browser default.')

        active = _ActiveUtterance(self.engine, utterance)
        utterance.on_end = lambda: self._finished(active)
        utterance.on_error = lambda code: self._failed(active, language.name, code)

        self.channel.acquire(active)
        if self.engine.speaking:
            self.engine.cancel()
        self._active = active
        self.engine.speak(utterance)
        return utterance

    def stop(self) -> None:
        if self.is_speaking:
            self.channel.stop()
        self._active = None

    def toggle(self, text: str, language_name: Optional[str] = None) -> Optional[SpeechUtterance]:
        """Si está leyendo, corta; si no, empieza a leer `text`."""
        if self.is_speaking:
            self.stop()
            return None
        return self.speak(text, language_name)

    def _finished(self, active: _ActiveUtterance) -> None:
        self.channel.release(active)
        if self._active is active:
            self._active = None

    def _failed(self, active: _ActiveUtterance, language_name: str, code: str) -> None:
        if code == INTERRUPTED:
            logger.warning("Speech synthesis was interrupted.")
        else:
            logger.error(f"Speech synthesis error: {code}")
            self.alert(
                "Sorry, I couldn't read the recipe aloud. Your browser may not support "
                f"the selected language ({language_name}).\nError: {code}"
            )
        self._finished(active)
