"""
Abstracciones (Protocols) de los colaboradores externos del core.

El core no habla directo con el navegador ni con el SDK del modelo: depende
de estas interfaces. En producción se implementan con OpenAI (ver
`llm_client.OpenAIModelClient`) y con el navegador del lado del front; en los
tests se reemplazan por fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Protocol

if TYPE_CHECKING:
    from ..audio import AudioBuffer


class ModelClient(Protocol):
    """
    Capacidades del modelo generativo que consume la aplicación.

    Todas las operaciones fallan con `llm_client.ApiError`.
    """

    def generate_text(self, prompt: str) -> str:
        ...

    def generate_image(self, prompt: str) -> bytes:
        """Devuelve los bytes de la imagen (PNG)."""
        ...

    def translate_text(self, text: str, language: str) -> str:
        ...

    def stream_chat(self, messages: List[Dict[str, str]]) -> Iterator[str]:
        """
        Secuencia perezosa y finita de fragmentos de texto.

        No se puede reiniciar y puede fallar a mitad de camino.
        """
        ...

    def synthesize_speech(self, text: str) -> str:
        """Devuelve PCM 16-bit mono codificado en base64."""
        ...

    def edit_image(self, image: bytes, mime_type: str, instruction: str) -> bytes:
        ...


class Voice(Protocol):
    """Voz disponible en el motor de síntesis (equivale a `SpeechSynthesisVoice`)."""

    name: str
    lang: str


class Utterance(Protocol):
    text: str
    lang: str
    voice: Optional[Voice]
    on_end: Optional[Callable[[], None]]
    on_error: Optional[Callable[[str], None]]


class SpeechEngine(Protocol):
    """
    Motor de síntesis de voz (equivale a `window.speechSynthesis`).

    El motor invoca `utterance.on_end()` al terminar y
    `utterance.on_error(code)` ante un error; `cancel()` sobre una locución
    en curso produce un error "interrupted".
    """

    @property
    def speaking(self) -> bool:
        ...

    def get_voices(self) -> List[Voice]:
        ...

    def speak(self, utterance: Any) -> None:
        ...

    def cancel(self) -> None:
        ...


class PlaybackHandle(Protocol):
    """Buffer en reproducción (equivale a `AudioBufferSourceNode`)."""

    def stop(self) -> None:
        ...

    def disconnect(self) -> None:
        ...


class AudioOutput(Protocol):
    """Salida de audio capaz de reproducir un `AudioBuffer` decodificado."""

    def play(self, buffer: AudioBuffer, on_ended: Callable[[], None]) -> PlaybackHandle:
        ...
