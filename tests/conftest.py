"""
Fakes compartidos por los tests.

Ninguno hace llamadas de red: reemplazan al modelo, al sintetizador del
navegador y a la salida de audio.
"""

import base64
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np
import pytest

from chef_ai_core.llm_client import ApiError

RECIPE_MD = (
    "**Ragi Banana Pancake (மரக்கழி வாழைப்பழ அடை)**\n"
    "A soft, naturally sweet pancake.\n"
    "**🕒 Estimated Time:** 25 minutes\n"
    "**🔥 Estimated Calories:** 180 kcal per serving\n"
    "**💪 Difficulty Level:** Easy\n"
    "### Ingredients\n"
    "- 1 cup ragi flour\n"
    "- 1 ripe banana\n"
    "### Instructions\n"
    "1. Mix everything.\n"
    "2. Cook on a hot tawa.\n"
    "**\u2764\ufe0f Healthy Tip:** Jaggery keeps the glycemic load lower than sugar.\n"
)

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake-image"

PCM_SAMPLES = [0, 16384, -32768, 32767]


def pcm_base64(samples=PCM_SAMPLES) -> str:
    return base64.b64encode(np.array(samples, dtype="<i2").tobytes()).decode("ascii")


class FakeModelClient:
    """
    Implementación en memoria de `ModelClient`.

    Cada operación se puede hacer fallar con los flags `fail_*`; las llamadas
    quedan registradas para verificar cuántas veces y con qué se llamó.
    """

    def __init__(
        self,
        recipe: str = RECIPE_MD,
        chunks: Optional[List[str]] = None,
        translation: str = "**ராகி வாழைப்பழ அடை**\nமென்மையான அடை.",
    ) -> None:
        self.recipe = recipe
        self.chunks = chunks if chunks is not None else ["Hello", " there", "!"]
        self.translation = translation
        self.image = FAKE_PNG
        self.edited = b"\x89PNG\r\n\x1a\nedited"

        self.fail_text = False
        self.fail_image = False
        self.fail_translation = False
        self.fail_chat_after: Optional[int] = None
        self.fail_speech = False
        self.fail_edit = False

        self.text_prompts: List[str] = []
        self.image_prompts: List[str] = []
        self.translations: List[Dict[str, str]] = []
        self.chat_requests: List[List[Dict[str, str]]] = []
        self.speech_texts: List[str] = []
        self.edits: List[Dict[str, object]] = []

    def generate_text(self, prompt: str) -> str:
        self.text_prompts.append(prompt)
        if self.fail_text:
            raise ApiError("Failed to communicate with the AI model.")
        return self.recipe

    def generate_image(self, prompt: str) -> bytes:
        self.image_prompts.append(prompt)
        if self.fail_image:
            raise ApiError("Failed to generate recipe image.")
        return self.image

    def translate_text(self, text: str, language: str) -> str:
        self.translations.append({"text": text, "language": language})
        if self.fail_translation:
            raise ApiError("Failed to communicate with the AI model for translation.")
        return f"[{language}] {self.translation}"

    def stream_chat(self, messages):
        self.chat_requests.append([dict(m) for m in messages])
        for i, chunk in enumerate(self.chunks):
            if self.fail_chat_after is not None and i >= self.fail_chat_after:
                raise ApiError("Failed to communicate with the AI model.")
            yield chunk
        if self.fail_chat_after is not None and self.fail_chat_after >= len(self.chunks):
            raise ApiError("Failed to communicate with the AI model.")

    def synthesize_speech(self, text: str) -> str:
        self.speech_texts.append(text)
        if self.fail_speech:
            raise ApiError("Failed to generate speech.")
        return pcm_base64()

    def edit_image(self, image: bytes, mime_type: str, instruction: str) -> bytes:
        self.edits.append({"image": image, "mime_type": mime_type, "instruction": instruction})
        if self.fail_edit:
            raise ApiError("Failed to edit the image. Please try again.")
        return self.edited


@dataclass
class FakeVoice:
    name: str
    lang: str


class FakeSpeechEngine:
    """
    Se comporta como `window.speechSynthesis`: `cancel()` sobre una locución
    en curso dispara su `on_error("interrupted")`.
    """

    def __init__(self, voices: Optional[List[FakeVoice]] = None) -> None:
        self.voices = list(voices or [])
        self.current = None
        self.spoken = []
        self.cancel_calls = 0

    @property
    def speaking(self) -> bool:
        return self.current is not None

    def get_voices(self):
        return list(self.voices)

    def speak(self, utterance) -> None:
        self.spoken.append(utterance)
        self.current = utterance

    def cancel(self) -> None:
        self.cancel_calls += 1
        utterance, self.current = self.current, None
        if utterance is not None and utterance.on_error:
            utterance.on_error("interrupted")

    def finish(self) -> None:
        utterance, self.current = self.current, None
        if utterance is not None and utterance.on_end:
            utterance.on_end()

    def fail(self, code: str) -> None:
        utterance, self.current = self.current, None
        if utterance is not None and utterance.on_error:
            utterance.on_error(code)


class FakeHandle:
    """Como `AudioBufferSourceNode`: detenerlo también dispara "ended"."""

    def __init__(self, buffer, on_ended: Callable[[], None]) -> None:
        self.buffer = buffer
        self.on_ended = on_ended
        self.stopped = False
        self.disconnected = False
        self.ended = False

    def _end(self) -> None:
        if not self.ended:
            self.ended = True
            self.on_ended()

    def stop(self) -> None:
        self.stopped = True
        self._end()

    def disconnect(self) -> None:
        self.disconnected = True

    def finish(self) -> None:
        self._end()


class FakeAudioOutput:
    def __init__(self) -> None:
        self.handles: List[FakeHandle] = []

    def play(self, buffer, on_ended):
        handle = FakeHandle(buffer, on_ended)
        self.handles.append(handle)
        return handle


@pytest.fixture
def client():
    """Cliente del modelo en memoria."""
    return FakeModelClient()


@pytest.fixture
def engine():
    """Sintetizador con voces en inglés y tamil."""
    return FakeSpeechEngine([FakeVoice("Google US English", "en-US"), FakeVoice("Google தமிழ்", "ta-IN")])


@pytest.fixture
def alerts():
    """Lista donde se acumulan los avisos visibles al usuario."""
    return []
