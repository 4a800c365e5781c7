"""
Decodificación y reproducción del audio generado por el servidor.

El endpoint de voz devuelve PCM crudo codificado en base64: muestras de
16 bits con signo, little-endian, mono, a una frecuencia fija (24 kHz). El
flujo es:

    base64 → bytes → int16 LE → float32 en [-1, 1] → AudioBuffer

El `ChatSpeaker` usa ese buffer para leer mensajes del asistente de a uno:
iniciar la lectura de otro mensaje detiene (stop + disconnect) el buffer que
esté sonando, y volver a pedir el mismo mensaje corta la lectura.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import wave
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .config import get_settings
from .core.abstractions import AudioOutput, ModelClient, PlaybackHandle
from .playback import PlaybackChannel

logger = logging.getLogger(__name__)

PCM_SCALE = 32768.0


@dataclass
class AudioBuffer:
    """
    Buffer reproducible. `samples` tiene forma (canales, frames) en float32.
    """

    samples: np.ndarray
    sample_rate: int

    @property
    def channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frames(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.frames / float(self.sample_rate) if self.sample_rate else 0.0

    def channel_data(self, channel: int) -> np.ndarray:
        return self.samples[channel]

    def to_wav_bytes(self) -> bytes:
        """Re-codifica el buffer como WAV PCM 16-bit (para entregarlo por HTTP)."""
        ints = np.clip(np.round(self.samples.T * PCM_SCALE), -32768, 32767).astype("<i2")
        out = io.BytesIO()
        with wave.open(out, "wb") as wav:
            wav.setnchannels(self.channels)
            wav.setsampwidth(2)
            wav.setframerate(self.sample_rate)
            wav.writeframes(ints.tobytes())
        return out.getvalue()


def decode_base64(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Audio base64 inválido: {e}") from e


def decode_pcm16(data: bytes, sample_rate: int, channels: int = 1) -> AudioBuffer:
    """
    Interpreta `data` como PCM 16-bit little-endian intercalado por canal.

    Un byte final impar (muestra incompleta) se descarta, igual que los
    frames incompletos cuando hay más de un canal.
    """
    if channels < 1:
        raise ValueError("channels debe ser >= 1")

    usable = len(data) - (len(data) % 2)
    ints = np.frombuffer(data[:usable], dtype="<i2")
    frames = len(ints) // channels
    ints = ints[: frames * channels]

    samples = (ints.astype(np.float32) / PCM_SCALE).reshape(frames, channels).T.copy()
    return AudioBuffer(samples=samples, sample_rate=sample_rate)


def decode_audio(
    base64_pcm: str,
    sample_rate: Optional[int] = None,
    channels: Optional[int] = None,
) -> AudioBuffer:
    settings = get_settings()
    return decode_pcm16(
        decode_base64(base64_pcm),
        sample_rate or settings.tts_sample_rate,
        channels or settings.tts_channels,
    )


def synthesize_audio(client: ModelClient, text: str) -> AudioBuffer:
    """Pide la voz al modelo y devuelve el buffer ya decodificado."""
    return decode_audio(client.synthesize_speech(text))


class _ActiveBuffer:
    """Dueño del canal mientras un buffer está sonando."""

    def __init__(self, message_id: int) -> None:
        self.message_id = message_id
        self.handle: Optional[PlaybackHandle] = None

    def stop(self) -> None:
        handle, self.handle = self.handle, None
        if handle is not None:
            handle.stop()
            handle.disconnect()


class ChatSpeaker:
    """
    Lectura en voz alta de mensajes del asistente de chat.

    `speaking_message_id` indica qué mensaje está sonando (o `None`).
    """

    def __init__(
        self,
        client: ModelClient,
        output: AudioOutput,
        channel: Optional[PlaybackChannel] = None,
        alert: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client
        self.output = output
        self.channel = channel or PlaybackChannel("chat")
        self.alert = alert or (lambda message: None)
        self.speaking_message_id: Optional[int] = None
        self._active: Optional[_ActiveBuffer] = None

    def speak(self, message_id: int, text: str) -> Optional[AudioBuffer]:
        if self.speaking_message_id == message_id:
            self.stop()
            return None
        self.stop()

        self.speaking_message_id = message_id
        active = _ActiveBuffer(message_id)
        try:
            buffer = synthesize_audio(self.client, text)
            self.channel.acquire(active)
            self._active = active
            active.handle = self.output.play(buffer, lambda: self._ended(active))
        except (RuntimeError, ValueError) as e:
            logger.error(f"Speech generation failed: {e}")
            self.channel.release(active)
            self._active = None
            self.speaking_message_id = None
            self.alert("Sorry, I couldn't read that aloud.")
            return None
        return buffer

    def stop(self) -> None:
        if self._active is not None and self.channel.current is self._active:
            self.channel.stop()
        self._active = None
        self.speaking_message_id = None

    def _ended(self, active: _ActiveBuffer) -> None:
        # Un buffer detenido también dispara "ended", incluso si otro productor
        # tomó el canal: limpia si sigue siendo el buffer de este speaker
        self.channel.release(active)
        if self._active is active:
            self._active = None
            self.speaking_message_id = None
