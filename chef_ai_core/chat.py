"""
Sesión del asistente de chat ("Cheffy").

Cada envío agrega de inmediato el mensaje del usuario y un mensaje vacío del
modelo; los fragmentos de la respuesta se van agregando a ese mensaje en el
orden en que llegan. Si el stream falla a mitad de camino, el texto parcial
se reemplaza entero por un mensaje de disculpa.

Un stream que se cierra antes de terminar (ej: el cliente HTTP se desconectó)
cuenta como falla: la sesión queda libre para el próximo envío.

Estados por mensaje: composing → sent → streaming → complete | failed.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .core.abstractions import ModelClient
from .domain_models import ChatMessage, MessageStatus, Role
from .llm_client import ApiError
from .prompts import CHAT_GREETING, CHAT_SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

CHAT_FAILURE_TEXT = "Sorry, something went wrong. Please try again."


class ChatStream:
    """
    Fragmentos de una respuesta en curso.

    Aplica cada fragmento al placeholder a medida que se itera. `close()`
    sobre un stream sin terminar (empezado o no) lo da por fallido y libera la
    sesión; sobre uno ya terminado no hace nada.
    """

    def __init__(self, session: ChatSession, placeholder: ChatMessage, request: List[Dict[str, str]]) -> None:
        self.session = session
        self.placeholder = placeholder
        self._request = request
        self._chunks: Optional[Iterator[str]] = None
        self._in_next = False
        self.done = False

    def __iter__(self) -> ChatStream:
        return self

    def __next__(self) -> str:
        if self.done:
            raise StopIteration

        self._in_next = True
        try:
            if self._chunks is None:
                self.placeholder.status = MessageStatus.STREAMING
                self._chunks = iter(self.session.client.stream_chat(self._request))
            chunk = next(self._chunks)
        except StopIteration:
            self._complete()
            raise
        except ApiError as e:
            logger.error(f"Chat stream failed: {e}")
            self._fail()
            raise StopIteration from e
        finally:
            self._in_next = False

        # Cerrado desde otro hilo mientras se esperaba el fragmento
        if self.done:
            raise StopIteration
        self.placeholder.text += chunk
        return chunk

    def close(self) -> None:
        if self.done:
            return
        logger.warning(f"Chat stream cerrado antes de terminar (mensaje {self.placeholder.id})")
        self._fail()
        close = getattr(self._chunks, "close", None)
        if close is not None and not self._in_next:
            close()

    def __del__(self) -> None:
        self.close()

    def _complete(self) -> None:
        self.done = True
        self.placeholder.status = MessageStatus.COMPLETE
        self.session._history = [*self._request, {"role": "assistant", "content": self.placeholder.text}]
        self.session.is_loading = False

    def _fail(self) -> None:
        self.done = True
        self.placeholder.text = CHAT_FAILURE_TEXT
        self.placeholder.status = MessageStatus.FAILED
        self.session.is_loading = False


class ChatSession:
    def __init__(self, client: ModelClient, greeting: str = CHAT_GREETING) -> None:
        self.client = client
        self._ids = itertools.count()
        self.messages: List[ChatMessage] = [self._new_message("model", greeting)]
        self.is_loading = False
        self._history: List[Dict[str, str]] = [
            {"role": "system", "content": CHAT_SYSTEM_INSTRUCTION},
        ]

    def _new_message(self, role: Role, text: str = "", status: MessageStatus = MessageStatus.COMPLETE) -> ChatMessage:
        return ChatMessage(id=next(self._ids), role=role, text=text, status=status)

    def get_message(self, message_id: int) -> Optional[ChatMessage]:
        return next((m for m in self.messages if m.id == message_id), None)

    def send_stream(self, text: str) -> Optional[Tuple[ChatMessage, ChatStream]]:
        """
        Registra el envío y devuelve `(placeholder, stream)`.

        Los mensajes se agregan antes de devolver; la respuesta del modelo se
        aplica al placeholder a medida que se itera el stream. Con texto
        vacío o con un envío en curso no hace nada y devuelve `None`.
        """
        if not text.strip() or self.is_loading:
            return None

        user_message = self._new_message("user", text, MessageStatus.COMPOSING)
        self.messages.append(user_message)
        user_message.status = MessageStatus.SENT
        self.is_loading = True

        placeholder = self._new_message("model", "", MessageStatus.SENT)
        self.messages.append(placeholder)

        request = [*self._history, {"role": "user", "content": text}]
        return placeholder, ChatStream(self, placeholder, request)

    def send(self, text: str) -> Optional[ChatMessage]:
        """Envía `text`, consume la respuesta completa y devuelve el mensaje del modelo."""
        started = self.send_stream(text)
        if started is None:
            return None
        placeholder, chunks = started
        for _ in chunks:
            pass
        return placeholder
