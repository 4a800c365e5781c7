"""
Endpoints del asistente de chat ("Cheffy").

- POST /api/v1/chat/sessions: abre una sesión con el saludo inicial
- GET  /api/v1/chat/sessions/{session_id}: historial visible
- POST /api/v1/chat/sessions/{session_id}/messages: envía un mensaje y
  devuelve la respuesta en streaming (NDJSON)
- POST /api/v1/chat/sessions/{session_id}/messages/{message_id}/speech:
  lee un mensaje en voz alta (WAV)
"""

import json
import logging
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from chef_ai_core.audio import synthesize_audio
from chef_ai_core.chat import ChatSession, ChatStream
from chef_ai_core.core.abstractions import ModelClient
from chef_ai_core.domain_models import ChatMessage
from chef_ai_core.llm_client import ApiError

from ..dependencies import SessionStore, get_chat_store, get_client
from ..models.requests import ChatMessageRequest, ChatMessageResponse, ChatSessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])

SPEECH_ERROR = "Sorry, I couldn't read that aloud."


def _session_response(session_id: str, session: ChatSession) -> ChatSessionResponse:
    return ChatSessionResponse(
        session_id=session_id,
        is_loading=session.is_loading,
        messages=[ChatMessageResponse.from_message(m) for m in session.messages],
    )


def _events(placeholder: ChatMessage, chunks: ChatStream) -> Iterator[str]:
    """
    Serializa el stream como NDJSON.

    Cada fragmento sale como `{"type": "chunk"}`; al final se manda el mensaje
    completo, que en caso de falla trae el texto de disculpa en lugar del parcial.
    """
    for chunk in chunks:
        yield json.dumps({"type": "chunk", "id": placeholder.id, "text": chunk}) + "\n"
    message = ChatMessageResponse.from_message(placeholder)
    yield json.dumps({"type": "message", "message": message.model_dump()}) + "\n"


@router.post("/sessions", response_model=ChatSessionResponse)
def create_session(
    client: ModelClient = Depends(get_client),
    store: SessionStore[ChatSession] = Depends(get_chat_store),
):
    session = ChatSession(client)
    session_id = store.add(session)
    return _session_response(session_id, session)


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
def get_session(
    session_id: str,
    store: SessionStore[ChatSession] = Depends(get_chat_store),
):
    return _session_response(session_id, store.get(session_id))


@router.post("/sessions/{session_id}/messages")
def send_message(
    session_id: str,
    request: ChatMessageRequest,
    store: SessionStore[ChatSession] = Depends(get_chat_store),
):
    """
    Envía un mensaje a Cheffy.

    Raises:
        409: Si la sesión todavía está respondiendo el mensaje anterior.
    """
    session = store.get(session_id)
    started = session.send_stream(request.message)
    if started is None:
        raise HTTPException(status_code=409, detail="La sesión ya está respondiendo otro mensaje")

    placeholder, chunks = started
    # Si el cliente corta antes del final, el stream se cierra y libera la sesión
    return StreamingResponse(
        _events(placeholder, chunks),
        media_type="application/x-ndjson",
        background=BackgroundTask(chunks.close),
    )


@router.post("/sessions/{session_id}/messages/{message_id}/speech")
def speak_message(
    session_id: str,
    message_id: int,
    client: ModelClient = Depends(get_client),
    store: SessionStore[ChatSession] = Depends(get_chat_store),
):
    """
    Sintetiza el texto de un mensaje y lo devuelve como WAV.

    Raises:
        404: Si el mensaje no existe o no tiene texto.
        502: Si la síntesis o la decodificación fallaron.
    """
    message = store.get(session_id).get_message(message_id)
    if message is None or not message.text.strip():
        raise HTTPException(status_code=404, detail=f"Mensaje {message_id} no encontrado")

    try:
        buffer = synthesize_audio(client, message.text)
    except (ApiError, ValueError) as e:
        logger.error(f"Error sintetizando mensaje {message_id}: {e}")
        raise HTTPException(status_code=502, detail=SPEECH_ERROR) from e

    return Response(content=buffer.to_wav_bytes(), media_type="audio/wav")
