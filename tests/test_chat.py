"""
Tests del asistente de chat.

Verifica que:
1) La respuesta se acumula en el orden de los fragmentos
2) Los mensajes se agregan antes de que llegue la respuesta
3) Una falla a mitad del stream reemplaza el parcial por la disculpa
4) No se aceptan envíos vacíos ni envíos concurrentes
5) Un stream abandonado (sin empezar o a mitad) libera la sesión
"""

import gc

from chef_ai_core.chat import CHAT_FAILURE_TEXT, ChatSession
from chef_ai_core.domain_models import MessageStatus
from chef_ai_core.prompts import CHAT_GREETING


def test_session_starts_with_greeting(client):
    session = ChatSession(client)

    assert len(session.messages) == 1
    greeting = session.messages[0]
    assert greeting.id == 0
    assert greeting.role == "model"
    assert greeting.text == CHAT_GREETING


def test_send_accumulates_chunks_in_order(client):
    session = ChatSession(client)

    reply = session.send("How do I make rasam?")

    assert reply.text == "Hello there!"
    assert reply.status == MessageStatus.COMPLETE
    assert [m.role for m in session.messages] == ["model", "user", "model"]
    assert [m.id for m in session.messages] == [0, 1, 2]
    assert session.messages[1].status == MessageStatus.SENT
    assert not session.is_loading


def test_messages_are_appended_before_response(client):
    session = ChatSession(client)

    placeholder, chunks = session.send_stream("Hi")

    assert session.is_loading
    assert session.messages[-1] is placeholder
    assert placeholder.text == ""
    assert placeholder.status == MessageStatus.SENT

    assert next(chunks) == "Hello"
    assert placeholder.text == "Hello"
    assert placeholder.status == MessageStatus.STREAMING

    assert list(chunks) == [" there", "!"]
    assert placeholder.text == "Hello there!"
    assert not session.is_loading


def test_failure_mid_stream_replaces_partial_text(client):
    client.fail_chat_after = 1
    session = ChatSession(client)

    reply = session.send("Hi")

    assert reply.text == CHAT_FAILURE_TEXT
    assert reply.status == MessageStatus.FAILED
    assert not session.is_loading


def test_failed_turn_is_not_sent_as_history(client):
    client.fail_chat_after = 0
    session = ChatSession(client)
    session.send("First question")

    client.fail_chat_after = None
    session.send("Second question")

    contents = [m["content"] for m in client.chat_requests[-1]]
    assert "First question" not in contents
    assert contents[-1] == "Second question"


def test_history_includes_previous_turns(client):
    session = ChatSession(client)
    session.send("First question")
    session.send("Second question")

    request = client.chat_requests[-1]
    assert request[0]["role"] == "system"
    assert [m["role"] for m in request[1:]] == ["user", "assistant", "user"]
    assert request[2]["content"] == "Hello there!"


def test_blank_and_concurrent_sends_are_ignored(client):
    session = ChatSession(client)

    assert session.send_stream("   ") is None
    assert len(session.messages) == 1

    started = session.send_stream("Hi")
    assert session.send_stream("Again") is None
    assert len(session.messages) == 3

    list(started[1])
    assert session.send_stream("Again") is not None


def test_get_message(client):
    session = ChatSession(client)
    reply = session.send("Hi")

    assert session.get_message(reply.id) is reply
    assert session.get_message(99) is None


def test_closing_unstarted_stream_frees_session(client):
    session = ChatSession(client)
    placeholder, chunks = session.send_stream("Hi")

    chunks.close()

    assert not session.is_loading
    assert placeholder.text == CHAT_FAILURE_TEXT
    assert placeholder.status == MessageStatus.FAILED
    assert client.chat_requests == []
    assert list(chunks) == []
    assert session.send("Again").text == "Hello there!"


def test_discarded_stream_frees_session(client):
    session = ChatSession(client)
    started = session.send_stream("Hi")

    del started
    gc.collect()

    assert not session.is_loading
    assert session.send_stream("Again") is not None


def test_closing_stream_midway_fails_message(client):
    session = ChatSession(client)
    placeholder, chunks = session.send_stream("First question")
    assert next(chunks) == "Hello"

    chunks.close()

    assert placeholder.text == CHAT_FAILURE_TEXT
    assert placeholder.status == MessageStatus.FAILED
    assert not session.is_loading

    session.send("Second question")
    contents = [m["content"] for m in client.chat_requests[-1]]
    assert "First question" not in contents


def test_closing_finished_stream_keeps_reply(client):
    session = ChatSession(client)
    placeholder, chunks = session.send_stream("Hi")
    list(chunks)

    chunks.close()

    assert placeholder.text == "Hello there!"
    assert placeholder.status == MessageStatus.COMPLETE
