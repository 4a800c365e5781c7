"""
Tests de la API HTTP con un cliente del modelo falso.

El cliente real se reemplaza con `app.dependency_overrides`; las tareas en
segundo plano (imagen del plato) corren antes de que `TestClient` devuelva.
"""

import asyncio
import io
import json
import wave

import pytest
from fastapi.testclient import TestClient

from api.dependencies import SessionStore, chat_store, get_client, recipe_store
from api.main import app
from api.models.requests import ChatMessageRequest
from api.routes.chat import send_message
from chef_ai_core.chat import CHAT_FAILURE_TEXT, ChatSession
from chef_ai_core.engine import RECIPE_ERROR, TRANSLATION_ERROR
from chef_ai_core.prompts import CHAT_GREETING

from conftest import FAKE_PNG, FakeModelClient

TAMIL = "தமிழ் (Tamil)"


@pytest.fixture
def fake():
    return FakeModelClient()


@pytest.fixture
def api(fake):
    """TestClient con el cliente del modelo reemplazado."""
    app.dependency_overrides[get_client] = lambda: fake
    recipe_store.clear()
    chat_store.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_recipe(api, **overrides):
    payload = {"meal_type": "Lunch", "ingredients": "Rice, Onion, Tomato", **overrides}
    return api.post("/api/v1/recipes", json=payload)


def test_health(api):
    assert api.get("/").json()["service"] == "chef-ai-core-api"
    health = api.get("/health").json()
    assert health == {"status": "ok", "service": "chef-ai-core-api", "version": "0.1.0"}


def test_catalog(api):
    assert "spice_levels" in api.get("/api/v1/catalog").json()["domains"]

    options = api.get("/api/v1/catalog/meal_types").json()
    assert len(options) == 5
    assert options[0]["sort_order"] == 0

    assert api.get("/api/v1/catalog/unknown").status_code == 404

    languages = api.get("/api/v1/catalog/languages").json()
    assert languages[1] == {"code": "ta", "name": TAMIL}

    ingredients = api.get("/api/v1/catalog/ingredients", params={"q": "rice"}).json()
    assert [i["name"] for i in ingredients] == ["Rice"]


def test_create_recipe_text_then_image(api, fake):
    response = _create_recipe(api)

    assert response.status_code == 200
    body = response.json()
    assert body["phase"] == "text_ready"
    assert body["details"]["title"].startswith("Ragi Banana Pancake")
    assert body["details"]["time"] == "25 minutes"
    assert body["image_url"] is None
    assert len(fake.text_prompts) == 1

    recipe_id = body["recipe_id"]
    state = api.get(f"/api/v1/recipes/{recipe_id}").json()
    assert state["phase"] == "image_ready"
    assert state["image_url"] == f"/api/v1/recipes/{recipe_id}/image"

    image = api.get(state["image_url"])
    assert image.status_code == 200
    assert image.headers["content-type"] == "image/png"
    assert image.content == FAKE_PNG


def test_create_recipe_combines_selected_ingredients(api, fake):
    response = _create_recipe(api, ingredients="", selected_ingredients=["Rice", "Onion"], other_ingredients="Tomato")

    assert response.status_code == 200
    assert "Ingredients on hand: Rice, Onion, Tomato" in fake.text_prompts[0]


def test_image_failure_keeps_recipe(api, fake):
    fake.fail_image = True

    recipe_id = _create_recipe(api).json()["recipe_id"]

    state = api.get(f"/api/v1/recipes/{recipe_id}").json()
    assert state["phase"] == "image_failed"
    assert state["recipe"]
    assert state["error"] == ""
    assert api.get(f"/api/v1/recipes/{recipe_id}/image").status_code == 404


def test_create_recipe_without_image(api, fake):
    recipe_id = _create_recipe(api, generate_image=False).json()["recipe_id"]

    assert api.get(f"/api/v1/recipes/{recipe_id}").json()["phase"] == "text_ready"
    assert fake.image_prompts == []


def test_create_recipe_errors(api, fake):
    assert _create_recipe(api, ingredients="").status_code == 422

    fake.fail_text = True
    response = _create_recipe(api)
    assert response.status_code == 502
    assert response.json()["detail"] == RECIPE_ERROR
    assert fake.image_prompts == []


def test_unknown_recipe(api):
    assert api.get("/api/v1/recipes/does-not-exist").status_code == 404


def test_translate_and_speech_script(api, fake):
    recipe_id = _create_recipe(api, generate_image=False).json()["recipe_id"]

    speech = api.get(f"/api/v1/recipes/{recipe_id}/speech").json()
    assert speech["lang"] == "en"
    assert "**" not in speech["text"]

    response = api.post(f"/api/v1/recipes/{recipe_id}/translate", json={"language": TAMIL})
    assert response.status_code == 200
    assert response.json()["translation_language"] == TAMIL
    assert response.json()["translated_recipe"].startswith(f"[{TAMIL}]")

    speech = api.get(f"/api/v1/recipes/{recipe_id}/speech").json()
    assert speech == {"text": speech["text"], "lang": "ta", "language": TAMIL}
    assert speech["text"].startswith(f"[{TAMIL}]")


def test_translate_failure(api, fake):
    recipe_id = _create_recipe(api, generate_image=False).json()["recipe_id"]
    fake.fail_translation = True

    response = api.post(f"/api/v1/recipes/{recipe_id}/translate", json={"language": TAMIL})

    assert response.status_code == 502
    assert response.json()["detail"] == TRANSLATION_ERROR


def _stream_events(response):
    return [json.loads(line) for line in response.text.splitlines() if line.strip()]


def test_chat_session_and_stream(api, fake):
    session = api.post("/api/v1/chat/sessions").json()
    assert session["messages"][0]["text"] == CHAT_GREETING
    session_id = session["session_id"]

    response = api.post(f"/api/v1/chat/sessions/{session_id}/messages", json={"message": "How do I make rasam?"})

    assert response.status_code == 200
    events = _stream_events(response)
    assert [e["text"] for e in events if e["type"] == "chunk"] == ["Hello", " there", "!"]
    assert events[-1]["type"] == "message"
    assert events[-1]["message"]["text"] == "Hello there!"
    assert events[-1]["message"]["status"] == "complete"

    history = api.get(f"/api/v1/chat/sessions/{session_id}").json()
    assert [m["role"] for m in history["messages"]] == ["model", "user", "model"]
    assert not history["is_loading"]


def test_chat_stream_failure(api, fake):
    fake.fail_chat_after = 1
    session_id = api.post("/api/v1/chat/sessions").json()["session_id"]

    events = _stream_events(api.post(f"/api/v1/chat/sessions/{session_id}/messages", json={"message": "Hi"}))

    assert events[-1]["message"]["text"] == CHAT_FAILURE_TEXT
    assert events[-1]["message"]["status"] == "failed"


def test_chat_rejects_blank_message(api):
    session_id = api.post("/api/v1/chat/sessions").json()["session_id"]

    response = api.post(f"/api/v1/chat/sessions/{session_id}/messages", json={"message": "   "})

    assert response.status_code == 422


def test_chat_message_speech(api, fake):
    session_id = api.post("/api/v1/chat/sessions").json()["session_id"]

    response = api.post(f"/api/v1/chat/sessions/{session_id}/messages/0/speech")

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/wav"
    with wave.open(io.BytesIO(response.content), "rb") as wav:
        assert wav.getframerate() == 24000
        assert wav.getnframes() == 4
    assert fake.speech_texts == [CHAT_GREETING]

    assert api.post(f"/api/v1/chat/sessions/{session_id}/messages/42/speech").status_code == 404

    fake.fail_speech = True
    assert api.post(f"/api/v1/chat/sessions/{session_id}/messages/0/speech").status_code == 502


def test_image_edit(api, fake):
    response = api.post(
        "/api/v1/image-edits",
        files={"image": ("dish.png", FAKE_PNG, "image/png")},
        data={"instruction": "Add a retro filter"},
    )

    assert response.status_code == 200
    assert response.content == fake.edited
    assert fake.edits[0]["instruction"] == "Add a retro filter"


def test_image_edit_errors(api, fake):
    response = api.post(
        "/api/v1/image-edits",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        data={"instruction": "Add a retro filter"},
    )
    assert response.status_code == 415

    fake.fail_edit = True
    response = api.post(
        "/api/v1/image-edits",
        files={"image": ("dish.png", FAKE_PNG, "image/png")},
        data={"instruction": "Add a retro filter"},
    )
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to edit the image. Please try again."


def test_chat_stream_closed_when_client_goes_away(fake):
    store = SessionStore("Chat")
    session = ChatSession(fake)
    session_id = store.add(session)

    # La respuesta nunca se itera: el cliente cortó antes del primer fragmento
    response = send_message(session_id, ChatMessageRequest(message="Hi"), store=store)
    assert session.is_loading

    asyncio.run(response.background())

    assert not session.is_loading
    assert session.messages[-1].text == CHAT_FAILURE_TEXT
    assert session.send_stream("Again") is not None
