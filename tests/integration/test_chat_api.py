import json

import pytest

FRIED_RICE = (
    "Try Chicken Fried Rice!\n```json\n"
    '{"recipes":[{"title":"Chicken Fried Rice","servings":"2","difficulty":"Easy"}]}\n```'
)


def test_chat_returns_wrapped_response(client_with, fake_completer, data_env):
    client = client_with(fake_completer(FRIED_RICE))
    resp = client.post("/api/chat", json={"message": "I have chicken and rice, what can I make?", "history": []},
                       headers={"X-User-Id": "u1"})
    assert resp.status_code == 200
    body = resp.json()["response"]
    assert body["message"] == "Try Chicken Fried Rice!"
    assert body["detectedRecipes"] == ["Chicken Fried Rice"]
    assert "chicken" in body["detectedIngredients"]
    assert body["classification"] == "on_topic"
    assert body["userId"] == "u1"

    # detected names are stored after the response is sent
    stored = json.loads((data_env / "recipes.json").read_text(encoding="utf-8"))
    assert "chicken_fried_rice" in stored["detected"]


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": 42}, {"message": None}])
def test_chat_requires_a_message(client_with, fake_completer, payload):
    resp = client_with(fake_completer()).post("/api/chat", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}


def test_whitespace_message_is_passed_through(client_with, fake_completer):
    resp = client_with(fake_completer(FRIED_RICE)).post("/api/chat", json={"message": "   "})
    assert resp.status_code == 200
    assert "message" in resp.json()["response"]


def test_chat_without_credential(client_with):
    resp = client_with().post("/api/chat", json={"message": "How do I cook pasta?"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "API_KEY_REQUIRED"


def test_canned_intents_work_without_credential(client_with):
    resp = client_with().post("/api/chat", json={"message": "Who are you?"})
    assert resp.status_code == 200
    assert resp.json()["response"]["isIdentityResponse"] is True


def test_unexpected_failure_is_a_service_error(client_with, fake_completer):
    resp = client_with(fake_completer(error=RuntimeError("bug"))).post("/api/chat", json={"message": "pasta tips?"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "CHAT_SERVICE_ERROR"


def test_health(client_with):
    client = client_with()
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/readyz").json()["llm"] == "missing_credential"


def test_profile_round_trip(client_with):
    client = client_with()
    headers = {"X-User-Id": "u9"}
    assert client.get("/api/v1/profile", headers=headers).json()["isVegan"] is False

    resp = client.put("/api/v1/profile", json={"isVegan": True, "allergies": ["peanuts"]}, headers=headers)
    assert resp.status_code == 200
    body = client.get("/api/v1/profile", headers=headers).json()
    assert body["isVegan"] is True
    assert body["allergies"] == ["peanuts"]
    assert client.get("/api/v1/profile").json()["isVegan"] is False
