import pytest

EXTENSION_ROUTES = [
    ("/api/extension/impact", {"codeSnippet": "print(1)"}, 401),
    ("/api/extension/narrate", {"fileContent": "print(1)", "filePath": "a.py"}, 401),
    ("/api/extension/risk", {"functionCode": "def f(): pass"}, 200),
    ("/api/extension/search", {"query": "what?", "context": "ctx"}, 401),
]

@pytest.mark.parametrize("path, payload, expected_status", EXTENSION_ROUTES)
@pytest.mark.parametrize("headers", [{}, {"x-gitlore-extension-key": "wrong"}, {"x-gitlore-extension-key": ""}])
def test_rejected_before_model_call(client, model_client, path, payload, expected_status, headers):
    model_client.content = '{"score": 1, "reason": "fine"}'

    response = client.post(path, json=payload, headers=headers)

    assert response.status_code == expected_status
    assert model_client.calls == []

def test_unconfigured_secret_rejects_everything(client, model_client, test_settings):
    test_settings.EXTENSION_SECRET = ""

    response = client.post(
        "/api/extension/impact",
        json={"codeSnippet": "x"},
        headers={"x-gitlore-extension-key": ""},
    )

    assert response.status_code == 401
    assert model_client.calls == []

def test_rejection_shapes(client, model_client):
    headers = {"x-gitlore-extension-key": "wrong"}

    impact = client.post("/api/extension/impact", json={"codeSnippet": "x"}, headers=headers)
    assert impact.status_code == 401
    assert impact.json() == {"error": "Unauthorized"}

    narrate = client.post("/api/extension/narrate", json={"fileContent": "x"}, headers=headers)
    assert narrate.status_code == 401
    assert narrate.json() == {"error": "Unauthorized"}

    risk = client.post("/api/extension/risk", json={"functionCode": "x"}, headers=headers)
    assert risk.status_code == 200
    assert risk.json() == {"score": 0, "reason": "Unauthorized access."}

    search = client.post("/api/extension/search", json={"query": "x"}, headers=headers)
    assert search.status_code == 401
    assert search.json() == {"answer": "Auth Failed"}
    assert search.headers["access-control-allow-origin"] == "*"

def test_gate_checked_before_body_validation(client, model_client):
    response = client.post(
        "/api/extension/impact",
        json={"codeSnippet": 42},
        headers={"x-gitlore-extension-key": "wrong"},
    )
    assert response.status_code == 401

def test_legacy_secret_variable(monkeypatch):
    from gitlore.config import Settings

    monkeypatch.delenv("EXTENSION_SECRET", raising=False)
    monkeypatch.setenv("GITLORE_EXTENSION_SECRET", "legacy")
    assert Settings().EXTENSION_SECRET == "legacy"
