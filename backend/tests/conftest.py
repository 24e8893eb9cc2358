import importlib

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")
    monkeypatch.setenv("ENV", "dev")
    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")

    # reload modules so that module-level stores pick up the new data dir
    import app.api.notes
    import app.api.note_insights
    import app.api.auth
    import app.api.debug
    import app.main
    importlib.reload(app.api.notes)
    importlib.reload(app.api.note_insights)
    importlib.reload(app.api.auth)
    importlib.reload(app.api.debug)
    importlib.reload(app.main)

    return TestClient(app.main.app)


@pytest.fixture()
def create_note(client):
    def _create(user_id="userA", title="t", content="c"):
        r = client.post("/notes", headers={"X-User-Id": user_id}, json={"title": title, "content": content})
        assert r.status_code == 201
        return r.json()

    return _create


class FakeGenerator:
    def __init__(self, reply="안녕하세요!", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def fake_ai(client):
    import app.ai.client

    fake = FakeGenerator()
    client.app.dependency_overrides[app.ai.client.get_ai_provider] = lambda: (lambda: fake)
    yield fake
    client.app.dependency_overrides.clear()
