import pytest
from fastapi.testclient import TestClient
from gitlore.api import app, limiter
from gitlore.config import Settings
from gitlore.dependencies import get_github_client, get_model_client, get_settings
from gitlore.schemas import Completion

# Disable rate limiting for all tests
limiter.enabled = False

EXTENSION_SECRET = "test-extension-secret"

class FakeModelClient:
    def __init__(self):
        self.content = ""
        self.error = None
        self.calls = []

    async def chat(self, messages, config):
        self.calls.append((messages, config))
        if self.error:
            raise self.error
        return Completion(content=self.content)

class FakeGitHubClient:
    def __init__(self):
        self.content = ""
        self.error = None
        self.calls = []

    def fetch_raw_file(self, owner, repo, path):
        self.calls.append((owner, repo, path))
        if self.error:
            raise self.error
        return self.content

@pytest.fixture(scope="module")
def client():
    return TestClient(app)

@pytest.fixture(autouse=True)
def test_settings():
    settings = Settings(EXTENSION_SECRET=EXTENSION_SECRET, GEMINI_API_KEY="FAKE_API_KEY")
    app.dependency_overrides[get_settings] = lambda: settings
    yield settings
    app.dependency_overrides.clear()

@pytest.fixture
def model_client():
    fake = FakeModelClient()
    app.dependency_overrides[get_model_client] = lambda: fake
    return fake

@pytest.fixture
def github_client():
    fake = FakeGitHubClient()
    app.dependency_overrides[get_github_client] = lambda: fake
    return fake

@pytest.fixture
def auth_headers():
    return {"x-gitlore-extension-key": EXTENSION_SECRET}
