import json

import httpx
import pytest

from adapters import completion_client

ISOLATED_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_BASE_URL",
    "ASK_DESIGNER_MODEL",
    "XDG_CONFIG_HOME",
    "FORCE_COLOR",
)


def chat_completion(content, model="test-model"):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": model,
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


class FakeEndpoint:
    """Records outgoing requests and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = chat_completion("Use #1E293B with Inter 16px.")

    def reply(self, content=None, *, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else chat_completion(content)

    def handler(self, request):
        self.requests.append(request)
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, text=str(self.payload))

    def client(self, **_kwargs):
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def calls(self):
        return len(self.requests)

    def last_body(self):
        return json.loads(self.requests[-1].content)

    def last_auth(self):
        return self.requests[-1].headers.get("Authorization")


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir


@pytest.fixture
def workdir(tmp_path, monkeypatch, home):
    """Isolated cwd with no provider env vars and default settings."""

    for name in ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ASK_DESIGNER_PROVIDER", "openrouter")
    monkeypatch.setenv("ASK_DESIGNER_RUNTIME_DIR", ".runtime")
    cwd = tmp_path / "project" / "app" / "web"
    cwd.mkdir(parents=True)
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def fake_endpoint():
    return FakeEndpoint()


@pytest.fixture
def endpoint(monkeypatch, fake_endpoint):
    fake = fake_endpoint
    monkeypatch.setattr(completion_client, "build_http_client", fake.client)
    return fake
