import pytest

from adapters.credential_sources import (
    EnvCredentialProvider,
    HomeFileCredentialProvider,
    SecretsFileCredentialProvider,
    default_providers,
    resolve_credential,
)
from core.config import AppSettings, find_env_value
from core.domain.errors import MissingCredential
from core.interfaces.credentials import CredentialProvider
from core.providers import get_provider


@pytest.fixture
def profile():
    return get_provider("openrouter")


def _home_key(home, value):
    path = home / ".config" / "openrouter" / "api_key"
    path.parent.mkdir(parents=True)
    path.write_text(value)
    return path


def test_env_wins_over_secrets_file_and_home(workdir, home, monkeypatch, profile):
    (workdir / ".env.local").write_text("OPENROUTER_API_KEY=FROM_DOTENV\n")
    _home_key(home, "FROM_HOME")
    monkeypatch.setenv("OPENROUTER_API_KEY", "FROM_ENV")
    cred = resolve_credential(default_providers(profile, AppSettings()))
    assert cred.bearer() == "FROM_ENV"
    assert "OPENROUTER_API_KEY" in cred.source


def test_secrets_file_in_grandparent(workdir, home, profile):
    (workdir.parent.parent / ".env.local").write_text(
        "OTHER=1\nOPENROUTER_API_KEY_OLD=nope\nOPENROUTER_API_KEY=\"quoted'key\"\nOPENROUTER_API_KEY=second\n"
    )
    _home_key(home, "FROM_HOME")
    cred = resolve_credential(default_providers(profile, AppSettings()))
    assert cred.bearer() == "quotedkey"
    assert ".env.local" in cred.source


def test_secrets_file_not_searched_beyond_depth(workdir, home, profile):
    (workdir.parent.parent.parent / ".env.local").write_text("OPENROUTER_API_KEY=too_far\n")
    _home_key(home, "  FROM_HOME \n")
    cred = resolve_credential(default_providers(profile, AppSettings()))
    assert cred.bearer() == "FROM_HOME"


def test_empty_value_falls_through_to_next_file(workdir, profile):
    (workdir / ".env.local").write_text("OPENROUTER_API_KEY=''\n")
    (workdir.parent / ".env.local").write_text("OPENROUTER_API_KEY=parent\n")
    provider = SecretsFileCredentialProvider(profile.api_key_env)
    assert provider.fetch() == "parent"


def test_missing_everywhere_lists_all_sources(workdir, profile):
    with pytest.raises(MissingCredential) as exc:
        resolve_credential(default_providers(profile, AppSettings()))
    message = str(exc.value)
    assert "$OPENROUTER_API_KEY" in message
    assert ".env.local" in message
    assert "api_key" in message
    assert len(exc.value.sources) == 3


def test_first_success_wins_without_merging():
    calls = []

    class Stub:
        def __init__(self, name, value):
            self.name = name
            self.value = value

        def describe(self):
            return self.name

        def fetch(self):
            calls.append(self.name)
            return self.value

    cred = resolve_credential([Stub("a", ""), Stub("b", "B"), Stub("c", "C")])
    assert cred.bearer() == "B"
    assert cred.source == "b"
    assert calls == ["a", "b"]
    assert isinstance(Stub("x", None), CredentialProvider)


def test_token_is_masked_in_repr(monkeypatch):
    monkeypatch.setenv("SOME_KEY", "sk-secret")
    cred = resolve_credential([EnvCredentialProvider("SOME_KEY")])
    assert "sk-secret" not in repr(cred)
    assert "sk-secret" not in str(cred.model_dump())


def test_home_file_strips_all_whitespace(tmp_path):
    path = tmp_path / "api_key"
    path.write_text(" sk-abc\n")
    assert HomeFileCredentialProvider(path).fetch() == "sk-abc"
    assert HomeFileCredentialProvider(tmp_path / "missing").fetch() is None


def test_find_env_value_exact_key():
    text = "# comment\nKEY_2=no\n KEY=indented\nKEY=a=b\nKEY=later\n"
    assert find_env_value(text, "KEY") == "a=b"
    assert find_env_value(text, "MISSING") is None


def test_undecodable_home_file_is_skipped(workdir, home, profile):
    path = home / ".config" / "openrouter" / "api_key"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff\xfe")
    assert HomeFileCredentialProvider(path).fetch() is None
    with pytest.raises(MissingCredential):
        resolve_credential(default_providers(profile, AppSettings()))
