# tests/test_auth.py
from types import SimpleNamespace

import httpx
import pytest

from symptom_intake.auth import SupabaseIdentityProvider, _bearer_token, get_current_user_id
from symptom_intake.errors import AuthError

from conftest import ALICE, ALICE_TOKEN, FakeIdentityProvider


def _provider_with(get_user) -> SupabaseIdentityProvider:
    provider = SupabaseIdentityProvider.__new__(SupabaseIdentityProvider)
    provider.client = SimpleNamespace(auth=SimpleNamespace(get_user=get_user))
    return provider


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc", "abc"),
        ("bearer   abc  ", "abc"),
        ("Bearer ", None),
        ("Basic abc", None),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_bearer_token(header, expected):
    assert _bearer_token(header) == expected


def test_current_user_id():
    identity = FakeIdentityProvider({ALICE_TOKEN: ALICE})

    assert get_current_user_id(f"Bearer {ALICE_TOKEN}", identity) == ALICE
    with pytest.raises(AuthError):
        get_current_user_id("Bearer nope", identity)
    with pytest.raises(AuthError):
        get_current_user_id(None, identity)


def test_supabase_provider_returns_user_id():
    seen = []

    def get_user(token):
        seen.append(token)
        return SimpleNamespace(user=SimpleNamespace(id="uid-1"))

    assert _provider_with(get_user).get_user_id("jwt") == "uid-1"
    assert seen == ["jwt"]


def test_supabase_provider_without_user():
    assert _provider_with(lambda token: None).get_user_id("jwt") is None
    assert _provider_with(lambda token: SimpleNamespace(user=None)).get_user_id("jwt") is None


def test_supabase_provider_network_error():
    def get_user(token):
        raise httpx.ConnectError("connection refused")

    assert _provider_with(get_user).get_user_id("jwt") is None


def test_supabase_provider_requires_configuration(monkeypatch):
    from symptom_intake.config import get_settings

    monkeypatch.setattr(get_settings(), "supabase_url", None)

    with pytest.raises(RuntimeError):
        SupabaseIdentityProvider()
