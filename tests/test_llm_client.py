# tests/test_llm_client.py
from types import SimpleNamespace

import httpx
import openai
import pytest

from symptom_intake.errors import UpstreamError
from symptom_intake.llm import OpenAILLMClient


def _install_create(client: OpenAILLMClient, create) -> None:
    client.client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )


def _completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def test_json_mode_requests_json_object():
    seen = {}

    def create(**kwargs):
        seen.update(kwargs)
        return _completion('{"ok": true}')

    llm = OpenAILLMClient()
    _install_create(llm, create)

    reply = llm.chat([{"role": "user", "content": "hi"}], temperature=0.7, json_mode=True)

    assert reply == '{"ok": true}'
    assert seen["response_format"] == {"type": "json_object"}
    assert seen["model"] == "gpt-4o-mini"
    assert seen["temperature"] == 0.7


def test_plain_mode_has_no_response_format():
    seen = {}

    def create(**kwargs):
        seen.update(kwargs)
        return _completion(None)

    llm = OpenAILLMClient(model="other-model")
    _install_create(llm, create)

    assert llm.chat([{"role": "user", "content": "hi"}]) == ""
    assert "response_format" not in seen
    assert seen["model"] == "other-model"


def test_connection_error_becomes_upstream_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

    def create(**kwargs):
        raise openai.APIConnectionError(request=request)

    llm = OpenAILLMClient()
    _install_create(llm, create)

    with pytest.raises(UpstreamError):
        llm.chat([{"role": "user", "content": "hi"}], json_mode=True)


def test_error_status_becomes_upstream_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(500, request=request, json={"error": {"message": "boom"}})

    def create(**kwargs):
        raise openai.InternalServerError("boom", response=response, body=None)

    llm = OpenAILLMClient()
    _install_create(llm, create)

    with pytest.raises(UpstreamError):
        llm.chat([{"role": "user", "content": "hi"}])


def test_missing_api_key(monkeypatch):
    from symptom_intake.config import get_settings

    monkeypatch.setattr(get_settings(), "openai_api_key", None)

    with pytest.raises(RuntimeError):
        OpenAILLMClient()


def test_empty_choices_become_upstream_error():
    llm = OpenAILLMClient()
    _install_create(llm, lambda **kwargs: SimpleNamespace(choices=[]))

    with pytest.raises(UpstreamError):
        llm.chat([{"role": "user", "content": "hi"}], json_mode=True)
