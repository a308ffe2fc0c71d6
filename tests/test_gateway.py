"""
Tests for LLM Gateway — error translation, rate-limit retry, token tracking.
"""

from types import SimpleNamespace

import groq
import httpx
import pytest

from rta.llm import gateway as gateway_module
from rta.llm.gateway import (
    AuthenticationFailure,
    LLMGateway,
    MalformedRequest,
    RateLimited,
    ServiceFailure,
    translate_error,
)

REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


def status_error(cls, status):
    return cls(f"HTTP {status}", response=httpx.Response(status, request=REQUEST), body=None)


def reply(text, tokens=42):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(total_tokens=tokens),
    )


def fake_client(outcomes):
    """Client whose create() walks through a list of replies or exceptions."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, calls


@pytest.fixture
def no_sleep(monkeypatch):
    delays = []
    monkeypatch.setattr(gateway_module.time, "sleep", delays.append)
    return delays


@pytest.mark.parametrize(
    "error, expected",
    [
        (status_error(groq.AuthenticationError, 401), AuthenticationFailure),
        (status_error(groq.PermissionDeniedError, 403), AuthenticationFailure),
        (status_error(groq.RateLimitError, 429), RateLimited),
        (status_error(groq.BadRequestError, 400), MalformedRequest),
        (status_error(groq.NotFoundError, 404), MalformedRequest),
        (status_error(groq.InternalServerError, 500), ServiceFailure),
        (groq.APITimeoutError(request=REQUEST), ServiceFailure),
        (groq.APIConnectionError(request=REQUEST), ServiceFailure),
    ],
)
def test_translate_error(error, expected):
    assert type(translate_error(error)) is expected


def test_timeout_message_names_the_limit():
    assert "timed out" in str(translate_error(groq.APITimeoutError(request=REQUEST)))


def test_complete_returns_text_and_tracks_tokens():
    client, calls = fake_client([reply("hello", tokens=10), reply("again", tokens=5)])
    gw = LLMGateway(api_key="test", model="llama-3.1-8b-instant", client=client)

    assert gw.complete("ping", system="be brief") == "hello"
    assert gw.complete("ping") == "again"
    assert gw.get_tokens_used() == 15
    assert calls[0]["model"] == "llama-3.1-8b-instant"
    assert calls[0]["messages"][0] == {"role": "system", "content": "be brief"}

    gw.reset_token_counter()
    assert gw.get_tokens_used() == 0


def test_rate_limit_is_retried_with_backoff(no_sleep):
    client, calls = fake_client([status_error(groq.RateLimitError, 429), reply("ok")])
    gw = LLMGateway(api_key="test", client=client)
    assert gw.complete("ping") == "ok"
    assert len(calls) == 2
    assert no_sleep == [1]


def test_rate_limit_gives_up_after_max_retries(no_sleep):
    client, calls = fake_client([status_error(groq.RateLimitError, 429)])
    gw = LLMGateway(api_key="test", client=client)
    gw.max_retries = 2
    with pytest.raises(RateLimited):
        gw.complete("ping")
    assert len(calls) == 3
    assert no_sleep == [1, 2]


def test_other_failures_are_not_retried(no_sleep):
    client, calls = fake_client([status_error(groq.AuthenticationError, 401)])
    gw = LLMGateway(api_key="test", client=client)
    with pytest.raises(AuthenticationFailure):
        gw.complete("ping")
    assert len(calls) == 1
    assert no_sleep == []


def test_missing_api_key_is_an_authentication_failure():
    gw = LLMGateway(api_key="")
    assert gw.configured is False
    with pytest.raises(AuthenticationFailure, match="no API key configured"):
        gw.complete("ping")
