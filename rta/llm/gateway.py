"""
LLM Gateway — Wraps the Groq client with timeout, bounded retry, and token tracking.

Every transport failure is translated into one TransportError subclass so
callers can tell authentication, rate-limit, malformed-request and generic
service failures apart.
"""

from __future__ import annotations

import logging
import time

import groq
from groq import Groq

from rta.config import settings

logger = logging.getLogger("rta.llm")


class TransportError(Exception):
    """Base class for AI transport failures."""

    kind = "unknown"
    cause = "AI service request failed"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"{self.cause}: {detail}" if detail else self.cause)


class AuthenticationFailure(TransportError):
    kind = "authentication"
    cause = "Authentication with the AI service failed; check GROQ_API_KEY"


class RateLimited(TransportError):
    kind = "rate_limit"
    cause = "AI service rate limit reached; retry later"


class MalformedRequest(TransportError):
    kind = "bad_request"
    cause = "AI service rejected the request as malformed"


class ServiceFailure(TransportError):
    kind = "service"
    cause = "AI service unavailable or timed out"


def translate_error(error: Exception) -> TransportError:
    """Map a Groq SDK exception onto the transport error taxonomy."""
    if isinstance(error, TransportError):
        return error
    if isinstance(error, (groq.AuthenticationError, groq.PermissionDeniedError)):
        return AuthenticationFailure(str(error))
    if isinstance(error, groq.RateLimitError):
        return RateLimited(str(error))
    if isinstance(error, (groq.BadRequestError, groq.UnprocessableEntityError, groq.NotFoundError)):
        return MalformedRequest(str(error))
    if isinstance(error, groq.APITimeoutError):
        return ServiceFailure(f"request timed out after {settings.llm_timeout}s")
    return ServiceFailure(str(error))


class LLMGateway:
    """
    Groq chat-completions client wrapper with:
    - Bounded request timeout
    - Retry with exponential backoff on rate-limit responses only
    - Token usage tracking
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        client: Groq | None = None,
    ) -> None:
        self.api_key = settings.groq_api_key if api_key is None else api_key
        self.model = model or settings.rta_model
        self.timeout = settings.llm_timeout if timeout is None else timeout
        self.max_retries = max(0, settings.llm_max_retries)
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self.total_tokens_used = 0
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    @property
    def client(self) -> Groq:
        if self._client is None:
            if not self.api_key:
                raise AuthenticationFailure("no API key configured")
            # Retries are handled here so only rate limits are retried.
            self._client = Groq(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def complete(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        system: str | None = None,
    ) -> str:
        """
        Send one prompt and return the concatenated text of the reply.

        Raises:
            TransportError: on any failure, after retrying rate limits.
        """
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        client = self.client
        attempt = 0
        while True:
            try:
                response = client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature if temperature is None else temperature,
                    max_tokens=max_tokens or self.max_tokens,
                )
            except Exception as e:
                error = translate_error(e)
                if isinstance(error, RateLimited) and attempt < self.max_retries:
                    # Exponential backoff: 1s, 2s, 4s
                    delay = 2**attempt
                    logger.warning(
                        f"LLM rate limited (attempt {attempt + 1}/{self.max_retries + 1}), retrying in {delay}s"
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue
                logger.error(f"LLM request failed [{error.kind}]: {error}")
                raise error from e

            tokens = getattr(response.usage, "total_tokens", 0) if response.usage else 0
            self.total_tokens_used += tokens or 0
            return "".join(choice.message.content or "" for choice in response.choices)

    def get_tokens_used(self) -> int:
        """Get total tokens consumed across all calls."""
        return self.total_tokens_used

    def reset_token_counter(self) -> None:
        self.total_tokens_used = 0
