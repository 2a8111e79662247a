"""httpx client for OpenAI-compatible chat-completions endpoints.

Used for both the personalized-insights gateway and the partner-insights
provider; each is one instance pointed at its own URL, key and model. No
retries are attempted: a failed call goes straight to the caller's fallback.
"""

from typing import Any

import httpx

from leadership_benchmark.core.insights import (
    LLMNotConfiguredError,
    LLMProviderError,
    LLMTransportError,
)
from leadership_benchmark.core.interfaces import ChatCompletion
from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

_DEFAULT_HTTP_TIMEOUT_SECONDS: float = 60.0


class ChatCompletionsGateway:
    """Async chat-completions client.

    Usage:
        gateway = ChatCompletionsGateway(url, api_key="...", model="gpt-4o-mini")
        completion = await gateway.complete(messages, max_tokens=500)
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        model: str,
        http_client: httpx.AsyncClient | None = None,
        http_timeout_seconds: float = _DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialise the gateway.

        Args:
            url: Full chat-completions URL.
            api_key: Bearer token; empty means not configured.
            model: Model identifier sent with every request.
            http_client: Shared client; a short-lived one is used per call if omitted.
            http_timeout_seconds: Transport-level timeout for short-lived clients.
        """
        self._url = url
        self._api_key = api_key
        self._model = model
        self._http_client = http_client
        self._http_timeout = http_timeout_seconds

    @property
    def model(self) -> str:
        """Model requested by this gateway."""
        return self._model

    async def complete(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        tools: list[dict[str, Any]] | None = None,
        tool_choice: dict[str, Any] | None = None,
        temperature: float | None = None,
    ) -> ChatCompletion:
        """Run one chat completion.

        Args:
            messages: Chat messages.
            max_tokens: Completion token budget.
            tools: Optional function definitions.
            tool_choice: Optional forced tool selection.
            temperature: Optional sampling temperature.

        Returns:
            ChatCompletion with the message content and first tool call.

        Raises:
            LLMNotConfiguredError: If no API key is configured.
            LLMTransportError: If the request fails before a response.
            LLMProviderError: If the provider returns an error status or a
                body without choices.
        """
        if not self._api_key:
            raise LLMNotConfiguredError(f"No API key configured for {self._url}")

        payload: dict[str, Any] = {"model": self._model, "messages": messages}
        # Tool-calling gateways take the newer token budget parameter
        if tools:
            payload["max_completion_tokens"] = max_tokens
            payload["tools"] = tools
        else:
            payload["max_tokens"] = max_tokens
        if tool_choice:
            payload["tool_choice"] = tool_choice
        if temperature is not None:
            payload["temperature"] = temperature

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                    response = await client.post(self._url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise LLMTransportError(f"{type(exc).__name__}: {exc}") from exc

        if response.status_code >= 400:
            logger.error(
                "LLM provider error",
                url=self._url,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise LLMProviderError(
                f"LLM provider error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise TypeError("response body is not an object")
            message = data["choices"][0]["message"]
            if not isinstance(message, dict):
                raise TypeError("choices[0].message is not an object")
            tool_arguments = _first_tool_arguments(message.get("tool_calls"))
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Malformed LLM response", url=self._url, error=str(exc))
            raise LLMProviderError("Malformed chat-completions response") from exc

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        content = message.get("content")
        logger.debug("LLM response received", model=data.get("model", self._model), usage=usage)

        return ChatCompletion(
            model=data.get("model") or self._model,
            content=content if isinstance(content, str) else None,
            tool_arguments=tool_arguments,
            usage=usage,
        )


def _first_tool_arguments(tool_calls: Any) -> str | None:
    """Arguments string of the first tool call, or None when there is none.

    Raises:
        TypeError: If the tool calls are present but not shaped as objects.
    """
    if not tool_calls:
        return None
    if not isinstance(tool_calls, list) or not isinstance(tool_calls[0], dict):
        raise TypeError("tool_calls must be a list of objects")
    function = tool_calls[0].get("function") or {}
    if not isinstance(function, dict):
        raise TypeError("tool_calls[0].function is not an object")
    arguments = function.get("arguments")
    if arguments is not None and not isinstance(arguments, str):
        raise TypeError("tool_calls[0].function.arguments is not a string")
    return arguments
