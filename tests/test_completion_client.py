import asyncio
import json

import httpx
import pytest

from scoping_core.completion import OpenAICompletionClient
from scoping_core.exceptions import CompletionError

from conftest import COMPLETION_RESPONSE

API_URL = "https://completion.example.com/v1/chat/completions"


def make_client(handler, api_key="sk-test", **kwargs):
    return OpenAICompletionClient(
        api_key=api_key,
        api_url=API_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_post_prompt_sends_payload_and_parses_completion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=COMPLETION_RESPONSE)

    client = make_client(handler, model_id="gpt-4", temperature=0.5)
    completion = asyncio.run(client.post_prompt("You are a consultant.", "Question: Q\nAnswer: A\n\n"))

    assert seen["url"] == API_URL
    assert seen["authorization"] == "Bearer sk-test"
    assert seen["body"] == {
        "model": "gpt-4",
        "temperature": 0.5,
        "messages": [
            {"role": "system", "content": "You are a consultant."},
            {"role": "user", "content": "Question: Q\nAnswer: A\n\n"},
        ],
    }
    assert completion.choices[0].message.content == "We recommend the Associate Track."
    assert completion.usage.total_tokens == 49


def test_error_status_raises_completion_error():
    client = make_client(lambda request: httpx.Response(429, text="rate limited"))
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))


def test_malformed_body_raises_completion_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))


def test_unexpected_shape_raises_completion_error():
    client = make_client(lambda request: httpx.Response(200, json={"choices": [{"message": "not an object"}]}))
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))


def test_transport_error_raises_completion_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))


def test_missing_api_key_fails_without_a_request():
    def handler(request):
        raise AssertionError("no request expected")

    client = make_client(handler, api_key=None)
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))


def test_undecodable_body_raises_completion_error():
    client = make_client(lambda request: httpx.Response(200, content=b'{"id": "\xff\xfe"}'))
    with pytest.raises(CompletionError):
        asyncio.run(client.post_prompt("context", "prompt"))
