import logging
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from app import create_app
from scoping_core.completion import BaseCompletionClient
from scoping_core.config import Settings
from scoping_core.datastore.memory.service import create_memory_datastore
from scoping_core.entities import ChatCompletion
from scoping_core.exceptions import CompletionError

COMPLETION_RESPONSE = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "gpt-4",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "We recommend the Associate Track."},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 42, "completion_tokens": 7, "total_tokens": 49},
}


class FakeCompletionClient(BaseCompletionClient):
    """Scripted completion client: fails the first `failures` calls, then succeeds."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls: List[Tuple[str, str]] = []

    async def post_prompt(self, context: str, prompt: str) -> ChatCompletion:
        self.calls.append((context, prompt))
        if len(self.calls) <= self.failures:
            raise CompletionError("completion endpoint unavailable")
        return ChatCompletion.model_validate(COMPLETION_RESPONSE)


class StaticTokenVerifier:
    def __init__(self, valid_token: str = "valid-token"):
        self.valid_token = valid_token

    def verify(self, token: str) -> bool:
        return token == self.valid_token


@pytest.fixture
def logger():
    return logging.getLogger("scoping.tests")


@pytest.fixture
def settings():
    return Settings(
        project_id="test-project",
        datastore="memory",
        completion_workers=1,
        retry_attempts=3,
        retry_wait_min=0,
        retry_wait_max=0,
    )


@pytest.fixture
def datastore():
    return create_memory_datastore()


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def app(settings, datastore, completion_client):
    return create_app(
        settings,
        datastore=datastore,
        completion_client=completion_client,
        token_verifier=StaticTokenVerifier(),
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def drain(app, client):
    """Block until the completion worker has processed every queued job."""
    def _drain():
        client.portal.call(app.state.completion_worker.join)
    return _drain


def answer_payload(question: str, answer: str, category: str = "Experience") -> dict:
    return {
        "answer": {
            "technology_name": "AWS",
            "question": {"category": category, "text": question},
            "answer": answer,
        }
    }
