# tests/test_gateway.py
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from icoder.core.config import Settings
from icoder.core.prompt import GATEWAY_ERROR_MESSAGE
from icoder.services.gateway import AgentGateway
from icoder.services.llm_client import LLMClient

POST = "icoder.services.llm_client.http_requests.post"


def fake_response(body):
    resp = MagicMock()
    resp.json.return_value = body
    resp.raise_for_status.return_value = None
    return resp


def mistral_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_mistral_payload_and_content():
    settings = Settings(llm_api_key="secret", llm_max_tokens=100, llm_temperature=0.3)
    with patch(POST, return_value=fake_response(mistral_body("hello"))) as post:
        assert LLMClient(settings).complete([{"role": "user", "content": "hi"}]) == "hello"

    url = post.call_args.args[0]
    kwargs = post.call_args.kwargs
    assert url == "https://api.mistral.ai/v1/chat/completions"
    assert kwargs["json"]["model"] == "codestral-latest"
    assert kwargs["json"]["max_tokens"] == 100
    assert kwargs["json"]["temperature"] == 0.3
    assert "stream" not in kwargs["json"]
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == settings.llm_timeout


def test_ollama_payload_and_content():
    settings = Settings(llm_provider="ollama", llm_base_url="http://ollama:11434/", llm_model="qwen")
    body = {"message": {"role": "assistant", "content": '{"message": "hi"}'}}
    with patch(POST, return_value=fake_response(body)) as post:
        assert LLMClient(settings).complete([]) == '{"message": "hi"}'

    assert post.call_args.args[0] == "http://ollama:11434/api/chat"
    payload = post.call_args.kwargs["json"]
    assert payload["stream"] is False
    assert payload["options"]["num_predict"] == settings.llm_max_tokens
    assert "Authorization" not in post.call_args.kwargs["headers"]


def test_chunked_content_is_joined():
    body = mistral_body([{"type": "text", "text": "a"}, {"type": "text", "text": "b"}])
    with patch(POST, return_value=fake_response(body)):
        assert LLMClient(Settings()).complete([]) == "ab"


def test_missing_content_raises():
    with patch(POST, return_value=fake_response({"choices": []})):
        with pytest.raises(ValueError):
            LLMClient(Settings()).complete([])


def test_gateway_parses_fenced_reply():
    payload = {"message": "made it", "fileOperations": [{"type": "create", "path": "a.txt", "content": "A"}]}
    text = "```json\n" + json.dumps(payload) + "\n```"
    with patch(POST, return_value=fake_response(mistral_body(text))):
        resp = AgentGateway(LLMClient(Settings())).complete("sys", "user")
    assert resp.message == "made it"
    assert resp.file_operations[0].content == "A"


def test_gateway_sends_system_then_user():
    with patch(POST, return_value=fake_response(mistral_body('{"message": "x"}'))) as post:
        AgentGateway(LLMClient(Settings())).complete("SYS", "USER")
    assert post.call_args.kwargs["json"]["messages"] == [
        {"role": "system", "content": "SYS"},
        {"role": "user", "content": "USER"},
    ]


@pytest.mark.parametrize(
    "failure",
    [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
    ],
)
def test_gateway_transport_failure_returns_fixed_error(failure):
    with patch(POST, side_effect=failure):
        resp = AgentGateway(LLMClient(Settings())).complete("sys", "user")
    assert resp.message == GATEWAY_ERROR_MESSAGE
    assert resp.file_operations == []
    assert resp.command_operations == []


def test_gateway_http_error_returns_fixed_error():
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("401")
    with patch(POST, return_value=resp):
        result = AgentGateway(LLMClient(Settings())).complete("sys", "user")
    assert result.message == GATEWAY_ERROR_MESSAGE


def test_gateway_empty_content_returns_fixed_error():
    with patch(POST, return_value=fake_response(mistral_body(""))):
        result = AgentGateway(LLMClient(Settings())).complete("sys", "user")
    assert result.message == GATEWAY_ERROR_MESSAGE
