from unittest.mock import Mock

import pytest
import requests

from uiforge.services.completion_client import (
    AzureChatCompletionClient,
    CompletionError,
    CompletionHTTPError,
    create_completion_client,
)

MESSAGES = [{"role": "user", "content": "hi"}]


def _response(status_code=200, body=None, text=''):
    response = Mock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    response.text = text
    return response


def _client(session):
    return AzureChatCompletionClient(
        endpoint="https://example.inference.ai.azure.com/",
        api_key="secret",
        model_name="gpt-4o-mini",
        timeout=5,
        session=session,
    )


@pytest.mark.unit
class TestAzureChatCompletionClient:

    def test_successful_completion(self):
        session = Mock()
        session.post.return_value = _response(body={
            "choices": [{"message": {"content": "hello"}}],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1},
        })

        assert _client(session).complete(MESSAGES, max_tokens=100, temperature=0.1) == "hello"

        args, kwargs = session.post.call_args
        assert args[0] == "https://example.inference.ai.azure.com/chat/completions"
        assert kwargs['headers']['api-key'] == "secret"
        assert kwargs['headers']['Authorization'] == "Bearer secret"
        assert kwargs['json'] == {
            "messages": MESSAGES,
            "max_tokens": 100,
            "temperature": 0.1,
            "model": "gpt-4o-mini",
            "stream": False,
        }
        assert kwargs['timeout'] == 5

    def test_missing_configuration_raises_on_use(self):
        session = Mock()
        client = AzureChatCompletionClient(endpoint=None, api_key=None, session=session)

        assert client.is_configured is False
        with pytest.raises(CompletionError):
            client.complete(MESSAGES)
        session.post.assert_not_called()

    def test_non_200_status(self):
        session = Mock()
        session.post.return_value = _response(status_code=429, body={"error": {"message": "Too many requests"}})

        with pytest.raises(CompletionHTTPError) as exc_info:
            _client(session).complete(MESSAGES)

        assert exc_info.value.status_code == 429
        assert "Too many requests" in str(exc_info.value)

    def test_timeout(self):
        session = Mock()
        session.post.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(CompletionError) as exc_info:
            _client(session).complete(MESSAGES)
        assert exc_info.value.status_code == 504

    def test_connection_error(self):
        session = Mock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(CompletionError) as exc_info:
            _client(session).complete(MESSAGES)
        assert exc_info.value.status_code == 503
        assert not isinstance(exc_info.value, CompletionHTTPError)

    def test_non_json_body(self):
        session = Mock()
        session.post.return_value = _response(body=ValueError("no json"), text="<html>")

        with pytest.raises(CompletionError):
            _client(session).complete(MESSAGES)

    @pytest.mark.parametrize("body", [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
    ])
    def test_reply_without_content(self, body):
        session = Mock()
        session.post.return_value = _response(body=body)

        with pytest.raises(CompletionError):
            _client(session).complete(MESSAGES)


@pytest.mark.unit
def test_create_completion_client_from_config():
    client = create_completion_client({
        'AZURE_AI_ENDPOINT': 'https://endpoint',
        'AZURE_AI_API_KEY': 'key',
        'AZURE_AI_MODEL_NAME': 'custom-model',
        'AI_REQUEST_TIMEOUT': 30,
    })
    assert client.is_configured
    assert client.model_name == 'custom-model'
    assert client.timeout == 30
    assert client.url == 'https://endpoint/chat/completions'
