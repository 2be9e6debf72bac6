"""Tests for the Ollama embedding backend."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from activity_digest.config import EmbeddingConfig
from activity_digest.embeddings.ollama import MAX_RETRIES, OllamaEmbedder
from activity_digest.exceptions import EmbeddingError


def _client_returning(*responses):
    client = MagicMock()
    client.__enter__.return_value = client
    client.post.side_effect = list(responses)
    return client


def _response(payload, status=200):
    request = httpx.Request("POST", "http://localhost:11434/api/embeddings")
    return httpx.Response(status, json=payload, request=request)


def test_from_config():
    embedder = OllamaEmbedder.from_config(EmbeddingConfig(endpoint="http://gpu-box:11434/", model="mxbai-embed-large"))
    assert embedder.base_url == "http://gpu-box:11434"
    assert embedder.model == "mxbai-embed-large"


@patch("httpx.Client")
def test_embed(mock_client_cls):
    client = _client_returning(_response({"embedding": [0.1, 0.2, 0.3]}))
    mock_client_cls.return_value = client
    assert OllamaEmbedder().embed("hello") == [0.1, 0.2, 0.3]
    url = client.post.call_args.args[0]
    assert url == "http://localhost:11434/api/embeddings"
    assert client.post.call_args.kwargs["json"] == {"model": "nomic-embed-text", "prompt": "hello"}


@patch("activity_digest.embeddings.ollama.time.sleep")
@patch("httpx.Client")
def test_retries_connection_errors(mock_client_cls, mock_sleep):
    client = _client_returning(httpx.ConnectError("refused"), _response({"embedding": [1.0]}))
    mock_client_cls.return_value = client
    assert OllamaEmbedder().embed_query("q") == [1.0]
    mock_sleep.assert_called_once_with(1)


@patch("activity_digest.embeddings.ollama.time.sleep")
@patch("httpx.Client")
def test_gives_up_after_retries(mock_client_cls, mock_sleep):
    client = _client_returning(*[httpx.ReadTimeout("slow") for _ in range(MAX_RETRIES)])
    mock_client_cls.return_value = client
    with pytest.raises(EmbeddingError, match="after"):
        OllamaEmbedder().embed("x")
    assert mock_sleep.call_count == MAX_RETRIES


@patch("httpx.Client")
def test_http_error_not_retried(mock_client_cls):
    client = _client_returning(_response({"error": "model not found"}, status=404))
    mock_client_cls.return_value = client
    with pytest.raises(EmbeddingError):
        OllamaEmbedder().embed("x")
    assert client.post.call_count == 1


@patch("httpx.Client")
def test_empty_embedding(mock_client_cls):
    mock_client_cls.return_value = _client_returning(_response({"embedding": []}))
    with pytest.raises(EmbeddingError, match="no embedding"):
        OllamaEmbedder().embed("x")
