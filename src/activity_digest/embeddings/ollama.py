"""Ollama embedding backend."""

from __future__ import annotations

import logging
import time

from activity_digest.config import EmbeddingConfig
from activity_digest.embeddings.base import BaseEmbedder
from activity_digest.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
REQUEST_TIMEOUT = 30.0


class OllamaEmbedder(BaseEmbedder):
    """Local Ollama embeddings; retries only connection and timeout failures."""

    def __init__(self, base_url: str = "http://localhost:11434", model: str = "nomic-embed-text"):
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for OllamaEmbedder. "
                "Install with: pip install activity-digest[embeddings]"
            )
        self.base_url = base_url.rstrip("/")
        self.model = model

    @classmethod
    def from_config(cls, config: EmbeddingConfig) -> OllamaEmbedder:
        return cls(base_url=config.endpoint, model=config.model)

    def _call_api(self, text: str) -> list[float]:
        import httpx

        for attempt in range(MAX_RETRIES):
            try:
                with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                    response = client.post(
                        f"{self.base_url}/api/embeddings",
                        json={"model": self.model, "prompt": text},
                    )
                    response.raise_for_status()
                    embedding = response.json().get("embedding")
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                wait = 2 ** attempt
                logger.warning(f"Ollama connection issue, retrying in {wait}s (attempt {attempt + 1}): {e}")
                time.sleep(wait)
                continue
            except (httpx.HTTPError, ValueError) as e:
                raise EmbeddingError(f"Ollama embedding failed: {e}") from e

            if not isinstance(embedding, list) or not embedding:
                raise EmbeddingError("Ollama returned no embedding")
            return [float(x) for x in embedding]
        raise EmbeddingError(f"Ollama embedding failed after {MAX_RETRIES} retries")

    def embed(self, text: str) -> list[float]:
        return self._call_api(text)

    def embed_query(self, text: str) -> list[float]:
        return self._call_api(text)
