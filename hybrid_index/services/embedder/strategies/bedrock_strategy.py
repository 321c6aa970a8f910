"""Amazon Bedrock Titan embedding strategy."""

import json
from typing import Any

import boto3

from hybrid_index.services.embedder.base import BaseEmbeddingStrategy


def _titan_request(text: str, model: str) -> dict[str, Any]:
    """Titan v2 accepts normalize; v1 takes only inputText."""
    body: dict[str, Any] = {"inputText": text}
    if "v2" in model:
        body["normalize"] = True
    return body


def _titan_vector(payload: dict[str, Any]) -> list[float]:
    vector = payload.get("embedding") or (payload.get("embeddingsByType") or {}).get("float")
    if not vector:
        raise ValueError("Bedrock response contained no embedding")
    return [float(x) for x in vector]


class BedrockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Titan text embeddings through bedrock-runtime. Titan has no batch API, so each text is
    one invoke_model call; the task type is not used. IAM credentials come from the environment.
    Client errors propagate to the caller, which wraps them as upstream failures.
    """

    def __init__(self, region: str | None = None) -> None:
        self._client = boto3.client("bedrock-runtime", region_name=region)

    @property
    def strategy_name(self) -> str:
        return "bedrock"

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        vectors: list[list[float]] = []
        for text in texts:
            response = self._client.invoke_model(
                modelId=model,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(_titan_request(text, model)),
            )
            vectors.append(_titan_vector(json.loads(response["body"].read())))
        return vectors
