"""Pipeline error taxonomy. Ingestion errors are strict; retrieval parsing never raises."""


class PipelineError(Exception):
    """Base error for the chunking, embedding and indexing pipeline."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidInput(PipelineError):
    """Empty transcript or malformed request parameters. Raised before any embedding call."""


class EmbeddingMismatch(PipelineError):
    """The embedder returned a different number of vectors than texts it was given."""

    def __init__(self, expected: int, received: int, stage: str):
        super().__init__(f"Embedding {stage} returned {received} vectors for {expected} inputs")
        self.expected = expected
        self.received = received
        self.stage = stage


class SerializationFailure(PipelineError):
    """A single record could not be serialized. Non-fatal: the record is dropped."""

    def __init__(self, record_id: str, cause: Exception | None = None):
        super().__init__(f"Failed to serialize record {record_id!r}", cause=cause)
        self.record_id = record_id


class UpstreamFailure(PipelineError):
    """An external collaborator (embedding, storage, index, generation) failed."""


class EmbeddingDimensionMismatch(EmbeddingMismatch):
    """A batch contained an empty vector or vectors of differing dimensions."""

    def __init__(self, expected: int, received: int, stage: str):
        if received == 0:
            message = f"Embedding {stage} returned an empty vector"
        else:
            message = f"Embedding {stage} returned a vector of dimension {received}, expected {expected}"
        PipelineError.__init__(self, message)
        self.expected = expected
        self.received = received
        self.stage = stage
