"""In-memory pipeline entities. Created per request, never persisted."""

from pydantic import BaseModel, ConfigDict, Field


class Sentence(BaseModel):
    """One segmented sentence, zero-based in input order."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    text: str


class SentenceWindow(BaseModel):
    """A sentence joined with up to buffer_size neighbors on each side."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    combined_text: str


class DistanceSample(BaseModel):
    """Cosine distance between windows index and index + 1."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    distance: float


class SparseVector(BaseModel):
    """Coordinate-list sparse vector over a batch-local vocabulary. Indices strictly increasing."""

    indices: list[int] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)


class ProcessedChunk(BaseModel):
    """A chunk ready for hybrid index ingestion."""

    id: str = Field(..., min_length=1, max_length=63)
    text: str
    dense_embedding: list[float]
    sparse_embedding: SparseVector


class RetrievedChunk(BaseModel):
    """One neighbor returned by a hybrid query."""

    id: str = ""
    text: str = ""
    distance: float = 0.0


class ChunkingResult(BaseModel):
    """Output of semantic chunking: sentences, adjacent distances, breakpoints and chunk texts."""

    sentences: list[Sentence]
    distances: list[float]
    breakpoints: list[int]
    chunks: list[str]

    @property
    def distance_samples(self) -> list[DistanceSample]:
        return [DistanceSample(index=i, distance=d) for i, d in enumerate(self.distances)]
