"""Id generation for hybrid index records and index names."""

import uuid

from hybrid_index.utils.time import epoch_millis

MAX_ID_LENGTH = 63


def generate_chunk_id(max_length: int = MAX_ID_LENGTH) -> str:
    """Time-based prefix plus a random component, e.g. chunk_1718000000000_<uuid hex>."""
    return f"chunk_{epoch_millis()}_{uuid.uuid4().hex}"[:max_length]


def generate_unique_chunk_ids(count: int, max_length: int = MAX_ID_LENGTH) -> list[str]:
    """Generate count ids with no duplicates within the batch."""
    seen: set[str] = set()
    ids: list[str] = []
    while len(ids) < count:
        candidate = generate_chunk_id(max_length)
        if candidate in seen:
            continue
        seen.add(candidate)
        ids.append(candidate)
    return ids


def generate_index_name(prefix: str = "hybrid-index") -> str:
    """Default index name, e.g. hybrid-index-1718000000000."""
    return f"{prefix}-{epoch_millis()}"
