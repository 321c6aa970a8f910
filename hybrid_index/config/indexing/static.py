"""Static indexing config loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from hybrid_index.config.indexing.models import IndexingConfig

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, IndexingConfig] | None = None

# Similarity name → profile name. API may send "cosine" or profile "cosine_default".
SIMILARITY_TO_PROFILE = {
    "cosine": "cosine_default",
    "l2": "l2_default",
    "dot_product": "dot_product_default",
}


def load_indexing_profiles() -> dict[str, IndexingConfig]:
    """Load indexing profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    raw = _config_path.read_text(encoding="utf-8")
    profiles = json.loads(raw).get("profiles", {})
    _cached = {k: IndexingConfig.model_validate(v) for k, v in profiles.items()}
    return _cached


def resolve_indexing_config(profile_or_inline: str | dict[str, Any]) -> IndexingConfig:
    """
    Resolve indexing config from a profile name, a similarity name, or an inline object.
    Raises ValueError if the profile is unknown or the inline dict is invalid.
    """
    if isinstance(profile_or_inline, dict):
        return IndexingConfig.model_validate(profile_or_inline)
    name = profile_or_inline.strip()
    profile_name = SIMILARITY_TO_PROFILE.get(name) or name
    config = load_indexing_profiles().get(profile_name)
    if config is None:
        raise ValueError(f"Unknown indexing profile or similarity: {profile_or_inline!r}")
    return config
