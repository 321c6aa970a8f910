"""Static chunking config loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from hybrid_index.config.chunking.models import SemanticChunkingConfig

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, SemanticChunkingConfig] | None = None
_active_profile: str | None = None


def _load_raw_data() -> dict[str, Any]:
    """Load raw JSON; used to read both profiles and active."""
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def load_chunking_profiles() -> dict[str, SemanticChunkingConfig]:
    """Load chunking profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    profiles = _load_raw_data().get("profiles", {})
    _cached = {k: SemanticChunkingConfig.model_validate(v) for k, v in profiles.items()}
    return _cached


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'default' if missing."""
    global _active_profile
    if _active_profile is not None:
        return _active_profile
    _active_profile = _load_raw_data().get("active", "default")
    return _active_profile


def resolve_chunking_config(
    profile_name: str,
    inline_config: dict[str, Any] | None = None,
) -> SemanticChunkingConfig:
    """
    Resolve chunking config by profile name and optional inline overrides.
    'active' selects the profile marked active in static.json. Overrides with a None value are ignored.
    Raises ValueError if the profile is unknown or the merged config is invalid.
    """
    name = get_active_profile_name() if profile_name == "active" else profile_name
    base = load_chunking_profiles().get(name)
    if base is None:
        raise ValueError(f"Unknown chunking profile: {name!r}")
    overrides = {k: v for k, v in (inline_config or {}).items() if v is not None}
    if not overrides:
        return base
    return SemanticChunkingConfig.model_validate({**base.model_dump(), **overrides})
