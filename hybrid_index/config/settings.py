"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="hybrid-index-service", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # Server
    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")

    # Profiles (see config/*/static.json). "active" picks the profile marked active in the file.
    chunking_profile: str = Field(default="active", description="Semantic chunking profile")
    embedding_profile: str = Field(default="active", description="Embedding profile")
    indexing_profile: str = Field(default="dot_product_default", description="Indexing profile")

    # Embedding / generation providers
    google_api_key: str = Field(default="", description="Gemini API key")
    openai_api_key: str = Field(default="", description="OpenAI API key")
    aws_region: str = Field(default="us-east-1", description="AWS region for Bedrock and S3")
    generation_strategy: str = Field(default="gemini", description="gemini|openai")
    generation_model: str = Field(default="gemini-1.5-pro-preview", description="Answer model id")

    # Object storage for JSON-lines artifacts
    s3_bucket: str = Field(default="", description="Bucket receiving JSON-lines uploads")
    s3_key_prefix: str = Field(default="vector-data", description="Object key prefix")

    # OpenSearch
    opensearch_host: str = Field(default="http://localhost:9200", description="OpenSearch base URL")
    opensearch_username: str = Field(default="admin", description="OpenSearch username")
    opensearch_password: str = Field(default="admin", description="OpenSearch password")
    opensearch_use_ssl: bool = Field(default=True, description="Use HTTPS to OpenSearch")
    opensearch_verify_certs: bool = Field(default=False, description="Verify TLS certificates")
    opensearch_timeout: int = Field(default=30, ge=1, description="Request timeout (seconds)")

    # Retrieval
    default_top_k: int = Field(default=5, ge=1, description="Neighbors returned when top_k is omitted")
    max_top_k: int = Field(default=20, ge=1, description="Upper bound for top_k")
    sparse_weight: float = Field(default=1.0, ge=0.0, description="Weight of sparse clauses in hybrid search")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
