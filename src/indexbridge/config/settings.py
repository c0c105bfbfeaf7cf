"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (INDEXBRIDGE_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ElasticsearchSettings(BaseModel):
    """Connection options handed to the Elasticsearch client."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Cluster node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="Encoded API key")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    request_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class IndexSettings(BaseModel):
    """Index naming and query policy."""

    model_config = {"frozen": True}

    name: str = Field(default="indexbridge", description="Global index used when per_type_index is off")
    per_type_index: bool = Field(default=True, description="Store each searchable type in its own index")
    min_score: float = Field(default=50, ge=0, description="Relevance floor applied to every search")
    include_type_name: bool = Field(
        default=True,
        description=(
            "Send the document type as _type in bulk action lines and wrap mappings in it. "
            "Elasticsearch 7+ is typeless and rejects both, so set this to false for any cluster "
            "the 8.x client can talk to"
        ),
    )


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the INDEXBRIDGE_ prefix.
    Nested settings use double underscores: INDEXBRIDGE_INDEX__NAME=catalog

    Example:
        INDEXBRIDGE_ELASTICSEARCH__HOSTS='["http://es-1:9200", "http://es-2:9200"]'
        INDEXBRIDGE_INDEX__PER_TYPE_INDEX=false
        INDEXBRIDGE_INDEX__MIN_SCORE=10
    """

    model_config = {
        "env_prefix": "INDEXBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override the built-in defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
