"""Configuration management for svgvault."""

from pathlib import Path
from typing import Optional, List
import yaml
from pydantic import BaseModel, Field, field_validator
from loguru import logger


DEFAULT_SIDECAR_NAME = ".svgwiz.index.json"


class IndexerConfig(BaseModel):
    extensions: List[str] = Field(default_factory=lambda: [".svg"])
    sidecar_name: str = DEFAULT_SIDECAR_NAME
    top_colors: int = Field(default=24, ge=1)
    tag_depth: int = Field(default=3, ge=0)
    structured_parser: bool = True

    @field_validator('extensions')
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            normalized.append(ext)
        if not normalized:
            raise ValueError("at least one extension is required")
        return normalized

    @field_validator('sidecar_name')
    @classmethod
    def validate_sidecar_name(cls, v: str) -> str:
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            raise ValueError("sidecar_name must be a plain file name")
        return v


class ApiConfig(BaseModel):
    host: str = "localhost"
    port: int = Field(default=8766, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None
    rotation: str = "1 day"
    retention: str = "7 days"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


class Config(BaseModel):
    """Main configuration for svgvault."""

    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML, or defaults when no file exists."""
        if config_path is None:
            candidates = [
                Path("svgvault.yaml"),
                Path.home() / ".config" / "svgvault" / "config.yaml",
                Path("/etc/svgvault/config.yaml"),
            ]
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break
            else:
                logger.debug("No config file found, using defaults")
                return cls()

        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        logger.info(f"Loading config from: {config_path}")
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)
