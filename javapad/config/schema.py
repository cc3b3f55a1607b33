from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderSettings(BaseModel):
    """One entry of the execution provider chain."""

    name: str
    kind: str
    base_url: str
    api_key: str | None = None
    timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=0, ge=0)
    # judge0
    language_id: int | None = None
    # piston
    language: str = "java"
    version: str = "*"
    file_name: str = "Main.java"
    model_config = ConfigDict(extra="allow")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_url must not be empty")
        return v


class ExecutionSettings(BaseModel):
    providers: list[ProviderSettings]
    model_config = ConfigDict(extra="ignore")

    @field_validator("providers")
    @classmethod
    def ensure_unique_names(cls, v: list[ProviderSettings]) -> list[ProviderSettings]:
        if not v:
            raise ValueError("execution.providers must list at least one provider")
        names = [p.name for p in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate provider names: {duplicates}")
        return v


class StorageSettings(BaseModel):
    """Where submitted snippets are kept: "memory" or a JSON file path."""

    snippet_store: str = "memory"
    model_config = ConfigDict(extra="ignore")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    save_to_file: bool = False
    log_dir: str = "./data/logs"
    model_config = ConfigDict(extra="ignore")


class AppConfig(BaseModel):
    execution: ExecutionSettings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    model_config = ConfigDict(extra="allow")

    @field_validator("execution", mode="before")
    @classmethod
    def ensure_execution(cls, v: Any) -> Any:
        if not isinstance(v, (dict, ExecutionSettings)):
            raise ValueError("execution section must be a mapping")
        return v
