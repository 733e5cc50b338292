"""Sampler configuration."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

SAMPLING_METHODS = ("inverse", "shock")


class SamplerConfig(BaseModel):
    """Settings for one sampling call."""
    model_config = ConfigDict(frozen=True)

    n_samples: int = 10000
    method: str = "inverse"
    random_seed: Optional[int] = None
    # candidate y values examined beyond max(x) before giving up
    max_search_steps: int = 1_000_000

    @field_validator('n_samples')
    @classmethod
    def validate_n_samples(cls, v):
        if v <= 0:
            raise ValueError("n_samples must be positive")
        return v

    @field_validator('method')
    @classmethod
    def validate_method(cls, v):
        v = v.lower()
        if v not in SAMPLING_METHODS:
            raise ValueError(f"method must be one of {SAMPLING_METHODS}, got {v!r}")
        return v

    @field_validator('max_search_steps')
    @classmethod
    def validate_max_search_steps(cls, v):
        if v <= 0:
            raise ValueError("max_search_steps must be positive")
        return v

    @classmethod
    def create(cls, **kwargs: Any) -> "SamplerConfig":
        """Build a config, reporting invalid settings as ``ConfigurationError``."""
        try:
            return cls(**kwargs)
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            key = str(error['loc'][0]) if error.get('loc') else None
            raise ConfigurationError(
                f"Invalid sampler configuration: {error['msg']}",
                config_key=key,
                config_value=error.get('input'),
                cause=exc,
            ) from exc
