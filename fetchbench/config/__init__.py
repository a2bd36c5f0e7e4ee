from .loader import DEFAULT_FETCHES, default_config, load_config
from .types import (
    ConfigError,
    FetchEntry,
    FetchSpec,
    HarnessConfig,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_config",
    "default_config",
    "DEFAULT_FETCHES",
    "FetchEntry",
    "FetchSpec",
    "HarnessConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
