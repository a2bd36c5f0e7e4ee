import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    ConfigError,
    FetchEntry,
    FetchSpec,
    HarnessConfig,
    UnsupportedConfigFormatError,
)

DEFAULT_FETCHES: dict[str, str] = {
    "user_1": "https://jsonplaceholder.typicode.com/users/1",
    "posts_1": "https://jsonplaceholder.typicode.com/posts?userId=1",
    "todos_1": "https://jsonplaceholder.typicode.com/todos?userId=1",
    "user_2": "https://jsonplaceholder.typicode.com/users/2",
    "posts_2": "https://jsonplaceholder.typicode.com/posts?userId=2",
    "album_3": "https://jsonplaceholder.typicode.com/albums/3",
}

_KEYS = {"fetches", "timeout", "batch_timeout"}


def default_config() -> HarnessConfig:
    return HarnessConfig(spec=FetchSpec.from_pairs(DEFAULT_FETCHES))


def load_config(path: str | Path) -> HarnessConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_harness_config(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_harness_config(raw: Mapping[str, Any]) -> HarnessConfig:
    for key in raw.keys():
        if key not in _KEYS:
            raise ConfigError(f"Can't process top-level field: {key}")

    spec = _build_fetch_spec(raw)
    timeout = _positive_number(raw, "timeout", 10.0)
    batch_timeout = _positive_number(raw, "batch_timeout", None)

    return HarnessConfig(spec=spec, timeout=timeout, batch_timeout=batch_timeout)


def _build_fetch_spec(raw: Mapping[str, Any]) -> FetchSpec:
    if not "fetches" in raw:
        raise ConfigError("Missing 'fetches' field")

    fetches = raw["fetches"]

    if not isinstance(fetches, Mapping):
        raise ConfigError(f"'fetches' must be a mapping, got {type(fetches)}")

    if len(fetches) < 1:
        raise ConfigError("There must be at least one fetch in the config file")

    entries: list[FetchEntry] = []
    seen: set[str] = set()

    for name, locator in fetches.items():
        if not isinstance(name, str):
            raise ConfigError(f"Fetch name must be a string, got {type(name)}")

        name_norm = name.strip()

        if len(name_norm) < 1:
            raise ConfigError("A fetch name can't be empty")

        if name_norm in seen:
            raise ConfigError(f"Duplicate fetch name after normalization: {name_norm}")

        if not isinstance(locator, str):
            raise ConfigError(f"{name_norm}: The URL should be a string")

        if len(locator.strip()) < 1:
            raise ConfigError(f"{name_norm}: URL missing")

        entries.append(FetchEntry(name_norm, locator.strip()))
        seen.add(name_norm)

    return FetchSpec(tuple(entries))


def _positive_number(raw: Mapping[str, Any], key: str, default: float | None) -> float | None:
    if key not in raw:
        return default

    value = raw[key]

    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' should be a number, got {type(value)}")

    if value <= 0:
        raise ConfigError(f"'{key}' must be greater than zero")

    return float(value)
