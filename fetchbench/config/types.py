from __future__ import annotations

from dataclasses import dataclass

from fetchbench.errors import HarnessError


@dataclass(frozen=True)
class FetchEntry:
    name: str
    locator: str


@dataclass(frozen=True)
class FetchSpec:
    entries: tuple[FetchEntry, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for entry in self.entries:
            if entry.name in seen:
                raise ConfigError(f"Duplicate fetch name: {entry.name}")
            seen.add(entry.name)

    @classmethod
    def from_pairs(cls, pairs) -> FetchSpec:
        """Build a spec from ``(name, locator)`` pairs or a name -> locator mapping."""
        if hasattr(pairs, "items"):
            pairs = pairs.items()
        return cls(tuple(FetchEntry(name, locator) for name, locator in pairs))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)

    def has_name(self, name: str) -> bool:
        return name in self.names()

    def get_locator(self, name: str) -> str:
        for entry in self.entries:
            if entry.name == name:
                return entry.locator
        raise KeyError(name)


@dataclass(frozen=True)
class HarnessConfig:
    spec: FetchSpec
    timeout: float = 10.0
    batch_timeout: float | None = None


class ConfigError(HarnessError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
