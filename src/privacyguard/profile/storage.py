"""
Key-value storage port for local state.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class StorageKey(Generic[T]):
    """A typed storage key with a default and a JSON codec.

    Attributes:
        name: Key under which the value is stored
        default: Value returned when nothing is stored
        decode: Converts stored JSON data back into a value
        encode: Converts a value into JSON-serializable data
    """

    name: str
    default: T
    decode: Callable[[Any], T] = _identity
    encode: Callable[[T], Any] = _identity


class StoragePort(ABC):
    """Reads and writes typed values by key."""

    @abstractmethod
    def get(self, key: StorageKey[T]) -> T:
        """Return the stored value, or ``key.default``."""

    @abstractmethod
    def set(self, key: StorageKey[T], value: T) -> None:
        """Store a value; persisted before this returns."""


class MemoryStorage(StoragePort):
    """Storage held in memory for the life of the process."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    def get(self, key: StorageKey[T]) -> T:
        if key.name not in self._data:
            return key.default
        return key.decode(self._data[key.name])

    def set(self, key: StorageKey[T], value: T) -> None:
        self._data[key.name] = key.encode(value)


class JsonFileStorage(StoragePort):
    """Storage kept in a single JSON file, rewritten on every set."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Ignoring {self.path}: expected a JSON object")
            return {}
        return data

    def get(self, key: StorageKey[T]) -> T:
        data = self._read_all()
        if key.name not in data:
            return key.default
        try:
            return key.decode(data[key.name])
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Could not decode stored value for {key.name}: {e}")
            return key.default

    def set(self, key: StorageKey[T], value: T) -> None:
        data = self._read_all()
        data[key.name] = key.encode(value)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        tmp_path.replace(self.path)
