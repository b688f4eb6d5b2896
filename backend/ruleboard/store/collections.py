# backend/ruleboard/store/collections.py
"""
Collection Store - a whole collection persisted as one JSON array

Used for the rules catalog and the project timeline. The first read seeds the
file from the built-in default; unreadable content falls back to the default.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Protocol, Type, TypeVar, Union

from ruleboard.errors import StorageReadError, StorageWriteError
from ruleboard.store.files import read_json, write_json

logger = logging.getLogger(__name__)


class Record(Protocol):
    def to_dict(self) -> Dict[str, Any]: ...

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Record": ...


T = TypeVar("T", bound=Record)


class CollectionStore(Generic[T]):
    def __init__(
        self,
        path: Union[str, Path],
        record_type: Type[T],
        default_factory: Callable[[], List[T]],
    ):
        self.path = Path(path)
        self.record_type = record_type
        self.default_factory = default_factory

    @property
    def name(self) -> str:
        return self.path.stem

    def load(self) -> List[T]:
        if not self.path.exists():
            items = self.default_factory()
            try:
                self.save(items)
                logger.info("[Store] Seeded %s with %d default records", self.name, len(items))
            except StorageWriteError:
                logger.warning("[Store] Could not seed %s, serving defaults", self.name)
            return items

        try:
            raw = read_json(self.path)
            if not isinstance(raw, list):
                raise StorageReadError(f"{self.name} document is not a JSON array")
            return [self.record_type.from_dict(item) for item in raw]
        except (StorageReadError, KeyError, TypeError, ValueError) as e:
            logger.error("[Store] Failed to read %s data, falling back to defaults: %s", self.name, e)
            return self.default_factory()

    def save(self, items: List[T]) -> None:
        write_json(self.path, [item.to_dict() for item in items])
