# FILE: squirrito/services/memory_store.py
"""
Append-only memory store, one instance per logical name

All callers in a process that ask for the same name share one MemoryStore,
and every operation on it runs under that store's lock, so the
read-modify-write in save() cannot lose a concurrent update.
"""
import json
import logging
import os
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from squirrito.config import get_settings
from squirrito.models.memory import Memory, coerce_coordinate

logger = logging.getLogger(__name__)


class MemoryStoreError(RuntimeError):
    """The backing file could not be read or written"""


class MemoryNotFound(LookupError):
    """No memory with the requested id"""


class MemoryStore:
    """Ordered collection of Memory records persisted as one JSON blob"""

    def __init__(self, name: str, storage_dir: str):
        self.name = name
        self.storage_dir = Path(storage_dir)
        self.path = self.storage_dir / f"{name}.json"
        self._lock = threading.Lock()

    def _read(self) -> List[Memory]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            return [Memory.model_validate(item) for item in raw]
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.error(f"Failed to read memory store {self.path}: {e}", exc_info=True)
            raise MemoryStoreError(f"cannot read memory store '{self.name}'") from e

    def _write(self, memories: List[Memory]):
        tmp = self.path.with_suffix(".json.tmp")
        payload = [m.model_dump(by_alias=True) for m in memories]
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(payload, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to write memory store {self.path}: {e}", exc_info=True)
            tmp.unlink(missing_ok=True)
            raise MemoryStoreError(f"cannot write memory store '{self.name}'") from e

    def save(
        self,
        session_id: str,
        location_text: str,
        lat: Any,
        lng: Any,
        joke: str
    ) -> Memory:
        """Append a new memory and persist the whole collection"""
        lat = coerce_coordinate(lat)
        lng = coerce_coordinate(lng)
        memory = Memory(
            id=str(uuid.uuid4()),
            session_id=session_id,
            location_text=location_text,
            lat=0.0 if lat is None else lat,
            lng=0.0 if lng is None else lng,
            joke=joke,
            created_at=int(time.time() * 1000)
        )

        with self._lock:
            memories = self._read()
            memories.append(memory)
            self._write(memories)

        logger.info(f"Memory saved: id={memory.id} session={session_id} store={self.name}")
        return memory

    def list(self) -> List[Memory]:
        """All memories in insertion order"""
        with self._lock:
            return self._read()

    def get_by_id(self, memory_id: str) -> Memory:
        """Linear scan for one memory; raises MemoryNotFound if absent"""
        with self._lock:
            memories = self._read()
        for memory in memories:
            if memory.id == memory_id:
                return memory
        raise MemoryNotFound(memory_id)

    def clear(self) -> bool:
        """Delete the whole collection"""
        with self._lock:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as e:
                logger.error(f"Failed to clear memory store {self.path}: {e}", exc_info=True)
                raise MemoryStoreError(f"cannot clear memory store '{self.name}'") from e
        logger.warning(f"Memory store cleared: {self.name}")
        return True


_stores: Dict[str, MemoryStore] = {}
_stores_lock = threading.Lock()


def get_memory_store(name: Optional[str] = None) -> MemoryStore:
    """Get or create the store addressed by `name` (default: the global one)"""
    settings = get_settings()
    name = name or settings.memory_store_name
    with _stores_lock:
        store = _stores.get(name)
        if store is None:
            store = MemoryStore(name=name, storage_dir=settings.memory_dir)
            _stores[name] = store
        return store


def get_global_memory_store() -> MemoryStore:
    """The store every request handler shares"""
    return get_memory_store()
