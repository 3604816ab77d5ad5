"""In-process memory implementation of the URL store.

Records live in a dict owned by the store instance and are lost when the
process exits.
"""

import threading
from dataclasses import replace
from typing import Dict

from .base import URLStore
from ..exceptions import NotFoundError
from ..models import ShortURLRecord


class MemoryURLStore(URLStore):
    """Dict-backed URL store, safe for asyncio tasks and threads.

    The lock is only held around dict access and never across an await.
    """

    backend_name = "memory"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._records: Dict[str, ShortURLRecord] = {}
        self._lock = threading.Lock()

    async def _insert(self, record: ShortURLRecord) -> bool:
        with self._lock:
            if record.code in self._records:
                return False
            self._records[record.code] = record
        return True

    async def resolve(self, short_code: str) -> str:
        with self._lock:
            record = self._records.get(short_code)
            if record is None:
                raise NotFoundError(short_code)
            record.hit_count += 1
            original_url = record.original_url

        self.logger.debug(f"Resolved {short_code} -> {original_url}")
        return original_url

    async def stats(self, short_code: str) -> int:
        with self._lock:
            record = self._records.get(short_code)
            if record is None:
                raise NotFoundError(short_code)
            return record.hit_count

    async def get_record(self, short_code: str) -> ShortURLRecord:
        with self._lock:
            record = self._records.get(short_code)
            if record is None:
                raise NotFoundError(short_code)
            # Callers get a snapshot, not the live record
            return replace(record)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
