# fsmstore/model/backend.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import copy
import itertools
import threading
from typing import Any, Dict, Mapping, Optional

from fsmstore.core.errors import PersistenceError

Row = Dict[str, Any]


class StorageBackend:
    """
    Storage primitives a Record is persisted through. Rows are plain
    dictionaries keyed by attribute name.
    """

    def insert(self, table: str, row: Mapping[str, Any]) -> int:
        """
        Store a new row.

        :return: The id assigned to the row.
        """
        raise NotImplementedError()

    def replace(self, table: str, record_id: int, row: Mapping[str, Any]) -> None:
        """Overwrite every attribute of an existing row."""
        raise NotImplementedError()

    def update(self, table: str, record_id: int, values: Mapping[str, Any]) -> None:
        """Overwrite the given attributes of an existing row and no others."""
        raise NotImplementedError()

    def fetch(self, table: str, record_id: int) -> Optional[Row]:
        raise NotImplementedError()


class MemoryBackend(StorageBackend):
    """
    Process local backend. Rows are deep-copied on the way in and out so that
    records never share mutable values with storage.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Row]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert(self, table: str, row: Mapping[str, Any]) -> int:
        with self._lock:
            record_id = next(self._ids)
            self._tables.setdefault(table, {})[record_id] = copy.deepcopy(dict(row))
        return record_id

    def replace(self, table: str, record_id: int, row: Mapping[str, Any]) -> None:
        with self._lock:
            self._row(table, record_id)
            self._tables[table][record_id] = copy.deepcopy(dict(row))

    def update(self, table: str, record_id: int, values: Mapping[str, Any]) -> None:
        with self._lock:
            self._row(table, record_id).update(copy.deepcopy(dict(values)))

    def fetch(self, table: str, record_id: int) -> Optional[Row]:
        with self._lock:
            row = self._tables.get(table, {}).get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def _row(self, table: str, record_id: int) -> Row:
        try:
            return self._tables[table][record_id]
        except KeyError:
            raise PersistenceError(
                f"No row {record_id} in '{table}'", {"table": table, "id": record_id}
            ) from None
