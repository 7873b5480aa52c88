"""In-process implementation of RecordStore.

Tables are lists of row dicts.  Every public operation runs under one
re-entrant lock, which makes ``find_or_insert`` atomic and
``insert_many`` all-or-nothing.  Subclasses change where tables live by
overriding ``_read`` and ``_write``.
"""

from __future__ import annotations

import copy
import threading
import uuid
from collections.abc import Callable
from typing import Any

from shopcore.domain.exceptions import ConflictError, EntityNotFoundError
from shopcore.domain.repository.record_store import RecordStore, Row


class InMemoryRecordStore(RecordStore):

    def __init__(
        self,
        unique_keys: dict[str, tuple[str, ...]] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._tables: dict[str, list[Row]] = {}
        self._unique_keys = unique_keys or {}
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._lock = threading.RLock()

    # --- RecordStore interface ------------------------------------------------

    def find_one(self, resource: str, predicate: Row) -> Row | None:
        with self._lock:
            for row in self._read(resource):
                if _matches(row, predicate):
                    return copy.deepcopy(row)
        return None

    def list_page(
        self,
        resource: str,
        filters: Row,
        offset: int,
        limit: int,
        order_by: str | None = None,
        descending: bool = False,
    ) -> tuple[list[Row], int]:
        with self._lock:
            rows = [r for r in self._read(resource) if _matches(r, filters)]
        return _window(rows, offset, limit, order_by, descending)

    def search_page(
        self,
        resource: str,
        term: str,
        field: str,
        filters: Row,
        offset: int,
        limit: int,
        order_by: str | None = None,
        descending: bool = False,
    ) -> tuple[list[Row], int]:
        needle = term.strip().lower()
        with self._lock:
            rows = [
                r
                for r in self._read(resource)
                if _matches(r, filters) and needle in str(r.get(field) or "").lower()
            ]
        return _window(rows, offset, limit, order_by, descending)

    def insert(self, resource: str, row: Row) -> Row:
        with self._lock:
            rows = self._read(resource)
            new_row = self._prepare(resource, row, rows)
            rows.append(new_row)
            self._write(resource, rows)
            return copy.deepcopy(new_row)

    def insert_many(self, resource: str, rows: list[Row]) -> list[Row]:
        with self._lock:
            existing = self._read(resource)
            staged: list[Row] = []
            for row in rows:
                staged.append(self._prepare(resource, row, existing + staged))
            existing.extend(staged)
            self._write(resource, existing)
            return copy.deepcopy(staged)

    def update(self, resource: str, row_id: str, patch: Row) -> Row:
        with self._lock:
            rows = self._read(resource)
            for i, row in enumerate(rows):
                if row.get("id") == row_id:
                    merged = {**row, **copy.deepcopy(patch), "id": row_id}
                    others = rows[:i] + rows[i + 1:]
                    self._check_unique(resource, merged, others)
                    rows[i] = merged
                    self._write(resource, rows)
                    return copy.deepcopy(merged)
        raise EntityNotFoundError(f"No {resource} row with id '{row_id}'")

    def delete(self, resource: str, row_id: str) -> bool:
        with self._lock:
            rows = self._read(resource)
            kept = [r for r in rows if r.get("id") != row_id]
            if len(kept) == len(rows):
                return False
            self._write(resource, kept)
            return True

    def find_or_insert(
        self, resource: str, key: str, value: Any, row: Row
    ) -> tuple[Row, bool]:
        with self._lock:
            existing = self.find_one(resource, {key: value})
            if existing is not None:
                return existing, False
            return self.insert(resource, row), True

    def count(self, resource: str) -> int:
        with self._lock:
            return len(self._read(resource))

    # --- Storage hooks --------------------------------------------------------

    def _read(self, resource: str) -> list[Row]:
        return self._tables.setdefault(resource, [])

    def _write(self, resource: str, rows: list[Row]) -> None:
        self._tables[resource] = rows

    # --- Internal helpers -----------------------------------------------------

    def _prepare(self, resource: str, row: Row, current: list[Row]) -> Row:
        new_row = copy.deepcopy(row)
        if not new_row.get("id"):
            new_row["id"] = self._id_factory()
        if any(r.get("id") == new_row["id"] for r in current):
            raise ConflictError(f"Duplicate {resource} id '{new_row['id']}'")
        self._check_unique(resource, new_row, current)
        return new_row

    def _check_unique(self, resource: str, row: Row, others: list[Row]) -> None:
        for key in self._unique_keys.get(resource, ()):
            value = row.get(key)
            if value is None:
                continue
            if any(r.get(key) == value for r in others):
                raise ConflictError(f"Duplicate {resource}.{key}: {value!r}")


def _matches(row: Row, predicate: Row) -> bool:
    return all(row.get(k) == v for k, v in predicate.items())


def _sort_key(value: Any) -> tuple:
    if value is None:
        return (2, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def _window(
    rows: list[Row],
    offset: int,
    limit: int,
    order_by: str | None,
    descending: bool,
) -> tuple[list[Row], int]:
    if order_by:
        rows = sorted(rows, key=lambda r: _sort_key(r.get(order_by)), reverse=descending)
    page = rows[offset:offset + limit]
    return copy.deepcopy(page), len(rows)
