"""Abstract record store: the only persistence contract the core consumes.

Rows are plain dicts keyed by column name.  Conversion to and from the
typed domain records happens at the application edge (``mappers``),
never inside a store implementation.

Implementations must:
- raise ``TransientStoreError`` for any failure of the backing store;
- raise ``ConflictError`` when a write violates a unique key;
- make ``insert_many`` all-or-nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from shopcore.domain.exceptions import ConflictError

Row = dict[str, Any]


class RecordStore(ABC):

    @abstractmethod
    def find_one(self, resource: str, predicate: Row) -> Row | None:
        """Return the first row whose columns equal *predicate*, or None."""

    @abstractmethod
    def list_page(
        self,
        resource: str,
        filters: Row,
        offset: int,
        limit: int,
        order_by: str | None = None,
        descending: bool = False,
    ) -> tuple[list[Row], int]:
        """Return one window of rows matching *filters* and the exact total."""

    @abstractmethod
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
        """Return one window of rows whose *field* contains *term*.

        The count is the number of matches across the whole resource,
        independent of the window.
        """

    @abstractmethod
    def insert(self, resource: str, row: Row) -> Row:
        """Persist a new row and return it with its assigned ``id``."""

    @abstractmethod
    def insert_many(self, resource: str, rows: list[Row]) -> list[Row]:
        """Persist several rows at once; either all are stored or none."""

    @abstractmethod
    def update(self, resource: str, row_id: str, patch: Row) -> Row:
        """Apply *patch* to an existing row and return the updated row."""

    @abstractmethod
    def delete(self, resource: str, row_id: str) -> bool:
        """Delete a row; return False if it did not exist."""

    def find_or_insert(
        self, resource: str, key: str, value: Any, row: Row
    ) -> tuple[Row, bool]:
        """Return the row where ``key == value``, inserting *row* if absent.

        The second element tells whether a row was created.  This generic
        version is a read-then-write sequence: stores that can do it
        atomically should override it.  A concurrent insert that wins the
        race surfaces as ``ConflictError`` from ``insert``, in which case
        the winner's row is read back and returned.
        """
        existing = self.find_one(resource, {key: value})
        if existing is not None:
            return existing, False
        try:
            return self.insert(resource, row), True
        except ConflictError:
            existing = self.find_one(resource, {key: value})
            if existing is None:
                raise
            return existing, False
