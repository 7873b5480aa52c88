"""JSON-file-backed implementation of RecordStore.

One file per resource (``<data_dir>/<resource>.json``), each holding a
list of rows.  Files are re-read on every operation so several CLI
invocations can share a data directory.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from shopcore.domain.exceptions import TransientStoreError
from shopcore.domain.repository.record_store import Row
from shopcore.infrastructure.persistence.memory_record_store import InMemoryRecordStore


class JsonRecordStore(InMemoryRecordStore):

    def __init__(
        self,
        data_dir: Path,
        unique_keys: dict[str, tuple[str, ...]] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(unique_keys=unique_keys, id_factory=id_factory)
        self._data_dir = data_dir

    # --- Storage hooks --------------------------------------------------------

    def _read(self, resource: str) -> list[Row]:
        path = self._ensure_file(resource)
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise TransientStoreError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(records, list):
            raise TransientStoreError(f"{path} does not hold a list of rows")
        return records

    def _write(self, resource: str, rows: list[Row]) -> None:
        path = self._ensure_file(resource)
        try:
            path.write_text(
                json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except (OSError, TypeError) as exc:
            raise TransientStoreError(f"Cannot write {path}: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self, resource: str) -> Path:
        path = self._data_dir / f"{resource}.json"
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise TransientStoreError(f"Cannot create {path}: {exc}") from exc
        return path
