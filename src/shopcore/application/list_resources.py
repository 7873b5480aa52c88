"""Application service: paged, filtered, searchable listing of any resource.

A store failure degrades to an empty page instead of propagating, which
is what the list screens expect, but it is always logged with the
resource, filters, search term and cause.  Malformed pagination
parameters are rejected, never clamped.
"""

from __future__ import annotations

import logging

from shopcore.application.resources import ResourceType, strategy_for
from shopcore.domain.exceptions import STORE_FAILURES
from shopcore.domain.model.pagination import PaginatedResult, compute_meta, page_window
from shopcore.domain.repository.record_store import RecordStore, Row

logger = logging.getLogger(__name__)


class ListResourcesHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(
        self,
        resource: str | ResourceType,
        page: int = 1,
        limit: int = 10,
        filters: Row | None = None,
        search: str | None = None,
    ) -> PaginatedResult:
        """Return one page of *resource*.

        With a search term the store is asked for the page window of the
        matches, but ``total`` and the page metadata come from the full
        match count, not from the length of the returned page.
        """
        strategy = strategy_for(resource)
        window = page_window(page, limit)
        checked = strategy.check_filters(filters)
        term = (search or "").strip()

        try:
            if term:
                rows, total = self._store.search_page(
                    strategy.name,
                    term,
                    strategy.search_field,
                    checked,
                    window.offset,
                    window.count,
                    order_by=strategy.order_by,
                    descending=strategy.descending,
                )
            else:
                rows, total = self._store.list_page(
                    strategy.name,
                    checked,
                    window.offset,
                    window.count,
                    order_by=strategy.order_by,
                    descending=strategy.descending,
                )
            documents = [strategy.to_domain(row) for row in rows]
        except STORE_FAILURES as exc:
            logger.error(
                "Listing %s failed (page=%d limit=%d filters=%r search=%r): %s",
                strategy.name,
                page,
                limit,
                checked,
                term or None,
                exc,
            )
            return PaginatedResult.empty(page, limit)

        logger.debug("Listed %s page %d: %d of %d rows", strategy.name, page, len(documents), total)
        return PaginatedResult(
            documents=documents,
            total=total,
            meta=compute_meta(page, limit, total),
        )
