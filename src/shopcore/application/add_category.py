"""Application service: Add Category / Add Subcategory use cases."""

from __future__ import annotations

import logging

from shopcore.application import mappers
from shopcore.application.resources import ResourceType
from shopcore.domain.exceptions import EntityNotFoundError
from shopcore.domain.model.catalog import Category, Subcategory
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)


class AddCategoryHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(self, name: str, description: str = "") -> Category:
        category = Category.create(name=name, description=description)
        row = self._store.insert(ResourceType.CATEGORIES.value, mappers.category_to_row(category))
        category.id = row["id"]
        logger.info("Added category %s %r", category.id, category.name)
        return category


class AddSubcategoryHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(self, name: str, category_id: str, description: str = "") -> Subcategory:
        """Add a subcategory; its parent category must already exist."""
        subcategory = Subcategory.create(
            name=name, category_id=category_id, description=description
        )
        if self._store.find_one(ResourceType.CATEGORIES.value, {"id": category_id}) is None:
            raise EntityNotFoundError(f"Parent category '{category_id}' not found")

        row = self._store.insert(
            ResourceType.SUBCATEGORIES.value, mappers.subcategory_to_row(subcategory)
        )
        subcategory.id = row["id"]
        logger.info(
            "Added subcategory %s %r under category %s", subcategory.id, subcategory.name, category_id
        )
        return subcategory
