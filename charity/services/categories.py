"""Category lookups."""

from charity.core.errors import CategoryNotFoundError
from charity.core.repository_protocols import CategoryPersistence
from charity.models import Category


class CategoryService:
    def __init__(self, categories: CategoryPersistence) -> None:
        self._categories = categories

    def list_categories(self) -> list[Category]:
        return self._categories.find_all()

    def get_category(self, category_id: int) -> Category:
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def get_category_by_name(self, name: str) -> Category:
        category = self._categories.find_by_name(name)
        if category is None:
            raise CategoryNotFoundError(name)
        return category
