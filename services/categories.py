"""Public category operations consumed by document management and UI layers."""

from typing import List, Optional
from errors import NotFoundError
from models.category import Category, CategoryStats
from services.aggregator import CategoryAggregator, sort_for_display


class CategoryService:
    """Create, update, delete, list and summarize categories.

    Writes go through the CategoryStore; document counts come from the
    document association index and are computed per call.
    """

    def __init__(self, store, documents):
        """Initialize the category service.

        Args:
            store: CategoryStore holding the category tree.
            documents: DocumentCategoryService providing document associations.
        """
        self.store = store
        self.documents = documents
        self.aggregator = CategoryAggregator()

    def create_category(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a category. Missing icon/color are derived from the name.

        Raises:
            ValidationError: Malformed field(s).
            NotFoundError: Unknown parent.
            ConflictError: Duplicate name.
        """
        return self.store.create(
            name, description=description, parent_id=parent_id, icon=icon, color=color
        )

    def update_category(self, category_id: int, **fields) -> Category:
        """Apply a partial update (name, description, parent_id, icon, color).

        Raises:
            ValidationError: Malformed or unsupported field(s).
            NotFoundError: Unknown category or parent.
            ConflictError: Duplicate name, self-parent or cycle.
        """
        category = self.store.update(category_id, **fields)
        category.document_count = self.documents.count_for_category(category.id)
        return category

    def delete_category(self, category_id: int) -> None:
        """Delete a category that has neither subcategories nor documents.

        Raises:
            NotFoundError: Unknown category.
            ConflictError: The category still has children or documents.
        """
        self.store.delete(category_id)

    def get_category(self, category_id: int) -> Category:
        """Get a category with its document count.

        Raises:
            NotFoundError: Unknown category.
        """
        category = self.store.get(category_id)
        category.document_count = self.documents.count_for_category(category_id)
        return category

    def list_categories(self) -> List[Category]:
        """All categories in display order (parents first), with document counts."""
        categories = self.store.find_all()
        per_category = self.aggregator.count_per_category(
            categories, self.documents.category_index()
        )
        return sort_for_display(self.aggregator.with_counts(categories, per_category))

    def get_category_stats(self) -> CategoryStats:
        """Totals, per-category counts, average and top categories."""
        return self.aggregator.stats(
            self.store.find_all(), self.documents.category_index()
        )

    def get_children(self, parent_id: int) -> List[Category]:
        """Direct children of a category, in display order."""
        self.store.get(parent_id)
        return sort_for_display(self.store.find_children(parent_id))

    def get_root_categories(self) -> List[Category]:
        return sort_for_display(self.store.find_children(None))

    def get_full_path(self, category_id: int) -> str:
        """Names from the root down to this category, joined by "/".

        Raises:
            NotFoundError: Unknown category.
        """
        by_id = {c.id: c for c in self.store.find_all()}
        category = by_id.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        names = [by_id[ancestor_id].name for ancestor_id in category.path]
        return "/".join(names + [category.name])
