"""Document statistics and display ordering for categories."""

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping
from models.category import Category, CategoryStats

TOP_CATEGORIES_LIMIT = 10


def sort_for_display(categories: Iterable[Category]) -> List[Category]:
    """Order categories parents-first: depth ascending, then name (case-insensitive)."""
    return sorted(categories, key=lambda c: (c.depth, c.name.casefold()))


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CategoryAggregator:
    """Computes per-category and global document counts.

    Nothing is cached; every call works from the categories and index it is
    given.
    """

    @staticmethod
    def count_per_category(
        categories: Iterable[Category],
        document_category_index: Mapping[str, Iterable[int]],
    ) -> Dict[int, int]:
        """Count documents per category.

        Every category gets an entry (possibly 0). Associations with IDs not
        in categories are ignored.
        """
        counts = {c.id: 0 for c in categories}
        for category_ids in document_category_index.values():
            for category_id in set(category_ids):
                if category_id in counts:
                    counts[category_id] += 1
        return counts

    @staticmethod
    def with_counts(
        categories: Iterable[Category], per_category: Mapping[int, int]
    ) -> List[Category]:
        """Copies of categories with document_count filled in."""
        return [
            replace(c, document_count=per_category.get(c.id, 0)) for c in categories
        ]

    def stats(
        self,
        categories: Iterable[Category],
        document_category_index: Mapping[str, Iterable[int]],
    ) -> CategoryStats:
        """Compute aggregate statistics.

        Args:
            categories: All current categories.
            document_category_index: Document ID mapped to its category IDs.

        Returns:
            CategoryStats. total_documents counts distinct documents linked to
            at least one existing category, and is the denominator for
            average_per_category (0 when there are no categories).
        """
        categories = list(categories)
        per_category = self.count_per_category(categories, document_category_index)

        total_documents = sum(
            1
            for category_ids in document_category_index.values()
            if any(category_id in per_category for category_id in category_ids)
        )
        total_categories = len(categories)

        if total_categories == 0:
            average = 0
        else:
            average = round_half_up(Decimal(total_documents) / Decimal(total_categories))

        ranked = sorted(
            sort_for_display(self.with_counts(categories, per_category)),
            key=lambda c: c.document_count,
            reverse=True,
        )

        return CategoryStats(
            total_categories=total_categories,
            total_documents=total_documents,
            per_category=per_category,
            average_per_category=average,
            top_categories=ranked[:TOP_CATEGORIES_LIMIT],
        )
