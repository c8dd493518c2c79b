"""Category model for organizing documents into a topic tree."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class Category:
    """Represents a node in the document category tree.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Display name (unique, compared through its slug).
        slug: Normalized form of the name used for uniqueness checks.
        description: Optional description of what belongs in this category.
        parent_id: Optional parent category ID. None means root category.
        path: Ancestor IDs from root to immediate parent, excluding this category.
        icon: Emoji shown next to the category.
        color: Hex color (#RRGGBB).
        created_at: Timestamp when the category was created.
        updated_at: Timestamp of the last write, including cascaded path rewrites.
        document_count: Number of associated documents. Computed at read time,
            never stored.
    """

    id: int
    name: str
    slug: str
    description: Optional[str]
    parent_id: Optional[int] = None
    path: List[int] = field(default_factory=list)
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    document_count: int = 0

    @property
    def depth(self) -> int:
        """Distance from the root; root categories have depth 0."""
        return len(self.path)

    def to_dict(self) -> dict:
        """Convert category to a plain dictionary for presentation layers."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "parent_id": self.parent_id,
            "path": list(self.path),
            "depth": self.depth,
            "icon": self.icon,
            "color": self.color,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "document_count": self.document_count,
        }


@dataclass
class CategoryStats:
    """Aggregate document statistics across all categories.

    Attributes:
        total_categories: Number of categories.
        total_documents: Distinct documents with at least one category.
        per_category: Category ID mapped to its document count.
        average_per_category: total_documents / total_categories, rounded half
            up; 0 when there are no categories.
        top_categories: Up to ten categories with the most documents.
    """

    total_categories: int
    total_documents: int
    per_category: Dict[int, int]
    average_per_category: int
    top_categories: List[Category] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_categories": self.total_categories,
            "total_documents": self.total_documents,
            "average_per_category": self.average_per_category,
            "top_categories": [
                {"id": c.id, "name": c.name, "document_count": c.document_count}
                for c in self.top_categories
            ],
        }
