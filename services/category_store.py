"""Persistent category collection backed by SQLite."""

import json
import threading
from datetime import datetime
from typing import Dict, List, Optional
from db.manager import write_transaction
from errors import ConflictError, NotFoundError
from logger import get_logger
from models.category import Category
from services.hierarchy import HierarchyValidator, REASON_PARENT_NOT_FOUND
from services.styles import StyleAssigner
from services.validation import slugify, validate_create, validate_update

logger = get_logger("categories")

_CATEGORY_SELECT_FIELDS = """id, name, slug, description, parent_id, path,
       icon, color, created_at, updated_at"""

DUPLICATE_NAME_MESSAGE = "Category with this name already exists"


class CategoryStore:
    """Owns category identity, materialized paths and referential integrity.

    Every write takes a per-store lock and runs inside an immediate SQLite
    transaction. Hierarchy checks read the tree from inside that
    transaction, so two concurrent moves can never both pass against a stale
    snapshot, and a cascading path rewrite is committed or rolled back as a
    whole.
    """

    def __init__(self, db_manager):
        """Initialize the category store.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager
        self.validator = HierarchyValidator()
        self.styles = StyleAssigner()
        self._write_lock = threading.RLock()

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            return list(self._load_all(conn).values())

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self._load_one(conn, category_id)

    def get(self, category_id: int) -> Category:
        """Get a single category by ID, raising if it does not exist.

        Raises:
            NotFoundError: If no category has this ID.
        """
        category = self.find(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a category whose name collides with the given one.

        Names are compared through their slugs, so "Guides" finds "guides".
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE slug = ?",
                (slugify(name.strip()),),
            )
            row = cursor.fetchone()
            return self._row_to_category(row) if row else None

    def find_children(self, parent_id: Optional[int]) -> List[Category]:
        """Get the direct children of a category, or the roots if parent_id is None."""
        with self.db_manager.connect() as conn:
            if parent_id is None:
                cursor = conn.execute(
                    f"""
                    SELECT {_CATEGORY_SELECT_FIELDS} FROM categories
                    WHERE parent_id IS NULL ORDER BY name
                    """
                )
            else:
                cursor = conn.execute(
                    f"""
                    SELECT {_CATEGORY_SELECT_FIELDS} FROM categories
                    WHERE parent_id = ? ORDER BY name
                    """,
                    (parent_id,),
                )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a new category.

        Missing icon/color are filled from the name by StyleAssigner.

        Args:
            name: Category name (trimmed; must be unique).
            description: Optional description.
            parent_id: Optional parent category ID.
            icon: Optional explicit icon.
            color: Optional explicit #RRGGBB color.

        Returns:
            The created Category with id, path and timestamps populated.

        Raises:
            ValidationError: If any field is malformed.
            NotFoundError: If parent_id does not exist.
            ConflictError: If the name is already taken.
        """
        data = validate_create(name, description, parent_id, icon, color)
        name = data["name"]
        slug = slugify(name)

        defaults = self.styles.assign_defaults(name)
        icon = data["icon"] if data["icon"] is not None else defaults.icon
        color = data["color"] if data["color"] is not None else defaults.color

        with self._write_lock, self.db_manager.connect() as conn:
            with write_transaction(conn):
                snapshot = self._load_all(conn)

                check = self.validator.can_set_parent(snapshot, None, parent_id)
                if not check.ok:
                    raise NotFoundError(
                        "Category", parent_id, "Parent category not found"
                    )

                self._ensure_slug_available(conn, slug)

                path = self.validator.build_path(snapshot.get(parent_id))
                cursor = conn.execute(
                    """
                    INSERT INTO categories
                        (name, slug, description, parent_id, path, icon, color)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        name,
                        slug,
                        data["description"],
                        parent_id,
                        json.dumps(path),
                        icon,
                        color,
                    ),
                )
                category_id = cursor.lastrowid

            category = self._load_one(conn, category_id)

        logger.info(
            f"Created category '{category.name}' (ID: {category.id}, depth {category.depth})"
        )
        return category

    def update(self, category_id: int, **fields) -> Category:
        """Update an existing category.

        Supported fields: name, description, parent_id, icon, color. Fields
        that are not passed are left untouched; parent_id=None moves the
        category to the root. When the parent changes, the paths of the
        category and all of its descendants are rewritten in the same
        transaction.

        Args:
            category_id: The category ID to update.
            **fields: Fields to change.

        Returns:
            The updated Category object.

        Raises:
            ValidationError: If a field is unsupported or malformed.
            NotFoundError: If the category or the new parent does not exist.
            ConflictError: If the new name is taken or the move is illegal
                (self-parent or cycle).
        """
        changes = validate_update(fields)

        with self._write_lock, self.db_manager.connect() as conn:
            with write_transaction(conn):
                snapshot = self._load_all(conn)
                current = snapshot.get(category_id)
                if current is None:
                    raise NotFoundError("Category", category_id)

                columns: Dict[str, object] = {}

                if "name" in changes and changes["name"] != current.name:
                    slug = slugify(changes["name"])
                    self._ensure_slug_available(conn, slug, exclude_id=category_id)
                    columns["name"] = changes["name"]
                    columns["slug"] = slug

                for field in ("description", "icon", "color"):
                    if field in changes:
                        columns[field] = changes[field]

                if "parent_id" in changes and changes["parent_id"] != current.parent_id:
                    new_parent_id = changes["parent_id"]
                    self._check_move(snapshot, category_id, new_parent_id)
                    columns["parent_id"] = new_parent_id
                    self._cascade_paths(
                        conn,
                        snapshot,
                        category_id,
                        self.validator.build_path(snapshot.get(new_parent_id)),
                    )

                assignments = ", ".join(f"{column} = ?" for column in columns)
                if assignments:
                    assignments += ", "
                conn.execute(
                    f"""
                    UPDATE categories
                    SET {assignments}updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (*columns.values(), category_id),
                )

            category = self._load_one(conn, category_id)

        logger.info(f"Updated category '{category.name}' (ID: {category.id})")
        return category

    def delete(self, category_id: int) -> None:
        """Delete a category by ID.

        Categories that still have subcategories or documents are never
        removed; descendants are not reparented or cascaded.

        Raises:
            NotFoundError: If the category does not exist.
            ConflictError: If the category has children or documents.
        """
        with self._write_lock, self.db_manager.connect() as conn:
            with write_transaction(conn):
                category = self._load_one(conn, category_id)
                if category is None:
                    raise NotFoundError("Category", category_id)

                children = conn.execute(
                    "SELECT COUNT(*) FROM categories WHERE parent_id = ?",
                    (category_id,),
                ).fetchone()[0]
                if children:
                    raise ConflictError(
                        "Cannot delete category with subcategories. "
                        "Delete subcategories first."
                    )

                documents = conn.execute(
                    "SELECT COUNT(*) FROM document_categories WHERE category_id = ?",
                    (category_id,),
                ).fetchone()[0]
                if documents:
                    raise ConflictError(
                        "Cannot delete category with documents. Move documents first."
                    )

                conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))

        logger.info(f"Deleted category '{category.name}' (ID: {category_id})")

    def _check_move(
        self,
        snapshot: Dict[int, Category],
        category_id: int,
        new_parent_id: Optional[int],
    ) -> None:
        check = self.validator.can_set_parent(snapshot, category_id, new_parent_id)
        if check.ok:
            return
        if check.reason == REASON_PARENT_NOT_FOUND:
            raise NotFoundError("Category", new_parent_id, "Parent category not found")
        logger.warning(
            f"Rejected moving category {category_id} under {new_parent_id}: {check.reason}"
        )
        raise ConflictError(
            f"Cannot set parent of category {category_id} to {new_parent_id}: "
            f"{check.reason}",
            field="parent_id",
        )

    def _cascade_paths(
        self,
        conn,
        snapshot: Dict[int, Category],
        category_id: int,
        new_path: List[int],
    ) -> None:
        """Rewrite the path of a moved category and all of its descendants."""
        paths = {category_id: new_path}
        self._write_path(conn, category_id, new_path)

        descendants = self.validator.find_descendants(snapshot, category_id)
        for descendant in descendants:
            path = paths[descendant.parent_id] + [descendant.parent_id]
            paths[descendant.id] = path
            self._write_path(conn, descendant.id, path)

        if descendants:
            logger.debug(
                f"Cascaded path update from category {category_id} "
                f"to {len(descendants)} descendant(s)"
            )

    def _write_path(self, conn, category_id: int, path: List[int]) -> None:
        conn.execute(
            """
            UPDATE categories
            SET path = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (json.dumps(path), category_id),
        )

    def _ensure_slug_available(self, conn, slug: str, exclude_id: int = None) -> None:
        row = conn.execute(
            "SELECT id FROM categories WHERE slug = ?", (slug,)
        ).fetchone()
        if row and row[0] != exclude_id:
            logger.debug(f"Duplicate category slug '{slug}' (held by ID {row[0]})")
            raise ConflictError(DUPLICATE_NAME_MESSAGE, field="name")

    def _load_all(self, conn) -> Dict[int, Category]:
        cursor = conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name, id"
        )
        categories = (self._row_to_category(row) for row in cursor.fetchall())
        return {c.id: c for c in categories}

    def _load_one(self, conn, category_id: int) -> Optional[Category]:
        cursor = conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
            (category_id,),
        )
        row = cursor.fetchone()
        return self._row_to_category(row) if row else None

    def _row_to_category(self, row: tuple) -> Category:
        """Convert a database row to a Category object."""
        return Category(
            id=row[0],
            name=row[1],
            slug=row[2],
            description=row[3],
            parent_id=row[4],
            path=json.loads(row[5]) if row[5] else [],
            icon=row[6],
            color=row[7],
            created_at=datetime.fromisoformat(row[8]) if row[8] else None,
            updated_at=datetime.fromisoformat(row[9]) if row[9] else None,
        )
