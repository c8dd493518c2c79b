"""Document-to-category associations.

Documents themselves live with the document collaborator; only their opaque
IDs and category links are stored here. This is the index the aggregator
reads counts from.
"""

from typing import Dict, Iterable, List, Set
from db.manager import write_transaction
from errors import NotFoundError
from logger import get_logger

logger = get_logger("documents")


class DocumentCategoryService:
    """Service for managing which categories a document belongs to."""

    def __init__(self, db_manager):
        """Initialize the document category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def assign(self, document_id: str, category_id: int) -> None:
        """Link a document to a category. Assigning twice is a no-op.

        Raises:
            NotFoundError: If the category does not exist.
        """
        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                self._ensure_categories_exist(conn, [category_id])
                conn.execute(
                    """
                    INSERT OR IGNORE INTO document_categories (document_id, category_id)
                    VALUES (?, ?)
                    """,
                    (document_id, category_id),
                )
        logger.debug(f"Assigned document {document_id} to category {category_id}")

    def unassign(self, document_id: str, category_id: int) -> bool:
        """Remove a document from a category.

        Returns:
            True if a link was removed, False if none existed.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM document_categories WHERE document_id = ? AND category_id = ?",
                (document_id, category_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def set_categories(self, document_id: str, category_ids: Iterable[int]) -> None:
        """Replace the full category set of a document in one transaction.

        Raises:
            NotFoundError: If any category does not exist. Nothing is changed.
        """
        category_ids = sorted(set(category_ids))
        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                self._ensure_categories_exist(conn, category_ids)
                conn.execute(
                    "DELETE FROM document_categories WHERE document_id = ?",
                    (document_id,),
                )
                conn.executemany(
                    "INSERT INTO document_categories (document_id, category_id) VALUES (?, ?)",
                    [(document_id, category_id) for category_id in category_ids],
                )

    def find_category_ids(self, document_id: str) -> Set[int]:
        """Get the IDs of all categories a document belongs to."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT category_id FROM document_categories WHERE document_id = ?",
                (document_id,),
            )
            return {row[0] for row in cursor.fetchall()}

    def find_document_ids(self, category_id: int) -> List[str]:
        """Get the IDs of all documents in a category, sorted."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT document_id FROM document_categories
                WHERE category_id = ?
                ORDER BY document_id
                """,
                (category_id,),
            )
            return [row[0] for row in cursor.fetchall()]

    def count_for_category(self, category_id: int) -> int:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM document_categories WHERE category_id = ?",
                (category_id,),
            )
            return cursor.fetchone()[0]

    def category_index(self) -> Dict[str, Set[int]]:
        """Get every document's category set.

        Returns:
            Mapping of document ID to the set of its category IDs. Documents
            without categories do not appear.
        """
        index: Dict[str, Set[int]] = {}
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT document_id, category_id FROM document_categories"
            )
            for document_id, category_id in cursor.fetchall():
                index.setdefault(document_id, set()).add(category_id)
        return index

    def _ensure_categories_exist(self, conn, category_ids: List[int]) -> None:
        for category_id in category_ids:
            row = conn.execute(
                "SELECT 1 FROM categories WHERE id = ?", (category_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError("Category", category_id)
