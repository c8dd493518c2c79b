"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database.

    A single CategoryStore is shared by everything in the container so that
    its write lock covers every hierarchy mutation made through it.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.category_store import CategoryStore
        from services.documents import DocumentCategoryService
        from services.categories import CategoryService

        self.category_store = CategoryStore(self.db_manager)
        self.documents = DocumentCategoryService(self.db_manager)
        self.categories = CategoryService(self.category_store, self.documents)
