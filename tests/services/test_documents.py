import pytest

from errors import NotFoundError


class TestDocumentCategoryService:
    """Tests for DocumentCategoryService."""

    def test_assign_and_find(self, services):
        docs = services.categories.create_category("Docs")
        api = services.categories.create_category("API", parent_id=docs.id)

        services.documents.assign("doc-1", docs.id)
        services.documents.assign("doc-1", api.id)

        assert services.documents.find_category_ids("doc-1") == {docs.id, api.id}
        assert services.documents.find_document_ids(api.id) == ["doc-1"]

    def test_assign_twice_is_noop(self, services):
        category = services.categories.create_category("Docs")

        services.documents.assign("doc-1", category.id)
        services.documents.assign("doc-1", category.id)

        assert services.documents.count_for_category(category.id) == 1

    def test_assign_unknown_category(self, services):
        with pytest.raises(NotFoundError):
            services.documents.assign("doc-1", 9999)

        assert services.documents.category_index() == {}

    def test_unassign(self, services):
        category = services.categories.create_category("Docs")
        services.documents.assign("doc-1", category.id)

        assert services.documents.unassign("doc-1", category.id) is True
        assert services.documents.unassign("doc-1", category.id) is False
        assert services.documents.find_category_ids("doc-1") == set()

    def test_set_categories_replaces_set(self, services):
        a = services.categories.create_category("A")
        b = services.categories.create_category("B")
        c = services.categories.create_category("C")
        services.documents.assign("doc-1", a.id)

        services.documents.set_categories("doc-1", [b.id, c.id, c.id])

        assert services.documents.find_category_ids("doc-1") == {b.id, c.id}

    def test_set_categories_unknown_category_changes_nothing(self, services):
        a = services.categories.create_category("A")
        services.documents.assign("doc-1", a.id)

        with pytest.raises(NotFoundError):
            services.documents.set_categories("doc-1", [a.id, 9999])

        assert services.documents.find_category_ids("doc-1") == {a.id}

    def test_category_index(self, services):
        a = services.categories.create_category("A")
        b = services.categories.create_category("B")
        services.documents.assign("doc-1", a.id)
        services.documents.assign("doc-2", a.id)
        services.documents.assign("doc-2", b.id)

        index = services.documents.category_index()

        assert index == {"doc-1": {a.id}, "doc-2": {a.id, b.id}}

    def test_find_document_ids_sorted(self, services):
        category = services.categories.create_category("Docs")
        for document_id in ("doc-c", "doc-a", "doc-b"):
            services.documents.assign(document_id, category.id)

        assert services.documents.find_document_ids(category.id) == [
            "doc-a",
            "doc-b",
            "doc-c",
        ]
