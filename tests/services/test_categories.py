import pytest

from errors import ConflictError, NotFoundError, ValidationError
from services.styles import StyleAssigner
from tests.helpers import make_tree


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category_simple(self, services):
        """Test creating a simple root category."""
        category = services.categories.create_category("Docs", "All documentation")

        assert category.id is not None
        assert category.id > 0
        assert category.name == "Docs"
        assert category.description == "All documentation"
        assert category.parent_id is None
        assert category.path == []
        assert category.depth == 0
        assert category.created_at is not None
        assert category.updated_at is not None

    def test_create_category_with_parent(self, services):
        """Test creating a category under a parent."""
        docs = services.categories.create_category("Docs")
        api = services.categories.create_category("API", parent_id=docs.id)

        assert api.parent_id == docs.id
        assert api.path == [docs.id]
        assert api.depth == 1

    def test_create_category_trims_name(self, services):
        """Test that surrounding whitespace is stripped from names."""
        category = services.categories.create_category("  Guides  ")

        assert category.name == "Guides"

    def test_create_category_without_description(self, services):
        """Test creating a category without a description."""
        category = services.categories.create_category("Utilities")

        assert category.description is None

    def test_create_category_with_empty_string_description(self, services):
        """Test that an empty description is kept as an empty string."""
        category = services.categories.create_category("Test", "")

        found = services.categories.get_category(category.id)
        assert found.description == ""

    def test_create_category_applies_style_defaults(self, services):
        """Test that icon and color are derived from the name when omitted."""
        category = services.categories.create_category("Getting Started Tutorial")

        expected = StyleAssigner.assign_defaults("Getting Started Tutorial")
        assert category.icon == expected.icon == "📚"
        assert category.color == expected.color

    def test_create_category_keeps_explicit_style(self, services):
        """Test that explicit icon and color are never overwritten."""
        category = services.categories.create_category(
            "Tutorial Library", icon="🎯", color="#ABCDEF"
        )

        assert category.icon == "🎯"
        assert category.color == "#ABCDEF"

    def test_create_category_partial_explicit_style(self, services):
        """Test that only the missing style field is derived."""
        category = services.categories.create_category("FAQ", color="#000000")

        assert category.icon == "❓"
        assert category.color == "#000000"

    def test_create_duplicate_name_raises_conflict(self, services):
        """Test that a second category with the same name is a conflict."""
        services.categories.create_category("Guides")

        with pytest.raises(ConflictError, match="already exists"):
            services.categories.create_category("Guides")

    def test_create_duplicate_name_different_case_raises_conflict(self, services):
        """Test that names differing only in case collide."""
        services.categories.create_category("Guides")

        with pytest.raises(ConflictError):
            services.categories.create_category("guides")

    def test_create_with_unknown_parent_raises_not_found(self, services):
        """Test that a missing parent is reported as not found."""
        with pytest.raises(NotFoundError, match="Parent category not found"):
            services.categories.create_category("Orphan", parent_id=9999)

        assert services.categories.list_categories() == []

    def test_create_validation_lists_every_bad_field(self, services):
        """Test that validation reports one message per offending field."""
        with pytest.raises(ValidationError) as exc_info:
            services.categories.create_category(
                "   ", description="x" * 501, color="blue"
            )

        assert set(exc_info.value.errors) == {"name", "description", "color"}

    def test_create_name_length_limit(self, services):
        """Test the 100 character name limit after trimming."""
        services.categories.create_category(" " + "a" * 100 + " ")

        with pytest.raises(ValidationError) as exc_info:
            services.categories.create_category("b" * 101)
        assert "name" in exc_info.value.errors

    def test_get_category_not_found(self, services):
        """Test that getting an unknown category raises NotFoundError."""
        with pytest.raises(NotFoundError, match="Category with ID 9999 not found"):
            services.categories.get_category(9999)

    def test_get_category_includes_document_count(self, services):
        """Test that get_category reports the number of documents."""
        category = services.categories.create_category("Policies")
        services.documents.assign("doc-1", category.id)
        services.documents.assign("doc-2", category.id)

        found = services.categories.get_category(category.id)

        assert found.document_count == 2

    def test_list_categories_empty(self, services):
        """Test listing when there are no categories."""
        categories = services.categories.list_categories()

        assert categories == []
        assert isinstance(categories, list)

    def test_list_categories_display_order(self, services):
        """Test that listing is parents-first, then name (case-insensitive)."""
        make_tree(
            services,
            [
                ("beta", [("Mid", [("Zeta", [])])]),
                ("Alpha", [("gamma", []), ("Delta", [])]),
            ],
        )

        names = [c.name for c in services.categories.list_categories()]

        assert names == ["Alpha", "beta", "Delta", "gamma", "Mid", "Zeta"]

    def test_list_categories_includes_counts(self, services):
        """Test that each listed category carries its own document count."""
        tree = make_tree(services, [("Docs", [("API", [])])])
        services.documents.assign("doc-1", tree["API"].id)
        services.documents.assign("doc-2", tree["API"].id)
        services.documents.assign("doc-2", tree["Docs"].id)

        counts = {c.name: c.document_count for c in services.categories.list_categories()}

        assert counts == {"Docs": 1, "API": 2}

    def test_update_category_name(self, services):
        """Test renaming a category."""
        category = services.categories.create_category("OldName", "Description")

        updated = services.categories.update_category(category.id, name="NewName")

        assert updated.id == category.id
        assert updated.name == "NewName"
        assert updated.description == "Description"
        assert services.categories.get_category(category.id).name == "NewName"

    def test_update_name_keeps_style(self, services):
        """Test that renaming does not recompute icon or color."""
        category = services.categories.create_category("Meeting Notes")

        updated = services.categories.update_category(category.id, name="Tutorials")

        assert updated.icon == category.icon == "📝"
        assert updated.color == category.color

    def test_update_name_case_only(self, services):
        """Test that a category can change the case of its own name."""
        category = services.categories.create_category("guides")

        updated = services.categories.update_category(category.id, name="Guides")

        assert updated.name == "Guides"

    def test_update_name_to_existing_raises_conflict(self, services):
        """Test that renaming onto another category's name is a conflict."""
        services.categories.create_category("Taken")
        other = services.categories.create_category("Free")

        with pytest.raises(ConflictError):
            services.categories.update_category(other.id, name="TAKEN")

    def test_update_description_only(self, services):
        """Test that fields not passed are left untouched."""
        parent = services.categories.create_category("Parent")
        child = services.categories.create_category(
            "Child", "Old description", parent_id=parent.id
        )

        updated = services.categories.update_category(
            child.id, description="New description"
        )

        assert updated.description == "New description"
        assert updated.parent_id == parent.id
        assert updated.path == [parent.id]

    def test_update_icon_and_color(self, services):
        category = services.categories.create_category("Design")

        updated = services.categories.update_category(
            category.id, icon="🎨", color="#123456"
        )

        assert updated.icon == "🎨"
        assert updated.color == "#123456"

    def test_update_rejects_unsupported_fields(self, services):
        """Test that fields outside the updatable set are rejected."""
        category = services.categories.create_category("Docs")

        with pytest.raises(ValidationError) as exc_info:
            services.categories.update_category(category.id, slug="x", path=[])

        assert set(exc_info.value.errors) == {"slug", "path"}

    def test_update_nonexistent_category_raises_not_found(self, services):
        """Test that updating a non-existent category raises NotFoundError."""
        with pytest.raises(NotFoundError, match="Category with ID 9999 not found"):
            services.categories.update_category(9999, name="Name")

    def test_update_category_parent_id(self, services):
        """Test moving a root category under a parent."""
        parent = services.categories.create_category("Parent")
        child = services.categories.create_category("Child")

        updated = services.categories.update_category(child.id, parent_id=parent.id)

        assert updated.parent_id == parent.id
        assert updated.depth == 1

    def test_update_category_remove_parent(self, services):
        """Test moving a category to the root with parent_id=None."""
        parent = services.categories.create_category("Parent")
        child = services.categories.create_category("Child", parent_id=parent.id)

        updated = services.categories.update_category(child.id, parent_id=None)

        assert updated.parent_id is None
        assert updated.path == []
        assert updated.depth == 0

    def test_update_to_current_parent_is_noop(self, services):
        """Test that re-assigning the current parent succeeds."""
        parent = services.categories.create_category("Parent")
        child = services.categories.create_category("Child", parent_id=parent.id)

        updated = services.categories.update_category(child.id, parent_id=parent.id)

        assert updated.parent_id == parent.id
        assert updated.path == [parent.id]

    def test_delete_category(self, services):
        """Test deleting a leaf category."""
        category = services.categories.create_category("ToDelete")

        services.categories.delete_category(category.id)

        with pytest.raises(NotFoundError):
            services.categories.get_category(category.id)

    def test_delete_nonexistent_category(self, services):
        """Test deleting a non-existent category raises NotFoundError."""
        with pytest.raises(NotFoundError):
            services.categories.delete_category(9999)

    def test_delete_with_documents_raises_conflict(self, services):
        """Test that a category holding documents cannot be deleted."""
        category = services.categories.create_category("Busy")
        services.documents.assign("doc-1", category.id)

        with pytest.raises(ConflictError, match="documents"):
            services.categories.delete_category(category.id)

        services.documents.unassign("doc-1", category.id)
        services.categories.delete_category(category.id)

    def test_delete_does_not_affect_other_categories(self, services):
        """Test that deleting one category doesn't affect others."""
        services.categories.create_category("Keep1")
        doomed = services.categories.create_category("Delete")
        services.categories.create_category("Keep2")

        services.categories.delete_category(doomed.id)

        names = {c.name for c in services.categories.list_categories()}
        assert names == {"Keep1", "Keep2"}

    def test_docs_api_scenario(self, services):
        """Test the create / illegal move / illegal delete walkthrough."""
        docs = services.categories.create_category("Docs")
        assert docs.depth == 0
        assert docs.path == []

        api = services.categories.create_category("API", parent_id=docs.id)
        assert api.depth == 1
        assert api.path == [docs.id]

        with pytest.raises(ConflictError, match="cycle"):
            services.categories.update_category(docs.id, parent_id=api.id)

        with pytest.raises(ConflictError, match="subcategories"):
            services.categories.delete_category(docs.id)

        # Nothing was partially applied
        assert services.categories.get_category(docs.id).parent_id is None
        assert services.categories.get_category(api.id).path == [docs.id]

    def test_hierarchical_categories_three_levels(self, services):
        """Test creating a three-level category hierarchy."""
        tree = make_tree(
            services, [("Reference", [("API Reference", [("API Examples", [])])])]
        )

        examples = services.categories.get_category(tree["API Examples"].id)

        assert examples.path == [tree["Reference"].id, tree["API Reference"].id]
        assert examples.depth == 2

    def test_get_children_and_roots(self, services):
        """Test direct-children and root lookups."""
        tree = make_tree(
            services,
            [("Shopping", [("Clothes", []), ("Books", [("Comics", [])])]), ("Misc", [])],
        )

        children = services.categories.get_children(tree["Shopping"].id)
        roots = services.categories.get_root_categories()

        assert [c.name for c in children] == ["Books", "Clothes"]
        assert [c.name for c in roots] == ["Misc", "Shopping"]

    def test_get_children_unknown_parent(self, services):
        with pytest.raises(NotFoundError):
            services.categories.get_children(9999)

    def test_get_full_path(self, services):
        """Test the slash-joined name path from root to category."""
        tree = make_tree(services, [("Docs", [("API", [("v2", [])])])])

        assert services.categories.get_full_path(tree["v2"].id) == "Docs/API/v2"
        assert services.categories.get_full_path(tree["Docs"].id) == "Docs"

    def test_stats_empty(self, services):
        """Test that stats with no categories average to zero."""
        stats = services.categories.get_category_stats()

        assert stats.total_categories == 0
        assert stats.total_documents == 0
        assert stats.average_per_category == 0
        assert stats.per_category == {}

    def test_stats_counts(self, services):
        """Test totals, per-category counts and the rounded average."""
        tree = make_tree(services, [("Docs", [("API", [])]), ("Notes", [])])
        services.documents.assign("doc-1", tree["Docs"].id)
        services.documents.assign("doc-1", tree["API"].id)
        services.documents.assign("doc-2", tree["API"].id)
        services.documents.assign("doc-3", tree["Notes"].id)
        services.documents.assign("doc-4", tree["Notes"].id)

        stats = services.categories.get_category_stats()

        assert stats.total_categories == 3
        assert stats.total_documents == 4
        assert stats.per_category == {
            tree["Docs"].id: 1,
            tree["API"].id: 2,
            tree["Notes"].id: 2,
        }
        # 4 / 3 = 1.33
        assert stats.average_per_category == 1
        # Ties keep display order (Notes is a root, API is not)
        assert [c.name for c in stats.top_categories] == ["Notes", "API", "Docs"]

    def test_to_dict_for_presentation(self, services):
        """Test the plain-dict shapes handed to presentation layers."""
        tree = make_tree(services, [("Docs", [("API", [])])])
        services.documents.assign("doc-1", tree["API"].id)

        api = services.categories.get_category(tree["API"].id).to_dict()
        stats = services.categories.get_category_stats().to_dict()

        assert api["depth"] == 1
        assert api["path"] == [tree["Docs"].id]
        assert api["document_count"] == 1
        assert stats["total_documents"] == 1
        assert stats["top_categories"][0] == {
            "id": tree["API"].id,
            "name": "API",
            "document_count": 1,
        }
