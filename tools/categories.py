"""Category tree tools used by the CLI."""

from typing import Dict, List, Optional
from models.category import Category


def build_category_tree(services) -> List[Dict]:
    """Build a nested tree of categories with document counts.

    Args:
        services: Services container with the category service.

    Returns:
        List of root nodes in display order. Each node is a dictionary with
        "category" (Category) and "children" (list of nodes).

    Example:
        [
            {
                "category": Category(name="Docs", ...),
                "children": [
                    {"category": Category(name="API", ...), "children": []},
                ],
            },
        ]
    """
    categories = services.categories.list_categories()

    nodes = {c.id: {"category": c, "children": []} for c in categories}
    roots = []

    # list_categories() is parents-first, so children stay in display order
    for category in categories:
        node = nodes[category.id]
        if category.parent_id is None or category.parent_id not in nodes:
            roots.append(node)
        else:
            nodes[category.parent_id]["children"].append(node)

    return roots


def render_category_tree(nodes: List[Dict], indent: str = "  ") -> List[str]:
    """Render tree nodes as indented text lines.

    Each line looks like "  📚 Getting Started Tutorial (3 docs) [ID: 4]".
    """
    lines = []

    def _render(node: Dict, level: int) -> None:
        category: Category = node["category"]
        docs = "doc" if category.document_count == 1 else "docs"
        lines.append(
            f"{indent * level}{category.icon} {category.name} "
            f"({category.document_count} {docs}) [ID: {category.id}]"
        )
        for child in node["children"]:
            _render(child, level + 1)

    for node in nodes:
        _render(node, 0)

    return lines


def get_subtree_document_count(services, category_id: int) -> int:
    """Count distinct documents in a category or any of its descendants."""
    categories = services.category_store.find_all()
    subtree = {category_id}
    subtree.update(c.id for c in categories if category_id in c.path)

    index = services.documents.category_index()
    return sum(1 for category_ids in index.values() if subtree & category_ids)


def find_category(services, reference: str) -> Optional[Category]:
    """Resolve a category by numeric ID or by name."""
    if reference.isdigit():
        return services.category_store.find(int(reference))
    return services.category_store.find_by_name(reference)
