#!/usr/bin/env python3

import sys
import json
from config import get_seed_file
from errors import FolioError
from logger import get_logger
from tools.categories import (
    build_category_tree,
    get_subtree_document_count,
    render_category_tree,
)

logger = get_logger()


def cmd_list(args, services):
    """List all categories as an indented tree."""
    tree = build_category_tree(services)

    if not tree:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for line in render_category_tree(tree):
        logger.info(line)
    logger.info("=" * 80)

    total = len(services.category_store.find_all())
    logger.info(f"\nTotal categories: {total}")


def cmd_show(args, services):
    """Show a single category in detail."""
    category = services.categories.get_category(args.category_id)

    logger.info(f"\nID: {category.id}")
    logger.info(f"Name: {category.name}")
    logger.info(f"Path: {services.categories.get_full_path(category.id)}")
    if category.description:
        logger.info(f"Description: {category.description}")
    if category.parent_id:
        parent = services.category_store.find(category.parent_id)
        logger.info(f"Parent: {parent.name} (ID: {category.parent_id})")
    logger.info(f"Depth: {category.depth}")
    logger.info(f"Icon: {category.icon}")
    logger.info(f"Color: {category.color}")
    logger.info(f"Documents: {category.document_count}")
    logger.info(
        f"Documents incl. subcategories: "
        f"{get_subtree_document_count(services, category.id)}"
    )

    children = services.categories.get_children(category.id)
    if children:
        logger.info("Subcategories: " + ", ".join(c.name for c in children))


def cmd_create(args, services):
    """Create a new category."""
    category = services.categories.create_category(
        args.name,
        description=args.description,
        parent_id=args.parent_id,
        icon=args.icon,
        color=args.color,
    )

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Icon/Color: {category.icon} {category.color}")
    if category.parent_id:
        logger.info(f"  Parent ID: {category.parent_id} (depth {category.depth})")


def cmd_update(args, services):
    """Update fields of an existing category."""
    fields = {}
    for field in ("name", "description", "icon", "color"):
        value = getattr(args, field)
        if value is not None:
            fields[field] = value
    if args.root:
        fields["parent_id"] = None
    elif args.parent_id is not None:
        fields["parent_id"] = args.parent_id

    if not fields:
        logger.error("Nothing to update. Pass at least one field option.")
        sys.exit(1)

    category = services.categories.update_category(args.category_id, **fields)
    logger.info(
        f"✓ Category '{category.name}' updated "
        f"({services.categories.get_full_path(category.id)})"
    )


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = services.categories.get_category(args.category_id)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if category.description:
        logger.info(f"  Description: {category.description}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    services.categories.delete_category(category.id)
    logger.info(f"✓ Category '{category.name}' deleted successfully.")


def cmd_stats(args, services):
    """Show document statistics across categories."""
    stats = services.categories.get_category_stats()

    logger.info("\nCategory Statistics:")
    logger.info("=" * 80)
    logger.info(f"Total categories: {stats.total_categories}")
    logger.info(f"Total documents: {stats.total_documents}")
    logger.info(f"Average documents per category: {stats.average_per_category}")

    if stats.top_categories:
        logger.info("\nTop categories:")
        for category in stats.top_categories:
            logger.info(f"  {category.icon} {category.name}: {category.document_count}")


def _seed_nodes(services, nodes, parent_id, counts, level=0):
    prefix = "  " * level
    for node in nodes:
        name = node.get("name")
        if not name:
            logger.warning(f"{prefix}Skipping category with no name")
            continue

        existing = services.category_store.find_by_name(name)
        if existing:
            logger.info(f"{prefix}⊘ Skipped '{name}' (already exists)")
            counts["skipped"] += 1
            category_id = existing.id
        else:
            try:
                category = services.categories.create_category(
                    name,
                    description=node.get("description"),
                    parent_id=parent_id,
                    icon=node.get("icon"),
                    color=node.get("color"),
                )
            except FolioError as e:
                logger.error(f"{prefix}Error creating category '{name}': {e}")
                continue
            logger.info(f"{prefix}✓ Created '{name}' (ID: {category.id})")
            counts["created"] += 1
            category_id = category.id

        _seed_nodes(services, node.get("children", []), category_id, counts, level + 1)


def cmd_seed(args, services):
    """Seed categories from JSON file."""
    seed_file = args.file or get_seed_file()

    try:
        with open(seed_file, "r") as f:
            categories_data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Seed file not found: {seed_file}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info(f"\nSeeding categories from {seed_file}")
    logger.info("=" * 80)

    counts = {"created": 0, "skipped": 0}
    _seed_nodes(services, categories_data, None, counts)

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {counts['created']}")
    logger.info(f"Skipped: {counts['skipped']}")
    logger.info(f"Total: {counts['created'] + counts['skipped']}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, move and delete document categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list", help="Show the category tree"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories show
    show_parser = categories_subparsers.add_parser("show", help="Show one category")
    show_parser.add_argument("category_id", type=int, help="Category ID")
    show_parser.set_defaults(func=cmd_show)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name")
    create_parser.add_argument("--description", help="Optional description")
    create_parser.add_argument("--parent-id", type=int, help="Parent category ID")
    create_parser.add_argument("--icon", help="Icon (defaults from the name)")
    create_parser.add_argument("--color", help="Hex color (defaults from the name)")
    create_parser.set_defaults(func=cmd_create)

    # categories update
    update_parser = categories_subparsers.add_parser(
        "update", help="Rename, describe, restyle or move a category"
    )
    update_parser.add_argument("category_id", type=int, help="Category ID")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--description", help="New description")
    update_parser.add_argument("--icon", help="New icon")
    update_parser.add_argument("--color", help="New hex color")
    move_group = update_parser.add_mutually_exclusive_group()
    move_group.add_argument("--parent-id", type=int, help="New parent category ID")
    move_group.add_argument(
        "--root", action="store_true", help="Move the category to the top level"
    )
    update_parser.set_defaults(func=cmd_update)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories stats
    stats_parser = categories_subparsers.add_parser(
        "stats", help="Show document statistics"
    )
    stats_parser.set_defaults(func=cmd_stats)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed categories from JSON file"
    )
    seed_parser.add_argument(
        "--file", help="Seed file (defaults to db/seed/categories.json)"
    )
    seed_parser.set_defaults(func=cmd_seed)
