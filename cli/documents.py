#!/usr/bin/env python3

from errors import NotFoundError
from logger import get_logger
from tools.categories import find_category

logger = get_logger()


def cmd_assign(args, services):
    """Put a document into a category (by ID or name)."""
    category = find_category(services, args.category)
    if category is None:
        raise NotFoundError("Category", args.category)
    services.documents.assign(args.document_id, category.id)
    logger.info(f"✓ Document '{args.document_id}' added to '{category.name}'")


def cmd_unassign(args, services):
    """Take a document out of a category."""
    if services.documents.unassign(args.document_id, args.category_id):
        logger.info(
            f"✓ Document '{args.document_id}' removed from category {args.category_id}"
        )
    else:
        logger.info(
            f"Document '{args.document_id}' was not in category {args.category_id}"
        )


def cmd_list(args, services):
    """List the documents in a category."""
    category = services.categories.get_category(args.category_id)
    document_ids = services.documents.find_document_ids(category.id)

    if not document_ids:
        logger.info(f"No documents in '{category.name}'.")
        return

    logger.info(f"\nDocuments in '{category.name}':")
    logger.info("=" * 80)
    for document_id in document_ids:
        logger.info(document_id)
    logger.info(f"\nTotal documents: {len(document_ids)}")


def setup_parser(subparsers):
    """Setup documents subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "documents",
        help="Manage document categories",
        description="Assign documents to categories and inspect assignments",
    )

    documents_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available document commands",
        dest="subcommand",
        required=True,
    )

    # documents assign
    assign_parser = documents_subparsers.add_parser(
        "assign", help="Add a document to a category"
    )
    assign_parser.add_argument("document_id", help="Document ID")
    assign_parser.add_argument("category", help="Category ID or name")
    assign_parser.set_defaults(func=cmd_assign)

    # documents unassign
    unassign_parser = documents_subparsers.add_parser(
        "unassign", help="Remove a document from a category"
    )
    unassign_parser.add_argument("document_id", help="Document ID")
    unassign_parser.add_argument("category_id", type=int, help="Category ID")
    unassign_parser.set_defaults(func=cmd_unassign)

    # documents list
    list_parser = documents_subparsers.add_parser(
        "list", help="List documents in a category"
    )
    list_parser.add_argument("category_id", type=int, help="Category ID")
    list_parser.set_defaults(func=cmd_list)
