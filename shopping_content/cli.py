"""Command-line entrypoint for the Shopping Content client."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

import xmltodict
from rich.console import Console
from rich.table import Table

from .atom import AtomView, ErrorList
from .client import ShoppingClient
from .config import Settings, ensure_required_credentials, load_settings
from .namespaces import NSMAP
from .parser import parse
from .products import Product, ProductList
from .transport import HttpTransport

logger = logging.getLogger(__name__)

# namespace URI -> prefix used as key prefix in JSON output
JSON_NAMESPACES = {uri: prefix for prefix, uri in NSMAP.items()}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_client(settings: Settings) -> ShoppingClient:
    ensure_required_credentials(settings)
    client = ShoppingClient(
        settings.merchant_id,
        transport=HttpTransport(timeout=settings.timeout),
        base_uri=settings.api_base,
        login_uri=settings.login_uri,
    )
    client.login(settings.email, settings.password)
    return client


def _connect() -> ShoppingClient:
    settings = load_settings()
    _configure_logging(settings.log_level)
    return build_client(settings)


def _to_json(view: AtomView) -> str:
    payload = xmltodict.parse(view.to_xml(), process_namespaces=True, namespaces=JSON_NAMESPACES)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _load_view(path: Path) -> AtomView:
    try:
        xml_text = path.read_bytes()
    except OSError as exc:
        raise RuntimeError(f"Failed to read {path}: {exc}") from exc
    return parse(xml_text)


def _report_errors(errors: ErrorList) -> int:
    for error in errors.get_errors():
        print(f"ERROR: {error}", file=sys.stderr)
    return 1


def _print_products(products: List[Product]) -> None:
    table = Table(title="Products")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Country")
    table.add_column("Language")
    for product in products:
        price = f"{product.price} {product.price_unit}".strip()
        table.add_row(product.sku, product.title, price, product.target_country, product.content_language)
    Console().print(table)


def _print_batch_results(feed: ProductList) -> int:
    failures = 0
    for entry in feed.get_products():
        status = entry.get_batch_status()
        reason = entry.get_batch_status_reason()
        print(f"{entry.batch_id or entry.atom_id}\t{entry.get_batch_operation()}\t{status} {reason}".rstrip())
        errors = entry.get_errors_from_batch()
        if errors is not None:
            failures += 1
            for error in errors.get_errors():
                print(f"  {error}")
        for warning in entry.get_warnings():
            print(f"  warning: {warning.code} {warning.message}".rstrip())
    return 1 if failures else 0


def cmd_products_list(args: argparse.Namespace) -> int:
    client = _connect()
    result = client.get_products(max_results=args.max_results, start_token=args.start_token)
    if isinstance(result, ErrorList):
        return _report_errors(result)

    if args.json:
        print(_to_json(result))
        return 0

    products = result.get_products()
    if not products:
        print("No products found")
        return 0
    _print_products(products)
    start_token = result.get_start_token()
    if start_token:
        print(f"Next page: --start-token {start_token}")
    return 0


def cmd_products_get(args: argparse.Namespace) -> int:
    client = _connect()
    result = client.get_product(args.id, args.country, args.language)
    if isinstance(result, ErrorList):
        return _report_errors(result)

    if args.json:
        print(_to_json(result))
    else:
        _print_products([result])
    return 0


def cmd_products_insert(args: argparse.Namespace) -> int:
    product = _load_view(Path(args.file))
    if not isinstance(product, Product):
        raise RuntimeError(f"{args.file} does not contain a product entry")

    client = _connect()
    result = client.insert_product(product, warnings=args.warnings, dry_run=args.dry_run)
    if isinstance(result, ErrorList):
        return _report_errors(result)

    print(f"Inserted: {result.title}")
    for warning in result.get_warnings():
        print(f"  warning: {warning.code} {warning.message}".rstrip())
    return 0


def cmd_products_delete(args: argparse.Namespace) -> int:
    client = _connect()
    product = Product()
    product.set_edit_link(client.get_product_uri(args.id, args.country, args.language))
    client.delete_product(product, dry_run=args.dry_run)
    print(f"Deleted: {args.id}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    feed = _load_view(Path(args.file))
    if not isinstance(feed, ProductList):
        raise RuntimeError(f"{args.file} does not contain a product feed")

    client = _connect()
    result = client.batch(feed, warnings=args.warnings, dry_run=args.dry_run)
    if isinstance(result, ErrorList):
        return _report_errors(result)
    return _print_batch_results(result)


def cmd_accounts_list(args: argparse.Namespace) -> int:
    client = _connect()
    result = client.get_accounts(max_results=args.max_results, start_index=args.start_index)
    if isinstance(result, ErrorList):
        return _report_errors(result)

    accounts = result.get_accounts()
    if not accounts:
        print("No managed accounts found")
        return 0

    for account in accounts:
        print(f"{account.internal_id}\t{account.title}\t{account.website}\t{account.account_status}".rstrip())
    next_index = result.get_next_start_index()
    if next_index:
        print(f"Next page: --start-index {next_index}")
    return 0


def _add_product_address(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--id", required=True, help="Offer id (SKU)")
    parser.add_argument("--country", required=True, help="Target country, e.g. US")
    parser.add_argument("--language", required=True, help="Content language, e.g. en")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gsc", description="Shopping Content API client")
    sub = parser.add_subparsers(dest="command", required=True)

    products = sub.add_parser("products", help="Product operations")
    products_sub = products.add_subparsers(dest="products_command", required=True)

    list_parser = products_sub.add_parser("list", help="List products")
    list_parser.add_argument("--max-results", type=int, required=False, help="Page size")
    list_parser.add_argument("--start-token", required=False, help="Continuation token from a previous page")
    list_parser.add_argument("--json", action="store_true", help="Print the feed as JSON")

    get_parser = products_sub.add_parser("get", help="Show one product")
    _add_product_address(get_parser)
    get_parser.add_argument("--json", action="store_true", help="Print the entry as JSON")

    insert_parser = products_sub.add_parser("insert", help="Insert a product from an Atom entry file")
    insert_parser.add_argument("--file", required=True, help="Path to an <entry> XML file")
    insert_parser.add_argument("--dry-run", action="store_true", help="Validate without storing")
    insert_parser.add_argument("--warnings", action="store_true", help="Ask the server for warnings")

    delete_parser = products_sub.add_parser("delete", help="Delete one product")
    _add_product_address(delete_parser)
    delete_parser.add_argument("--dry-run", action="store_true", help="Validate without deleting")

    batch = sub.add_parser("batch", help="Send a batch feed")
    batch.add_argument("--file", required=True, help="Path to a <feed> XML file with batch operations")
    batch.add_argument("--dry-run", action="store_true", help="Validate without storing")
    batch.add_argument("--warnings", action="store_true", help="Ask the server for warnings")

    accounts = sub.add_parser("accounts", help="Managed account operations")
    accounts_sub = accounts.add_subparsers(dest="accounts_command", required=True)
    accounts_list = accounts_sub.add_parser("list", help="List managed accounts")
    accounts_list.add_argument("--max-results", type=int, required=False, help="Page size")
    accounts_list.add_argument("--start-index", type=int, required=False, help="1-based index of the first result")

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "products" and args.products_command == "list":
            return cmd_products_list(args)

        if args.command == "products" and args.products_command == "get":
            return cmd_products_get(args)

        if args.command == "products" and args.products_command == "insert":
            return cmd_products_insert(args)

        if args.command == "products" and args.products_command == "delete":
            return cmd_products_delete(args)

        if args.command == "batch":
            return cmd_batch(args)

        if args.command == "accounts" and args.accounts_command == "list":
            return cmd_accounts_list(args)

        parser.print_help()
        return 1
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
