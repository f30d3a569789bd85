"""Shopping Content API client."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence
from urllib.parse import quote

from .accounts import ManagedAccount
from .atom import AtomEntry, AtomView, build_feed, stamp_batch_operation
from .auth import CLIENTLOGIN_URI, auth_header, client_login
from .datafeeds import Datafeed
from .errors import ClientError, DeleteFailedError, UnauthenticatedError
from .parser import parse, parse_datafeeds, parse_managed_accounts
from .products import Product, ProductList
from .transport import HttpTransport, Response

logger = logging.getLogger(__name__)

BASE = "https://content.googleapis.com/content/v1/"


def with_query(uri: str, params: Optional[Dict[str, object]] = None, flags: Optional[Dict[str, bool]] = None) -> str:
    """Append query parameters; ``flags`` are written as bare names without values."""
    parts = [f"{key}={quote(str(value), safe='')}" for key, value in (params or {}).items() if value is not None]
    parts.extend(name for name, enabled in (flags or {}).items() if enabled)
    if not parts:
        return uri
    return uri + "?" + "&".join(parts)


class ShoppingClient:
    def __init__(self, merchant_id: str, transport=None, base_uri: str = BASE, login_uri: str = CLIENTLOGIN_URI):
        self.merchant_id = str(merchant_id).strip()
        self.transport = transport or HttpTransport()
        self.base_uri = base_uri.rstrip("/")
        self.login_uri = login_uri
        self._token: Optional[str] = None

    # authentication

    def login(self, email: str, password: str) -> None:
        self._token = client_login(self.transport, email, password, login_uri=self.login_uri)

    def set_token(self, token: str) -> None:
        self._token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    def get_token_header(self) -> str:
        if not self._token:
            raise UnauthenticatedError()
        return auth_header(self._token)

    # uris

    def get_feed_uri(self) -> str:
        return f"{self.base_uri}/{self.merchant_id}/items/products/schema/"

    def get_product_uri(self, product_id: str, country: str, language: str) -> str:
        return f"{self.get_feed_uri()}online:{language}:{country}:{product_id}"

    def get_batch_uri(self) -> str:
        return self.get_feed_uri() + "batch"

    def get_managed_accounts_uri(self, account_id: Optional[str] = None) -> str:
        uri = f"{self.base_uri}/{self.merchant_id}/managedaccounts"
        return f"{uri}/{account_id}" if account_id else uri

    def get_datafeeds_uri(self, datafeed_id: Optional[str] = None) -> str:
        uri = f"{self.base_uri}/{self.merchant_id}/datafeeds/products"
        return f"{uri}/{datafeed_id}" if datafeed_id else uri

    def _product_edit_uri(self, product: Product) -> str:
        link = product.get_edit_link()
        if link:
            return link
        if product.sku and product.target_country and product.content_language:
            return self.get_product_uri(product.sku, product.target_country, product.content_language)
        raise ClientError("Product has no edit link and no sku/country/language to address it by.")

    @staticmethod
    def _entry_edit_uri(entry: AtomEntry) -> str:
        link = entry.get_edit_link() or entry.atom_id
        if not link:
            raise ClientError(f"{type(entry).__name__} has no edit link.")
        return link

    # raw verbs

    def _get(self, uri: str) -> Response:
        return self.transport.get(uri, self.get_token_header())

    def _post(self, uri: str, view: AtomView) -> Response:
        return self.transport.post(uri, view.to_xml(), self.get_token_header())

    def _put(self, uri: str, view: AtomView) -> Response:
        return self.transport.put(uri, view.to_xml(), self.get_token_header())

    def _delete(self, uri: str) -> None:
        response = self.transport.delete(uri, self.get_token_header())
        if response.code != 200:
            logger.warning("Delete of %s failed with HTTP %s", uri, response.code)
            raise DeleteFailedError(response.code)

    # products

    def insert_product(self, product: Product, warnings: bool = False, dry_run: bool = False) -> AtomView:
        uri = with_query(self.get_feed_uri(), flags={"warnings": warnings, "dry-run": dry_run})
        return parse(self._post(uri, product).body)

    def get_product(self, product_id: str, country: str, language: str) -> AtomView:
        return parse(self._get(self.get_product_uri(product_id, country, language)).body)

    def update_product(self, product: Product, warnings: bool = False, dry_run: bool = False) -> AtomView:
        uri = with_query(self._product_edit_uri(product), flags={"warnings": warnings, "dry-run": dry_run})
        return parse(self._put(uri, product).body)

    def delete_product(self, product: Product, dry_run: bool = False) -> None:
        self._delete(with_query(self._product_edit_uri(product), flags={"dry-run": dry_run}))

    def get_products(
        self,
        max_results: Optional[int] = None,
        start_token: Optional[str] = None,
        performance_start: Optional[str] = None,
        performance_end: Optional[str] = None,
    ) -> AtomView:
        params = {
            "max-results": max_results,
            "start-token": start_token,
            "performance.start": performance_start,
            "performance.end": performance_end,
        }
        return parse(self._get(with_query(self.get_feed_uri(), params)).body)

    def batch(self, products: ProductList, warnings: bool = False, dry_run: bool = False) -> AtomView:
        logger.info("Sending batch of %s entries", len(products))
        uri = with_query(self.get_batch_uri(), flags={"warnings": warnings, "dry-run": dry_run})
        return parse(self._post(uri, products).body)

    def insert_products(self, products: Sequence[Product], **kwargs) -> AtomView:
        feed = build_feed(ProductList, products)
        stamp_batch_operation(feed.get_entries(), "insert")
        return self.batch(feed, **kwargs)

    def update_products(self, products: Sequence[Product], **kwargs) -> AtomView:
        feed = build_feed(ProductList, products)
        stamp_batch_operation(feed.get_entries(), "update")
        return self.batch(feed, **kwargs)

    def delete_products(self, products: Sequence[Product], **kwargs) -> AtomView:
        entries = []
        for product in products:
            entry = Product()
            entry.set_batch_operation("delete")
            entry.atom_id = self._product_edit_uri(product)
            entries.append(entry)
        return self.batch(build_feed(ProductList, entries), **kwargs)

    # managed accounts

    def get_accounts(self, max_results: Optional[int] = None, start_index: Optional[int] = None) -> AtomView:
        uri = with_query(self.get_managed_accounts_uri(), {"max-results": max_results, "start-index": start_index})
        return parse_managed_accounts(self._get(uri).body)

    def get_account(self, account_id: str) -> AtomView:
        return parse_managed_accounts(self._get(self.get_managed_accounts_uri(account_id)).body)

    def insert_account(self, account: ManagedAccount, dry_run: bool = False) -> AtomView:
        uri = with_query(self.get_managed_accounts_uri(), flags={"dry-run": dry_run})
        return parse_managed_accounts(self._post(uri, account).body)

    def update_account(self, account: ManagedAccount, dry_run: bool = False) -> AtomView:
        uri = with_query(self._entry_edit_uri(account), flags={"dry-run": dry_run})
        return parse_managed_accounts(self._put(uri, account).body)

    def delete_account(self, account: ManagedAccount, dry_run: bool = False) -> None:
        self._delete(with_query(self._entry_edit_uri(account), flags={"dry-run": dry_run}))

    # datafeeds

    def get_datafeeds(self) -> AtomView:
        return parse_datafeeds(self._get(self.get_datafeeds_uri()).body)

    def get_datafeed(self, datafeed_id: str) -> AtomView:
        return parse_datafeeds(self._get(self.get_datafeeds_uri(datafeed_id)).body)

    def insert_datafeed(self, datafeed: Datafeed, dry_run: bool = False) -> AtomView:
        uri = with_query(self.get_datafeeds_uri(), flags={"dry-run": dry_run})
        return parse_datafeeds(self._post(uri, datafeed).body)

    def update_datafeed(self, datafeed: Datafeed, dry_run: bool = False) -> AtomView:
        uri = with_query(self._entry_edit_uri(datafeed), flags={"dry-run": dry_run})
        return parse_datafeeds(self._put(uri, datafeed).body)

    def delete_datafeed(self, datafeed: Datafeed, dry_run: bool = False) -> None:
        self._delete(with_query(self._entry_edit_uri(datafeed), flags={"dry-run": dry_run}))
