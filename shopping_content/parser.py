"""Parse API payloads into typed views, dispatching on the root element."""

from __future__ import annotations

import logging
import re
from typing import Dict, Type, Union

from lxml import etree

from .accessor import make_parser
from .accounts import ManagedAccount, ManagedAccountList
from .atom import AtomView, ErrorList
from .datafeeds import Datafeed, DatafeedList
from .errors import ParseError, UnrecognizedDocumentError
from .products import Product, ProductList

logger = logging.getLogger(__name__)

Dispatch = Dict[str, Type[AtomView]]

# decoded text must not carry an encoding declaration into the byte parser
XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

PRODUCT_KINDS: Dispatch = {"entry": Product, "feed": ProductList, "errors": ErrorList}
ACCOUNT_KINDS: Dispatch = {"entry": ManagedAccount, "feed": ManagedAccountList, "errors": ErrorList}
DATAFEED_KINDS: Dispatch = {"entry": Datafeed, "feed": DatafeedList, "errors": ErrorList}


def _load(xml_text: Union[str, bytes]) -> etree._Element:
    if isinstance(xml_text, str):
        xml_text = XML_DECLARATION.sub("", xml_text, count=1).encode("utf-8")
    if not xml_text or not xml_text.strip():
        raise ParseError("Empty XML document")
    try:
        return etree.fromstring(xml_text, parser=make_parser())
    except etree.XMLSyntaxError as exc:
        logger.error("XML syntax error: %s", exc)
        raise ParseError(f"Invalid XML: {exc}") from exc


def _dispatch(xml_text: Union[str, bytes], kinds: Dispatch) -> AtomView:
    root = _load(xml_text)
    name = etree.QName(root).localname
    view_class = kinds.get(name)
    if view_class is None:
        raise UnrecognizedDocumentError(name)
    return view_class(root)


def parse(xml_text: Union[str, bytes]) -> AtomView:
    """Parse a product payload: Product, ProductList or ErrorList."""
    return _dispatch(xml_text, PRODUCT_KINDS)


def parse_managed_accounts(xml_text: Union[str, bytes]) -> AtomView:
    """Parse a managed-accounts payload: ManagedAccount, ManagedAccountList or ErrorList."""
    return _dispatch(xml_text, ACCOUNT_KINDS)


def parse_datafeeds(xml_text: Union[str, bytes]) -> AtomView:
    return _dispatch(xml_text, DATAFEED_KINDS)
