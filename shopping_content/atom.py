"""Base Atom views: entries, feeds and the gdata error list."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Type
from urllib.parse import unquote

from lxml import etree

from .accessor import Element, ElementAccessor, TagLike, attr, set_attr
from .namespaces import BATCH_ERROR_CONTENT_TYPE, NSMAP, Tag

logger = logging.getLogger(__name__)

ENTRY_NAMESPACES: Sequence[Optional[str]] = (None, "app", "batch", "sc", "scp")
FEED_NAMESPACES: Sequence[Optional[str]] = (None, "app", "batch", "sc", "scp", "openSearch")


def text_field(tag: Tag, doc: Optional[str] = None) -> property:
    """Read/write property bound to the first ``tag`` under the view root."""

    def getter(self: "AtomView") -> str:
        return self.accessor.get_first_value(tag)

    def setter(self: "AtomView", value: Optional[str]) -> None:
        self.accessor.set_first_value(tag, value)

    return property(getter, setter, doc=doc or f"Text of the first <{tag.value.local}> element.")


def readonly_field(tag: Tag) -> property:
    def getter(self: "AtomView") -> str:
        return self.accessor.get_first_value(tag)

    return property(getter, doc=f"Text of the first <{tag.value.local}> element (server populated).")


def query_param(href: str, name: str) -> str:
    parts = href.split("?")
    if len(parts) != 2:
        return ""
    # "+" is literal here; tokens are echoed back verbatim
    for pair in parts[1].split("&"):
        key, _, value = pair.partition("=")
        if unquote(key) == name:
            return unquote(value)
    return ""


class AtomView:
    """A typed facade over one element of an lxml document.

    Views hold nothing but the root element; every field is looked up in
    the tree on access. Constructing a view without a root builds a new
    document through ``create_model``.
    """

    root_tag: Tag = Tag.ENTRY
    namespaces: Sequence[Optional[str]] = ENTRY_NAMESPACES

    def __init__(self, root: Optional[Element] = None):
        if root is None:
            root = self.create_model()
        self.accessor = ElementAccessor(root)

    @property
    def root(self) -> Element:
        return self.accessor.root

    @property
    def document(self) -> etree._ElementTree:
        return self.accessor.document

    def create_model(self) -> Element:
        nsmap = {prefix: NSMAP[prefix] for prefix in self.namespaces}
        return etree.Element(self.root_tag.clark, nsmap=nsmap)

    def get_first_value(self, tag: TagLike) -> str:
        return self.accessor.get_first_value(tag)

    def set_first_value(self, tag: TagLike, value: Optional[str]) -> Element:
        return self.accessor.set_first_value(tag, value)

    def to_xml(self) -> str:
        return self.accessor.to_xml()

    def _add_value(self, tag: Tag, value: str) -> Element:
        return self.accessor.append(self.accessor.create(tag, value))

    def _get_values(self, tag: Tag) -> List[str]:
        return [element.text or "" for element in self.accessor.get_all(tag)]

    def _get_link_href(self, rel: str) -> str:
        return attr(self.accessor.get_link(rel), "href")

    def _set_link(self, rel: str, href: str, link_type: Optional[str] = None) -> Element:
        element = self.accessor.get_link(rel)
        if element is None:
            element = self.accessor.create(Tag.LINK)
            element.set("rel", rel)
            self.accessor.append(element)
        element.set("href", href)
        set_attr(element, "type", link_type)
        return element

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {etree.QName(self.root).localname}>"


class ErrorElement(AtomView):
    """A single ``gd:error`` reported by the server."""

    root_tag = Tag.ERROR

    def create_model(self) -> Element:
        return etree.Element(self.root_tag.clark, nsmap={None: NSMAP["gd"]})

    domain = text_field(Tag.ERROR_DOMAIN)
    code = text_field(Tag.ERROR_CODE)
    location = text_field(Tag.ERROR_LOCATION)
    internal_reason = text_field(Tag.ERROR_INTERNAL_REASON)
    debug_info = text_field(Tag.ERROR_DEBUG_INFO)

    @property
    def location_type(self) -> str:
        return attr(self.accessor.get_first(Tag.ERROR_LOCATION), "type")

    def set_location(self, location: str, location_type: Optional[str] = None) -> Element:
        element = self.accessor.set_first_value(Tag.ERROR_LOCATION, location)
        return set_attr(element, "type", location_type)

    def __str__(self) -> str:
        parts = [self.code or "error", self.internal_reason]
        if self.location:
            parts.append(f"at {self.location}")
        return " ".join(part for part in parts if part)


class ErrorList(AtomView):
    """Root ``gd:errors`` document, or the same element embedded in a batch entry."""

    root_tag = Tag.ERRORS

    def create_model(self) -> Element:
        return etree.Element(self.root_tag.clark, nsmap={None: NSMAP["gd"]})

    def get_errors(self) -> List[ErrorElement]:
        return [ErrorElement(element) for element in self.accessor.get_all(Tag.ERROR)]

    def add_error(self, error: ErrorElement) -> Element:
        return self.accessor.append(self.accessor.clone_into(error.root))

    def __len__(self) -> int:
        return len(self.accessor.get_all(Tag.ERROR))


class AtomEntry(AtomView):
    """Fields every single-resource entry carries, including the batch protocol."""

    title = text_field(Tag.TITLE)
    atom_id = text_field(Tag.ATOM_ID)
    updated = readonly_field(Tag.UPDATED)
    published = readonly_field(Tag.PUBLISHED)
    batch_id = text_field(Tag.BATCH_ID)

    @property
    def description(self) -> str:
        return self.accessor.get_first_value(Tag.CONTENT)

    @description.setter
    def description(self, value: str) -> None:
        self.set_description(value)

    def set_description(self, value: str) -> Element:
        element = self.accessor.set_first_value(Tag.CONTENT, value)
        element.set("type", "text")
        return element

    def get_edit_link(self) -> str:
        return self._get_link_href("edit")

    def set_edit_link(self, href: str, link_type: str = "application/atom+xml") -> Element:
        return self._set_link("edit", href, link_type)

    def get_batch_operation(self) -> str:
        return attr(self.accessor.get_first(Tag.OPERATION), "type")

    def set_batch_operation(self, operation: str) -> Element:
        element = self.accessor.set_first_value(Tag.OPERATION, None)
        element.set("type", operation)
        return element

    def get_batch_status(self) -> str:
        return attr(self.accessor.get_first(Tag.STATUS), "code")

    def get_batch_status_reason(self) -> str:
        return attr(self.accessor.get_first(Tag.STATUS), "reason")

    def get_errors_from_batch(self) -> Optional[ErrorList]:
        for content in self.accessor.get_all(Tag.CONTENT):
            if content.get("type") != BATCH_ERROR_CONTENT_TYPE:
                continue
            errors = self.accessor.get_first(Tag.ERRORS, content)
            if errors is not None:
                return ErrorList(errors)
        return None


class AtomFeed(AtomView):
    """A collection of entries sharing this view's document."""

    root_tag = Tag.FEED
    namespaces = FEED_NAMESPACES
    entry_class: Type[AtomEntry] = AtomEntry

    total_results = readonly_field(Tag.TOTAL_RESULTS)
    start_index = readonly_field(Tag.START_INDEX)
    items_per_page = readonly_field(Tag.ITEMS_PER_PAGE)

    def get_entries(self) -> List[AtomEntry]:
        return [self.entry_class(element) for element in self.accessor.get_all(Tag.ENTRY)]

    def add_entry(self, entry: AtomEntry) -> Element:
        clone = self.accessor.clone_into(entry.root)
        return self.accessor.append(clone)

    def get_next_link(self) -> str:
        return self._get_link_href("next")

    def __len__(self) -> int:
        return len(self.accessor.get_all(Tag.ENTRY))


def stamp_batch_operation(entries: Sequence[AtomEntry], operation: str) -> None:
    for entry in entries:
        entry.set_batch_operation(operation)
    logger.debug("Stamped %s entries with batch operation %s", len(entries), operation)


def build_feed(feed_class: Callable[[], AtomFeed], entries: Sequence[AtomEntry]) -> AtomFeed:
    feed = feed_class()
    for entry in entries:
        feed.add_entry(entry)
    return feed

