"""Element accessor engine shared by every Atom entity view.

All field access goes through a handful of operations keyed by qualified
tag and scoped to a sub-tree. Reads never touch the tree; ``ensure_first``
and the ``set_*`` operations create missing elements on demand.
"""

from __future__ import annotations

import copy
from typing import List, Optional, Union

from lxml import etree

from .namespaces import Tag, QualifiedTag

TagLike = Union[Tag, QualifiedTag]
Element = etree._Element


def _clark(tag: TagLike) -> str:
    return tag.clark


def make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def attr(element: Optional[Element], name: str) -> str:
    if element is None:
        return ""
    return element.get(name, "")


def set_attr(element: Element, name: str, value: Optional[str]) -> Element:
    if value is not None:
        element.set(name, str(value))
    return element


class ElementAccessor:
    """Get/set/create/delete by qualified tag over one document."""

    def __init__(self, root: Element):
        self.root = root

    @property
    def document(self) -> etree._ElementTree:
        return self.root.getroottree()

    def _scope(self, scope: Optional[Element]) -> Element:
        return self.root if scope is None else scope

    def get_first(self, tag: TagLike, scope: Optional[Element] = None) -> Optional[Element]:
        for element in self._scope(scope).iterdescendants(_clark(tag)):
            return element
        return None

    def ensure_first(self, tag: TagLike, scope: Optional[Element] = None) -> Element:
        parent = self._scope(scope)
        element = self.get_first(tag, parent)
        if element is None:
            element = etree.SubElement(parent, _clark(tag))
        return element

    def get_first_value(self, tag: TagLike, scope: Optional[Element] = None) -> str:
        element = self.get_first(tag, scope)
        if element is None:
            return ""
        return element.text or ""

    def set_first_value(self, tag: TagLike, value: Optional[str], scope: Optional[Element] = None) -> Element:
        element = self.ensure_first(tag, scope)
        element.text = None if value is None else str(value)
        return element

    def get_all(self, tag: TagLike, scope: Optional[Element] = None) -> List[Element]:
        return list(self._scope(scope).iterdescendants(_clark(tag)))

    def delete_all(self, tag: TagLike, scope: Optional[Element] = None) -> int:
        matches = self.get_all(tag, scope)
        for element in matches:
            parent = element.getparent()
            if parent is not None:
                parent.remove(element)
        return len(matches)

    def get_link(self, rel: str) -> Optional[Element]:
        for element in self.root.iterdescendants(Tag.LINK.clark):
            if element.get("rel") == rel:
                return element
        return None

    def create(self, tag: TagLike, content: Optional[str] = None) -> Element:
        element = etree.Element(_clark(tag), nsmap=self.root.nsmap)
        if content is not None:
            element.text = str(content)
        return element

    def clone_into(self, element: Element) -> Element:
        clone = copy.deepcopy(element)
        clone.tail = None
        return clone

    def append(self, element: Element, scope: Optional[Element] = None) -> Element:
        self._scope(scope).append(element)
        return element

    def to_xml(self) -> str:
        return etree.tostring(self.root, encoding="unicode", pretty_print=True, with_tail=False)
