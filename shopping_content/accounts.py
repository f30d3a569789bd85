"""Managed (sub-)account entries and feeds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .accessor import Element, attr
from .atom import AtomEntry, AtomFeed, query_param, readonly_field, text_field
from .namespaces import Tag

ACCOUNT_NAMESPACES = (None, "app", "batch", "sc", "gd")
ACCOUNT_FEED_NAMESPACES = (None, "app", "batch", "sc", "gd", "openSearch")


@dataclass(frozen=True)
class AdwordsAccount:
    account_id: str
    status: str


class ManagedAccount(AtomEntry):
    namespaces = ACCOUNT_NAMESPACES

    internal_id = text_field(Tag.INTERNAL_ID)
    reviews_url = text_field(Tag.REVIEWS_URL)
    adult_content = text_field(Tag.ADULT_CONTENT)
    account_status = readonly_field(Tag.ACCOUNT_STATUS)

    @property
    def website(self) -> str:
        return self._get_link_href("alternate")

    @website.setter
    def website(self, href: str) -> None:
        self._set_link("alternate", href, "text/html")

    def add_adwords_account(self, account_id: str, status: str = "active") -> Element:
        container = self.accessor.ensure_first(Tag.ADWORDS_ACCOUNTS)
        element = self.accessor.create(Tag.ADWORDS_ACCOUNT, account_id)
        element.set("status", status)
        return self.accessor.append(element, container)

    def get_adwords_accounts(self) -> List[AdwordsAccount]:
        return [
            AdwordsAccount(account_id=element.text or "", status=attr(element, "status"))
            for element in self.accessor.get_all(Tag.ADWORDS_ACCOUNT)
        ]

    def clear_adwords_accounts(self) -> None:
        self.accessor.delete_all(Tag.ADWORDS_ACCOUNTS)


class ManagedAccountList(AtomFeed):
    namespaces = ACCOUNT_FEED_NAMESPACES
    entry_class = ManagedAccount

    def add_account(self, account: ManagedAccount) -> Element:
        return self.add_entry(account)

    def get_accounts(self) -> List[ManagedAccount]:
        return self.get_entries()

    def get_next_start_index(self) -> str:
        link = self.get_next_link()
        if not link:
            return ""
        return query_param(link, "start-index")
