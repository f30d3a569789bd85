"""Datafeed entries and feeds."""

from __future__ import annotations

from typing import Dict, List, Optional

from .accessor import Element, attr, set_attr
from .atom import AtomEntry, AtomFeed, readonly_field, text_field
from .namespaces import Tag


class Datafeed(AtomEntry):
    """Registration of a file-based product feed."""

    target_country = text_field(Tag.TARGET_COUNTRY)
    content_language = text_field(Tag.CONTENT_LANGUAGE)
    attribute_language = text_field(Tag.ATTRIBUTE_LANGUAGE)
    feed_file_name = text_field(Tag.FEED_FILE_NAME)
    feed_type = text_field(Tag.FEED_TYPE)
    processing_status = readonly_field(Tag.PROCESSING_STATUS)

    @property
    def file_format(self) -> str:
        return attr(self.accessor.get_first(Tag.FILE_FORMAT), "format")

    @property
    def delimiter(self) -> str:
        return self._file_format_value(Tag.DELIMITER)

    @property
    def encoding(self) -> str:
        return self._file_format_value(Tag.ENCODING)

    @property
    def use_quoted_fields(self) -> str:
        return self._file_format_value(Tag.USE_QUOTED_FIELDS)

    def _file_format_value(self, tag: Tag) -> str:
        file_format = self.accessor.get_first(Tag.FILE_FORMAT)
        if file_format is None:
            return ""
        return self.accessor.get_first_value(tag, file_format)

    def set_file_format(
        self,
        file_format: str,
        delimiter: Optional[str] = None,
        encoding: Optional[str] = None,
        use_quoted_fields: Optional[str] = None,
    ) -> Element:
        element = self.accessor.ensure_first(Tag.FILE_FORMAT)
        element.set("format", file_format)
        for tag, value in (
            (Tag.DELIMITER, delimiter),
            (Tag.ENCODING, encoding),
            (Tag.USE_QUOTED_FIELDS, use_quoted_fields),
        ):
            if value is not None:
                self.accessor.set_first_value(tag, value, element)
        return element

    def add_feed_destination(self, destination: str, enabled: bool = True) -> Element:
        element = self.accessor.create(Tag.FEED_DESTINATION)
        element.set("dest", destination)
        set_attr(element, "enabled", "true" if enabled else "false")
        return self.accessor.append(element)

    def get_feed_destinations(self) -> Dict[str, bool]:
        return {
            attr(element, "dest"): attr(element, "enabled") == "true"
            for element in self.accessor.get_all(Tag.FEED_DESTINATION)
        }

    def clear_feed_destinations(self) -> None:
        self.accessor.delete_all(Tag.FEED_DESTINATION)


class DatafeedList(AtomFeed):
    entry_class = Datafeed

    def add_datafeed(self, datafeed: Datafeed) -> Element:
        return self.add_entry(datafeed)

    def get_datafeeds(self) -> List[Datafeed]:
        return self.get_entries()
