"""Product entries and product feeds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .accessor import Element, attr, set_attr
from .atom import AtomEntry, AtomFeed, query_param, text_field
from .namespaces import Tag


@dataclass(frozen=True)
class ShippingRule:
    country: str
    region: str
    price: str
    price_unit: str
    service: str


@dataclass(frozen=True)
class TaxRule:
    country: str
    region: str
    rate: str
    ship: str


@dataclass(frozen=True)
class GenericAttribute:
    name: str
    value: str
    type: Optional[str] = None
    unit: Optional[str] = None


@dataclass(frozen=True)
class ProductWarning:
    code: str
    domain: str
    location: str
    message: str


class Product(AtomEntry):
    """A single product entry.

    Simple fields are plain string properties; nothing is validated or
    converted, so ``product.price`` is whatever text the feed carries.
    """

    sku = text_field(Tag.ID)
    target_country = text_field(Tag.TARGET_COUNTRY)
    content_language = text_field(Tag.CONTENT_LANGUAGE)
    condition = text_field(Tag.CONDITION)
    expiration_date = text_field(Tag.EXPIRATION_DATE)
    adult = text_field(Tag.ADULT)
    image_link = text_field(Tag.IMAGE_LINK)
    price = text_field(Tag.PRICE)
    sale_price = text_field(Tag.SALE_PRICE)
    sale_price_effective_date = text_field(Tag.SALE_PRICE_EFFECTIVE_DATE)
    shipping_weight = text_field(Tag.SHIPPING_WEIGHT)
    age_group = text_field(Tag.AGE_GROUP)
    author = text_field(Tag.AUTHOR)
    availability = text_field(Tag.AVAILABILITY)
    brand = text_field(Tag.BRAND)
    color = text_field(Tag.COLOR)
    edition = text_field(Tag.EDITION)
    featured_product = text_field(Tag.FEATURED_PRODUCT)
    genre = text_field(Tag.GENRE)
    manufacturer = text_field(Tag.MANUFACTURER)
    mpn = text_field(Tag.MPN)
    online_only = text_field(Tag.ONLINE_ONLY)
    gtin = text_field(Tag.GTIN)
    product_type = text_field(Tag.PRODUCT_TYPE)
    product_review_average = text_field(Tag.PRODUCT_REVIEW_AVERAGE)
    product_review_count = text_field(Tag.PRODUCT_REVIEW_COUNT)
    quantity = text_field(Tag.QUANTITY)
    year = text_field(Tag.YEAR)
    channel = text_field(Tag.CHANNEL)
    gender = text_field(Tag.GENDER)
    item_group_id = text_field(Tag.ITEM_GROUP_ID)
    google_product_category = text_field(Tag.GOOGLE_PRODUCT_CATEGORY)
    material = text_field(Tag.MATERIAL)
    pattern = text_field(Tag.PATTERN)
    adwords_grouping = text_field(Tag.ADWORDS_GROUPING)
    adwords_labels = text_field(Tag.ADWORDS_LABELS)
    adwords_redirect = text_field(Tag.ADWORDS_REDIRECT)
    adwords_queryparam = text_field(Tag.ADWORDS_QUERYPARAM)

    # values with units

    @property
    def price_unit(self) -> str:
        return attr(self.accessor.get_first(Tag.PRICE), "unit")

    def set_price(self, price: str, unit: str) -> Element:
        element = self.accessor.set_first_value(Tag.PRICE, price)
        return set_attr(element, "unit", unit)

    @property
    def sale_price_unit(self) -> str:
        return attr(self.accessor.get_first(Tag.SALE_PRICE), "unit")

    def set_sale_price(self, price: str, unit: str) -> Element:
        element = self.accessor.set_first_value(Tag.SALE_PRICE, price)
        return set_attr(element, "unit", unit)

    @property
    def shipping_weight_unit(self) -> str:
        return attr(self.accessor.get_first(Tag.SHIPPING_WEIGHT), "unit")

    def set_shipping_weight(self, weight: str, unit: str) -> Element:
        element = self.accessor.set_first_value(Tag.SHIPPING_WEIGHT, weight)
        return set_attr(element, "unit", unit)

    # links

    @property
    def product_link(self) -> str:
        return self._get_link_href("alternate")

    @product_link.setter
    def product_link(self, href: str) -> None:
        self.set_product_link(href)

    def set_product_link(self, href: str) -> Element:
        return self._set_link("alternate", href, "text/html")

    # repeated values

    def add_feature(self, feature: str) -> Element:
        return self._add_value(Tag.FEATURE, feature)

    def get_features(self) -> List[str]:
        return self._get_values(Tag.FEATURE)

    def clear_all_features(self) -> None:
        self.accessor.delete_all(Tag.FEATURE)

    def add_size(self, size: str) -> Element:
        return self._add_value(Tag.SIZE, size)

    def get_sizes(self) -> List[str]:
        return self._get_values(Tag.SIZE)

    def clear_all_sizes(self) -> None:
        self.accessor.delete_all(Tag.SIZE)

    def add_additional_image_link(self, link: str) -> Element:
        return self._add_value(Tag.ADDITIONAL_IMAGE_LINK, link)

    def get_additional_image_links(self) -> List[str]:
        return self._get_values(Tag.ADDITIONAL_IMAGE_LINK)

    def clear_all_additional_image_links(self) -> None:
        self.accessor.delete_all(Tag.ADDITIONAL_IMAGE_LINK)

    def add_adwords_label(self, label: str) -> Element:
        return self._add_value(Tag.ADWORDS_LABELS, label)

    def get_adwords_labels(self) -> List[str]:
        return self._get_values(Tag.ADWORDS_LABELS)

    def clear_all_adwords_labels(self) -> None:
        self.accessor.delete_all(Tag.ADWORDS_LABELS)

    # shipping and tax rules

    def add_shipping(self, country: str, region: str, price: str, price_unit: str, service: str) -> Element:
        """Append a new shipping rule; existing rules are never merged."""
        accessor = self.accessor
        shipping = accessor.create(Tag.SHIPPING)
        accessor.set_first_value(Tag.SHIPPING_COUNTRY, country, shipping)
        accessor.set_first_value(Tag.SHIPPING_REGION, region, shipping)
        price_element = accessor.set_first_value(Tag.SHIPPING_PRICE, price, shipping)
        set_attr(price_element, "unit", price_unit)
        accessor.set_first_value(Tag.SHIPPING_SERVICE, service, shipping)
        return accessor.append(shipping)

    def get_shippings(self) -> List[ShippingRule]:
        accessor = self.accessor
        return [
            ShippingRule(
                country=accessor.get_first_value(Tag.SHIPPING_COUNTRY, shipping),
                region=accessor.get_first_value(Tag.SHIPPING_REGION, shipping),
                price=accessor.get_first_value(Tag.SHIPPING_PRICE, shipping),
                price_unit=attr(accessor.get_first(Tag.SHIPPING_PRICE, shipping), "unit"),
                service=accessor.get_first_value(Tag.SHIPPING_SERVICE, shipping),
            )
            for shipping in accessor.get_all(Tag.SHIPPING)
        ]

    def clear_all_shippings(self) -> None:
        self.accessor.delete_all(Tag.SHIPPING)

    def add_tax(self, country: str, region: str, rate: str, ship: str) -> Element:
        accessor = self.accessor
        tax = accessor.create(Tag.TAX)
        accessor.set_first_value(Tag.TAX_COUNTRY, country, tax)
        accessor.set_first_value(Tag.TAX_REGION, region, tax)
        accessor.set_first_value(Tag.TAX_RATE, rate, tax)
        accessor.set_first_value(Tag.TAX_SHIP, ship, tax)
        return accessor.append(tax)

    def get_taxes(self) -> List[TaxRule]:
        accessor = self.accessor
        return [
            TaxRule(
                country=accessor.get_first_value(Tag.TAX_COUNTRY, tax),
                region=accessor.get_first_value(Tag.TAX_REGION, tax),
                rate=accessor.get_first_value(Tag.TAX_RATE, tax),
                ship=accessor.get_first_value(Tag.TAX_SHIP, tax),
            )
            for tax in accessor.get_all(Tag.TAX)
        ]

    def clear_all_taxes(self) -> None:
        self.accessor.delete_all(Tag.TAX)

    # destinations

    def _add_destination(self, tag: Tag, destination: str) -> Element:
        control = self.accessor.ensure_first(Tag.CONTROL)
        child = self.accessor.create(tag)
        child.set("dest", destination)
        return self.accessor.append(child, control)

    def _get_destinations(self, tag: Tag) -> List[str]:
        return [element.get("dest", "") for element in self.accessor.get_all(tag)]

    def add_required_destination(self, destination: str) -> Element:
        return self._add_destination(Tag.REQUIRED_DESTINATION, destination)

    def add_excluded_destination(self, destination: str) -> Element:
        return self._add_destination(Tag.EXCLUDED_DESTINATION, destination)

    def add_validate_destination(self, destination: str) -> Element:
        return self._add_destination(Tag.VALIDATE_DESTINATION, destination)

    def get_required_destinations(self) -> List[str]:
        return self._get_destinations(Tag.REQUIRED_DESTINATION)

    def get_excluded_destinations(self) -> List[str]:
        return self._get_destinations(Tag.EXCLUDED_DESTINATION)

    def get_validate_destinations(self) -> List[str]:
        return self._get_destinations(Tag.VALIDATE_DESTINATION)

    def clear_all_destinations(self) -> None:
        self.accessor.delete_all(Tag.CONTROL)

    # generic attributes and groups

    def _find_attribute(self, name: str, scope: Optional[Element] = None) -> Optional[Element]:
        for element in self.accessor.get_all(Tag.ATTRIBUTE, scope):
            # top-level lookups skip attributes owned by a group
            if scope is None and element.getparent().tag == Tag.GROUP.clark:
                continue
            if element.get("name") == name:
                return element
        return None

    def _write_attribute(self, element: Element, attribute: GenericAttribute) -> Element:
        element.text = attribute.value
        element.set("name", attribute.name)
        set_attr(element, "type", attribute.type)
        set_attr(element, "unit", attribute.unit)
        return element

    def set_attribute(self, value: str, name: str, type: Optional[str] = None, unit: Optional[str] = None) -> Element:
        element = self._find_attribute(name)
        if element is None:
            element = self.accessor.append(self.accessor.create(Tag.ATTRIBUTE))
        return self._write_attribute(element, GenericAttribute(name=name, value=value, type=type, unit=unit))

    def get_attribute(self, name: str) -> str:
        element = self._find_attribute(name)
        return "" if element is None else element.text or ""

    def get_attribute_type(self, name: str) -> str:
        return attr(self._find_attribute(name), "type")

    def get_attribute_unit(self, name: str) -> str:
        return attr(self._find_attribute(name), "unit")

    def _find_group(self, group_name: str) -> Optional[Element]:
        for element in self.accessor.get_all(Tag.GROUP):
            if element.get("name") == group_name:
                return element
        return None

    def set_group(self, group_name: str, attributes: Iterable[GenericAttribute]) -> Element:
        """Replace the whole attribute set of ``group_name``."""
        group = self._find_group(group_name)
        if group is None:
            group = self.accessor.append(self.accessor.create(Tag.GROUP))
            group.set("name", group_name)
        self.accessor.delete_all(Tag.ATTRIBUTE, group)
        for attribute in attributes:
            element = self.accessor.append(self.accessor.create(Tag.ATTRIBUTE), group)
            self._write_attribute(element, attribute)
        return group

    def get_group(self, group_name: str) -> List[GenericAttribute]:
        group = self._find_group(group_name)
        if group is None:
            return []
        return [
            GenericAttribute(
                name=element.get("name", ""),
                value=element.text or "",
                type=element.get("type"),
                unit=element.get("unit"),
            )
            for element in self.accessor.get_all(Tag.ATTRIBUTE, group)
        ]

    # server feedback

    def get_warnings(self) -> List[ProductWarning]:
        accessor = self.accessor
        return [
            ProductWarning(
                code=accessor.get_first_value(Tag.WARNING_CODE, warning),
                domain=accessor.get_first_value(Tag.WARNING_DOMAIN, warning),
                location=accessor.get_first_value(Tag.WARNING_LOCATION, warning),
                message=accessor.get_first_value(Tag.WARNING_MESSAGE, warning),
            )
            for warning in accessor.get_all(Tag.WARNING)
        ]


class ProductList(AtomFeed):
    entry_class = Product

    def add_product(self, product: Product) -> Element:
        return self.add_entry(product)

    def get_products(self) -> List[Product]:
        return self.get_entries()

    def get_start_token(self) -> str:
        link = self.get_next_link()
        if not link:
            return ""
        return query_param(link, "start-token")
