"""Namespaces and qualified tags used by the Atom wire format."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

ATOM = "http://www.w3.org/2005/Atom"
APP = "http://www.w3.org/2007/app"
BATCH = "http://schemas.google.com/gdata/batch"
SC = "http://schemas.google.com/structuredcontent/2009"
SCP = "http://schemas.google.com/structuredcontent/2009/products"
GD = "http://schemas.google.com/g/2005"
OPENSEARCH = "http://a9.com/-/spec/opensearch/1.1/"

NSMAP = {
    None: ATOM,
    "app": APP,
    "batch": BATCH,
    "sc": SC,
    "scp": SCP,
    "gd": GD,
    "openSearch": OPENSEARCH,
}

BATCH_ERROR_CONTENT_TYPE = "application/vnd.google.gdata.error+xml"


class QualifiedTag(NamedTuple):
    namespace: str
    local: str

    @property
    def clark(self) -> str:
        return f"{{{self.namespace}}}{self.local}"


class Tag(Enum):
    # atom
    ENTRY = QualifiedTag(ATOM, "entry")
    FEED = QualifiedTag(ATOM, "feed")
    ATOM_ID = QualifiedTag(ATOM, "id")
    TITLE = QualifiedTag(ATOM, "title")
    CONTENT = QualifiedTag(ATOM, "content")
    LINK = QualifiedTag(ATOM, "link")
    UPDATED = QualifiedTag(ATOM, "updated")
    PUBLISHED = QualifiedTag(ATOM, "published")

    # batch
    OPERATION = QualifiedTag(BATCH, "operation")
    STATUS = QualifiedTag(BATCH, "status")
    BATCH_ID = QualifiedTag(BATCH, "id")

    # app
    CONTROL = QualifiedTag(APP, "control")

    # structured content
    ID = QualifiedTag(SC, "id")
    ADULT = QualifiedTag(SC, "adult")
    TARGET_COUNTRY = QualifiedTag(SC, "target_country")
    CONTENT_LANGUAGE = QualifiedTag(SC, "content_language")
    IMAGE_LINK = QualifiedTag(SC, "image_link")
    ADDITIONAL_IMAGE_LINK = QualifiedTag(SC, "additional_image_link")
    EXPIRATION_DATE = QualifiedTag(SC, "expiration_date")
    REQUIRED_DESTINATION = QualifiedTag(SC, "required_destination")
    EXCLUDED_DESTINATION = QualifiedTag(SC, "excluded_destination")
    VALIDATE_DESTINATION = QualifiedTag(SC, "validate_destination")
    ATTRIBUTE = QualifiedTag(SC, "attribute")
    GROUP = QualifiedTag(SC, "group")
    WARNINGS = QualifiedTag(SC, "warnings")
    WARNING = QualifiedTag(SC, "warning")
    WARNING_CODE = QualifiedTag(SC, "code")
    WARNING_DOMAIN = QualifiedTag(SC, "domain")
    WARNING_LOCATION = QualifiedTag(SC, "location")
    WARNING_MESSAGE = QualifiedTag(SC, "message")

    # structured content, products
    PRICE = QualifiedTag(SCP, "price")
    SALE_PRICE = QualifiedTag(SCP, "sale_price")
    SALE_PRICE_EFFECTIVE_DATE = QualifiedTag(SCP, "sale_price_effective_date")
    CONDITION = QualifiedTag(SCP, "condition")
    SHIPPING = QualifiedTag(SCP, "shipping")
    SHIPPING_COUNTRY = QualifiedTag(SCP, "shipping_country")
    SHIPPING_REGION = QualifiedTag(SCP, "shipping_region")
    SHIPPING_PRICE = QualifiedTag(SCP, "shipping_price")
    SHIPPING_SERVICE = QualifiedTag(SCP, "shipping_service")
    TAX = QualifiedTag(SCP, "tax")
    TAX_COUNTRY = QualifiedTag(SCP, "tax_country")
    TAX_REGION = QualifiedTag(SCP, "tax_region")
    TAX_RATE = QualifiedTag(SCP, "tax_rate")
    TAX_SHIP = QualifiedTag(SCP, "tax_ship")
    AGE_GROUP = QualifiedTag(SCP, "age_group")
    AUTHOR = QualifiedTag(SCP, "author")
    AVAILABILITY = QualifiedTag(SCP, "availability")
    BRAND = QualifiedTag(SCP, "brand")
    COLOR = QualifiedTag(SCP, "color")
    EDITION = QualifiedTag(SCP, "edition")
    FEATURE = QualifiedTag(SCP, "feature")
    FEATURED_PRODUCT = QualifiedTag(SCP, "featured_product")
    GENRE = QualifiedTag(SCP, "genre")
    MANUFACTURER = QualifiedTag(SCP, "manufacturer")
    MPN = QualifiedTag(SCP, "mpn")
    ONLINE_ONLY = QualifiedTag(SCP, "online_only")
    GTIN = QualifiedTag(SCP, "gtin")
    PRODUCT_TYPE = QualifiedTag(SCP, "product_type")
    PRODUCT_REVIEW_AVERAGE = QualifiedTag(SCP, "product_review_average")
    PRODUCT_REVIEW_COUNT = QualifiedTag(SCP, "product_review_count")
    QUANTITY = QualifiedTag(SCP, "quantity")
    SHIPPING_WEIGHT = QualifiedTag(SCP, "shipping_weight")
    SIZE = QualifiedTag(SCP, "size")
    YEAR = QualifiedTag(SCP, "year")
    CHANNEL = QualifiedTag(SCP, "channel")
    GENDER = QualifiedTag(SCP, "gender")
    ITEM_GROUP_ID = QualifiedTag(SCP, "item_group_id")
    GOOGLE_PRODUCT_CATEGORY = QualifiedTag(SCP, "google_product_category")
    MATERIAL = QualifiedTag(SCP, "material")
    PATTERN = QualifiedTag(SCP, "pattern")
    ADWORDS_GROUPING = QualifiedTag(SCP, "adwords_grouping")
    ADWORDS_LABELS = QualifiedTag(SCP, "adwords_labels")
    ADWORDS_REDIRECT = QualifiedTag(SCP, "adwords_redirect")
    ADWORDS_QUERYPARAM = QualifiedTag(SCP, "adwords_queryparam")

    # managed accounts
    INTERNAL_ID = QualifiedTag(SC, "internal_id")
    REVIEWS_URL = QualifiedTag(SC, "reviews_url")
    ADULT_CONTENT = QualifiedTag(SC, "adult_content")
    ACCOUNT_STATUS = QualifiedTag(SC, "account_status")
    ADWORDS_ACCOUNTS = QualifiedTag(SC, "adwords_accounts")
    ADWORDS_ACCOUNT = QualifiedTag(SC, "adwords_account")

    # datafeeds
    ATTRIBUTE_LANGUAGE = QualifiedTag(SC, "attribute_language")
    FEED_FILE_NAME = QualifiedTag(SC, "feed_file_name")
    FEED_TYPE = QualifiedTag(SC, "feed_type")
    FILE_FORMAT = QualifiedTag(SC, "file_format")
    DELIMITER = QualifiedTag(SC, "delimiter")
    ENCODING = QualifiedTag(SC, "encoding")
    USE_QUOTED_FIELDS = QualifiedTag(SC, "use_quoted_fields")
    FEED_DESTINATION = QualifiedTag(SC, "feed_destination")
    PROCESSING_STATUS = QualifiedTag(SC, "processing_status")

    # gdata errors
    ERRORS = QualifiedTag(GD, "errors")
    ERROR = QualifiedTag(GD, "error")
    ERROR_DOMAIN = QualifiedTag(GD, "domain")
    ERROR_CODE = QualifiedTag(GD, "code")
    ERROR_LOCATION = QualifiedTag(GD, "location")
    ERROR_INTERNAL_REASON = QualifiedTag(GD, "internalReason")
    ERROR_DEBUG_INFO = QualifiedTag(GD, "debugInfo")

    # paging
    TOTAL_RESULTS = QualifiedTag(OPENSEARCH, "totalResults")
    START_INDEX = QualifiedTag(OPENSEARCH, "startIndex")
    ITEMS_PER_PAGE = QualifiedTag(OPENSEARCH, "itemsPerPage")

    @property
    def clark(self) -> str:
        return self.value.clark


def tag(name: str) -> QualifiedTag:
    """Look up a qualified tag by symbolic name, e.g. ``tag("shipping_weight")``.

    Raises KeyError for names outside the registry.
    """
    return Tag[name.upper()].value
