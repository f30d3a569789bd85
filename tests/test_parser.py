import pytest

from shopping_content.accounts import ManagedAccount, ManagedAccountList
from shopping_content.atom import ErrorElement, ErrorList
from shopping_content.datafeeds import Datafeed, DatafeedList
from shopping_content.errors import ParseError, UnrecognizedDocumentError
from shopping_content.parser import parse, parse_datafeeds, parse_managed_accounts
from shopping_content.products import Product, ProductList

from samples import ACCOUNT_FEED, ERRORS_DOCUMENT, PRODUCT_ENTRY, PRODUCT_FEED

DATAFEED_ENTRY = """<entry xmlns="http://www.w3.org/2005/Atom"
       xmlns:sc="http://schemas.google.com/structuredcontent/2009">
  <title>Main feed</title>
  <sc:target_country>US</sc:target_country>
  <sc:feed_file_name>products.txt</sc:feed_file_name>
  <sc:file_format format="dsv">
    <sc:delimiter>tab</sc:delimiter>
  </sc:file_format>
  <sc:processing_status>processed</sc:processing_status>
</entry>
"""


@pytest.mark.parametrize(
    "payload, expected",
    [
        (PRODUCT_ENTRY, Product),
        (PRODUCT_FEED, ProductList),
        (ERRORS_DOCUMENT, ErrorList),
    ],
)
def test_parse_dispatches_on_root(payload, expected):
    assert type(parse(payload)) is expected


def test_parse_accepts_bytes():
    product = parse(PRODUCT_ENTRY.encode("utf-8"))
    assert product.sku == "SKU123"


def test_error_document_fields():
    errors = parse(ERRORS_DOCUMENT)

    assert len(errors) == 1
    (error,) = errors.get_errors()
    assert error.domain == "GData"
    assert error.code == "ResourceNotFoundException"
    assert error.internal_reason == "Not found"
    assert error.location == ""


def test_parse_managed_accounts_dispatch():
    assert isinstance(parse_managed_accounts(ACCOUNT_FEED), ManagedAccountList)
    assert isinstance(parse_managed_accounts(ManagedAccount().to_xml()), ManagedAccount)
    assert isinstance(parse_managed_accounts(ERRORS_DOCUMENT), ErrorList)


def test_parse_datafeeds_dispatch():
    datafeed = parse_datafeeds(DATAFEED_ENTRY)

    assert isinstance(datafeed, Datafeed)
    assert datafeed.feed_file_name == "products.txt"
    assert datafeed.file_format == "dsv"
    assert datafeed.delimiter == "tab"
    assert datafeed.processing_status == "processed"
    assert isinstance(parse_datafeeds(DatafeedList().to_xml()), DatafeedList)


def test_unknown_root_is_rejected():
    with pytest.raises(UnrecognizedDocumentError) as excinfo:
        parse('<service xmlns="http://www.w3.org/2007/app"/>')
    assert "service" in str(excinfo.value)


@pytest.mark.parametrize("payload", ["", "   ", "<entry>", "not xml at all"])
def test_malformed_input_raises_parse_error(payload):
    with pytest.raises(ParseError):
        parse(payload)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse("<feed><entry></feed>")


def test_entities_are_not_expanded():
    payload = """<?xml version="1.0"?>
<!DOCTYPE entry [<!ENTITY secret SYSTEM "file:///etc/passwd">]>
<entry xmlns="http://www.w3.org/2005/Atom"><title>&secret;</title></entry>
"""
    product = parse(payload)
    assert "root:" not in product.title


def test_decoded_text_ignores_foreign_encoding_declaration():
    payload = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        '<entry xmlns="http://www.w3.org/2005/Atom"><title>café</title></entry>'
    )
    assert parse(payload).title == "café"


def test_raw_bytes_honour_their_encoding_declaration():
    payload = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        '<entry xmlns="http://www.w3.org/2005/Atom"><title>café</title></entry>'
    ).encode("latin-1")
    assert parse(payload).title == "café"


def test_datafeed_round_trip():
    datafeed = Datafeed()
    datafeed.title = "Main feed"
    datafeed.target_country = "DE"
    datafeed.content_language = "de"
    datafeed.attribute_language = "en"
    datafeed.feed_file_name = "produkte.xml"
    datafeed.feed_type = "products"
    datafeed.set_file_format("dsv", delimiter="pipe", encoding="latin-1", use_quoted_fields="true")
    datafeed.add_feed_destination("ProductSearch")
    datafeed.add_feed_destination("ProductAds", enabled=False)

    copy = parse_datafeeds(datafeed.to_xml())

    assert isinstance(copy, Datafeed)
    for name in ("title", "target_country", "content_language", "attribute_language",
                 "feed_file_name", "feed_type", "file_format", "delimiter", "encoding",
                 "use_quoted_fields"):
        assert getattr(copy, name) == getattr(datafeed, name)
    assert copy.get_feed_destinations() == {"ProductSearch": True, "ProductAds": False}


def test_error_list_round_trip():
    error = ErrorElement()
    error.domain = "GData"
    error.code = "validation"
    error.set_location("price", "flag")
    error.internal_reason = "Missing price"
    error.debug_info = "trace-1"
    errors = ErrorList()
    errors.add_error(error)

    copy = parse(errors.to_xml())

    assert isinstance(copy, ErrorList)
    (restored,) = copy.get_errors()
    assert (restored.domain, restored.code, restored.internal_reason, restored.debug_info) == (
        "GData",
        "validation",
        "Missing price",
        "trace-1",
    )
    assert restored.location == "price"
    assert restored.location_type == "flag"
