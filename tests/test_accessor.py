import pytest
from lxml import etree

from shopping_content.accessor import ElementAccessor, attr, set_attr
from shopping_content.namespaces import SCP, QualifiedTag, Tag, tag
from shopping_content.products import Product


def _count(product, qualified):
    return len(product.accessor.get_all(qualified))


def test_tag_lookup_by_name():
    assert tag("price") == QualifiedTag(SCP, "price")
    assert tag("SHIPPING_WEIGHT") == Tag.SHIPPING_WEIGHT.value
    assert Tag.PRICE.clark == "{%s}price" % SCP


def test_tag_lookup_unknown_name():
    with pytest.raises(KeyError):
        tag("no_such_field")


def test_qualified_tags_compare_by_both_parts():
    assert QualifiedTag(SCP, "price") == Tag.PRICE.value
    assert QualifiedTag("http://other", "price") != Tag.PRICE.value


def test_get_first_value_on_absent_tag_does_not_create():
    product = Product()
    before = product.to_xml()

    assert product.get_first_value(Tag.BRAND) == ""
    assert product.accessor.get_first(Tag.BRAND) is None
    assert product.to_xml() == before


def test_set_first_value_twice_keeps_single_element():
    product = Product()
    product.set_first_value(Tag.BRAND, "Dijji")
    product.set_first_value(Tag.BRAND, "Dijji")

    assert _count(product, Tag.BRAND) == 1
    assert product.brand == "Dijji"


def test_ensure_first_returns_same_element():
    accessor = Product().accessor
    first = accessor.ensure_first(Tag.CONDITION)
    second = accessor.ensure_first(Tag.CONDITION)

    assert first is second
    assert len(accessor.get_all(Tag.CONDITION)) == 1
    assert accessor.root[-1] is first


def test_get_first_searches_descendants_but_not_scope_itself():
    product = Product()
    product.add_shipping("US", "MA", "5.95", "USD", "Ground")
    accessor = product.accessor

    assert accessor.get_first_value(Tag.SHIPPING_COUNTRY) == "US"
    shipping = accessor.get_first(Tag.SHIPPING)
    assert accessor.get_first(Tag.SHIPPING, shipping) is None


@pytest.mark.parametrize("count", [0, 1, 3])
def test_delete_all_removes_every_match(count):
    product = Product()
    product.title = "keep me"
    for idx in range(count):
        product.add_feature(f"feature {idx}")
    product.add_size("XL")

    removed = product.accessor.delete_all(Tag.FEATURE)

    assert removed == count
    assert product.get_features() == []
    assert product.get_sizes() == ["XL"]
    assert product.title == "keep me"


def test_delete_all_scoped_to_subtree():
    product = Product()
    first = product.add_shipping("US", "MA", "5.95", "USD", "Ground")
    product.add_shipping("US", "CA", "7.95", "USD", "Express")

    product.accessor.delete_all(Tag.SHIPPING_REGION, first)

    regions = [rule.region for rule in product.get_shippings()]
    assert regions == ["", "CA"]


def test_get_all_is_a_snapshot():
    product = Product()
    product.add_feature("a")
    snapshot = product.accessor.get_all(Tag.FEATURE)
    product.add_feature("b")

    assert len(snapshot) == 1
    assert len(product.accessor.get_all(Tag.FEATURE)) == 2


def test_get_link_by_rel():
    product = Product()
    product.set_product_link("http://www.example.com/sku124")
    product.set_edit_link("http://api.example.com/edit")

    assert attr(product.accessor.get_link("edit"), "href") == "http://api.example.com/edit"
    assert attr(product.accessor.get_link("alternate"), "type") == "text/html"
    assert product.accessor.get_link("next") is None


def test_create_is_detached():
    accessor = Product().accessor
    element = accessor.create(Tag.FEATURE, "waterproof")

    assert element.getparent() is None
    assert element.text == "waterproof"
    assert accessor.get_all(Tag.FEATURE) == []


def test_clone_into_copies_instead_of_aliasing():
    source = Product()
    source.title = "original"
    target = ElementAccessor(etree.Element(Tag.FEED.clark))

    clone = target.append(target.clone_into(source.root))
    source.title = "changed"

    assert target.get_first_value(Tag.TITLE, clone) == "original"
    assert source.root.getparent() is None


def test_attribute_helpers_tolerate_missing_values():
    assert attr(None, "unit") == ""
    element = Product().accessor.create(Tag.PRICE)
    set_attr(element, "unit", None)
    assert "unit" not in element.attrib
    set_attr(element, "unit", "usd")
    assert attr(element, "unit") == "usd"
