# tests/test_discounts.py
from discounts import classify_discount, normalize_item, normalize_items, normalize_record
from models import PricedItem
from thresholds import ThresholdPolicy


def _make_item(price=90000, original_price=100000, **kwargs):
    return PricedItem(id="p1", name="Test Product", price=price, original_price=original_price, **kwargs)


def test_no_original_price_is_not_discounted():
    item = normalize_item(_make_item(original_price=None, is_discounted=True, discount_percentage=20))
    assert item.is_discounted is False
    assert item.discount_percentage is None
    assert item.price == 90000
    assert item.original_price is None


def test_original_not_above_price_is_not_discounted():
    item = normalize_item(_make_item(price=100000, original_price=100000))
    assert item.is_discounted is False
    assert item.price == 100000
    assert item.original_price == 100000

    item = normalize_item(_make_item(price=120000, original_price=100000))
    assert item.is_discounted is False


def test_tiny_discount_clears_source_claims():
    # 0.5% and 5000 off: neither floor is met
    item = normalize_item(_make_item(price=995000, original_price=1000000,
                                     is_discounted=True, discount_percentage=1))
    assert item.is_discounted is False
    assert item.discount_percentage is None
    assert item.price == 995000
    assert item.original_price == 1000000


def test_large_absolute_discount_under_one_percent():
    # 60000 off 10,000,000 is 0.6% but clears the absolute floor
    item = normalize_item(_make_item(price=9940000, original_price=10000000))
    assert item.is_discounted is True
    assert item.discount_percentage >= 1
    assert item.discount_type == "fixed"
    assert item.discount_source == "manual"


def test_round_percentage_inferred():
    item = normalize_item(_make_item(price=90000, original_price=100000))
    assert item.is_discounted is True
    assert item.discount_type == "percentage"
    assert item.discount_percentage == 10


def test_odd_percentage_inferred_as_fixed():
    item = normalize_item(_make_item(price=100000, original_price=103000))
    assert item.is_discounted is True
    assert item.discount_type == "fixed"
    assert item.discount_percentage == 3


def test_explicit_percentage_means_percentage_type():
    item = normalize_item(_make_item(price=100000, original_price=103000, discount_percentage=3))
    assert item.discount_type == "percentage"
    assert item.discount_percentage == 3


def test_explicit_type_and_source_are_kept():
    item = normalize_item(_make_item(discount_type="fixed", discount_source="automatic"))
    assert item.discount_type == "fixed"
    assert item.discount_source == "automatic"
    assert item.discount_percentage == 10


def test_near_round_percentage_outside_tolerance_is_fixed():
    # 14.8% off: nearest 15 is 0.2 away
    item = normalize_item(_make_item(price=852000, original_price=1000000))
    assert item.discount_type == "fixed"
    assert item.discount_percentage == 15


def test_half_percent_rounds_up():
    # 12.5% off; banker's rounding would give 12
    decision = classify_discount(_make_item(price=700000, original_price=800000))
    assert decision.discount_percentage == 13


def test_normalization_is_idempotent():
    samples = [
        _make_item(),
        _make_item(price=100000, original_price=103000),
        _make_item(price=995000, original_price=1000000, is_discounted=True),
        _make_item(price=9940000, original_price=10000000),
        _make_item(original_price=None, category="CPU"),
    ]
    for sample in samples:
        once = normalize_item(sample)
        assert normalize_item(once) == once


def test_normalize_does_not_mutate_input():
    item = _make_item(categories=None, category="RAM", is_discounted=None)
    result = normalize_item(item)
    assert result is not item
    assert item.is_discounted is None
    assert item.categories is None
    assert result.categories == ["RAM"]


def test_categories_normalization():
    assert normalize_item(_make_item(categories=["CPU", "AMD"])).categories == ["CPU", "AMD"]
    assert normalize_item(_make_item(category="GraphicsCard")).categories == ["GraphicsCard"]
    assert normalize_item(_make_item()).categories == []


def test_custom_policy_thresholds():
    policy = ThresholdPolicy(min_percent=20.0, min_absolute=10**9)
    item = normalize_item(_make_item(price=90000, original_price=100000), policy)
    assert item.is_discounted is False


def test_malformed_numbers_do_not_raise():
    record = {"id": "x", "name": "Broken", "price": "abc", "originalPrice": float("nan")}
    result = normalize_record(record)
    assert result["isDiscounted"] is False
    assert "discountPercentage" not in result


def test_normalize_record_passes_unknown_fields():
    record = {
        "id": "gpu-1",
        "name": "RTX 4070",
        "price": 15000000,
        "originalPrice": "16,500,000",
        "brand": "MSI",
        "specifications": {"vram": "12GB"},
        "category": "GraphicsCard",
        "categories": "GraphicsCard",
    }
    result = normalize_record(record)
    assert result["brand"] == "MSI"
    assert result["specifications"] == {"vram": "12GB"}
    assert result["isDiscounted"] is True
    assert result["categories"] == ["GraphicsCard"]
    assert record["categories"] == "GraphicsCard"


def test_normalize_items_handles_lists_and_junk():
    items = normalize_items([{"id": 1, "price": 100, "originalPrice": 200}, "not a record"])
    assert len(items) == 2
    assert items[0].is_discounted is True
    assert items[1].is_discounted is False
    assert normalize_items(None) == []


def test_incoming_percentage_below_one_is_ignored():
    # 0.4 rounds to 0, outside the 1..100 domain
    result = normalize_record({"price": 9940000, "originalPrice": 10000000, "discountPercentage": 0.4})
    assert result["isDiscounted"] is True
    assert result["discountPercentage"] >= 1
    assert result["discountType"] == "fixed"


def test_incoming_percentage_above_hundred_is_ignored():
    item = normalize_item({"price": 90000, "originalPrice": 100000, "discountPercentage": 100.6})
    assert item.discount_percentage == 10
    assert item.discount_type == "percentage"
