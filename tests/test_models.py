# tests/test_models.py
import pytest

from models import (
    BuildComponent,
    MalformedComponentError,
    MappingResult,
    PricedItem,
    coerce_number,
    configuration_to_dict,
    parse_configuration,
)


def test_coerce_number():
    assert coerce_number(1500) == 1500
    assert coerce_number(12.5) == 12.5
    assert coerce_number("1,500,000") == 1500000
    assert coerce_number(" 99.9 ") == 99.9
    assert coerce_number("abc") is None
    assert coerce_number("") is None
    assert coerce_number(None) is None
    assert coerce_number(True) is None
    assert coerce_number(float("nan")) is None
    assert coerce_number(float("inf")) is None
    assert coerce_number([1]) is None


def test_priced_item_round_trip_keeps_extra_fields():
    record = {
        "id": "p1",
        "name": "Corsair RM750e",
        "price": 2500000,
        "originalPrice": 2800000,
        "slug": "corsair-rm750e",
        "rating": 4.5,
    }
    item = PricedItem.from_dict(record)
    assert item.extra == {"slug": "corsair-rm750e", "rating": 4.5}
    assert item.to_dict() == record


def test_priced_item_rejects_unknown_tags():
    item = PricedItem.from_dict({"price": 1, "discountType": "bogo", "discountSource": "coupon",
                                 "discountPercentage": 0, "isDiscounted": "yes"})
    assert item.discount_type is None
    assert item.discount_source is None
    assert item.discount_percentage is None
    assert item.is_discounted is None


def test_build_component_from_dict():
    component = BuildComponent.from_dict({
        "partId": "ssd-9",
        "name": "Kingston NV2 1TB",
        "price": "1,100,000",
        "formFactor": "M.2",
        "readSpeed": 3500,
    })
    assert component.resolved_id == "ssd-9"
    assert component.price == 1100000
    assert component.form_factor == "M.2"
    assert component.extra == {"readSpeed": 3500}
    assert component.details == {}


def test_build_component_prefers_id():
    component = BuildComponent(id="a", part_id="b")
    assert component.resolved_id == "a"
    component = BuildComponent(id="", part_id=["b", "c"])
    assert component.resolved_id == ["b", "c"]


def test_build_component_rejects_bad_shapes():
    with pytest.raises(MalformedComponentError):
        BuildComponent.from_dict("CPU")
    with pytest.raises(MalformedComponentError):
        BuildComponent.from_dict({"name": "x", "details": 5})


def test_build_component_to_dict():
    component = BuildComponent(id="c1", name="Ryzen", price=100, details={"socket": "AM5"}, extra={"brand": "AMD"})
    assert component.to_dict() == {
        "brand": "AMD",
        "id": "c1",
        "name": "Ryzen",
        "price": 100,
        "details": {"socket": "AM5"},
    }


def test_parse_configuration_skips_empty_slots():
    config = parse_configuration({"CPU": {"id": "c"}, "SSD": None, "HDD": {}})
    assert list(config) == ["CPU"]
    assert isinstance(config["CPU"], BuildComponent)


def test_parse_configuration_rejects_non_mapping():
    with pytest.raises(MalformedComponentError):
        parse_configuration(["CPU"])


def test_mapping_result_tags():
    assert MappingResult.ok({}).is_degraded is False
    degraded = MappingResult.degraded({}, "boom")
    assert degraded.is_degraded is True
    assert degraded.reason == "boom"


def test_configuration_to_dict_accepts_models_and_records():
    config = {
        "CPU": BuildComponent(id="cpu-1", name="Ryzen 5", price=2800000),
        "RAM": {"id": "ram-1", "name": "16GB", "price": 900000},
    }
    result = configuration_to_dict(config)
    assert result["CPU"] == {"id": "cpu-1", "name": "Ryzen 5", "price": 2800000, "details": {}}
    assert result["RAM"]["price"] == 900000
    assert result["RAM"]["details"] == {}
