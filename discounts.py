"""Discount classification and normalization for catalog products."""
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from models import PricedItem
from thresholds import DEFAULT_POLICY, ThresholdPolicy, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class DiscountDecision:
    is_discounted: bool
    discount_percentage: int | None = None
    discount_type: str | None = None
    discount_source: str | None = None
    price_difference: float = 0.0
    percent_difference: float = 0.0


def classify_discount(item: PricedItem, policy: ThresholdPolicy = DEFAULT_POLICY) -> DiscountDecision:
    """Decide whether ``item`` carries a meaningful discount.

    Only the price pair decides. A record claiming ``isDiscounted`` with no
    real price gap comes back not discounted, and a pre-existing
    ``discountPercentage`` is dropped in that case.
    """
    price = item.price
    original = item.original_price
    not_discounted = DiscountDecision(
        is_discounted=False,
        discount_type=item.discount_type,
        discount_source=item.discount_source,
    )
    if price is None or original is None or price < 0 or original <= price:
        return not_discounted

    price_difference = original - price
    percent_difference = price_difference / original * 100
    if not policy.is_meaningful(price_difference, percent_difference):
        not_discounted.price_difference = price_difference
        not_discounted.percent_difference = percent_difference
        return not_discounted

    # Floor of 1% so an absolute-only discount never reads "0% off"
    percentage = item.discount_percentage
    if percentage is None:
        percentage = max(1, round_half_up(percent_difference))

    discount_type = item.discount_type
    if discount_type is None:
        if item.discount_percentage is not None:
            discount_type = "percentage"
        else:
            round_pct = policy.round_percentage(percent_difference)
            if round_pct is not None:
                discount_type = "percentage"
                percentage = round_pct
            else:
                discount_type = "fixed"

    return DiscountDecision(
        is_discounted=True,
        discount_percentage=percentage,
        discount_type=discount_type,
        discount_source=item.discount_source or policy.default_source,
        price_difference=price_difference,
        percent_difference=percent_difference,
    )


def normalize_categories(item: PricedItem) -> list[str]:
    if isinstance(item.categories, list):
        return list(item.categories)
    if item.category:
        return [item.category]
    return []


def normalize_item(item: PricedItem | Mapping, policy: ThresholdPolicy = DEFAULT_POLICY) -> PricedItem:
    """Return a normalized copy of ``item``; the input is left untouched."""
    if not isinstance(item, PricedItem):
        item = PricedItem.from_dict(item if isinstance(item, Mapping) else {})
    decision = classify_discount(item, policy)
    return dataclasses.replace(
        item,
        is_discounted=decision.is_discounted,
        discount_percentage=decision.discount_percentage,
        discount_type=decision.discount_type,
        discount_source=decision.discount_source,
        categories=normalize_categories(item),
        extra=dict(item.extra),
    )


def normalize_items(items, policy: ThresholdPolicy = DEFAULT_POLICY) -> list[PricedItem]:
    if not isinstance(items, list):
        logger.debug(f"Expected a list of products, got {type(items).__name__}")
        return []
    normalized = [normalize_item(item, policy) for item in items]
    discounted = sum(1 for item in normalized if item.is_discounted)
    logger.debug(f"Normalized {len(normalized)} products ({discounted} discounted)")
    return normalized


def normalize_record(record: Mapping, policy: ThresholdPolicy = DEFAULT_POLICY) -> dict:
    """Normalize a raw API record, returning a raw record."""
    return normalize_item(record, policy).to_dict()
