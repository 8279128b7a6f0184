"""Product aggregate — one tagged variant for shoes, bags and dresses.

All products share the base fields (name, color, description, stock, price,
image). The ``category`` discriminator decides which payload fields are
allowed: shoes carry gender, age group and per-system sizes; bags and
dresses carry a free-text size.

``stock`` never goes below zero. The only audited way to change it is
``add_stock`` / ``deduct_stock``, whose callers pair every change with a
ledger entry. ``update_fields`` is the administrative override and is not
audited.
"""

import json
import math
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text, ValueObject

from boutique.domain import boutique
from boutique.exceptions import InsufficientStockError, InvalidQuantityError


class ProductCategory(Enum):
    SHOES = "Shoes"
    BAGS = "Bags"
    DRESSES = "Dresses"

    @property
    def slug(self):
        return self.value.lower()

    @property
    def label(self):
        """Singular name used in messages (``Shoe not found``)."""
        return {"Shoes": "Shoe", "Bags": "Bag", "Dresses": "Dress"}[self.value]

    @classmethod
    def parse(cls, value):
        """Accept an enum member, its value (``Shoes``) or its URL slug (``shoes``)."""
        if isinstance(value, cls):
            return value
        for category in cls:
            if value in (category.value, category.slug):
                return category
        raise ValidationError({"category": [f"Unknown category: {value}"]})


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"


class AgeGroup(Enum):
    ADULT = "adult"
    CHILD = "child"


SIZE_SYSTEMS = ("US", "UK", "EU", "CM")

BASE_FIELDS = ("name", "color", "description", "stock", "price", "image_url")
SHOE_FIELDS = ("gender", "age_group", "sizes")
SIZED_FIELDS = ("size",)


def coerce_stock(value):
    """Lenient stock parsing for new products: anything unusable becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def coerce_price(value):
    """Lenient price parsing for new products: anything unusable becomes 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def parse_quantity(value):
    """Strictly parse a stock-mutation quantity into a positive integer."""
    if value is None or isinstance(value, bool):
        raise InvalidQuantityError()
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidQuantityError()
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidQuantityError() from None
    elif not isinstance(value, int):
        raise InvalidQuantityError()

    if value <= 0:
        raise InvalidQuantityError()
    return value


@boutique.value_object(part_of="Product")
class ShoeSizes:
    """Shoe size per sizing system. Values are free text (``"9.5"``, ``"27cm"``)."""

    us = String(max_length=20)
    uk = String(max_length=20)
    eu = String(max_length=20)
    cm = String(max_length=20)

    @classmethod
    def from_mapping(cls, mapping):
        if mapping is None or isinstance(mapping, cls):
            return mapping
        if isinstance(mapping, str):
            if not mapping.strip():
                return None
            try:
                mapping = json.loads(mapping)
            except json.JSONDecodeError:
                raise ValidationError({"sizes": ["Sizes must be a JSON object"]}) from None
        if not isinstance(mapping, dict):
            raise ValidationError({"sizes": ["Sizes must map a size system to a value"]})

        unknown = [key for key in mapping if str(key).upper() not in SIZE_SYSTEMS]
        if unknown:
            raise ValidationError({"sizes": [f"Unknown size system: {unknown[0]}"]})

        values = {str(key).lower(): str(value) for key, value in mapping.items() if value not in (None, "")}
        if not values:
            return None
        return cls(**values)

    def to_mapping(self):
        return {system: getattr(self, system.lower()) for system in SIZE_SYSTEMS if getattr(self, system.lower())}


@boutique.aggregate
class Product:
    category = String(required=True, choices=ProductCategory)
    name = String(max_length=255)
    color = String(max_length=50)
    description = Text()
    stock = Integer(default=0, min_value=0)
    price = Float(default=0.0, min_value=0.0)
    image_url = String(max_length=500)

    # Bags and dresses
    size = String(max_length=50)

    # Shoes
    gender = String(choices=Gender)
    age_group = String(choices=AgeGroup)
    sizes = ValueObject(ShoeSizes)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def payload_must_match_category(self):
        if self.category == ProductCategory.SHOES.value:
            if self.size:
                raise ValidationError({"size": ["Shoes are sized per size system, not with a free-text size"]})
            return

        misplaced = [field for field in SHOE_FIELDS if getattr(self, field)]
        if misplaced:
            raise ValidationError({misplaced[0]: [f"'{misplaced[0]}' only applies to shoes"]})

    @classmethod
    def create(
        cls,
        category,
        name=None,
        color=None,
        description=None,
        stock=None,
        price=None,
        image_url=None,
        size=None,
        gender=None,
        age_group=None,
        sizes=None,
    ):
        category = ProductCategory.parse(category)
        now = datetime.now(UTC)

        payload = {}
        if category == ProductCategory.SHOES:
            payload = {
                "gender": gender or Gender.UNISEX.value,
                "age_group": age_group or AgeGroup.ADULT.value,
                "sizes": ShoeSizes.from_mapping(sizes),
            }
        else:
            if gender or age_group or sizes:
                raise ValidationError({"category": [f"{category.value} do not take shoe attributes"]})
            payload = {"size": size or None}

        return cls(
            category=category.value,
            name=name,
            color=color,
            description=description,
            stock=coerce_stock(stock),
            price=coerce_price(price),
            image_url=image_url or "",
            created_at=now,
            updated_at=now,
            **payload,
        )

    @property
    def category_enum(self):
        return ProductCategory(self.category)

    @property
    def stock_value(self):
        return (self.price or 0.0) * (self.stock or 0)

    def mutable_fields(self):
        if self.category == ProductCategory.SHOES.value:
            return BASE_FIELDS + SHOE_FIELDS
        return BASE_FIELDS + SIZED_FIELDS

    def add_stock(self, quantity):
        """Increase stock. Returns the new stock level."""
        quantity = parse_quantity(quantity)
        self.stock = (self.stock or 0) + quantity
        self.updated_at = datetime.now(UTC)
        return self.stock

    def deduct_stock(self, quantity):
        """Decrease stock, refusing to go below zero. Returns the new stock level."""
        quantity = parse_quantity(quantity)
        current = self.stock or 0
        if quantity > current:
            raise InsufficientStockError(available=current, requested=quantity)

        self.stock = current - quantity
        self.updated_at = datetime.now(UTC)
        return self.stock

    def update_fields(self, **changes):
        """Overwrite any mutable field, stock and price included. Unknown keys are ignored."""
        allowed = self.mutable_fields()
        applied = {key: value for key, value in changes.items() if key in allowed}

        with atomic_change(self):
            for key, value in applied.items():
                if key == "sizes":
                    value = ShoeSizes.from_mapping(value)
                setattr(self, key, value)
            self.updated_at = datetime.now(UTC)

        return sorted(applied)
