"""
Input validation for product requests.

Small predicates that either return the cleaned value or raise
AppException(VALIDATION_ERROR), composed per endpoint.
"""
import math
import re
from typing import Any

from app.errors import ErrorType
from app.exceptions import AppException
from app.models.product import DEFAULT_DESCRIPTION
from app.schemas.product import ProductCreate, ProductUpdate

REQUIRED_FIELDS = ("name", "price", "category")

# Products.id is a 32-bit INTEGER column
MAX_ID = 2**31 - 1

# Plain ASCII decimal notation; no digit separators
INTEGER_RE = re.compile(r"\s*[-+]?\d{1,18}\s*", re.ASCII)
NUMBER_RE = re.compile(r"\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*", re.ASCII)


def _invalid(message: str) -> AppException:
    return AppException(ErrorType.VALIDATION_ERROR, message)


def is_missing(value: Any) -> bool:
    return value is None or value == ""


def require_present(values: dict[str, Any], fields: tuple[str, ...] = REQUIRED_FIELDS) -> None:
    missing = [field for field in fields if is_missing(values.get(field))]
    if missing:
        raise _invalid(f"Missing required field: {', '.join(missing)}.")


def require_string(field: str, value: Any, allow_empty: bool = False) -> str:
    if not isinstance(value, str):
        raise _invalid(f"{field.capitalize()} must be a string.")
    if not allow_empty and value == "":
        raise _invalid(f"{field.capitalize()} must not be empty.")
    return value


def parse_price(value: Any) -> float:
    """Accept numbers and numeric strings; the result is a finite float >= 0."""
    error = _invalid("Price must be a valid non-negative number.")

    # bool is an int subclass
    if isinstance(value, bool):
        raise error
    if isinstance(value, str) and NUMBER_RE.fullmatch(value):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        raise error

    try:
        price = float(value)
    except OverflowError:
        raise error

    if not math.isfinite(price) or price < 0:
        raise error
    return price


def parse_product_id(raw: str) -> int:
    if not isinstance(raw, str) or not INTEGER_RE.fullmatch(raw):
        raise _invalid("Invalid product ID.")
    product_id = int(raw)
    if abs(product_id) > MAX_ID:
        raise _invalid("Invalid product ID.")
    return product_id


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query parameter as an integer, clamping it to at least 1."""
    if raw is None or raw == "":
        return default
    if not INTEGER_RE.fullmatch(raw):
        raise _invalid("page and limit must be integers.")
    value = int(raw)
    return max(value, 1)


def validate_create(payload: ProductCreate) -> dict[str, Any]:
    """Return column values for a new product.

    Checks run in order: presence of the required fields, string types,
    then the price.
    """
    values = payload.model_dump()
    require_present(values)

    name = require_string("name", values["name"])
    category = require_string("category", values["category"])
    description = values["description"]
    if description is None:
        description = DEFAULT_DESCRIPTION
    else:
        description = require_string("description", description, allow_empty=True)

    return {
        "name": name,
        "price": parse_price(values["price"]),
        "description": description,
        "category": category,
    }


def validate_update(payload: ProductUpdate) -> dict[str, Any]:
    """Return only the provided (non-null) fields, validated like create."""
    values = {k: v for k, v in payload.model_dump().items() if v is not None}
    changes: dict[str, Any] = {}

    if "name" in values:
        changes["name"] = require_string("name", values["name"])
    if "category" in values:
        changes["category"] = require_string("category", values["category"])
    if "description" in values:
        changes["description"] = require_string("description", values["description"], allow_empty=True)
    if "price" in values:
        changes["price"] = parse_price(values["price"])

    return changes
