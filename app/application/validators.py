"""
Request payload validators.

Each validator inspects a decoded JSON body and raises BadRequestException
with a client-facing message on the first violation. Messages are part of the
public API contract; clients match on them.
"""

import re
from typing import Any, Dict, Iterable, Optional

from app.core.exceptions import BadRequestException

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")

KNOWN_ROLES = ("user", "admin")

Payload = Dict[str, Any]


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


def _provided(payload: Payload, field: str) -> bool:
    """Truthy presence, used by the "required" and "at least one" checks."""
    value = payload.get(field)
    return value is not None and value != ""


def _present(payload: Payload, field: str) -> bool:
    return payload.get(field) is not None


def _blank(value: str) -> bool:
    return not value.strip()


def _ensure_strings(payload: Payload, labels: Dict[str, str]) -> None:
    for field, label in labels.items():
        if _present(payload, field) and not isinstance(payload[field], str):
            raise BadRequestException(f"{label} must be a string")


def _check_length(value: str, low: int, high: int, message: str) -> None:
    if not low <= len(value.strip()) <= high:
        raise BadRequestException(message)


def _check_blank(payload: Payload, fields: Iterable[str], message: str) -> None:
    if any(_blank(payload[field]) for field in fields):
        raise BadRequestException(message)


# Users

EMAIL_MAX_LENGTH = 254


def _check_email(email: str) -> None:
    if not EMAIL_RE.match(email):
        raise BadRequestException("Invalid email format")
    if len(email) > EMAIL_MAX_LENGTH:
        raise BadRequestException(f"Email must be at most {EMAIL_MAX_LENGTH} characters long")


def _check_password(password: str) -> None:
    if len(password) < 8:
        raise BadRequestException("Password must be at least 8 characters long")


def _check_username(username: str) -> None:
    if len(username.strip()) < 3:
        raise BadRequestException("Username must be at least 3 characters long")
    if len(username.strip()) > 20:
        raise BadRequestException("Username must be less than 20 characters")
    if not USERNAME_RE.match(username):
        raise BadRequestException("Username can only contain letters, numbers, and underscores")


def _check_roles(roles: Any) -> None:
    if (
        not isinstance(roles, list)
        or not roles
        or any(role not in KNOWN_ROLES for role in roles)
    ):
        raise BadRequestException(f"Roles must be a non-empty list of: {', '.join(KNOWN_ROLES)}")


USER_LABELS = {"email": "Email", "username": "Username", "password": "Password"}


def validate_user_registration(payload: Payload) -> None:
    _ensure_strings(payload, USER_LABELS)

    if not all(_provided(payload, field) for field in USER_LABELS):
        raise BadRequestException("Email, username and password are required")

    _check_blank(payload, USER_LABELS, "Email, username and password cannot be empty or whitespace")

    _check_email(payload["email"])
    _check_password(payload["password"])
    _check_username(payload["username"])

    if _present(payload, "roles"):
        _check_roles(payload["roles"])


def validate_user_login(payload: Payload) -> None:
    _ensure_strings(payload, {"email": "Email", "password": "Password"})

    if not (_provided(payload, "email") and _provided(payload, "password")):
        raise BadRequestException("Email and password are required")

    _check_blank(payload, ("email", "password"), "Email and password cannot be empty or whitespace")
    _check_email(payload["email"])


def validate_user_update(payload: Payload) -> None:
    _ensure_strings(payload, USER_LABELS)

    if not any(_provided(payload, field) for field in ("email", "username", "password", "roles")):
        raise BadRequestException(
            "At least one field (email, username, password, roles) must be provided for update"
        )

    for field, label in USER_LABELS.items():
        if _present(payload, field) and _blank(payload[field]):
            raise BadRequestException(f"{label} cannot be empty or whitespace")

    if _present(payload, "email"):
        _check_email(payload["email"])
    if _present(payload, "username"):
        _check_username(payload["username"])
    if _present(payload, "password"):
        _check_password(payload["password"])
    if _present(payload, "roles"):
        _check_roles(payload["roles"])


# Restaurants

RESTAURANT_LABELS = {
    "name": "Name",
    "address": "Address",
    "phone": "Phone",
    "opening_hours": "Opening hours",
}


def _check_restaurant_field(field: str, value: str) -> None:
    if field == "name":
        _check_length(value, 2, 100, "Name must be between 2 and 100 characters long")
    elif field == "address":
        _check_length(value, 5, 200, "Address must be between 5 and 200 characters long")
    elif field == "opening_hours":
        _check_length(value, 5, 100, "Opening hours must be between 5 and 100 characters long")
    elif field == "phone" and not PHONE_RE.match(value):
        raise BadRequestException("Invalid phone number format")


def validate_restaurant_creation(payload: Payload) -> None:
    _ensure_strings(payload, RESTAURANT_LABELS)

    if not all(_provided(payload, field) for field in RESTAURANT_LABELS):
        raise BadRequestException("All fields (name, address, phone, opening_hours) are required")

    _check_blank(payload, RESTAURANT_LABELS, "Fields cannot be empty or whitespace")

    # Phone format is checked after the lengths
    for field in ("name", "address", "opening_hours", "phone"):
        _check_restaurant_field(field, payload[field])


def validate_restaurant_update(payload: Payload) -> None:
    _ensure_strings(payload, RESTAURANT_LABELS)

    if not any(_provided(payload, field) for field in RESTAURANT_LABELS):
        raise BadRequestException(
            "At least one field (name, address, phone, opening_hours) must be provided for update"
        )

    for field, label in RESTAURANT_LABELS.items():
        if not _present(payload, field):
            continue
        if _blank(payload[field]):
            raise BadRequestException(f"{label} cannot be empty or whitespace")
        _check_restaurant_field(field, payload[field])


# Menus

MENU_LABELS = {
    "name": "Name",
    "description": "Description",
    "restaurantId": "Restaurant ID",
    "category": "Category",
}


def parse_price(value: Any) -> Optional[float]:
    """Numeric value of a price, or None when it is not a number at all."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _check_price(value: Any) -> None:
    price = parse_price(value)
    # price != price catches NaN
    if price is None or price != price or price <= 0 or price == float("inf"):
        raise BadRequestException("Price must be a positive number")


def _check_restaurant_id(value: str) -> None:
    if not is_valid_object_id(value):
        raise BadRequestException("Restaurant ID must be a valid ObjectId")


def validate_menu_creation(payload: Payload) -> None:
    _ensure_strings(payload, MENU_LABELS)

    if not (
        _provided(payload, "name")
        and _present(payload, "price")
        and _provided(payload, "restaurantId")
    ):
        raise BadRequestException("Name, price and restaurantId are required")

    _check_blank(payload, ("name", "restaurantId"), "Name and restaurantId cannot be empty or whitespace")

    for field in ("description", "category"):
        if _present(payload, field) and _blank(payload[field]):
            raise BadRequestException(f"{MENU_LABELS[field]} cannot be empty or whitespace")

    _check_price(payload["price"])
    _check_length(payload["name"], 2, 100, "Name must be between 2 and 100 characters long")

    if _present(payload, "description"):
        _check_length(payload["description"], 5, 500, "Description must be between 5 and 500 characters long")
    if _present(payload, "category"):
        _check_length(payload["category"], 2, 50, "Category must be between 2 and 50 characters long")

    _check_restaurant_id(payload["restaurantId"])


def validate_menu_update(payload: Payload) -> None:
    _ensure_strings(payload, MENU_LABELS)

    fields = ("name", "description", "restaurantId", "category")
    if not (any(_provided(payload, field) for field in fields) or _present(payload, "price")):
        raise BadRequestException(
            "At least one field (name, description, price, restaurantId, category) must be provided for update"
        )

    for field, label in MENU_LABELS.items():
        if _present(payload, field) and _blank(payload[field]):
            raise BadRequestException(f"{label} cannot be empty or whitespace")

    if _present(payload, "name"):
        _check_length(payload["name"], 2, 100, "Name must be between 2 and 100 characters long")
    if _present(payload, "description"):
        _check_length(payload["description"], 5, 500, "Description must be between 5 and 500 characters long")
    if _present(payload, "price"):
        _check_price(payload["price"])
    if _present(payload, "category"):
        _check_length(payload["category"], 2, 50, "Category must be between 2 and 50 characters long")
    if _present(payload, "restaurantId"):
        _check_restaurant_id(payload["restaurantId"])
