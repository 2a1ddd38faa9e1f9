"""Tests for the authorization & validation gate."""

import pytest

from cart_service.errors import Unauthorized, ValidationFailed
from cart_service.gate import authorize_owner, canonical_user_id, validate_payload
from cart_service.schemas import ActorIdentity, CartItemCreate, CartItemUpdate


def test_validate_payload_accepts_numeric_strings():
    item = validate_payload(
        CartItemCreate, {"user_id": "1", "inventory_id": "7", "quantity": 2}
    )
    assert (item.user_id, item.inventory_id, item.quantity) == (1, 7, 2)


def test_validate_payload_reports_every_failing_field():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload(CartItemCreate, {"user_id": 0, "quantity": "abc"})

    errors = exc_info.value.errors
    assert [e["path"] for e in errors] == ["user_id", "inventory_id", "quantity"]
    assert [e["msg"] for e in errors] == [
        "User ID must be a positive integer",
        "Inventory ID must be a positive integer",
        "Quantity must be at least 1",
    ]
    assert errors[0]["value"] == 0
    assert errors[1]["value"] is None
    assert all(e["type"] == "field" and e["location"] == "body" for e in errors)


def test_validate_payload_rejects_fractional_quantity():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload(CartItemUpdate, {"quantity": 1.5})
    assert exc_info.value.errors[0]["msg"] == "Quantity must be at least 1"


def test_validate_payload_treats_non_object_as_empty():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload(CartItemUpdate, [1, 2, 3])
    assert exc_info.value.errors[0]["path"] == "quantity"
    assert exc_info.value.to_body()["message"] == "Validation failed"


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1),
        ("1", 1),
        (" 42 ", 42),
        (3.0, 3),
        (3.5, None),
        ("abc", None),
        ("-1", None),
        ("", None),
        (None, None),
        (True, None),
    ],
)
def test_canonical_user_id(value, expected):
    assert canonical_user_id(value) == expected


def test_authorize_owner_matches_across_representations():
    actor = ActorIdentity(id=5, email="a@example.com")
    authorize_owner(actor, "5")
    authorize_owner(actor, 5)


def test_authorize_owner_rejects_other_user():
    with pytest.raises(Unauthorized) as exc_info:
        authorize_owner(ActorIdentity(id=5), "6")
    assert exc_info.value.status_code == 403
    assert exc_info.value.to_body() == {"message": "Unauthorized"}


def test_authorize_owner_rejects_missing_actor():
    with pytest.raises(Unauthorized):
        authorize_owner(None, "5")


def test_authorize_owner_rejects_unknown_owner():
    with pytest.raises(Unauthorized):
        authorize_owner(ActorIdentity(id=5), None)


def test_validate_payload_rejects_booleans():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload(CartItemCreate, {"user_id": True, "inventory_id": 1, "quantity": True})

    errors = exc_info.value.errors
    assert [e["path"] for e in errors] == ["user_id", "quantity"]
    assert [e["msg"] for e in errors] == [
        "User ID must be a positive integer",
        "Quantity must be at least 1",
    ]
    assert errors[0]["value"] is True


def test_validate_payload_rejects_boolean_update():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload(CartItemUpdate, {"quantity": False})
    assert exc_info.value.errors[0]["path"] == "quantity"


def test_validate_payload_still_accepts_numeric_string_quantity():
    assert validate_payload(CartItemUpdate, {"quantity": "3"}).quantity == 3
