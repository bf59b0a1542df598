"""
Тесты Pydantic схем и валидаторов.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.schemas.category import CategoryCreate
from app.schemas.product import ProductCreate, ProductCreateByNames, ProductOut, ProductUpdate
from app.schemas.user import UserCreate
from app.schemas.validators import validate_strong_password


@pytest.mark.parametrize("password", ["Str0ng!Pass", "Ünïcode9#x", "Aa1!Aa1!"])
def test_strong_password_accepted(password):
    assert validate_strong_password(password) == password


@pytest.mark.parametrize(
    "password",
    [
        "Sh0rt!",  # короче 8
        "A" * 30 + "a" * 30 + "1!" + "xyz",  # длиннее 64
        "alllower1!",
        "ALLUPPER1!",
        "NoDigits!!",
        "NoSpecial12",
        "Has Space1!",
    ],
)
def test_weak_password_rejected(password):
    with pytest.raises(ValueError):
        validate_strong_password(password)


def test_user_create_rejects_weak_password():
    with pytest.raises(ValidationError):
        UserCreate(first_name="Maria", last_name="Brown", email="maria@gmail.com", password="weak")


def test_category_name_is_trimmed_and_length_checked():
    assert CategoryCreate(name="  Books  ").name == "Books"
    with pytest.raises(ValidationError):
        CategoryCreate(name="  ab ")
    with pytest.raises(ValidationError):
        CategoryCreate(name="   ")


def test_product_create_requires_positive_price():
    with pytest.raises(ValidationError):
        ProductCreate(name="TV", description="Lorem", price=0)


def test_product_create_blank_image_url_becomes_none():
    product = ProductCreate(name="TV", description="Lorem", price=10, image_url="   ")

    assert product.image_url is None
    assert product.category_ids == []


def test_product_by_names_requires_list_and_non_blank_items():
    with pytest.raises(ValidationError):
        ProductCreateByNames(name="TV", description="Lorem", price=10)
    with pytest.raises(ValidationError):
        ProductCreateByNames(name="TV", description="Lorem", price=10, category_names=["ok", " "])

    assert ProductCreateByNames(
        name="TV", description="Lorem", price=10, category_names=[]
    ).category_names == []


def test_product_update_distinguishes_absent_and_empty_categories():
    assert ProductUpdate().category_ids is None
    assert ProductUpdate(category_ids=[]).category_ids == []


def test_product_out_serializes_price_as_number_and_category_names():
    out = ProductOut(
        id=1,
        name="TV",
        description="Lorem",
        price=Decimal("19.90"),
        date="2024-01-15T00:00:00Z",
        categories=[],
    )

    assert out.model_dump(mode="json")["price"] == 19.9
