"""Shared validations and error kinds for tests."""

from dataclasses import dataclass
from typing import Any

from pathcheck.validation import (
    ValidationError,
    ValidationScope,
    validation,
    zip_validations,
)


@dataclass(frozen=True, slots=True)
class NotANumber(ValidationError):
    pass


@dataclass(frozen=True, slots=True)
class Rejected(ValidationError):
    reason: str = ""


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    country: str


@dataclass(frozen=True)
class Person:
    name: str
    address: Address
    phone_number: str


def required(data: dict[str, Any], name: str):
    """Non-empty string field."""

    @validation
    async def check(scope: ValidationScope) -> str:
        return scope.nn_or_empty(data.get(name), name=name)

    return check


def address_validation(person: dict[str, Any]):
    @validation
    async def check(scope: ValidationScope) -> Address:
        address = scope.nn(person.get("address"), name="address")
        return await scope.bind(
            zip_validations(
                required(address, "street"),
                required(address, "city"),
                required(address, "country"),
                transform=Address,
            )
        )

    return check


def person_validation(person: dict[str, Any]):
    return zip_validations(
        required(person, "name"),
        address_validation(person),
        required(person, "phoneNumber"),
        transform=Person,
    )


def failing_at(*segments: str):
    """Validation that always fails with CannotBeEmpty at `segments`."""

    @validation
    async def check(scope: ValidationScope):
        for segment in segments:
            scope.field(segment, None)
        scope.fail()

    return check
