"""Tests for composing validators over nested and repeated sub-records."""

from __future__ import annotations

from typing import Any

import pytest

from field_rules import MergePolicy, Result, ResultMergeConflict, Validator


@pytest.fixture
def person_validator() -> Validator:
    v = Validator()
    v.add_field("name").rule("required")
    v.add_field("email").rule("required").rule("email")
    return v


@pytest.fixture
def address_validator() -> Validator:
    v = Validator()
    v.add_field("city").rule("required")
    v.add_field("zip").rule("regex", r"^\d{5}$")
    return v


def validate_person(
    person: dict[str, Any], person_validator: Validator, address_validator: Validator
) -> Result:
    """Validate a person record with a nested address and a list of contacts."""
    flat = {k: v for k, v in person.items() if k not in ("address", "contacts")}
    result = person_validator.run(flat)

    if "address" in person:
        result.merge(address_validator.run(person["address"]), "address.")

    for i, contact in enumerate(person.get("contacts", [])):
        result.merge(person_validator.run(contact), f"contacts[{i}].")

    return result


class TestNestedComposition:
    def test_all_valid(self, person_validator: Validator, address_validator: Validator) -> None:
        person = {
            "name": "John",
            "email": "john@doe.example",
            "address": {"city": "Springfield", "zip": "12345"},
            "contacts": [{"name": "Jane", "email": "jane@doe.example"}],
        }

        result = validate_person(person, person_validator, address_validator)

        assert result.is_valid
        assert result.get_validated() == [
            "name",
            "email",
            "address.city",
            "address.zip",
            "contacts[0].name",
            "contacts[0].email",
        ]

    def test_nested_failures_are_prefixed(
        self, person_validator: Validator, address_validator: Validator
    ) -> None:
        person = {
            "name": "John",
            "email": "john@doe.example",
            "address": {"city": "", "zip": "12345"},
            "contacts": [
                {"name": "Jane", "email": "jane@doe.example"},
                {"name": "", "email": "nope"},
            ],
        }

        result = validate_person(person, person_validator, address_validator)

        assert not result.is_valid
        assert set(result.get_errors()) == {
            "address.city",
            "contacts[1].name",
            "contacts[1].email",
        }
        assert "contacts[0].name" in result.get_validated()
        assert "address.zip" in result.get_validated()

    def test_invalid_sub_result_invalidates_valid_parent(
        self, person_validator: Validator, address_validator: Validator
    ) -> None:
        person = {
            "name": "John",
            "email": "john@doe.example",
            "address": {"city": "Springfield", "zip": "ABC"},
        }

        result = validate_person(person, person_validator, address_validator)

        assert not result.is_valid
        assert result.get_errors() == {
            "address.zip": "The field does not match the pattern ^\\d{5}$."
        }

    def test_shared_accumulator_across_runs(self, person_validator: Validator) -> None:
        """A result passed to several runs keeps every run's entries."""
        accumulator = Result()

        person_validator.run({"name": "John"}, accumulator)
        person_validator.run({"email": "bad"}, accumulator)

        assert accumulator.get_validated() == ["name"]
        assert accumulator.get_errors() == {
            "email": "The field does not contain a valid email address."
        }
        assert not accumulator.is_valid

    def test_unprefixed_collision_policies(self, person_validator: Validator) -> None:
        first = person_validator.run({"email": "bad"})
        second = person_validator.run({"email": ""})

        kept = Result().merge(first).merge(second)
        replaced = Result().merge(first).merge(second, on_conflict=MergePolicy.REPLACE)

        assert kept.get_error("email") == first.get_error("email")
        assert replaced.get_error("email") == second.get_error("email")
        with pytest.raises(ResultMergeConflict):
            Result().merge(first).merge(second, on_conflict=MergePolicy.RAISE)
