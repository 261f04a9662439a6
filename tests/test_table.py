"""Tests for table attribute descriptors and filters."""
import dataclasses

import pytest

from dao.table import AttrRole, Filter, TableAttr, validate_filter

ID = TableAttr("id", AttrRole.IDENTITY)
NAME = TableAttr("name", AttrRole.REQUIRED)
EMAIL = TableAttr("email")
ATTRS = (ID, NAME, EMAIL)


def test_table_attr_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        NAME.name = "other"


def test_table_attr_defaults_to_optional():
    assert EMAIL.role is AttrRole.OPTIONAL
    assert ID.is_identity
    assert not NAME.is_identity


@pytest.mark.parametrize("bad_name", ["", "1abc", "name; DROP TABLE users", "a b", "x-y"])
def test_table_attr_rejects_non_identifiers(bad_name):
    with pytest.raises(ValueError):
        TableAttr(bad_name)


def test_filter_keeps_insertion_order():
    f = Filter().add(NAME, "Ann").add("email", "ann@example.com")

    assert len(f) == 2
    assert f.attr_names() == ["name", "email"]
    assert f.attr_name(1) == "email"
    assert f.value(0) == "Ann"
    assert list(f) == [("name", "Ann"), ("email", "ann@example.com")]


def test_filter_from_pairs_equals_chained_filter():
    assert Filter([("name", "Ann")]) == Filter().add(NAME, "Ann")


def test_validate_filter_accepts_known_attributes_in_any_position():
    # "email" sits at index 2 of the schema but index 0 of the filter.
    assert validate_filter(Filter().add(EMAIL, "a@b.c").add(ID, 3), ATTRS)


def test_validate_filter_rejects_unknown_attribute():
    assert not validate_filter(Filter().add(NAME, "Ann").add("password", "x"), ATTRS)


def test_validate_filter_rejects_filter_longer_than_schema():
    f = Filter([("id", 1), ("name", "x"), ("email", "y"), ("role", "z")])
    assert not validate_filter(f, ATTRS)


def test_empty_filter_is_valid():
    assert validate_filter(Filter(), ATTRS)
