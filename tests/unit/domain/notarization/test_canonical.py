"""Tests for canonical serialization and hashing."""

import hashlib
import math

import pytest

from emcs.domain.notarization.service.canonical import canonicalize, compute_hash


class TestCanonicalize:
    def test_sorts_keys_compactly(self):
        assert canonicalize({"b": 1, "a": 2}) == b'{"a":2,"b":1}'

    def test_key_order_is_irrelevant_at_every_level(self):
        first = {"outer": {"z": 1, "a": {"y": [1, 2], "b": None}}, "k": "v"}
        second = {"k": "v", "outer": {"a": {"b": None, "y": [1, 2]}, "z": 1}}
        assert canonicalize(first) == canonicalize(second)

    def test_array_order_is_significant(self):
        assert canonicalize({"a": [1, 2]}) != canonicalize({"a": [2, 1]})

    def test_sorts_keys_inside_arrays(self):
        assert canonicalize([{"b": 1, "a": 2}]) == b'[{"a":2,"b":1}]'

    def test_utf8_output(self):
        assert canonicalize({"city": "Plzeň"}) == '{"city":"Plzeň"}'.encode("utf-8")

    def test_rejects_unserializable_values(self):
        with pytest.raises(TypeError):
            canonicalize({"value": object()})

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            canonicalize({"value": math.nan})

    def test_integral_floats_written_as_integers(self):
        assert canonicalize({"q": 1000.0, "r": [2.0, 2.5]}) == b'{"q":1000,"r":[2,2.5]}'

    def test_booleans_are_kept(self):
        assert canonicalize({"flag": True}) == b'{"flag":true}'


class TestComputeHash:
    def test_prefixed_lowercase_sha256(self):
        expected = "0x" + hashlib.sha256(b'{"a":1}').hexdigest()
        assert compute_hash({"a": 1}) == expected

    def test_shape(self):
        value = compute_hash({"documentType": "e-AD"})
        assert value.startswith("0x")
        assert len(value) == 66
        assert value == value.lower()

    def test_equal_for_reordered_documents(self):
        assert compute_hash({"a": 1, "b": {"c": 2, "d": 3}}) == compute_hash(
            {"b": {"d": 3, "c": 2}, "a": 1}
        )

    def test_changes_with_content(self):
        assert compute_hash({"quantity": 100}) != compute_hash({"quantity": 101})

    def test_integral_float_and_int_hash_equal(self):
        assert compute_hash({"goods": {"quantity": 1000}}) == compute_hash(
            {"goods": {"quantity": 1000.0}}
        )
