"""
Test cases for the field-level resilient decode algorithm.
"""

import unittest

from resilientdecoding import (
    CustomDecodeError,
    Decoder,
    DecodingContext,
    KeyNotFoundError,
    MissingValueError,
    TypeMismatchError,
    enable_resilient_decoding_error_reporting,
)
from resilientdecoding.resilient import KEY_NOT_FOUND, VALUE_WAS_NIL, ResilientValue
from resilientdecoding.resilient.field import plain_body, resiliently_decode


class Temperature:
    """A type with a custom decoding hook."""

    def __init__(self, celsius):
        self.celsius = celsius

    @classmethod
    def from_decoder(cls, decoder):
        raw = decoder.decode(str)
        if not raw.endswith("C"):
            raise ValueError(f"Unsupported unit in {raw!r}")
        return cls(float(raw[:-1]))


class TestResilientlyDecode(unittest.TestCase):
    """Test resiliently_decode against a keyed container."""

    def setUp(self):
        self.context = DecodingContext()
        self.reporter = enable_resilient_decoding_error_reporting(self.context.user_info)

    def container(self, document):
        return Decoder(document, self.context).container()

    def test_absent_key_uses_fallback(self):
        """Test step one: absent keys give the fallback without errors."""
        value = resiliently_decode(self.container({}), "a", 5, plain_body(int))
        self.assertEqual(value.value, 5)
        self.assertIs(value.outcome, KEY_NOT_FOUND)
        self.assertIsNone(self.reporter.flush())

    def test_null_uses_fallback(self):
        """Test that null gives the fallback without errors."""
        value = resiliently_decode(self.container({"a": None}), "a", 5, plain_body(int))
        self.assertEqual(value.value, 5)
        self.assertIs(value.outcome, VALUE_WAS_NIL)

    def test_failure_is_reported_at_the_field_path(self):
        """Test that decode errors are reported and replaced by the fallback."""
        value = resiliently_decode(self.container({"a": "x"}), "a", 5, plain_body(int))
        self.assertEqual(value.value, 5)
        self.assertTrue(value.outcome.was_reported)
        self.assertIsInstance(value.error, TypeMismatchError)

        digest = self.reporter.flush()
        self.assertEqual(digest.errors, [value.error])
        self.assertEqual(digest.errors[0].coding_path, ("a",))

    def test_absent_and_null_are_errors_when_not_optional(self):
        """Test behave_like_optional=False."""
        absent = resiliently_decode(
            self.container({}), "a", 5, plain_body(int), behave_like_optional=False
        )
        self.assertIsInstance(absent.error, KeyNotFoundError)
        self.assertEqual(absent.error.key, "a")

        null = resiliently_decode(
            self.container({"a": None}), "a", 5, plain_body(int), behave_like_optional=False
        )
        self.assertIsInstance(null.error, MissingValueError)
        self.assertEqual(len(self.reporter.flush().errors), 2)

    def test_fallback_factories_are_called_per_use(self):
        """Test that callable fallbacks produce a fresh value each time."""
        first = resiliently_decode(self.container({}), "a", list, plain_body(list))
        second = resiliently_decode(self.container({}), "a", list, plain_body(list))
        self.assertEqual(first.value, [])
        self.assertIsNot(first.value, second.value)

    def test_body_outcome_is_kept(self):
        """Test that a body's own outcome is returned unchanged."""
        marker = ResilientValue("body", VALUE_WAS_NIL)
        value = resiliently_decode(self.container({"a": 1}), "a", None, lambda decoder: marker)
        self.assertIs(value, marker)

    def test_custom_errors_are_wrapped(self):
        """Test that ValueError from a decoding hook is recovered."""
        ok = resiliently_decode(self.container({"t": "21.5C"}), "t", None, plain_body(Temperature))
        self.assertEqual(ok.value.celsius, 21.5)

        bad = resiliently_decode(self.container({"t": "70F"}), "t", None, plain_body(Temperature))
        self.assertIsNone(bad.value)
        self.assertIsInstance(bad.error, CustomDecodeError)
        self.assertIsInstance(bad.error.inner, ValueError)
        self.assertEqual(bad.error.coding_path, ("t",))

    def test_no_reporter_registered(self):
        """Test that recovery works without a reporter."""
        context = DecodingContext()
        container = Decoder({"a": "x"}, context).container()
        value = resiliently_decode(container, "a", 0, plain_body(int))
        self.assertEqual(value.value, 0)
        self.assertTrue(value.outcome.was_reported)


if __name__ == "__main__":
    unittest.main()
