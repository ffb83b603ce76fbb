"""
Test cases for resilient enum fields.

Novel values of non-frozen enums are recorded on the field but left out of
reporter digests; frozen enums treat them as corrupted data.
"""

import json
import unittest

from resilientdecoding import (
    DataCorruptedError,
    KeyNotFoundError,
    Model,
    UnknownNovelValueError,
    fields,
    resilient_value,
)
from resilientdecoding.resilient import ResilientEnum

from support import (
    DecodeMockMixin,
    FrozenEnum,
    FrozenEnumWithFallback,
    NovelEnum,
    NovelEnumWithFallback,
)


class EnumWrapper(Model):
    resilient_enum_with_fallback = fields.resilient(NovelEnumWithFallback)
    resilient_frozen_enum_with_fallback = fields.resilient(FrozenEnumWithFallback)
    optional_resilient_enum = fields.optional(NovelEnum)
    optional_resilient_frozen_enum = fields.optional(FrozenEnum)
    optional_resilient_enum_with_fallback = fields.optional(NovelEnumWithFallback)
    optional_resilient_frozen_enum_with_fallback = fields.optional(FrozenEnumWithFallback)


NON_OPTIONAL = ("resilient_enum_with_fallback", "resilient_frozen_enum_with_fallback")
OPTIONAL = (
    "optional_resilient_enum",
    "optional_resilient_frozen_enum",
    "optional_resilient_enum_with_fallback",
    "optional_resilient_frozen_enum_with_fallback",
)


def document(**values):
    return json.dumps(values)


class TestResilientEnum(DecodeMockMixin, unittest.TestCase):
    """Test the novel/frozen/fallback matrix of enum fields."""

    def test_decodes_valid_cases_without_errors(self):
        """Test that known raw values decode to members."""
        mock = self.decode_mock(
            EnumWrapper, document(**{name: "existing" for name in NON_OPTIONAL + OPTIONAL})
        )
        self.assertIs(mock.resilient_enum_with_fallback, NovelEnumWithFallback.EXISTING)
        self.assertIs(mock.resilient_frozen_enum_with_fallback, FrozenEnumWithFallback.EXISTING)
        self.assertIs(mock.optional_resilient_enum, NovelEnum.EXISTING)
        self.assertIs(mock.optional_resilient_frozen_enum, FrozenEnum.EXISTING)
        self.assertIs(mock.optional_resilient_enum_with_fallback, NovelEnumWithFallback.EXISTING)
        self.assertIs(
            mock.optional_resilient_frozen_enum_with_fallback, FrozenEnumWithFallback.EXISTING
        )
        for name in NON_OPTIONAL + OPTIONAL:
            self.assertIsNone(resilient_value(mock, name).error)

    def test_decodes_null_optional_values_without_errors(self):
        """Test that null optional enums are None."""
        values = {name: "existing" for name in NON_OPTIONAL}
        values.update({name: None for name in OPTIONAL})
        mock = self.decode_mock(EnumWrapper, document(**values))
        for name in OPTIONAL:
            self.assertIsNone(getattr(mock, name))
            self.assertTrue(resilient_value(mock, name).outcome.is_value_was_nil)

    def test_decodes_missing_optional_values_without_errors(self):
        """Test that absent optional enums are None."""
        mock = self.decode_mock(EnumWrapper, document(**{name: "existing" for name in NON_OPTIONAL}))
        for name in OPTIONAL:
            self.assertIsNone(getattr(mock, name))
            self.assertIsNone(resilient_value(mock, name).error)

    def test_resiliently_decodes_missing_values(self):
        """Test that absent non-optional enums fall back and report."""
        mock = self.decode_mock(EnumWrapper, "{}", expected_error_count=2)
        self.assertIs(mock.resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        self.assertIs(mock.resilient_frozen_enum_with_fallback, FrozenEnumWithFallback.UNKNOWN)
        for name in NON_OPTIONAL:
            self.assertIsInstance(resilient_value(mock, name).error, KeyNotFoundError)

    def test_resiliently_decodes_null_non_optional_values(self):
        """Test that null non-optional enums fall back and report."""
        mock = self.decode_mock(
            EnumWrapper, document(**{name: None for name in NON_OPTIONAL}), expected_error_count=2
        )
        self.assertIs(mock.resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        self.assertTrue(resilient_value(mock, "resilient_enum_with_fallback").outcome.is_recovered)

    def test_resiliently_decodes_novel_cases(self):
        """Test that only frozen enums count novel values as reported errors."""
        mock = self.decode_mock(
            EnumWrapper,
            document(**{name: "novel" for name in NON_OPTIONAL + OPTIONAL}),
            expected_error_count=3,
        )
        self.assertIs(mock.resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        self.assertIs(mock.resilient_frozen_enum_with_fallback, FrozenEnumWithFallback.UNKNOWN)
        self.assertIsNone(mock.optional_resilient_enum)
        self.assertIsNone(mock.optional_resilient_frozen_enum)
        self.assertIs(mock.optional_resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        self.assertIs(
            mock.optional_resilient_frozen_enum_with_fallback, FrozenEnumWithFallback.UNKNOWN
        )

        # Every field records its error, reported or not
        for name in NON_OPTIONAL + OPTIONAL:
            self.assertIsNotNone(resilient_value(mock, name).error)
        self.assertIsInstance(
            resilient_value(mock, "optional_resilient_enum").error, UnknownNovelValueError
        )
        self.assertIsInstance(
            resilient_value(mock, "optional_resilient_frozen_enum").error, DataCorruptedError
        )
        self.assertEqual(resilient_value(mock, "optional_resilient_enum").error.novel_value, "novel")

    def test_resiliently_decodes_invalid_cases(self):
        """Test that values of the wrong type are always reported."""
        values = {name: index for index, name in enumerate(NON_OPTIONAL + OPTIONAL, start=1)}
        mock = self.decode_mock(EnumWrapper, document(**values), expected_error_count=6)
        self.assertIs(mock.resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        self.assertIsNone(mock.optional_resilient_enum)
        self.assertIsNone(mock.optional_resilient_frozen_enum)
        self.assertIs(mock.optional_resilient_enum_with_fallback, NovelEnumWithFallback.UNKNOWN)
        for name in NON_OPTIONAL + OPTIONAL:
            self.assertTrue(resilient_value(mock, name).outcome.was_reported)


class TestResilientEnumTypes(DecodeMockMixin, unittest.TestCase):
    """Test ResilientEnum class-level capabilities."""

    def test_defaults(self):
        """Test default capabilities of a resilient enum."""
        self.assertIsNone(NovelEnum.decoding_fallback())
        self.assertFalse(NovelEnum.is_frozen())
        self.assertIs(NovelEnum.raw_value_type(), str)

    def test_integer_raw_values(self):
        """Test that integer-backed enums decode from numbers."""

        class Priority(ResilientEnum):
            LOW = 1
            HIGH = 2

        class Task(Model):
            priority = fields.optional(Priority)

        decoded = self.decode_mock(Task, '{"priority": 2}')
        self.assertIs(decoded.priority, Priority.HIGH)
        novel = self.decode_mock(Task, '{"priority": 3}')
        self.assertIsNone(novel.priority)
        self.assertEqual(resilient_value(novel, "priority").error.novel_value, 3)


if __name__ == "__main__":
    unittest.main()
