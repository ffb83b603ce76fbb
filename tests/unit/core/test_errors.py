"""
Test cases for the decode error taxonomy.
"""

import json
import unittest

from resilientdecoding import (
    CustomDecodeError,
    DataCorruptedError,
    DecodeError,
    DocumentSyntaxError,
    KeyNotFoundError,
    MissingValueError,
    ResilientDecodingError,
    TypeMismatchError,
    UnknownNovelValueError,
)
from resilientdecoding.core.errors import describe_type, describe_value, format_path


class TestAbridgedDescriptions(unittest.TestCase):
    """Test the path-free descriptions used for printing digests."""

    def test_type_mismatch(self):
        self.assertEqual(
            TypeMismatchError(int, ["a"]).abridged_description(), "Could not decode as `int`"
        )

    def test_missing_value(self):
        self.assertEqual(
            MissingValueError(str).abridged_description(), "Expected `str` but found null instead"
        )

    def test_key_not_found(self):
        self.assertEqual(KeyNotFoundError("name").abridged_description(), 'Key "name" not found')

    def test_data_corrupted(self):
        self.assertEqual(DataCorruptedError("bad").abridged_description(), "Data corrupted")

    def test_unknown_novel_value(self):
        self.assertEqual(
            UnknownNovelValueError("novel").abridged_description(),
            'Unknown novel value "novel" (this error is not reported by default)',
        )

    def test_custom(self):
        error = CustomDecodeError(ValueError("nope"))
        self.assertEqual(error.abridged_description(), "nope")
        self.assertIsInstance(error.inner, ValueError)


class TestErrorMessages(unittest.TestCase):
    """Test full error messages and the hierarchy."""

    def test_message_includes_path(self):
        """Test that str() appends the coding path."""
        error = TypeMismatchError(int, ["users", 0, "age"], found="a string")
        self.assertEqual(
            str(error), "Expected to decode int but found a string instead at $.users[0].age"
        )
        self.assertEqual(error.coding_path, ("users", 0, "age"))

    def test_message_without_path(self):
        """Test errors raised at the root."""
        self.assertEqual(str(DataCorruptedError("bad")), "bad")

    def test_hierarchy(self):
        """Test that every decode error shares the base classes."""
        for error in (
            TypeMismatchError(int),
            MissingValueError(int),
            KeyNotFoundError("k"),
            DataCorruptedError("d"),
            UnknownNovelValueError("n"),
            CustomDecodeError(ValueError()),
        ):
            self.assertIsInstance(error, DecodeError)
            self.assertIsInstance(error, ResilientDecodingError)
        self.assertNotIsInstance(DocumentSyntaxError("x"), DecodeError)

    def test_document_syntax_error_from_json_error(self):
        """Test conversion from the json module's error."""
        try:
            json.loads('{"a": }')
        except json.JSONDecodeError as e:
            error = DocumentSyntaxError.from_json_error(e)
        self.assertEqual(error.line, 1)
        self.assertEqual(error.column, 7)
        self.assertIn("at line 1, column 7", str(error))


class TestDescriptions(unittest.TestCase):
    """Test helper descriptions."""

    def test_format_path(self):
        self.assertEqual(format_path([]), "$")
        self.assertEqual(format_path(["a", 1, "b"]), "$.a[1].b")

    def test_describe_type(self):
        self.assertEqual(describe_type(int), "int")
        self.assertEqual(describe_type(list[int]), "list[int]")

    def test_describe_value(self):
        self.assertEqual(describe_value(None), "null")
        self.assertEqual(describe_value(True), "a boolean")
        self.assertEqual(describe_value(1.5), "a number")
        self.assertEqual(describe_value([]), "an array")
        self.assertEqual(describe_value({}), "a dictionary")


if __name__ == "__main__":
    unittest.main()
