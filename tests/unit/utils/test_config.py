"""
Test cases for decoding configuration.
"""

import logging
import unittest

from resilientdecoding import DecodingConfig, DecodingLimits, KeyDecodingStrategy
from resilientdecoding.utils.config import ErrorReporting, Introspection, KeyDecoding


class TestDecodingConfig(unittest.TestCase):
    """Test DecodingConfig construction and options."""

    def test_defaults(self):
        config = DecodingConfig()
        self.assertIs(config.key_strategy, KeyDecodingStrategy.USE_DEFAULT_KEYS)
        self.assertFalse(config.include_unknown_novel_value_errors)
        self.assertEqual(config.keep_element_results, __debug__)
        self.assertEqual(config.max_input_size, 10 * 1024 * 1024)
        self.assertEqual(config.max_nesting_depth, 100)
        self.assertIsNone(config.logger)

    def test_grouped_options(self):
        """Test construction from the option dataclasses."""
        logger = logging.getLogger("resilientdecoding.tests")
        config = DecodingConfig(
            key_decoding=KeyDecoding(KeyDecodingStrategy.CONVERT_FROM_SNAKE_CASE),
            error_reporting=ErrorReporting(include_unknown_novel_value_errors=True),
            introspection=Introspection(keep_element_results=False),
            limits=DecodingLimits(max_input_size=100),
            logger=logger,
        )
        self.assertIs(config.key_strategy, KeyDecodingStrategy.CONVERT_FROM_SNAKE_CASE)
        self.assertTrue(config.include_unknown_novel_value_errors)
        self.assertFalse(config.keep_element_results)
        self.assertEqual(config.max_input_size, 100)
        self.assertIs(config.logger, logger)

    def test_flat_options(self):
        """Test that flat keyword options reach the grouped dataclasses."""
        config = DecodingConfig(keep_element_results=False, max_nesting_depth=5)
        self.assertFalse(config.introspection.keep_element_results)
        self.assertEqual(config.limits.max_nesting_depth, 5)

    def test_setters(self):
        config = DecodingConfig()
        config.key_strategy = str.lower
        config.include_unknown_novel_value_errors = True
        self.assertIs(config.key_decoding.strategy, str.lower)
        self.assertTrue(config.error_reporting.include_unknown_novel_value_errors)

    def test_unknown_option(self):
        with self.assertRaises(TypeError):
            DecodingConfig(strict=True)

    def test_invalid_limits(self):
        """Test that non-positive limits are rejected."""
        with self.assertRaises(ValueError):
            DecodingLimits(max_input_size=0)
        with self.assertRaises(ValueError):
            DecodingConfig(max_nesting_depth=-1)

    def test_presets(self):
        development = DecodingConfig.development()
        self.assertTrue(development.keep_element_results)
        self.assertTrue(development.include_unknown_novel_value_errors)

        production = DecodingConfig.production()
        self.assertFalse(production.keep_element_results)
        self.assertFalse(production.include_unknown_novel_value_errors)


if __name__ == "__main__":
    unittest.main()
