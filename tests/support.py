"""
Shared fixtures for resilientdecoding tests.
"""

from typing import Any, Optional

from resilientdecoding import DecodingConfig, DocumentDecoder, ResilientEnum


class NovelEnum(ResilientEnum):
    EXISTING = "existing"
    UNKNOWN = "unknown"


class NovelEnumWithFallback(ResilientEnum):
    EXISTING = "existing"
    UNKNOWN = "unknown"

    @classmethod
    def decoding_fallback(cls):
        return cls.UNKNOWN


class FrozenEnum(ResilientEnum):
    EXISTING = "existing"
    UNKNOWN = "unknown"

    @classmethod
    def is_frozen(cls):
        return True


class FrozenEnumWithFallback(ResilientEnum):
    EXISTING = "existing"
    UNKNOWN = "unknown"

    @classmethod
    def is_frozen(cls):
        return True

    @classmethod
    def decoding_fallback(cls):
        return cls.UNKNOWN


class DecodeMockMixin:
    """Mixin for TestCase classes decoding documents with error reporting enabled."""

    def decode_mock(
        self,
        model: Any,
        text: str,
        expected_error_count: int = 0,
        config: Optional[DecodingConfig] = None,
    ) -> Any:
        """Decode ``text`` and assert how many errors the reporter collected."""
        decoder = DocumentDecoder(config)
        reporter = decoder.enable_error_reporting()
        decoded = decoder.decode(model, text)

        digest = reporter.flush()
        error_count = len(digest.errors) if digest is not None else 0
        self.assertEqual(error_count, expected_error_count)  # type: ignore[attr-defined]
        # Errors must have been flushed
        self.assertIsNone(reporter.flush())  # type: ignore[attr-defined]
        return decoded
