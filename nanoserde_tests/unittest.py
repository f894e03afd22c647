import math
from typing import Any, TypeVar
from unittest import TestCase as _TestCase, main as ut_main

from structlog import get_logger

from nanoserde.conf import STRICT_SETTINGS_FILEPATH
from nanoserde.conf.get_settings import get_global_settings
from nanoserde.conf.settings import CodecSettings
from nanoserde.serde_types import SerdeType, make_serde_type

logger = get_logger()
main = ut_main

T = TypeVar('T')


class TestCase(_TestCase):
    def setUp(self) -> None:
        self.log = logger.new(test=self.id())
        self.settings = get_global_settings()
        self.strict_settings = CodecSettings.from_yaml(filepath=STRICT_SETTINGS_FILEPATH)

    def _serde_type(self, type_: Any) -> SerdeType:
        return type_ if isinstance(type_, SerdeType) else make_serde_type(type_)

    def assertSameValue(self, first: Any, second: Any) -> None:
        """Like assertEqual, but NaN floats are equal to themselves."""
        if isinstance(first, float) and isinstance(second, float) and math.isnan(first):
            self.assertTrue(math.isnan(second))
        else:
            self.assertEqual(first, second)

    def assertBinRoundTrip(self, type_: Any, value: T) -> bytes:
        serde_type = self._serde_type(type_)
        data = serde_type.to_bytes(value)
        self.assertSameValue(value, serde_type.from_bytes(data, settings=self.settings))
        return data

    def assertJsonRoundTrip(self, type_: Any, value: T) -> str:
        serde_type = self._serde_type(type_)
        text = serde_type.to_json(value)
        self.assertSameValue(value, serde_type.from_json(text, settings=self.settings))
        return text

    def assertRonRoundTrip(self, type_: Any, value: T) -> str:
        serde_type = self._serde_type(type_)
        text = serde_type.to_ron(value, settings=self.settings)
        self.assertSameValue(value, serde_type.from_ron(text, settings=self.settings))
        return text

    def assertRoundTrip(self, type_: Any, value: T) -> None:
        """Check that the value survives all three formats."""
        self.assertBinRoundTrip(type_, value)
        self.assertJsonRoundTrip(type_, value)
        self.assertRonRoundTrip(type_, value)
