"""pytest plugin for json-value.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_value import TextConfig, Value, dumps, loads


@pytest.fixture(scope="session")
def assert_roundtrip() -> Any:
    """Fixture that returns a callable text round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless
    (``dumps``/``loads`` create a fresh Writer/Reader per call).

    Usage in tests::

        def test_payload(assert_roundtrip):
            assert_roundtrip({"a": [1.0, "x", None]})

        def test_embedded_quote(assert_roundtrip):
            with pytest.raises(AssertionError, match=r"round-trip"):
                assert_roundtrip('say "hi"')

    Returns:
        A callable ``_assert(value, config=None) -> Value`` that raises
        ``AssertionError`` when ``loads(dumps(value)) != value`` and
        otherwise returns the re-read value.
    """

    def _assert(value: Any, config: TextConfig | None = None) -> Value:
        """Assert that ``value`` survives a write/read cycle unchanged.

        Args:
            value:  A Value or any literal ``Value.from_python`` accepts.
            config: Optional TextConfig used for both writing and reading.

        Raises:
            AssertionError: When the value read back differs (or the text
                cannot be read back at all), with the rendered text and both
                values in the message.
        """
        original = value if isinstance(value, Value) else Value.from_python(value)
        text = dumps(original, config=config)
        try:
            restored = loads(text, config=config)
        except ValueError as exc:
            raise AssertionError(
                f"round-trip failed: rendered text could not be read back\n"
                f"  text:     {text}\n"
                f"  original: {original!r}\n"
                f"  error:    {exc}"
            ) from exc
        if restored != original:
            raise AssertionError(
                f"round-trip mismatch\n"
                f"  text:     {text}\n"
                f"  original: {original!r}\n"
                f"  restored: {restored!r}"
            )
        return restored

    return _assert
