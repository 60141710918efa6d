"""Decoding of float values carried in label text."""
import math

SPECIAL_FLOATS = {
    "+Inf": math.inf,
    "-Inf": -math.inf,
    "NaN": math.nan,
}


class ExpositionFormatError(ValueError):
    """A label value could not be decoded as a float."""


def parse_label_float(value: str) -> float:
    """Decode a ``quantile`` or ``le`` label value.

    The exposition tokens ``+Inf``, ``-Inf`` and ``NaN`` map to the IEEE-754
    special values; anything else goes through ``float()``.
    """
    special = SPECIAL_FLOATS.get(value)
    if special is not None:
        return special
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ExpositionFormatError(f"Invalid float label value {value!r}") from e
