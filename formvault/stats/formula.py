"""
Descriptive statistics in decimal arithmetic.

Values are summed, divided and rooted as ``decimal.Decimal`` inside a local
context (precision and rounding from formvault.core.config) so repeated
operations don't accumulate binary floating point error.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Any, Sequence

from ..core import config
from ..util.logging import logger


class InvalidSampleError(ValueError):
    """Raised when a sample cannot produce the requested statistic."""


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise InvalidSampleError(f"not a numeric value: {value!r}")

    number = value
    if isinstance(number, float):
        # repr gives the shortest round-tripping form: 0.1 -> Decimal("0.1")
        number = repr(number)
    if not isinstance(number, Decimal):
        try:
            number = Decimal(number.strip() if isinstance(number, str) else number)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise InvalidSampleError(f"not a numeric value: {value!r}") from e

    # NaN and the infinities parse, but no statistic over them is meaningful
    if not number.is_finite():
        raise InvalidSampleError(f"not a numeric value: {value!r}")
    return number


def _sample(formula: str, values: Sequence[Any], minimum: int):
    if len(values) < minimum:
        logger.log_formula_error(formula, f"needs at least {minimum} values", len(values))
        raise InvalidSampleError(
            f"{formula} requires at least {minimum} value{'s' if minimum > 1 else ''}, "
            f"got {len(values)}"
        )
    return [_to_decimal(value) for value in values]


def _context():
    return localcontext(Context(prec=config.DECIMAL_PRECISION, rounding=config.DECIMAL_ROUNDING))


def _mean(numbers):
    total = Decimal(0)
    for number in numbers:
        total += number
    return total / len(numbers)


def average(*values) -> Decimal:
    """Arithmetic mean of one or more values."""
    with _context():
        numbers = _sample("AVERAGE", values, 1)
        return _mean(numbers)


def stdev(*values) -> Decimal:
    """Sample standard deviation (n - 1 denominator) of two or more values."""
    with _context():
        numbers = _sample("STDEV", values, 2)
        mean = _mean(numbers)

        sum_squares = Decimal(0)
        for number in numbers:
            sum_squares += (number - mean) ** 2

        return (sum_squares / (len(numbers) - 1)).sqrt()


def rsd(*values) -> str:
    """Relative standard deviation in percent, as a significant-digit string.

    ``rsd(2, 4, 6)`` is ``"50.000"`` with the default five digits.
    """
    with _context():
        deviation = stdev(*values)
        mean = average(*values)
        if mean == 0:
            logger.log_formula_error("RSD", "mean is zero", len(values))
            raise InvalidSampleError("RSD is undefined for a sample with zero mean")

        return to_precision(deviation / mean * 100, config.RSD_SIGNIFICANT_DIGITS,
                            rounding=config.DECIMAL_ROUNDING)


def to_precision(value: Decimal, digits: int, rounding: str = ROUND_HALF_UP) -> str:
    """Render value with exactly ``digits`` significant digits.

    Rounds half up unless told otherwise. Plain notation is used unless the
    decimal exponent is at least ``digits`` or at most -7, in which case the
    result looks like ``1.2346e+5``.
    """
    if digits < 1:
        raise ValueError("digits must be >= 1")

    value = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits + 2)

        exponent = value.adjusted() if value else 0
        rounded = value.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=rounding)
        if rounded and rounded.adjusted() != exponent:
            # Rounding carried into a new digit, e.g. 99.9995 -> 100.00
            exponent = rounded.adjusted()
            rounded = rounded.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=rounding)

    if exponent <= -7 or exponent >= digits:
        sign, coefficient, _ = rounded.as_tuple()
        mantissa = "".join(str(d) for d in coefficient[:digits])
        if digits > 1:
            mantissa = mantissa[0] + "." + mantissa[1:]
        return f"{'-' if sign else ''}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"

    return format(rounded, "f")


class Formula:
    """Spreadsheet-style names for the statistics functions."""

    AVERAGE = staticmethod(average)
    STDEV = staticmethod(stdev)
    RSD = staticmethod(rsd)
