"""
Money helpers for the ledger.

All ledger amounts are ``Decimal`` values with exactly two decimal places.
Binary floats are never accepted: ``Decimal(0.1)`` already carries the
float's representation error, so a float reaching this module is treated
as a caller bug.

Example:
    Splitting a bill three ways::

        >>> split_equally(Decimal('100.00'), 3)
        [Decimal('33.34'), Decimal('33.33'), Decimal('33.33')]
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidAmountError


CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def to_money(value, *, field='amount'):
    """
    Convert a value to a two-place ``Decimal``.

    Args:
        value (Decimal | str | int): The amount to convert.
        field (str, optional): Name used in error messages.
            Defaults to 'amount'.

    Returns:
        Decimal: The amount quantized to cents.

    Raises:
        InvalidAmountError: If the value is a float, is not a number, or
            has more than two decimal places.
    """
    if isinstance(value, float):
        raise InvalidAmountError(f"{field} must be a decimal, not a float")
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(f"{field} is required")

    try:
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
        if not amount.is_finite():
            raise InvalidOperation
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmountError(f"{field} is not a valid number: {value!r}")

    if quantized != amount:
        raise InvalidAmountError(f"{field} must have at most two decimal places")

    return quantized


def to_positive_money(value, *, field='amount'):
    """Like :func:`to_money` but also requires the amount to be > 0."""
    amount = to_money(value, field=field)
    if amount <= ZERO:
        raise InvalidAmountError(f"{field} must be greater than zero")
    return amount


def divide(total, count):
    """Divide ``total`` by ``count``, rounding half-up to cents."""
    return (total / Decimal(count)).quantize(CENT, rounding=ROUND_HALF_UP)


def split_equally(total, count):
    """
    Split an amount into ``count`` shares that sum exactly to ``total``.

    Algorithm:
        1. ``share = round_half_up(total / count)``
        2. ``residual = total - share * count``
        3. The first share absorbs the whole residual.

    The residual can be negative when rounding up overshoots (for example
    100.00 / 6 rounds to 16.67 and 6 x 16.67 = 100.02), in which case the
    first share is smaller than the others.

    Args:
        total (Decimal): Two-place amount to split.
        count (int): Number of shares, at least 1.

    Returns:
        list[Decimal]: ``count`` shares, first share carrying the residual.

    Raises:
        ValueError: If count is less than 1.
        InvalidAmountError: If the total is too small for every share to
            be at least one cent.
    """
    if count < 1:
        raise ValueError("At least one share required")

    share = divide(total, count)
    residual = total - share * count

    shares = [share] * count
    shares[0] = share + residual

    if share <= ZERO or shares[0] <= ZERO:
        raise InvalidAmountError(
            f"{total} is too small to split among {count} members"
        )

    return shares
