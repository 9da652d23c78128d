"""Exact arithmetic over string-encoded amounts.

Amounts travel as decimal strings from the wallet server to the UI. They are
only turned into ``Decimal`` here. Every sum runs in a context whose precision
is sized from its operands, so no digit is ever rounded away.
"""

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)

from walletfeed.services.errors import InvalidAmountError

# Floor precision; widened per operation. Inexact is trapped so any rounding raises.
AMOUNT_CONTEXT: Context = Context(
    prec=100, traps=[InvalidOperation, DivisionByZero, Overflow, Inexact]
)
ZERO: Decimal = Decimal(0)


def to_decimal(amount: str | None) -> Decimal:
    """Parse an amount string. Empty or None means zero."""
    if amount is None:
        return ZERO
    raw: str = str(amount).strip()
    if not raw:
        return ZERO
    try:
        value: Decimal = Decimal(raw)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid amount '{raw}'") from e
    if not value.is_finite():
        raise InvalidAmountError(f"Amount '{raw}' is not finite")
    return value


def to_plain(value: Decimal) -> str:
    """Render without exponent notation."""
    return format(value, "f")


def _context_for(x: Decimal, y: Decimal) -> Context:
    """Context wide enough to hold ``x + y`` without rounding."""
    lowest: int = min(int(x.as_tuple().exponent), int(y.as_tuple().exponent))
    span: int = max(x.adjusted(), y.adjusted()) - lowest + 2
    ctx: Context = AMOUNT_CONTEXT.copy()
    ctx.prec = max(ctx.prec, span)
    ctx.Emax = max(ctx.Emax, span)
    ctx.Emin = min(ctx.Emin, lowest)
    return ctx


def add_exact(x: Decimal, y: Decimal) -> Decimal:
    try:
        with localcontext(_context_for(x, y)):
            return x + y
    except Inexact as e:
        raise InvalidAmountError(f"Sum of {x} and {y} cannot be held exactly") from e


def add(a: str | None, b: str | None) -> str:
    return to_plain(add_exact(to_decimal(a), to_decimal(b)))


def sum_amounts(amounts: list[str]) -> str:
    total: str = "0"
    for amount in amounts:
        total = add(total, amount)
    return total


def is_negative(amount: str | None) -> bool:
    # "-0" is a receive of nothing, not a send.
    return to_decimal(amount) < 0


def positive_fixed(amount: str | None) -> str:
    """Absolute value in fixed notation with trailing fractional zeros removed."""
    text: str = to_plain(to_decimal(amount).copy_abs())
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
