"""
Conversions between wei and the named ether denominations.

All arithmetic is exact: amounts are parsed into Decimal and converted to integer wei, never through float.
"""
import string
from decimal import Decimal, InvalidOperation, localcontext

from walletcore.core import UNITS, ValidationError, EncodingError

__all__ = ["to_wei", "from_wei", "format_ether", "wei_to_eth"]

# 78 digits covers 2^256 wei
_PRECISION = 100


def _wei_per(unit: str) -> int:
    try:
        return UNITS.WEI_PER[unit.lower()]
    except (KeyError, AttributeError):
        raise ValidationError(f"Unknown unit {unit!r}. Must be one of {list(UNITS.WEI_PER)}") from None


def to_wei(amount: int | str | Decimal, unit: str = "ether") -> int:
    """
    Convert an amount in the given unit to integer wei. Floats are refused; pass a string such as "0.1" instead.
    """
    if isinstance(amount, float) or isinstance(amount, bool):
        raise ValidationError("Amounts must be given as int, str or Decimal, not float or bool")
    multiplier = _wei_per(unit)

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            value = Decimal(amount.strip()) if isinstance(amount, str) else Decimal(amount)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Invalid amount: {amount!r}") from None

        if not value.is_finite():
            raise ValidationError(f"Amount must be finite, got {amount!r}")
        if value < 0:
            raise ValidationError(f"Amount must not be negative, got {amount!r}")

        wei = value * multiplier
        if wei != wei.to_integral_value():
            raise ValidationError(f"Amount {amount!r} {unit} is not a whole number of wei")
        return int(wei)


def from_wei(wei: int, unit: str = "ether") -> Decimal:
    """Exact Decimal value of an integer wei amount in the given unit"""
    if isinstance(wei, bool) or not isinstance(wei, int):
        raise ValidationError(f"Wei amount must be an int, got {type(wei).__name__}")
    if wei < 0:
        raise ValidationError("Wei amount must not be negative")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(wei) / Decimal(_wei_per(unit))


def format_ether(wei: int) -> str:
    """
    Plain decimal ether string with trailing zeros removed and at least one fractional digit,
    e.g. 1500000000000000000 -> "1.5", 10 ** 18 -> "1.0", 0 -> "0.0"
    """
    if wei == 0:
        return "0.0"
    text = format(from_wei(wei, "ether"), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if "." not in text:
        text += ".0"
    return text


def wei_to_eth(wei_hex: str) -> str:
    """
    Convert a hex wei quantity, as returned by a JSON-RPC balance call, into an ether string
    """
    digits = wei_hex.strip()
    if digits[:2].lower() == "0x":
        digits = digits[2:]
    if not digits:
        return "0.0"
    if not all(c in string.hexdigits for c in digits):
        raise EncodingError(f"Invalid hex quantity: {wei_hex!r}")
    return format_ether(int(digits, 16))
