"""金额换算：对外 Decimal 两位小数，内部整数分"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from config.settings import AMOUNT_PRECISION

CENT = Decimal(1).scaleb(-AMOUNT_PRECISION)
CENTS_PER_UNIT = 10 ** AMOUNT_PRECISION


def to_decimal(value) -> Decimal:
    """任意数值 -> Decimal，float 先转字符串避免二进制误差"""
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def round2(value) -> Decimal:
    """四舍五入到分"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value) -> int:
    return int(round2(value) * CENTS_PER_UNIT)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(CENT)
