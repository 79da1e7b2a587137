"""金额显示格式化模块

印度计数法（lakh / crore）相关的格式化函数：

- ``format_amount``: 指标卡片使用的缩写显示（如 ₹1.23 Cr）
- ``group_indian``: 南亚千分位分组（如 12,34,567）
- ``format_currency``: 表格中的完整金额显示（如 ₹12,34,567）
- ``format_balance``: 账簿余额显示，附带 Dr / Cr 方向
"""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Final, Union

from tallyboard.settings import CURRENCY_SYMBOL, MAGNITUDE_UNITS

Number = Union[int, float, Decimal]

TWO_PLACES: Final = Decimal("0.01")
DEFAULT_FRACTION_DIGITS: Final = 3  # 与 en-IN 本地化默认值一致


def _to_decimal(amount: Number) -> Decimal:
    """将输入转换为 Decimal，拒绝非有限值"""
    if isinstance(amount, bool):
        raise TypeError("amount must be a number, not bool")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, float):
        # 使用最短 repr，避免二进制浮点误差影响四舍五入
        value = Decimal(repr(amount))
    else:
        raise TypeError(f"amount must be a number, got {type(amount).__name__}")

    if not value.is_finite():
        raise ValueError(f"amount must be finite, got {amount!r}")
    return value


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    """按 ROUND_HALF_UP 量化，精度随数值大小放宽"""
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() + 10)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def _scale_down(value: Decimal, divisor: int) -> Decimal:
    """除以 10 的幂；精度按有效位数放宽，商不做舍入"""
    with localcontext() as ctx:
        ctx.prec = max(28, len(value.as_tuple().digits))
        return value / divisor


def _group_digits(integer: str) -> str:
    """对整数部分做 3-2-2 分组"""
    if len(integer) <= 3:
        return integer
    head, tail = integer[:-3], integer[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return ",".join(groups)


def group_indian(amount: Number, max_fraction_digits: int = DEFAULT_FRACTION_DIGITS) -> str:
    """
    南亚千分位分组

    右起第一组 3 位，其后每组 2 位；小数最多保留 ``max_fraction_digits`` 位，
    去掉末尾的 0。负号位于第一个数字之前。

    示例：
        group_indian(1234567)   -> "12,34,567"
        group_indian(-5000)     -> "-5,000"
        group_indian(999.5)     -> "999.5"
    """
    value = _to_decimal(amount)
    exp = Decimal(1).scaleb(-max_fraction_digits)
    magnitude = _quantize(abs(value), exp)

    integer, _, fraction = format(magnitude, "f").partition(".")
    fraction = fraction.rstrip("0")

    text = _group_digits(integer)
    if fraction:
        text = f"{text}.{fraction}"
    # 四舍五入后为 0 时不显示负号
    if value < 0 and magnitude != 0:
        text = f"-{text}"
    return text


def format_amount(amount: Number, prefix: str = CURRENCY_SYMBOL) -> str:
    """
    指标金额缩写格式化

    规则（按顺序匹配，命中即止）：
        >= 1 crore  -> 除以 10,000,000，保留两位小数，后缀 " Cr"
        >= 1 lakh   -> 除以 100,000，保留两位小数，后缀 " L"
        >= 1 千     -> 除以 1,000，保留两位小数，后缀 " K"
        其他        -> 南亚千分位分组，无后缀

    负数和 0 不会命中任何阈值，直接走分组显示。
    舍入方式固定为 ROUND_HALF_UP（12,250,000 -> "1.23 Cr"）。

    Raises:
        ValueError: amount 为 NaN 或无穷大
        TypeError: amount 不是数字
    """
    value = _to_decimal(amount)
    for threshold, suffix in MAGNITUDE_UNITS:
        if value >= threshold:
            scaled = _quantize(_scale_down(value, threshold), TWO_PLACES)
            return f"{prefix}{format(scaled, 'f')} {suffix}"
    return f"{prefix}{group_indian(value)}"


def format_currency(amount: Number, symbol: str = CURRENCY_SYMBOL) -> str:
    """完整金额显示（不带小数，取绝对值），如 ₹12,34,567"""
    value = _to_decimal(amount)
    return f"{symbol}{group_indian(abs(value), max_fraction_digits=0)}"


def format_balance(amount: Number, symbol: str = CURRENCY_SYMBOL) -> str:
    """账簿余额显示：正数为借方 Dr，负数为贷方 Cr"""
    value = _to_decimal(amount)
    side = "Dr" if value >= 0 else "Cr"
    return f"{format_currency(value, symbol)} {side}"
