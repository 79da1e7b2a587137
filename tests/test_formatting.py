"""
金额格式化测试

测试范围：
- 指标卡片缩写（Cr / L / K）
- 南亚千分位分组
- 舍入方式（ROUND_HALF_UP）
- 非有限值输入
"""
from decimal import Decimal

import pytest

from tallyboard.formatting import format_amount, format_balance, format_currency, group_indian


class TestMagnitudeAbbreviation:
    """数量级缩写"""

    def test_crore(self):
        """FMT-001: 超过一千万使用 Cr"""
        assert format_amount(12_345_678, prefix="") == "1.23 Cr"

    def test_lakh(self):
        """FMT-002: 超过十万使用 L"""
        assert format_amount(125_000, prefix="") == "1.25 L"
        assert format_amount(1_250_000, prefix="") == "12.50 L"

    def test_thousand(self):
        """FMT-003: 超过一千使用 K，保留两位小数"""
        assert format_amount(4_500, prefix="") == "4.50 K"

    def test_below_thousand_has_no_suffix(self):
        assert format_amount(999, prefix="") == "999"

    def test_default_prefix_is_rupee(self):
        assert format_amount(12_345_678) == "₹1.23 Cr"
        assert format_amount(999) == "₹999"

    def test_custom_prefix(self):
        assert format_amount(4_500, prefix="Rs. ") == "Rs. 4.50 K"

    def test_tier_boundaries(self):
        """FMT-004: 阈值下界包含，低于阈值不进入上一级"""
        assert "Cr" not in format_amount(9_999_999, prefix="")
        assert format_amount(9_999_999, prefix="") == "100.00 L"
        assert format_amount(10_000_000, prefix="") == "1.00 Cr"
        assert format_amount(99_999, prefix="") == "100.00 K"
        assert format_amount(100_000, prefix="") == "1.00 L"
        assert format_amount(1_000, prefix="") == "1.00 K"

    def test_no_unit_above_crore(self):
        assert format_amount(120_000_000, prefix="") == "12.00 Cr"
        assert format_amount(10_000_000_000, prefix="") == "1000.00 Cr"

    def test_huge_integer_keeps_every_digit(self):
        """FMT-006: 超过 28 位有效数字时缩写仍精确"""
        amount = 123456789012345678901234567891234567
        assert format_amount(amount, prefix="") == "12345678901234567890123456789.12 Cr"
        assert format_amount(Decimal(amount) + Decimal("0.5"), prefix="") == \
            "12345678901234567890123456789.12 Cr"

    def test_zero(self):
        assert format_amount(0, prefix="") == "0"

    def test_negative_falls_through_to_grouping(self):
        """FMT-005: 负数不匹配任何阈值，按分组显示"""
        assert format_amount(-5000, prefix="") == "-5,000"
        assert format_amount(-1_234_567, prefix="") == "-12,34,567"
        assert format_amount(-50_000_000) == "₹-5,00,00,000"

    def test_small_integers_are_plain(self):
        """FMT-006: 0~999 的整数与普通十进制字符串一致"""
        for n in range(1000):
            assert format_amount(n, prefix="") == str(n)

    def test_float_and_decimal_inputs(self):
        assert format_amount(1_234.5, prefix="") == "1.23 K"
        assert format_amount(Decimal("1234567.891"), prefix="") == "12.35 L"
        assert format_amount(999.5, prefix="") == "999.5"
        assert format_amount(12.3456, prefix="") == "12.346"


class TestRounding:
    """舍入方式固定为 ROUND_HALF_UP"""

    def test_midpoint_rounds_up(self):
        """FMT-007: 1.225 Cr 向上舍入为 1.23（银行家舍入会得到 1.22）"""
        assert format_amount(12_250_000, prefix="") == "1.23 Cr"

    def test_below_midpoint_rounds_down(self):
        assert format_amount(12_345_000, prefix="") == "1.23 Cr"

    def test_midpoint_thousand(self):
        assert format_amount(1_005, prefix="") == "1.01 K"
        assert format_amount(2_125, prefix="") == "2.13 K"

    def test_float_midpoint_uses_decimal_repr(self):
        # 1.005 在二进制浮点中略小于 1.005，按十进制 repr 处理
        assert format_amount(1_005.0, prefix="") == "1.01 K"


class TestInvalidInput:
    """非法输入"""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValueError):
            format_amount(value)

    @pytest.mark.parametrize("value", [True, "100", None])
    def test_non_numbers_rejected(self, value):
        with pytest.raises(TypeError):
            format_amount(value)


class TestIndianGrouping:
    """南亚千分位分组"""

    @pytest.mark.parametrize("value, expected", [
        (0, "0"),
        (100, "100"),
        (1_000, "1,000"),
        (12_345, "12,345"),
        (100_000, "1,00,000"),
        (1_234_567, "12,34,567"),
        (12_345_678, "1,23,45,678"),
        (-1_234_567, "-12,34,567"),
    ])
    def test_grouping(self, value, expected):
        assert group_indian(value) == expected

    def test_fraction_digits_trimmed(self):
        assert group_indian(1_234.5) == "1,234.5"
        assert group_indian(1_234.50) == "1,234.5"
        assert group_indian(0.1234) == "0.123"

    def test_max_fraction_digits_zero_rounds_half_up(self):
        assert group_indian(1_234.5, max_fraction_digits=0) == "1,235"

    def test_negative_rounding_to_zero_drops_sign(self):
        assert group_indian(-0.0001) == "0"
        assert group_indian(-0.0) == "0"


class TestCurrencyDisplay:
    """表格中的完整金额显示"""

    def test_full_currency(self):
        assert format_currency(1_234_567) == "₹12,34,567"
        assert format_currency(1_499.5) == "₹1,500"

    def test_currency_uses_magnitude(self):
        assert format_currency(-1_234_567) == "₹12,34,567"

    def test_balance_direction(self):
        assert format_balance(250_000) == "₹2,50,000 Dr"
        assert format_balance(-500) == "₹500 Cr"
        assert format_balance(0) == "₹0 Dr"
