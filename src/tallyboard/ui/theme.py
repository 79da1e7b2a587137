"""UI 主题工具模块 - 提供主题适配的颜色和样式"""
from typing import Final, Dict

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette


# 语义颜色常量
COLOR_SUCCESS: Final = "#2e7d32"
COLOR_WARNING: Final = "#ef6c00"
COLOR_DESTRUCTIVE: Final = "#c62828"
COLOR_PRIMARY: Final = "#1565c0"

# 指标卡片变体 -> 边框/强调色
CARD_VARIANTS: Final[Dict[str, str]] = {
    "default": COLOR_PRIMARY,
    "success": COLOR_SUCCESS,
    "warning": COLOR_WARNING,
    "destructive": COLOR_DESTRUCTIVE,
}


def get_text_color_str() -> str:
    """根据系统主题获取文字颜色字符串"""
    palette = QApplication.palette()
    return palette.color(QPalette.WindowText).name()


def get_secondary_text_color() -> str:
    """获取次要文字颜色（透明度较低）"""
    palette = QApplication.palette()
    text_color = palette.color(QPalette.WindowText)
    text_color.setAlpha(180)
    return text_color.name()


def get_card_style(variant: str = "default") -> str:
    """获取指标卡片样式（适配系统主题）"""
    palette = QApplication.palette()
    bg_color = palette.color(QPalette.Base)
    accent = CARD_VARIANTS.get(variant, COLOR_PRIMARY)
    return f"""
        MetricCard {{
            background-color: {bg_color.name()};
            border: 1px solid {accent};
            border-radius: 12px;
            padding: 12px;
        }}
    """


def get_balance_color(balance: float) -> str:
    """根据余额正负返回对应颜色"""
    return COLOR_SUCCESS if balance >= 0 else COLOR_DESTRUCTIVE
