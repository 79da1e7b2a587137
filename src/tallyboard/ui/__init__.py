"""用户界面模块"""
from tallyboard.ui.main_window import MainWindow
from tallyboard.ui.dashboard_widget import DashboardWidget, MetricCard
from tallyboard.ui.key_source import QtKeyEventSource, to_key_press
from tallyboard.ui.record_models import (
    RecordTableModel, LedgerTableModel, VoucherTableModel, StockTableModel
)
from tallyboard.ui.theme import (
    COLOR_SUCCESS, COLOR_WARNING, COLOR_DESTRUCTIVE, COLOR_PRIMARY,
    get_text_color_str, get_secondary_text_color, get_card_style, get_balance_color
)

__all__ = [
    # 窗口和组件
    "MainWindow",
    "DashboardWidget",
    "MetricCard",
    "QtKeyEventSource",
    "to_key_press",
    "RecordTableModel",
    "LedgerTableModel",
    "VoucherTableModel",
    "StockTableModel",
    # 主题常量和函数
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "COLOR_DESTRUCTIVE",
    "COLOR_PRIMARY",
    "get_text_color_str",
    "get_secondary_text_color",
    "get_card_style",
    "get_balance_color",
]
