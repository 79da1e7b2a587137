"""首页总览组件模块"""
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QTableView, QHeaderView
)

from tallyboard.db.query import QueryResult
from tallyboard.formatting import format_amount
from tallyboard.services.dashboard_service import DashboardService
from tallyboard.settings import CURRENCY_SYMBOL
from tallyboard.ui.record_models import VoucherTableModel
from tallyboard.ui.theme import (
    COLOR_SUCCESS, COLOR_DESTRUCTIVE,
    get_text_color_str, get_secondary_text_color, get_card_style
)


class MetricCard(QFrame):
    """指标卡片组件"""

    def __init__(
        self,
        title: str,
        prefix: str = CURRENCY_SYMBOL,
        variant: str = "default",
        parent=None
    ):
        super().__init__(parent)
        self.prefix = prefix
        self.variant = variant
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Raised)
        self.setStyleSheet(get_card_style(variant))

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(8)

        # 标题
        self.title_label = QLabel(title)
        self.title_label.setStyleSheet(f"color: {get_secondary_text_color()}; font-size: 13px;")
        layout.addWidget(self.title_label)

        # 主数值
        self.value_label = QLabel(format_amount(0, prefix))
        self.value_label.setStyleSheet(
            f"color: {get_text_color_str()}; font-size: 24px; font-weight: bold; font-family: monospace;"
        )
        layout.addWidget(self.value_label)

        # 环比
        self.trend_label = QLabel("")
        self.trend_label.setVisible(False)
        layout.addWidget(self.trend_label)

    def set_value(self, value: float) -> None:
        """设置主数值（缩写显示）"""
        self.value_label.setText(format_amount(value, self.prefix))

    def set_trend(self, percent: Optional[float]) -> None:
        """设置环比变化，None 表示不显示"""
        if percent is None:
            self.trend_label.setText("")
            self.trend_label.setVisible(False)
            return

        is_positive = percent >= 0
        arrow = "↑" if is_positive else "↓"
        color = COLOR_SUCCESS if is_positive else COLOR_DESTRUCTIVE
        self.trend_label.setText(f"{arrow} {abs(percent)}% from last month")
        self.trend_label.setStyleSheet(f"color: {color}; font-size: 12px;")
        self.trend_label.setVisible(True)


class DashboardWidget(QWidget):
    """首页总览组件"""

    def __init__(self, service: DashboardService, parent=None):
        super().__init__(parent)
        self.service = service
        self._init_ui()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(20)

        # 标题
        self.title_label = QLabel("Dashboard")
        self.title_label.setStyleSheet(
            f"font-size: 20px; font-weight: bold; color: {get_text_color_str()};"
        )
        layout.addWidget(self.title_label)

        self.period_label = QLabel("")
        self.period_label.setStyleSheet(f"color: {get_secondary_text_color()};")
        layout.addWidget(self.period_label)

        # 主要指标
        primary_layout = QHBoxLayout()
        primary_layout.setSpacing(16)

        self.sales_card = MetricCard("Total Sales", variant="success")
        primary_layout.addWidget(self.sales_card)

        self.purchases_card = MetricCard("Total Purchases", variant="warning")
        primary_layout.addWidget(self.purchases_card)

        self.receivables_card = MetricCard("Receivables")
        primary_layout.addWidget(self.receivables_card)

        self.payables_card = MetricCard("Payables", variant="destructive")
        primary_layout.addWidget(self.payables_card)

        layout.addLayout(primary_layout)

        # 次要指标
        secondary_layout = QHBoxLayout()
        secondary_layout.setSpacing(16)

        self.cash_card = MetricCard("Cash in Hand")
        secondary_layout.addWidget(self.cash_card)

        self.bank_card = MetricCard("Bank Balance")
        secondary_layout.addWidget(self.bank_card)

        # 计数类指标不带货币符号
        self.today_card = MetricCard("Today's Transactions", prefix="")
        secondary_layout.addWidget(self.today_card)

        self.pending_card = MetricCard("Pending Invoices", prefix="", variant="warning")
        secondary_layout.addWidget(self.pending_card)

        layout.addLayout(secondary_layout)

        # 最近凭证（只读）
        recent_title = QLabel("Recent Transactions")
        recent_title.setStyleSheet(
            f"font-size: 15px; font-weight: bold; color: {get_text_color_str()};"
        )
        layout.addWidget(recent_title)

        self.recent_model = VoucherTableModel()
        self.recent_view = QTableView()
        self.recent_view.setModel(self.recent_model)
        self.recent_view.setSelectionMode(QTableView.NoSelection)
        self.recent_view.setFocusPolicy(Qt.NoFocus)
        self.recent_view.verticalHeader().setVisible(False)
        self.recent_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.recent_view, 1)

        self.recent_empty_label = QLabel("No transactions found.")
        self.recent_empty_label.setStyleSheet(f"color: {get_secondary_text_color()};")
        self.recent_empty_label.setVisible(False)
        layout.addWidget(self.recent_empty_label)

    def refresh(self) -> None:
        """刷新Dashboard数据"""
        metrics = self.service.get_metrics()
        self.period_label.setText(f"Financial year {metrics.period_start} to {metrics.period_end}")

        self.sales_card.set_value(metrics.total_sales)
        self.sales_card.set_trend(self.service.get_month_over_month_change("sales"))

        self.purchases_card.set_value(metrics.total_purchases)
        self.purchases_card.set_trend(self.service.get_month_over_month_change("purchase"))

        self.receivables_card.set_value(metrics.total_receivables)
        self.payables_card.set_value(metrics.total_payables)
        self.cash_card.set_value(metrics.cash_in_hand)
        self.bank_card.set_value(metrics.bank_balance)
        self.today_card.set_value(metrics.today_transactions)
        self.pending_card.set_value(metrics.pending_invoices)

        recent = self.service.get_recent_vouchers()
        self.recent_model.set_result(QueryResult.ready(recent))
        self.recent_empty_label.setVisible(not recent)
