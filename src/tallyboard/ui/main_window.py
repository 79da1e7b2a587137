import logging
from datetime import date
from typing import Optional, Final

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QLineEdit, QComboBox, QPushButton, QTableView, QHeaderView,
    QMessageBox, QTabWidget, QStatusBar
)
from PySide6.QtGui import QCloseEvent

from tallyboard.db.database import Database
from tallyboard.db.query import RecordRepository
from tallyboard.formatting import format_currency
from tallyboard.services.dashboard_service import DashboardService
from tallyboard.settings import APP_NAME, FIX_ALT_G_CASE, FUNCTION_KEY_VOUCHERS, VOUCHER_TYPES
from tallyboard.shortcuts import ShortcutBindings, ShortcutDispatcher
from tallyboard.ui.dashboard_widget import DashboardWidget
from tallyboard.ui.key_source import QtKeyEventSource
from tallyboard.ui.record_models import (
    RecordTableModel, LedgerTableModel, VoucherTableModel, StockTableModel
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger: Final = logging.getLogger(__name__)

TAB_DASHBOARD: Final = 0
TAB_LEDGERS: Final = 1
TAB_VOUCHERS: Final = 2
TAB_INVENTORY: Final = 3


def _make_table(model: RecordTableModel) -> QTableView:
    view = QTableView()
    view.setModel(model)
    view.setSelectionBehavior(QTableView.SelectRows)
    view.setSelectionMode(QTableView.SingleSelection)
    view.setAlternatingRowColors(True)
    view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
    return view


class MainWindow(QMainWindow):
    """主窗口"""

    def __init__(
        self,
        db: Optional[Database] = None,
        fix_alt_g_case: bool = FIX_ALT_G_CASE,
        today: Optional[date] = None
    ):
        super().__init__()
        self.db = db or Database()
        self.repository = RecordRepository(self.db)
        self.dashboard_service = DashboardService(self.db, today=today)

        self.setWindowTitle(f"{APP_NAME} - Bookkeeping Dashboard")
        self.resize(1200, 760)

        self._init_ui()
        self._init_statusbar()
        self._init_shortcuts(fix_alt_g_case)

        # 初始加载数据
        self._refresh_all()

    def _init_ui(self) -> None:
        """初始化界面"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.tab_widget = QTabWidget()

        # Tab 1: 首页总览
        self.dashboard = DashboardWidget(self.dashboard_service)
        self.tab_widget.addTab(self.dashboard, "Dashboard (F1)")

        # Tab 2: 账簿
        ledgers_widget = QWidget()
        ledgers_layout = QVBoxLayout(ledgers_widget)
        ledgers_layout.setContentsMargins(10, 10, 10, 10)

        search_layout = QHBoxLayout()
        self.ledger_search = QLineEdit()
        self.ledger_search.setPlaceholderText("Search ledgers... (Ctrl+G)")
        self.ledger_search.textChanged.connect(self._load_ledgers)
        search_layout.addWidget(self.ledger_search)
        search_layout.addStretch()
        ledgers_layout.addLayout(search_layout)

        self.ledger_model = LedgerTableModel()
        self.ledger_view = _make_table(self.ledger_model)
        ledgers_layout.addWidget(self.ledger_view)
        self.tab_widget.addTab(ledgers_widget, "Ledgers (F2)")

        # Tab 3: 凭证
        vouchers_widget = QWidget()
        vouchers_layout = QVBoxLayout(vouchers_widget)
        vouchers_layout.setContentsMargins(10, 10, 10, 10)

        filter_layout = QHBoxLayout()
        filter_layout.addWidget(QLabel("Type:"))
        self.voucher_type_combo = QComboBox()
        self.voucher_type_combo.addItem("All", "")
        for key, label in VOUCHER_TYPES.items():
            self.voucher_type_combo.addItem(label, key)
        self.voucher_type_combo.currentIndexChanged.connect(self._load_vouchers)
        filter_layout.addWidget(self.voucher_type_combo)
        filter_layout.addStretch()
        self.voucher_total_label = QLabel("")
        filter_layout.addWidget(self.voucher_total_label)
        vouchers_layout.addLayout(filter_layout)

        self.voucher_model = VoucherTableModel()
        self.voucher_view = _make_table(self.voucher_model)
        vouchers_layout.addWidget(self.voucher_view)
        self.tab_widget.addTab(vouchers_widget, "Vouchers (F4-F9)")

        # Tab 4: 存货
        inventory_widget = QWidget()
        inventory_layout = QVBoxLayout(inventory_widget)
        inventory_layout.setContentsMargins(10, 10, 10, 10)

        self.stock_model = StockTableModel()
        self.stock_view = _make_table(self.stock_model)
        inventory_layout.addWidget(self.stock_view)

        self.stock_total_label = QLabel("")
        inventory_layout.addWidget(self.stock_total_label)
        self.tab_widget.addTab(inventory_widget, "Inventory (F3)")

        refresh_btn = QPushButton("Refresh (Alt+R)")
        refresh_btn.clicked.connect(self._refresh_all)
        self.tab_widget.setCornerWidget(refresh_btn)

        self.tab_widget.currentChanged.connect(self._on_tab_changed)

        layout.addWidget(self.tab_widget)

    def _init_statusbar(self) -> None:
        """初始化状态栏"""
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.statusbar.showMessage("Ready")

    def _init_shortcuts(self, fix_alt_g_case: bool) -> None:
        """初始化全局快捷键（F1~F9 / Ctrl+G / Alt+R / Alt+G）"""
        self.key_source = QtKeyEventSource(self, parent=self)
        self.shortcuts = ShortcutDispatcher(self.key_source, fix_alt_g_case=fix_alt_g_case)
        self.shortcuts.start(self._build_bindings())

    def _build_bindings(self) -> ShortcutBindings:
        vouchers = {
            f"on_{key.lower()}": (lambda voucher_type=voucher_type: self.show_vouchers(voucher_type))
            for key, voucher_type in FUNCTION_KEY_VOUCHERS.items()
        }
        return ShortcutBindings(
            on_f1=lambda: self.tab_widget.setCurrentIndex(TAB_DASHBOARD),
            on_f2=lambda: self.tab_widget.setCurrentIndex(TAB_LEDGERS),
            on_f3=lambda: self.tab_widget.setCurrentIndex(TAB_INVENTORY),
            on_ctrl_g=self.focus_ledger_search,
            on_alt_r=self._refresh_all,
            on_alt_g=self.next_section,
            **vouchers
        )

    # ==================== 快捷键动作 ====================

    def show_vouchers(self, voucher_type: str) -> None:
        """切换到凭证页并按类型筛选"""
        index = self.voucher_type_combo.findData(voucher_type)
        if index >= 0:
            self.voucher_type_combo.setCurrentIndex(index)
        self.tab_widget.setCurrentIndex(TAB_VOUCHERS)

    def focus_ledger_search(self) -> None:
        """切换到账簿页并聚焦搜索框"""
        self.tab_widget.setCurrentIndex(TAB_LEDGERS)
        self.ledger_search.setFocus()
        self.ledger_search.selectAll()

    def next_section(self) -> None:
        """切换到下一个页面（循环）"""
        count = self.tab_widget.count()
        self.tab_widget.setCurrentIndex((self.tab_widget.currentIndex() + 1) % count)

    # ==================== 数据加载 ====================

    def _on_tab_changed(self, index: int) -> None:
        """标签页切换"""
        if index == TAB_DASHBOARD:
            self.dashboard.refresh()

    def _load_ledgers(self) -> None:
        self.ledger_model.set_loading()
        result = self.repository.search_ledgers(self.ledger_search.text())
        self.ledger_model.set_result(result)
        if result.error:
            self.statusbar.showMessage(f"Failed to load ledgers: {result.error}", 5000)

    def _load_vouchers(self) -> None:
        self.voucher_model.set_loading()
        voucher_type = self.voucher_type_combo.currentData() or None
        result = self.repository.vouchers(voucher_type)
        self.voucher_model.set_result(result)
        total = sum(v.total_amount for v in result.data or [])
        self.voucher_total_label.setText(f"Total: {format_currency(total)}")
        if result.error:
            self.statusbar.showMessage(f"Failed to load vouchers: {result.error}", 5000)

    def _load_stock(self) -> None:
        self.stock_model.set_loading()
        result = self.repository.stock_items()
        self.stock_model.set_result(result)
        total = sum(item.value for item in result.data or [])
        self.stock_total_label.setText(f"Total stock value: {format_currency(total)}")
        if result.error:
            self.statusbar.showMessage(f"Failed to load stock items: {result.error}", 5000)

    def _refresh_all(self) -> None:
        """刷新所有数据"""
        try:
            self._load_ledgers()
            self._load_vouchers()
            self._load_stock()
            self.dashboard.refresh()

            company = self.repository.company().data
            if company is not None and company.name:
                self.setWindowTitle(f"{APP_NAME} - {company.name}")
            self.statusbar.showMessage(
                f"Loaded {self.ledger_model.rowCount()} ledgers, "
                f"{self.voucher_model.rowCount()} vouchers, "
                f"{self.stock_model.rowCount()} stock items",
                3000
            )
        except Exception as e:
            logger.exception("刷新数据失败")
            QMessageBox.critical(self, "Error", f"Failed to load data: {e}")

    def closeEvent(self, event: QCloseEvent) -> None:
        """窗口关闭事件"""
        self.shortcuts.stop()
        self.db.close()
        event.accept()
