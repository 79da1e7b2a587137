"""记录表格数据模型模块（账簿 / 凭证 / 存货）"""
from enum import IntEnum
from typing import Any, List, Optional

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from tallyboard.db.query import QueryResult
from tallyboard.formatting import format_balance, format_currency, group_indian
from tallyboard.models.ledger import Ledger
from tallyboard.models.stock_item import StockItem
from tallyboard.models.voucher import Voucher
from tallyboard.ui.theme import get_balance_color


class RecordTableModel(QAbstractTableModel):
    """
    只读记录表格的基类（Model/View架构）

    子类提供 COLUMN_HEADERS 和 display_value()；
    数值列通过 NUMERIC_COLUMNS 右对齐。
    """

    COLUMN_HEADERS: List[str] = []
    NUMERIC_COLUMNS: frozenset = frozenset()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._records: list = []
        self._is_loading = False
        self._error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    def set_loading(self) -> None:
        """进入加载状态（清空表格）"""
        self.set_result(QueryResult.loading())

    def set_result(self, result: QueryResult) -> None:
        """设置查询结果；加载中或无数据时显示为空表"""
        self.beginResetModel()
        self._is_loading = result.is_loading
        self._error = result.error
        self._records = list(result.data or []) if not result.is_loading else []
        self.endResetModel()

    def get_record(self, row: int) -> Optional[Any]:
        """根据行号获取记录"""
        if 0 <= row < len(self._records):
            return self._records[row]
        return None

    def display_value(self, record: Any, col: int) -> str:
        raise NotImplementedError

    def foreground(self, record: Any, col: int) -> Optional[QColor]:
        return None

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._records)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self.COLUMN_HEADERS)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._records)):
            return None

        record = self._records[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            return self.display_value(record, col)
        elif role == Qt.TextAlignmentRole:
            if col in self.NUMERIC_COLUMNS:
                return Qt.AlignRight | Qt.AlignVCenter
            return Qt.AlignLeft | Qt.AlignVCenter
        elif role == Qt.ForegroundRole:
            return self.foreground(record, col)
        elif role == Qt.UserRole:
            return record

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            if 0 <= section < len(self.COLUMN_HEADERS):
                return self.COLUMN_HEADERS[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable


class LedgerColumn(IntEnum):
    NAME = 0
    GROUP = 1
    OPENING = 2
    CURRENT = 3


class LedgerTableModel(RecordTableModel):
    """账簿列表"""

    COLUMN_HEADERS = ["Name", "Group", "Opening Balance", "Current Balance"]
    NUMERIC_COLUMNS = frozenset({LedgerColumn.OPENING, LedgerColumn.CURRENT})

    def display_value(self, ledger: Ledger, col: int) -> str:
        if col == LedgerColumn.NAME:
            return ledger.name
        elif col == LedgerColumn.GROUP:
            return Ledger.group_display(ledger.group)
        elif col == LedgerColumn.OPENING:
            return format_balance(ledger.opening_balance)
        elif col == LedgerColumn.CURRENT:
            return format_balance(ledger.current_balance)
        return ""

    def foreground(self, ledger: Ledger, col: int) -> Optional[QColor]:
        if col == LedgerColumn.CURRENT:
            return QColor(get_balance_color(ledger.current_balance))
        return None


class VoucherColumn(IntEnum):
    DATE = 0
    NUMBER = 1
    TYPE = 2
    PARTY = 3
    AMOUNT = 4
    NARRATION = 5


class VoucherTableModel(RecordTableModel):
    """凭证列表"""

    COLUMN_HEADERS = ["Date", "Voucher No.", "Type", "Party", "Amount", "Narration"]
    NUMERIC_COLUMNS = frozenset({VoucherColumn.AMOUNT})

    def display_value(self, voucher: Voucher, col: int) -> str:
        if col == VoucherColumn.DATE:
            return voucher.date
        elif col == VoucherColumn.NUMBER:
            return voucher.voucher_number
        elif col == VoucherColumn.TYPE:
            return Voucher.type_display(voucher.type)
        elif col == VoucherColumn.PARTY:
            return voucher.party_name
        elif col == VoucherColumn.AMOUNT:
            return format_currency(voucher.total_amount)
        elif col == VoucherColumn.NARRATION:
            return voucher.narration or ""
        return ""


class StockColumn(IntEnum):
    NAME = 0
    GROUP = 1
    QUANTITY = 2
    RATE = 3
    VALUE = 4


class StockTableModel(RecordTableModel):
    """存货列表"""

    COLUMN_HEADERS = ["Item", "Group", "Quantity", "Rate", "Value"]
    NUMERIC_COLUMNS = frozenset({StockColumn.QUANTITY, StockColumn.RATE, StockColumn.VALUE})

    def display_value(self, item: StockItem, col: int) -> str:
        if col == StockColumn.NAME:
            return item.name
        elif col == StockColumn.GROUP:
            return item.group
        elif col == StockColumn.QUANTITY:
            return f"{group_indian(item.quantity)} {item.unit}"
        elif col == StockColumn.RATE:
            return format_currency(item.rate)
        elif col == StockColumn.VALUE:
            return format_currency(item.value)
        return ""
