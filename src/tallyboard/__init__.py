"""
TallyBoard - 记账看板（账簿、凭证、存货、指标）
"""
from tallyboard.models import Ledger, Voucher, VoucherItem, StockItem, Company, DashboardMetrics
from tallyboard.db.database import Database
from tallyboard.db.query import QueryResult, RecordRepository
from tallyboard.services.dashboard_service import DashboardService
from tallyboard.shortcuts import KeyPress, ShortcutBindings, ShortcutDispatcher, ShortcutRule
from tallyboard.formatting import format_amount, format_balance, format_currency, group_indian
from tallyboard.settings import VERSION, APP_NAME, CURRENCY_SYMBOL, CURRENCY_CODE

__all__ = [
    # 数据模型
    "Ledger",
    "Voucher",
    "VoucherItem",
    "StockItem",
    "Company",
    "DashboardMetrics",
    # 数据库
    "Database",
    "QueryResult",
    "RecordRepository",
    # 服务
    "DashboardService",
    # 快捷键
    "KeyPress",
    "ShortcutBindings",
    "ShortcutDispatcher",
    "ShortcutRule",
    # 配置
    "VERSION",
    "APP_NAME",
    "CURRENCY_SYMBOL",
    "CURRENCY_CODE",
    # 工具函数
    "format_amount",
    "format_balance",
    "format_currency",
    "group_indian",
]
__version__ = VERSION
