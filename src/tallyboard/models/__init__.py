"""数据模型模块"""
from tallyboard.models.ledger import Ledger
from tallyboard.models.voucher import Voucher, VoucherItem
from tallyboard.models.stock_item import StockItem
from tallyboard.models.company import Company
from tallyboard.models.metrics import DashboardMetrics

__all__ = ["Ledger", "Voucher", "VoucherItem", "StockItem", "Company", "DashboardMetrics"]
