"""首页指标数据模型"""
from dataclasses import dataclass


@dataclass
class DashboardMetrics:
    """首页指标汇总"""
    total_sales: float = 0.0
    total_purchases: float = 0.0
    total_receivables: float = 0.0
    total_payables: float = 0.0
    cash_in_hand: float = 0.0
    bank_balance: float = 0.0
    today_transactions: int = 0
    pending_invoices: int = 0
    period_start: str = ""
    period_end: str = ""
