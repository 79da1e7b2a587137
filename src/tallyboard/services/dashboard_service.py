"""首页指标服务模块"""
from calendar import monthrange
from datetime import date
from typing import Iterable, List, Optional, Tuple

from tallyboard.db.database import Database
from tallyboard.models.ledger import Ledger
from tallyboard.models.metrics import DashboardMetrics
from tallyboard.models.voucher import Voucher
from tallyboard.settings import FINANCIAL_YEAR_START_MONTH, RECENT_VOUCHER_LIMIT


def _sum_balances(ledgers: Iterable[Ledger]) -> float:
    return sum(ledger.current_balance for ledger in ledgers)


class DashboardService:
    """首页指标服务层"""

    def __init__(self, db: Database, today: Optional[date] = None):
        self.db = db
        self._today = today

    @property
    def today(self) -> date:
        """当前日期（测试时可固定）"""
        return self._today or date.today()

    @staticmethod
    def get_financial_year_range(today: date) -> Tuple[str, str]:
        """
        获取 today 所在财年的日期范围

        财年从 4 月 1 日开始，到次年 3 月 31 日结束。

        示例：
        - 2026-10-17 -> 2026-04-01 ~ 2027-03-31
        - 2026-02-01 -> 2025-04-01 ~ 2026-03-31
        """
        start_year = today.year if today.month >= FINANCIAL_YEAR_START_MONTH else today.year - 1
        return f"{start_year:04d}-04-01", f"{start_year + 1:04d}-03-31"

    @staticmethod
    def get_month_range(year: int, month: int) -> Tuple[str, str]:
        """获取某月的日期范围"""
        _, last_day = monthrange(year, month)
        return (
            f"{year:04d}-{month:02d}-01",
            f"{year:04d}-{month:02d}-{last_day:02d}"
        )

    def get_metrics(self) -> DashboardMetrics:
        """计算首页指标"""
        today_str = self.today.isoformat()
        period_start, period_end = self.get_financial_year_range(self.today)

        vouchers = self.db.get_all_vouchers()
        debtors = self.db.get_ledgers_by_group("sundry-debtors")

        # 仍有应收余额的客户
        outstanding_parties = {ledger.id for ledger in debtors if ledger.current_balance > 0}

        return DashboardMetrics(
            total_sales=sum(v.total_amount for v in vouchers if v.type == "sales"),
            total_purchases=sum(v.total_amount for v in vouchers if v.type == "purchase"),
            total_receivables=_sum_balances(debtors),
            total_payables=_sum_balances(self.db.get_ledgers_by_group("sundry-creditors")),
            cash_in_hand=_sum_balances(self.db.get_ledgers_by_group("cash-in-hand")),
            bank_balance=_sum_balances(self.db.get_ledgers_by_group("bank-accounts")),
            today_transactions=sum(1 for v in vouchers if v.date == today_str),
            pending_invoices=sum(
                1 for v in vouchers
                if v.type == "sales" and v.party_ledger_id in outstanding_parties
            ),
            period_start=period_start,
            period_end=period_end,
        )

    def _get_voucher_total(self, voucher_type: str, start_date: str, end_date: str) -> float:
        vouchers = self.db.get_vouchers_by_date_range(start_date, end_date)
        return sum(v.total_amount for v in vouchers if v.type == voucher_type)

    def get_month_over_month_change(self, voucher_type: str) -> Optional[float]:
        """
        本月与上月某类凭证合计的环比变化（百分比，保留一位小数）

        上月合计为 0 时无法计算，返回 None。
        """
        today = self.today
        if today.month == 1:
            last_year, last_month = today.year - 1, 12
        else:
            last_year, last_month = today.year, today.month - 1

        current = self._get_voucher_total(voucher_type, *self.get_month_range(today.year, today.month))
        previous = self._get_voucher_total(voucher_type, *self.get_month_range(last_year, last_month))

        if previous == 0:
            return None
        return round((current - previous) / previous * 100, 1)

    def get_recent_vouchers(self, limit: int = RECENT_VOUCHER_LIMIT) -> List[Voucher]:
        """最近的凭证（按日期倒序）"""
        return self.db.get_all_vouchers()[:limit]
