"""只读查询结果模块

表格页面只关心三种状态：加载中、就绪、失败。
读取失败时返回空集合并记录警告，不向界面抛出异常。
"""
import logging
import sqlite3
from dataclasses import dataclass
from typing import Callable, Final, Generic, List, Optional, TypeVar

from tallyboard.db.database import Database
from tallyboard.models.company import Company
from tallyboard.models.ledger import Ledger
from tallyboard.models.stock_item import StockItem
from tallyboard.models.voucher import Voucher

logger: Final = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """查询结果"""
    data: Optional[T] = None
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return not self.is_loading and self.error is None

    @classmethod
    def loading(cls) -> "QueryResult[T]":
        return cls(is_loading=True)

    @classmethod
    def ready(cls, data: T) -> "QueryResult[T]":
        return cls(data=data)

    @classmethod
    def failed(cls, error: str, default: Optional[T] = None) -> "QueryResult[T]":
        return cls(data=default, error=error)


def run_query(name: str, fn: Callable[[], T], default: T) -> QueryResult[T]:
    """执行查询，数据库错误转换为失败结果（携带默认值）"""
    try:
        return QueryResult.ready(fn())
    except sqlite3.Error as e:
        logger.warning(f"{name} 读取失败，返回空结果: {e}")
        return QueryResult.failed(str(e), default)


class RecordRepository:
    """页面使用的只读查询接口"""

    def __init__(self, db: Database):
        self.db = db

    def ledgers(self) -> QueryResult[List[Ledger]]:
        return run_query("ledgers", self.db.get_all_ledgers, [])

    def search_ledgers(self, query: str) -> QueryResult[List[Ledger]]:
        """按名称搜索账簿（不区分大小写）"""
        needle = query.strip().lower()
        result = self.ledgers()
        if not needle or result.data is None:
            return result
        matched = [ledger for ledger in result.data if needle in ledger.name.lower()]
        return QueryResult(data=matched, error=result.error)

    def vouchers(self, voucher_type: Optional[str] = None) -> QueryResult[List[Voucher]]:
        if voucher_type:
            return run_query("vouchers", lambda: self.db.get_vouchers_by_type(voucher_type), [])
        return run_query("vouchers", self.db.get_all_vouchers, [])

    def stock_items(self) -> QueryResult[List[StockItem]]:
        return run_query("stock_items", self.db.get_all_stock_items, [])

    def company(self) -> QueryResult[Optional[Company]]:
        return run_query("company", self.db.get_company, None)
