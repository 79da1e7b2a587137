"""公司信息数据模型"""
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Company:
    """公司信息"""
    name: str = ""
    address: str = ""
    gstin: str = ""
    pan: str = ""
    phone: str = ""
    email: str = ""
    financial_year_start: str = ""  # YYYY-MM-DD
    financial_year_end: str = ""

    @classmethod
    def from_row(cls, row: Tuple) -> "Company":
        """从数据库行创建Company对象（第一列为主键）"""
        return cls(*(value or "" for value in row[1:9]))
