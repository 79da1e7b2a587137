"""账簿数据模型"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class Ledger:
    """账簿数据模型"""
    id: Optional[int] = None
    name: str = ""
    group: str = "sundry-debtors"
    opening_balance: float = 0.0
    current_balance: float = 0.0
    address: Optional[str] = None
    phone: Optional[str] = None
    gstin: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_row(cls, row: Tuple) -> "Ledger":
        """从数据库行创建Ledger对象"""
        return cls(
            id=row[0],
            name=row[1],
            group=row[2],
            opening_balance=row[3] or 0.0,
            current_balance=row[4] or 0.0,
            address=row[5],
            phone=row[6],
            gstin=row[7],
            email=row[8]
        )

    @staticmethod
    def group_display(group: str) -> str:
        """获取账簿分组的显示文本"""
        # 延迟导入避免循环依赖
        from tallyboard.settings import LEDGER_GROUPS, DEFAULT_GROUP
        return LEDGER_GROUPS.get(group, group or DEFAULT_GROUP)
