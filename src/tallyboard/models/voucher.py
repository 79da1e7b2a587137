"""凭证数据模型"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(slots=True)
class VoucherItem:
    """凭证分录"""
    id: Optional[int] = None
    voucher_id: Optional[int] = None
    particulars: str = ""
    ledger_id: Optional[int] = None
    amount: float = 0.0
    type: str = "debit"  # debit / credit

    @classmethod
    def from_row(cls, row: Tuple) -> "VoucherItem":
        """从数据库行创建VoucherItem对象"""
        return cls(
            id=row[0],
            voucher_id=row[1],
            particulars=row[2] or "",
            ledger_id=row[3],
            amount=row[4],
            type=row[5]
        )


@dataclass(slots=True)
class Voucher:
    """凭证数据模型"""
    id: Optional[int] = None
    voucher_number: str = ""
    type: str = "sales"  # sales / purchase / payment / receipt / journal / contra / credit-note / debit-note
    date: str = ""  # YYYY-MM-DD
    party_name: str = ""
    party_ledger_id: Optional[int] = None
    narration: Optional[str] = ""
    total_amount: float = 0.0
    created_at: Optional[str] = None
    items: List[VoucherItem] = field(default_factory=list)

    @property
    def debit_total(self) -> float:
        return sum(item.amount for item in self.items if item.type == "debit")

    @property
    def credit_total(self) -> float:
        return sum(item.amount for item in self.items if item.type == "credit")

    @classmethod
    def from_row(cls, row: Tuple) -> "Voucher":
        """从数据库行创建Voucher对象（不含分录）"""
        return cls(
            id=row[0],
            voucher_number=row[1],
            type=row[2],
            date=row[3],
            party_name=row[4] or "",
            party_ledger_id=row[5],
            narration=row[6],
            total_amount=row[7],
            created_at=row[8]
        )

    @staticmethod
    def type_display(voucher_type: str) -> str:
        """获取凭证类型的显示文本"""
        from tallyboard.settings import VOUCHER_TYPES
        return VOUCHER_TYPES.get(voucher_type, voucher_type)
