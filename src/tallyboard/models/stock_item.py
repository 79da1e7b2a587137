"""存货数据模型"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class StockItem:
    """存货数据模型"""
    id: Optional[int] = None
    name: str = ""
    unit: str = "Nos"
    quantity: float = 0.0
    rate: float = 0.0
    group: str = ""

    @property
    def value(self) -> float:
        """库存价值 = 数量 × 单价"""
        return self.quantity * self.rate

    @classmethod
    def from_row(cls, row: Tuple) -> "StockItem":
        """从数据库行创建StockItem对象"""
        return cls(
            id=row[0],
            name=row[1],
            unit=row[2],
            quantity=row[3],
            rate=row[4],
            group=row[5] or ""
        )
