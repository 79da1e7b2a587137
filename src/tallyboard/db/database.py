import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from tallyboard.settings import DB_PATH, DB_SCHEMA_VERSION
from tallyboard.models.ledger import Ledger
from tallyboard.models.voucher import Voucher, VoucherItem
from tallyboard.models.stock_item import StockItem
from tallyboard.models.company import Company

LEDGER_COLUMNS = (
    "id, name, ledger_group, opening_balance, current_balance, address, phone, gstin, email"
)
VOUCHER_COLUMNS = (
    "id, voucher_number, type, date, party_name, party_ledger_id, narration, total_amount, created_at"
)


class Database:
    """本地记录库（后端数据表的只读镜像），支持上下文管理器使用方式"""

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path or DB_PATH
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._init_db()

    def _connect(self) -> None:
        """建立数据库连接"""
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self._db_path)
        self.conn.execute("PRAGMA foreign_keys = ON")

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _init_db(self) -> None:
        """初始化数据库schema，支持迁移"""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)
        cursor.execute("SELECT version FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version < 1:
            self._migrate_v1(cursor)
        if current_version < 2:
            self._migrate_v2(cursor)

        if current_version < DB_SCHEMA_VERSION:
            cursor.execute("DELETE FROM schema_version")
            cursor.execute("INSERT INTO schema_version (version) VALUES (?)", (DB_SCHEMA_VERSION,))

        self.conn.commit()

    def _migrate_v1(self, cursor: sqlite3.Cursor) -> None:
        """V1: 账簿、凭证、凭证分录、存货"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS ledgers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                ledger_group TEXT NOT NULL,
                opening_balance REAL NOT NULL DEFAULT 0,
                current_balance REAL NOT NULL DEFAULT 0,
                address TEXT,
                phone TEXT,
                gstin TEXT,
                email TEXT
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS vouchers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                voucher_number TEXT NOT NULL,
                type TEXT NOT NULL,
                date TEXT NOT NULL,
                party_name TEXT,
                party_ledger_id INTEGER REFERENCES ledgers(id) ON DELETE SET NULL,
                narration TEXT,
                total_amount REAL NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS voucher_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                voucher_id INTEGER NOT NULL REFERENCES vouchers(id) ON DELETE CASCADE,
                particulars TEXT,
                ledger_id INTEGER REFERENCES ledgers(id) ON DELETE SET NULL,
                amount REAL NOT NULL,
                type TEXT NOT NULL
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS stock_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                unit TEXT NOT NULL,
                quantity REAL NOT NULL DEFAULT 0,
                rate REAL NOT NULL DEFAULT 0,
                stock_group TEXT
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_ledgers_group ON ledgers(ledger_group)")
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_vouchers_date
            ON vouchers(date DESC, created_at DESC)
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_vouchers_type ON vouchers(type)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_voucher_items_voucher ON voucher_items(voucher_id)")

    def _migrate_v2(self, cursor: sqlite3.Cursor) -> None:
        """V2: 公司信息表（单行）"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS company (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                name TEXT NOT NULL,
                address TEXT,
                gstin TEXT,
                pan TEXT,
                phone TEXT,
                email TEXT,
                financial_year_start TEXT,
                financial_year_end TEXT
            )
        """)

    # ==================== Ledger ====================

    def add_ledger(self, ledger: Ledger) -> int:
        """新增账簿"""
        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT INTO ledgers (name, ledger_group, opening_balance, current_balance, address, phone, gstin, email)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            ledger.name,
            ledger.group,
            ledger.opening_balance,
            ledger.current_balance,
            ledger.address,
            ledger.phone,
            ledger.gstin,
            ledger.email
        ))
        self.conn.commit()
        ledger.id = cursor.lastrowid
        return ledger.id

    def get_all_ledgers(self) -> List[Ledger]:
        """获取所有账簿，按名称排序"""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {LEDGER_COLUMNS} FROM ledgers ORDER BY name")
        return [Ledger.from_row(row) for row in cursor.fetchall()]

    def get_ledgers_by_group(self, group: str) -> List[Ledger]:
        """根据分组获取账簿"""
        cursor = self.conn.cursor()
        cursor.execute(
            f"SELECT {LEDGER_COLUMNS} FROM ledgers WHERE ledger_group = ? ORDER BY name",
            (group,)
        )
        return [Ledger.from_row(row) for row in cursor.fetchall()]

    def get_ledger_by_id(self, ledger_id: int) -> Optional[Ledger]:
        """根据ID获取账簿"""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {LEDGER_COLUMNS} FROM ledgers WHERE id = ?", (ledger_id,))
        row = cursor.fetchone()
        return Ledger.from_row(row) if row else None

    # ==================== Voucher ====================

    def add_voucher(self, voucher: Voucher) -> int:
        """新增凭证（连同分录，单个事务）"""
        created_at = voucher.created_at or datetime.now().isoformat()
        with self.conn:
            cursor = self.conn.cursor()
            cursor.execute("""
                INSERT INTO vouchers (voucher_number, type, date, party_name, party_ledger_id, narration, total_amount, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                voucher.voucher_number,
                voucher.type,
                voucher.date,
                voucher.party_name,
                voucher.party_ledger_id,
                voucher.narration,
                voucher.total_amount,
                created_at
            ))
            voucher.id = cursor.lastrowid
            voucher.created_at = created_at
            for item in voucher.items:
                cursor.execute("""
                    INSERT INTO voucher_items (voucher_id, particulars, ledger_id, amount, type)
                    VALUES (?, ?, ?, ?, ?)
                """, (voucher.id, item.particulars, item.ledger_id, item.amount, item.type))
                item.id = cursor.lastrowid
                item.voucher_id = voucher.id
        return voucher.id

    def _attach_items(self, vouchers: List[Voucher]) -> List[Voucher]:
        """为凭证加载分录"""
        if not vouchers:
            return vouchers
        by_id = {v.id: v for v in vouchers}
        placeholders = ", ".join("?" for _ in by_id)
        cursor = self.conn.cursor()
        cursor.execute(f"""
            SELECT id, voucher_id, particulars, ledger_id, amount, type
            FROM voucher_items
            WHERE voucher_id IN ({placeholders})
            ORDER BY id
        """, tuple(by_id))
        for row in cursor.fetchall():
            item = VoucherItem.from_row(row)
            by_id[item.voucher_id].items.append(item)
        return vouchers

    def get_all_vouchers(self) -> List[Voucher]:
        """获取所有凭证，按日期倒序"""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {VOUCHER_COLUMNS} FROM vouchers ORDER BY date DESC, created_at DESC")
        return self._attach_items([Voucher.from_row(row) for row in cursor.fetchall()])

    def get_vouchers_by_type(self, voucher_type: str) -> List[Voucher]:
        """根据类型获取凭证"""
        cursor = self.conn.cursor()
        cursor.execute(f"""
            SELECT {VOUCHER_COLUMNS} FROM vouchers
            WHERE type = ?
            ORDER BY date DESC, created_at DESC
        """, (voucher_type,))
        return self._attach_items([Voucher.from_row(row) for row in cursor.fetchall()])

    def get_vouchers_by_date_range(self, start_date: str, end_date: str) -> List[Voucher]:
        """根据日期范围获取凭证"""
        cursor = self.conn.cursor()
        cursor.execute(f"""
            SELECT {VOUCHER_COLUMNS} FROM vouchers
            WHERE date >= ? AND date <= ?
            ORDER BY date DESC, created_at DESC
        """, (start_date, end_date))
        return self._attach_items([Voucher.from_row(row) for row in cursor.fetchall()])

    # ==================== Stock ====================

    def add_stock_item(self, item: StockItem) -> int:
        """新增存货"""
        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT INTO stock_items (name, unit, quantity, rate, stock_group)
            VALUES (?, ?, ?, ?, ?)
        """, (item.name, item.unit, item.quantity, item.rate, item.group))
        self.conn.commit()
        item.id = cursor.lastrowid
        return item.id

    def get_all_stock_items(self) -> List[StockItem]:
        """获取所有存货，按名称排序"""
        cursor = self.conn.cursor()
        cursor.execute("SELECT id, name, unit, quantity, rate, stock_group FROM stock_items ORDER BY name")
        return [StockItem.from_row(row) for row in cursor.fetchall()]

    # ==================== Company ====================

    def save_company(self, company: Company) -> None:
        """保存公司信息（只保留一行）"""
        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT OR REPLACE INTO company
                (id, name, address, gstin, pan, phone, email, financial_year_start, financial_year_end)
            VALUES (1, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            company.name,
            company.address,
            company.gstin,
            company.pan,
            company.phone,
            company.email,
            company.financial_year_start,
            company.financial_year_end
        ))
        self.conn.commit()

    def get_company(self) -> Optional[Company]:
        """获取公司信息"""
        cursor = self.conn.cursor()
        cursor.execute("""
            SELECT id, name, address, gstin, pan, phone, email, financial_year_start, financial_year_end
            FROM company WHERE id = 1
        """)
        row = cursor.fetchone()
        return Company.from_row(row) if row else None

    def close(self) -> None:
        """关闭数据库连接"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
