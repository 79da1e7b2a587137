"""
测试公共夹具

- Qt 使用 offscreen 平台，无需显示器
- 每个测试使用临时数据库文件
"""
import os
import sys
from datetime import date

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from tallyboard.db.database import Database
from tallyboard.models.ledger import Ledger
from tallyboard.models.stock_item import StockItem
from tallyboard.models.voucher import Voucher, VoucherItem

TODAY = date(2026, 10, 17)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "test_tallyboard.db"))
    yield database
    database.close()


@pytest.fixture
def seeded_db(db):
    """带有典型数据的数据库"""
    debtor = Ledger(name="Sharma Traders", group="sundry-debtors", current_balance=250_000)
    settled = Ledger(name="Gupta Stores", group="sundry-debtors", current_balance=0)
    creditor = Ledger(name="Mehta Suppliers", group="sundry-creditors", current_balance=180_000)
    cash = Ledger(name="Cash", group="cash-in-hand", current_balance=45_000)
    bank = Ledger(name="HDFC Bank", group="bank-accounts", opening_balance=500_000, current_balance=1_060_000)
    sales = Ledger(name="Sales", group="sales-accounts", current_balance=-1_700_000)
    for ledger in (debtor, settled, creditor, cash, bank, sales):
        db.add_ledger(ledger)

    vouchers = [
        Voucher(voucher_number="S-001", type="sales", date="2026-10-17", party_name=debtor.name,
                party_ledger_id=debtor.id, total_amount=120_000,
                items=[
                    VoucherItem(particulars=debtor.name, ledger_id=debtor.id, amount=120_000, type="debit"),
                    VoucherItem(particulars="Sales", ledger_id=sales.id, amount=120_000, type="credit"),
                ]),
        Voucher(voucher_number="S-002", type="sales", date="2026-10-02", party_name=settled.name,
                party_ledger_id=settled.id, total_amount=80_000),
        Voucher(voucher_number="S-003", type="sales", date="2026-09-12", party_name=debtor.name,
                party_ledger_id=debtor.id, total_amount=100_000),
        Voucher(voucher_number="P-001", type="purchase", date="2026-10-17", party_name=creditor.name,
                party_ledger_id=creditor.id, total_amount=90_000),
        Voucher(voucher_number="R-001", type="receipt", date="2026-10-05", party_name=settled.name,
                party_ledger_id=settled.id, total_amount=80_000),
    ]
    for voucher in vouchers:
        db.add_voucher(voucher)

    db.add_stock_item(StockItem(name="Steel Rod", unit="Kg", quantity=1200, rate=65, group="Raw Material"))
    db.add_stock_item(StockItem(name="Bolt M8", unit="Nos", quantity=5000, rate=2.5, group="Hardware"))
    return db
