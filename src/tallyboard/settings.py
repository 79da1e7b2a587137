"""应用程序配置模块"""
import os
from pathlib import Path
from typing import Final, Dict

# ==================== 路径配置 ====================
BASE_DIR: Final = Path(__file__).resolve().parent.parent.parent
DATA_DIR: Final = Path(os.environ.get("TALLYBOARD_DATA_DIR", BASE_DIR / "data"))
DB_PATH: Final = Path(os.environ.get("TALLYBOARD_DB_PATH", DATA_DIR / "tallyboard.db"))

# ==================== 应用信息 ====================
APP_NAME: Final = "TallyBoard"
VERSION: Final = "0.3.0"

# ==================== 数据库配置 ====================
DB_SCHEMA_VERSION: Final = 2  # V2: 公司信息表

# ==================== 货币设置 ====================
CURRENCY_SYMBOL: Final = "₹"
CURRENCY_CODE: Final = "INR"

# ==================== 数量级缩写 ====================
CRORE: Final = 10_000_000
LAKH: Final = 100_000
THOUSAND: Final = 1_000

# 从大到小匹配，命中即止
MAGNITUDE_UNITS: Final = [
    (CRORE, "Cr"),
    (LAKH, "L"),
    (THOUSAND, "K"),
]

# ==================== 快捷键 ====================
# Alt+G 大小写问题的修正开关（默认保持原有行为）
FIX_ALT_G_CASE: Final = os.environ.get("TALLYBOARD_FIX_ALT_G", "").lower() in ("1", "true", "yes")

# ==================== 财年 ====================
FINANCIAL_YEAR_START_MONTH: Final = 4  # 4月1日 ~ 次年3月31日

# ==================== 首页 ====================
RECENT_VOUCHER_LIMIT: Final = 5

# ==================== 类型映射 ====================
LEDGER_GROUPS: Final[Dict[str, str]] = {
    "sundry-debtors": "Sundry Debtors",
    "sundry-creditors": "Sundry Creditors",
    "bank-accounts": "Bank Accounts",
    "cash-in-hand": "Cash-in-Hand",
    "sales-accounts": "Sales Accounts",
    "purchase-accounts": "Purchase Accounts",
    "direct-expenses": "Direct Expenses",
    "indirect-expenses": "Indirect Expenses",
    "direct-incomes": "Direct Incomes",
    "indirect-incomes": "Indirect Incomes",
    "fixed-assets": "Fixed Assets",
    "current-assets": "Current Assets",
    "current-liabilities": "Current Liabilities",
    "capital-account": "Capital Account",
}

VOUCHER_TYPES: Final[Dict[str, str]] = {
    "sales": "Sales",
    "purchase": "Purchase",
    "payment": "Payment",
    "receipt": "Receipt",
    "journal": "Journal",
    "contra": "Contra",
    "credit-note": "Credit Note",
    "debit-note": "Debit Note",
}

# 侧边栏 F4~F9 对应的凭证类型
FUNCTION_KEY_VOUCHERS: Final[Dict[str, str]] = {
    "F4": "contra",
    "F5": "payment",
    "F6": "receipt",
    "F7": "journal",
    "F8": "sales",
    "F9": "purchase",
}

# ==================== UI 显示默认值 ====================
DEFAULT_GROUP: Final = "Ungrouped"

