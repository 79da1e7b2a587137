"""数据访问模块"""
from tallyboard.db.database import Database
from tallyboard.db.query import QueryResult, RecordRepository, run_query

__all__ = ["Database", "QueryResult", "RecordRepository", "run_query"]
