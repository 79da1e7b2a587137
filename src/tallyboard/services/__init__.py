"""业务服务模块"""
from tallyboard.services.dashboard_service import DashboardService

__all__ = ["DashboardService"]
