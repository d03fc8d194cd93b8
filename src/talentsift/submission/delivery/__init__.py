"""
投递策略：排序结果的下游去向。
- ticketing：工单系统，整批原子写入（Basic 认证），失败即整批 DeliveryError。
- automation：自动化流程 webhook，逐条投递（Bearer 认证），单条失败不影响其余。
"""
from .automation import AutomationDelivery
from .base import DeliveryStrategy
from .registry import DESTINATIONS, route
from .ticketing import TicketingDelivery

__all__ = ["AutomationDelivery", "DeliveryStrategy", "DESTINATIONS", "TicketingDelivery", "route"]
