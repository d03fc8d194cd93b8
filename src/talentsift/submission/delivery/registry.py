"""根据提交上下文中的目的地标识选择投递策略。"""
from __future__ import annotations

import httpx

from talentsift.core.log import get_logger
from talentsift.submission.schemas import SubmissionContext

from .automation import AutomationDelivery
from .base import DeliveryStrategy
from .ticketing import TicketingDelivery

log = get_logger(__name__)

DESTINATIONS = {
    TicketingDelivery.name: TicketingDelivery,
    AutomationDelivery.name: AutomationDelivery,
}


def route(context: SubmissionContext, http: httpx.AsyncClient) -> DeliveryStrategy | None:
    """
    目的地 -> 投递策略：ticketing（整批）| automation（逐条），大小写与首尾空白不敏感。
    空或未识别的目的地返回 None：排序仍算成功，但不做任何投递（completed_without_delivery）。
    """
    key = (context.destination or "").strip().lower()
    strategy_cls = DESTINATIONS.get(key)
    if strategy_cls is None:
        log.info("no delivery strategy for destination %r", context.destination)
        return None
    log.info("routing results to %s", key)
    return strategy_cls(http)
