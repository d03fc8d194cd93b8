"""投递策略抽象：把排序结果送往某个下游系统。"""
from abc import ABC, abstractmethod
from typing import Union

from talentsift.submission.schemas import DeliveryReport, DeliveryResult, RankedCandidate


class DeliveryStrategy(ABC):
    """投递策略接口。name 即路由使用的目的地标识。"""

    name: str = ""

    @abstractmethod
    async def deliver(self, candidates: list[RankedCandidate]) -> Union[DeliveryResult, DeliveryReport]:
        """
        投递全部候选人。
        整批策略返回 DeliveryResult（失败抛 DeliveryError）；逐条策略返回 DeliveryReport（从不抛）。
        """
        ...
