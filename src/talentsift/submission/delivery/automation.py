"""
自动化流程（workflow-automation webhook）逐条投递：每个候选人一次独立的 Bearer 认证 POST。

失败隔离：单条失败（请求体无法编码、非 2xx、传输错误、返回体不是 JSON）只记为该条 FailedItem 并记录日志，
不中断其余候选人；本策略总能跑完并返回报告，从不向外抛异常。
并发为 1 时顺序投递；>1 时有界并发，报告仍按输入顺序排列。
"""
from __future__ import annotations

import asyncio

import httpx

from talentsift.core.config import automation_concurrency, automation_token, automation_url
from talentsift.core.log import get_logger
from talentsift.submission.schemas import (
    DeliveredItem,
    DeliveryReport,
    FailedItem,
    ItemOutcome,
    RankedCandidate,
)

from .base import DeliveryStrategy

log = get_logger(__name__)


class AutomationDelivery(DeliveryStrategy):
    """Per-Item 策略：尽力而为，报告逐条给出 delivered / failed。"""

    name = "automation"

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str | None = None,
        token: str | None = None,
        concurrency: int | None = None,
    ):
        self.http = http
        self.url = url or automation_url()
        self.token = automation_token() if token is None else token
        self.concurrency = max(1, concurrency if concurrency is not None else automation_concurrency())

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _failed(self, index: int, candidate: RankedCandidate, reason: str, status_code: int | None = None) -> FailedItem:
        log.warning(
            "automation delivery failed for candidate #%d (name=%r, email=%r): %s",
            index,
            candidate.name,
            candidate.email,
            reason,
        )
        return FailedItem(index=index, candidate=candidate, reason=reason, status_code=status_code)

    async def _deliver_one(self, index: int, candidate: RankedCandidate) -> ItemOutcome:
        if not self.url:
            return self._failed(index, candidate, "automation endpoint is not configured")
        try:
            response = await self.http.post(self.url, json=candidate.to_wire(), headers=self._headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failed(index, candidate, f"transport error: {type(e).__name__}: {e}")
        except (TypeError, ValueError) as e:
            # 请求体无法编码为 JSON（如 NaN 分数）
            return self._failed(index, candidate, f"payload not encodable: {e}")
        if not response.is_success:
            return self._failed(
                index,
                candidate,
                f"endpoint returned status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError:
            return self._failed(index, candidate, "malformed response: body is not JSON", response.status_code)
        return DeliveredItem(index=index, candidate=candidate, status_code=response.status_code, response=data)

    async def deliver(self, candidates: list[RankedCandidate]) -> DeliveryReport:
        if self.concurrency == 1:
            outcomes = [await self._deliver_one(i, c) for i, c in enumerate(candidates)]
        else:
            semaphore = asyncio.Semaphore(self.concurrency)

            async def bounded(i: int, c: RankedCandidate) -> ItemOutcome:
                async with semaphore:
                    return await self._deliver_one(i, c)

            # gather 保持输入顺序
            outcomes = list(await asyncio.gather(*(bounded(i, c) for i, c in enumerate(candidates))))

        report = DeliveryReport(destination=self.name, outcomes=outcomes)
        log.info(
            "automation delivery finished: %d delivered, %d failed",
            len(report.delivered),
            len(report.failed),
        )
        return report
