"""
工单系统（ServiceNow 类 Scripted REST）整批投递：全部候选人一次 POST，Basic 认证。
全有或全无：非 2xx 或传输失败即整批 DeliveryError，调用方应视为一条都未记录。
"""
from __future__ import annotations

import httpx

from talentsift.core.config import ticketing_credentials, ticketing_url
from talentsift.core.log import get_logger
from talentsift.submission.errors import DeliveryError
from talentsift.submission.schemas import DeliveryResult, RankedCandidate

from .base import DeliveryStrategy

log = get_logger(__name__)


class TicketingDelivery(DeliveryStrategy):
    """Bulk 策略：一次原子调用写入全部排序结果。"""

    name = "ticketing"

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ):
        self.http = http
        self.url = url or ticketing_url()
        if username is None or password is None:
            env_user, env_password = ticketing_credentials()
            username = env_user if username is None else username
            password = env_password if password is None else password
        self.auth = httpx.BasicAuth(username, password)

    async def deliver(self, candidates: list[RankedCandidate]) -> DeliveryResult:
        body = [c.model_dump(mode="json") for c in candidates]
        try:
            response = await self.http.post(
                self.url,
                json=body,
                auth=self.auth,
                headers={"Accept": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.error("ticketing delivery of %d candidates failed: %s", len(candidates), e)
            raise DeliveryError(
                f"Ticketing system unreachable: {type(e).__name__}",
                candidates=candidates,
            ) from e
        except (TypeError, ValueError) as e:
            log.error("ticketing batch of %d candidates is not encodable: %s", len(candidates), e)
            raise DeliveryError(
                f"Ticketing batch could not be encoded: {e}",
                candidates=candidates,
            ) from e

        if not response.is_success:
            log.error(
                "ticketing delivery of %d candidates rejected with %d",
                len(candidates),
                response.status_code,
            )
            raise DeliveryError(
                f"Ticketing system rejected the batch with status {response.status_code}",
                candidates=candidates,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        log.info("ticketing delivery recorded %d candidates", len(candidates))
        return DeliveryResult(
            destination=self.name,
            delivered=len(candidates),
            status_code=response.status_code,
            response=data,
        )
