"""
排序服务客户端：一次外呼把职位 + 简历发给 AI 排序工作流，返回候选人列表。

返回体约定：{"data": {"result": [ {name, score, email, phone, justification}, ... ]}}。
result 缺失或不是数组时抛 ContractViolation，不返回空列表。
本层不做重试：失败需由调用方重新发起整次提交。
"""
from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from talentsift.core.config import ranking_url
from talentsift.core.log import get_logger

from .errors import ContractViolation, UpstreamError
from .schemas import RankedCandidate, TransportPayload

log = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """优先用远端返回的 message，否则给出带状态码的通用说明。"""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return f"Upload failed with status {response.status_code}"


def parse_ranking_body(body: Any) -> list[RankedCandidate]:
    """从成功响应体中取出 data.result 并转为 RankedCandidate 列表。"""
    data = body.get("data") if isinstance(body, dict) else None
    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, list):
        raise ContractViolation()
    candidates: list[RankedCandidate] = []
    for i, item in enumerate(result):
        if not isinstance(item, dict):
            raise ContractViolation(f"unexpected ranking result shape: item {i} is not an object")
        try:
            candidates.append(RankedCandidate.model_validate(item))
        except PydanticValidationError as e:
            raise ContractViolation(f"unexpected ranking result shape: item {i}: {e.errors()[0]['msg']}")
    return candidates


class RankingClient:
    """对排序服务的单次调用封装；http 由调用方提供（便于复用连接与测试替换）。"""

    def __init__(self, http: httpx.AsyncClient, url: str | None = None):
        self.http = http
        self.url = url or ranking_url()

    async def submit(self, payload: TransportPayload) -> list[RankedCandidate]:
        log.info(
            "ranking request: org_id=%s resumes=%d",
            payload.metadata.get("org_id"),
            len(payload.files),
        )
        try:
            response = await self.http.post(self.url, data=payload.form_data(), files=payload.files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.error("ranking request failed: %s", e)
            raise UpstreamError(f"Ranking service unreachable: {type(e).__name__}") from e

        if not response.is_success:
            message = _error_message(response)
            log.error("ranking service returned %d: %s", response.status_code, message)
            raise UpstreamError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise ContractViolation("unexpected ranking result shape: response is not JSON") from e

        candidates = parse_ranking_body(body)
        log.info("ranking returned %d candidates", len(candidates))
        return candidates
