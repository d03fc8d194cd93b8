"""
Payload Builder：职位元数据 + 简历附件 -> 排序服务的多部分载荷。纯数据组装，无网络 I/O。
"""
from __future__ import annotations

from typing import Any

from talentsift.core.config import workflow_id
from talentsift.core.log import get_logger

from .schemas import (
    RESUMES_FIELD,
    Attachment,
    JobPosting,
    PayloadBuildResult,
    SubmissionContext,
    TransportPayload,
)
from .validator import strip_html

log = get_logger(__name__)


def _resolve(item: Any) -> tuple[str, bytes, str] | None:
    """把一个附件解析成 (filename, content, content_type)；不是二进制内容的跳过。"""
    if isinstance(item, Attachment):
        return (item.filename or "resume", item.content, item.content_type)
    if isinstance(item, (bytes, bytearray)):
        return ("resume", bytes(item), "application/octet-stream")
    return None


def build_metadata(posting: JobPosting, context: SubmissionContext) -> dict[str, Any]:
    """data 部分的 JSON 元数据，键名与排序服务约定一致。"""
    return {
        "org_id": context.organization_id,
        "exe_name": (posting.required_skills or "").strip(),
        "workflow_id": workflow_id(),
        "job_description": strip_html(posting.description) or "No description",
    }


def build_payload(posting: JobPosting, context: SubmissionContext) -> PayloadBuildResult:
    """
    组装载荷：一个 data 部分 + 每个附件一个 resumes 部分。
    单个附件与附件列表处理方式相同；没有任何可解析为二进制的附件时返回 error，不抛异常。
    """
    files: list[tuple[str, tuple[str, bytes, str]]] = []
    for item in posting.attachments:
        resolved = _resolve(item)
        if resolved is None:
            log.debug("skip unresolvable attachment of type %s", type(item).__name__)
            continue
        files.append((RESUMES_FIELD, resolved))

    if not files:
        return PayloadBuildResult(error="No resume attachment could be read as a file")

    payload = TransportPayload(metadata=build_metadata(posting, context), files=files)
    return PayloadBuildResult(payload=payload)
