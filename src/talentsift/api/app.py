"""
Talent Sift HTTP 入口。

POST /v1/submissions：表单字段 + 简历文件（一份或多份），目的地与组织 ID 走查询参数，
交给提交编排（校验 -> 排序 -> 路由 -> 投递）并返回统一 JSON。
POST /v1/notify/email：邮件中继，把排序结果发给招聘方；与提交流程互不依赖。
"""
import smtplib
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from talentsift.core.config import http_timeout
from talentsift.core.log import get_logger
from talentsift.notify import MailNotConfigured, send_results_email
from talentsift.submission import (
    Attachment,
    ContractViolation,
    DeliveryError,
    JobPosting,
    SubmissionContext,
    SubmissionOutcome,
    UpstreamError,
    ValidationError,
    parse_years_of_experience,
    submit_posting,
)

from .schemas import EmailRequest, SubmissionResponse

log = get_logger(__name__)

app = FastAPI(
    title="Talent Sift API",
    description="职位发布 + 简历 AI 排序 + 结果投递（工单系统整批 / 自动化流程逐条）",
    version="0.1.0",
)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """每次请求一个外呼客户端；测试中通过 dependency_overrides 替换为 MockTransport。"""
    async with httpx.AsyncClient(timeout=http_timeout()) as client:
        yield client


@app.get("/health")
def health():
    """探活。"""
    return {"status": "ok", "service": "talentsift"}


def _to_response(outcome: SubmissionOutcome) -> SubmissionResponse:
    candidates = [c.model_dump(mode="json") for c in outcome.candidates]
    if outcome.status == "completed_without_delivery":
        return SubmissionResponse(
            status=outcome.status,
            destination=outcome.destination,
            candidates=candidates,
            message="排序已完成，但未指定有效的投递目的地，结果未投递",
        )
    if outcome.report is not None:
        report = outcome.report
        partial = outcome.partial_failure
        return SubmissionResponse(
            status=outcome.status,
            destination=outcome.destination,
            candidates=candidates,
            delivered=len(report.delivered),
            failed=len(report.failed),
            report=[o.model_dump(mode="json") for o in report.outcomes],
            message=partial.message if partial else "已提交，全部候选人投递成功",
        )
    delivered = outcome.delivery.delivered if outcome.delivery else 0
    return SubmissionResponse(
        status=outcome.status,
        destination=outcome.destination,
        candidates=candidates,
        delivered=delivered,
        message="已提交，排序结果已整批写入工单系统",
    )


@app.post("/v1/submissions", response_model=SubmissionResponse)
async def create_submission(
    title: str = Form("", description="职位名称"),
    job_type: str = Form("", description="fulltime | parttime | contract | freelance | internship"),
    years_of_experience: str | None = Form(None, description="经验年限 0–30，可空"),
    required_skills: str = Form("", description="关键技能，逗号分隔"),
    description: str = Form("", description="职位描述（可含 HTML）"),
    resumes: list[UploadFile] | None = File(None, description="简历文件，一份或多份"),
    destination: str | None = Query(None, description="ticketing | automation；其它值只排序不投递"),
    org_id: str | None = Query(None, description="组织 ID，缺省为 1"),
    skills: str | None = Query(None, description="预填关键技能；表单 required_skills 为空时使用"),
    job: str | None = Query(None, description="预填职位描述；表单 description 为空时使用"),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    """
    一次完整提交。错误映射：输入不合法 422；排序服务失败或返回结构不符 502；
    整批投递失败 502（detail.ranking_succeeded=true，并带回排序结果）。
    """
    try:
        years = parse_years_of_experience(years_of_experience)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())

    attachments = []
    for upload in resumes or []:
        content = await upload.read()
        attachments.append(
            Attachment(
                filename=upload.filename or "resume",
                content=content,
                content_type=upload.content_type or "application/octet-stream",
            )
        )

    posting = JobPosting(
        title=title,
        job_type=job_type,
        years_of_experience=years,
        required_skills=required_skills or skills or "",
        description=description or job or "",
        attachments=attachments,
    )
    context = SubmissionContext.from_params(destination, org_id)

    try:
        outcome = await submit_posting(posting, context, http=http)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
    except (UpstreamError, ContractViolation, DeliveryError) as e:
        raise HTTPException(status_code=502, detail=e.to_detail())
    return _to_response(outcome)


@app.post("/v1/notify/email")
def notify_email(body: EmailRequest):
    """邮件中继：渲染排序结果 HTML 摘要并通过 SMTP 发送。"""
    try:
        send_results_email(body.to, body.subject, body.results)
    except MailNotConfigured as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (smtplib.SMTPException, OSError) as e:
        log.error("results email to %s failed: %s", body.to, e)
        return JSONResponse(status_code=500, content={"error": "Email send failed"})
    return {"success": True}
