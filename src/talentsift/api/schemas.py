"""
HTTP 接口的请求与响应模型。
"""
from pydantic import BaseModel, Field
from typing import Any, Optional


class SubmissionResponse(BaseModel):
    """POST /v1/submissions 响应。"""
    status: str = Field(..., description="submitted | completed_without_delivery")
    destination: str = Field("", description="实际使用的投递目的地")
    candidates: list[dict[str, Any]] = Field(default_factory=list, description="排序服务返回的候选人（按服务给出的顺序）")
    delivered: int = Field(0, description="已投递的候选人数")
    failed: int = Field(0, description="逐条投递中失败的候选人数")
    report: Optional[list[dict[str, Any]]] = Field(None, description="逐条投递报告（仅 automation）")
    message: Optional[str] = Field(None, description="提示信息")


class EmailRequest(BaseModel):
    """POST /v1/notify/email 请求：把排序结果发给指定邮箱。"""
    to: str = Field(..., description="收件人")
    subject: str = Field(..., description="邮件主题")
    results: list[dict[str, Any]] = Field(default_factory=list, description="排序结果（name、score、email、phone、justification）")
