"""
提交编排的数据模型：职位（JobPosting）、排序结果（RankedCandidate）、提交上下文、
载荷与投递报告。逐条投递的每条结果只有 delivered / failed 两态，失败是数据而非异常。
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import PartialDeliveryFailure

# 职位类型枚举（与表单下拉选项一致）
JOB_TYPES = ("fulltime", "parttime", "contract", "freelance", "internship")

# 多部分载荷中简历文件共用的字段名
RESUMES_FIELD = "resumes"

SubmissionStatus = Literal["submitted", "completed_without_delivery"]


class Attachment(BaseModel):
    """一份简历附件：文件名 + 二进制内容。"""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="原始文件名")
    content: bytes = Field(..., description="文件二进制内容")
    content_type: str = Field("application/octet-stream", description="MIME 类型")


class JobPosting(BaseModel):
    """
    招聘方提交的职位。交给编排器后不可变（frozen）。
    字段按 UI 原样接收，是否可提交由 validator.validate 判定；
    years_of_experience 的 0–30 约束在输入阶段即生效。
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field("", description="职位名称")
    job_type: str = Field("", description="职位类型：fulltime | parttime | contract | freelance | internship")
    years_of_experience: Optional[int] = Field(None, ge=0, le=30, description="经验年限 0–30，可空")
    required_skills: str = Field("", description="关键技能，逗号分隔")
    description: str = Field("", description="职位描述（可含 HTML，提交前会去标签）")
    attachments: tuple[Any, ...] = Field(default_factory=tuple, description="一份或多份简历附件")

    @field_validator("attachments", mode="before")
    @classmethod
    def _normalize_attachments(cls, value: Any) -> tuple[Any, ...]:
        # 单个附件与列表一视同仁，调用方无需区分
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(v for v in value if v is not None)
        return (value,)

    @property
    def skills(self) -> list[str]:
        """required_skills 拆分后的技能列表（去空白、去空项）。"""
        return [s.strip() for s in (self.required_skills or "").split(",") if s.strip()]


class RankedCandidate(BaseModel):
    """排序服务返回的单个候选人；远端可能带额外字段，原样保留。"""
    model_config = ConfigDict(extra="allow", frozen=True)

    name: Optional[str] = None
    score: Optional[float] = Field(None, allow_inf_nan=False)
    email: Optional[str] = None
    phone: Optional[str] = None
    justification: Optional[str] = None

    @field_validator("name", "email", "phone", "justification", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        # 电话等字段远端可能给数字
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def to_wire(self) -> dict[str, Any]:
        """逐条投递用的单条 JSON 对象。"""
        return {
            "name": self.name,
            "score": self.score,
            "phone": self.phone,
            "email": self.email,
            "justification": self.justification,
        }


class SubmissionContext(BaseModel):
    """一次提交的上下文：目的地 + 组织 ID。显式传入编排器，不读全局状态。"""
    model_config = ConfigDict(frozen=True)

    destination: str = Field("", description="投递目的地标识：ticketing | automation；其它值不投递")
    organization_id: int = Field(1, description="组织 ID，缺省为 1")

    @classmethod
    def from_params(cls, destination: str | None = None, org_id: Any = None) -> "SubmissionContext":
        """由查询参数 / 会话值构建；org_id 缺失或非整数时用 TALENTSIFT_DEFAULT_ORG_ID（默认 1）。"""
        from talentsift.core.config import default_org_id

        try:
            org = int(org_id) if org_id not in (None, "") else default_org_id()
        except (TypeError, ValueError):
            org = default_org_id()
        return cls(destination=(destination or "").strip(), organization_id=org)


class ValidationResult(BaseModel):
    """校验结果：errors 为空即有效，否则为 字段名 -> 原因。"""
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class TransportPayload:
    """发往排序服务的多部分载荷：data（JSON 元数据）+ 每个附件一个 resumes 部分。"""
    metadata: dict[str, Any]
    files: list[tuple[str, tuple[str, bytes, str]]] = field(default_factory=list)

    def form_data(self) -> dict[str, str]:
        return {"data": json.dumps(self.metadata, ensure_ascii=False)}


@dataclass
class PayloadBuildResult:
    """Payload Builder 的返回：成功时 payload 非空，否则 error 说明原因（不抛异常）。"""
    payload: Optional[TransportPayload] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


class DeliveryResult(BaseModel):
    """整批投递（工单系统）结果：要么全部记录，要么抛 DeliveryError。"""
    destination: str = "ticketing"
    delivered: int = Field(0, description="本次整批记录的候选人数")
    status_code: int = Field(..., description="下游 HTTP 状态码")
    response: Any = Field(None, description="下游返回体（若为 JSON）")


class DeliveredItem(BaseModel):
    status: Literal["delivered"] = "delivered"
    index: int
    candidate: RankedCandidate
    status_code: int
    response: Any = None


class FailedItem(BaseModel):
    status: Literal["failed"] = "failed"
    index: int
    candidate: RankedCandidate
    reason: str
    status_code: Optional[int] = None


ItemOutcome = Annotated[Union[DeliveredItem, FailedItem], Field(discriminator="status")]


class DeliveryReport(BaseModel):
    """逐条投递报告：outcomes 与输入候选人顺序一一对应。"""
    destination: str = "automation"
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    @property
    def delivered(self) -> list[DeliveredItem]:
        return [o for o in self.outcomes if isinstance(o, DeliveredItem)]

    @property
    def failed(self) -> list[FailedItem]:
        return [o for o in self.outcomes if isinstance(o, FailedItem)]

    @property
    def all_delivered(self) -> bool:
        return not self.failed

    def as_error(self) -> PartialDeliveryFailure | None:
        """有失败项时返回 PartialDeliveryFailure（仅作值，核心不抛），否则 None。"""
        if self.all_delivered:
            return None
        return PartialDeliveryFailure(self)


class SubmissionOutcome(BaseModel):
    """
    一次提交的最终结果。
    - submitted：已投递（整批成功，或逐条投递跑完，不论单条成败）
    - completed_without_delivery：排序成功，但目的地未识别，未做任何投递
    """
    status: SubmissionStatus
    destination: str = ""
    candidates: list[RankedCandidate] = Field(default_factory=list)
    delivery: Optional[DeliveryResult] = None
    report: Optional[DeliveryReport] = None

    @property
    def partial_failure(self) -> PartialDeliveryFailure | None:
        return self.report.as_error() if self.report is not None else None
