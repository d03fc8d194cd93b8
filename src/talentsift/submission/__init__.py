"""
提交编排核心：职位 + 简历 -> AI 排序服务 -> 按目的地投递（整批 / 逐条）。
"""
from .errors import (
    ContractViolation,
    DeliveryError,
    PartialDeliveryFailure,
    SubmissionError,
    UpstreamError,
    ValidationError,
)
from .orchestrator import submit_posting
from .payload import build_payload
from .ranking import RankingClient
from .schemas import (
    JOB_TYPES,
    Attachment,
    DeliveryReport,
    DeliveryResult,
    JobPosting,
    RankedCandidate,
    SubmissionContext,
    SubmissionOutcome,
    ValidationResult,
)
from .validator import parse_years_of_experience, strip_html, validate

__all__ = [
    "JOB_TYPES",
    "Attachment",
    "ContractViolation",
    "DeliveryError",
    "DeliveryReport",
    "DeliveryResult",
    "JobPosting",
    "PartialDeliveryFailure",
    "RankedCandidate",
    "RankingClient",
    "SubmissionContext",
    "SubmissionError",
    "SubmissionOutcome",
    "UpstreamError",
    "ValidationError",
    "ValidationResult",
    "build_payload",
    "parse_years_of_experience",
    "strip_html",
    "submit_posting",
    "validate",
]
