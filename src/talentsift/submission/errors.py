"""
提交编排的错误分类。

- ValidationError：输入不合法，不会发起任何网络调用
- UpstreamError：排序服务调用失败
- ContractViolation：排序服务返回结构不符合约定
- DeliveryError：整批投递失败（排序已成功，但一条都未记录）
- PartialDeliveryFailure：逐条投递中部分失败；非致命，仅作为值随报告返回
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schemas import DeliveryReport, RankedCandidate


class SubmissionError(Exception):
    """所有提交错误的基类，message 为可直接展示给调用方的说明。"""

    code = "submission_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class ValidationError(SubmissionError):
    code = "validation_error"

    def __init__(self, errors: dict[str, str], message: str = "Please fill in all required fields before submitting."):
        super().__init__(message)
        self.errors = dict(errors)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "errors": self.errors}


class UpstreamError(SubmissionError):
    code = "upstream_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "status_code": self.status_code}


class ContractViolation(SubmissionError):
    code = "contract_violation"

    def __init__(self, message: str = "unexpected ranking result shape"):
        super().__init__(message)


class DeliveryError(SubmissionError):
    """整批投递失败。candidates 为已成功排序但未能记录的结果，调用方需据此提示「排序成功、记录失败」。"""

    code = "delivery_error"

    def __init__(
        self,
        message: str,
        candidates: list["RankedCandidate"] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.candidates = list(candidates or [])
        self.status_code = status_code

    def to_detail(self) -> dict[str, Any]:
        return {
            **super().to_detail(),
            "ranking_succeeded": True,
            "status_code": self.status_code,
            "candidates": [c.model_dump(mode="json") for c in self.candidates],
        }


class PartialDeliveryFailure(SubmissionError):
    code = "partial_delivery_failure"

    def __init__(self, report: "DeliveryReport"):
        failed = report.failed
        super().__init__(
            f"{len(failed)} of {len(report.outcomes)} candidates failed to deliver"
        )
        self.report = report

    @property
    def failed_indexes(self) -> list[int]:
        return [o.index for o in self.report.failed]
