"""
提交编排：校验 -> 组装载荷 -> 排序 -> 路由 -> 投递，严格按顺序逐段 await。

两个目的地的可靠性约定刻意不同：
- ticketing 整批失败抛 DeliveryError（排序结果随异常带回，调用方需提示「排序成功、记录失败」）；
- automation 逐条投递总能跑完，结果为 submitted，部分失败体现在 report / partial_failure 中。
每次提交相互独立，不去重、不重试。
"""
from __future__ import annotations

import httpx

from talentsift.core.log import get_logger

from .delivery import route
from .errors import ValidationError
from .payload import build_payload
from .ranking import RankingClient
from .schemas import DeliveryReport, JobPosting, SubmissionContext, SubmissionOutcome
from .validator import validate

log = get_logger(__name__)


async def submit_posting(
    posting: JobPosting,
    context: SubmissionContext,
    *,
    http: httpx.AsyncClient,
) -> SubmissionOutcome:
    """
    执行一次完整提交。
    抛出：ValidationError（未发起任何网络调用）、UpstreamError / ContractViolation（未投递）、
    DeliveryError（整批投递失败）。逐条投递的部分失败不抛，见 outcome.partial_failure。
    """
    result = validate(posting)
    if not result.valid:
        log.info("posting rejected: invalid fields %s", sorted(result.errors))
        raise ValidationError(result.errors)

    built = build_payload(posting, context)
    if not built.ok:
        log.info("posting rejected: %s", built.error)
        raise ValidationError({"attachments": built.error or "Resume file is required"})

    candidates = await RankingClient(http).submit(built.payload)

    strategy = route(context, http)
    if strategy is None:
        return SubmissionOutcome(
            status="completed_without_delivery",
            destination=context.destination,
            candidates=candidates,
        )

    delivered = await strategy.deliver(candidates)
    if isinstance(delivered, DeliveryReport):
        outcome = SubmissionOutcome(
            status="submitted",
            destination=strategy.name,
            candidates=candidates,
            report=delivered,
        )
        partial = outcome.partial_failure
        if partial is not None:
            log.warning("submission completed with partial delivery failure: %s", partial.message)
        return outcome

    return SubmissionOutcome(
        status="submitted",
        destination=strategy.name,
        candidates=candidates,
        delivery=delivered,
    )
