#!/usr/bin/env python3
"""
用本地简历文件跑一次完整提交：校验 -> 排序服务 -> 按目的地投递 -> 打印结果。
用法: uv run python scripts/submit_posting.py --title "Frontend Developer" --job-type fulltime \
        --skills "React, TypeScript" --description "<p>Build UI</p>" --destination automation resume1.pdf resume2.pdf
排序/投递地址与凭据从 .env 读取（见 talentsift.core.config）。
"""
import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

import httpx

from talentsift.core.config import http_timeout
from talentsift.submission import (
    Attachment,
    DeliveryError,
    JobPosting,
    SubmissionContext,
    SubmissionError,
    ValidationError,
    parse_years_of_experience,
    submit_posting,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="提交职位 + 简历到排序服务并投递结果")
    parser.add_argument("resumes", nargs="+", type=Path, help="简历文件路径（可多个）")
    parser.add_argument("--title", required=True)
    parser.add_argument("--job-type", default="fulltime")
    parser.add_argument("--years", default=None, help="经验年限 0–30")
    parser.add_argument("--skills", default="")
    parser.add_argument("--description", required=True)
    parser.add_argument("--destination", default="", help="ticketing | automation；留空只排序不投递")
    parser.add_argument("--org-id", default=None)
    return parser.parse_args()


def _load_attachments(paths: list[Path]) -> list[Attachment]:
    attachments = []
    for path in paths:
        if not path.exists():
            print(f"文件不存在: {path}")
            sys.exit(1)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        attachments.append(Attachment(filename=path.name, content=path.read_bytes(), content_type=content_type))
    return attachments


async def _run(args: argparse.Namespace) -> int:
    try:
        years = parse_years_of_experience(args.years)
    except ValidationError as e:
        print(f"输入不合法: {e.errors}")
        return 1

    posting = JobPosting(
        title=args.title,
        job_type=args.job_type,
        years_of_experience=years,
        required_skills=args.skills,
        description=args.description,
        attachments=_load_attachments(args.resumes),
    )
    context = SubmissionContext.from_params(args.destination, args.org_id)

    async with httpx.AsyncClient(timeout=http_timeout()) as http:
        try:
            outcome = await submit_posting(posting, context, http=http)
        except ValidationError as e:
            print(f"输入不合法: {e.errors}")
            return 1
        except DeliveryError as e:
            print(f"排序成功，但写入工单系统失败: {e.message}")
            for c in e.candidates:
                print(f"  - {c.name} ({c.score})")
            return 2
        except SubmissionError as e:
            print(f"提交失败 [{e.code}]: {e.message}")
            return 1

    print(f"=== 状态: {outcome.status}（目的地: {outcome.destination or '-'}）===\n")
    for i, c in enumerate(outcome.candidates, 1):
        print(f"#{i} {c.name} | 分数: {c.score} | {c.email} | {c.phone}")
        print(f"    理由: {c.justification}")
    if outcome.report is not None:
        print(f"\n逐条投递: 成功 {len(outcome.report.delivered)}，失败 {len(outcome.report.failed)}")
        for item in outcome.report.failed:
            print(f"  失败 #{item.index + 1} {item.candidate.name}: {item.reason}")
    return 0


def main():
    sys.exit(asyncio.run(_run(_parse_args())))


if __name__ == "__main__":
    main()
