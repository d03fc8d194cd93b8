"""
职位校验：提交前确认必填项齐全；以及输入阶段的字段规整（经验年限、HTML 去标签）。
"""
from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Any

from .errors import ValidationError
from .schemas import JOB_TYPES, JobPosting, ValidationResult

# 块级标签后补一个空格，避免去标签后相邻段落的词粘连
_BLOCK_TAGS = {"p", "div", "br", "li"}

MIN_YEARS = 0
MAX_YEARS = 30


class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if tag == "br":
            self.parts.append(" ")

    def handle_endtag(self, tag: str) -> None:
        if tag in _BLOCK_TAGS:
            self.parts.append(" ")


def strip_html(html: str | None) -> str:
    """富文本职位描述 -> 纯文本：去标签、解码实体、合并空白。"""
    if not html:
        return ""
    parser = _TextExtractor()
    parser.feed(html)
    parser.close()
    return " ".join("".join(parser.parts).split())


def parse_years_of_experience(raw: Any) -> int | None:
    """
    输入阶段解析经验年限：空 -> None；仅数字且在 0–30 内 -> int；其它抛 ValidationError。
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError({"years_of_experience": "Years of experience must be a whole number"})
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            return None
        if not re.fullmatch(r"\d+", text):
            raise ValidationError({"years_of_experience": "Years of experience must be a whole number"})
        value = int(text)
    if not MIN_YEARS <= value <= MAX_YEARS:
        raise ValidationError(
            {"years_of_experience": f"Years of experience must be between {MIN_YEARS} and {MAX_YEARS}"}
        )
    return value


def validate(posting: JobPosting) -> ValidationResult:
    """逐项检查（收集全部问题，而非遇到第一个就返回）；无副作用。"""
    errors: dict[str, str] = {}
    if not (posting.title or "").strip():
        errors["title"] = "Job Title is required"
    job_type = (posting.job_type or "").strip().lower()
    if not job_type:
        errors["job_type"] = "Job Type is required"
    elif job_type not in JOB_TYPES:
        errors["job_type"] = f"Job Type must be one of: {', '.join(JOB_TYPES)}"
    if not strip_html(posting.description):
        errors["description"] = "Job description is required"
    if not posting.attachments:
        errors["attachments"] = "Resume file is required"
    return ValidationResult(errors=errors)
