"""
邮件中继：把排序结果渲染成 HTML 摘要并通过 SMTP 发送。独立的下游通知，提交核心不依赖它。
"""
from __future__ import annotations

import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Any, Iterable

from talentsift.core.log import get_logger

log = get_logger(__name__)


class MailNotConfigured(RuntimeError):
    """缺少 SMTP_HOST / SMTP_USER / SMTP_PASSWORD。"""


def _field(result: Any, key: str) -> str:
    value = result.get(key) if isinstance(result, dict) else getattr(result, key, None)
    return escape("" if value is None else str(value))


def render_results_html(results: Iterable[Any]) -> str:
    """排序结果 -> HTML 列表：姓名、分数、邮箱、电话、理由（全部转义）。"""
    items = "".join(
        f"<li><b>{_field(r, 'name')}</b> - Score: {_field(r, 'score')}<br/>"
        f"Email: {_field(r, 'email')} | Phone: {_field(r, 'phone')}<br/>"
        f"Reason: {_field(r, 'justification')}</li>"
        for r in results
    )
    return f"<h2>Screening Results</h2><ul>{items}</ul>"


def _smtp_settings() -> dict[str, Any]:
    host = os.environ.get("SMTP_HOST", "").strip()
    user = os.environ.get("SMTP_USER", "").strip()
    password = os.environ.get("SMTP_PASSWORD", "").strip()
    if not all([host, user, password]):
        raise MailNotConfigured("SMTP not configured (set SMTP_HOST, SMTP_USER, SMTP_PASSWORD in .env)")
    try:
        port = int(os.environ.get("SMTP_PORT", "587").strip())
    except ValueError:
        port = 587
    from_addr = os.environ.get("FROM_EMAIL", "").strip() or user
    return {"host": host, "port": port, "user": user, "password": password, "from_addr": from_addr}


def send_results_email(to: str, subject: str, results: list[Any]) -> None:
    """发送结果邮件；未配置 SMTP 抛 MailNotConfigured，发送失败抛 smtplib.SMTPException / OSError。"""
    settings = _smtp_settings()
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f'"Talent Sift" <{settings["from_addr"]}>'
    msg["To"] = to
    msg.attach(MIMEText(render_results_html(results), "html", "utf-8"))

    with smtplib.SMTP(settings["host"], settings["port"]) as server:
        server.starttls()
        server.login(settings["user"], settings["password"])
        server.sendmail(settings["from_addr"], [to], msg.as_string())
    log.info("results email sent to %s (%d results)", to, len(results))
