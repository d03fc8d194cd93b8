# 下游通知（邮件中继）

from .mail import MailNotConfigured, render_results_html, send_results_email

__all__ = ["MailNotConfigured", "render_results_html", "send_results_email"]
