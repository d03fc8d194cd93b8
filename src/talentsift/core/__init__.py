# 配置、日志

from .config import (
    ranking_url,
    workflow_id,
    ticketing_url,
    ticketing_credentials,
    automation_url,
    automation_token,
    automation_concurrency,
    http_timeout,
    default_org_id,
)
from .log import get_logger

__all__ = [
    "ranking_url",
    "workflow_id",
    "ticketing_url",
    "ticketing_credentials",
    "automation_url",
    "automation_token",
    "automation_concurrency",
    "http_timeout",
    "default_org_id",
    "get_logger",
]
