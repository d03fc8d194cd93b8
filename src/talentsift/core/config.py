"""
配置：从环境变量读取，供提交编排（排序服务、投递目的地）与邮件中继使用。
"""
import os
from pathlib import Path

# 可选加载 .env（若存在）：先项目根（与 pyproject.toml 同层），再当前工作目录
_env_paths = [
    Path(__file__).resolve().parents[3] / ".env",  # src/talentsift/core -> 项目根
    Path.cwd() / ".env",
]
for _p in _env_paths:
    if _p.exists():
        from dotenv import load_dotenv
        load_dotenv(_p)
        break

DEFAULT_RANKING_URL = "https://agentic-ai.co.in/api/agentic-ai/workflow-exe"
DEFAULT_TICKETING_URL = "https://dev187243.service-now.com/api/1763965/resumerankingapi/upload"
DEFAULT_WORKFLOW_ID = "resume_ranker"


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def ranking_url() -> str:
    """AI 排序服务（workflow-exe）地址。"""
    return (os.getenv("TALENTSIFT_RANKING_URL") or DEFAULT_RANKING_URL).strip()


def workflow_id() -> str:
    """排序服务侧的固定工作流标识，写入 data 元数据的 workflow_id。"""
    return (os.getenv("TALENTSIFT_WORKFLOW_ID") or DEFAULT_WORKFLOW_ID).strip()


def ticketing_url() -> str:
    return (os.getenv("TALENTSIFT_TICKETING_URL") or DEFAULT_TICKETING_URL).strip()


def ticketing_credentials() -> tuple[str, str]:
    """工单系统 Basic 认证 (user, password)；不在代码中硬编码密码。"""
    return (
        os.getenv("TALENTSIFT_TICKETING_USER", "").strip(),
        os.getenv("TALENTSIFT_TICKETING_PASSWORD", "").strip(),
    )


def automation_url() -> str:
    return os.getenv("TALENTSIFT_AUTOMATION_URL", "").strip()


def automation_token() -> str:
    return os.getenv("TALENTSIFT_AUTOMATION_TOKEN", "").strip()


def automation_concurrency() -> int:
    """
    逐条投递的并发上限。1 = 顺序投递（默认，与原流程一致）；>1 为有界并发，
    报告顺序仍与输入顺序一致。
    """
    return max(1, _int_env("TALENTSIFT_AUTOMATION_CONCURRENCY", 1))


def http_timeout() -> float:
    """单次外呼超时（秒）。排序调用可能很慢，且核心不支持取消，默认给足 120 秒。"""
    raw = os.getenv("TALENTSIFT_HTTP_TIMEOUT", "").strip()
    try:
        return float(raw) if raw else 120.0
    except ValueError:
        return 120.0


def default_org_id() -> int:
    return _int_env("TALENTSIFT_DEFAULT_ORG_ID", 1)
