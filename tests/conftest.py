"""
共享夹具：固定外呼地址与凭据（环境变量），以及按 URL 分发的 httpx.MockTransport 桩服务。
"""
from typing import Callable

import httpx
import pytest

from talentsift.submission import Attachment, JobPosting, RankedCandidate

RANKING_URL = "https://ranking.test/api/agentic-ai/workflow-exe"
TICKETING_URL = "https://ticketing.test/api/resumerankingapi/upload"
AUTOMATION_URL = "https://automation.test/webhook/candidates"

SAMPLE_RESULTS = [
    {"name": "Ada Lovelace", "score": 92, "email": "ada@example.com", "phone": "555-0101", "justification": "Strong React"},
    {"name": "Alan Turing", "score": 85, "email": "alan@example.com", "phone": 5550102, "justification": "Solid TypeScript"},
    {"name": "Grace Hopper", "score": 78, "email": "grace@example.com", "phone": "555-0103", "justification": "Good fundamentals"},
]


@pytest.fixture(autouse=True)
def _endpoints(monkeypatch):
    monkeypatch.setenv("TALENTSIFT_RANKING_URL", RANKING_URL)
    monkeypatch.setenv("TALENTSIFT_TICKETING_URL", TICKETING_URL)
    monkeypatch.setenv("TALENTSIFT_TICKETING_USER", "admin")
    monkeypatch.setenv("TALENTSIFT_TICKETING_PASSWORD", "s3cret")
    monkeypatch.setenv("TALENTSIFT_AUTOMATION_URL", AUTOMATION_URL)
    monkeypatch.setenv("TALENTSIFT_AUTOMATION_TOKEN", "automation-token")
    monkeypatch.delenv("TALENTSIFT_AUTOMATION_CONCURRENCY", raising=False)
    monkeypatch.delenv("TALENTSIFT_WORKFLOW_ID", raising=False)
    monkeypatch.delenv("TALENTSIFT_DEFAULT_ORG_ID", raising=False)


class StubServer:
    """按完整 URL 路由到处理函数，并记录所有收到的请求。"""

    ranking_url = RANKING_URL
    ticketing_url = TICKETING_URL
    automation_url = AUTOMATION_URL

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, url: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[url] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(str(request.url))
        if handler is None:
            return httpx.Response(404, json={"message": "no route"})
        return handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def calls(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == url]

    def rank(self, results=None) -> None:
        """排序服务返回成功：{"data": {"result": results}}，默认 SAMPLE_RESULTS。"""
        body = {"data": {"result": SAMPLE_RESULTS if results is None else results}}
        self.on(RANKING_URL, lambda request: httpx.Response(200, json=body))


@pytest.fixture
def stub() -> StubServer:
    return StubServer()


@pytest.fixture
def candidates() -> list[RankedCandidate]:
    return [RankedCandidate.model_validate(r) for r in SAMPLE_RESULTS]


@pytest.fixture
def make_posting():
    def _make(**overrides) -> JobPosting:
        fields = {
            "title": "Senior Frontend Developer",
            "job_type": "fulltime",
            "years_of_experience": 5,
            "required_skills": "React, TypeScript",
            "description": "<p>Build <b>great</b> UI</p><p>Own the design system</p>",
            "attachments": [Attachment(filename="ada.pdf", content=b"%PDF-ada", content_type="application/pdf")],
        }
        fields.update(overrides)
        return JobPosting(**fields)

    return _make


@pytest.fixture
def sample_results() -> list[dict]:
    return [dict(r) for r in SAMPLE_RESULTS]
