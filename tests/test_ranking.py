"""
排序服务客户端：成功解析 data.result；非 2xx -> UpstreamError；结构不符 -> ContractViolation。
"""
import json

import httpx
import pytest

from talentsift.submission import (
    Attachment,
    ContractViolation,
    RankingClient,
    SubmissionContext,
    UpstreamError,
    build_payload,
)


@pytest.fixture
def payload(make_posting):
    attachments = [
        Attachment(filename="ada.pdf", content=b"%PDF-ada", content_type="application/pdf"),
        Attachment(filename="alan.pdf", content=b"%PDF-alan", content_type="application/pdf"),
    ]
    return build_payload(make_posting(attachments=attachments), SubmissionContext(organization_id=4)).payload


@pytest.mark.asyncio
async def test_success_returns_typed_candidates(stub, payload):
    stub.rank()
    async with stub.client() as http:
        candidates = await RankingClient(http).submit(payload)

    assert [c.name for c in candidates] == ["Ada Lovelace", "Alan Turing", "Grace Hopper"]
    assert candidates[0].score == 92
    assert candidates[1].phone == "5550102"  # 数字电话转为字符串


@pytest.mark.asyncio
async def test_request_is_multipart_with_data_and_resumes(stub, payload):
    stub.rank()
    async with stub.client() as http:
        await RankingClient(http).submit(payload)

    [request] = stub.calls(stub.ranking_url)
    assert request.method == "POST"
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.content
    assert body.count(b'name="resumes"') == 2
    assert b'filename="ada.pdf"' in body and b'filename="alan.pdf"' in body
    assert b'name="data"' in body
    assert b'"org_id": 4' in body


@pytest.mark.asyncio
async def test_empty_result_is_valid(stub, payload):
    stub.rank([])
    async with stub.client() as http:
        assert await RankingClient(http).submit(payload) == []


@pytest.mark.asyncio
async def test_non_success_uses_remote_message(stub, payload):
    stub.on(stub.ranking_url, lambda r: httpx.Response(400, json={"message": "Invalid workflow"}))
    async with stub.client() as http:
        with pytest.raises(UpstreamError) as exc:
            await RankingClient(http).submit(payload)
    assert exc.value.message == "Invalid workflow"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_non_success_without_message_mentions_status(stub, payload):
    stub.on(stub.ranking_url, lambda r: httpx.Response(503, text="<html>Service Unavailable</html>"))
    async with stub.client() as http:
        with pytest.raises(UpstreamError) as exc:
            await RankingClient(http).submit(payload)
    assert exc.value.message == "Upload failed with status 503"


@pytest.mark.asyncio
async def test_transport_failure_is_upstream_error(stub, payload):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    stub.on(stub.ranking_url, boom)
    async with stub.client() as http:
        with pytest.raises(UpstreamError) as exc:
            await RankingClient(http).submit(payload)
    assert exc.value.status_code is None


@pytest.mark.parametrize("body", [
    {"data": {}},
    {"data": {"result": {"name": "Ada"}}},
    {"data": {"result": "Ada, Alan"}},
    {"data": None},
    {"result": []},
    [],
])
@pytest.mark.asyncio
async def test_unexpected_shape_is_contract_violation(stub, payload, body):
    stub.on(stub.ranking_url, lambda r: httpx.Response(200, json=body))
    async with stub.client() as http:
        with pytest.raises(ContractViolation) as exc:
            await RankingClient(http).submit(payload)
    assert "unexpected ranking result shape" in exc.value.message


@pytest.mark.asyncio
async def test_non_object_item_is_contract_violation(stub, payload):
    stub.rank([{"name": "Ada", "score": 90}, "Alan"])
    async with stub.client() as http:
        with pytest.raises(ContractViolation):
            await RankingClient(http).submit(payload)


@pytest.mark.asyncio
async def test_non_json_success_is_contract_violation(stub, payload):
    stub.on(stub.ranking_url, lambda r: httpx.Response(200, text="OK"))
    async with stub.client() as http:
        with pytest.raises(ContractViolation):
            await RankingClient(http).submit(payload)


@pytest.mark.asyncio
async def test_extra_fields_preserved(stub, payload):
    stub.rank([{"name": "Ada", "score": "88.5", "resume_id": "r-1"}])
    async with stub.client() as http:
        [candidate] = await RankingClient(http).submit(payload)
    assert candidate.score == 88.5
    assert candidate.model_dump()["resume_id"] == "r-1"
    assert json.loads(candidate.model_dump_json())["resume_id"] == "r-1"


@pytest.mark.parametrize("literal", [b"NaN", b"Infinity", b"-Infinity"])
@pytest.mark.asyncio
async def test_non_finite_score_is_contract_violation(stub, payload, literal):
    body = b'{"data": {"result": [{"name": "Ada", "score": ' + literal + b'}, {"name": "Alan", "score": 1}]}}'
    stub.on(
        stub.ranking_url,
        lambda r: httpx.Response(200, content=body, headers={"content-type": "application/json"}),
    )
    async with stub.client() as http:
        with pytest.raises(ContractViolation) as exc:
            await RankingClient(http).submit(payload)
    assert "item 0" in exc.value.message


@pytest.mark.asyncio
async def test_malformed_ranking_url_is_upstream_error(stub, payload):
    async with stub.client() as http:
        with pytest.raises(UpstreamError) as exc:
            await RankingClient(http, url="http://ranking.test:notaport/x").submit(payload)
    assert exc.value.status_code is None
    assert stub.requests == []
