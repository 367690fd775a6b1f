"""End-to-end tests for the generic resource and audit log endpoints."""

import re
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from content_admin.main import app

WIRE_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


@pytest_asyncio.fixture
async def client():
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test/api/v1") as client:
            yield client


async def _flush_audit() -> None:
    await app.state.context.audit_writer.flush()


def _unique(prefix: str) -> str:
    return f"{prefix} {uuid.uuid4().hex[:8]}"


@pytest.mark.asyncio
async def test_save_detail_and_page(client: AsyncClient):
    name = _unique("Welcome")
    response = await client.post("/sound/save", json={"name": name, "genderCode": "FEMALE"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["errCode"] is None
    sound_id = body["data"]["id"]

    detail = (await client.get(f"/sound/detail/{sound_id}")).json()["data"]
    assert detail["name"] == name
    assert detail["status"] == "DRAFT"
    assert WIRE_DATETIME.match(detail["createTime"])
    assert "isDeleted" not in detail

    page = (await client.get("/sound/page", params={"keywords": str(sound_id)})).json()["data"]
    assert [row["id"] for row in page["data"]] == [sound_id]
    assert page["total"] == 1
    assert page["pageIndex"] == 1
    assert page["pageSize"] == 10
    assert page["totalPages"] == 1


@pytest.mark.asyncio
async def test_update_is_audited_with_operator(client: AsyncClient):
    sound_id = (await client.post("/sound/save", json={"name": _unique("Intro")})).json()["data"]["id"]

    response = await client.post(
        "/sound/save",
        json={"id": sound_id, "name": "Intro v2"},
        headers={"X-User-Id": "editor@example.com"},
    )
    assert response.status_code == 200
    await _flush_audit()

    logs = (
        await client.get(
            "/opLogs/page",
            params={"bizType": "biz-sound", "operationTypeList": "UPDATE", "keywords": "Intro v2"},
        )
    ).json()["data"]
    entries = [row for row in logs["data"] if row["dataId"] == sound_id]
    assert len(entries) == 1
    entry = entries[0]
    assert entry["operationUser"] == "editor@example.com"
    assert entry["dataAfter"]["name"] == "Intro v2"
    assert entry["dataBefore"]["name"].startswith("Intro")
    assert WIRE_DATETIME.match(entry["operationTime"])

    detail = (await client.get(f"/opLogs/detail/{entry['id']}")).json()["data"]
    assert detail["dataId"] == sound_id


@pytest.mark.asyncio
async def test_bulk_lifecycle_endpoints(client: AsyncClient):
    ids = [
        (await client.post("/music/save", json={"name": _unique("Track")})).json()["data"]["id"]
        for _ in range(3)
    ]

    enabled = await client.post("/music/enable", json={"idList": ids})
    assert enabled.json()["data"] == {"updatedCount": 3}

    disabled = await client.post("/music/disable", json={"idList": [ids[0], 999999]})
    assert disabled.json()["data"] == {"updatedCount": 1}

    deleted = await client.post("/music/del", json={"idList": ids[1:]})
    assert deleted.json()["data"] == {"deletedCount": 2}

    again = await client.post("/music/del", json={"idList": ids[1:]})
    assert again.json()["data"] == {"deletedCount": 0}

    missing = await client.get(f"/music/detail/{ids[1]}")
    assert missing.status_code == 404
    assert missing.json()["errCode"] == "RECORD_NOT_FOUND"

    await _flush_audit()
    logs = (
        await client.get("/opLogs/page", params={"bizType": "biz_music", "operationTypeList": "ENABLE", "pageSize": 100})
    ).json()["data"]
    enable_ids = {row["dataId"] for row in logs["data"] if row["dataId"] in ids}
    assert enable_ids == set(ids)


@pytest.mark.asyncio
async def test_category_list_is_flat_and_sortable(client: AsyncClient):
    first = (await client.post("/category/save", json={"name": _unique("Yoga")})).json()["data"]["id"]
    second = (await client.post("/category/save", json={"name": _unique("HIIT")})).json()["data"]["id"]

    sorted_response = await client.post("/category/sort", json={"idList": [second, first]})
    assert sorted_response.json()["data"] == {"updatedCount": 2}

    body = (await client.get("/category/list", params={"orderBy": "id", "orderDirection": "desc"})).json()
    assert isinstance(body["data"], list)
    ours = [row["id"] for row in body["data"] if row["id"] in (first, second)]
    assert ours == [second, first]


@pytest.mark.asyncio
async def test_validation_failure_envelope(client: AsyncClient):
    response = await client.post("/sound/save", json={"name": "Half done", "status": "ENABLED"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errCode"] == "INVALID_PARAMETERS"
    assert {error["field"] for error in body["data"]} == {"genderCode", "usageCode", "translation"}


@pytest.mark.asyncio
async def test_invalid_id_list(client: AsyncClient):
    bad = await client.post("/music/enable", json={"idList": [1, -2]})
    assert bad.status_code == 400
    assert bad.json()["errCode"] == "INVALID_ID_LIST"

    missing = await client.post("/music/enable", json={})
    assert missing.status_code == 400
    assert missing.json()["errCode"] == "INVALID_PARAMETERS"


@pytest.mark.asyncio
async def test_unknown_resource(client: AsyncClient):
    response = await client.get("/spaceship/page")

    assert response.status_code == 404
    assert response.json()["errCode"] == "UNKNOWN_RESOURCE"


@pytest.mark.asyncio
async def test_audit_log_is_read_only_over_http(client: AsyncClient):
    response = await client.post("/opLogs/del", json={"idList": [1]})

    assert response.status_code == 400
    assert response.json()["errCode"] == "INVALID_PARAMETERS"


@pytest.mark.asyncio
async def test_oversized_ids_are_client_errors(client: AsyncClient):
    huge = "9" * 25

    page = await client.get("/sound/page", params={"keywords": huge})
    assert page.status_code == 200
    assert page.json()["data"]["total"] == 0

    detail = await client.get(f"/sound/detail/{huge}")
    assert detail.status_code == 404
    assert detail.json()["errCode"] == "RECORD_NOT_FOUND"

    bulk = await client.post("/sound/enable", json={"idList": [int(huge)]})
    assert bulk.status_code == 400
    assert bulk.json()["errCode"] == "INVALID_ID_LIST"
