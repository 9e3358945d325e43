# test_categories.py

import pytest
from httpx import AsyncClient

from errors import ErrorCode


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "Tech"})
    assert response.status_code == 200
    category = response.json()["data"]
    assert category["name"] == "Tech"
    assert category["description"] == ""
    assert category["parent_id"] is None
    assert category["children"] == []

@pytest.mark.asyncio
async def test_create_category_zero_parent_is_root(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "Tech", "parent_id": 0})
    assert response.status_code == 200
    assert response.json()["data"]["parent_id"] is None

@pytest.mark.asyncio
async def test_create_category_with_parent(client: AsyncClient, add_sample_data):
    response = await client.post(
        "/category/createOneCategory",
        json={"name": "FastAPI", "description": "Web framework", "parent_id": 2},
    )
    assert response.status_code == 200
    category = response.json()["data"]
    assert category["parent_id"] == 2
    assert category["description"] == "Web framework"

@pytest.mark.asyncio
async def test_create_category_empty_name(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == ErrorCode.BAD_REQUEST
    assert body["errors"] == {"name": "name is required"}

@pytest.mark.asyncio
async def test_create_category_missing_parent(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "Tech", "parent_id": 7})
    assert response.status_code == 500
    assert response.json()["msg"] == "parent category 7 does not exist"

@pytest.mark.asyncio
async def test_create_category_bad_parent_type(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "Tech", "parent_id": "root"})
    assert response.status_code == 400
    body = response.json()
    assert body["msg"].startswith("parent_id:")
    assert body["errors"] is None

@pytest.mark.asyncio
async def test_create_category_null_description(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "Tech", "description": None})
    assert response.status_code == 200
    assert response.json()["data"]["description"] == ""

@pytest.mark.asyncio
async def test_create_category_parent_out_of_range(client: AsyncClient):
    response = await client.post("/category/createOneCategory", json={"name": "x", "parent_id": 2**64})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == ErrorCode.BAD_REQUEST
    assert body["msg"].startswith("parent_id:")

@pytest.mark.asyncio
async def test_get_one_category(client: AsyncClient, add_sample_data):
    response = await client.get("/category/getOneCategory?id=2")
    assert response.status_code == 200
    category = response.json()["data"]
    assert category["name"] == "python"
    assert category["parent_id"] == 1

    response = await client.get("/category/getOneCategory?id=99")
    assert response.status_code == 404
    assert response.json()["code"] == ErrorCode.NOT_FOUND

@pytest.mark.asyncio
async def test_get_category_tree(client: AsyncClient, add_sample_data):
    response = await client.get("/category/getCategoryTree")
    assert response.status_code == 200
    tree = response.json()["data"]
    assert [c["name"] for c in tree] == ["tech", "life"]
    assert [c["name"] for c in tree[0]["children"]] == ["python"]
    assert tree[0]["children"][0]["children"] == []
    assert tree[1]["children"] == []

@pytest.mark.asyncio
async def test_update_category(client: AsyncClient, add_sample_data):
    response = await client.post(
        "/category/updateOneCategory",
        json={"id": 3, "name": "lifestyle", "description": "Everyday things", "parent_id": 1},
    )
    assert response.status_code == 200
    category = response.json()["data"]
    assert category["name"] == "lifestyle"
    assert category["parent_id"] == 1

    response = await client.get("/category/getCategoryTree")
    tree = response.json()["data"]
    assert [c["name"] for c in tree] == ["tech"]
    assert [c["name"] for c in tree[0]["children"]] == ["python", "lifestyle"]

@pytest.mark.asyncio
async def test_update_category_rejects_cycles(client: AsyncClient, add_sample_data):
    response = await client.post("/category/updateOneCategory", json={"id": 1, "name": "tech", "parent_id": 1})
    assert response.status_code == 500
    assert response.json()["msg"] == "a category cannot be its own parent"

    response = await client.post("/category/updateOneCategory", json={"id": 1, "name": "tech", "parent_id": 2})
    assert response.status_code == 500
    assert response.json()["msg"] == "a category cannot be moved under its own descendant"

@pytest.mark.asyncio
async def test_update_category_reports_every_violation(client: AsyncClient):
    response = await client.post("/category/updateOneCategory", json={"parent_id": -1})
    assert response.status_code == 400
    assert response.json()["errors"] == {
        "id": "id is required",
        "name": "name is required",
        "parent_id": "parent_id must not be negative",
    }

@pytest.mark.asyncio
async def test_delete_category_removes_subtree(client: AsyncClient, add_sample_data):
    response = await client.post("/category/deleteOneCategory", json={"id": 1})
    assert response.status_code == 200
    assert response.json()["data"] == "category deleted"

    response = await client.get("/category/getCategoryTree")
    assert [c["name"] for c in response.json()["data"]] == ["life"]

    # Posts of deleted categories are kept, uncategorized
    response = await client.get("/post/getOnePost?id=1")
    assert response.status_code == 200
    assert response.json()["data"]["category_id"] is None

@pytest.mark.asyncio
async def test_delete_missing_category(client: AsyncClient):
    response = await client.post("/category/deleteOneCategory", json={"id": 5})
    assert response.status_code == 500
    assert response.json()["msg"] == "category 5 not found"
