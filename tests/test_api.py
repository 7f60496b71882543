import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from repogen.db.session import getConnection
from repogen.main import app
from test_descriptor_reader import REPOSITORY_XML

@pytest.fixture
def client(databasePath):
    async def overrideConnection():
        engine = create_async_engine(f"sqlite+aiosqlite:///{databasePath}", poolclass=NullPool)
        try:
            async with engine.connect() as conn:
                yield conn
        finally:
            await engine.dispose()

    app.dependency_overrides[getConnection] = overrideConnection
    with TestClient(app) as testClient:
        yield testClient
    app.dependency_overrides.clear()

def test_root(client):
    assert client.get("/").status_code == 200

def test_config(client):
    response = client.get("/config")
    assert response.status_code == 200
    defaults = response.json()["default"]
    assert "author" in defaults
    assert defaults["unmapped-type-policy"] in ("preserve", "omit", "fail")

def test_list_tables(client):
    response = client.get("/v1/tables", params={"pattern": "ORD%"})
    assert response.status_code == 200
    assert sorted(t["name"] for t in response.json()) == ["ORDERS", "ORDER_ITEMS"]

def test_load_table(client):
    response = client.get("/v1/tables/ORDERS")
    assert response.status_code == 200
    body = response.json()
    assert body["table"]["name"] == "ORDERS"
    assert [c["name"] for c in body["columns"]] == ["ID", "SUB_ID", "ORDER_DATE", "TOTAL", "QUANTITY"]
    assert [pk["name"] for pk in body["primaryKeys"]] == ["ID", "SUB_ID"]

def test_missing_table_is_not_found(client):
    response = client.get("/v1/tables/MISSING/descriptor")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["type"] == "NoSuchTableException"
    assert error["code"] == 404

def test_descriptor(client):
    response = client.get("/v1/tables/ORDERS/descriptor", params={"author": "api-user"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<author>api-user</author>" in response.text
    assert 'id-column-names="ID,SUB_ID"' in response.text

def test_constants(client):
    response = client.get("/v1/tables/ORDER_ITEMS/constants", params={"package": "com.example"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("package com.example;\n")
    assert "public class OrderItemsMetaData" in response.text

def test_parse_descriptor(client):
    response = client.post("/v1/descriptors/parse", content=REPOSITORY_XML.encode("utf-8"),
                           headers={"content-type": "application/xml"})
    assert response.status_code == 200
    body = response.json()
    assert body["header"]["name"] == "OrderRepository"
    assert list(body["itemDescriptors"]) == ["order", "note", "customer"]
    assert body["defaultItemDescriptor"]["name"] == "customer"

def test_parse_default_item_descriptor(client):
    response = client.post("/v1/descriptors/parse/default", content=REPOSITORY_XML.encode("utf-8"))
    assert response.status_code == 200
    assert response.json()["name"] == "customer"

def test_parse_rejects_invalid_documents(client):
    response = client.post("/v1/descriptors/parse", content=b"<gsa-template><item-descriptor /></gsa-template>")
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "MetaModelException"

    response = client.post("/v1/descriptors/parse", content=b"   ")
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "ValidationException"

def test_parse_default_of_empty_repository(client):
    response = client.post("/v1/descriptors/parse/default", content=b"<gsa-template />")
    assert response.status_code == 400
