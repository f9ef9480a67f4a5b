from fastapi import FastAPI
from fastapi.testclient import TestClient

from cacheheaders import CacheUtil, Headers, Response
from cacheheaders.fastapi import cache


def create_client() -> TestClient:
    app = FastAPI()

    @app.get("/public")
    async def public(_: None = cache(max_age=300, public=True)) -> dict:
        return {"ok": True}

    @app.get("/private")
    async def private(_: None = cache(max_age=60, private=["Set-Cookie", "Authorization"])) -> dict:
        return {"ok": True}

    @app.get("/single")
    async def single(_: None = cache(private=["Set-Cookie"])) -> dict:
        return {"ok": True}

    @app.get("/nothing")
    async def nothing(_: None = cache()) -> dict:
        return {"ok": True}

    @app.get("/prevented")
    async def prevented(_: None = cache(no_cache=True, no_store=True, must_revalidate=True)) -> dict:
        return {"ok": True}

    return TestClient(app)


def test_cache_dependency() -> None:
    response = create_client().get("/public")

    assert response.headers["cache-control"] == "max-age=300, public"
    assert "date" in response.headers


def test_cache_dependency_with_field_names() -> None:
    response = create_client().get("/private")

    assert response.headers["cache-control"] == 'max-age=60, private="Set-Cookie, Authorization"'

    internal = Response(response.status_code, Headers(dict(response.headers)))
    assert CacheUtil().is_cacheable(internal) is False


def test_cache_dependency_without_directives() -> None:
    response = create_client().get("/nothing")

    assert "cache-control" not in response.headers
    assert "date" in response.headers


def test_cache_dependency_prevention() -> None:
    response = create_client().get("/prevented")

    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"


def test_cache_dependency_with_single_field_name() -> None:
    response = create_client().get("/single")

    assert response.headers["cache-control"] == 'private="Set-Cookie"'
