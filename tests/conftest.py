import asyncio

import pytest
from aiohttp import web

from moddata.models import ServiceConfig


SODIUM_VERSIONS = [
    {
        "id": "sod-2",
        "version_number": "0.5.3",
        "game_versions": ["1.20.1", "1.20"],
        "loaders": ["fabric", "Quilt"],
        "files": [
            {
                "url": "https://cdn.modrinth.com/data/sodium-0.5.3.jar",
                "filename": "sodium-0.5.3.jar",
                "primary": True,
                "size": 1024,
                "hashes": {"sha1": "abc"},
            }
        ],
    },
    {
        "id": "sod-1",
        "version_number": "0.4.10",
        "game_versions": ["1.19.4"],
        "loaders": ["fabric"],
        "files": [
            {
                "url": "https://cdn.modrinth.com/data/sodium-0.4.10.jar",
                "filename": "sodium-0.4.10.jar",
            }
        ],
    },
]

LITHIUM_VERSIONS = [
    {
        "id": "lit-1",
        "version_number": "0.11.2",
        "game_versions": ["1.20.1"],
        "loaders": ["NeoForge"],
        "files": [
            {"url": "https://cdn.modrinth.com/data/lithium.jar"},
            {"url": None, "filename": "missing.jar"},
        ],
    },
    {
        "id": "lit-0",
        "version_number": "0.11.1",
        "game_versions": ["1.20"],
        "loaders": [],
        "files": [{"url": "https://cdn.modrinth.com/data/lithium-old.jar"}],
    },
]

VERSIONS = {"sodium": SODIUM_VERSIONS, "lithium": LITHIUM_VERSIONS}

MOD_LIST = [
    {"slug": "lithium", "post_id": 12, "type": "mod"},
    {"slug": "does-not-exist", "post_id": 13},
    {"slug": "sodium", "post_id": "sodium-post", "type": ""},
]


USER_AGENTS = web.AppKey("user_agents", list)


def make_upstream_app(
    mod_list=None, versions=None, list_status=200, raw_lists=None
) -> web.Application:
    """模拟 GitHub raw 与 Modrinth API，并记录收到的 User-Agent"""
    mod_list = MOD_LIST if mod_list is None else mod_list
    versions = VERSIONS if versions is None else versions
    raw_lists = raw_lists or {}

    @web.middleware
    async def record_user_agent(request, handler):
        request.app[USER_AGENTS].append(request.headers.get("User-Agent"))
        return await handler(request)

    async def slug_list(request):
        if list_status != 200:
            return web.Response(status=list_status, text="oops")
        return web.json_response(mod_list)

    async def raw_list(request):
        name = request.match_info["name"]
        if name not in raw_lists:
            return web.Response(status=404)
        return web.Response(text=raw_lists[name])

    async def project_versions(request):
        slug = request.match_info["slug"]
        if slug == "broken":
            return web.Response(text="<html>", content_type="application/json")
        if slug == "flaky":
            return web.Response(status=503)
        if slug == "slow":
            await asyncio.sleep(1)
        if slug not in versions:
            return web.json_response({"error": "not_found"}, status=404)
        return web.json_response(versions[slug])

    app = web.Application(middlewares=[record_user_agent])
    app[USER_AGENTS] = []
    app.router.add_get("/modrinth-slugs.json", slug_list)
    app.router.add_get("/lists/{name}", raw_list)
    app.router.add_get("/v2/project/{slug}/version", project_versions)
    return app


@pytest.fixture
def upstream(aiohttp_server):
    async def factory(**kwargs):
        return await aiohttp_server(make_upstream_app(**kwargs))

    return factory


def config_for(server, path="/modrinth-slugs.json", **kwargs) -> ServiceConfig:
    return ServiceConfig(
        slug_list_url=str(server.make_url(path)),
        api_base_url=str(server.make_url("/v2")),
        **kwargs,
    )


@pytest.fixture
def make_config():
    return config_for


EXPECTED_RECORDS = [
    {
        "PostID": 12,
        "Platform": "java",
        "Version": "1.20.1",
        "Loader": "neoforge",
        "Link": "https://cdn.modrinth.com/data/lithium.jar",
        "Type": "mod",
    },
    {
        "PostID": "sodium-post",
        "Platform": "java",
        "Version": "1.20.1, 1.20",
        "Loader": "fabric",
        "Link": "https://cdn.modrinth.com/data/sodium-0.5.3.jar",
        "Type": "mod",
    },
    {
        "PostID": "sodium-post",
        "Platform": "java",
        "Version": "1.20.1, 1.20",
        "Loader": "quilt",
        "Link": "https://cdn.modrinth.com/data/sodium-0.5.3.jar",
        "Type": "mod",
    },
    {
        "PostID": "sodium-post",
        "Platform": "java",
        "Version": "1.19.4",
        "Loader": "fabric",
        "Link": "https://cdn.modrinth.com/data/sodium-0.4.10.jar",
        "Type": "mod",
    },
]


@pytest.fixture
def expected_records():
    return [dict(record) for record in EXPECTED_RECORDS]


@pytest.fixture
def user_agents_of():
    def read(server):
        return server.app[USER_AGENTS]

    return read
