"""Integration tests for Groups, Posts and Names APIs."""

from collections.abc import Callable

import pytest
from httpx import AsyncClient

from domain.address import Address
from domain.constants import Namespace
from domain.entities.name_record import name_record_address
from domain.entities.post import post_address
from tests.helpers import make_seed

Headers = Callable[[Address], dict[str, str]]


@pytest.fixture
async def alice(
    api_client: AsyncClient, auth_headers_for: Headers, alice_key: Address
) -> dict:
    response = await api_client.post(
        "/api/v1/profiles",
        json={"seed": make_seed("alice").hex(), "username": "alice"},
        headers=auth_headers_for(alice_key),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def blog(
    api_client: AsyncClient, auth_headers_for: Headers, alice_key: Address, alice: dict
) -> dict:
    response = await api_client.post(
        "/api/v1/groups",
        json={"profile": alice["address"], "seed": make_seed("blog").hex(), "name": "blog"},
        headers=auth_headers_for(alice_key),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _post(
    api_client: AsyncClient, path: str, author: dict, uri: str, headers: dict[str, str]
):
    return await api_client.post(
        path, json={"author": author["address"], "metadata_uri": uri}, headers=headers
    )


class TestGroups:
    @pytest.mark.asyncio
    async def test_create(self, blog: dict, alice: dict) -> None:
        assert blog["authority"] == alice["address"]
        assert blog["post_count"] == 0
        assert blog["name"] == "blog"

    @pytest.mark.asyncio
    async def test_get(self, api_client: AsyncClient, blog: dict) -> None:
        response = await api_client.get(f"/api/v1/groups/{blog['address']}")

        assert response.status_code == 200
        assert response.json()["data"] == blog

    @pytest.mark.asyncio
    async def test_get_wrong_kind(self, api_client: AsyncClient, alice: dict) -> None:
        response = await api_client.get(f"/api/v1/groups/{alice['address']}")

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ACCOUNT"

    @pytest.mark.asyncio
    async def test_name_taken(
        self,
        api_client: AsyncClient,
        auth_headers_for: Headers,
        alice_key: Address,
        alice: dict,
        blog: dict,
    ) -> None:
        response = await api_client.post(
            "/api/v1/groups",
            json={"profile": alice["address"], "seed": make_seed("other").hex(), "name": "blog"},
            headers=auth_headers_for(alice_key),
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "HANDLE_TAKEN"

    @pytest.mark.asyncio
    async def test_other_key_is_forbidden(
        self,
        api_client: AsyncClient,
        auth_headers_for: Headers,
        bob_key: Address,
        alice: dict,
    ) -> None:
        response = await api_client.post(
            "/api/v1/groups",
            json={"profile": alice["address"], "seed": make_seed("x").hex(), "name": "x"},
            headers=auth_headers_for(bob_key),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_resolve_name(self, api_client: AsyncClient, blog: dict, alice: dict) -> None:
        response = await api_client.get("/api/v1/names/post_group/blog")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["address"] == name_record_address(Namespace.POST_GROUP, "blog").hex()
        assert data["target"] == blog["address"]
        assert data["authority"] == alice["address"]
        assert data["namespace"] == "post_group"

    @pytest.mark.asyncio
    async def test_unknown_namespace(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/v1/names/post/blog")

        assert response.status_code == 422


class TestPosts:
    @pytest.mark.asyncio
    async def test_indices_are_sequential(
        self,
        api_client: AsyncClient,
        auth_headers_for: Headers,
        alice_key: Address,
        alice: dict,
        blog: dict,
    ) -> None:
        headers = auth_headers_for(alice_key)
        path = f"/api/v1/groups/{blog['address']}/posts"

        indices = []
        for i in range(3):
            response = await _post(api_client, path, alice, f"ipfs://{i}", headers)
            assert response.status_code == 201, response.text
            indices.append(response.json()["data"]["index"])

        assert indices == [0, 1, 2]
        group = (await api_client.get(f"/api/v1/groups/{blog['address']}")).json()["data"]
        assert group["post_count"] == 3

        second = await api_client.get(f"{path}/1")
        assert second.status_code == 200
        data = second.json()["data"]
        assert data["address"] == post_address(Address.from_hex(blog["address"]), 1).hex()
        assert data["metadata_uri"] == "ipfs://1"
        assert data["parent_post"] is None

    @pytest.mark.asyncio
    async def test_missing_index(self, api_client: AsyncClient, blog: dict) -> None:
        response = await api_client.get(f"/api/v1/groups/{blog['address']}/posts/0")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_metadata_uri(
        self,
        api_client: AsyncClient,
        auth_headers_for: Headers,
        alice_key: Address,
        alice: dict,
        blog: dict,
    ) -> None:
        response = await _post(
            api_client,
            f"/api/v1/groups/{blog['address']}/posts",
            alice,
            "",
            auth_headers_for(alice_key),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_URI"

    @pytest.mark.asyncio
    async def test_replies_and_update(
        self,
        api_client: AsyncClient,
        auth_headers_for: Headers,
        alice_key: Address,
        bob_key: Address,
        alice: dict,
        blog: dict,
    ) -> None:
        headers = auth_headers_for(alice_key)
        root = (
            await _post(
                api_client, f"/api/v1/groups/{blog['address']}/posts", alice, "ipfs://a", headers
            )
        ).json()["data"]

        reply_response = await _post(
            api_client, f"/api/v1/posts/{root['address']}/replies", alice, "ipfs://b", headers
        )
        assert reply_response.status_code == 201
        reply = reply_response.json()["data"]
        assert reply["index"] == 0
        assert reply["parent_post"] == root["address"]
        assert reply["group"] == root["address"]

        fetched_root = (await api_client.get(f"/api/v1/posts/{root['address']}")).json()["data"]
        assert fetched_root["reply_count"] == 1

        by_index = await api_client.get(f"/api/v1/posts/{root['address']}/replies/0")
        assert by_index.json()["data"] == reply

        forbidden = await api_client.patch(
            f"/api/v1/posts/{reply['address']}",
            json={"metadata_uri": "ipfs://evil"},
            headers=auth_headers_for(bob_key),
        )
        assert forbidden.status_code == 403

        updated = await api_client.patch(
            f"/api/v1/posts/{reply['address']}",
            json={"metadata_uri": "ipfs://c"},
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["metadata_uri"] == "ipfs://c"
