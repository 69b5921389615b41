"""Tests for channel API endpoints."""

import logging

import pytest
from httpx import AsyncClient

from src.constants import DEFAULT_CHANNEL_BANNER_URL
from src.models.channel import Channel
from src.models.user import User
from src.models.video import Video

NEW_CHANNEL = {
    "channelName": "  Retro Plays  ",
    "description": "Old games, new runs",
    "category": "Gaming",
}


class TestCreateChannel:
    """Tests for POST /api/channels/create."""

    @pytest.mark.asyncio
    async def test_create_channel(self, client: AsyncClient, test_user: User, auth_headers: dict):
        """Names are trimmed, the banner defaults and the owner is embedded."""
        response = await client.post("/api/channels/create", json=NEW_CHANNEL, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Channel created successfully"
        channel = data["channel"]
        assert channel["channelName"] == "Retro Plays"
        assert channel["channelBanner"] == DEFAULT_CHANNEL_BANNER_URL
        assert channel["subscribers"] == 0
        assert channel["owner"] == {
            "id": test_user.id,
            "username": "testuser",
            "avatar": test_user.avatar,
        }
        assert channel["videos"] == []

        me = await client.get("/api/auth/me", headers=auth_headers)
        assert [c["id"] for c in me.json()["user"]["channels"]] == [channel["id"]]

    @pytest.mark.asyncio
    async def test_create_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/channels/create", json=NEW_CHANNEL)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_duplicate_name_same_owner(
        self, client: AsyncClient, test_user: User, test_channel: Channel, auth_headers: dict
    ):
        payload = {**NEW_CHANNEL, "channelName": "Code Corner"}
        response = await client.post("/api/channels/create", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "You already have a channel with this name"

        owned = await client.get(f"/api/channels/user/{test_user.id}")
        assert [c["id"] for c in owned.json()["channels"]] == [test_channel.id]

    @pytest.mark.asyncio
    async def test_same_name_other_owner(
        self, client: AsyncClient, test_channel: Channel, other_headers: dict
    ):
        """Channel names only need to be unique per owner."""
        payload = {**NEW_CHANNEL, "channelName": "Code Corner"}
        response = await client.post("/api/channels/create", json=payload, headers=other_headers)
        assert response.status_code == 201

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override,field",
        [
            ({"channelName": "   "}, "channelName"),
            ({"channelName": "x" * 51}, "channelName"),
            ({"description": ""}, "description"),
            ({"description": "d" * 501}, "description"),
            ({"category": "Cooking"}, "category"),
        ],
    )
    async def test_validation(
        self, client: AsyncClient, auth_headers: dict, override: dict, field: str
    ):
        response = await client.post(
            "/api/channels/create", json={**NEW_CHANNEL, **override}, headers=auth_headers
        )
        assert response.status_code == 400
        assert field in [error["field"] for error in response.json()["errors"]]


class TestReadChannels:
    """Tests for the public channel listings."""

    @pytest.mark.asyncio
    async def test_get_channel_with_videos(
        self, client: AsyncClient, test_channel: Channel, test_video: Video
    ):
        response = await client.get(f"/api/channels/{test_channel.id}")
        assert response.status_code == 200
        channel = response.json()["channel"]
        assert channel["channelName"] == "Code Corner"
        assert [v["id"] for v in channel["videos"]] == [test_video.id]
        assert channel["videos"][0]["uploader"]["username"] == "testuser"

    @pytest.mark.asyncio
    async def test_get_missing_channel(self, client: AsyncClient):
        response = await client.get("/api/channels/424242")
        assert response.status_code == 404
        assert response.json()["detail"] == "Channel not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/channels/99999999999999999999", "/api/channels/user/2147483648"])
    async def test_out_of_range_id_is_validation_error(self, client: AsyncClient, path: str):
        response = await client.get(path)
        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"

    @pytest.mark.asyncio
    async def test_list_newest_first(
        self, client: AsyncClient, test_channel: Channel, auth_headers: dict
    ):
        created = await client.post("/api/channels/create", json=NEW_CHANNEL, headers=auth_headers)
        response = await client.get("/api/channels")
        assert response.status_code == 200
        ids = [c["id"] for c in response.json()["channels"]]
        assert ids == [created.json()["channel"]["id"], test_channel.id]

    @pytest.mark.asyncio
    async def test_list_by_owner(
        self,
        client: AsyncClient,
        test_channel: Channel,
        other_user: User,
        other_headers: dict,
    ):
        await client.post("/api/channels/create", json=NEW_CHANNEL, headers=other_headers)

        response = await client.get(f"/api/channels/user/{other_user.id}")
        assert response.status_code == 200
        channels = response.json()["channels"]
        assert [c["channelName"] for c in channels] == ["Retro Plays"]
        assert channels[0]["ownerId"] == other_user.id


class TestUpdateChannel:
    """Tests for PUT /api/channels/{id}."""

    @pytest.mark.asyncio
    async def test_update_keeps_banner(
        self, client: AsyncClient, test_channel: Channel, auth_headers: dict
    ):
        payload = {"channelName": "Code Corner", "description": "Now with Rust", "category": "Education"}
        response = await client.put(
            f"/api/channels/{test_channel.id}", json=payload, headers=auth_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Channel updated successfully"
        assert data["channel"]["description"] == "Now with Rust"
        assert data["channel"]["category"] == "Education"
        assert data["channel"]["channelBanner"] == DEFAULT_CHANNEL_BANNER_URL

    @pytest.mark.asyncio
    async def test_update_banner(self, client: AsyncClient, test_channel: Channel, auth_headers: dict):
        payload = {
            "channelName": "Code Corner",
            "description": "Programming tutorials",
            "category": "Technology",
            "channelBanner": "https://cdn.example.com/banner.png",
        }
        response = await client.put(
            f"/api/channels/{test_channel.id}", json=payload, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["channel"]["channelBanner"] == "https://cdn.example.com/banner.png"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name(
        self, client: AsyncClient, test_channel: Channel, auth_headers: dict
    ):
        await client.post("/api/channels/create", json=NEW_CHANNEL, headers=auth_headers)
        payload = {"channelName": "Retro Plays", "description": "dup", "category": "Gaming"}
        response = await client.put(
            f"/api/channels/{test_channel.id}", json=payload, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "You already have a channel with this name"

    @pytest.mark.asyncio
    async def test_update_by_non_owner(
        self, client: AsyncClient, test_channel: Channel, other_headers: dict
    ):
        payload = {"channelName": "Hijacked", "description": "mine now", "category": "Gaming"}
        response = await client.put(
            f"/api/channels/{test_channel.id}", json=payload, headers=other_headers
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to update this channel"

    @pytest.mark.asyncio
    async def test_refused_update_is_logged(
        self,
        client: AsyncClient,
        test_channel: Channel,
        other_user: User,
        other_headers: dict,
        caplog: pytest.LogCaptureFixture,
    ):
        payload = {"channelName": "Hijacked", "description": "mine now", "category": "Gaming"}
        with caplog.at_level(logging.WARNING, logger="src.api.channels"):
            await client.put(f"/api/channels/{test_channel.id}", json=payload, headers=other_headers)

        assert (
            f"[channel_id={test_channel.id}] [user_id={other_user.id}] Refused to update channel"
            in caplog.messages
        )

    @pytest.mark.asyncio
    async def test_update_missing_channel(self, client: AsyncClient, auth_headers: dict):
        payload = {"channelName": "Ghost", "description": "nothing", "category": "Gaming"}
        response = await client.put("/api/channels/424242", json=payload, headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_out_of_range_channel(self, client: AsyncClient, auth_headers: dict):
        payload = {"channelName": "Ghost", "description": "nothing", "category": "Gaming"}
        response = await client.put(
            "/api/channels/99999999999999999999", json=payload, headers=auth_headers
        )
        assert response.status_code == 400
        assert "channel_id" in [error["field"] for error in response.json()["errors"]]


class TestDeleteChannel:
    """Tests for DELETE /api/channels/{id}."""

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(
        self, client: AsyncClient, test_channel: Channel, other_headers: dict
    ):
        response = await client.delete(f"/api/channels/{test_channel.id}", headers=other_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_removes_videos_and_comments(
        self,
        client: AsyncClient,
        test_channel: Channel,
        test_video: Video,
        auth_headers: dict,
        other_headers: dict,
    ):
        """Deleting a channel takes its videos, their comments and reactions with it."""
        await client.post(
            "/api/comments", json={"videoId": test_video.id, "text": "Nice"}, headers=other_headers
        )
        await client.post(f"/api/videos/{test_video.id}/like", json={}, headers=other_headers)

        response = await client.delete(f"/api/channels/{test_channel.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Channel deleted successfully"

        assert (await client.get(f"/api/channels/{test_channel.id}")).status_code == 404
        assert (await client.get(f"/api/videos/{test_video.id}")).status_code == 404
        assert (await client.get(f"/api/comments/video/{test_video.id}")).status_code == 404

        me = await client.get("/api/auth/me", headers=auth_headers)
        assert me.json()["user"]["channels"] == []
