"""Integration tests for like and subscription toggles."""

from __future__ import annotations

import pytest

from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory
from tests.helpers.auth import bearer, issue_token

API = "/api/v1"


@pytest.fixture()
def world(session) -> dict:
    """Two viewers, a channel and two of its videos, as plain ids."""
    a, b = UserFactory.create_batch(2)
    channel = UserFactory(username="studio")
    v, w = VideoFactory.create_batch(2, owner=channel)
    session.commit()
    return {
        "a": a.id,
        "b": b.id,
        "channel": channel.id,
        "channel_name": channel.username,
        "v": v.id,
        "w": w.id,
    }


def _as(user_id: int) -> dict[str, str]:
    return bearer(issue_token(user_id))


def test_like_toggle_alternates(client, world) -> None:
    url = f"{API}/like/video/{world['v']}"

    first = client.post(url, headers=_as(world["a"]))
    second = client.post(url, headers=_as(world["a"]))
    third = client.post(url, headers=_as(world["a"]))

    assert first.status_code == 200
    assert [r.get_json()["data"]["isLiked"] for r in (first, second, third)] == [True, False, True]


def test_likes_scenario_counts(client, world) -> None:
    """A likes V and W, B likes V, A unlikes W."""
    client.post(f"{API}/like/video/{world['v']}", headers=_as(world["a"]))
    client.post(f"{API}/like/video/{world['w']}", headers=_as(world["a"]))
    client.post(f"{API}/like/video/{world['v']}", headers=_as(world["b"]))
    client.post(f"{API}/like/video/{world['w']}", headers=_as(world["a"]))

    v = client.get(f"{API}/videos/{world['v']}", headers=_as(world["a"])).get_json()["data"]
    w = client.get(f"{API}/videos/{world['w']}", headers=_as(world["a"])).get_json()["data"]
    assert (v["likes_count"], v["is_liked"]) == (2, True)
    assert (w["likes_count"], w["is_liked"]) == (0, False)

    liked = client.get(f"{API}/like/videos", headers=_as(world["a"])).get_json()["data"]
    assert [item["id"] for item in liked] == [world["v"]]


@pytest.mark.parametrize("kind", ["comment", "tweet"])
def test_comment_and_tweet_likes_need_no_existing_target(client, world, kind) -> None:
    resp = client.post(f"{API}/like/{kind}/31337", headers=_as(world["a"]))

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"isLiked": True}


@pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5"])
def test_malformed_target_is_bad_request(client, world, raw) -> None:
    resp = client.post(f"{API}/like/video/{raw}", headers=_as(world["a"]))

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_input"


def test_toggle_requires_auth(client, world) -> None:
    assert client.post(f"{API}/like/video/{world['v']}").status_code == 401
    assert client.post(f"{API}/subscribe/{world['channel']}").status_code == 401


def test_subscription_toggle_and_listings(client, world) -> None:
    url = f"{API}/subscribe/{world['channel']}"

    resp = client.post(url, headers=_as(world["a"]))
    assert resp.get_json()["data"] == {"isSubscribed": True}
    client.post(url, headers=_as(world["b"]))

    subs = client.get(f"{url}/subscribers", headers=_as(world["a"])).get_json()["data"]
    assert {s["id"] for s in subs} == {world["a"], world["b"]}

    channels = client.get(f"{API}/subscribe/by/{world['a']}", headers=_as(world["a"]))
    assert [c["username"] for c in channels.get_json()["data"]] == [world["channel_name"]]

    resp = client.post(url, headers=_as(world["a"]))
    assert resp.get_json()["data"] == {"isSubscribed": False}
    subs = client.get(f"{url}/subscribers", headers=_as(world["a"])).get_json()["data"]
    assert [s["id"] for s in subs] == [world["b"]]


def test_listing_with_malformed_id(client, world) -> None:
    resp = client.get(f"{API}/subscribe/nope/subscribers", headers=_as(world["a"]))
    assert resp.status_code == 400


def test_like_summary_for_viewer_and_anonymous(client, world) -> None:
    client.post(f"{API}/like/video/{world['v']}", headers=_as(world["a"]))
    client.post(f"{API}/like/video/{world['v']}", headers=_as(world["b"]))

    mine = client.get(f"{API}/like/video/{world['v']}", headers=_as(world["a"]))
    anon = client.get(f"{API}/like/video/{world['v']}")

    assert mine.status_code == 200
    assert mine.get_json()["data"] == {
        "target_id": world["v"],
        "kind": "video_like",
        "count": 2,
        "viewer_has_relationship": True,
    }
    assert anon.get_json()["data"]["count"] == 2
    assert anon.get_json()["data"]["viewer_has_relationship"] is False


def test_like_summary_errors(client, world) -> None:
    assert client.get(f"{API}/like/video/999999").status_code == 404
    assert client.get(f"{API}/like/video/abc").status_code == 400
    assert client.get(f"{API}/like/playlist/{world['v']}").status_code == 404


def test_subscription_summary(client, world) -> None:
    client.post(f"{API}/subscribe/{world['channel']}", headers=_as(world["b"]))

    resp = client.get(f"{API}/subscribe/{world['channel']}", headers=_as(world["b"]))
    data = resp.get_json()["data"]

    assert resp.status_code == 200
    assert (data["kind"], data["count"], data["viewer_has_relationship"]) == (
        "channel_subscription",
        1,
        True,
    )
    assert client.get(f"{API}/subscribe/{world['channel']}").get_json()["data"][
        "viewer_has_relationship"
    ] is False
