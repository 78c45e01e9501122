"""End-to-end tests for the social endpoints."""

from tests.harness import auth_header, create_client_fixture, sign_up

# API client with in-memory stores and the mock identity provider
client = create_client_fixture()


def create_post(client, token, content="Hello world", **fields):
    response = client.post(
        "/api/v1/posts", json={"content": content, **fields}, headers=auth_header(token)
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestPosts:
    """Post lifecycle and ownership."""

    def test_create_get_update_delete(self, client):
        token, user = sign_up(client, "alice")
        headers = auth_header(token)

        post = create_post(client, token, image_urls=["https://cdn.example.com/a.png"])
        assert post["user_id"] == user["id"]
        assert post["likes_count"] == 0

        fetched = client.get(f"/api/v1/posts/{post['id']}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["content"] == "Hello world"

        updated = client.put(
            f"/api/v1/posts/{post['id']}", json={"content": "Edited"}, headers=headers
        )
        assert updated.status_code == 200
        assert updated.json()["content"] == "Edited"
        assert updated.json()["image_urls"] == ["https://cdn.example.com/a.png"]

        deleted = client.delete(f"/api/v1/posts/{post['id']}", headers=headers)
        assert deleted.status_code == 204
        missing = client.get(f"/api/v1/posts/{post['id']}", headers=headers)
        assert missing.status_code == 404
        assert missing.json() == {"message": "Post not found"}

    def test_only_owner_can_modify(self, client):
        """Other users get 403 on update and delete."""
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        post = create_post(client, alice_token)

        update = client.put(
            f"/api/v1/posts/{post['id']}",
            json={"content": "Hijacked"},
            headers=auth_header(bob_token),
        )
        delete = client.delete(
            f"/api/v1/posts/{post['id']}", headers=auth_header(bob_token)
        )

        assert update.status_code == 403
        assert update.json() == {"message": "Not authorized to modify this post"}
        assert delete.status_code == 403

    def test_content_is_required(self, client):
        token, _ = sign_up(client, "alice")

        response = client.post(
            "/api/v1/posts", json={"content": ""}, headers=auth_header(token)
        )

        assert response.status_code == 400

    def test_list_by_author(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        create_post(client, alice_token, "one")
        create_post(client, alice_token, "two")
        create_post(client, bob_token, "three")

        response = client.get(
            "/api/v1/posts",
            params={"user_id": alice["id"]},
            headers=auth_header(bob_token),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [post["content"] for post in data["posts"]] == ["two", "one"]


class TestFeed:
    """Home feed pagination and viewer flags."""

    def test_feed_meta_and_flags(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        for i in range(3):
            create_post(client, alice_token, f"post {i}")
        newest = create_post(client, alice_token, "post 3")
        client.post(
            f"/api/v1/posts/{newest['id']}/likes", headers=auth_header(bob_token)
        )

        response = client.get(
            "/api/v1/feed", params={"page": 1, "limit": 2}, headers=auth_header(bob_token)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["meta"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalItems": 4,
            "itemsPerPage": 2,
            "hasNextPage": True,
            "hasPreviousPage": False,
        }
        first = data["posts"][0]
        assert first["id"] == newest["id"]
        assert first["is_liked"] is True
        assert first["is_saved"] is False
        assert first["author"]["username"] == "alice"


class TestCommentsAndLikes:
    """Comments, post likes and comment likes."""

    def test_comment_flow(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, bob = sign_up(client, "bob")
        post = create_post(client, alice_token)

        created = client.post(
            f"/api/v1/posts/{post['id']}/comments",
            json={"content": "Nice"},
            headers=auth_header(bob_token),
        )
        assert created.status_code == 201
        comment = created.json()
        assert comment["user_id"] == bob["id"]

        liked = client.post(
            f"/api/v1/comments/{comment['id']}/like", headers=auth_header(alice_token)
        )
        assert liked.status_code == 201

        listed = client.get(
            f"/api/v1/posts/{post['id']}/comments", headers=auth_header(alice_token)
        )
        assert listed.status_code == 200
        [item] = listed.json()["comments"]
        assert item["likes_count"] == 1
        assert item["is_liked"] is True
        assert item["author"]["username"] == "bob"

        fetched = client.get(
            f"/api/v1/posts/{post['id']}", headers=auth_header(alice_token)
        )
        assert fetched.json()["comments_count"] == 1

    def test_only_author_edits_comment(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        post = create_post(client, alice_token)
        comment = client.post(
            f"/api/v1/posts/{post['id']}/comments",
            json={"content": "Nice"},
            headers=auth_header(bob_token),
        ).json()

        response = client.put(
            f"/api/v1/comments/{comment['id']}",
            json={"content": "Edited"},
            headers=auth_header(alice_token),
        )

        assert response.status_code == 403

    def test_like_count_and_status(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        post = create_post(client, alice_token)
        likes = f"/api/v1/posts/{post['id']}/likes"

        assert client.post(likes, headers=auth_header(bob_token)).status_code == 201
        duplicate = client.post(likes, headers=auth_header(bob_token))
        assert duplicate.status_code == 409

        count = client.get(f"{likes}/count", headers=auth_header(alice_token))
        assert count.json() == {"post_id": post["id"], "count": 1}
        liked = client.get(f"{likes}/status", headers=auth_header(bob_token))
        assert liked.json()["is_liked"] is True

        assert client.delete(likes, headers=auth_header(bob_token)).status_code == 204
        unliked = client.get(f"{likes}/status", headers=auth_header(bob_token))
        assert unliked.json()["is_liked"] is False

    def test_like_unknown_post(self, client):
        token, _ = sign_up(client, "alice")

        response = client.post(
            "/api/v1/posts/missing-post/likes", headers=auth_header(token)
        )

        assert response.status_code == 404


class TestSavedPosts:
    def test_save_list_unsave(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        post = create_post(client, alice_token)
        headers = auth_header(bob_token)

        saved = client.post(f"/api/v1/posts/{post['id']}/save", headers=headers)
        assert saved.status_code == 201

        listed = client.get("/api/v1/saved-posts", headers=headers)
        assert [p["id"] for p in listed.json()["posts"]] == [post["id"]]

        assert (
            client.delete(f"/api/v1/posts/{post['id']}/save", headers=headers).status_code
            == 204
        )
        assert client.get("/api/v1/saved-posts", headers=headers).json()["posts"] == []


class TestUsers:
    """Profiles, follows and discovery."""

    def test_follow_and_list_followers(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, bob = sign_up(client, "bob")

        followed = client.post(
            f"/api/v1/users/{alice['id']}/follow", headers=auth_header(bob_token)
        )
        assert followed.status_code == 201

        followers = client.get(
            f"/api/v1/users/{alice['id']}/followers", headers=auth_header(bob_token)
        )
        assert [u["id"] for u in followers.json()["users"]] == [bob["id"]]

        profile = client.get(
            f"/api/v1/users/{alice['id']}", headers=auth_header(bob_token)
        )
        assert profile.json()["user"]["followers_count"] == 1
        assert "password_hash" not in profile.json()["user"]

    def test_cannot_follow_self(self, client):
        token, user = sign_up(client, "alice")

        response = client.post(
            f"/api/v1/users/{user['id']}/follow", headers=auth_header(token)
        )

        assert response.status_code == 400

    def test_update_profile(self, client):
        token, _ = sign_up(client, "alice")

        response = client.put(
            "/api/v1/profile",
            json={"bio": "Hello there", "is_private": True},
            headers=auth_header(token),
        )

        assert response.status_code == 200
        profile = client.get("/api/v1/profile", headers=auth_header(token)).json()
        assert profile["user"]["bio"] == "Hello there"
        assert profile["user"]["is_private"] is True

    def test_search(self, client):
        token, _ = sign_up(client, "alice")
        sign_up(client, "bobby", name="Bobby Tables")

        found = client.get(
            "/api/v1/users/search", params={"q": "bobby"}, headers=auth_header(token)
        )
        empty = client.get(
            "/api/v1/users/search", params={"q": "  "}, headers=auth_header(token)
        )

        assert [u["username"] for u in found.json()["users"]] == ["bobby"]
        assert empty.status_code == 400
        assert empty.json() == {"message": "Search query is required"}


class TestFriends:
    def test_request_accept_list_remove(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, bob = sign_up(client, "bob")

        sent = client.post(
            "/api/v1/friends/request",
            json={"receiver_id": bob["id"]},
            headers=auth_header(alice_token),
        )
        assert sent.status_code == 201
        assert sent.json()["status"] == "pending"

        pending = client.get(
            "/api/v1/friends/requests/pending", headers=auth_header(bob_token)
        )
        [request] = pending.json()["requests"]
        assert request["sender"]["username"] == "alice"

        accepted = client.put(
            f"/api/v1/friends/request/{request['id']}/status",
            json={"status": "accepted"},
            headers=auth_header(bob_token),
        )
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "accepted"

        friends = client.get("/api/v1/friends", headers=auth_header(alice_token))
        assert [u["id"] for u in friends.json()["users"]] == [bob["id"]]

        removed = client.delete(
            f"/api/v1/friends/{bob['id']}", headers=auth_header(alice_token)
        )
        assert removed.status_code == 204
        again = client.delete(
            f"/api/v1/friends/{bob['id']}", headers=auth_header(alice_token)
        )
        assert again.status_code == 404

    def test_sender_cannot_respond(self, client):
        alice_token, _ = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        request = client.post(
            "/api/v1/friends/request",
            json={"receiver_id": bob["id"]},
            headers=auth_header(alice_token),
        ).json()

        response = client.put(
            f"/api/v1/friends/request/{request['id']}/status",
            json={"status": "accepted"},
            headers=auth_header(alice_token),
        )

        assert response.status_code == 403


class TestStories:
    def test_current_user_story_is_separate(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")

        mine = client.post(
            "/api/v1/stories",
            json={"media_url": "https://cdn.example.com/a.png", "type": "image"},
            headers=auth_header(alice_token),
        )
        assert mine.status_code == 201
        theirs = client.post(
            "/api/v1/stories",
            json={"media_url": "https://cdn.example.com/b.mp4", "type": "video"},
            headers=auth_header(bob_token),
        ).json()

        response = client.get("/api/v1/stories", headers=auth_header(alice_token))

        assert response.status_code == 200
        data = response.json()
        assert data["currentUserStory"]["user_id"] == alice["id"]
        assert [s["id"] for s in data["stories"]] == [theirs["id"]]
        assert data["stories"][0]["has_unseen_items"] is True

    def test_seen_and_react(self, client):
        alice_token, _ = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        story = client.post(
            "/api/v1/stories",
            json={"media_url": "https://cdn.example.com/a.png", "type": "image"},
            headers=auth_header(alice_token),
        ).json()

        seen = client.post(
            f"/api/v1/stories/{story['id']}/seen", headers=auth_header(bob_token)
        )
        reacted = client.post(
            f"/api/v1/stories/{story['id']}/react",
            json={"reaction": "fire"},
            headers=auth_header(bob_token),
        )

        assert seen.status_code == 204
        assert reacted.status_code == 201
        assert reacted.json()["reaction"] == "fire"
        listed = client.get("/api/v1/stories", headers=auth_header(bob_token)).json()
        assert listed["stories"][0]["has_unseen_items"] is False

    def test_anonymous_listing(self, client):
        token, _ = sign_up(client, "alice")
        client.post(
            "/api/v1/stories",
            json={"media_url": "https://cdn.example.com/a.png", "type": "image"},
            headers=auth_header(token),
        )

        response = client.get("/api/v1/stories")

        assert response.status_code == 200
        assert response.json()["currentUserStory"] is None
        assert len(response.json()["stories"]) == 1

    def test_invalid_media_type(self, client):
        token, _ = sign_up(client, "alice")

        response = client.post(
            "/api/v1/stories",
            json={"media_url": "https://cdn.example.com/a.gif", "type": "gif"},
            headers=auth_header(token),
        )

        assert response.status_code == 400


class TestNotifications:
    """Notification inbox driven by follows."""

    def test_inbox_flow(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        carol_token, _ = sign_up(client, "carol")
        for token in (bob_token, carol_token):
            client.post(f"/api/v1/users/{alice['id']}/follow", headers=auth_header(token))
        headers = auth_header(alice_token)

        unread = client.get("/api/v1/notifications/unread-count", headers=headers)
        assert unread.json() == {"unreadCount": 2}

        grouped = client.get("/api/v1/notifications/grouped", headers=headers).json()
        assert len(grouped["today"]) == 2
        assert grouped["thisWeek"] == []
        assert grouped["unreadCount"] == 2

        listing = client.get(
            "/api/v1/notifications", params={"limit": 1}, headers=headers
        ).json()
        assert listing["meta"]["totalItems"] == 2
        assert listing["meta"]["hasNextPage"] is True
        [latest] = listing["notifications"]
        assert latest["type"] == "follow"
        assert latest["actor"]["username"] == "carol"

        marked = client.put(
            f"/api/v1/notifications/{latest['id']}/read", headers=headers
        )
        assert marked.status_code == 204
        unread = client.get("/api/v1/notifications/unread-count", headers=headers)
        assert unread.json() == {"unreadCount": 1}

        read_all = client.put("/api/v1/notifications/read-all", headers=headers)
        assert read_all.json() == {"updated": 1}

    def test_cannot_mark_others_notification(self, client):
        alice_token, alice = sign_up(client, "alice")
        bob_token, _ = sign_up(client, "bob")
        client.post(f"/api/v1/users/{alice['id']}/follow", headers=auth_header(bob_token))
        [notification] = client.get(
            "/api/v1/notifications", headers=auth_header(alice_token)
        ).json()["notifications"]

        response = client.put(
            f"/api/v1/notifications/{notification['id']}/read",
            headers=auth_header(bob_token),
        )

        assert response.status_code == 404
