"""
Functional tests for the social feed.
Run: pytest test_feed_api.py
"""

from sqlalchemy import select

from youniverse.models.comment import Comment
from youniverse.models.comment_like import CommentLike
from youniverse.models.post import Post


def _post(client, headers, content="Hello feed", **extra):
    response = client.post("/api/v1/feed/posts", headers=headers, json={"content": content, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def _comment(client, headers, post_id, content, parent=None):
    payload = {"content": content}
    if parent is not None:
        payload["parent_comment_id"] = parent
    return client.post(f"/api/v1/feed/posts/{post_id}/comments", headers=headers, json=payload)


def test_create_post_with_media_and_link(client, register):
    _, headers = register("author@example.com", name="Author")

    post = _post(
        client,
        headers,
        tags=["visa", "germany"],
        media_urls=["https://cdn.example.com/a.png"],
        media_types=["image/png"],
        link_url="https://example.com/article",
    )

    assert post["author"]["name"] == "Author"
    assert post["tags"] == ["visa", "germany"]
    assert post["media_types"] == ["image/png"]
    assert post["link_preview"] == {
        "url": "https://example.com/article",
        "title": "Link Preview",
        "description": "Click to view the link",
        "image": None,
    }
    assert (post["like_count"], post["comment_count"], post["share_count"]) == (0, 0, 0)


def test_media_types_must_match_urls(client, register):
    _, headers = register("author@example.com")

    response = client.post(
        "/api/v1/feed/posts",
        headers=headers,
        json={"content": "x", "media_urls": ["a", "b"], "media_types": ["image/png"]},
    )

    assert response.status_code == 422


def test_feed_is_newest_first_with_threaded_comments(client, register):
    _, headers = register("author@example.com")
    older = _post(client, headers, "older")
    newer = _post(client, headers, "newer")

    first = _comment(client, headers, older["id"], "first").json()
    second = _comment(client, headers, older["id"], "second").json()
    reply = _comment(client, headers, older["id"], "reply to first", parent=first["id"]).json()
    nested = _comment(client, headers, older["id"], "reply to reply", parent=reply["id"])
    assert nested.status_code == 400

    feed = client.get("/api/v1/feed/posts").json()
    assert [p["content"] for p in feed["posts"]] == ["newer", "older"]
    assert feed["total"] == 2
    assert feed["has_more"] is False

    posts = {p["id"]: p for p in feed["posts"]}
    assert posts[newer["id"]]["comments"] == []

    threads = posts[older["id"]]["comments"]
    assert [c["id"] for c in threads] == [first["id"], second["id"]]
    assert [r["content"] for r in threads[0]["replies"]] == ["reply to first"]
    assert threads[0]["replies"][0]["replies"] == []
    assert threads[1]["replies"] == []
    assert posts[older["id"]]["comment_count"] == 3


def test_reply_parent_must_be_on_same_post(client, register):
    _, headers = register("author@example.com")
    a = _post(client, headers, "a")
    b = _post(client, headers, "b")
    on_a = _comment(client, headers, a["id"], "on a").json()

    assert _comment(client, headers, b["id"], "cross", parent=on_a["id"]).status_code == 400
    assert _comment(client, headers, b["id"], "missing", parent=9999).status_code == 400
    assert _comment(client, headers, 9999, "no post").status_code == 404


def test_toggle_likes_and_is_liked_flags(client, register):
    _, author = register("author@example.com")
    _, fan = register("fan@example.com")
    post = _post(client, author)
    comment = _comment(client, author, post["id"], "nice").json()

    liked = client.post(f"/api/v1/feed/posts/{post['id']}/like", headers=fan).json()
    assert liked == {"id": post["id"], "is_liked": True, "like_count": 1}
    client.post(f"/api/v1/feed/comments/{comment['id']}/like", headers=fan)

    as_fan = client.get("/api/v1/feed/posts", headers=fan).json()["posts"][0]
    assert as_fan["is_liked"] is True
    assert as_fan["comments"][0]["is_liked"] is True
    assert as_fan["comments"][0]["like_count"] == 1

    as_author = client.get("/api/v1/feed/posts", headers=author).json()["posts"][0]
    assert as_author["is_liked"] is False

    unliked = client.post(f"/api/v1/feed/posts/{post['id']}/like", headers=fan).json()
    assert unliked == {"id": post["id"], "is_liked": False, "like_count": 0}

    assert client.post("/api/v1/feed/posts/9999/like", headers=fan).status_code == 404
    assert client.post("/api/v1/feed/comments/9999/like", headers=fan).status_code == 404


def test_share_post(client, register):
    _, headers = register("author@example.com")
    post = _post(client, headers)

    response = client.post(
        f"/api/v1/feed/posts/{post['id']}/share",
        headers=headers,
        json={"share_type": "external", "platform": "whatsapp"},
    )
    assert response.status_code == 201
    assert response.json()["share_count"] == 1

    bad = client.post(f"/api/v1/feed/posts/{post['id']}/share", headers=headers, json={"share_type": "fax"})
    assert bad.status_code == 422


def test_delete_comment_removes_replies_and_counts(client, register):
    _, author = register("author@example.com")
    _, other = register("other@example.com")
    post = _post(client, author)
    parent = _comment(client, author, post["id"], "parent").json()
    _comment(client, other, post["id"], "reply", parent=parent["id"])
    _comment(client, other, post["id"], "standalone")

    url = f"/api/v1/feed/posts/{post['id']}/comments/{parent['id']}"
    assert client.delete(url, headers=other).status_code == 403
    assert client.delete(url, headers=author).status_code == 200
    assert client.delete(url, headers=author).status_code == 404

    feed_post = client.get("/api/v1/feed/posts").json()["posts"][0]
    assert [c["content"] for c in feed_post["comments"]] == ["standalone"]
    assert feed_post["comment_count"] == 1


def test_delete_comment_counts_every_nested_row(client, register, db):
    _, author = register("author@example.com")
    post = _post(client, author)
    parent = _comment(client, author, post["id"], "parent").json()
    reply = _comment(client, author, post["id"], "reply", parent=parent["id"]).json()
    client.post(f"/api/v1/feed/comments/{reply['id']}/like", headers=author)

    # Rows nested below a reply can only come from data written outside the API
    db.add(Comment(post_id=post["id"], author_id=parent["author_id"], content="deep", parent_comment_id=reply["id"]))
    db.get(Post, post["id"]).comment_count = 3
    db.commit()

    url = f"/api/v1/feed/posts/{post['id']}/comments/{parent['id']}"
    assert client.delete(url, headers=author).status_code == 200

    feed_post = client.get("/api/v1/feed/posts").json()["posts"][0]
    assert feed_post["comments"] == []
    assert feed_post["comment_count"] == 0
    assert db.scalars(select(CommentLike)).all() == []


def test_feed_pagination(client, register):
    _, headers = register("author@example.com")
    for i in range(3):
        _post(client, headers, f"post {i}")

    page = client.get("/api/v1/feed/posts", params={"limit": 2}).json()
    assert [p["content"] for p in page["posts"]] == ["post 2", "post 1"]
    assert page["has_more"] is True
