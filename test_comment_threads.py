"""
Tests for one-level comment thread building.
Run: pytest test_comment_threads.py
"""

from youniverse.models.comment import Comment
from youniverse.services.comment_threads import build_comment_threads


def comment(id, parent=None, post=10):
    return Comment(id=id, post_id=post, author_id=1, content=f"c{id}", parent_comment_id=parent, like_count=0)


def shape(threads):
    return {
        post_id: [(t.comment.id, [r.id for r in t.replies]) for t in post_threads]
        for post_id, post_threads in threads.items()
    }


def test_empty_input():
    assert build_comment_threads([]) == {}


def test_replies_attach_and_orphans_are_dropped():
    comments = [comment(1), comment(2), comment(3, parent=1), comment(4, parent=99)]

    assert shape(build_comment_threads(comments)) == {10: [(1, [3]), (2, [])]}


def test_reply_to_a_reply_is_not_nested():
    comments = [comment(1), comment(2, parent=1), comment(3, parent=2)]

    threads = build_comment_threads(comments)

    assert shape(threads) == {10: [(1, [2])]}
    assert all(not hasattr(r, "replies") for t in threads[10] for r in t.replies)


def test_reply_before_its_parent_still_attaches():
    # Same-second timestamps can put a reply ahead of its parent
    comments = [comment(5, parent=6), comment(6)]

    assert shape(build_comment_threads(comments)) == {10: [(6, [5])]}


def test_parent_on_another_post_is_not_used():
    comments = [comment(1, post=10), comment(2, parent=1, post=20), comment(3, post=20)]

    assert shape(build_comment_threads(comments)) == {10: [(1, [])], 20: [(3, [])]}


def test_input_order_is_preserved():
    comments = [
        comment(7),
        comment(3),
        comment(8, parent=3),
        comment(4, parent=7),
        comment(2, parent=3),
    ]

    assert shape(build_comment_threads(comments)) == {10: [(7, [4]), (3, [8, 2])]}


def test_rerun_on_same_input_is_identical():
    comments = [comment(1), comment(2, parent=1), comment(3, post=11)]

    assert shape(build_comment_threads(comments)) == shape(build_comment_threads(comments))
