"""Build one-level reply threads from a flat list of comments."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from youniverse.models.comment import Comment

logger = logging.getLogger(__name__)


@dataclass
class CommentThread:
    """A top-level comment and its direct replies, oldest first."""
    comment: Comment
    replies: List[Comment] = field(default_factory=list)


def build_comment_threads(comments: Iterable[Comment]) -> Dict[int, List[CommentThread]]:
    """
    Group comments by post and attach replies to their top-level parent.

    Comments must already be in ascending creation order; that order is kept
    as-is for both threads and replies.

    A reply is dropped when its parent is not a top-level comment of the same
    post (missing, deleted, on another post, or itself a reply). Posts without
    comments are absent from the result.
    """
    by_post: Dict[int, List[Comment]] = {}
    for comment in comments:
        by_post.setdefault(comment.post_id, []).append(comment)

    threads: Dict[int, List[CommentThread]] = {}
    for post_id, post_comments in by_post.items():
        top_level: Dict[int, CommentThread] = {}
        replies: List[Comment] = []
        for comment in post_comments:
            if comment.parent_comment_id is None:
                top_level[comment.id] = CommentThread(comment=comment)
            else:
                replies.append(comment)

        for reply in replies:
            parent = top_level.get(reply.parent_comment_id)
            if parent is None:
                logger.debug(
                    f"[COMMENTS] Dropping reply {reply.id} on post {post_id}: "
                    f"parent {reply.parent_comment_id} is not a top-level comment"
                )
                continue
            parent.replies.append(reply)

        threads[post_id] = list(top_level.values())

    return threads
