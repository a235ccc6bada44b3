"""Link preview metadata for posts."""

from typing import Any, Dict


def build_link_preview(url: str) -> Dict[str, Any]:
    """Return placeholder preview metadata for a link.

    Pages are not fetched; the client renders the URL with a generic title.
    """
    return {
        "url": url.strip(),
        "title": "Link Preview",
        "description": "Click to view the link",
        "image": None,
    }
