"""One-shot messages carried in the session across a redirect."""

from fastapi import Request

_SESSION_KEY = "flash_messages"


def flash(request: Request, message: str, category: str = "info") -> None:
    """Queue a message for the next rendered page."""
    request.session.setdefault(_SESSION_KEY, []).append(
        {"message": message, "category": category}
    )


def pop_flash_messages(request: Request) -> list[dict]:
    """Return queued messages and clear them."""
    return request.session.pop(_SESSION_KEY, [])
