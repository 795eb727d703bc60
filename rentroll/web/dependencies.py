"""Web-specific helpers for session flash messages."""

from fastapi import Request


def get_flash_messages(request: Request) -> list[dict]:
    """Get and clear flash messages from session."""
    return request.session.pop("flash_messages", [])


def add_flash_message(request: Request, message: str, category: str = "info") -> None:
    """Add a flash message to the session."""
    if "flash_messages" not in request.session:
        request.session["flash_messages"] = []
    request.session["flash_messages"].append({"message": message, "category": category})


def flash_errors(request: Request, detail: str | list[str]) -> None:
    """Flash each message of an error detail."""
    for message in [detail] if isinstance(detail, str) else detail:
        add_flash_message(request, message, "error")
