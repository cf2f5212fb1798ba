from __future__ import annotations


class BuildError(Exception):
    """A failure reported back to the client as {"error": ...}."""


class InputRetrievalError(BuildError):
    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        if status is not None:
            msg = f"Failed to fetch CSV: {url} (status {status})"
        else:
            msg = f"Failed to fetch CSV: {url} ({reason or 'unreachable'})"
        super().__init__(msg)
