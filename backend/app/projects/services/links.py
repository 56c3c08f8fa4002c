from __future__ import annotations


def split_candidate_urls(raw: str | None) -> list[str]:
    """Comma-separated link text -> trimmed, non-empty URLs in input order.

    Duplicates are kept; each one is submitted on its own.
    """
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]
