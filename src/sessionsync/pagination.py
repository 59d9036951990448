"""Transaction page merging."""

from __future__ import annotations

from collections.abc import Iterable

from sessionsync.models.transaction import Transaction


def unique_by_key(transactions: Iterable[Transaction]) -> tuple[Transaction, ...]:
    """Drop repeated keys, keeping the first occurrence in place."""
    seen: set[str] = set()
    unique: list[Transaction] = []
    for tx in transactions:
        if tx.key in seen:
            continue
        seen.add(tx.key)
        unique.append(tx)
    return tuple(unique)


def merge_transaction_page(
    current: Iterable[Transaction],
    page: Iterable[Transaction],
    page_number: int,
) -> tuple[Transaction, ...]:
    """Combine an incoming page with the accumulated history.

    Page 0 replaces the history verbatim (a fresh fetch). Later pages are
    appended and deduplicated: entries already held keep their position
    and value, incoming entries with a known key are dropped.
    """
    if page_number < 0:
        raise ValueError(f"page_number must be >= 0, got {page_number}")
    if page_number == 0:
        return tuple(page)
    return unique_by_key([*current, *page])
