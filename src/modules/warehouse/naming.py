"""Unique product name resolution."""

from __future__ import annotations

from typing import Iterable

from modules.warehouse.constants import DUPLICATE_NAME_MARKER


def resolve_unique_name(
    candidate: str,
    existing_names: Iterable[str],
    marker: str = DUPLICATE_NAME_MARKER,
) -> str:
    """Return ``candidate``, extended with ``marker`` until it is unused.

    Comparison is exact (case- and whitespace-sensitive); callers trim the
    candidate beforehand.  ``"Widget"`` against ``{"Widget", "Widgetx"}``
    resolves to ``"Widgetxx"``.

    Every attempt produces a longer string, so each existing name can block
    at most one attempt and ``len(names) + 1`` attempts always suffice.
    """
    if not marker:
        raise ValueError("The duplicate-name marker must be a non-empty string.")

    names = set(existing_names)
    resolved = candidate
    for _ in range(len(names) + 1):
        if resolved not in names:
            return resolved
        resolved += marker

    raise RuntimeError(
        f"No free name found for {candidate!r} within {len(names) + 1} attempts"
    )
