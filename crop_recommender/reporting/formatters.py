"""
ASCII terminal formatters for CLI output.

All formatters take engine results / catalog entries and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.request import RecommendationRequest
from crop_recommender.models.result import RecommendationResult
from crop_recommender.recommendations.period import entry_window

# ── Recommendation cards ──────────────────────────────────────────────────────


def format_request_header(request: RecommendationRequest) -> str:
    """One block describing the request being answered."""
    return "\n".join([
        "",
        "=== Crop Mix Recommendation ===",
        f"  Months:  {request.start_month} -> {request.end_month}",
        f"  Place:   {request.place}",
        f"  Rows:    {request.row_count}",
    ])


def format_cards(result: RecommendationResult) -> str:
    """Format every card of ``result`` as an ASCII block.

    Example::

        [Box 1]  expected revenue 1,398,000
          1. 감자 (수미)
          2. 상추
          3. 고추 (청양)
          profit 2.4 | labor 1.7 | rarity 1.0

    Returns:
        Multi-line string; an error line when the result carries ``error``.
    """
    lines: list[str] = []

    if result.error:
        lines.append("")
        lines.append(f"  [NO RECOMMENDATION] {result.error}")
        return "\n".join(lines)

    if not result.cards:
        lines.append("")
        lines.append("  (no combinations available)")
        return "\n".join(lines)

    for card in result.cards:
        ind = card.indicators
        lines.append("")
        lines.append(f"  [{card.title}]  expected revenue {card.expected_revenue}")
        for rank, name in enumerate(card.crops, start=1):
            lines.append(f"    {rank}. {name}")
        lines.append(
            f"    profit {ind.profit:.1f} | labor {ind.labor:.1f} | rarity {ind.rarity:.1f}"
        )

    lines.append("")
    lines.append(f"  Total profit (best box): {result.total_profit:,}")
    return "\n".join(lines)


# ── Catalog check ─────────────────────────────────────────────────────────────


def format_catalog_summary(entries: list[CatalogEntry], max_issues: int = 10) -> str:
    """Summarise a loaded catalog and list rows the engine will treat as missing.

    A row is reported when either month is unreadable (it can never pass the
    period filter) or both profit figures are missing (it scores 0 profit).
    """
    groups = {e.group_key for e in entries}
    issues: list[str] = []
    for row_no, entry in enumerate(entries, start=1):
        sow, harvest = entry_window(entry)
        problems: list[str] = []
        if sow is None or harvest is None:
            problems.append("unreadable month")
        if entry.profit_open_field is None and entry.profit_facility is None:
            problems.append("no profit figure")
        if problems:
            issues.append(f"    row {row_no:>4}  {entry.display_name:<30}  {', '.join(problems)}")

    lines = [
        "",
        "=== Catalog Summary ===",
        f"  Entries: {len(entries)}",
        f"  Groups:  {len(groups)}",
        f"  Rows with issues: {len(issues)}",
    ]
    lines.extend(issues[:max_issues])
    if len(issues) > max_issues:
        lines.append(f"    … and {len(issues) - max_issues} more")
    return "\n".join(lines)
