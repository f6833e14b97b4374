"""
Combination search: picks up to N three-crop mixes from scored entries.

Search flow
-----------
1. group_entries(scored)
   -> dict[group_key, list[ScoredEntry]]  (first-seen group order,
      each group sorted by final_score desc, truncated to the top 3)

2. search_combinations(scored, max_combinations=3)
   -> list[Combination]

Each round enumerates every group triple g1 < g2 < g3 and every pick of one
retained entry per group (at most 3 × 3 × 3 per triple), skips any candidate
whose sorted index triple was already selected, and keeps the highest total
score.  Ties go to the first candidate enumerated.

This is a greedy heuristic: each combination is the best one available given
the ones already chosen, which does not make the chosen *set* optimal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from crop_recommender.recommendations.scorer import ScoredEntry

logger = logging.getLogger(__name__)

COMBINATION_SIZE = 3
TOP_PER_GROUP = 3

IndexTriple = tuple[int, int, int]


@dataclass(frozen=True)
class Combination:
    """Three scored entries from three distinct groups.

    Attributes:
        entries:     The picked entries in group enumeration order.
        indices:     Ascending index triple; identity of the combination.
        total_score: Sum of the three final scores.
    """

    entries:     tuple[ScoredEntry, ScoredEntry, ScoredEntry]
    indices:     IndexTriple
    total_score: float


def group_entries(scored: list[ScoredEntry]) -> dict[tuple[str, str], list[ScoredEntry]]:
    """Partition by group key and keep each group's top entries.

    Groups keep first-seen order.  Within a group entries are sorted by
    ``final_score`` descending; the sort is stable, so ties keep catalog order.
    """
    groups: dict[tuple[str, str], list[ScoredEntry]] = {}
    for se in scored:
        groups.setdefault(se.group_key, []).append(se)

    return {
        key: sorted(items, key=lambda se: -se.final_score)[:TOP_PER_GROUP]
        for key, items in groups.items()
    }


def search_combinations(
    scored: list[ScoredEntry],
    max_combinations: int = 3,
) -> list[Combination]:
    """Greedily select up to ``max_combinations`` distinct combinations.

    Returns fewer (possibly none) when fewer than three groups exist or the
    candidate space runs out.
    """
    groups = group_entries(scored)
    if len(groups) < COMBINATION_SIZE:
        logger.info(
            "Only %d distinct group(s); need %d for a combination.",
            len(groups), COMBINATION_SIZE,
        )
        return []

    logger.debug("Combination search over %d groups.", len(groups))

    results: list[Combination] = []
    used: set[IndexTriple] = set()

    for round_no in range(1, max_combinations + 1):
        best = _best_candidate(list(groups.values()), used)
        if best is None:
            logger.debug("Round %d: no unused candidates left.", round_no)
            break

        used.add(best.indices)
        results.append(best)
        logger.debug(
            "Round %d: picked indices %s total_score=%.3f (%s)",
            round_no, list(best.indices), best.total_score,
            ", ".join(se.entry.item_name for se in best.entries),
        )

    return results


def _best_candidate(
    groups: list[list[ScoredEntry]],
    used:   set[IndexTriple],
) -> Combination | None:
    """Highest-scoring combination whose index triple is not in ``used``."""
    best: Combination | None = None
    n = len(groups)

    for g1 in range(n):
        for g2 in range(g1 + 1, n):
            for g3 in range(g2 + 1, n):
                for a in groups[g1]:
                    for b in groups[g2]:
                        for c in groups[g3]:
                            indices = tuple(sorted((a.index, b.index, c.index)))
                            if indices in used:
                                continue
                            total = a.final_score + b.final_score + c.final_score
                            # strict > keeps the first-enumerated candidate on ties
                            if best is None or total > best.total_score:
                                best = Combination(
                                    entries=(a, b, c),
                                    indices=indices,
                                    total_score=total,
                                )
    return best
