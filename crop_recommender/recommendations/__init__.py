"""
Recommendation engine: turns a crop catalog and a growing request into
ranked three-crop combinations with display cards.

Modules
-------
period    : extract_month() + is_within_window() + filter_by_window()
            — circular growing-window matching.
scorer    : ScoredEntry dataclass + score_entries() — profit / labor /
            rarity sub-scores and the weighted final score.
combiner  : Combination dataclass + search_combinations() — greedy,
            deduplicated search over three-group triples.
formatter : format_combinations() — cards, crop summaries, total profit.
engine    : recommend() — the pure entry point tying the stages together.
reporter  : write_result_json() — file output.
"""
