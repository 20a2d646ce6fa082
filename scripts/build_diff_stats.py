#!/usr/bin/env python3
"""
Build per-transformation change statistics from the history store.

Reads the history Parquet file, aligns each original text with its humanized
version, and stores the counts in a derived dataset.

Statistics computed:
- same_words: Words left unchanged
- added_words: Words inserted by the transformation
- removed_words: Words deleted by the transformation
- change_ratio: Share of words added or removed (0-1)

The derived dataset is fully regenerable from the history store.
"""

import logging
import sys
from pathlib import Path

import polars as pl

from humandiff.config import Settings, configure_logging
from humandiff.data.history import HistoryStore
from humandiff.text.diff import compute_diff, summarize

logger = logging.getLogger(__name__)

STATS_SCHEMA = {
    "event_id": pl.String,
    "mode": pl.String,
    "same_words": pl.Int64,
    "added_words": pl.Int64,
    "removed_words": pl.Int64,
    "change_ratio": pl.Float64,
}


def compute_stats_for_row(row: dict, window: int) -> dict:
    """
    Compute change statistics for a single history row.

    Args:
        row: Dictionary with at least 'id', 'mode', 'original_text' and
            'humanized_text' keys
        window: Lookahead window for the alignment engine

    Returns:
        Dictionary matching STATS_SCHEMA
    """
    stats = summarize(compute_diff(row["original_text"], row["humanized_text"], window=window))
    return {
        "event_id": row["id"],
        "mode": row["mode"],
        "same_words": stats.same_words,
        "added_words": stats.added_words,
        "removed_words": stats.removed_words,
        "change_ratio": stats.change_ratio,
    }


def build_diff_stats(history_path: str, output_path: str, window: int) -> pl.DataFrame:
    """
    Build the statistics dataset from history.

    Args:
        history_path: Path to the history Parquet file
        output_path: Path where the derived dataset will be written
        window: Lookahead window for the alignment engine

    Returns:
        The written DataFrame
    """
    logger.info(f"Reading history: {history_path}")
    history_df = HistoryStore(history_path).read()
    total = len(history_df)
    logger.info(f"Found {total} transformations")

    records = [compute_stats_for_row(row, window) for row in history_df.iter_rows(named=True)]
    stats_df = pl.DataFrame(records, schema=STATS_SCHEMA)

    output_filepath = Path(output_path)
    output_filepath.parent.mkdir(parents=True, exist_ok=True)
    stats_df.write_parquet(output_filepath)
    logger.info(f"Wrote {len(stats_df)} rows to {output_path}")

    if total:
        by_mode = (
            stats_df.group_by("mode")
            .agg(pl.col("change_ratio").mean().alias("mean_change_ratio"), pl.len().alias("count"))
            .sort("mode")
        )
        for row in by_mode.iter_rows(named=True):
            logger.info(f"  {row['mode']}: {row['count']} transformations, {row['mean_change_ratio']:.1%} changed")

    return stats_df


def main():
    """Main execution function."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    output_path = sys.argv[1] if len(sys.argv) > 1 else "datasets/diff_stats.parquet"
    build_diff_stats(settings.history_path, output_path, settings.lookahead_window)


if __name__ == "__main__":
    main()
