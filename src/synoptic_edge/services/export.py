"""CSV export of ranked player props."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from synoptic_edge.config import get_settings
from synoptic_edge.data.schemas import RankedPlayerProp
from synoptic_edge.kernel.odds import format_american_odds

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Player",
    "Team",
    "Opponent",
    "Prop",
    "Threshold",
    "Position",
    "Market Line",
    "Market Odds",
    "True Prob %",
    "Implied Prob %",
    "EV %",
    "Confidence %",
    "Rank Score",
]


def ranked_props_frame(rows: Iterable[RankedPlayerProp]) -> pd.DataFrame:
    records = [
        {
            "Player": row.player.name,
            "Team": row.player.team,
            "Opponent": row.opponent.full_name,
            "Prop": row.prop_type,
            "Threshold": row.threshold,
            "Position": row.position,
            "Market Line": row.market_line,
            "Market Odds": format_american_odds(row.market_odds),
            "True Prob %": f"{row.true_probability * 100:.2f}",
            "Implied Prob %": f"{row.implied_probability * 100:.2f}",
            "EV %": f"{row.ev:.2f}",
            "Confidence %": f"{row.confidence * 100:.1f}",
            "Rank Score": f"{row.rank_score:.2f}",
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def export_filename(prop_type: str, threshold: float) -> str:
    return f"synoptic_edge_ranker_{prop_type.replace(' ', '_')}_{threshold:g}.csv"


def export_ranked_props(
    rows: Iterable[RankedPlayerProp],
    prop_type: str,
    threshold: float,
    directory: Path | None = None,
) -> Path:
    """Write ranked props to CSV and return the file path."""

    directory = directory or get_settings().export_dir
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(prop_type, threshold)
    frame = ranked_props_frame(rows)
    frame.to_csv(path, index=False)
    logger.info("Exported %s ranked props to %s", len(frame), path)
    return path
