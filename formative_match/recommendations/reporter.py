"""
Recommendation report writer: CSV and JSON output for ranked opportunities.

All functions are pure I/O: they consume an in-memory ScoredOpportunity
list (already ranked by ``RecommendationEngine.recommend``) and write a
human-readable + machine-readable file.  Rank is the 1-based list position.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from formative_match.recommendations.engine import ScoredOpportunity

logger = logging.getLogger(__name__)

_CSV_FIELDS = [
    "rank", "opportunity_id", "title", "company", "type", "industry",
    "budget", "deadline", "score", "user_type_score", "industry_score",
    "budget_score", "reasoning",
]


def recommendation_rows(scored: list[ScoredOpportunity]) -> list[dict[str, Any]]:
    """Flatten ranked recommendations into plain dict rows."""
    rows: list[dict[str, Any]] = []
    for rank, item in enumerate(scored, start=1):
        opp = item.opportunity
        rows.append(
            {
                "rank":            rank,
                "opportunity_id":  opp.id,
                "title":           opp.title,
                "company":         opp.company_name,
                "type":            opp.opportunity_type,
                "industry":        opp.industry,
                "budget":          opp.budget_label,
                "deadline":        opp.deadline.isoformat() if opp.deadline else None,
                "score":           round(item.score, 2),
                "user_type_score": item.components.user_type_score,
                "industry_score":  item.components.industry_score,
                "budget_score":    item.components.budget_score,
                "reasoning":       item.reasoning,
            }
        )
    return rows


def write_recommendation_json(
    scored: list[ScoredOpportunity],
    output_path: Path,
) -> Path:
    """Write ranked recommendations as a JSON document.

    Structure::

        {"count": 2, "recommendations": [{"rank": 1, ...}, ...]}

    Args:
        scored:      Ranked ScoredOpportunity list.
        output_path: Destination file (parent directories are created).

    Returns:
        Path to the written JSON file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = recommendation_rows(scored)
    payload = {"count": len(rows), "recommendations": rows}
    output_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Wrote %d recommendations to %s", len(rows), output_path)
    return output_path


def write_recommendation_csv(
    scored: list[ScoredOpportunity],
    output_path: Path,
) -> Path:
    """Write ranked recommendations as CSV (one row per opportunity).

    Args:
        scored:      Ranked ScoredOpportunity list.
        output_path: Destination file (parent directories are created).

    Returns:
        Path to the written CSV file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = recommendation_rows(scored)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Wrote %d recommendations to %s", len(rows), output_path)
    return output_path
