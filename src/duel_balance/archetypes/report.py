"""CSV and Markdown summaries of TTK batch results."""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from duel_balance.archetypes.models import TTKResult, TTKValidation

_TEMPLATE_DIR = Path(__file__).parent / "templates"

CSV_COLUMNS = [
    "archetypeA",
    "archetypeB",
    "budget",
    "avgRounds",
    "minRounds",
    "maxRounds",
    "stdDev",
    "winRateA",
    "winRateB",
    "totalSims",
]


def generate_csv(results: list[TTKResult]) -> str:
    """One row per result, header first."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for r in results:
        writer.writerow([
            r.archetype_a,
            r.archetype_b,
            f"{r.budget:g}",
            f"{r.rounds.avg:.2f}",
            r.rounds.min,
            r.rounds.max,
            f"{r.rounds.std_dev:.2f}",
            f"{r.win_rate_a:.2f}",
            f"{r.win_rate_b:.2f}",
            r.simulations,
        ])
    return buf.getvalue()


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def generate_narrative(
    results: list[TTKResult],
    validations: list[TTKValidation],
    generated: str | None = None,
) -> str:
    """Markdown report: totals, pass/fail counts, critical issues and warnings."""
    total = len(validations)
    valid = sum(1 for v in validations if v.is_valid)

    template = _environment().get_template("ttk_report.md.j2")
    return template.render(
        generated=generated or date.today().isoformat(),
        total_results=len(results),
        total=total,
        valid=valid,
        invalid=total - valid,
        valid_percent=(valid / total * 100) if total else 0.0,
        criticals=[v for v in validations if not v.is_valid],
        warned=[v for v in validations if v.is_valid and v.warnings],
    )
