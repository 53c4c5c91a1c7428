"""Reporting utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from .tree import ProfileStore

REPORT_FILENAMES = {
    "summary": "summary.json",
    "profiles": "profiles.csv",
}


def profiles_frame(store: ProfileStore) -> pd.DataFrame:
    """One row per person, in name order."""
    rows = [
        {
            "name": name,
            "n_markers": len(profile.markers),
            "interest_flag": profile.interest_flag,
        }
        for name, profile in store.items()
    ]
    return pd.DataFrame(rows, columns=["name", "n_markers", "interest_flag"])


def markers_frame(store: ProfileStore) -> pd.DataFrame:
    """Long-format table of every marker held in the store."""
    rows = [
        {"name": name, "marker": marker.name, "occurrences": marker.occurrences}
        for name, profile in store.items()
        for marker in profile.markers
    ]
    return pd.DataFrame(rows, columns=["name", "marker", "occurrences"])


def summary(store: ProfileStore) -> dict[str, Any]:
    unmarked = store.list_unmarked()
    return {
        "total": len(store),
        "of_interest": store.count_by_status(True),
        "unmarked": len(unmarked),
        "unmarked_names": unmarked,
        "height": store.height(),
    }


def write_report(store: ProfileStore, output_dir: Path, write_csv: bool = True) -> dict[str, Path]:
    """Write the summary JSON and, optionally, the per-profile CSV."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    summary_path = output_dir / REPORT_FILENAMES["summary"]
    summary_path.write_text(json.dumps(summary(store), indent=2), encoding="utf-8")
    artifacts = {"summary": summary_path}

    if write_csv:
        profiles_path = output_dir / REPORT_FILENAMES["profiles"]
        profiles_frame(store).to_csv(profiles_path, index=False)
        artifacts["profiles"] = profiles_path

    return artifacts
