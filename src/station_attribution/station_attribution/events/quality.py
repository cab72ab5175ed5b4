from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .model import NormalizationResult

SHORT_SCAN_SECONDS = 60
LONG_SCAN_SECONDS = 8 * 60 * 60


@dataclass(frozen=True)
class DataQuality:
    score: int
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"score": self.score, "warnings": list(self.warnings), "recommendations": list(self.recommendations)}


def _pct(part: int, whole: int) -> int:
    return round(part * 100 / whole) if whole else 0


def assess_data_quality(normalized: NormalizationResult, *, suppressed_transitions: int = 0) -> DataQuality:
    """Score an event set from 0 to 100.

    Starts at 100 and subtracts a capped penalty per kind of defect found.
    """
    valid = normalized.valid
    total = len(valid) + len(normalized.invalid)
    if total == 0:
        return DataQuality(
            score=0,
            warnings=["No data available"],
            recommendations=["Check date range and filters", "Ensure employees are scanning their work"],
        )

    score = 100.0
    warnings: list[str] = []
    recommendations: list[str] = []

    if normalized.invalid:
        pct = _pct(len(normalized.invalid), total)
        warnings.append(f"{pct}% of scan events were excluded as malformed")
        score -= min(pct, 20)

    groups = Counter((e.item_id, e.employee_id, e.station_id) for e in valid)
    duplicates = sum(n - 1 for n in groups.values() if n > 1)
    if duplicates:
        pct = _pct(duplicates, len(valid))
        warnings.append(f"{pct}% of scan events appear to be duplicates")
        recommendations.append("Review scanning procedures to prevent duplicate entries")
        score -= min(pct, 25)

    completed = [e for e in valid if e.completed_seconds > 0]
    short = sum(1 for e in completed if e.completed_seconds < SHORT_SCAN_SECONDS)
    if short:
        pct = _pct(short, len(valid))
        if pct > 10:
            warnings.append(f"{pct}% of scan events have very short durations (< 1 minute)")
            recommendations.append("Review scanning procedures to ensure accurate time tracking")
            score -= min(pct / 2, 10)

    long_ = sum(1 for e in completed if e.completed_seconds > LONG_SCAN_SECONDS)
    if long_:
        pct = _pct(long_, len(valid))
        if pct > 5:
            warnings.append(f"{pct}% of scan events have very long durations (> 8 hours)")
            recommendations.append("Review time tracking procedures for accuracy")
            score -= min(pct, 15)

    if suppressed_transitions and valid:
        pct = _pct(suppressed_transitions, len(valid))
        warnings.append(f"{suppressed_transitions} out-of-sequence scans were not credited with time")
        recommendations.append("Check for corrective re-scans at stations already completed")
        score -= min(pct, 15)

    final = max(0, int(round(score)))
    if final < 70:
        recommendations.append("Consider reviewing data collection procedures")
    return DataQuality(score=final, warnings=warnings, recommendations=recommendations)
