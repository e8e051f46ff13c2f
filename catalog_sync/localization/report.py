"""Sync report model and text rendering."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

REPORT_TITLE = "Missing Translations Report"


@dataclass
class ReportEntry:
    """A leaf that was added to the target document."""

    path: str
    source_value: str
    translation: Optional[str] = None

    @property
    def translated(self) -> bool:
        return self.translation is not None


@dataclass
class ShapeConflict:
    """A target value replaced by a mapping because the source nests there."""

    path: str
    discarded_value: str


@dataclass
class Report:
    """What a reconciliation run added to the target document."""

    entries: List[ReportEntry] = field(default_factory=list)
    updated_count: int = 0
    conflicts: List[ShapeConflict] = field(default_factory=list)

    def add_translation(self, path: str, source_value: str, translation: str) -> None:
        self.entries.append(ReportEntry(path, source_value, translation))
        self.updated_count += 1

    def add_fallback(self, path: str, source_value: str) -> None:
        self.entries.append(ReportEntry(path, source_value))
        self.updated_count += 1

    def add_conflict(self, path: str, discarded_value: str) -> None:
        self.conflicts.append(ShapeConflict(path, discarded_value))

    @property
    def translated_count(self) -> int:
        return sum(1 for entry in self.entries if entry.translated)

    @property
    def fallback_count(self) -> int:
        return self.updated_count - self.translated_count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logs."""
        return {
            "updated_count": self.updated_count,
            "translated_count": self.translated_count,
            "fallback_count": self.fallback_count,
            "entries": [asdict(entry) for entry in self.entries],
            "conflicts": [asdict(conflict) for conflict in self.conflicts],
        }


def render_report(report: Report) -> str:
    """Render the line-oriented text report."""
    lines = [
        REPORT_TITLE,
        "=" * len(REPORT_TITLE),
        f"Total missing translations: {report.updated_count}",
        "",
        "Missing Translations:",
    ]

    for entry in report.entries:
        line = f"- {entry.path}: {entry.source_value}"
        if entry.translated:
            line += f" (Translated: {entry.translation})"
        lines.append(line)

    if report.conflicts:
        lines.extend(["", "Replaced Values:"])
        for conflict in report.conflicts:
            lines.append(f"- {conflict.path}: {conflict.discarded_value}")

    return "\n".join(lines)
