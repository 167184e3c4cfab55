"""
publish_report.py
Format bucket counts as an aligned text chart and write it to the first file
of a gist, renaming that file to the early-bird / night-owl label.
"""

import sys
from dataclasses import dataclass
from typing import List, Protocol

from bar_chart import BAR_WIDTH, pad_to_width, render_bar
from commit_buckets import BUCKET_ORDER, BucketCounts, DAYTIME, EVENING, MORNING, NIGHT
from outcomes import GIST_FAILED, GIST_UPDATED, NO_COMMIT_DATA, NO_GIST_FILES, Outcome

LABELS = {
    MORNING: "🌞 Morning",
    DAYTIME: "🌆 Daytime",
    EVENING: "🌃 Evening",
    NIGHT: "🌙 Night",
}
LABEL_W = 10
COUNT_W = 14

EARLY_BIRD = "I'm an early 🐤"
NIGHT_OWL = "I'm a night 🦉"


class DocumentStore(Protocol):
    def get(self, gist_id: str) -> dict: ...

    def update(self, gist_id: str, files: dict) -> dict: ...


@dataclass(frozen=True)
class ReportLine:
    label: str
    count: int
    percent: float
    bar: str

    def render(self) -> str:
        return " ".join([
            pad_to_width(self.label, LABEL_W),
            pad_to_width(f"{self.count:>5} commits", COUNT_W),
            self.bar,
            pad_to_width(f"{self.percent:.1f}", 5, align='right') + "%",
        ])


def build_report_lines(counts: BucketCounts, width: int = BAR_WIDTH) -> List[ReportLine]:
    total = counts.total
    if total == 0:
        return []
    lines = []
    for bucket in BUCKET_ORDER:
        count = counts.get(bucket)
        percent = count / total * 100
        lines.append(ReportLine(LABELS[bucket], count, percent, render_bar(percent, width)))
    return lines


def render_report(counts: BucketCounts, width: int = BAR_WIDTH) -> str:
    return "\n".join(line.render() for line in build_report_lines(counts, width))


def classify(counts: BucketCounts) -> str:
    # ties go to the owl
    if counts.morning + counts.daytime > counts.evening + counts.night:
        return EARLY_BIRD
    return NIGHT_OWL


def publish_report(store: DocumentStore, gist_id: str, counts: BucketCounts) -> Outcome:
    if counts.total == 0:
        print("No commit data found; gist left untouched.")
        return NO_COMMIT_DATA

    body = render_report(counts)
    try:
        gist = store.get(gist_id)
    except Exception as e:
        print(f"Unable to get gist {gist_id}\n{e}", file=sys.stderr)
        return GIST_FAILED

    files = gist.get("files") if isinstance(gist, dict) else None
    if not files:
        print("No file found in the gist", file=sys.stderr)
        return NO_GIST_FILES

    filename = next(iter(files))
    store.update(gist_id, {filename: {"filename": classify(counts), "content": body}})
    print(GIST_UPDATED.body)
    return GIST_UPDATED
