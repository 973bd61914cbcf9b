from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of one refinement iteration.

    ``assignments`` holds the cluster index of every observation and
    ``centroids`` the centroids those assignments were made against.
    """

    assignments: tuple
    centroids: tuple

    def __getitem__(self, key):
        # allow entry["assignments"] as well as entry.assignments
        if key in ("assignments", "centroids"):
            return getattr(self, key)
        raise KeyError(key)


class HistoryRecorder:
    def __init__(self, enabled=False):
        self.enabled = enabled
        self.entries: List[HistoryEntry] = []

    def record(self, labels, centroids):
        if not self.enabled:
            return
        self.entries.append(
            HistoryEntry(
                assignments=tuple(labels),
                centroids=tuple(tuple(c) for c in centroids),
            )
        )

    def result(self):
        return tuple(self.entries) if self.enabled else None
