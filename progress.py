# progress.py
"""Rich progress display for commands that walk the directory page by page.

Disabled when LAWYERS_NO_PROGRESS=1 is set (for CI / piped output).
"""

from __future__ import annotations

import os
from typing import Optional

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


def is_progress_enabled() -> bool:
    """Return True if progress bars should be shown."""
    return not os.environ.get("LAWYERS_NO_PROGRESS")


class PageProgress:
    """Spinner with a running count of pages and lawyers read.

    The total is unknown up front, so this shows counts rather than a bar.
    The description notes when pages are coming from the static fallback.
    """

    def __init__(self, label: str = "Reading directory") -> None:
        self._label = label
        self._pages = 0
        self._lawyers = 0
        self._sources: set[str] = set()
        self._progress: Optional[Progress] = None
        self._task_id = None

    def start(self) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            TimeElapsedColumn(),
            console=Console(stderr=True),
        )
        self._task_id = self._progress.add_task(self._label, total=None)
        self._progress.start()

    def stop(self) -> None:
        if self._progress:
            self._progress.stop()

    def page_read(self, count: int, source: str) -> None:
        """Called after each page is fetched."""
        self._pages += 1
        self._lawyers += count
        self._sources.add(source)

        if self._progress and self._task_id is not None:
            sources = ", ".join(sorted(self._sources))
            self._progress.update(
                self._task_id,
                description=(
                    f"{self._label}: {self._lawyers:,} lawyers, "
                    f"{self._pages} pages ({sources})"
                ),
            )

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()
