"""
Rendering port.

The pipeline talks to display collaborators only through these interfaces.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import SiteProfile, SummaryRecord, ChartPoint, TableRow


class ChartHandle(ABC):
    """A chart currently shown for one feed."""

    def __init__(self):
        self.released = False

    def release(self) -> None:
        """Release the chart. Calling it again is a no-op."""
        if not self.released:
            self._release()
            self.released = True

    @abstractmethod
    def _release(self) -> None:
        ...


class Renderer(ABC):
    """Display collaborator for feed results."""

    @abstractmethod
    def show_loading(self, profile: SiteProfile, message: str) -> None:
        ...

    @abstractmethod
    def hide_loading(self, profile: SiteProfile) -> None:
        ...

    @abstractmethod
    def show_summary(self, profile: SiteProfile, summary: SummaryRecord) -> None:
        ...

    @abstractmethod
    def show_gauge(self, profile: SiteProfile, percent: float) -> None:
        ...

    @abstractmethod
    def draw_chart(self, profile: SiteProfile, points: List[ChartPoint]) -> ChartHandle:
        ...

    @abstractmethod
    def show_table(self, profile: SiteProfile, rows: List[TableRow]) -> None:
        ...

    @abstractmethod
    def show_no_data(self, profile: SiteProfile, message: str) -> None:
        ...

    @abstractmethod
    def show_error(self, profile: SiteProfile, message: str) -> None:
        ...
