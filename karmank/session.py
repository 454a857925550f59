"""Application-level holder of the current report."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import date, datetime

from .config.settings import Settings
from .dasha.lookup import DashaCalculator, dasha_calculator
from .dasha.models import ActiveLayers
from .dasha.overlay import DynamicReading, dynamic_reading
from .errors import IncompleteInput
from .narrative.prompts import dasha_summary
from .numerology.dates import BirthDate
from .numerology.recurrence import RecurrenceTable
from .numerology.report import NumerologyReport, build_report, catalogs_for
from .numerology.yogas import YogaEntry

LOG = logging.getLogger(__name__)

__all__ = ["ReportSession"]


class ReportSession:
    """Single writer of the current :class:`NumerologyReport`.

    :meth:`submit` replaces the report and its dasha calculator in one step;
    every other method only reads them.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        yoga_catalog: Sequence[YogaEntry] | None = None,
        recurrence_table: RecurrenceTable | None = None,
    ) -> None:
        self.settings = settings or Settings()
        default_yogas, default_table = catalogs_for(self.settings)
        self.yoga_catalog = default_yogas if yoga_catalog is None else yoga_catalog
        self.recurrence_table = default_table if recurrence_table is None else recurrence_table
        self._lock = threading.Lock()
        self._report: NumerologyReport | None = None
        self._calculator: DashaCalculator | None = None

    def submit(self, name: str, dob: BirthDate | date | str) -> NumerologyReport:
        report = build_report(
            name,
            dob,
            yoga_catalog=self.yoga_catalog,
            recurrence_table=self.recurrence_table,
            settings=self.settings,
        )
        calculator = dasha_calculator(
            report.birth,
            self.settings.dasha.horizon_years,
            self.settings.dasha.monthly_durations,
        )
        with self._lock:
            self._report = report
            self._calculator = calculator
        LOG.info("report ready for %s (%s)", report.name, report.birth.isoformat())
        return report

    def clear(self) -> None:
        with self._lock:
            self._report = None
            self._calculator = None

    @property
    def report(self) -> NumerologyReport | None:
        return self._report

    def _require(self) -> tuple[NumerologyReport, DashaCalculator]:
        with self._lock:
            report, calculator = self._report, self._calculator
        if report is None or calculator is None:
            raise IncompleteInput(["name", "dob"])
        return report, calculator

    @property
    def calculator(self) -> DashaCalculator:
        return self._require()[1]

    def active_layers(self, target: date | datetime, view: str = "daily") -> ActiveLayers:
        return self._require()[1].active_layers(target, view)

    def dynamic(self, target: date | datetime, view: str = "daily") -> DynamicReading:
        """Overlay the periods active on ``target`` onto the current report."""

        report, calculator = self._require()
        core = report.grid.core
        return dynamic_reading(
            report.grid.histogram,
            calculator.active_layers(target, view),
            view,
            self.yoga_catalog,
            self.recurrence_table,
            basic=core.basic_root,
            destiny=core.destiny_root,
            language=report.language,
            min_repeat=self.settings.numerology.min_repeat,
        )

    def summary(self, target: date | datetime, view: str = "daily") -> str:
        return dasha_summary(self.dynamic(target, view))
