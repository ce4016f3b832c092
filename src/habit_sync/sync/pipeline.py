from __future__ import annotations

import datetime as dt
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from habit_sync.config import Settings
from habit_sync.errors import HabitSyncError
from habit_sync.sync.classifier import classify_outcomes
from habit_sync.sync.constants import FREQUENCIES, NEXT_DUE_COLUMN_LETTER
from habit_sync.sync.dates import period_key
from habit_sync.sync.publish import build_commands
from habit_sync.sync.results import (
    build_result_row,
    result_range,
    result_row_number,
    store_results,
)
from habit_sync.sync.schedule import Reschedule, select_due
from habit_sync.sync.snapshot import TaskProject, TaskSnapshot
from habit_sync.sync.tables import FrequencySheet, HabitTable


class HabitSync:
    """One nightly pass: record today's results, then lay out tomorrow.

    Stages run strictly in order and the first failure aborts the run.
    Results are written before the habit project is deleted, and the
    project is deleted before tomorrow's tasks are created.
    """

    def __init__(
        self,
        settings: Settings,
        store,
        tasks,
        today: Optional[dt.date] = None,
        dry_run: bool = False,
    ):
        self.settings = settings
        self.store = store
        self.tasks = tasks
        self.today = today or dt.date.today()
        self.tomorrow = self.today + dt.timedelta(days=1)
        self.dry_run = dry_run

        self.table: Optional[HabitTable] = None
        self.sheets: Dict[str, FrequencySheet] = {}
        self.snapshot = TaskSnapshot()
        self.plan = Reschedule()
        self.stages: List[str] = []

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        print(f"{name}...")
        try:
            yield
        except HabitSyncError as e:
            e.in_stage(name)
            raise
        self.stages.append(name)

    @property
    def habit_project(self) -> Optional[TaskProject]:
        return self.snapshot.find_project(self.settings.project_name)

    def fetch(self) -> None:
        self.table = HabitTable(
            self.settings.habit_sheet, self.store.read_table(self.settings.habit_sheet)
        )
        self.sheets = {
            frequency: FrequencySheet(frequency, self.store.read_table(frequency))
            for frequency in FREQUENCIES
        }
        self.snapshot = self.tasks.fetch_snapshot(self.settings.project_name)
        print(
            f"  {len(self.table.habits)} habits, {len(self.snapshot.items)} task items"
        )

    def classify(self) -> None:
        buckets = classify_outcomes(self.snapshot, self.table, self.settings.project_name)
        for frequency, outcomes in buckets.items():
            self.sheets[frequency].outcomes = outcomes
            if outcomes:
                print(f"  {frequency}: {len(outcomes)} result(s)")

        # Work out tomorrow before anything is written so a bad habit row
        # fails the run while both services are still untouched.
        self.plan = select_due(self.table, self.tomorrow)

        # Header mismatches surface here too, ahead of the first write.
        for sheet in self.sheets.values():
            build_result_row(sheet, sheet.outcomes, period_key(sheet.name, self.today))

    def reconcile(self) -> None:
        for frequency in FREQUENCIES:
            sheet = self.sheets[frequency]
            if not sheet.outcomes:
                continue
            if self.dry_run:
                period = period_key(frequency, self.today)
                print(f"  would write {result_range(sheet, result_row_number(sheet, period))}")
                continue
            written = store_results(self.store, sheet, self.today)
            print(f"  wrote {written}")

    def purge(self) -> None:
        project = self.habit_project
        if project is None:
            print(f"  no '{self.settings.project_name}' project to clear")
            return
        if self.dry_run:
            print(f"  would delete project {project.id}")
            return
        self.tasks.delete_project(project.id)

    def reschedule(self) -> None:
        if not self.plan.due:
            print("  nothing due tomorrow")
            return
        for name, next_date in self.plan.next_dates.items():
            print(f"  {name} -> {next_date}")
        if self.dry_run:
            return
        column = NEXT_DUE_COLUMN_LETTER
        self.store.write_column(
            f"{self.settings.habit_sheet}!{column}:{column}", self.plan.column
        )

    def publish(self) -> None:
        commands = build_commands(self.plan.due, self.tomorrow, self.settings.project_name)
        if self.dry_run:
            print(f"  would send {len(commands)} command(s)")
            return
        self.tasks.create_batch(commands)
        print(f"  created {len(self.plan.due)} task(s) for {self.tomorrow.isoformat()}")

    def run(self) -> None:
        with self.stage("Fetching"):
            self.fetch()
        with self.stage("Classifying"):
            self.classify()
        with self.stage("Reconciling"):
            self.reconcile()
        with self.stage("Purging"):
            self.purge()
        with self.stage("Rescheduling"):
            self.reschedule()
        with self.stage("Publishing"):
            self.publish()
        print("\nDone!")
