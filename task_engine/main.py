"""
Command-line report entry point

Usage:
  python -m task_engine.main TASKS_JSON [options]

TASKS_JSON holds task records either as a list or as an object keyed by task id.

Options:
  --start YYYY-MM-DD   First day of the window
  --end YYYY-MM-DD     Last day of the window
  --period NAME        Window shortcut: today, month, 3months, year
  --owner ID           Only tasks of this owner
  --board              Print the grouped list view instead of the report
  --json               Print JSON instead of text
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError as ModelValidationError
from task_engine.config.constants import WINDOW_SHORTCUTS
from task_engine.config.settings import settings
from task_engine.models.task import Task
from task_engine.services.analytics_service import AnalyticsService
from task_engine.utils.date_utils import SystemClock
from task_engine.utils.error_handler import format_error_message
from task_engine.utils.formatters import format_report, format_time, format_badges, format_weekdays
from task_engine.utils.logger import logger


def load_tasks(path: Path, owner_id: Optional[str] = None) -> List[Task]:
    """
    Load task records from a JSON snapshot

    Args:
        path: JSON file path
        owner_id: Keep only this owner's tasks

    Returns:
        Parsed tasks

    Raises:
        pydantic.ValidationError: if a record is malformed
        ValueError: if the snapshot is neither a list nor an object of objects
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if isinstance(raw, dict):
        invalid = [key for key, value in raw.items() if not isinstance(value, dict)]
        if invalid:
            raise ValueError(f"Task entries must be objects: {', '.join(invalid)}")
        records = [{"id": key, **value} for key, value in raw.items()]
    elif isinstance(raw, list):
        records = raw
    else:
        raise ValueError("Task snapshot must be a list or an object keyed by task id")

    tasks = [Task.model_validate(record) for record in records]
    if owner_id is not None:
        tasks = [t for t in tasks if t.owner_id == owner_id]

    logger.debug(f"Loaded {len(tasks)} tasks from {path}")
    return tasks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Task report for a date window")
    parser.add_argument("tasks_json", type=Path)
    parser.add_argument("--start", type=date.fromisoformat)
    parser.add_argument("--end", type=date.fromisoformat)
    parser.add_argument("--period", choices=WINDOW_SHORTCUTS)
    parser.add_argument("--owner")
    parser.add_argument("--board", action="store_true")
    parser.add_argument("--json", action="store_true", dest="as_json")
    return parser


def _print_board(service: AnalyticsService, tasks: List[Task], window) -> None:
    board = service.get_board(tasks, window)
    badges = {b.task_id: b for b in service.get_badges(tasks)}

    print(f"Priority ({len(board.priority)}):")
    for task in board.priority:
        print(f"  * {task.title} [{format_badges(badges[task.id])}]")
    print(f"Backlog ({len(board.backlog)}):")
    for task in board.backlog:
        print(f"  - {task.title} [{format_badges(badges[task.id])}]")

    recurring = [t for t in tasks if t.is_recurring]
    if recurring:
        print(f"Recurring ({len(recurring)}):")
        for task in recurring:
            print(f"  ~ {task.title} ({format_weekdays(task.recurring_days)}) [{format_badges(badges[task.id])}]")

    for label, weeks in (("Future", board.future_weeks), ("Past", board.past_weeks)):
        for week in weeks:
            print(f"{label} week {week.start_date} - {week.end_date}: {len(week.tasks)} tasks")
    for day in board.current_week:
        print(f"{day.day}:")
        for task in day.tasks:
            print(f"  - {task.title} [{format_badges(badges[task.id])}]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        settings.validate()
        service = AnalyticsService(clock=SystemClock())
        tasks = load_tasks(args.tasks_json, args.owner)

        if args.period:
            window = service.window_for_period(args.period)
        elif args.start or args.end:
            window = service.window_for(args.start, args.end)
        else:
            window = service.default_window()

        if args.board:
            if args.as_json:
                print(service.get_board(tasks, window).model_dump_json(by_alias=True, indent=2))
            else:
                _print_board(service, tasks, window)
            return 0

        report = service.get_report(tasks, window)
        if args.as_json:
            print(report.model_dump_json(by_alias=True, indent=2))
        else:
            print(format_report(report))
            routines = service.get_routines(tasks)
            if routines.tasks:
                print(f"\nToday's routines: {routines.completed_count}/{len(routines.tasks)} ({routines.percent}%)")
            running = [b for b in service.get_badges(tasks) if b.is_running]
            for badges in running:
                print(f"Running: {badges.task_id} {format_time(badges.elapsed_seconds)}")
        return 0

    except (OSError, ValueError, ModelValidationError) as e:
        print(format_error_message(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
