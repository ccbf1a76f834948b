"""Sequential report numbers (ENV-<year>-<seq>)."""

import logging
from typing import Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spill_registry.config import settings
from spill_registry.core.errors import ConcurrentAllocationConflict, MalformedSequenceValue
from spill_registry.database import utcnow
from spill_registry.models.report import Report
from spill_registry.models.sequence import ReportSequence

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = "global"


def format_sequential_number(year: int, value: int, prefix: str = "ENV", width: int = 3) -> str:
    """Format a display number, e.g. (2024, 7) -> ENV-2024-007."""
    return f"{prefix}-{year}-{str(value).zfill(width)}"


def parse_sequential_number(number: Optional[str]) -> Tuple[str, str, int]:
    """Split a display number into (prefix, year, value).

    Raises MalformedSequenceValue unless the number has exactly three
    hyphen-separated parts and the last one is an integer.
    """
    if not number:
        raise MalformedSequenceValue(number)
    parts = number.split("-")
    if len(parts) != 3:
        raise MalformedSequenceValue(number)
    try:
        value = int(parts[2])
    except ValueError:
        raise MalformedSequenceValue(number)
    return parts[0], parts[1], value


def next_sequential_number(
    previous: Optional[str],
    year: int,
    prefix: str = "ENV",
    width: int = 3,
) -> str:
    """Derive the number following the most recent one.

    The year is always the given (current) year; the suffix carries over from
    the previous number even when that number belongs to an earlier year.
    A missing or malformed previous number restarts at 001.
    """
    if previous is None:
        return format_sequential_number(year, 1, prefix, width)
    try:
        _, _, value = parse_sequential_number(previous)
    except MalformedSequenceValue as e:
        logger.warning(f"{e}; restarting sequence at 1")
        return format_sequential_number(year, 1, prefix, width)
    return format_sequential_number(year, value + 1, prefix, width)


class SequenceAllocator:
    """Hands out sequential numbers from a counter row claimed by compare-and-swap.

    allocate() must run in the same transaction as the report insert; a lost
    claim raises ConcurrentAllocationConflict and the caller rolls back.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        reset_yearly: Optional[bool] = None,
    ):
        self.prefix = prefix if prefix is not None else settings.sequence_prefix
        self.width = width if width is not None else settings.sequence_width
        self.reset_yearly = reset_yearly if reset_yearly is not None else settings.sequence_reset_yearly

    def scope_for(self, year: int) -> str:
        return str(year) if self.reset_yearly else GLOBAL_SCOPE

    def allocate(self, db: Session, year: int) -> str:
        """Claim the next number for the given year."""
        scope = self.scope_for(year)
        current = db.execute(
            select(ReportSequence.last_value).where(ReportSequence.scope == scope)
        ).scalar_one_or_none()

        if current is None:
            value = self._seed_value(db, year)
            db.add(ReportSequence(scope=scope, last_value=value))
            try:
                db.flush()
            except IntegrityError:
                raise ConcurrentAllocationConflict(f"Sequence counter '{scope}' was created concurrently")
        else:
            value = current + 1
            if not self._claim(db, scope, current, value):
                raise ConcurrentAllocationConflict(f"Sequence value {value} in '{scope}' was claimed concurrently")

        return format_sequential_number(year, value, self.prefix, self.width)

    def _claim(self, db: Session, scope: str, expected: int, value: int) -> bool:
        result = db.execute(
            update(ReportSequence)
            .where(ReportSequence.scope == scope, ReportSequence.last_value == expected)
            .values(last_value=value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _seed_value(self, db: Session, year: int) -> int:
        """First value for a new counter.

        Follows the most recent report, but always lands above every
        well-formed suffix already issued in the scope.
        """
        return max(self._reference_value(db, year), self._highest_value(db, year) + 1)

    def _reference_value(self, db: Session, year: int) -> int:
        previous = (
            db.query(Report.env_sequential_number)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(1)
            .scalar()
        )
        if not self.reset_yearly:
            number = next_sequential_number(previous, year, self.prefix, self.width)
            return parse_sequential_number(number)[2]

        if previous is None:
            return 1
        try:
            _, previous_year, value = parse_sequential_number(previous)
        except MalformedSequenceValue as e:
            logger.warning(f"{e}; restarting sequence at 1")
            return 1
        return value + 1 if previous_year == str(year) else 1

    def _highest_value(self, db: Session, year: int) -> int:
        """Highest well-formed suffix in the scope, 0 when there is none."""
        highest = 0
        for (number,) in db.query(Report.env_sequential_number):
            try:
                _, number_year, value = parse_sequential_number(number)
            except MalformedSequenceValue:
                continue
            if self.reset_yearly and number_year != str(year):
                continue
            highest = max(highest, value)
        return highest
