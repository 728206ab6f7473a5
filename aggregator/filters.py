"""Pure sorting and filtering helpers for pull request lists.

None of these functions mutate their input; each returns a new list.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from models.data_models import PullRequest

SORT_KEYS = {
    "created": lambda pr: pr.created_at,
    "comments": lambda pr: pr.comments,
    "updated": lambda pr: pr.updated_at,
}


def filter_by_state(prs: Iterable[PullRequest], status: str) -> list[PullRequest]:
    """Keep PRs in the given state ("all" keeps everything)."""
    if status == "all":
        return list(prs)
    return [pr for pr in prs if pr.state == status]


def filter_by_assignee(prs: Iterable[PullRequest], login: str) -> list[PullRequest]:
    """Keep PRs that list ``login`` among their assignees."""
    return [pr for pr in prs if login in pr.assignees]


def sort_pull_requests(prs: Iterable[PullRequest], sort: str) -> list[PullRequest]:
    """Sort newest/most-discussed first.

    Unknown sort keys fall back to last-updated. Ties keep their input order.
    List payloads from GitHub have no comment counts, so ``comments`` only
    reorders pull requests built from detail payloads.
    """
    key = SORT_KEYS.get(sort, SORT_KEYS["updated"])
    return sorted(prs, key=key, reverse=True)


def _subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_range_cutoff(date_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Compute the earliest creation time allowed by a date range.

    Args:
        date_range: "today", "week", "month", "year" or "all"
        now: Reference time (defaults to the current UTC time)

    Returns:
        The cutoff datetime, or None when no date filtering applies
    """
    now = now or datetime.now(timezone.utc)

    if date_range == "today":
        return now - timedelta(days=1)
    if date_range == "week":
        return now - timedelta(days=7)
    if date_range == "month":
        return _subtract_months(now, 1)
    if date_range == "year":
        return _subtract_months(now, 12)
    return None


def filter_by_date_range(
    prs: Iterable[PullRequest],
    date_range: str,
    now: Optional[datetime] = None
) -> list[PullRequest]:
    """Keep PRs created at or after the cutoff for ``date_range``."""
    cutoff = date_range_cutoff(date_range, now)
    if cutoff is None:
        return list(prs)
    return [pr for pr in prs if pr.created_at >= cutoff]
