from typing import Optional

from passport.params import parse_optional_int
from passport.repositories import Repository


def week_in_range(week_range: str, week: int) -> bool:
    """True when `week` falls inside a "start-end" range. A single number matches exactly."""
    try:
        bounds = [int(part.strip()) for part in week_range.split("-")]
    except ValueError:
        return False
    if len(bounds) == 2:
        return bounds[0] <= week <= bounds[1]
    if len(bounds) == 1:
        return bounds[0] == week
    return False


async def list_modules(repo: Repository, week: Optional[str] = None) -> list:
    week_number = parse_optional_int(week, "week")
    modules = await repo.list_education_modules()
    if week_number is None:
        return modules
    return [m for m in modules if week_in_range(m.week_range, week_number)]
