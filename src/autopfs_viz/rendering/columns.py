"""Column registry for the session table.

Each Column bundles everything the table needs for one data dimension: the
header label (which is also the sort key), a cell renderer, a comparator and
an optional row-filter predicate. ``COLUMNS`` is the single source of truth
for both the header and the rows.

Comparator contract: ``compare(a, b, ascending) -> number``. Scalar
comparators ignore ``ascending``; the sort engine swaps operands to get
descending order. Multi-valued comparators (Event #, Character) use it to
pick each row's representative value: the minimum when ascending, the
maximum when descending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from loguru import logger
from rich.text import Text

from autopfs_viz.models import Session, is_missing_date
from autopfs_viz.utils.helpers import compare_text, compare_values, is_number, value_key

RenderFn = Callable[[Session], Text]
CompareFn = Callable[[Session, Session, bool], float]


@dataclass(frozen=True)
class Filter:
    """A row filter: keep sessions whose ``column`` matches one of ``values``."""

    column: str
    values: Tuple[str, ...] = ()
    op: str = ""


SelectFn = Callable[[Session, Filter], bool]


@dataclass(frozen=True)
class Column:
    """One column of the session table."""

    name: str
    render: RenderFn
    compare: CompareFn
    select: Optional[SelectFn] = field(default=None, compare=False)


# =============================================================================
# RENDERERS
# =============================================================================


def _render_date(session: Session) -> Text:
    if is_missing_date(session.date):
        return Text("(missing)", style="dim")
    return Text(session.date.strftime("%Y-%m-%d"))


def _render_int(value: Any) -> Text:
    if is_number(value) and value == -1:
        return Text("N/A", style="dim")
    return Text(str(value))


def _render_event_numbers(session: Session) -> Text:
    return Text(", ".join(
        str(n) if is_number(n) else "(missing)" for n in session.event_numbers
    ))


def _render_characters(session: Session) -> Text:
    text = Text()
    for i, char in enumerate(session.characters):
        if i:
            text.append(", ")
        if not is_number(char):
            text.append(str(char))
            continue
        text.append(str(abs(char)))
        if char < 0:
            text.append("ᴳᴹ", style="bold magenta")
    return text


# =============================================================================
# COMPARATORS
# =============================================================================


def _compare_dates(a: Session, b: Session, ascending: bool = True) -> float:
    return (a.date - b.date).total_seconds()


def _role_weight(session: Session) -> int:
    weight = 0
    if session.player:
        weight += 1
    if session.gm:
        weight += 2
    return weight


def _compare_roles(a: Session, b: Session, ascending: bool = True) -> float:
    a_weight = _role_weight(a)
    b_weight = _role_weight(b)
    return a_weight - b_weight


def _scalar(getter: Callable[[Session], Any], text: bool = False) -> CompareFn:
    def compare(a: Session, b: Session, ascending: bool = True) -> float:
        if text:
            return compare_text(getter(a), getter(b))
        return compare_values(getter(a), getter(b))
    return compare


def _representative(values: Sequence[Any], ascending: bool) -> Any:
    if not values:
        return None
    pick = min if ascending else max
    return pick(values, key=value_key)


def _multi(getter: Callable[[Session], Sequence[Any]]) -> CompareFn:
    """Direction-aware comparator over a multi-valued field.

    Rows are keyed by their smallest value when ascending and their largest
    when descending. A row with no values compares before any other row.
    """
    def compare(a: Session, b: Session, ascending: bool = True) -> float:
        a_key = _representative(getter(a), ascending)
        b_key = _representative(getter(b), ascending)
        if a_key is None and b_key is None:
            return 0
        if a_key is None:
            return -1
        if b_key is None:
            return 1
        return compare_values(a_key, b_key)
    return compare


def _character_magnitudes(session: Session) -> List[Any]:
    # sign encodes the GM role, not ordering
    return [abs(c) if is_number(c) else c for c in session.characters]


# =============================================================================
# FILTER PREDICATES
# =============================================================================


def _select_date(session: Session, flt: Filter) -> bool:
    session_day = session.date.date()
    for value in flt.values:
        try:
            bound = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError as e:
            logger.warning(f"parsing date filter value {value!r}: {e}")
            continue
        if flt.op == "before" and session_day < bound:
            return True
        if flt.op == "after" and session_day > bound:
            return True
    return False


def _select_character(session: Session, flt: Filter) -> bool:
    wanted = set()
    for value in flt.values:
        try:
            wanted.add(abs(int(value)))
        except ValueError:
            continue
    return any(c in wanted for c in _character_magnitudes(session))


def _select_values(getter: Callable[[Session], Any]) -> SelectFn:
    def select(session: Session, flt: Filter) -> bool:
        value = getter(session)
        candidates = value if isinstance(value, list) else [value]
        shown = {str(v) for v in candidates}
        return any(v in shown for v in flt.values)
    return select


COLUMNS: Tuple[Column, ...] = (
    Column("Date", _render_date, _compare_dates, _select_date),
    Column(
        "System",
        lambda s: Text(s.game),
        _scalar(lambda s: s.game, text=True),
        _select_values(lambda s: s.game),
    ),
    Column(
        "Event #",
        _render_event_numbers,
        _multi(lambda s: s.event_numbers),
        _select_values(lambda s: s.event_numbers),
    ),
    Column(
        "Character",
        _render_characters,
        _multi(_character_magnitudes),
        _select_character,
    ),
    Column(
        "Season",
        lambda s: _render_int(s.season),
        _scalar(lambda s: s.season),
        _select_values(lambda s: s.season),
    ),
    Column(
        "Number",
        lambda s: _render_int(s.number),
        _scalar(lambda s: s.number),
        _select_values(lambda s: s.number),
    ),
    Column(
        "Variant",
        lambda s: Text(s.variant),
        _scalar(lambda s: s.variant, text=True),
        _select_values(lambda s: s.variant),
    ),
    Column(
        "Scenario Name",
        lambda s: Text(s.scenario_name),
        _scalar(lambda s: s.scenario_name, text=True),
        _select_values(lambda s: s.scenario_name),
    ),
    Column(
        "Player/GM",
        lambda s: Text(s.role),
        _compare_roles,
        _select_values(lambda s: s.role),
    ),
)


def get_column(name: str, columns: Sequence[Column] = COLUMNS) -> Optional[Column]:
    """Look up a column by name."""
    for column in columns:
        if column.name == name:
            return column
    return None


def parse_filter(expression: str) -> Filter:
    """Parse a ``Column=v1,v2`` or ``Column<op>=v`` filter expression.

    Examples:
        ``Character=1234,5678``, ``Date>=2019-01-01`` (after),
        ``Date<=2019-12-31`` (before)
    """
    for token, op in ((">=", "after"), ("<=", "before"), ("=", "")):
        if token in expression:
            name, _, raw_values = expression.partition(token)
            values = tuple(v.strip() for v in raw_values.split(",") if v.strip())
            return Filter(column=name.strip(), values=values, op=op)
    raise ValueError(f"filter {expression!r} must look like Column=value[,value...]")


def apply_filters(
    sessions: Sequence[Session],
    filters: Sequence[Filter],
    columns: Sequence[Column] = COLUMNS,
) -> List[Session]:
    """Keep the sessions accepted by every filter.

    Filters naming an unknown column, or a column without a predicate, are
    ignored with a warning.
    """
    if not filters:
        return list(sessions)

    active = []
    for flt in filters:
        column = get_column(flt.column, columns)
        if column is None or column.select is None:
            logger.warning(f"have filter for column {flt.column!r} but column has no select fn")
            continue
        active.append((column.select, flt))

    return [s for s in sessions if all(select(s, flt) for select, flt in active)]


__all__ = [
    "COLUMNS",
    "Column",
    "Filter",
    "apply_filters",
    "get_column",
    "parse_filter",
]
