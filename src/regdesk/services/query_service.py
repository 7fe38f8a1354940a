"""Search, filter, sort and paginate registrations in memory"""

import math
import unicodedata
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Sequence

from regdesk.models.field_kind import SortType
from regdesk.models.registration import Registration, RegistrationStatus
from regdesk.models.registration_fields import FieldSpec, get_field

STATUS_ALL = "all"
STATUS_FILTERS = (STATUS_ALL,) + tuple(s.value for s in RegistrationStatus)


@dataclass
class RegistrationQuery:
    """Criteria for selecting one page of registrations.

    The date range only applies when both bounds are set; it is inclusive
    and compared against the UTC calendar date of call_date_time.
    page is 1-based; page_size None puts every match on page 1.
    """

    search: str = ""
    status: str = STATUS_ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_key: Optional[str] = None
    sort_asc: bool = True
    page: int = 1
    page_size: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.status, RegistrationStatus):
            self.status = self.status.value
        self.status = (self.status or STATUS_ALL).lower()
        if self.status not in STATUS_FILTERS:
            raise ValueError(
                f"Invalid status filter '{self.status}'. "
                f"Expected one of: {', '.join(STATUS_FILTERS)}"
            )
        if self.sort_key:
            get_field(self.sort_key)
        if self.page_size is not None and self.page_size < 1:
            raise ValueError("page_size must be a positive integer")


@dataclass
class QueryResult:
    items: List[Registration] = field(default_factory=list)
    total: int = 0


def matches_search(registration: Registration, search: str) -> bool:
    """Case-insensitive substring match on name, email, profession, id and ticket"""
    if not search:
        return True
    needle = search.casefold()
    haystacks = [
        registration.full_name,
        registration.email,
        registration.current_profession,
        str(registration.id) if registration.id else None,
        str(registration.ticket_no) if registration.ticket_no is not None else None,
    ]
    return any(h is not None and needle in h.casefold() for h in haystacks)


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def matches_date_range(
    registration: Registration, start: Optional[date], end: Optional[date]
) -> bool:
    if start is None or end is None:
        return True
    if registration.call_date_time is None:
        return False
    return start <= _utc_date(registration.call_date_time) <= end


def filter_registrations(
    registrations: Sequence[Registration], query: RegistrationQuery
) -> List[Registration]:
    result = [r for r in registrations if matches_search(r, query.search)]
    if query.status != STATUS_ALL:
        result = [r for r in result if _status_value(r.status) == query.status]
    return [
        r for r in result if matches_date_range(r, query.start_date, query.end_date)
    ]


def collation_key(text: str) -> tuple:
    """Locale-style ordering: accents and case only break ties"""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold(), text)


def _is_number(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def effective_sort_type(
    registrations: Sequence[Registration], spec: FieldSpec
) -> SortType:
    """Text fields sort as numbers when every present value parses as one"""
    if spec.sort_type != SortType.STRING:
        return spec.sort_type
    values = [getattr(r, spec.attr, None) for r in registrations]
    present = [v for v in values if v is not None and v != ""]
    if present and all(
        not isinstance(v, (bool, Enum)) and _is_number(v) for v in present
    ):
        return SortType.NUMERIC
    return SortType.STRING


def sort_value(
    registration: Registration, spec: FieldSpec, sort_type: Optional[SortType] = None
) -> tuple:
    """Sort key for one field; missing values order after present ones"""
    value: Any = getattr(registration, spec.attr, None)
    if isinstance(value, Enum):
        value = value.value

    sort_type = sort_type or spec.sort_type
    if sort_type == SortType.LIST:
        value = ", ".join(value) if value else None
        sort_type = SortType.STRING

    if value is None or value == "":
        return (1, 0)

    if sort_type == SortType.NUMERIC:
        return (0, float(value))
    if sort_type == SortType.CHRONOLOGICAL:
        if isinstance(value, datetime) and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (0, value)
    return (0, collation_key(str(value)))


def sort_registrations(
    registrations: Sequence[Registration], sort_key: Optional[str], ascending: bool = True
) -> List[Registration]:
    if not sort_key:
        return list(registrations)
    spec = get_field(sort_key)
    sort_type = effective_sort_type(registrations, spec)
    return sorted(
        registrations,
        key=lambda r: sort_value(r, spec, sort_type),
        reverse=not ascending,
    )


def paginate(
    registrations: Sequence[Registration], page: int, page_size: Optional[int]
) -> List[Registration]:
    if page < 1:
        return []
    if page_size is None:
        return list(registrations) if page == 1 else []
    start = (page - 1) * page_size
    return list(registrations[start : start + page_size])


def apply_query(
    registrations: Sequence[Registration], query: RegistrationQuery
) -> QueryResult:
    """Filter, sort and paginate; total counts every match across pages"""
    matched = filter_registrations(registrations, query)
    ordered = sort_registrations(matched, query.sort_key, query.sort_asc)
    return QueryResult(
        items=paginate(ordered, query.page, query.page_size), total=len(ordered)
    )


def _status_value(status) -> str:
    return status.value if isinstance(status, Enum) else str(status)
