"""Dashboard aggregates: KPI counts, status breakdown and monthly series"""

from collections import Counter
from datetime import timezone
from typing import Any, Dict, Sequence

from regdesk.models.registration import Registration, RegistrationStatus


def build_dashboard_stats(registrations: Sequence[Registration]) -> Dict[str, Any]:
    """
    Compute the figures shown on the dashboard.

    Monthly buckets use the UTC month of call_date_time, oldest first;
    registrations without a call date are counted in the totals only.
    """
    by_status = Counter(
        r.status.value if isinstance(r.status, RegistrationStatus) else r.status
        for r in registrations
    )
    expired = sum(1 for r in registrations if r.is_expired)

    months = Counter()
    for registration in registrations:
        when = registration.call_date_time
        if when is None:
            continue
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        months[(when.year, when.month)] += 1

    monthly = []
    for (year, month), count in sorted(months.items()):
        label = registration_month_label(year, month)
        monthly.append({"name": label, "registrations": count})

    return {
        "total": len(registrations),
        "byStatus": {s.value: by_status.get(s.value, 0) for s in RegistrationStatus},
        "ticketStates": {"active": len(registrations) - expired, "expired": expired},
        "monthly": monthly,
    }


_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def registration_month_label(year: int, month: int) -> str:
    """Chart label such as 'Mar 2025'"""
    return f"{_MONTH_ABBR[month - 1]} {year}"
