"""Tests for dashboard aggregates"""

from datetime import datetime, timezone

from regdesk.models.registration import Registration, RegistrationStatus
from regdesk.services.stats_service import build_dashboard_stats


def _registration(status, call_date_time):
    return Registration(
        full_name="Stat Person",
        email="stats@example.com",
        status=status,
        is_expired=status == RegistrationStatus.COMPLETED,
        call_date_time=call_date_time,
    )


class TestDashboardStats:
    """Test KPI and chart aggregates"""

    def test_build_dashboard_stats(self):
        registrations = [
            _registration(
                RegistrationStatus.UPCOMING, datetime(2025, 2, 3, tzinfo=timezone.utc)
            ),
            _registration(
                RegistrationStatus.PENDING, datetime(2024, 12, 31, tzinfo=timezone.utc)
            ),
            _registration(
                RegistrationStatus.COMPLETED, datetime(2025, 2, 20, tzinfo=timezone.utc)
            ),
            _registration(RegistrationStatus.COMPLETED, None),
        ]

        stats = build_dashboard_stats(registrations)

        assert stats["total"] == 4
        assert stats["byStatus"] == {"upcoming": 1, "pending": 1, "completed": 2}
        assert stats["ticketStates"] == {"active": 2, "expired": 2}
        assert stats["monthly"] == [
            {"name": "Dec 2024", "registrations": 1},
            {"name": "Feb 2025", "registrations": 2},
        ]

    def test_empty_stats(self):
        stats = build_dashboard_stats([])

        assert stats["total"] == 0
        assert stats["byStatus"] == {"upcoming": 0, "pending": 0, "completed": 0}
        assert stats["monthly"] == []

    def test_stats_endpoint(self, client, make_registration):
        make_registration(status=RegistrationStatus.PENDING)
        make_registration(status=RegistrationStatus.COMPLETED)

        response = client.get("/dashboard/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["byStatus"]["pending"] == 1
        assert data["ticketStates"]["expired"] == 1
        assert data["monthly"] == [{"name": "Mar 2025", "registrations": 2}]
