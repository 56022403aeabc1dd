"""
Tests for the weekly diagnostic model and BugIntensity.
"""

from datetime import date

from egofix.models import (
    BugDiagnosticResponse,
    BugIntensity,
    EventContext,
    WeeklyDiagnostic,
    WeeklyDiagnosticData,
)


class TestBugIntensity:

    def test_scores(self):
        assert [i.score for i in BugIntensity] == [0, 1, 2]


class TestBugDiagnosticResponse:

    def test_dict_round_trip(self):
        response = BugDiagnosticResponse("bug-a", BugIntensity.LOUD, EventContext.SOCIAL)

        assert response.to_dict() == {"bug_id": "bug-a", "intensity": "loud", "primary_context": "social"}
        assert BugDiagnosticResponse.from_dict(response.to_dict()) == response

    def test_missing_context(self):
        response = BugDiagnosticResponse.from_dict({"bug_id": "bug-a", "intensity": "quiet"})

        assert response.primary_context is None


class TestWeeklyDiagnosticData:

    def test_response_for_first_match(self):
        diagnostic = WeeklyDiagnosticData(
            user_id="user-1",
            week_starting=date(2026, 10, 12),
            responses=(
                BugDiagnosticResponse("bug-a", BugIntensity.LOUD),
                BugDiagnosticResponse("bug-b", BugIntensity.QUIET),
                BugDiagnosticResponse("bug-a", BugIntensity.QUIET),
            ),
        )

        assert diagnostic.response_for("bug-a").intensity == BugIntensity.LOUD
        assert diagnostic.response_for("bug-c") is None
        assert diagnostic.bug_ids == {"bug-a", "bug-b"}

    def test_round_trip_through_database(self, db_session, now):
        diagnostic = WeeklyDiagnosticData(
            user_id="user-1",
            week_starting=date(2026, 10, 12),
            responses=(BugDiagnosticResponse("bug-a", BugIntensity.PRESENT, EventContext.ONLINE),),
            completed_at=now,
        )
        db_session.add(WeeklyDiagnostic.from_data(diagnostic))
        db_session.commit()
        db_session.expire_all()

        assert db_session.get(WeeklyDiagnostic, diagnostic.id).to_data() == diagnostic
