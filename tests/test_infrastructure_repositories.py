"""
Unit tests for the Supabase repository implementations.

The Supabase client is replaced by a MagicMock whose query builder returns
itself from every chained call, so tests can assert on the filters applied
and control what ``execute()`` returns.
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from application.exceptions import ConflictError
from infrastructure.db import (
    SupabaseExerciseTemplateRepository,
    SupabaseUserRepository,
    SupabaseWorkoutLogRepository,
    SupabaseWorkoutPlanRepository,
)

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit

CHAIN_METHODS = (
    "select", "insert", "update", "delete", "eq", "in_",
    "gte", "lte", "order", "limit", "range",
)


def make_client(data=None, count=None, error=None):
    query = MagicMock()
    for name in CHAIN_METHODS:
        getattr(query, name).return_value = query
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data, count=count)
    client = MagicMock()
    client.table.return_value = query
    client.rpc.return_value = query
    return client, query


def api_error(code: str) -> APIError:
    return APIError({"message": "boom", "code": code, "hint": None, "details": None})


# ============================================================================
# Exercise templates
# ============================================================================

class TestExerciseTemplateRepository:

    def test_create_inserts_owner_scoped_row(self):
        row = {"id": "t1", "user_id": "u1", "name": "Squat", "type": "reps"}
        client, query = make_client(data=[row])

        result = SupabaseExerciseTemplateRepository(client).create("u1", "Squat", "reps")

        assert result == row
        client.table.assert_called_with("exercise_templates")
        query.insert.assert_called_once_with({"user_id": "u1", "name": "Squat", "type": "reps"})

    def test_unique_violation_becomes_conflict(self):
        client, _ = make_client(error=api_error("23505"))
        with pytest.raises(ConflictError):
            SupabaseExerciseTemplateRepository(client).create("u1", "Squat", "reps")

    def test_other_api_errors_propagate(self):
        client, _ = make_client(error=api_error("42P01"))
        with pytest.raises(APIError):
            SupabaseExerciseTemplateRepository(client).create("u1", "Squat", "reps")

    def test_get_filters_by_owner(self):
        client, query = make_client(data=[])
        assert SupabaseExerciseTemplateRepository(client).get("t1", "u1") is None
        query.eq.assert_any_call("id", "t1")
        query.eq.assert_any_call("user_id", "u1")

    def test_malformed_id_is_missing(self):
        client, _ = make_client(error=api_error("22P02"))
        repo = SupabaseExerciseTemplateRepository(client)
        assert repo.get("not-a-uuid", "u1") is None
        assert repo.delete("not-a-uuid", "u1") is False

    def test_delete_reports_whether_a_row_was_removed(self):
        client, _ = make_client(data=[{"id": "t1"}])
        assert SupabaseExerciseTemplateRepository(client).delete("t1", "u1") is True
        client, _ = make_client(data=[])
        assert SupabaseExerciseTemplateRepository(client).delete("t1", "u2") is False

    def test_get_many_skips_query_for_no_ids(self):
        client, _ = make_client(data=[])
        assert SupabaseExerciseTemplateRepository(client).get_many("u1", []) == []
        client.table.assert_not_called()

    def test_count(self):
        client, query = make_client(data=[], count=7)
        assert SupabaseExerciseTemplateRepository(client).count_by_user("u1") == 7
        query.select.assert_called_with("id", count="exact")


# ============================================================================
# Users
# ============================================================================

class TestUserRepository:

    def test_get_by_id_excludes_password_hash(self):
        client, query = make_client(data=[{"id": "u1", "email": "a@b.c"}])
        SupabaseUserRepository(client).get_by_id("u1")
        assert "password_hash" not in query.select.call_args.args[0]

    def test_create_strips_hash_from_result(self):
        client, _ = make_client(data=[{"id": "u1", "email": "a@b.c", "password_hash": "h"}])
        user = SupabaseUserRepository(client).create(email="a@b.c", password_hash="h")
        assert "password_hash" not in user

    def test_duplicate_email_conflict(self):
        client, _ = make_client(error=api_error("23505"))
        with pytest.raises(ConflictError, match="User already exists"):
            SupabaseUserRepository(client).create(email="a@b.c", password_hash="h")


# ============================================================================
# Workout logs
# ============================================================================

class TestWorkoutLogRepository:

    def test_append_calls_stored_procedure(self):
        row = {"id": "l1", "user_id": "u1", "exercises": []}
        client, _ = make_client(data=[row])
        day = datetime(2024, 5, 6, tzinfo=timezone.utc)
        exercise = {"exercise_template_id": "t1", "reps": 3}

        assert SupabaseWorkoutLogRepository(client).append_exercise("u1", day, exercise) == row
        client.rpc.assert_called_once_with(
            "append_workout_log_exercise",
            {"p_user_id": "u1", "p_day_start": day.isoformat(), "p_exercise": exercise},
        )

    def test_list_applies_window(self):
        client, query = make_client(data=[])
        start = datetime(2024, 5, 1, tzinfo=timezone.utc)
        end = datetime(2024, 5, 31, tzinfo=timezone.utc)
        SupabaseWorkoutLogRepository(client).list_by_user("u1", start=start, end=end, limit=5)
        query.gte.assert_called_once_with("date", start.isoformat())
        query.lte.assert_called_once_with("date", end.isoformat())
        query.order.assert_called_once_with("date", desc=True)
        query.limit.assert_called_once_with(5)


# ============================================================================
# Workout plans
# ============================================================================

class TestWorkoutPlanRepository:

    def test_list_uses_range_for_pagination(self):
        client, query = make_client(data=[])
        SupabaseWorkoutPlanRepository(client).list_by_user("u1", offset=10, limit=5)
        query.range.assert_called_once_with(10, 14)
        query.order.assert_called_once_with("generated_at", desc=True)

    def test_update_sets_updated_at(self):
        client, query = make_client(data=[{"id": "p1"}])
        SupabaseWorkoutPlanRepository(client).update("p1", "u1", {"workouts": []})
        payload = query.update.call_args.args[0]
        assert payload["workouts"] == []
        assert "updated_at" in payload

    def test_update_missing_returns_none(self):
        client, _ = make_client(data=[])
        assert SupabaseWorkoutPlanRepository(client).update("p1", "u1", {}) is None

    def test_get_active(self):
        client, query = make_client(data=[{"id": "p2", "is_active": True}])
        assert SupabaseWorkoutPlanRepository(client).get_active("u1")["id"] == "p2"
        query.eq.assert_any_call("is_active", True)
