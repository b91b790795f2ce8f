"""
Unit tests for PlanGenerationService: generate, regenerate and send.
"""

from datetime import datetime, timedelta, timezone

import pytest

from application.exceptions import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from application.use_cases import PlanGenerationService
from domain.models import PlanDraft
from tests.fakes import (
    FakeExerciseTemplateRepository,
    FakePlanWebhook,
    FakeWorkoutPlanRepository,
)

USER = "user-1"
OTHER = "user-2"
T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Advances one minute per call."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def template_repo():
    repo = FakeExerciseTemplateRepository()
    repo.seed([
        {"id": "squat", "user_id": USER, "name": "Squat", "type": "reps"},
        {"id": "plank", "user_id": USER, "name": "Plank", "type": "time"},
        {"id": "foreign", "user_id": OTHER, "name": "Deadlift", "type": "weight"},
    ])
    return repo


@pytest.fixture
def plan_repo():
    return FakeWorkoutPlanRepository()


@pytest.fixture
def webhook():
    return FakePlanWebhook()


@pytest.fixture
def service(template_repo, plan_repo, webhook):
    return PlanGenerationService(
        template_repo, plan_repo, webhook, clock=TickingClock(T0)
    )


def draft(**overrides) -> PlanDraft:
    data = {
        "name": "Strength Builder",
        "description": "Four weeks of lifting",
        "duration": 4,
        "daysPerWeek": 2,
        "preferences": {"goals": "strength, muscle", "fitnessLevel": "beginner"},
        "workouts": [
            {
                "name": "Lower",
                "dayOfWeek": "Monday",
                "exercises": [
                    {"exerciseName": "Squat", "sets": 3, "targetReps": 8},
                    {"exerciseName": "Lunge", "sets": 3, "targetReps": 10},
                ],
            },
            {
                "name": "Core",
                "dayOfWeek": "Thursday",
                "difficulty": "Beginner",
                "exercises": [
                    {"exerciseName": "Plank", "targetTime": 60},
                    {"exerciseName": "Lunge", "sets": 2},
                ],
            },
        ],
    }
    data.update(overrides)
    return PlanDraft.model_validate(data)


def seed_plan(plan_repo, **overrides):
    plan = {
        "id": "plan-1",
        "user_id": USER,
        "name": "Original",
        "description": "old description",
        "days_per_week": 3,
        "preferences": {"goals": ["strength"], "fitness_level": "beginner"},
        "workouts": [{
            "name": "Old session",
            "exercises": [{"exercise_template_id": "squat", "sets": 5}],
        }],
        "generated_at": T0.isoformat(),
        "updated_at": T0.isoformat(),
    }
    plan.update(overrides)
    plan_repo.seed([plan])


# =============================================================================
# Generate
# =============================================================================


@pytest.mark.unit
class TestGenerate:

    def test_persists_plan_and_populates_templates(self, service, plan_repo):
        plan = service.generate(USER, draft())

        assert plan.user_id == USER
        assert plan.name == "Strength Builder"
        assert plan.days_per_week == 2
        assert plan.preferences.goals == ["strength", "muscle"]
        assert len(plan_repo.get_all()) == 1
        squat = plan.workouts[0].exercises[0]
        assert squat.exercise_template.id == "squat"
        assert squat.sets == 3
        assert squat.target_reps == 8

    def test_creates_missing_templates_once_as_reps(self, service, template_repo):
        plan = service.generate(USER, draft())

        lunges = [t for t in template_repo.list_by_user(USER) if t["name"] == "Lunge"]
        assert len(lunges) == 1
        assert lunges[0]["type"] == "reps"
        lunge_ids = {
            plan.workouts[0].exercises[1].exercise_template.id,
            plan.workouts[1].exercises[1].exercise_template.id,
        }
        assert lunge_ids == {lunges[0]["id"]}

    def test_reuses_existing_template_type(self, service):
        plan = service.generate(USER, draft())
        plank = plan.workouts[1].exercises[0].exercise_template
        assert plank.id == "plank"
        assert plank.type.value == "time"

    def test_never_links_another_users_template(self, service, template_repo):
        plan = service.generate(USER, draft(workouts=[
            {"name": "Pull", "exercises": [{"exerciseName": "Deadlift"}]},
        ]))
        template = plan.workouts[0].exercises[0].exercise_template
        assert template.id != "foreign"
        assert template.user_id == USER

    def test_defaults_applied(self, service):
        plan = service.generate(USER, PlanDraft(name="Minimal"))
        assert plan.duration == 4
        assert plan.days_per_week == 3
        assert plan.is_active is True
        assert plan.workouts == []

    def test_exercise_without_name_rejected(self, service, plan_repo):
        with pytest.raises(ValidationError):
            service.generate(USER, draft(workouts=[
                {"name": "A", "exercises": [{"sets": 3}]},
            ]))
        assert plan_repo.get_all() == []

    def test_race_on_template_creation_rereads(self, template_repo, plan_repo, webhook):
        class RacingTemplateRepo(FakeExerciseTemplateRepository):
            """Another request creates the template between lookup and insert."""

            def __init__(self):
                super().__init__()
                self.lookups = 0

            def find_by_name(self, user_id, name):
                self.lookups += 1
                if self.lookups == 1:
                    return None
                return super().find_by_name(user_id, name)

            def create(self, user_id, name, type):
                super().create(user_id, name, type)
                raise ConflictError("Exercise template already exists")

        racing = RacingTemplateRepo()
        service = PlanGenerationService(racing, plan_repo, webhook)
        plan = service.generate(USER, draft(workouts=[
            {"name": "A", "exercises": [{"exerciseName": "Burpee"}]},
        ]))
        assert plan.workouts[0].exercises[0].exercise_template.name == "Burpee"
        assert racing.count_by_user(USER) == 1


# =============================================================================
# Regenerate
# =============================================================================


@pytest.mark.unit
class TestRegenerate:

    @pytest.mark.asyncio
    async def test_replaces_workouts_in_place(self, service, plan_repo, webhook):
        seed_plan(plan_repo)
        webhook.regenerate_response = {
            "description": "fresh description",
            "workouts": [{
                "name": "New session",
                "dayOfWeek": "friday",
                "exercises": [
                    {"exerciseTemplate": "plank", "targetTime": 45},
                    {"templateName": "Squat", "sets": 4},
                ],
            }],
        }

        result = await service.regenerate(USER, "plan-1")
        plan = result.plan

        assert plan.id == "plan-1"
        assert plan.user_id == USER
        assert plan.name == "Original"
        assert plan.description == "fresh description"
        assert [w.name for w in plan.workouts] == ["New session"]
        assert [e.exercise_template.id for e in plan.workouts[0].exercises] == [
            "plank", "squat",
        ]
        assert plan.generated_at > T0
        assert result.new_templates_created == 0
        assert len(plan_repo.get_all()) == 1

    @pytest.mark.asyncio
    async def test_payload_sent_to_webhook(self, service, plan_repo, webhook):
        seed_plan(plan_repo)
        await service.regenerate(USER, "plan-1")

        payload = webhook.regenerate_requests[0]
        assert payload["userId"] == USER
        assert payload["shouldCreateNewExercises"] is True
        assert payload["preferences"]["goals"] == ["strength"]
        assert payload["preferences"]["fitnessLevel"] == "beginner"
        assert {e["id"] for e in payload["existingExercises"]} == {"squat", "plank"}
        assert set(payload["existingExercises"][0]) == {"id", "name", "type"}

    @pytest.mark.asyncio
    async def test_new_templates_saved_and_linked(
        self, service, plan_repo, webhook, template_repo
    ):
        seed_plan(plan_repo)
        webhook.regenerate_response = {
            "newExerciseTemplates": [
                {"name": "Kettlebell Swing"},
                {"name": "Rowing", "type": "distance"},
                {"name": "Yoga Flow", "type": "vibes"},
            ],
            "workouts": [{
                "name": "Conditioning",
                "exercises": [
                    {"templateName": "Kettlebell Swing", "sets": 3},
                    {"exerciseName": "Rowing"},
                    {"exerciseName": "Yoga Flow"},
                ],
            }],
        }

        result = await service.regenerate(USER, "plan-1")

        assert result.new_templates_created == 3
        types = {t["name"]: t["type"] for t in template_repo.list_by_user(USER)}
        assert types["Kettlebell Swing"] == "reps"
        assert types["Rowing"] == "distance"
        assert types["Yoga Flow"] == "other"
        names = [e.exercise_template.name for e in result.plan.workouts[0].exercises]
        assert names == ["Kettlebell Swing", "Rowing", "Yoga Flow"]

    @pytest.mark.asyncio
    async def test_unlinkable_and_foreign_exercises_dropped(
        self, service, plan_repo, webhook
    ):
        seed_plan(plan_repo)
        webhook.regenerate_response = {
            "workouts": [{
                "name": "Mixed",
                "exercises": [
                    {"exerciseTemplate": "foreign"},
                    {"exerciseName": "Never Heard Of It"},
                    {"sets": 2},
                    {"exerciseName": "Squat"},
                ],
            }],
        }

        result = await service.regenerate(USER, "plan-1")

        exercises = result.plan.workouts[0].exercises
        assert [e.exercise_template.id for e in exercises] == ["squat"]

    @pytest.mark.asyncio
    async def test_template_save_failure_continues(
        self, service, plan_repo, webhook, template_repo
    ):
        seed_plan(plan_repo)
        template_repo.failing_names.add("Broken")
        webhook.regenerate_response = {
            "newExerciseTemplates": [{"name": "Broken"}, {"name": "Fine"}],
            "workouts": [{
                "name": "S",
                "exercises": [{"exerciseName": "Broken"}, {"exerciseName": "Fine"}],
            }],
        }

        result = await service.regenerate(USER, "plan-1")

        assert result.new_templates_created == 1
        names = [e.exercise_template.name for e in result.plan.workouts[0].exercises]
        assert names == ["Fine"]

    @pytest.mark.asyncio
    async def test_description_kept_when_not_returned(self, service, plan_repo):
        seed_plan(plan_repo)
        result = await service.regenerate(USER, "plan-1")
        assert result.plan.description == "old description"
        assert result.plan.workouts == []

    @pytest.mark.asyncio
    async def test_foreign_plan_not_found(self, service, plan_repo, webhook):
        seed_plan(plan_repo, user_id=OTHER)
        with pytest.raises(NotFoundError):
            await service.regenerate(USER, "plan-1")
        assert webhook.regenerate_requests == []

    @pytest.mark.asyncio
    async def test_invalid_webhook_plan(self, service, plan_repo, webhook):
        seed_plan(plan_repo)
        webhook.regenerate_response = {"workouts": [{"description": "no name"}]}
        with pytest.raises(UpstreamError):
            await service.regenerate(USER, "plan-1")
        assert plan_repo.get("plan-1", USER)["workouts"][0]["name"] == "Old session"

    @pytest.mark.asyncio
    async def test_webhook_failure_leaves_plan_untouched(self, service, plan_repo, webhook):
        seed_plan(plan_repo)
        webhook.error = UpstreamError("Webhook request timed out after 60s")
        with pytest.raises(UpstreamError, match="timed out"):
            await service.regenerate(USER, "plan-1")
        assert plan_repo.get("plan-1", USER)["generated_at"] == T0.isoformat()


# =============================================================================
# Send
# =============================================================================


@pytest.mark.unit
class TestSend:

    @pytest.mark.asyncio
    async def test_relays_payload_with_user_id(self, service, webhook):
        webhook.send_response = [{"status": "queued"}]
        response = await service.send(USER, {"fitnessLevel": "advanced", "goals": "x"})

        assert response == [{"status": "queued"}]
        assert webhook.sent == [{"fitnessLevel": "advanced", "goals": "x", "userId": USER}]

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self, service, webhook):
        webhook.error = ConfigurationError("Webhook URL not configured")
        with pytest.raises(ConfigurationError):
            await service.send(USER, {})
