"""CourseStore: averageCost recompute after every course change."""
import pytest

from src.db.courses import round_average_cost
from src.db.database import CampDB, CourseDB
from src.errors import NotFound, ValidationFailure
from tests.fakes import SF_LOCATION, camp_payload, course_payload


@pytest.mark.parametrize("mean,expected", [
    (1200, 1200),
    (1200.01, 1210),
    (1201, 1210),
    (1209.99, 1210),
    (5, 10),
    (0, 0),
])
def test_round_average_cost_rounds_up(mean, expected):
    assert round_average_cost(mean) == expected


def test_average_cost_follows_added_courses(course_store, camp_store, camp):
    course_store.create(camp.id, course_payload(1000))
    course_store.create(camp.id, course_payload(1400))
    assert camp_store.get(camp.id).average_cost == 1200

    course_store.create(camp.id, course_payload(2100))
    assert camp_store.get(camp.id).average_cost == 1500


def test_average_cost_rounds_up_fractional_mean(course_store, camp_store, camp):
    course_store.create(camp.id, course_payload(1000))
    course_store.create(camp.id, course_payload(1001))

    assert camp_store.get(camp.id).average_cost == 1010


def test_average_cost_follows_edits(course_store, camp_store, camp):
    first = course_store.create(camp.id, course_payload(1000))
    course_store.create(camp.id, course_payload(1400))

    course_store.update(first.id, {"tuition": 3000})

    assert camp_store.get(camp.id).average_cost == 2200


def test_average_cost_follows_removals(course_store, camp_store, camp):
    course_store.create(camp.id, course_payload(1000))
    course_store.create(camp.id, course_payload(1400))
    expensive = course_store.create(camp.id, course_payload(2100))

    course_store.remove(expensive.id)

    assert camp_store.get(camp.id).average_cost == 1200
    assert len(course_store.list(camp.id)) == 2


def test_removing_last_course_keeps_stale_average(course_store, camp_store, camp):
    only = course_store.create(camp.id, course_payload(1000))

    course_store.remove(only.id)

    assert course_store.list(camp.id) == []
    assert camp_store.get(camp.id).average_cost == 1000


def test_averages_are_scoped_per_camp(course_store, camp_store, camp):
    other = camp_store.create(camp_payload(name="Robo Academy"), user_id="user-1")
    course_store.create(camp.id, course_payload(1000))
    course_store.create(other.id, course_payload(9000))

    assert camp_store.get(camp.id).average_cost == 1000
    assert camp_store.get(other.id).average_cost == 9000


def test_recompute_does_not_rerun_save_hook(course_store, camp_store, geocoder, db):
    camp = camp_store.create(camp_payload(address="1 Market St"), user_id="user-1")
    camp.slug = "hand-edited"
    db.commit()
    calls = len(geocoder.calls)

    course_store.create(camp.id, course_payload(1000))

    stored = camp_store.get(camp.id)
    assert stored.average_cost == 1000
    assert stored.slug == "hand-edited"
    assert stored.location == SF_LOCATION
    assert len(geocoder.calls) == calls


def test_recompute_for_missing_camp_is_swallowed(course_store, db):
    # An orphan left behind by an interrupted cascade
    db.add(CourseDB(
        title="Orphan", description="d", duration="1 week",
        tuition=500, difficulty="beginner", camp_id="gone",
    ))
    db.commit()

    assert course_store.recompute_average_cost("gone") is None
    assert db.query(CampDB).count() == 0


def test_recompute_without_courses_writes_nothing(course_store, camp_store, camp):
    assert course_store.recompute_average_cost(camp.id) is None
    assert camp_store.get(camp.id).average_cost is None


def test_course_requires_existing_camp(course_store):
    with pytest.raises(NotFound):
        course_store.create("no-such-camp", course_payload(1000))


def test_course_validation(course_store, camp):
    with pytest.raises(ValidationFailure) as exc_info:
        course_store.create(camp.id, course_payload(-1, difficulty="expert", title="   "))

    fields = {message.split(":")[0] for message in exc_info.value.messages}
    assert fields == {"tuition", "difficulty", "title"}


def test_course_update_cannot_null_tuition(course_store, camp):
    course = course_store.create(camp.id, course_payload(1000))
    with pytest.raises(ValidationFailure):
        course_store.update(course.id, {"tuition": None})


def test_unknown_course(course_store):
    with pytest.raises(NotFound):
        course_store.get("nope")
    with pytest.raises(NotFound):
        course_store.remove("nope")


def test_course_keeps_camp_reference(course_store, camp):
    course = course_store.create(camp.id, course_payload(1000, availableJob=True))
    assert course.camp_id == camp.id
    assert course.available_job is True
    assert course.difficulty == "beginner"


@pytest.mark.parametrize("tuition", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_tuition_rejected(course_store, camp, db, tuition):
    with pytest.raises(ValidationFailure) as exc_info:
        course_store.create(camp.id, course_payload(tuition))

    assert [m.split(":")[0] for m in exc_info.value.messages] == ["tuition"]
    assert db.query(CourseDB).count() == 0


def test_non_finite_tuition_rejected_on_update(course_store, camp_store, camp):
    course = course_store.create(camp.id, course_payload(1000))

    with pytest.raises(ValidationFailure):
        course_store.update(course.id, {"tuition": float("inf")})

    assert course_store.get(course.id).tuition == 1000
    assert camp_store.get(camp.id).average_cost == 1000


def test_recompute_over_infinite_tuition_is_swallowed(course_store, camp_store, camp, db):
    # Row written around the schema, e.g. by an older release
    db.add(CourseDB(
        title="Legacy", description="d", duration="1 week",
        tuition=float("inf"), difficulty="beginner", camp_id=camp.id,
    ))
    db.commit()

    assert course_store.recompute_average_cost(camp.id) is None

    course = course_store.create(camp.id, course_payload(1000))
    assert course.id is not None
    assert camp_store.get(camp.id).average_cost is None
