"""Tests for the labdesk.storage repositories over the seeded demo store."""

from __future__ import annotations

import datetime
import threading

import pytest

from labdesk.metrics import InvalidGrade
from labdesk.model import ActorID, ActorStatus, AssignmentID, GroupID, Role, SubmissionStatus
from labdesk.storage import DataStore, DuplicateEntity, EntityInUse, EntityNotFound, StorageError, Tables
from labdesk.storage import assignment as assignment_storage
from labdesk.storage import fixture as fixture_storage
from labdesk.storage import group as group_storage
from labdesk.storage import submission as submission_storage
from labdesk.storage import user as user_storage

from ..conftest import Now, OtherTeacherEmail, StudentEmail, TeacherEmail


class TestFixture(object):
    """Tests for fixture.load()."""

    def test_demo_counts(self, store: DataStore) -> None:
        assert len(store.actors) == 9
        assert len(store.groups) == 3
        assert len(store.assignments) == 5
        assert len(store.submissions) == 7

    def test_ids_are_stable_across_loads(self, store: DataStore) -> None:
        again = fixture_storage.load("demo", now=Now, store=DataStore())

        assert set(again.actors) == set(store.actors)
        assert set(again.submissions) == set(store.submissions)
        assert ActorID.derive(TeacherEmail) in store.actors

    def test_deadlines_are_relative_to_load_time(self, store: DataStore) -> None:
        indexing = assignment_storage.get(AssignmentID.derive("Database Indexing and Optimization"), store=store)

        assert indexing is not None
        assert indexing.deadline == datetime.datetime(2026, 3, 12, 23, 59, tzinfo=datetime.UTC)

    def test_unknown_fixture(self) -> None:
        with pytest.raises(FileNotFoundError):
            fixture_storage.read("no-such-fixture")


class TestDataStore(object):
    """Tests for DataStore.begin()."""

    def test_failed_block_restores_tables(self, store: DataStore) -> None:
        before = store.snapshot()

        with pytest.raises(RuntimeError):
            with store.begin():
                user_storage.create(name="Temp", email="temp@gmail.edu", role=Role.Student, store=store)
                raise RuntimeError("abandon")

        assert store.snapshot() == before

    def test_snapshot_waits_for_open_block(self, store: DataStore) -> None:
        taken: list[Tables] = []
        reader = threading.Thread(target=lambda: taken.append(store.snapshot()))

        with store.begin():
            user_storage.create(name="Temp", email="temp@gmail.edu", role=Role.Student, store=store)
            reader.start()
            reader.join(timeout=0.2)
            assert reader.is_alive()
            assert taken == []
            user_storage.create(name="Temp Two", email="temp2@gmail.edu", role=Role.Student, store=store)

        reader.join(timeout=5)
        assert not reader.is_alive()
        emails = {a.email for a in taken[0].actors.values()}
        assert {"temp@gmail.edu", "temp2@gmail.edu"} <= emails

    def test_nested_blocks_restore_at_outermost(self, store: DataStore) -> None:
        with pytest.raises(DuplicateEntity):
            with store.begin():
                user_storage.create(name="Temp", email="temp@gmail.edu", role=Role.Student, store=store)
                # the inner create fails and takes the outer one with it
                user_storage.create(name="Temp", email="temp@gmail.edu", role=Role.Student, store=store)

        assert user_storage.get(email="temp@gmail.edu", store=store) is None


class TestUser(object):
    """Tests for storage.user."""

    def test_get_by_email_ignores_case(self, store: DataStore) -> None:
        actor = user_storage.get(email="Teacher1@Gmail.edu", store=store)

        assert actor is not None
        assert actor.actor_id == ActorID.derive(TeacherEmail)

    def test_get_requires_exactly_one_key(self, store: DataStore) -> None:
        with pytest.raises(ValueError):
            user_storage.get(store=store)

    def test_find_filters(self, store: DataStore) -> None:
        students = user_storage.find(role=Role.Student, store=store)
        cs301 = user_storage.find(group="CS-301", store=store)
        inactive = user_storage.find(status=ActorStatus.Inactive, store=store)
        smith = user_storage.find(search="SMITH", store=store)

        assert len(students) == 6
        assert [a.name for a in cs301] == ["Emma Wilson", "John Smith"]
        assert [a.email for a in inactive] == ["michael.brown@gmail.edu"]
        assert [a.name for a in smith] == ["John Smith"]

    def test_create_duplicate_email(self, store: DataStore) -> None:
        with pytest.raises(DuplicateEntity) as exc_info:
            user_storage.create(name="Again", email=TeacherEmail.upper(), role=Role.Teacher, store=store)

        assert exc_info.value.field == "email"

    def test_update(self, store: DataStore) -> None:
        actor_id = ActorID.derive(StudentEmail)

        updated = user_storage.update(actor_id, name="Baitur I.", group=None, store=store)

        assert updated.name == "Baitur I."
        assert updated.group is None
        assert updated.email == StudentEmail

    def test_update_to_taken_email(self, store: DataStore) -> None:
        with pytest.raises(DuplicateEntity):
            user_storage.update(ActorID.derive(StudentEmail), email=TeacherEmail, store=store)

    def test_update_missing(self, store: DataStore) -> None:
        with pytest.raises(EntityNotFound):
            user_storage.update(ActorID(), name="Nobody", store=store)

    def test_delete_student_removes_submissions(self, store: DataStore) -> None:
        actor_id = ActorID.derive(StudentEmail)

        user_storage.delete(actor_id, store=store)

        assert user_storage.get(actor_id=actor_id, store=store) is None
        assert submission_storage.find(student_id=actor_id, store=store) == ()

    def test_delete_teacher_in_use(self, store: DataStore) -> None:
        with pytest.raises(EntityInUse):
            user_storage.delete(ActorID.derive(TeacherEmail), store=store)

        assert user_storage.get(email=TeacherEmail, store=store) is not None


class TestGroup(object):
    """Tests for storage.group."""

    def test_student_count_is_derived(self, store: DataStore) -> None:
        group = group_storage.get(name="CS-301", store=store)

        assert group is not None
        assert group.student_count == 2

        user_storage.update(ActorID.derive(StudentEmail), group="CS-301", store=store)

        group = group_storage.get(group_id=GroupID.derive("CS-301"), store=store)
        assert group is not None
        assert group.student_count == 3

    def test_from_tables_counts_the_snapshot(self, store: DataStore) -> None:
        tables = store.snapshot()
        user_storage.update(ActorID.derive(StudentEmail), group="CS-301", store=store)

        groups = {g.name: g for g in group_storage.from_tables(tables)}

        assert list(groups) == sorted(groups)
        assert groups["CS-301"].student_count == 2

    def test_find_by_teacher(self, store: DataStore) -> None:
        groups = group_storage.find(teacher_id=ActorID.derive(TeacherEmail), store=store)

        assert [g.name for g in groups] == ["CS-301", "bis-1-23"]

    def test_create(self, store: DataStore) -> None:
        group = group_storage.create(
            name="CS-401", teacher_id=ActorID.derive(OtherTeacherEmail), create_time=Now, store=store
        )

        assert group.student_count == 0
        assert group_storage.get(name="CS-401", store=store) is not None

    def test_create_duplicate_name(self, store: DataStore) -> None:
        with pytest.raises(DuplicateEntity):
            group_storage.create(name="CS-301", teacher_id=ActorID.derive(TeacherEmail), store=store)

    def test_teacher_must_be_teacher(self, store: DataStore) -> None:
        with pytest.raises(StorageError):
            group_storage.create(name="CS-999", teacher_id=ActorID.derive(StudentEmail), store=store)


class TestAssignment(object):
    """Tests for storage.assignment."""

    def test_find_sorted_by_deadline(self, store: DataStore) -> None:
        titles = [a.title for a in assignment_storage.find(store=store)]

        assert titles[0] == "Creating Tables in PostgreSQL"
        assert titles[-1] == "REST API with Actix Web"

    def test_find_search_and_author(self, store: DataStore) -> None:
        found = assignment_storage.find(search="index", store=store)
        by_teacher2 = assignment_storage.find(created_by=ActorID.derive(OtherTeacherEmail), store=store)

        assert [a.title for a in found] == ["Database Indexing and Optimization"]
        assert [a.title for a in by_teacher2] == ["REST API with Actix Web"]

    def test_update_stamps_update_time(self, store: DataStore) -> None:
        assignment_id = AssignmentID.derive("Database Transactions")

        updated = assignment_storage.update(assignment_id, title="Transactions", store=store)

        assert updated.title == "Transactions"
        assert updated.update_time is not None

    def test_max_grade_cannot_drop_below_recorded_grades(self, store: DataStore) -> None:
        assignment_id = AssignmentID.derive("Creating Tables in PostgreSQL")

        with pytest.raises(InvalidGrade) as exc_info:
            assignment_storage.update(assignment_id, title="Tables", max_grade=50, store=store)

        assert exc_info.value.grade == 92
        unchanged = assignment_storage.get(assignment_id, store=store)
        assert unchanged is not None
        assert unchanged.max_grade == 100
        assert unchanged.title == "Creating Tables in PostgreSQL"

    def test_max_grade_may_equal_highest_grade(self, store: DataStore) -> None:
        assignment_id = AssignmentID.derive("Creating Tables in PostgreSQL")

        updated = assignment_storage.update(assignment_id, max_grade=92, store=store)

        assert updated.max_grade == 92

    def test_delete_cascades(self, store: DataStore) -> None:
        assignment_id = AssignmentID.derive("Creating Tables in PostgreSQL")

        removed = assignment_storage.delete(assignment_id, store=store)

        assert removed == 4
        assert assignment_storage.get(assignment_id, store=store) is None
        assert submission_storage.find(assignment_id=assignment_id, store=store) == ()

    def test_delete_missing(self, store: DataStore) -> None:
        with pytest.raises(EntityNotFound):
            assignment_storage.delete(AssignmentID(), store=store)


class TestSubmission(object):
    """Tests for storage.submission."""

    def test_create(self, store: DataStore) -> None:
        submission = submission_storage.create(
            assignment_id=AssignmentID.derive("Database Indexing and Optimization"),
            student_id=ActorID.derive(StudentEmail),
            file="indexes.sql",
            submitted_at=Now,
            store=store,
        )

        assert submission.status is SubmissionStatus.Submitted
        assert submission.grade is None

    def test_second_submission_is_refused(self, store: DataStore) -> None:
        with pytest.raises(DuplicateEntity):
            submission_storage.create(
                assignment_id=AssignmentID.derive("Creating Tables in PostgreSQL"),
                student_id=ActorID.derive(StudentEmail),
                file="again.sql",
                store=store,
            )

    def test_only_students_submit(self, store: DataStore) -> None:
        with pytest.raises(StorageError):
            submission_storage.create(
                assignment_id=AssignmentID.derive("Database Indexing and Optimization"),
                student_id=ActorID.derive(TeacherEmail),
                file="x.sql",
                store=store,
            )

    def test_grade_and_regrade(self, store: DataStore) -> None:
        submission_id = next(
            s.submission_id for s in store.submissions.values() if s.status is SubmissionStatus.Submitted
        )

        graded = submission_storage.grade(submission_id, grade=70, comment="ok", store=store)
        regraded = submission_storage.grade(submission_id, grade=75, store=store)

        assert graded.status is SubmissionStatus.Graded
        assert regraded.grade == 75
        assert regraded.comment is None

    def test_grade_above_max_is_rejected(self, store: DataStore) -> None:
        submission = submission_storage.create(
            assignment_id=AssignmentID.derive("REST API with Actix Web"),
            student_id=ActorID.derive(StudentEmail),
            file="api.zip",
            store=store,
        )

        with pytest.raises(InvalidGrade):
            submission_storage.grade(submission.submission_id, grade=51, store=store)

        stored = submission_storage.get(submission.submission_id, store=store)
        assert stored is not None
        assert stored.status is SubmissionStatus.Submitted

    def test_find_by_status(self, store: DataStore) -> None:
        graded = submission_storage.find(status=SubmissionStatus.Graded, store=store)

        assert sorted(s.grade for s in graded if s.grade is not None) == [65, 74, 78, 85, 92]
