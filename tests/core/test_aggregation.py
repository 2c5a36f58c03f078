"""Tests for dashboard statistics and performance reports."""

from datetime import datetime, timedelta, timezone

from records.core.aggregation import (
    count_pending_grades,
    course_performance,
    dashboard_stats,
    filtered_distribution,
    sample_activity,
    score_comparison,
    student_performance,
    top_students,
)
from records.db.models import EnrollmentInput, GradeInput


class TestDashboardStats:
    """Tests for dashboard_stats over the demo dataset."""

    def test_counts_and_overall_average(self, seeded_store):
        stats = dashboard_stats(seeded_store)

        assert stats.total_students == 4
        assert stats.active_courses == 5
        # mean over all 9 grades, not over per-student averages
        assert stats.average_grade == 92.1
        assert stats.pending_grades == 0

    def test_distribution_over_all_grades(self, seeded_store):
        stats = dashboard_stats(seeded_store)
        assert stats.grade_distribution.data == [7, 0, 2, 0, 0]
        assert stats.grade_distribution.total == 9

    def test_top_three_students(self, seeded_store):
        stats = dashboard_stats(seeded_store)
        assert [s.id for s in stats.top_students] == [1, 2, 3]
        assert stats.top_students[0].name == "Emily Johnson"
        assert stats.top_students[0].average_grade == 98.5

    def test_top_limit(self, seeded_store):
        assert len(dashboard_stats(seeded_store, top_limit=1).top_students) == 1
        assert len(dashboard_stats(seeded_store, top_limit=10).top_students) == 4

    def test_empty_store(self, store):
        stats = dashboard_stats(store)
        assert stats.total_students == 0
        assert stats.average_grade == 0.0
        assert stats.grade_distribution.data == [0, 0, 0, 0, 0]
        assert stats.top_students == []

    def test_activity_feed_relative_to_now(self, store):
        now = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
        stats = dashboard_stats(store, now=now)

        assert [a.type for a in stats.recent_activity] == [
            "add_student",
            "update_grade",
            "complete_course",
            "attendance_alert",
        ]
        assert stats.recent_activity[0].timestamp == (now - timedelta(minutes=30)).isoformat()


class TestTopStudents:
    """Tests for top_students ordering."""

    def test_ties_broken_by_id(self, store, student_input, course_input, enroll_and_grade):
        course = store.create_course(course_input())
        ids = [store.create_student(student_input(code=f"S{i}")).id for i in range(4)]
        for student_id, score in zip(ids, [80.0, 90.0, 90.0, 90.0]):
            enroll_and_grade(store, student_id, course.id, score)

        assert [s.id for s in top_students(store, limit=3)] == [ids[1], ids[2], ids[3]]

    def test_students_without_grades_rank_last(self, store, student_input, course_input, enroll_and_grade):
        course = store.create_course(course_input())
        ungraded = store.create_student(student_input(code="S0"))
        graded = store.create_student(student_input(code="S1"))
        enroll_and_grade(store, graded.id, course.id, 40.0)

        assert [s.id for s in top_students(store)] == [graded.id, ungraded.id]


class TestPendingGrades:
    """Tests for count_pending_grades."""

    def test_counts_ungraded_enrollments(self, store):
        store.create_enrollment(EnrollmentInput(student_id=1, course_id=1))
        store.create_enrollment(EnrollmentInput(student_id=1, course_id=2))
        store.create_grade(GradeInput(student_id=1, course_id=1, score=75.0, term="T"))

        assert count_pending_grades(store) == 1


class TestSampleActivity:
    def test_four_items(self):
        assert len(sample_activity()) == 4


class TestStudentPerformance:
    """Tests for student_performance."""

    def test_sorted_best_first(self, seeded_store):
        rows = student_performance(seeded_store)

        assert [r.student_code for r in rows] == ["S1001", "S1002", "S1003", "S1004"]
        assert rows[0].course_count == 3
        assert rows[0].letter == "A"
        assert rows[-1].average_score == 74.8
        assert rows[-1].letter == "C"

    def test_term_filter(self, seeded_store):
        seeded_store.create_grade(GradeInput(student_id=4, course_id=2, score=99.0, term="Fall 2023"))

        rows = student_performance(seeded_store, term="Fall 2023")
        assert rows[0].student_code == "S1004"
        assert rows[0].average_score == 99.0
        assert all(r.average_score == 0.0 for r in rows[1:])


class TestCoursePerformance:
    """Tests for course_performance."""

    def test_sorted_with_band_counts(self, seeded_store):
        rows = course_performance(seeded_store)

        assert [r.course_code for r in rows] == ["HIS202", "MATH101", "SCI301", "ENG201", "PHY301"]
        eng = rows[3]
        assert eng.average_score == 86.0
        assert eng.student_count == 2
        assert eng.grade_distribution == {"A": 1, "B": 0, "C": 1, "D": 0, "F": 0}

    def test_unknown_term_gives_zero_averages(self, seeded_store):
        rows = course_performance(seeded_store, term="Nope")
        assert all(r.average_score == 0.0 for r in rows)
        assert [r.id for r in rows] == [1, 2, 3, 4, 5]


class TestFilteredDistribution:
    def test_by_course(self, seeded_store):
        assert filtered_distribution(seeded_store, course_id=2).data == [1, 0, 1, 0, 0]

    def test_by_term(self, seeded_store):
        assert filtered_distribution(seeded_store, term="Spring 2023").total == 9
        assert filtered_distribution(seeded_store, term="Fall 2030").total == 0


class TestScoreComparison:
    def test_sorted_by_name(self, seeded_store):
        rows = score_comparison(seeded_store)
        assert [r.name for r in rows] == [
            "English 201",
            "History 202",
            "Mathematics 101",
            "Physics 301",
            "Science 301",
        ]
        assert rows[1].average_score == 97.5

    def test_single_course(self, seeded_store):
        rows = score_comparison(seeded_store, course_id=5)
        assert len(rows) == 1
        assert rows[0].average_score == 73.8
