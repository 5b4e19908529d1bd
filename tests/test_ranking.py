"""
Tests for student and subject ranking within the current period.
"""
from uuid import uuid4

from eduassist_analytics.services.aggregation import (
    GradeRecord, group_by_period, rank_students, rank_subjects,
)


def current_bucket(rows):
    return group_by_period(rows).current


def row(student_id, score, term="Term 2", year=2024, subject_id=None):
    return GradeRecord(student_id=student_id, subject_id=subject_id, score=score, term=term, year=year)


class TestRankStudents:
    def test_no_period_means_no_ranking(self):
        assert rank_students(None, [uuid4()]) == []

    def test_top_five_of_eight_sorted_descending(self):
        students = [uuid4() for _ in range(8)]
        scores = [55, 91, 78, 62, 84, 47, 99, 70]
        bucket = current_bucket([row(s, score) for s, score in zip(students, scores)])

        ranking = rank_students(bucket, students)

        assert len(ranking) == 5
        assert [r.avg_grade for r in ranking] == [99, 91, 84, 78, 70]
        ranked_ids = {r.student_id for r in ranking}
        for student, score in zip(students, scores):
            assert (student in ranked_ids) == (score >= 70)

    def test_student_average_uses_only_current_period(self):
        student = uuid4()
        bucket = current_bucket([
            row(student, 80), row(student, 60),
            row(student, 10, term="Term 1"),
        ])
        assert [r.avg_grade for r in rank_students(bucket, [student])] == [70]

    def test_students_without_rows_are_excluded_not_zeroed(self):
        graded, idle = uuid4(), uuid4()
        bucket = current_bucket([row(graded, 40)])
        ranking = rank_students(bucket, [idle, graded])
        assert [r.student_id for r in ranking] == [graded]

    def test_students_outside_the_roster_are_ignored(self):
        active, departed = uuid4(), uuid4()
        bucket = current_bucket([row(active, 50), row(departed, 95)])
        assert [r.student_id for r in rank_students(bucket, [active])] == [active]

    def test_ties_keep_roster_order(self):
        first, second, third = uuid4(), uuid4(), uuid4()
        bucket = current_bucket([row(third, 75), row(first, 75), row(second, 75)])
        ranking = rank_students(bucket, [first, second, third])
        assert [r.student_id for r in ranking] == [first, second, third]

    def test_as_dict_shape(self):
        student = uuid4()
        ranking = rank_students(current_bucket([row(student, 88)]), [student])
        assert ranking[0].as_dict() == {"student_id": str(student), "avg_grade": 88}


class TestRankSubjects:
    def test_no_subjects(self):
        ranking = rank_subjects({})
        assert ranking.best == ()
        assert ranking.weakest == ()

    def test_single_subject_is_both_best_and_weakest(self):
        only = uuid4()
        ranking = rank_subjects({only: 72.5})
        assert [s.subject_id for s in ranking.best] == [only]
        assert [s.subject_id for s in ranking.weakest] == [only]

    def test_two_subjects_overlap_completely(self):
        a, b = uuid4(), uuid4()
        ranking = rank_subjects({a: 60.0, b: 80.0})
        assert [s.subject_id for s in ranking.best] == [b, a]
        assert [s.subject_id for s in ranking.weakest] == [b, a]

    def test_best_and_weakest_slices_of_one_descending_list(self):
        subjects = {uuid4(): score for score in (65.0, 90.0, 40.0, 78.0)}
        ranking = rank_subjects(subjects)
        assert [s.avg_score for s in ranking.best] == [90.0, 78.0]
        assert [s.avg_score for s in ranking.weakest] == [65.0, 40.0]

    def test_as_dict_shape(self):
        subject = uuid4()
        entry = rank_subjects({subject: 81.0}).best[0]
        assert entry.as_dict() == {"subject_id": str(subject), "avg_score": 81.0}
