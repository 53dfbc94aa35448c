from collections import namedtuple
from dataclasses import asdict, dataclass

GradedItem = namedtuple("GradedItem", ["question_id", "points_earned", "max_points", "answered"])


@dataclass(frozen=True)
class AttemptStats:
    total_score: float
    max_score: float
    percentage: float
    passed: bool
    questions_answered: int
    questions_unanswered: int
    total_questions: int
    time_spent_seconds: int

    def to_dict(self):
        return asdict(self)


def aggregate(items, passing_percentage, time_spent_seconds):
    """
    Attempt-level totals from one GradedItem per quiz question.

    Unanswered questions must be present as zero-point items so their points
    count toward max_score. Pure and deterministic, so regrades can replace
    the stored result.
    """
    items = list(items)
    total_score = float(sum(item.points_earned or 0 for item in items))
    max_score = float(sum(item.max_points or 0 for item in items))
    percentage = round(total_score / max_score * 100, 2) if max_score > 0 else 0.0
    answered = sum(1 for item in items if item.answered)

    return AttemptStats(
        total_score=total_score,
        max_score=max_score,
        percentage=percentage,
        passed=percentage >= float(passing_percentage or 0),
        questions_answered=answered,
        questions_unanswered=len(items) - answered,
        total_questions=len(items),
        time_spent_seconds=int(time_spent_seconds or 0),
    )
