"""
Grading strategies, one per question type.

Every strategy is a total function: malformed keys or answers fall through to
the blank/incorrect branch and never raise. A wrong answer is a normal
zero-point result.
"""
import math
from collections import namedtuple

GradingResult = namedtuple(
    "GradingResult",
    ["points_earned", "is_correct", "feedback", "requires_manual_review"],
)

BLANK_FEEDBACK = "Answer is blank"


def _normalize(value):
    if value is None:
        return ""
    return str(value).strip().casefold()


def _as_list(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _points(max_points):
    try:
        return float(max_points or 0)
    except (TypeError, ValueError):
        return 0.0


def grade_multiple_choice(selected_option_id, options, max_points):
    selected = None
    if selected_option_id is not None:
        for option in options or []:
            if str(option.id) == str(selected_option_id):
                selected = option
                break

    if selected is None:
        return GradingResult(0.0, False, "No answer selected", False)

    is_correct = bool(selected.is_correct)
    return GradingResult(
        _points(max_points) if is_correct else 0.0,
        is_correct,
        selected.feedback or ("Correct" if is_correct else "Incorrect"),
        False,
    )


def grade_true_false(selected_option_id, options, max_points):
    return grade_multiple_choice(selected_option_id, options, max_points)


def grade_short_answer(answer_text, acceptable_answers, max_points):
    answer = _normalize(answer_text)
    if not answer:
        return GradingResult(0.0, False, BLANK_FEEDBACK, False)

    accepted = {_normalize(a) for a in _as_list(acceptable_answers)}
    accepted.discard("")
    is_correct = answer in accepted
    return GradingResult(
        _points(max_points) if is_correct else 0.0,
        is_correct,
        "Correct answer" if is_correct else "Please check your answer",
        False,
    )


def grade_short_answer_keywords(answer_text, keyword_groups, max_points, required_keywords=1):
    answer = _normalize(answer_text)
    if not answer:
        return GradingResult(0.0, False, BLANK_FEEDBACK, False)

    groups = [g for g in _as_list(keyword_groups) if isinstance(g, (list, tuple))]
    if not groups:
        return GradingResult(0.0, False, "Partial credit: 0/0 key points identified", False)

    matched = 0
    for group in groups:
        if any(_normalize(k) and _normalize(k) in answer for k in group):
            matched += 1

    try:
        required = int(required_keywords)
    except (TypeError, ValueError):
        required = 1

    maximum = _points(max_points)
    if matched >= required:
        return GradingResult(maximum, True, "Good answer", False)

    return GradingResult(
        float(math.floor(maximum * matched / len(groups))),
        False,
        f"Partial credit: {matched}/{len(groups)} key points identified",
        False,
    )


def grade_essay(answer_text, max_points):
    has_answer = bool(_normalize(answer_text))
    return GradingResult(
        0.0,
        False,
        "Submitted for grading" if has_answer else "No answer provided",
        True,
    )


def grade_response(question, response):
    """Run the strategy matching the question's type against one stored response."""
    selected_option_id = getattr(response, "selected_option_id", None)
    answer_text = getattr(response, "answer_text", None)
    question_type = question.question_type

    if question_type == "multiple_choice":
        return grade_multiple_choice(selected_option_id, question.options, question.points)
    if question_type == "true_false":
        return grade_true_false(selected_option_id, question.options, question.points)
    if question_type == "short_answer":
        return grade_short_answer(answer_text, question.acceptable_answers, question.points)
    if question_type == "short_answer_keywords":
        return grade_short_answer_keywords(
            answer_text, question.keyword_groups, question.points, question.required_keywords
        )
    if question_type == "essay":
        return grade_essay(answer_text, question.points)

    return GradingResult(0.0, False, "Unsupported question type", False)
