from flask import Blueprint, jsonify, request

from classes.attempt_manager import AttemptManager
from classes.errors import MalformedResponse
from models.quiz_attempts import SUBMITTED, GRADED
from utils.helpers import format_datetime, ordered_for_attempt, parse_int
from utils.utils import login_required, current_user_id

# Students' blueprint
student_bp = Blueprint("student", __name__)


def _attempt_payload(attempt, quiz, questions):
    responses = {answer.question_id: answer for answer in attempt.answers}
    show_feedback = attempt.status in (SUBMITTED, GRADED)

    question_list = []
    for question in ordered_for_attempt(questions, attempt.id, quiz.shuffle_questions):
        item = question.to_dict()
        response = responses.get(question.id)
        if response is None:
            item["response"] = None
        else:
            item["response"] = {
                "selected_option_id": response.selected_option_id,
                "answer_text": response.answer_text,
                "answered_at": format_datetime(response.answered_at),
            }
            if show_feedback:
                item["response"].update({
                    "points_earned": response.points_earned,
                    "is_correct": response.is_correct,
                    "feedback": response.feedback,
                    "requires_manual_review": response.requires_manual_review,
                })
        question_list.append(item)

    data = attempt.to_dict()
    data["quiz"] = {
        "id": quiz.id,
        "title": quiz.title,
        "time_limit": quiz.time_limit,
        "passing_score": quiz.passing_score,
    }
    data["questions"] = question_list
    return data


#Fetch quiz details and remaining attempts
@student_bp.route("/quiz/<int:quiz_id>/details", methods=["GET"])
@login_required
def get_quiz_details(quiz_id):
    summary = AttemptManager().quiz_summary(quiz_id, current_user_id())
    return jsonify(summary), 200


#Start a new attempt
@student_bp.route("/quiz/<int:quiz_id>/attempts", methods=["POST"])
@login_required
def start_attempt(quiz_id):
    manager = AttemptManager()
    attempt = manager.start(quiz_id, current_user_id())
    _, quiz, questions = manager.get_attempt_detail(attempt.id, current_user_id())

    return jsonify({
        "message": "Quiz attempt started",
        "data": _attempt_payload(attempt, quiz, questions),
    }), 201


#Fetch one attempt with its questions and saved answers
@student_bp.route("/attempts/<int:attempt_id>", methods=["GET"])
@login_required
def get_attempt(attempt_id):
    attempt, quiz, questions = AttemptManager().get_attempt_detail(attempt_id, current_user_id())
    return jsonify(_attempt_payload(attempt, quiz, questions)), 200


#Save an answer (repeatable until the attempt is submitted)
@student_bp.route("/attempts/<int:attempt_id>/answers", methods=["PUT"])
@login_required
def record_answer(attempt_id):
    data = request.get_json(silent=True) or {}
    question_id = parse_int(data.get("question_id"))
    if question_id is None:
        raise MalformedResponse("question_id is required")

    response = AttemptManager().record_answer(
        attempt_id,
        question_id,
        selected_option_id=data.get("selected_option_id"),
        answer_text=data.get("answer_text"),
        student_id=current_user_id(),
    )
    return jsonify({
        "message": "Answer saved",
        "data": {
            "question_id": response.question_id,
            "selected_option_id": response.selected_option_id,
            "answer_text": response.answer_text,
        },
    }), 200


def _submit_and_grade(attempt_id):
    manager = AttemptManager()
    manager.submit(attempt_id, current_user_id())
    stats = manager.auto_grade(attempt_id)
    attempt, quiz, questions = manager.get_attempt_detail(attempt_id, current_user_id())

    return jsonify({
        "message": "Quiz submitted successfully",
        "data": _attempt_payload(attempt, quiz, questions),
        "stats": stats.to_dict(),
    }), 200


#Submit and auto-grade
@student_bp.route("/attempts/<int:attempt_id>/submit", methods=["POST"])
@login_required
def submit_attempt(attempt_id):
    return _submit_and_grade(attempt_id)


#Auto-Submit on timeout or lost connection
@student_bp.route("/attempts/<int:attempt_id>/auto-submit", methods=["POST"])
@login_required
def auto_submit_attempt(attempt_id):
    return _submit_and_grade(attempt_id)


#Abandon an in-progress attempt
@student_bp.route("/attempts/<int:attempt_id>", methods=["DELETE"])
@login_required
def abandon_attempt(attempt_id):
    attempt = AttemptManager().abandon(attempt_id, current_user_id())
    return jsonify({"message": "Quiz attempt abandoned", "data": attempt.to_dict()}), 200


#Get latest quiz result
@student_bp.route("/quiz/<int:quiz_id>/results", methods=["GET"])
@login_required
def get_quiz_results(quiz_id):
    manager = AttemptManager()
    attempt = manager.latest_attempt(quiz_id, current_user_id())
    summary = manager.quiz_summary(quiz_id, current_user_id())

    return jsonify({
        "attempt": attempt.to_dict(include_answers=attempt.status in (SUBMITTED, GRADED)),
        "attempts_used": summary["attempts_used"],
        "attempts_left": summary["attempts_left"],
    }), 200
