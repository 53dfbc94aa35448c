from flask import Blueprint, jsonify, request

from classes.attempt_manager import AttemptManager
from classes.errors import MalformedResponse
from utils.helpers import parse_int
from utils.utils import login_required, role_required, current_user_id

# Lecturers' blueprint
lecturer_bp = Blueprint("lecturer", __name__)

REVIEWER_ROLES = ("lecturer", "admin")

#__________________________________________________________________________________________ * Quiz attempts *__________________________________________________

# list attempts, optionally filtered by quiz, student and status
@lecturer_bp.route("/quiz-attempts", methods=["GET"])
@login_required
@role_required(*REVIEWER_ROLES)
def list_quiz_attempts():
    limit = parse_int(request.args.get("limit"), 100)
    attempts = AttemptManager().list_attempts(
        quiz_id=parse_int(request.args.get("quizId")),
        student_id=parse_int(request.args.get("studentId")),
        status=request.args.get("status"),
        limit=min(max(limit, 1), 500),
    )
    return jsonify({"data": [a.to_dict() for a in attempts], "count": len(attempts)}), 200


# attempt detail including answer keys, for grading
@lecturer_bp.route("/quiz-attempts/<int:attempt_id>", methods=["GET"])
@login_required
@role_required(*REVIEWER_ROLES)
def get_quiz_attempt(attempt_id):
    attempt, quiz, questions = AttemptManager().get_attempt_detail(attempt_id)

    data = attempt.to_dict(include_answers=True)
    data["quiz"] = quiz.to_dict()
    data["questions"] = [q.to_dict(include_key=True) for q in questions]
    data["pending_review"] = [a.question_id for a in attempt.answers if a.pending_review]
    return jsonify(data), 200


# score a response that needs manual review (essays)
@lecturer_bp.route("/quiz-attempts/<int:attempt_id>/responses/<int:question_id>/review", methods=["POST"])
@login_required
@role_required(*REVIEWER_ROLES)
def review_response(attempt_id, question_id):
    data = request.get_json(silent=True) or {}
    if "points" not in data:
        raise MalformedResponse("points is required")

    manager = AttemptManager()
    stats = manager.review_response(
        attempt_id,
        question_id,
        points=data.get("points"),
        feedback=data.get("feedback"),
        reviewer_id=current_user_id(),
    )
    attempt, _, _ = manager.get_attempt_detail(attempt_id)

    return jsonify({
        "message": "Response reviewed",
        "data": attempt.to_dict(include_answers=True),
        "stats": stats.to_dict(),
    }), 200


# re-run automatic grading, replacing the stored grade
@lecturer_bp.route("/quiz-attempts/<int:attempt_id>/regrade", methods=["POST"])
@login_required
@role_required(*REVIEWER_ROLES)
def regrade_attempt(attempt_id):
    manager = AttemptManager()
    stats = manager.auto_grade(attempt_id)
    attempt, _, _ = manager.get_attempt_detail(attempt_id)

    return jsonify({
        "message": "Attempt regraded",
        "data": attempt.to_dict(include_answers=True),
        "stats": stats.to_dict(),
    }), 200
