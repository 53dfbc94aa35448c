import logging
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.quiz_attempts import QuizAttempt, IN_PROGRESS, SUBMITTED, GRADED, ABANDONED
from classes.aggregator import GradedItem, aggregate
from classes.attempt_policy import AttemptPolicy
from classes.errors import (
    AttemptNotFound,
    AttemptsExceeded,
    Forbidden,
    InvalidState,
    MalformedResponse,
    QuizEngineError,
    QuizNotFound,
)
from classes.grading import grade_response
from classes.quiz_repository import QuizRepository
from classes.validators import validate_length, validate_option_id, validate_review_points
from utils.helpers import clean_text, seconds_between, utcnow

logger = logging.getLogger(__name__)


class AttemptManager:
    """
    Owns the attempt lifecycle: start -> answer -> submit -> grade.

    Every public operation runs in its own transaction and either commits
    all of its writes or none of them. This is the only place attempts,
    responses and grades are written.
    """

    def __init__(self, repository=None, policy=None):
        self.repo = repository or QuizRepository()
        self.policy = policy or AttemptPolicy()

    @contextmanager
    def _unit_of_work(self):
        try:
            yield
            db.session.commit()
        except (QuizEngineError, IntegrityError):
            db.session.rollback()
            raise
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Persistence failure, transaction rolled back")
            raise
        except Exception:
            db.session.rollback()
            raise

    def _config(self, key, default):
        return current_app.config.get(key, default)

    def _get_attempt(self, attempt_id, student_id=None, for_update=False):
        attempt = self.repo.get_attempt(attempt_id, for_update=for_update)
        if attempt is None:
            raise AttemptNotFound()
        if student_id is not None and attempt.student_id != student_id:
            raise Forbidden()
        return attempt

    def _load_quiz(self, quiz_id):
        quiz = self.repo.load_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFound()
        return quiz

    def _passing_score(self, quiz):
        if quiz.passing_score is None:
            return self._config("DEFAULT_PASSING_SCORE", 60.0)
        return quiz.passing_score

    # start

    def start(self, quiz_id, student_id):
        """
        Open the next attempt for (quiz, student).

        The unique (quiz, student, attempt_number) constraint serializes
        concurrent starts: a request that loses the race gets IntegrityError,
        rolls back and re-runs the count and policy check.
        """
        retries = self._config("QUIZ_START_MAX_RETRIES", 3)
        for attempt_try in range(retries + 1):
            try:
                with self._unit_of_work():
                    quiz = self._load_quiz(quiz_id)
                    if not quiz.is_published:
                        raise QuizNotFound()

                    prior = self.repo.count_attempts(quiz.id, student_id)
                    decision = self.policy.can_start_attempt(quiz, prior)
                    if not decision.allowed:
                        logger.warning(
                            "Start denied for quiz=%s student=%s: %s (%s prior attempts)",
                            quiz.id, student_id, decision.reason, prior,
                        )
                        raise AttemptsExceeded(attempts_allowed=quiz.attempts_allowed)

                    attempt = self.repo.create_attempt(QuizAttempt(
                        quiz_id=quiz.id,
                        student_id=student_id,
                        attempt_number=prior + 1,
                        status=IN_PROGRESS,
                        started_at=utcnow(),
                    ))
            except IntegrityError:
                if attempt_try >= retries:
                    raise
                logger.warning(
                    "Attempt number race on quiz=%s student=%s, retrying (%s/%s)",
                    quiz_id, student_id, attempt_try + 1, retries,
                )
                continue

            logger.info(
                "Attempt %s started: quiz=%s student=%s number=%s",
                attempt.id, attempt.quiz_id, attempt.student_id, attempt.attempt_number,
            )
            return attempt

    # answer

    def record_answer(self, attempt_id, question_id, selected_option_id=None, answer_text=None, student_id=None):
        """Upsert the response for one question. Last write wins; repeating a write is harmless."""
        option_id = validate_option_id(selected_option_id)
        if answer_text is not None and not isinstance(answer_text, str):
            raise MalformedResponse("answer_text must be a string.")
        validate_length("answer_text", answer_text, self._config("MAX_ANSWER_LENGTH", 10000))

        # A concurrent first write for the same question may win the insert;
        # the second pass then updates the row it created.
        for pass_number in (1, 2):
            try:
                with self._unit_of_work():
                    attempt = self._get_attempt(attempt_id, student_id, for_update=True)
                    if attempt.status != IN_PROGRESS:
                        raise InvalidState(
                            f"Cannot answer an attempt that is {attempt.status}",
                            status=attempt.status,
                        )

                    question = self.repo.get_question(attempt.quiz_id, question_id)
                    if question is None:
                        raise MalformedResponse(
                            "Question is not part of this quiz", question_id=question_id,
                        )

                    text = clean_text(answer_text) if question.question_type == "essay" else answer_text
                    response = self.repo.upsert_response(
                        attempt.id,
                        question.id,
                        selected_option_id=option_id if question.is_choice else None,
                        answer_text=None if question.is_choice else text,
                        answered_at=utcnow(),
                    )
                return response
            except IntegrityError:
                if pass_number == 2:
                    raise
                logger.warning("Concurrent answer for attempt=%s question=%s, retrying", attempt_id, question_id)

    # submit

    def submit(self, attempt_id, student_id=None):
        with self._unit_of_work():
            attempt = self._get_attempt(attempt_id, student_id, for_update=True)
            if attempt.status != IN_PROGRESS:
                raise InvalidState(
                    f"Cannot submit an attempt that is {attempt.status}",
                    status=attempt.status,
                )
            now = utcnow()
            attempt.status = SUBMITTED
            attempt.submitted_at = now
            attempt.time_spent_seconds = seconds_between(attempt.started_at, now)

        logger.info("Attempt %s submitted after %ss", attempt.id, attempt.time_spent_seconds)
        return attempt

    def abandon(self, attempt_id, student_id=None):
        with self._unit_of_work():
            attempt = self._get_attempt(attempt_id, student_id, for_update=True)
            if attempt.status != IN_PROGRESS:
                raise InvalidState(
                    f"Cannot abandon an attempt that is {attempt.status}",
                    status=attempt.status,
                )
            now = utcnow()
            attempt.status = ABANDONED
            attempt.submitted_at = now
            attempt.time_spent_seconds = seconds_between(attempt.started_at, now)

        logger.info("Attempt %s abandoned", attempt.id)
        return attempt

    # grading

    def auto_grade(self, attempt_id):
        """
        Grade every response and re-aggregate from scratch.

        Safe to repeat: the stored result is replaced, never accumulated.
        Returns the AttemptStats; the attempt stays submitted while any
        response awaits manual review.
        """
        with self._unit_of_work():
            attempt = self._get_attempt(attempt_id, for_update=True)
            if attempt.status not in (SUBMITTED, GRADED):
                raise InvalidState(
                    f"Cannot grade an attempt that is {attempt.status}",
                    status=attempt.status,
                )
            stats = self._grade(attempt)
        return stats

    def review_response(self, attempt_id, question_id, points, feedback=None, reviewer_id=None):
        """Record a reviewer's score for a manual-review response, then re-grade the attempt."""
        with self._unit_of_work():
            attempt = self._get_attempt(attempt_id, for_update=True)
            if attempt.status not in (SUBMITTED, GRADED):
                raise InvalidState(
                    f"Cannot review an attempt that is {attempt.status}",
                    status=attempt.status,
                )

            response = self.repo.get_response(attempt.id, question_id)
            if response is None:
                raise MalformedResponse("No response recorded for this question", question_id=question_id)
            if not response.requires_manual_review:
                raise InvalidState("Response does not await manual review", question_id=question_id)

            response.reviewer_points = validate_review_points(points, response.question.points)
            response.reviewer_feedback = clean_text(feedback)
            response.reviewed_by = reviewer_id
            response.reviewed_at = utcnow()

            stats = self._grade(attempt)

        logger.info(
            "Reviewer %s scored attempt=%s question=%s with %s points",
            reviewer_id, attempt.id, question_id, response.reviewer_points,
        )
        return stats

    def _grade(self, attempt):
        quiz = self._load_quiz(attempt.quiz_id)
        questions = self.repo.load_questions(quiz.id)
        responses = {r.question_id: r for r in self.repo.list_responses(attempt.id)}

        items = []
        pending_review = False
        for question in questions:
            response = responses.get(question.id)
            if response is None:
                items.append(GradedItem(question.id, 0.0, question.points, False))
                continue

            result = grade_response(question, response)
            response.requires_manual_review = result.requires_manual_review
            if result.requires_manual_review and response.is_resolved:
                response.points_earned = response.reviewer_points
                response.is_correct = response.reviewer_points >= (question.points or 0)
                response.feedback = response.reviewer_feedback or result.feedback
            else:
                response.points_earned = result.points_earned
                response.is_correct = result.is_correct
                response.feedback = result.feedback

            pending_review = pending_review or response.pending_review
            items.append(GradedItem(question.id, response.points_earned, question.points, not response.is_blank))

        stats = aggregate(items, self._passing_score(quiz), attempt.time_spent_seconds)

        attempt.total_score = stats.total_score
        attempt.max_score = stats.max_score
        attempt.percentage_score = stats.percentage
        attempt.passed = stats.passed
        attempt.questions_answered = stats.questions_answered
        attempt.questions_unanswered = stats.questions_unanswered
        attempt.needs_review = pending_review

        if pending_review:
            # Provisional score only; the grade record appears with the graded status.
            attempt.status = SUBMITTED
            attempt.graded_at = None
            self.repo.delete_grade(attempt.id)
            logger.info("Attempt %s auto-graded, awaiting manual review", attempt.id)
        else:
            if attempt.status != GRADED:
                attempt.graded_at = utcnow()
            attempt.status = GRADED
            self.repo.upsert_grade(attempt, quiz, stats)
            logger.info(
                "Attempt %s graded: %s/%s (%s%%) passed=%s",
                attempt.id, stats.total_score, stats.max_score, stats.percentage, stats.passed,
            )
        return stats

    # reads

    def get_attempt_detail(self, attempt_id, student_id=None):
        attempt = self._get_attempt(attempt_id, student_id)
        quiz = self._load_quiz(attempt.quiz_id)
        return attempt, quiz, self.repo.load_questions(quiz.id)

    def quiz_summary(self, quiz_id, student_id):
        quiz = self._load_quiz(quiz_id)
        if not quiz.is_published:
            raise QuizNotFound()
        used = self.repo.count_attempts(quiz.id, student_id)
        latest = self.repo.latest_attempt(quiz.id, student_id)
        return {
            "quiz": quiz.to_dict(),
            "attempts_used": used,
            "attempts_left": self.policy.attempts_left(quiz, used),
            "can_start": self.policy.can_start_attempt(quiz, used).allowed,
            "latest_attempt": latest.to_dict() if latest else None,
        }

    def latest_attempt(self, quiz_id, student_id):
        self._load_quiz(quiz_id)
        attempt = self.repo.latest_attempt(quiz_id, student_id)
        if attempt is None:
            raise AttemptNotFound("No attempts found")
        return attempt

    def list_attempts(self, quiz_id=None, student_id=None, status=None, limit=100):
        return self.repo.list_attempts(quiz_id=quiz_id, student_id=student_id, status=status, limit=limit)
