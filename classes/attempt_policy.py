from collections import namedtuple

ATTEMPTS_EXCEEDED = "ATTEMPTS_EXCEEDED"

AttemptDecision = namedtuple("AttemptDecision", ["allowed", "reason"])

ALLOW = AttemptDecision(True, None)


class AttemptPolicy:
    """
    Decides whether a student may open another attempt on a quiz.

    Stateless: the caller is responsible for evaluating it inside the same
    transaction that inserts the new attempt.
    """

    @staticmethod
    def can_start_attempt(quiz, prior_attempt_count):
        limit = quiz.attempts_allowed or 0
        if limit == 0:
            return ALLOW
        if prior_attempt_count < limit:
            return ALLOW
        return AttemptDecision(False, ATTEMPTS_EXCEEDED)

    @staticmethod
    def attempts_left(quiz, prior_attempt_count):
        """Remaining attempts, or None when the quiz is unlimited."""
        limit = quiz.attempts_allowed or 0
        if limit == 0:
            return None
        return max(0, limit - prior_attempt_count)
