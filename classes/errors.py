class QuizEngineError(Exception):
    """Domain error raised by the attempt engine, rendered as {"error", "meta": {"code"}}."""
    code = "QUIZ_ENGINE_ERROR"
    http_status = 400
    default_message = "Quiz engine error"

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        meta = {"code": self.code}
        meta.update(self.details)
        return {"error": self.message, "meta": meta}


class QuizNotFound(QuizEngineError):
    code = "QUIZ_NOT_FOUND"
    http_status = 404
    default_message = "Quiz not found"


class AttemptNotFound(QuizEngineError):
    code = "ATTEMPT_NOT_FOUND"
    http_status = 404
    default_message = "Quiz attempt not found"


class AttemptsExceeded(QuizEngineError):
    code = "ATTEMPTS_EXCEEDED"
    http_status = 403
    default_message = "Maximum attempts exceeded"


class InvalidState(QuizEngineError):
    code = "INVALID_STATE"
    http_status = 409
    default_message = "Operation not allowed in the attempt's current state"


class MalformedResponse(QuizEngineError):
    code = "MALFORMED_RESPONSE"
    http_status = 400
    default_message = "Malformed response"


class Forbidden(QuizEngineError):
    code = "FORBIDDEN"
    http_status = 403
    default_message = "Attempt belongs to another student"
