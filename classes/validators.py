import math

from classes.errors import MalformedResponse


def validate_length(field_name, value, max_length):
    if value is not None and len(value) > max_length:
        raise MalformedResponse(f"{field_name} must be {max_length} characters or fewer.")


def validate_option_id(value):
    """Selected option ids are integers or absent."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedResponse("selected_option_id must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedResponse("selected_option_id must be an integer.")


def validate_review_points(points, max_points):
    if isinstance(points, bool):
        raise MalformedResponse("points must be a number.")
    try:
        points = float(points)
    except (TypeError, ValueError):
        raise MalformedResponse("points must be a number.")
    if not math.isfinite(points) or points < 0 or points > float(max_points or 0):
        raise MalformedResponse(f"points must be between 0 and {max_points}.")
    return points
