from collections.abc import Mapping

from rest_framework.exceptions import ValidationError


def _human_join(names):
    names = list(names)
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])}, and {names[-1]}"


def require_fields(data, fields):
    """
    Reject the request with a single 400 listing every required field when
    any of them is missing or empty. Non-object bodies are rejected too.
    """
    if not isinstance(data, Mapping):
        raise ValidationError({"error": "Invalid data. Expected a JSON object."})

    missing = [field for field in fields if data.get(field) in (None, "")]
    if missing:
        raise ValidationError(
            {"error": f"Missing required fields: {_human_join(fields)} are required"}
        )
