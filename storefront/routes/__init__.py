from flask import request

from storefront.errors import ValidationError


def parse_id(value, label='ID', minimum=1):
    """Path ids are matched as strings so that non-numeric ones answer 400, not 404"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}")
    if minimum is not None and parsed < minimum:
        raise ValidationError(f"Invalid {label}")
    return parsed


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("No JSON data provided")
    return data
