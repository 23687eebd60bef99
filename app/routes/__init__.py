from flask import request

from exceptions import ValidationException


def include_resolved():
    """`?all=1` widens a list to resolved entries as well."""
    return request.args.get("all", "").lower() in ("1", "true", "yes")


def bounded_limit(default, maximum):
    limit = request.args.get("limit", default, type=int)
    if limit is None or limit < 1:
        raise ValidationException("limit must be a positive integer")
    return min(limit, maximum)


def json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
