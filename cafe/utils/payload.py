from flask import request

from ..errors import ValidationError


def json_body():
    """The request's JSON object; an empty body reads as ``{}``."""
    data = request.get_json(force=True, silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data
