"""
Request parsing helpers for views.
"""

from apps.core.exceptions import ValidationFailed


def body_object(request) -> dict:
    """JSON body that must be an object"""
    data = request.data
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return data


def int_param(request, name: str, default: int, maximum: int = None) -> int:
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailed(f'{name} must be an integer')
    if value < 0:
        raise ValidationFailed(f'{name} must not be negative')
    if maximum is not None:
        value = min(value, maximum)
    return value


def list_param(request, name: str) -> list:
    """Comma separated values, blanks dropped"""
    raw = request.query_params.get(name, '')
    return [item.strip() for item in raw.split(',') if item.strip()]
