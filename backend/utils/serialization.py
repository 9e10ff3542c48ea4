from enum import Enum
from datetime import datetime, date
from flask import request
from sqlalchemy.inspection import inspect


def camel_case(key):
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def to_dict(model_instance, fields=None, camel=False, exclude=("password_hash",)):
    """Serialize a model's columns; ``fields`` limits and orders the output."""
    output = {}
    mapper = inspect(model_instance.__class__)
    columns = [column.key for column in mapper.columns]

    for key in fields or columns:
        if key in exclude:
            continue
        value = getattr(model_instance, key)

        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (datetime, date)):
            value = value.isoformat()
        elif isinstance(value, float) and value.is_integer():
            value = int(value)

        output[camel_case(key) if camel else key] = value

    return output


def request_json():
    """The request's JSON body when it is an object, otherwise ``{}``."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
