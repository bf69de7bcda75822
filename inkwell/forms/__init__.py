"""WTForms forms shared by the HTML views and the JSON API."""
from typing import Any
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict


class ActionForm(FlaskForm):
    """Field-less form carrying only the CSRF token for button actions."""


def json_formdata(payload: dict[str, Any] | None) -> MultiDict:
    """Turn a JSON object into form data WTForms can process.

    Lists become repeated keys, ``None`` values are dropped and booleans
    map onto what ``BooleanField`` treats as checked/unchecked.
    """
    data = MultiDict()
    for key, value in (payload or {}).items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                item = "y" if item else ""
            data.add(key, str(item))
    return data
