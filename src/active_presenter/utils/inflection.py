# ABOUTME: Attribute-name inflection helpers for human-readable labels
# ABOUTME: Turns snake_case field names into sentence-case labels

import re

_ID_SUFFIX = re.compile(r"_id$")


def humanize(name: str) -> str:
    """Turn an attribute name into a label: ``"password_confirmation"`` -> ``"Password confirmation"``.

    A trailing ``_id`` is dropped and leading underscores are ignored.
    """
    text = _ID_SUFFIX.sub("", str(name)).lstrip("_").replace("_", " ").strip()
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()
