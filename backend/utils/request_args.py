from typing import Any

from flask import request


def query_args() -> dict[str, Any]:
    """Return the query string as a plain dict.

    A key given once maps to its string value; a repeated key maps to the
    list of all its values so filter validation can reject it.
    """
    return {
        key: values[0] if len(values) == 1 else values for key, values in request.args.lists()
    }
