from pathlib import Path
from typing import cast

import orjson


def load_json(json_str: str | bytes) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON document.

    Args:
        json_str: The JSON text to parse.

    Returns:
        The parsed JSON data as a dictionary or list, or None if parsing fails
        or the document is a scalar.
    """
    try:
        data = orjson.loads(json_str)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(data, dict | list):
        return None
    return cast("dict[str, object] | list[object]", data)


def load_json_file(file_path: Path) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The parsed JSON data, or None if the content is not a JSON object or array.

    Raises:
        OSError: If the file cannot be read.
    """
    return load_json(file_path.read_bytes())
