"""
Atomic JSON file operations for the collection store.

A collection file is replaced as a whole: it is never left half-written, so a
reader sees either the previous collection or the new one.
"""

import json
import os
import shutil
import tempfile
from typing import Any


def atomic_json_save(data: Any, output_file: str | os.PathLike[str]) -> bool:
    """
    Save JSON data to file using atomic write operations.

    1. Write to a temporary file in the target directory
    2. Validate the temporary file parses as JSON
    3. Move it over the target (rename is atomic on the same filesystem)

    Args:
        data: JSON-serialisable value (a collection is a list of records)
        output_file: Target file path

    Returns:
        True if save succeeded

    Raises:
        OSError, TypeError, ValueError: The write failed; the target is untouched
    """
    output_file = os.fspath(output_file)
    directory = os.path.dirname(output_file) or "."
    os.makedirs(directory, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=directory, text=True)

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        with open(temp_path, encoding="utf-8") as f:
            json.load(f)

        shutil.move(temp_path, output_file)
        return True

    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise

