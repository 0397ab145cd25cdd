from pathlib import Path
from typing import Mapping, Optional, Union

PathLike = Union[str, Path]

# Single-byte encoding: every byte value decodes, so no input line can fail.
DEFAULT_ENCODING = "latin-1"

# Signed 32-bit bounds accepted for a shift amount.
SHIFT_MIN = -(2 ** 31)
SHIFT_MAX = 2 ** 31 - 1


def simple_replace(text: str, replacements: Mapping[str, str]) -> str:
    """
    Replace characters in a string based on a mapping.

    If a character is not present in the mapping, it is left as-is.
    """
    return "".join(replacements.get(char, char) for char in text)


def strip_line_ending(line: str) -> str:
    """Drop a single trailing newline, if present."""
    if line.endswith("\n"):
        return line[:-1]
    return line


def default_output_path(in_path: PathLike, suffix: str) -> Path:
    """Input path with ``suffix`` appended (``notes.txt`` -> ``notes.txt.ciph``)."""
    return Path(f"{in_path}{suffix}")


def resolve_output_path(in_path: PathLike, out_path: Optional[PathLike], suffix: str) -> Path:
    if out_path:
        return Path(out_path)
    return default_output_path(in_path, suffix)
