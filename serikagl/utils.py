"""File, string and console helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterable, Sequence

_PROGRESS_BAR_WIDTH = 70


def read_file(filename: str | os.PathLike) -> bytes:
    """Return the whole content of a file as bytes."""
    try:
        return Path(filename).read_bytes()
    except OSError as exc:
        raise FileNotFoundError(
            f"cannot open file '{filename}' (current dir: {os.getcwd()})"
        ) from exc


def file_extension(filename: str) -> str:
    """Return the text after the last dot, or '' if there is none or it leads."""
    dot = filename.rfind(".")
    if dot > 0:
        return filename[dot + 1 :]
    return ""


def _fmt(value: float) -> str:
    return f"{float(value):g}"


def format_vec3(vec: Sequence[float]) -> str:
    """Format a three-component vector as ``[ x, y, z ]``."""
    x, y, z = (vec[0], vec[1], vec[2])
    return f"[ {_fmt(x)}, {_fmt(y)}, {_fmt(z)} ]"


def print_vec3(name: str, vec: Sequence[float]) -> None:
    """Print a name followed by the three components of a vector."""
    print(f"{name}{_fmt(vec[0])} {_fmt(vec[1])} {_fmt(vec[2])} ")


def print_mat4(name: str, mat: Iterable[Iterable[float]]) -> None:
    """Print a 4x4 matrix row by row under a header line."""
    print(f"Matrix manually:{name}")
    for row in mat:
        print("".join(f"{_fmt(value)} " for value in row))


def update_progress(progress: float) -> None:
    """Draw a one-line progress bar for ``progress`` in [0, 1]."""
    pos = int(_PROGRESS_BAR_WIDTH * progress)
    bar = "".join(
        "=" if i < pos else ">" if i == pos else " "
        for i in range(_PROGRESS_BAR_WIDTH)
    )
    sys.stdout.write(f"[{bar}] {int(progress * 100.0)} %\r")
    sys.stdout.flush()


def string_ends_with(text: str, suffix: str) -> bool:
    """Return whether ``text`` ends with ``suffix``."""
    return text.endswith(suffix)


def string_starts_with(text: str, prefix: str) -> bool:
    """Return whether ``text`` starts with ``prefix``."""
    return text.startswith(prefix)


def is_directory(path: str | os.PathLike) -> bool:
    """Return whether ``path`` exists and is a directory."""
    return Path(path).is_dir()


def append_to_dir(dir_path: str | os.PathLike, file_name: str) -> str:
    """Join ``file_name`` onto an existing directory path."""
    if not is_directory(dir_path):
        raise NotADirectoryError(f"{dir_path} is not a valid directory")
    return str(Path(dir_path) / file_name)