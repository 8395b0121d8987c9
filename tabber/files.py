"""Reading documents from disk and writing converted lines back."""
from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Iterable, Iterator, Sequence

from .converter import LineEdit


class DocumentSaveError(Exception):
    """Raised when a converted document cannot be written to disk."""


def read_document(path: str) -> list[str]:
    """Return the lines of ``path`` without their ``"\\n"`` terminators.

    Newlines are not translated, so a ``"\\r"`` stays at the end of its line
    and ``"\\n".join(lines)`` gives back the exact file content.
    """

    with open(path, encoding="utf-8", newline="") as f:
        return f.read().split("\n")


def apply_edits(lines: Sequence[str], edits: Iterable[LineEdit]) -> list[str]:
    updated = list(lines)
    for edit in edits:
        if updated[edit.line_index] != edit.original_text:
            raise ValueError(
                f"Line {edit.line_index + 1} changed since the edits were generated"
            )
        updated[edit.line_index] = edit.new_text
    return updated


def write_document(path: str, lines: Sequence[str]) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tabber.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(lines))
            f.flush()
            os.fsync(f.fileno())
        with contextlib.suppress(OSError):
            os.chmod(tmp_path, os.stat(path).st_mode & 0o7777)
        os.replace(tmp_path, path)
    except Exception as exc:
        with contextlib.suppress(Exception):
            os.unlink(tmp_path)
        raise DocumentSaveError(f"Failed to save {path}: {exc}") from exc


def iter_files(
    target: str, recursive: bool = True, skip_extensions: Iterable[str] = ()
) -> Iterator[str]:
    """Yield the files under ``target`` in sorted order.

    Hidden entries (``.git`` and friends) and files whose extension is in
    ``skip_extensions`` are left out.
    """

    skip = {ext.lower() for ext in skip_extensions}
    with os.scandir(target) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir(follow_symlinks=False):
            if recursive:
                yield from iter_files(entry.path, recursive, skip)
            continue
        if not entry.is_file():
            continue
        if os.path.splitext(entry.name)[1].lower() in skip:
            continue
        yield entry.path
