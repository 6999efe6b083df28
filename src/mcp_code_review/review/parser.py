# src/mcp_code_review/review/parser.py
"""Unified diff parsing.

The parser is deliberately forgiving: it never raises on malformed diff
syntax. Lines it does not recognise (``\\ No newline at end of file``,
``index``/``similarity``/``rename`` metadata, stray text) are dropped, and
partially built hunks and files are still emitted.
"""
import re
from dataclasses import dataclass, field


NULL_DEVICE = "/dev/null"

_FILE_HEADER = re.compile(r"^diff --git a/(.*) b/(.*)$")
# Fields are captured loosely so that non-numeric values fall back to 0
# instead of making the header unrecognisable.
_HUNK_HEADER = re.compile(r"^@@ -([^\s,]*)(?:,(\S*))? \+([^\s,]*)(?:,(\S*))? @@")


@dataclass
class Hunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: list[str] = field(default_factory=list)

    @property
    def added_count(self) -> int:
        return sum(1 for line in self.lines if line.startswith("+"))

    @property
    def removed_count(self) -> int:
        return sum(1 for line in self.lines if line.startswith("-"))


@dataclass
class FileDiff:
    old_path: str
    new_path: str
    hunks: list[Hunk] = field(default_factory=list)
    is_new: bool = False
    is_deleted: bool = False

    @property
    def path(self) -> str:
        return self.new_path or self.old_path


def _to_int(value: str | None, default: int) -> int:
    """Parse a hunk range field; omitted -> ``default``, unparseable -> 0."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return 0


def _is_null_device(argument: str) -> bool:
    # git may append a tab and timestamp after the path
    return argument.split("\t", 1)[0].strip() == NULL_DEVICE


def parse_diff(diff_text: str) -> list[FileDiff]:
    """Parse unified diff text into an ordered list of FileDiff."""
    files: list[FileDiff] = []
    current_file: FileDiff | None = None
    current_hunk: Hunk | None = None

    def flush_hunk() -> None:
        nonlocal current_hunk
        if current_hunk is not None and current_file is not None:
            current_file.hunks.append(current_hunk)
        current_hunk = None

    for raw_line in diff_text.split("\n"):
        line = raw_line.removesuffix("\r")

        header = _FILE_HEADER.match(line)
        if header:
            flush_hunk()
            if current_file is not None:
                files.append(current_file)
            current_file = FileDiff(old_path=header.group(1), new_path=header.group(2))
            continue

        if line.startswith("--- "):
            if current_file is not None and _is_null_device(line[4:]):
                current_file.is_new = True
            continue

        if line.startswith("+++ "):
            if current_file is not None and _is_null_device(line[4:]):
                current_file.is_deleted = True
            continue

        hunk_header = _HUNK_HEADER.match(line)
        if hunk_header:
            flush_hunk()
            old_start, old_lines, new_start, new_lines = hunk_header.groups()
            current_hunk = Hunk(
                old_start=_to_int(old_start, 0),
                old_lines=_to_int(old_lines, 1),
                new_start=_to_int(new_start, 0),
                new_lines=_to_int(new_lines, 1),
            )
            continue

        if current_hunk is not None and line[:1] in ("+", "-", " "):
            current_hunk.lines.append(line)

    flush_hunk()
    if current_file is not None:
        files.append(current_file)

    return files


def format_for_review(files: list[FileDiff]) -> str:
    """Render parsed diffs back into a compact, prompt-friendly text.

    The output starts each file with a ``diff --git`` header so it can be
    parsed again with the same file and hunk structure.
    """
    parts: list[str] = []

    for diff_file in files:
        parts.append(f"diff --git a/{diff_file.old_path} b/{diff_file.new_path}\n")
        if diff_file.is_new:
            status = "New file"
        elif diff_file.is_deleted:
            status = "Deleted"
        else:
            status = "Modified"
        parts.append(f"Status: {status}\n\n")

        for hunk in diff_file.hunks:
            parts.append(
                f"@@ -{hunk.old_start},{hunk.old_lines} +{hunk.new_start},{hunk.new_lines} @@\n"
            )
            for line in hunk.lines:
                parts.append(f"{line}\n")
            parts.append("\n")

    return "".join(parts)


def diff_stats(files: list[FileDiff]) -> dict[str, int]:
    """Summary counts for response metadata."""
    hunks = [hunk for diff_file in files for hunk in diff_file.hunks]
    return {
        "file_count": len(files),
        "line_count": sum(len(hunk.lines) for hunk in hunks),
        "lines_added": sum(hunk.added_count for hunk in hunks),
        "lines_removed": sum(hunk.removed_count for hunk in hunks),
    }
