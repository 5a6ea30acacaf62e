"""Line-scanning helpers that pull an SDK name out of issue text.

Issue templates ask reporters for the library they use, either as a
``Library used: <name> <version>`` line or as a pasted Maven dependency
(``<artifactId>name</artifactId>``). Each line of the body is tried in
turn; only the first MAX_SCANNED_LINES lines are looked at.

The artifact-id sub-rule starts its substring at the position after the
last "Library used:" marker, not after the "<artifactId>" tag. When the
"Library used:" marker is absent that position is ``-1 + 13 == 12``, which
is exactly the length of "<artifactId>", so un-indented dependency lines
still resolve. Indented lines do not.
"""

from typing import Iterator, List, Optional

LIBRARY_USED_MARKER = "Library used:"
ARTIFACT_ID_MARKER = "<artifactId>"
ARTIFACT_ID_CLOSE = "</artifactId>"

MAX_SCANNED_LINES = 256


def position_after_last(line: str, marker: str) -> int:
    """Return the index just past the last occurrence of ``marker``.

    If the marker does not occur the result is ``len(marker) - 1``.
    """
    return line.rfind(marker) + len(marker)


def leading_word(text: str) -> str:
    """Return ``text`` up to (excluding) the first space, stripped."""
    end = text.find(" ")
    if end == -1:
        end = len(text)
    return text[:end].strip()


def extract_library_used(line: str) -> Optional[str]:
    """Extract the name following a "Library used:" marker.

    Args:
        line: A single line of the issue body.

    Returns:
        The candidate name, or None if the marker is absent or nothing
        follows it.
    """
    if LIBRARY_USED_MARKER not in line:
        return None

    remainder = line[position_after_last(line, LIBRARY_USED_MARKER):].strip()
    return leading_word(remainder) or None


def extract_artifact_id(line: str) -> Optional[str]:
    """Extract the name enclosed by an ``<artifactId>`` tag.

    Args:
        line: A single line of the issue body.

    Returns:
        The candidate name, or None if the tag is absent or the extracted
        text is empty.
    """
    if ARTIFACT_ID_MARKER not in line:
        return None

    start = position_after_last(line, LIBRARY_USED_MARKER)
    end = line.find(ARTIFACT_ID_CLOSE, start)
    if end == -1:
        end = len(line)
    return line[start:end].strip() or None


def extract_sdk_name(line: str) -> Optional[str]:
    """Try the "Library used:" rule, then the artifact-id rule."""
    return extract_library_used(line) or extract_artifact_id(line)


def scan_lines(body: Optional[str], limit: int = MAX_SCANNED_LINES) -> List[str]:
    """Split the body on newlines, keeping at most ``limit`` lines."""
    if not body:
        return []
    return body.split("\n", limit)[:limit]


def iter_sdk_names(body: Optional[str]) -> Iterator[str]:
    """Yield every SDK name found in the scanned lines, in line order."""
    for line in scan_lines(body):
        name = extract_sdk_name(line)
        if name:
            yield name
