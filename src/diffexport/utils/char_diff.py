#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/utils/char_diff.py
"""Character-level diffing for inline highlighting.

Renderers use these helpers to highlight the characters that changed between
a removed line and the added line that replaced it. Lines are paired by
position inside each run of removed lines followed by a run of added lines,
and only pairs that share enough characters are highlighted.
"""

from __future__ import annotations

import difflib
from typing import Sequence

from diffexport.constants import DEFAULT_CHAR_DIFF_THRESHOLD
from diffexport.models import CharSegment, DiffLine


def compute_char_segments(original: str, modified: str) -> tuple[list[CharSegment], list[CharSegment]]:
    """Compute character-level segments for a pair of lines.

    Parameters
    ----------
    original : str
        Content of the removed line
    modified : str
        Content of the added line

    Returns
    -------
    tuple of (list of CharSegment, list of CharSegment)
        Segments for the original line (``unchanged``/``removed``) and for the
        modified line (``unchanged``/``added``)

    Examples
    --------
        >>> old, new = compute_char_segments("old text", "new text")
        >>> [s.type for s in old]
        ['removed', 'unchanged']

    """
    if original == modified:
        return [CharSegment(original, "unchanged")], [CharSegment(modified, "unchanged")]

    original_segments: list[CharSegment] = []
    modified_segments: list[CharSegment] = []

    matcher = difflib.SequenceMatcher(None, original, modified, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append_segment(original_segments, original[i1:i2], "unchanged")
            _append_segment(modified_segments, modified[j1:j2], "unchanged")
        else:
            # replace, delete and insert all reduce to a removed and/or added run
            _append_segment(original_segments, original[i1:i2], "removed")
            _append_segment(modified_segments, modified[j1:j2], "added")

    return original_segments, modified_segments


def _append_segment(segments: list[CharSegment], text: str, seg_type: str) -> None:
    if not text:
        return
    if segments and segments[-1].type == seg_type:
        segments[-1] = CharSegment(segments[-1].text + text, segments[-1].type)
    else:
        segments.append(CharSegment(text, seg_type))  # type: ignore[arg-type]


def should_show_char_diff(original: str, modified: str, threshold: float = DEFAULT_CHAR_DIFF_THRESHOLD) -> bool:
    """Decide whether two lines are similar enough for character highlighting.

    Similarity is the number of distinct characters the lines share divided
    by the larger distinct-character count. Identical or empty lines are never
    highlighted.
    """
    if not original or not modified:
        return False
    if original == modified:
        return False

    original_chars = set(original)
    modified_chars = set(modified)
    common = len(original_chars & modified_chars)
    similarity = common / max(len(original_chars), len(modified_chars))
    return similarity >= threshold


def pair_changed_lines(lines: Sequence[DiffLine]) -> dict[int, int]:
    """Pair removed lines with the added lines that follow them.

    Each run of consecutive ``removed`` lines directly followed by a run of
    ``added`` lines is paired by position. Surplus lines on either side stay
    unpaired.

    Returns
    -------
    dict of int to int
        Maps the index of every paired line to the index of its partner, in
        both directions

    """
    pairs: dict[int, int] = {}
    i = 0
    total = len(lines)

    while i < total:
        if lines[i].type != "removed":
            i += 1
            continue

        removed_start = i
        while i < total and lines[i].type == "removed":
            i += 1
        added_start = i
        while i < total and lines[i].type == "added":
            i += 1

        removed_count = added_start - removed_start
        added_count = i - added_start
        for offset in range(min(removed_count, added_count)):
            removed_index = removed_start + offset
            added_index = added_start + offset
            pairs[removed_index] = added_index
            pairs[added_index] = removed_index

    return pairs


def compute_line_segments(
    lines: Sequence[DiffLine],
    threshold: float = DEFAULT_CHAR_DIFF_THRESHOLD,
) -> dict[int, list[CharSegment]]:
    """Resolve character segments for every line that should be highlighted.

    Precomputed ``DiffLine.segments`` always win. Otherwise paired
    removed/added lines that pass :func:`should_show_char_diff` get segments
    from :func:`compute_char_segments`.

    Returns
    -------
    dict of int to list of CharSegment
        Segments keyed by line index; lines without highlighting are absent

    """
    result: dict[int, list[CharSegment]] = {}

    for index, line in enumerate(lines):
        if line.segments is not None:
            result[index] = list(line.segments)

    for index, partner in pair_changed_lines(lines).items():
        line = lines[index]
        if index in result or line.type != "removed":
            continue
        added_line = lines[partner]
        if not should_show_char_diff(line.content, added_line.content, threshold):
            continue
        original_segments, modified_segments = compute_char_segments(line.content, added_line.content)
        result[index] = original_segments
        result.setdefault(partner, modified_segments)

    return result
