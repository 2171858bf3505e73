"""Heuristic classification of staged diffs."""
from fnmatch import fnmatch
import re
from typing import Dict, List, Optional, Tuple

from ..config import Config
from ..models import ChangeIndicator, ClassificationResult, Evidence, ScopePattern

GLOB_CHARS = set("*?[")
HUNK_RANGE = re.compile(r"^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@")


def _keyword_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\w)" + re.escape(keyword.lower()))


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def _hunk_sizes(line: str) -> Tuple[int, int]:
    match = HUNK_RANGE.match(line)
    if match is None:
        return -1, -1
    old, new = match.groups()
    return int(old if old is not None else 1), int(new if new is not None else 1)


def walk_diff(diff_text: str):
    """Yield (line_number, path, marker, text) for file headers and changed lines.

    A file is reported once with an empty marker and text as soon as its path
    is known, so binary, renamed and mode-only files are seen too. Changed
    lines carry their ``+``/``-`` marker. ``---``/``+++`` lines are headers
    only outside a hunk: a hunk ends when the line counts of its ``@@`` range
    are used up, or, for a bare ``@@``, at a ``---`` line directly followed by
    ``+++``. Lines seen before any header have no path.
    """
    lines = diff_text.splitlines()
    path: Optional[str] = None
    git_header = False
    # Lines left in the current hunk; -1 while inside a hunk without a range
    old_left = new_left = 0

    for index, line in enumerate(lines):
        line_number = index + 1
        sized_hunk = old_left > 0 or new_left > 0
        open_hunk = old_left < 0

        if line.startswith("diff --git "):
            old_left = new_left = 0
            git_header = True
            parts = line.split()
            path = _strip_prefix(parts[-1], "b/") if len(parts) >= 4 else None
            if path is not None:
                yield line_number, path, "", ""
            continue

        if line.startswith("@@"):
            old_left, new_left = _hunk_sizes(line)
            git_header = False
            continue

        if line.startswith("--- ") and not sized_hunk and (
            not open_hunk
            or (index + 1 < len(lines) and lines[index + 1].startswith("+++ "))
        ):
            old_left = new_left = 0
            target = line[4:].strip()
            if not git_header:
                path = None if target == "/dev/null" else _strip_prefix(target, "a/")
            continue

        if line.startswith("+++ ") and not sized_hunk and not open_hunk:
            target = line[4:].strip()
            if target != "/dev/null":
                path = _strip_prefix(target, "b/")
            if path is not None:
                yield line_number, path, "", ""
            continue

        if line.startswith("+"):
            if new_left > 0:
                new_left -= 1
            yield line_number, path, "+", line[1:]
        elif line.startswith("-"):
            if old_left > 0:
                old_left -= 1
            yield line_number, path, "-", line[1:]
        elif line.startswith(" ") and sized_hunk:
            old_left = max(old_left - 1, 0)
            new_left = max(new_left - 1, 0)


def iter_changed_lines(diff_text: str):
    """Yield (line_number, path, marker, text) for every added or removed line."""
    for line_number, path, marker, text in walk_diff(diff_text):
        if marker:
            yield line_number, path, marker, text


def match_scope(path: str, scopes: List[ScopePattern]) -> Optional[str]:
    """Return the name of the first scope pattern matching ``path``."""
    for scope in scopes:
        if GLOB_CHARS & set(scope.pattern):
            if fnmatch(path, scope.pattern):
                return scope.name
        elif path.startswith(scope.pattern):
            return scope.name
    return None


def _pick_verb(counts: Dict[str, int], first_seen: Dict[str, int], default: str) -> str:
    if not counts:
        return default
    # Highest count first, then the verb whose indicator is configured earliest
    return min(counts, key=lambda verb: (-counts[verb], first_seen[verb]))


def classify(diff_text: str, config: Config) -> ClassificationResult:
    """Classify a unified diff into a verb, scopes and a breaking-change flag.

    Args:
        diff_text: Raw ``git diff`` output, possibly empty
        config: Vocabulary, indicator and scope tables

    Returns:
        ClassificationResult: The suggested verb and the evidence behind it
    """
    indicators: List[Tuple[int, ChangeIndicator, "re.Pattern[str]"]] = [
        (index, indicator, _keyword_pattern(indicator.keyword))
        for index, indicator in enumerate(config.indicators)
    ]

    counts: Dict[str, int] = {}
    first_seen: Dict[str, int] = {}
    evidence: List[Evidence] = []
    changes: Dict[str, List[str]] = {}
    breaking = False

    for line_number, path, marker, text in walk_diff(diff_text):
        if path is not None:
            added = changes.setdefault(path, [])
            if marker == "+" and text.strip():
                added.append(text.strip())
        if not marker:
            continue

        lowered = text.lower()
        for index, indicator, pattern in indicators:
            hits = len(pattern.findall(lowered))
            if not hits:
                continue

            evidence.append(Evidence(
                line_number=line_number,
                path=path,
                keyword=indicator.keyword,
                text=text.strip(),
                breaking=indicator.breaking,
            ))
            breaking = breaking or indicator.breaking

            if indicator.verb is not None:
                counts[indicator.verb] = counts.get(indicator.verb, 0) + hits
                first_seen[indicator.verb] = min(first_seen.get(indicator.verb, index), index)

    scopes: List[str] = []
    unscoped: List[str] = []
    for path in changes:
        scope = match_scope(path, config.scopes)
        if scope is None:
            unscoped.append(path)
        elif scope not in scopes:
            scopes.append(scope)

    return ClassificationResult(
        verb=_pick_verb(counts, first_seen, config.default_verb),
        scopes=scopes,
        unscoped=unscoped,
        breaking=breaking,
        counts=counts,
        evidence=evidence,
        changes=changes,
    )
