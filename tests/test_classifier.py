"""Tests for diff classification."""
from scripture.commit_message.classifier import classify, iter_changed_lines, match_scope
from scripture.config import Config
from scripture.models import ChangeIndicator, ScopePattern, StandardVerb


def test_remove_lines_classify_as_breaking_cut():
    diff = "+remove the old cache layer\n-remove stale entries\n"

    result = classify(diff, Config())

    assert result.verb == "Cut"
    assert result.breaking is True
    assert result.counts == {"Cut": 2}
    assert [item.keyword for item in result.evidence] == ["remove", "remove"]


def test_empty_diff_yields_default_classification():
    result = classify("", Config())

    assert result.verb == "Add"
    assert result.scopes == []
    assert result.unscoped == []
    assert result.breaking is False
    assert result.evidence == []


def test_default_verb_comes_from_config():
    config = Config(default_verb="Fix")
    assert classify("+nothing to see here\n", config).verb == "Fix"


def test_highest_count_wins():
    diff = "+add one\n+add two\n+fix three\n"
    assert classify(diff, Config()).verb == "Add"


def test_tie_goes_to_earliest_configured_indicator():
    # "fix" is configured before "add", diff order does not matter
    assert classify("+add test\n+fix typo\n", Config()).verb == "Fix"
    assert classify("+fix typo\n+add test\n", Config()).verb == "Fix"


def test_tie_break_follows_custom_configuration_order():
    config = Config(indicators=[
        ChangeIndicator(keyword="tweak", verb="Fix"),
        ChangeIndicator(keyword="feature", verb="Add"),
    ])
    assert classify("+feature\n+tweak\n", config).verb == "Fix"

    config = Config(indicators=[
        ChangeIndicator(keyword="feature", verb="Add"),
        ChangeIndicator(keyword="tweak", verb="Fix"),
    ])
    assert classify("+feature\n+tweak\n", config).verb == "Add"


def test_matching_is_case_insensitive_and_at_word_start():
    result = classify("+Removed the REMOVE button\n+prefix\n", Config())

    assert result.counts["Cut"] == 2
    # "prefix" contains "fix" but not at a word start
    assert "Fix" not in result.counts


def test_breaking_flag_independent_of_winning_verb():
    diff = "+add one\n+add two\n+add three\n+this will break callers\n"
    result = classify(diff, Config())

    assert result.verb == "Add"
    assert result.breaking is True
    assert [item.keyword for item in result.breaking_evidence] == ["break"]


def test_scopes_and_unscoped_paths(scoped_diff):
    result = classify(scoped_diff, Config())

    assert result.verb == "Fix"
    assert result.scopes == ["docs", "tests", "config"]
    assert result.unscoped == ["src/app.py"]
    assert result.changes["src/app.py"] == ["def fix_crash():", "return None"]


def test_evidence_records_line_and_path(scoped_diff):
    result = classify(scoped_diff, Config())

    (item,) = result.evidence
    assert item.path == "src/app.py"
    assert item.keyword == "fix"
    assert scoped_diff.splitlines()[item.line_number - 1] == "+def fix_crash():"


def test_classify_is_deterministic(scoped_diff):
    config = Config()
    assert classify(scoped_diff, config) == classify(scoped_diff, config)


def test_deleted_file_keeps_its_path():
    diff = (
        "diff --git a/old.py b/old.py\n"
        "deleted file mode 100644\n"
        "--- a/old.py\n"
        "+++ /dev/null\n"
        "@@ -1 +0,0 @@\n"
        "-print('x')\n"
    )
    result = classify(diff, Config())

    assert result.unscoped == ["old.py"]
    assert result.changes == {"old.py": []}


def test_header_lines_are_not_scanned():
    diff = (
        "diff --git a/fix.py b/fix.py\n"
        "--- a/fix.py\n"
        "+++ b/fix.py\n"
        "@@ -1 +1 @@\n"
        "-a = 1\n"
        "+a = 2\n"
    )
    assert classify(diff, Config()).counts == {}


def test_hunk_lines_that_look_like_headers_are_changes():
    diff = "@@ -1 +1 @@\n--- remove me\n"
    changed = list(iter_changed_lines(diff))

    assert changed == [(2, None, "-", "-- remove me")]


def test_match_scope_prefix_and_glob():
    scopes = [
        ScopePattern(name="api", pattern="src/api/"),
        ScopePattern(name="config", pattern="*.toml"),
    ]

    assert match_scope("src/api/routes.py", scopes) == "api"
    assert match_scope("settings/app.toml", scopes) == "config"
    assert match_scope("src/core.py", scopes) is None


def test_custom_verbs_and_indicators():
    config = Config(
        standard_verbs=[StandardVerb(label="Ship"), StandardVerb(label="Scrap")],
        default_verb="Ship",
        indicators=[ChangeIndicator(keyword="obsolete", verb="Scrap", breaking=True)],
        scopes=[],
    )

    result = classify("+mark handler obsolete\n", config)

    assert result.verb == "Scrap"
    assert result.breaking is True


def test_plain_unified_diff_with_several_files():
    diff = (
        "--- a/src/one.py\n"
        "+++ b/src/one.py\n"
        "@@\n"
        "+x = 1\n"
        "--- a/docs/two.md\n"
        "+++ b/docs/two.md\n"
        "@@\n"
        "+hello\n"
    )
    result = classify(diff, Config())

    assert result.changes == {"src/one.py": ["x = 1"], "docs/two.md": ["hello"]}
    assert result.scopes == ["docs"]
    assert result.unscoped == ["src/one.py"]


def test_hunk_ends_when_its_range_is_used_up():
    diff = (
        "--- a/app.py\n"
        "+++ b/app.py\n"
        "@@ -1,2 +1,2 @@\n"
        " import os\n"
        "-x = 1\n"
        "+x = 2\n"
        "--- a/docs/notes.md\n"
        "+++ b/docs/notes.md\n"
        "@@ -0,0 +1 @@\n"
        "+remove later\n"
    )
    changed = list(iter_changed_lines(diff))

    assert changed == [
        (5, "app.py", "-", "x = 1"),
        (6, "app.py", "+", "x = 2"),
        (10, "docs/notes.md", "+", "remove later"),
    ]


def test_keywords_starting_with_punctuation():
    config = Config(indicators=[ChangeIndicator(keyword="@deprecated", verb="Stop", breaking=True)])

    result = classify("+    @deprecated\n+def old_api():\n", config)

    assert result.verb == "Stop"
    assert result.breaking is True
    assert classify("+user@deprecated.example\n", config).counts == {}


def test_files_without_text_changes_are_touched():
    diff = (
        "diff --git a/docs/logo.png b/docs/logo.png\n"
        "Binary files a/docs/logo.png and b/docs/logo.png differ\n"
        "diff --git a/old_name.py b/new_name.py\n"
        "similarity index 100%\n"
        "rename from old_name.py\n"
        "rename to new_name.py\n"
    )
    result = classify(diff, Config())

    assert result.scopes == ["docs"]
    assert result.unscoped == ["new_name.py"]
    assert result.changes == {"docs/logo.png": [], "new_name.py": []}
