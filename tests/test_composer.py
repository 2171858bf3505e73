"""Tests for commit message composition."""
from scripture.commit_message.classifier import classify
from scripture.commit_message.composer import compose, compose_subject, wrap_text
from scripture.config import Config
from scripture.models import ClassificationResult, Evidence, FormatRules, MessageOverrides


def section_names(message):
    return [section.name for section in message.sections]


def test_empty_diff_composes_only_unconditional_required_sections():
    config = Config()
    message = compose(classify("", config), config)

    assert message.subject == "Add codebase"
    assert section_names(message) == ["references", "changes"]
    assert message.sections[0].heading == "# References [Required]"
    assert "Closes #" in message.sections[0].body


def test_breaking_section_included_only_when_breaking():
    config = Config()
    breaking = classify("+remove the old cache layer\n", config)
    message = compose(breaking, config)

    assert section_names(message) == ["references", "changes", "breaking"]
    body = message.section("breaking").body
    assert "* Breaking change in diff:" in body
    assert "remove the old cache layer" in body


def test_optional_sections_need_content():
    config = Config()
    classification = classify("", config)
    overrides = MessageOverrides(sections={"testing": "Run pytest", "dependencies": "  "})

    message = compose(classification, config, overrides)

    assert section_names(message) == ["references", "changes", "testing"]
    assert message.section("testing").body == "Run pytest"


def test_section_override_replaces_placeholder():
    config = Config()
    overrides = MessageOverrides(sections={"references": "Closes #42"})

    message = compose(classify("", config), config, overrides)

    assert message.section("references").body == "Closes #42"


def test_changes_section_lists_files(scoped_diff):
    config = Config()
    message = compose(classify(scoped_diff, config), config)

    body = message.section("changes").body
    assert body.startswith("# Briefly describe the purpose of these changes")
    assert "* In src/app.py:\n  - def fix_crash():\n  - return None" in body


def test_subject_from_scopes(scoped_diff):
    config = Config()
    message = compose(classify(scoped_diff, config), config)

    assert message.subject == "Fix changes in docs, tests, config"


def test_subject_from_single_unscoped_file():
    classification = ClassificationResult(verb="Fix", unscoped=["src/parser.py"])
    assert compose_subject(classification, Config()) == "Fix parser.py"


def test_subject_from_files_in_one_directory():
    classification = ClassificationResult(verb="Fix", unscoped=["src/a.py", "src/b.py"])
    assert compose_subject(classification, Config()) == "Fix src"


def test_subject_overrides_are_tidied():
    classification = ClassificationResult(verb="Add")
    config = Config()

    assert compose_subject(classification, config, MessageOverrides(subject="update readme.")) == "Update readme"
    assert compose_subject(classification, config, MessageOverrides(summary="login page.")) == "Add login page"
    assert compose_subject(
        classification, config, MessageOverrides(verb="Fix", summary="login page")
    ) == "Fix login page"


def test_long_derived_subject_is_shortened_at_a_word():
    classification = ClassificationResult(
        verb="Add",
        scopes=["alpha-component", "beta-component", "gamma-component", "delta-component"],
    )

    subject = compose_subject(classification, Config())

    assert subject == "Add changes in alpha-component, beta-component"
    assert len(subject) <= 50
    assert not subject.endswith(".")


def test_body_lines_are_wrapped_at_whitespace():
    text = " ".join(["well-known"] * 20)
    wrapped = wrap_text(text, 72)

    lines = wrapped.splitlines()
    assert len(lines) > 1
    assert all(len(line) <= 72 for line in lines)
    assert " ".join(wrapped.split()) == text
    assert all(word == "well-known" for word in wrapped.split())


def test_wrap_keeps_list_indentation():
    text = "- " + " ".join(["word"] * 30)
    lines = wrap_text(text, 40).splitlines()

    assert lines[0].startswith("- word")
    assert all(line.startswith("  word") for line in lines[1:])


def test_wrap_never_breaks_long_words():
    word = "x" * 90
    assert wrap_text(f"see {word} here", 72).splitlines() == ["see", word, "here"]


def test_compose_respects_body_line_limit():
    config = Config(rules=FormatRules(body_line_max_length=40))
    overrides = MessageOverrides(sections={"changes": "word " * 40})

    message = compose(classify("", config), config, overrides)

    for section in message.sections:
        assert all(len(line) <= 40 for line in section.body.splitlines())


def test_compose_returns_new_value_each_call():
    config = Config()
    classification = classify("+fix typo\n", config)

    first = compose(classification, config)
    second = compose(classification, config)

    assert first == second
    assert first is not second
    first.sections.clear()
    assert second.sections


def test_breaking_evidence_uses_path():
    classification = ClassificationResult(
        verb="Cut",
        breaking=True,
        evidence=[Evidence(line_number=3, path="api.py", keyword="remove", text="remove v1", breaking=True)],
    )

    message = compose(classification, Config())

    assert "* Breaking change in api.py:\n  remove v1" in message.section("breaking").body


def test_subject_override_that_tidies_to_nothing_is_ignored():
    classification = ClassificationResult(verb="Fix", unscoped=["app.py"])

    assert compose_subject(classification, Config(), MessageOverrides(subject="...")) == "Fix app.py"


def test_body_lines_that_look_like_headings_are_indented():
    overrides = MessageOverrides(sections={
        "testing": "Run it\n# Step one [manual]\n# References [Required]\nthen check",
    })

    message = compose(classify("", Config()), Config(), overrides)

    assert message.section("testing").body == (
        "Run it\n # Step one [manual]\n # References [Required]\nthen check"
    )
    assert message.section("references").body.startswith("# Link to related tickets")
