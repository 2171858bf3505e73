import tempfile
from pathlib import Path

import pytest
from git import Repo

ENV_VARS = [
    "SCRIPTURE_DEFAULT_VERB",
    "SCRIPTURE_OUTPUT_FILE",
    "SCRIPTURE_ALWAYS_LOG",
    "SCRIPTURE_LOG_FILE",
]

SCOPED_DIFF = """\
diff --git a/docs/guide.md b/docs/guide.md
index 1111111..2222222 100644
--- a/docs/guide.md
+++ b/docs/guide.md
@@ -1 +1 @@
-Old text
+New text
diff --git a/src/app.py b/src/app.py
index 3333333..4444444 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,2 +1,3 @@
 import os
+def fix_crash():
+    return None
diff --git a/tests/test_app.py b/tests/test_app.py
new file mode 100644
--- /dev/null
+++ b/tests/test_app.py
@@ -0,0 +1 @@
+assert True
diff --git a/pyproject.toml b/pyproject.toml
--- a/pyproject.toml
+++ b/pyproject.toml
@@ -1 +1 @@
-name = "x"
+name = "y"
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user configuration at an empty temporary location."""
    config_path = tmp_path / "scripture-config" / "config.toml"
    monkeypatch.setenv("SCRIPTURE_CONFIG", str(config_path))
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return config_path


@pytest.fixture
def scoped_diff():
    return SCOPED_DIFF


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        with repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
            writer.set_value("commit", "gpgsign", "false")

        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content\n")

        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def staged_repo(temp_git_repo):
    """Repository with one staged modification of test.txt."""
    def stage(content: str) -> str:
        repo = Repo(temp_git_repo)
        (Path(temp_git_repo) / "test.txt").write_text(content)
        repo.index.add(["test.txt"])
        return temp_git_repo
    return stage
