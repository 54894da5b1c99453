"""Unit tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from droidplace import __version__
from droidplace import cli
from droidplace.cli import app

runner = CliRunner()

VIEW_MODEL = "class LoginViewModel : ViewModel() {\n    fun login() {}\n}\n"

RESPONSE = """Here is the screen.

**LoginScreen.kt**
```kotlin
@Composable
fun Login() {
    Text("Sign in")
}
```

Then build it:

```bash
./gradlew assembleDebug
```
"""


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep commands from reconfiguring global logging during tests."""
    monkeypatch.setattr(cli, "setup_logging", lambda config=None: None)


@pytest.fixture
def source_file(temp_dir):
    path = temp_dir / "candidate.kt"
    path.write_text(VIEW_MODEL, encoding="utf-8")
    return path


class TestCli:
    """Tests for droidplace commands."""

    def test_version(self):
        """Test the version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_resolve(self, source_file, project_root):
        """Test that resolve reports the target without writing."""
        result = runner.invoke(
            app, ["resolve", str(source_file), "--project", str(project_root), "-l", "kotlin"]
        )

        assert result.exit_code == 0
        assert "LoginViewModel.kt" in result.output
        assert "kotlin_source" in result.output
        assert list(project_root.iterdir()) == []

    def test_place(self, source_file, project_root):
        """Test that place writes the file at the resolved location."""
        result = runner.invoke(app, ["place", str(source_file), "--project", str(project_root)])

        assert result.exit_code == 0
        target = project_root / "app/src/main/kotlin/com/example/myapp2/ui/viewmodels/LoginViewModel.kt"
        assert target.read_text(encoding="utf-8") == VIEW_MODEL

    def test_place_twice_skips(self, source_file, project_root):
        """Test that placing onto an existing file does not fail or overwrite."""
        runner.invoke(app, ["place", str(source_file), "--project", str(project_root)])
        source_file.write_text(VIEW_MODEL + "// changed\n", encoding="utf-8")
        result = runner.invoke(app, ["place", str(source_file), "--project", str(project_root)])

        assert result.exit_code == 0
        assert "skipped" in result.output
        target = project_root / "app/src/main/kotlin/com/example/myapp2/ui/viewmodels/LoginViewModel.kt"
        assert target.read_text(encoding="utf-8") == VIEW_MODEL

    def test_place_with_name_and_directory(self, source_file, project_root):
        """Test the name and directory options."""
        result = runner.invoke(
            app,
            [
                "place",
                str(source_file),
                "--project",
                str(project_root),
                "--name",
                "Auth",
                "--dir",
                "feature/auth",
            ],
        )

        assert result.exit_code == 0
        assert (project_root / "feature/auth/Auth.kt").is_file()

    def test_extract_lists_blocks(self, temp_dir, project_root):
        """Test listing blocks without writing."""
        response = temp_dir / "response.md"
        response.write_text(RESPONSE, encoding="utf-8")
        result = runner.invoke(app, ["extract", str(response), "--project", str(project_root)])

        assert result.exit_code == 0
        assert "Code Blocks" in result.output
        assert list(project_root.iterdir()) == []

    def test_extract_writes_generatable_blocks(self, temp_dir, project_root):
        """Test that --write places only generatable blocks."""
        response = temp_dir / "response.md"
        response.write_text(RESPONSE, encoding="utf-8")
        result = runner.invoke(app, ["extract", str(response), "--project", str(project_root), "--write"])

        assert result.exit_code == 0
        target = project_root / "app/src/main/kotlin/com/example/myapp2/ui/compose/screens/LoginScreen.kt"
        assert target.read_text(encoding="utf-8").startswith("@Composable")
        assert not (project_root / "app/src/main/GeneratedFile.txt").exists()

    def test_extract_without_blocks(self, temp_dir, project_root):
        """Test a response with no fenced blocks."""
        response = temp_dir / "response.md"
        response.write_text("Nothing to see here.", encoding="utf-8")
        result = runner.invoke(app, ["extract", str(response), "--project", str(project_root)])

        assert result.exit_code == 0
        assert "No code blocks found" in result.output

    def test_config(self):
        """Test showing configuration."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Source Scan Limit" in result.output
        assert "DROIDPLACE_APP_MODULE" in result.output

    def test_verbose_does_not_change_shared_config(self, source_file, project_root):
        """Test that --verbose only affects the command it is given to."""
        from droidplace.core.config import get_config

        before = get_config().log_level
        result = runner.invoke(
            app, ["resolve", str(source_file), "--project", str(project_root), "--verbose"]
        )

        assert result.exit_code == 0
        assert get_config().log_level == before
