"""Test configuration for droidplace."""

import tempfile
from pathlib import Path

import pytest

from droidplace.core.config import Config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_root(temp_dir):
    """Create an empty project directory with a predictable name.

    Returns:
        Path: Root of a project named "My-App 2".
    """
    root = temp_dir / "My-App 2"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_root):
    """Write project-relative files into the test project.

    Returns:
        Callable taking a relative path and text content, returning the path.
    """
    def _write(relative_path: str, content: str = "") -> Path:
        path = project_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config():
    """Default configuration, independent of the environment."""
    return Config()


@pytest.fixture
def tree(project_root):
    """Local project tree over the test project."""
    from droidplace.storage import LocalProjectTree
    return LocalProjectTree(project_root)
