"""
tests for the locator module.
"""

from __future__ import annotations

from pathlib import Path

from autovenv.config import ResolverConfig
from autovenv.filesystem import LocalFilesystem
from autovenv.locator import locate_in_directory


def locate(base_dir: Path, config: ResolverConfig | None = None) -> Path | None:
    return locate_in_directory(base_dir, config or ResolverConfig(), LocalFilesystem())


class TestNamePass:
    """tests for the name-based first pass."""

    def test_dotvenv(self, dotvenv_project: Path) -> None:
        """test that .venv is found by name."""
        assert locate(dotvenv_project) == dotvenv_project / ".venv"

    def test_name_priority(self, project: Path, make_venv) -> None:
        """test that env is preferred over venv with default ordering."""
        make_venv(project / "venv")
        make_venv(project / "env")

        assert locate(project) == project / "env"

    def test_configured_order_wins(self, project: Path, make_venv) -> None:
        """test that the configured order defines priority."""
        make_venv(project / "venv")
        make_venv(project / "env")

        config = ResolverConfig(common_names=["venv", "env"])
        assert locate(project, config) == project / "venv"

    def test_name_pass_beats_structure_pass(self, project: Path, make_venv) -> None:
        """test that a named env wins over an earlier-sorting unnamed one."""
        make_venv(project / "aaa")
        make_venv(project / "virtualenv")

        assert locate(project) == project / "virtualenv"

    def test_invalid_named_candidate_skipped(self, project: Path, make_venv) -> None:
        """test that an invalid env does not stop the search."""
        make_venv(project / "env", cfg=False)
        make_venv(project / ".venv")

        assert locate(project) == project / ".venv"


class TestStructurePass:
    """tests for the structure-based second pass."""

    def test_structure_fallback(self, project: Path, make_venv) -> None:
        """test that an unconventionally named env is found."""
        make_venv(project / "my-interpreter")
        (project / "src").mkdir()

        assert locate(project) == project / "my-interpreter"

    def test_hidden_directory_skipped(self, project: Path, make_venv) -> None:
        """test that a valid hidden directory is not found structurally."""
        make_venv(project / ".hidden-env")

        assert locate(project) is None

    def test_hidden_directory_found_by_name(self, project: Path, make_venv) -> None:
        """test that a hidden directory is found when it is a common name."""
        make_venv(project / ".hidden-env")

        config = ResolverConfig(common_names=[".hidden-env"])
        assert locate(project, config) == project / ".hidden-env"

    def test_lexicographic_order(self, project: Path, make_venv) -> None:
        """test that multiple structural matches resolve deterministically."""
        make_venv(project / "zeta")
        make_venv(project / "alpha")
        make_venv(project / "mid")

        assert locate(project) == project / "alpha"

    def test_files_ignored(self, project: Path) -> None:
        """test that regular files are not candidates."""
        (project / "README.md").write_text("")
        assert locate(project) is None


class TestNotFound:
    """tests for negative outcomes."""

    def test_empty_directory(self, project: Path) -> None:
        """test that an empty directory yields none."""
        assert locate(project) is None

    def test_missing_directory(self, tmp_path: Path) -> None:
        """test that a missing base directory yields none."""
        assert locate(tmp_path / "missing") is None

    def test_base_is_a_file(self, tmp_path: Path) -> None:
        """test that a file as base directory yields none."""
        base = tmp_path / "file.py"
        base.write_text("")
        assert locate(base) is None

    def test_missing_cfg(self, project: Path, make_venv) -> None:
        """test that a .venv without pyvenv.cfg is not found."""
        make_venv(project / ".venv", cfg=False)
        assert locate(project) is None
