"""Unit tests for version lookup."""

from importlib.metadata import PackageNotFoundError

from infrastructure import version as version_module
from infrastructure.version import version_from_pyproject


def test_reads_project_version(tmp_path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "chrononagram-api"\nversion = "2.4.1"\n')

    assert version_from_pyproject(pyproject) == "2.4.1"


def test_falls_back_to_pyproject_when_not_installed(monkeypatch):
    def not_installed(name):
        raise PackageNotFoundError(name)

    monkeypatch.setattr(version_module, "version", not_installed)
    monkeypatch.setattr(version_module, "version_from_pyproject", lambda: "0.0.9")

    assert version_module.get_version() == "0.0.9"
