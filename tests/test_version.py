import tomllib
from pathlib import Path

import solutionlab


def test_package_version_matches_pyproject() -> None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    assert solutionlab.__version__ == data["project"]["version"]
    assert solutionlab.__version__ != "0+unknown"
