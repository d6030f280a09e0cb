import sys
import json
from pathlib import Path
from typing import Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / ".agentsync" / "rules").mkdir(parents=True)
    return root


@pytest.fixture
def write_config(project_root: Path) -> Callable[..., Path]:
    def _write(payload: dict | None = None) -> Path:
        path = project_root / "agentsync.json"
        body = payload if payload is not None else {
            "tools": ["cursor", "copilot", "windsurf"],
            "baseDirs": ["."],
        }
        path.write_text(json.dumps(body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_canonical(project_root: Path, write_file) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        return write_file(project_root / ".agentsync" / "rules" / f"{name}.md", text)

    return _write


@pytest.fixture
def snapshot_tree() -> Callable[[Path], dict[str, str]]:
    def _snapshot(root: Path) -> dict[str, str]:
        return {
            str(path.relative_to(root)): path.read_text(encoding="utf-8")
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }

    return _snapshot


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
