"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides the shared change-attribution repository fixture.

Fixture history (every commit's author is also its committer)::

    A (Alice) -- B (Bob) -- D (Dave)      main
                  \\
                   C (Carol)              feature

A adds app.py, solo.txt, old_name.txt, doomed.txt, logo.bin and notes.txt.
B rewrites app.py lines 6-10. C changes app.py lines 2 and 9, solo.txt lines
3 and 15, renames old_name.txt to new_name.txt while changing its line 5,
deletes doomed.txt, rewrites logo.bin and adds new.txt. D only touches
notes.txt, so base (main) differs from the merge base (B).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Generator
from pathlib import Path

import pygit2
import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local prblame package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from factories import (  # noqa: E402
    ALICE,
    BOB,
    CAROL,
    DAVE,
    PrRepo,
    commit_files,
    lines,
    numbered,
)


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Reset structlog, stdlib handlers and PRBLAME__ env vars between tests."""
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    orig = {k: v for k, v in os.environ.items() if k.startswith("PRBLAME__")}
    for k in orig:
        del os.environ[k]
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    for k in list(os.environ.keys()):
        if k.startswith("PRBLAME__"):
            del os.environ[k]
    os.environ.update(orig)


@pytest.fixture
def pr_repo(tmp_path: Path) -> PrRepo:
    """Repository with a main branch and a multi-author feature branch."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    app = numbered("a", 10)
    solo = numbered("s", 20)
    renamed = numbered("r", 10)

    a = commit_files(
        repo,
        "refs/heads/main",
        ALICE,
        1,
        {
            "app.py": lines(*app),
            "solo.txt": lines(*solo),
            "old_name.txt": lines(*renamed),
            "doomed.txt": lines(*numbered("d", 4)),
            "logo.bin": bytes(range(256)),
            "notes.txt": lines(*numbered("n", 3)),
        },
        [],
        "Initial import",
    )

    app[5:10] = numbered("b", 10)[5:10]
    b = commit_files(repo, "refs/heads/main", BOB, 2, {"app.py": lines(*app)}, [a])
    repo.branches.local.create("feature", repo[b].peel(pygit2.Commit))

    app[1] = "c2"
    app[8] = "c9"
    solo[2] = "c3"
    solo[14] = "c15"
    renamed[4] = "c5"
    c = commit_files(
        repo,
        "refs/heads/feature",
        CAROL,
        3,
        {
            "app.py": lines(*app),
            "solo.txt": lines(*solo),
            "old_name.txt": None,
            "new_name.txt": lines(*renamed),
            "doomed.txt": None,
            "logo.bin": bytes(reversed(range(256))),
            "new.txt": lines("brand", "new", "file"),
        },
        [b],
        "Feature work",
    )

    d = commit_files(
        repo,
        "refs/heads/main",
        DAVE,
        4,
        {"notes.txt": lines(*numbered("n", 4))},
        [b],
        "More notes",
    )
    return PrRepo(path=repo_path, repo=repo, a=a, b=b, c=c, d=d)


@pytest.fixture
def orphan_commit(pr_repo: PrRepo) -> str:
    """Root commit on branch ``orphan`` sharing no history with main."""
    return commit_files(
        pr_repo.repo,
        "refs/heads/orphan",
        DAVE,
        5,
        {"other.txt": lines("unrelated")},
        [],
        "Unrelated root",
    )
