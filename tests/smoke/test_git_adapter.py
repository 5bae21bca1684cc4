# tests/smoke/test_git_adapter.py
import shutil

import pytest
from git import Actor, Repo

from skill_installer.adapters.git import GitPythonClient
from skill_installer.domain.errors import CloneFailure

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def origin(tmp_path):
    path = tmp_path / "origin"
    repo = Repo.init(path)
    skill = path / "skills" / "demo" / "SKILL.md"
    skill.parent.mkdir(parents=True)
    skill.write_text("---\nname: demo\n---\n", encoding="utf-8")
    repo.index.add(["skills/demo/SKILL.md"])
    who = Actor("test", "test@example.com")
    repo.index.commit("add demo", author=who, committer=who)
    return path


def test_shallow_clone_of_local_repo(origin, tmp_path):
    dest = tmp_path / "clone"
    GitPythonClient(timeout=30).clone(origin.as_uri(), dest, depth=1)
    assert (dest / "skills" / "demo" / "SKILL.md").read_text(encoding="utf-8").startswith("---")
    assert len(list(Repo(dest).iter_commits())) == 1


def test_clone_failure_carries_git_output(tmp_path):
    url = (tmp_path / "does-not-exist").as_uri()
    with pytest.raises(CloneFailure) as exc:
        GitPythonClient(timeout=5).clone(url, tmp_path / "clone")
    assert exc.value.url == url
    assert exc.value.output


def test_stall_timeout_env():
    env = GitPythonClient(timeout=0.2)._env()
    assert env["GIT_HTTP_LOW_SPEED_TIME"] == "1"
    assert env["GIT_TERMINAL_PROMPT"] == "0"
