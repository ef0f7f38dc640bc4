import pytest

from copilot_agent_util.domain.commands import (
    COMMANDS,
    DEFAULT_COMMIT_MESSAGE,
    ArgumentError,
    resolve,
)


def test_exec_splits_program_from_arguments():
    assert resolve("exec", ["ls", "-la"], {}) == ("ls", ["-la"])


def test_exec_requires_a_command():
    with pytest.raises(ArgumentError):
        resolve("exec", [], {})


def test_git_add_defaults_to_current_directory():
    assert resolve("git.add", [], {}) == ("git", ["add", "."])
    assert resolve("git.add", ["a.py", "b.py"], {}) == ("git", ["add", "a.py", "b.py"])


def test_git_commit_uses_default_message_when_empty():
    assert resolve("git.commit", [], {"message": ""}) == (
        "git",
        ["commit", "-m", DEFAULT_COMMIT_MESSAGE],
    )
    assert resolve("git.commit", [], {"message": "fix: x"}) == ("git", ["commit", "-m", "fix: x"])


def test_git_push_force_with_lease():
    assert resolve("git.push", [], {"force_with_lease": True}) == ("git", ["push", "--force-with-lease"])
    assert resolve("git.push", [], {}) == ("git", ["push"])


def test_buf_generate_module_path():
    assert resolve("buf.generate", [], {"module": "auth"}) == (
        "buf",
        ["generate", "--path", "pkg/auth/proto"],
    )
    assert resolve("buf.generate", [], {"module": ""}) == ("buf", ["generate"])


def test_file_cat_requires_exactly_one_file():
    assert resolve("file.cat", ["README.md"], {}) == ("cat", ["README.md"])
    with pytest.raises(ArgumentError):
        resolve("file.cat", [], {})


def test_python_run_passes_script_and_args():
    assert resolve("python.run", ["main.py", "--flag"], {}) == ("python3", ["main.py", "--flag"])


def test_unknown_key_raises_key_error():
    with pytest.raises(KeyError):
        resolve("svn.checkout", [], {})


def test_every_entry_names_an_executable():
    for key, spec in COMMANDS.items():
        assert spec.executable, key
        assert "." in key
