from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_COMMIT_MESSAGE = "feat: automated commit via copilot-agent-util"
DEFAULT_LOG_COUNT = 10

ArgBuilder = Callable[[list[str], Mapping[str, Any]], list[str]]


class ArgumentError(ValueError):
    pass


@dataclass(frozen=True)
class CommandSpec:
    executable: str
    build_args: ArgBuilder
    help: str = ""


def _paths_or_cwd(args: list[str]) -> list[str]:
    return list(args) if args else ["."]


def _buf_path(options: Mapping[str, Any]) -> list[str]:
    module = options.get("module")
    if module:
        return ["--path", f"pkg/{module}/proto"]
    return []


def _exactly_one(args: list[str], what: str) -> str:
    if len(args) != 1:
        raise ArgumentError(f"expected exactly one {what}, got {len(args)}")
    return args[0]


def _at_least_one(args: list[str], what: str) -> list[str]:
    if not args:
        raise ArgumentError(f"expected at least one {what}")
    return list(args)


def _git_commit(args: list[str], options: Mapping[str, Any]) -> list[str]:
    message = options.get("message") or DEFAULT_COMMIT_MESSAGE
    return ["commit", "-m", str(message)]


def _git_push(args: list[str], options: Mapping[str, Any]) -> list[str]:
    if options.get("force_with_lease"):
        return ["push", "--force-with-lease", *args]
    return ["push", *args]


def _git_log(args: list[str], options: Mapping[str, Any]) -> list[str]:
    count = options.get("count") or DEFAULT_LOG_COUNT
    return ["log", "--oneline", "-n", str(count), *args]


def _python_run(args: list[str], options: Mapping[str, Any]) -> list[str]:
    return _at_least_one(args, "script")


def _npm_run(args: list[str], options: Mapping[str, Any]) -> list[str]:
    return ["run", *_at_least_one(args, "npm script")]


def _passthrough(*prefix: str) -> ArgBuilder:
    def build(args: list[str], options: Mapping[str, Any]) -> list[str]:
        return [*prefix, *args]

    return build


def _with_default_paths(*prefix: str) -> ArgBuilder:
    def build(args: list[str], options: Mapping[str, Any]) -> list[str]:
        return [*prefix, *_paths_or_cwd(args)]

    return build


def _buf(subcommand: str, *extra: str) -> ArgBuilder:
    def build(args: list[str], options: Mapping[str, Any]) -> list[str]:
        return [subcommand, *extra, *_buf_path(options)]

    return build


COMMANDS: dict[str, CommandSpec] = {
    "git.add": CommandSpec("git", _with_default_paths("add"), "Add files to staging area"),
    "git.commit": CommandSpec("git", _git_commit, "Commit changes"),
    "git.push": CommandSpec("git", _git_push, "Push to remote repository"),
    "git.status": CommandSpec("git", _passthrough("status"), "Show working tree status"),
    "git.pull": CommandSpec("git", _passthrough("pull"), "Pull from remote repository"),
    "git.diff": CommandSpec("git", _passthrough("diff"), "Show changes"),
    "git.log": CommandSpec("git", _git_log, "Show recent commits"),
    "buf.generate": CommandSpec("buf", _buf("generate"), "Generate protocol buffers"),
    "buf.lint": CommandSpec("buf", _buf("lint"), "Lint protocol buffers"),
    "buf.format": CommandSpec("buf", _buf("format", "-w"), "Format protocol buffers in place"),
    "file.ls": CommandSpec(
        "ls",
        lambda args, options: ["-la", args[0] if args else "."],
        "List directory contents",
    ),
    "file.cat": CommandSpec(
        "cat",
        lambda args, options: [_exactly_one(args, "file")],
        "Display file contents",
    ),
    "python.run": CommandSpec("python3", _python_run, "Run Python script"),
    "python.test": CommandSpec("python3", _passthrough("-m", "pytest"), "Run pytest"),
    "npm.install": CommandSpec("npm", lambda args, options: ["install"], "Install npm dependencies"),
    "npm.run": CommandSpec("npm", _npm_run, "Run an npm script"),
    "npm.test": CommandSpec("npm", lambda args, options: ["test"], "Run npm tests"),
    "lint.python": CommandSpec("ruff", _with_default_paths("check"), "Lint Python sources with ruff"),
    "lint.markdown": CommandSpec("markdownlint", _with_default_paths(), "Lint Markdown files"),
    "lint.yaml": CommandSpec("yamllint", _with_default_paths(), "Lint YAML files"),
    "lint.shell": CommandSpec(
        "shellcheck",
        lambda args, options: _at_least_one(args, "shell script"),
        "Lint shell scripts",
    ),
}


def resolve(key: str, args: list[str], options: Mapping[str, Any]) -> tuple[str, list[str]]:
    """Return the executable and argument list for a subcommand key.

    ``exec`` is special: the first argument is the program to run.
    Raises ``KeyError`` for unknown keys and ``ArgumentError`` for bad args.
    """
    if key == "exec":
        program, *rest = _at_least_one(args, "command")
        return program, rest
    spec = COMMANDS[key]
    return spec.executable, spec.build_args(list(args), options)
