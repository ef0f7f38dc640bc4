from pathlib import Path
import logging
import os
from typing import Any

import typer

from copilot_agent_util.application.config_loading import build_config
from copilot_agent_util.application.dispatch import dispatch
from copilot_agent_util.domain.commands import COMMANDS
from copilot_agent_util.domain.diagnostics import Diagnostic
from copilot_agent_util.domain.run_config import RunnerConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"
PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Centralized utility for Copilot/AI agent command execution.",
)
git_app = typer.Typer(help="Git operations", no_args_is_help=True)
buf_app = typer.Typer(help="Protocol buffer operations", no_args_is_help=True)
file_app = typer.Typer(help="File operations", no_args_is_help=True)
python_app = typer.Typer(help="Python development tools", no_args_is_help=True)
npm_app = typer.Typer(help="npm/node operations", no_args_is_help=True)
lint_app = typer.Typer(help="Linters", no_args_is_help=True)

app.add_typer(git_app, name="git")
app.add_typer(buf_app, name="buf")
app.add_typer(file_app, name="file")
app.add_typer(python_app, name="python")
app.add_typer(npm_app, name="npm")
app.add_typer(lint_app, name="lint")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def _help(key: str) -> str:
    return COMMANDS[key].help


def _report(diagnostics: list[Diagnostic]) -> None:
    for d in diagnostics:
        typer.echo(f"Error: {d.message}", err=True)
        if d.hint:
            typer.echo(f"Hint: {d.hint}", err=True)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool | None = typer.Option(None, "--verbose", "-v", help="Enable debug logging"),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for log files"),
):
    result = build_config(
        Path.cwd(),
        cli_log_dir=log_dir,
        cli_verbose=verbose,
        environ=os.environ,
    )
    if result.value is None:
        _report(result.diagnostics)
        raise typer.Exit(result.exit_code)
    _configure_logging(result.value.verbose)
    ctx.obj = result.value


def _run(ctx: typer.Context, key: str, args: list[str] | None = None, **options: Any) -> None:
    config: RunnerConfig = ctx.obj
    result = dispatch(config, key, list(args or []), options)
    if result.value is None:
        # Lookup or argument errors; run_command reports its own failures.
        _report(result.diagnostics)
    raise typer.Exit(result.exit_code)


@app.command("exec", context_settings=PASSTHROUGH)
def exec_(ctx: typer.Context, command: list[str] = typer.Argument(..., help="Command and arguments")):
    """Execute an arbitrary command."""
    _run(ctx, "exec", command)


@git_app.command("add", help=_help("git.add"))
def git_add(ctx: typer.Context, files: list[str] | None = typer.Argument(None)):
    _run(ctx, "git.add", files)


@git_app.command("commit", help=_help("git.commit"))
def git_commit(ctx: typer.Context, message: str = typer.Option("", "--message", "-m")):
    _run(ctx, "git.commit", message=message)


@git_app.command("push", help=_help("git.push"), context_settings=PASSTHROUGH)
def git_push(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(None),
    force_with_lease: bool = typer.Option(False, "--force-with-lease"),
):
    _run(ctx, "git.push", args, force_with_lease=force_with_lease)


@git_app.command("status", help=_help("git.status"), context_settings=PASSTHROUGH)
def git_status(ctx: typer.Context, args: list[str] | None = typer.Argument(None)):
    _run(ctx, "git.status", args)


@git_app.command("pull", help=_help("git.pull"), context_settings=PASSTHROUGH)
def git_pull(ctx: typer.Context, args: list[str] | None = typer.Argument(None)):
    _run(ctx, "git.pull", args)


@git_app.command("diff", help=_help("git.diff"), context_settings=PASSTHROUGH)
def git_diff(ctx: typer.Context, args: list[str] | None = typer.Argument(None)):
    _run(ctx, "git.diff", args)


@git_app.command("log", help=_help("git.log"))
def git_log(ctx: typer.Context, count: int = typer.Option(10, "--count", "-n", min=1)):
    _run(ctx, "git.log", count=count)


@buf_app.command("generate", help=_help("buf.generate"))
def buf_generate(ctx: typer.Context, module: str = typer.Option("", "--module")):
    _run(ctx, "buf.generate", module=module)


@buf_app.command("lint", help=_help("buf.lint"))
def buf_lint(ctx: typer.Context, module: str = typer.Option("", "--module")):
    _run(ctx, "buf.lint", module=module)


@buf_app.command("format", help=_help("buf.format"))
def buf_format(ctx: typer.Context, module: str = typer.Option("", "--module")):
    _run(ctx, "buf.format", module=module)


@file_app.command("ls", help=_help("file.ls"))
def file_ls(ctx: typer.Context, path: str = typer.Argument(".")):
    _run(ctx, "file.ls", [path])


@file_app.command("cat", help=_help("file.cat"))
def file_cat(ctx: typer.Context, file: str = typer.Argument(...)):
    _run(ctx, "file.cat", [file])


@python_app.command("run", help=_help("python.run"), context_settings=PASSTHROUGH)
def python_run(
    ctx: typer.Context,
    script: str = typer.Argument(...),
    args: list[str] | None = typer.Argument(None),
):
    _run(ctx, "python.run", [script, *(args or [])])


@python_app.command("test", help=_help("python.test"), context_settings=PASSTHROUGH)
def python_test(ctx: typer.Context, args: list[str] | None = typer.Argument(None)):
    _run(ctx, "python.test", args)


@npm_app.command("install", help=_help("npm.install"))
def npm_install(ctx: typer.Context):
    _run(ctx, "npm.install")


@npm_app.command("run", help=_help("npm.run"), context_settings=PASSTHROUGH)
def npm_run(
    ctx: typer.Context,
    script: str = typer.Argument(...),
    args: list[str] | None = typer.Argument(None),
):
    _run(ctx, "npm.run", [script, *(args or [])])


@npm_app.command("test", help=_help("npm.test"))
def npm_test(ctx: typer.Context):
    _run(ctx, "npm.test")


@lint_app.command("python", help=_help("lint.python"))
def lint_python(ctx: typer.Context, paths: list[str] | None = typer.Argument(None)):
    _run(ctx, "lint.python", paths)


@lint_app.command("markdown", help=_help("lint.markdown"))
def lint_markdown(ctx: typer.Context, paths: list[str] | None = typer.Argument(None)):
    _run(ctx, "lint.markdown", paths)


@lint_app.command("yaml", help=_help("lint.yaml"))
def lint_yaml(ctx: typer.Context, paths: list[str] | None = typer.Argument(None)):
    _run(ctx, "lint.yaml", paths)


@lint_app.command("shell", help=_help("lint.shell"))
def lint_shell(ctx: typer.Context, scripts: list[str] = typer.Argument(...)):
    _run(ctx, "lint.shell", scripts)
