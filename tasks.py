# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv, including test and dev extras."""
    ctx.run("uv sync --extra test --extra dev")


@task
def lint(ctx):
    """
    Run ruff and mypy over the juba package.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=src --cov-report=term-missing", pty=True)


@task
def demo(ctx, duration=15):
    """Scan scripted devices without touching the radio."""
    ctx.run(f"juba scan --mock --duration {duration}", pty=True)


@task
def build_package(ctx):
    """
    Build package using uv.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
