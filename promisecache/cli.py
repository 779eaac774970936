import asyncio
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from promisecache.config import ConfigManager, RepositorySettings
from promisecache.promise.handle import Promise
from promisecache.users.exceptions import UserNotFound
from promisecache.users.models import User, describe_user
from promisecache.users.naive import NaiveUserRepository
from promisecache.users.repository import UserRepository
from promisecache.users.service import fetch_current_user

app = typer.Typer(help="promisecache: single-flight promise cache for the current user lookup")
console = Console()


@app.callback()
def root() -> None:
    pass


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


class CountingFetch:
    """Fetch stand-in that counts invocations; optionally fails the first one with UserNotFound."""

    def __init__(self, fail_first: bool = False, pause: float = 0.0) -> None:
        self._fail_first = fail_first
        self._pause = pause
        self._lock = threading.Lock()
        self.calls = 0

    def __call__(self) -> User:
        with self._lock:
            self.calls += 1
            call = self.calls
        if self._pause:
            time.sleep(self._pause)
        if self._fail_first and call == 1:
            raise UserNotFound("no current user")
        return fetch_current_user()


class ConsoleView:
    """Console consumer of the repository: pending, then success or failure."""

    def __init__(self, label: str, repository: UserRepository, console: Console) -> None:
        self.label = label
        self._repository = repository
        self._console = console
        self.failed = False

    def render(self) -> Promise[User]:
        self._show_pending()
        return (
            self._repository.get_current_user()
            .always(self._clear)
            .then(self._show_success)
            .catch(self._show_error)
        )

    def _show_pending(self) -> None:
        self._console.print(f"[blue]{self.label}[/blue] loading...")

    def _clear(self) -> None:
        self._console.print(f"[blue]{self.label}[/blue] done loading")

    def _show_success(self, user: User) -> None:
        self.failed = False
        self._console.print(f"[bold green]{self.label}[/bold green] SUCCESS: {describe_user(user)}")

    def _show_error(self, error: BaseException) -> None:
        self.failed = True
        self._console.print(f"[bold red]{self.label}[/bold red] FAILED: {error!r} (retry available)")


async def _settle(promises: list[Promise[User]]) -> None:
    await asyncio.gather(*promises, return_exceptions=True)
    # let observers scheduled by the last settlement run
    await asyncio.sleep(0)


async def _run_demo(repository: UserRepository, callers: int) -> list[ConsoleView]:
    views = [ConsoleView(f"view-{i}", repository, console) for i in range(callers)]
    await _settle([view.render() for view in views])

    failed = [view for view in views if view.failed]
    if failed:
        console.print("[yellow]Retrying after failure[/yellow]")
        await _settle([view.render() for view in failed])

    # served from the cache, no new fetch
    await _settle([views[0].render()])
    return views


@app.command("demo")
def demo(
    fail: bool = typer.Option(False, "--fail/--no-fail", help="Fail the first fetch with UserNotFound"),
    delay: Optional[float] = typer.Option(None, "--delay", "-d", min=0, help="Seconds before a fetch settles"),
    callers: int = typer.Option(3, "--callers", "-n", min=1, help="Concurrent consumers"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to promisecache.yaml"),
):
    """
    Render the current user for several concurrent consumers sharing one repository.
    """
    settings = ConfigManager(config).load_settings()
    _configure_logging(settings.log_level)

    fetch = CountingFetch(fail_first=fail)
    overrides = {"delay": delay} if delay is not None else {}
    repository = UserRepository.from_settings(settings, fetch=fetch, **overrides)
    try:
        asyncio.run(_run_demo(repository, callers))
    finally:
        repository.close()

    table = Table(title=f"repository {repository.name}")
    table.add_column("consumers")
    table.add_column("fetches")
    table.add_row(str(callers), str(fetch.calls))
    console.print(table)


@app.command("naive")
def naive(
    callers: int = typer.Option(3, "--callers", "-n", min=1, help="Concurrent threads"),
    delay: float = typer.Option(RepositorySettings().fetch_delay, "--delay", "-d", min=0, help="Seconds a fetch blocks"),
):
    """
    Run the blocking repository from several threads at once; every concurrent miss fetches.
    """
    _configure_logging("INFO")

    fetch = CountingFetch(pause=delay)
    repository = NaiveUserRepository(fetch=fetch)
    with ThreadPoolExecutor(max_workers=callers) as pool:
        users = list(pool.map(lambda _: repository.get_current_user(), range(callers)))

    table = Table(title="naive repository")
    table.add_column("thread")
    table.add_column("user")
    for i, user in enumerate(users):
        table.add_row(str(i), describe_user(user))
    console.print(table)
    console.print(f"fetches: [bold]{fetch.calls}[/bold] for {callers} callers")


if __name__ == "__main__":
    app()
