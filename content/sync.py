"""Keep a local copy of the content repository fresh and republish its events."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path

from content.config import Settings
from content.errors import ContentError, GitCommandError, SyncError
from content.models import Snapshot
from content.scanner import scan_directory_async
from content.store import EventStore

log = logging.getLogger(__name__)


class GitCheckout:
    """A persistent working copy of a remote git repository."""

    def __init__(self, url: str, directory: Path, timeout: float = 120.0) -> None:
        self.url = url
        self.directory = Path(directory)
        self.timeout = timeout

    @property
    def exists(self) -> bool:
        return (self.directory / ".git").is_dir()

    async def _git(self, command: str, *args: str, cwd: Path | None = None) -> str:
        env = {
            **os.environ,
            "GIT_TERMINAL_PROMPT": "0",
            # Never fall back to a repository enclosing the working copy.
            "GIT_CEILING_DIRECTORIES": str(self.directory.parent.resolve()),
        }
        try:
            proc = await asyncio.create_subprocess_exec(
                "git",
                command,
                *args,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except OSError as exc:
            raise SyncError(f"Cannot run git: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self.timeout)
        except asyncio.TimeoutError as exc:
            await _reap(proc)
            raise SyncError(
                f"git {command} timed out after {self.timeout:g}s"
            ) from exc
        except BaseException:
            await _reap(proc)
            raise

        if proc.returncode != 0:
            raise GitCommandError(
                f"git {command} failed ({proc.returncode}): "
                f"{stderr.decode(errors='replace').strip()}"
            )
        return stdout.decode(errors="replace")

    async def is_valid(self) -> bool:
        """True when the working copy has a commit checked out."""
        if not self.exists:
            return False
        try:
            await self._git("rev-parse", "--verify", "--quiet", "HEAD", cwd=self.directory)
        except GitCommandError:
            return False
        return True

    async def update(self) -> None:
        """Clone on first use, fast-forward afterwards.

        A working copy left half-initialised (an interrupted clone) is
        removed and cloned again.
        """
        if await self.is_valid():
            log.debug("Pulling %s into %s", self.url, self.directory)
            await self._git("pull", "--ff-only", "--quiet", cwd=self.directory)
            return

        if self.exists:
            log.warning("Working copy %s is broken, cloning again", self.directory)
            await asyncio.to_thread(shutil.rmtree, self.directory)
        log.info("Cloning %s into %s", self.url, self.directory)
        self.directory.parent.mkdir(parents=True, exist_ok=True)
        await self._git("clone", "--quiet", self.url, str(self.directory))


async def _reap(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


class ContentSync:
    """Recurring task: update the checkout, rescan it, publish to the store.

    A failed cycle is logged and leaves the previous snapshot in place; the
    next tick retries unconditionally.
    """

    def __init__(
        self,
        store: EventStore,
        settings: Settings,
        checkout: GitCheckout | None = None,
    ) -> None:
        if checkout is None:
            if not settings.repo_url:
                raise SyncError("No content repository configured")
            checkout = GitCheckout(
                settings.repo_url, settings.checkout_dir, timeout=settings.git_timeout
            )
        self.store = store
        self.settings = settings
        self.checkout = checkout
        self._task: asyncio.Task[None] | None = None

    async def sync_once(self) -> Snapshot:
        await self.checkout.update()
        events_dir = self.settings.events_dir
        log.debug("Reading events from %s", events_dir)
        events = await scan_directory_async(events_dir)
        return self.store.publish(events)

    async def tick(self) -> bool:
        log.info("Updating articles")
        try:
            snapshot = await self.sync_once()
        except ContentError as exc:
            log.error(
                "Content sync failed, keeping snapshot %d: %s",
                self.store.generation,
                exc,
            )
            return False
        except Exception:
            log.exception(
                "Unexpected error during content sync, keeping snapshot %d",
                self.store.generation,
            )
            return False
        log.info("Content sync done: %d event(s)", len(snapshot.events))
        return True

    async def run(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self.settings.sync_interval)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="content-sync")
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


async def bootstrap(store: EventStore, settings: Settings) -> ContentSync | None:
    """Fill *store* at process start.

    With a repository configured this starts the recurring sync and returns
    it. Otherwise the local content folder, if any, is scanned once; scan
    errors reach the caller.
    """
    log.info("Bootstrapping event store")
    if settings.remote_enabled:
        log.info("Subscribing to %s", settings.repo_url)
        sync = ContentSync(store, settings)
        sync.start()
        return sync

    if settings.local_path.is_dir():
        log.info("No repository configured, reading %s", settings.local_path)
        store.publish(await scan_directory_async(settings.local_path))
    else:
        log.info("No repository configured and %s is missing", settings.local_path)
    return None
