import asyncio
from typing import List, Optional, Tuple

import psutil
from playwright.async_api import Browser, Error as PlaywrightError, Playwright
from playwright.async_api import async_playwright

from .errors import TeardownFailure
from .scraper_logging import status_log


# 32 MiB, enough for LinkedIn's scripts without letting the cache grow
DISK_CACHE_SIZE = 33554432
KILL_WAIT_SECONDS = 3.0

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--proxy-server=direct://",
    "--proxy-bypass-list=*",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--disable-features=site-per-process,AudioServiceOutOfProcess",
    "--enable-features=NetworkService",
    "--allow-running-insecure-content",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
    "--disable-web-security",
    "--autoplay-policy=user-gesture-required",
    "--disable-background-networking",
    "--disable-breakpad",
    "--disable-client-side-phishing-detection",
    "--disable-component-update",
    "--disable-default-apps",
    "--disable-domain-reliability",
    "--disable-extensions",
    "--disable-hang-monitor",
    "--disable-ipc-flooding-protection",
    "--disable-notifications",
    "--disable-offer-store-unmasked-wallet-cards",
    "--disable-popup-blocking",
    "--disable-print-preview",
    "--disable-prompt-on-repost",
    "--disable-speech-api",
    "--disable-sync",
    f"--disk-cache-size={DISK_CACHE_SIZE}",
    "--hide-scrollbars",
    "--ignore-gpu-blocklist",
    "--metrics-recording-only",
    "--mute-audio",
    "--no-default-browser-check",
    "--no-first-run",
    "--no-pings",
    "--no-zygote",
    "--password-store=basic",
    "--use-gl=swiftshader",
    "--use-mock-keychain",
]


def launch_args(headless: bool = True) -> List[str]:
    """Chromium flags for a stable, lightweight scraping browser."""
    if headless:
        return list(LAUNCH_ARGS)
    return ["--start-maximized"] + LAUNCH_ARGS


async def launch_browser(headless: bool = True, timeout_ms: float = 10000) -> Tuple[Playwright, Browser]:
    """Start Playwright and launch one Chromium process.

    The Playwright driver is returned alongside the browser since both
    have to be stopped on teardown. If the launch fails the driver is
    stopped before the error propagates.
    """
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(
            headless=headless,
            args=launch_args(headless),
            timeout=timeout_ms,
        )
    except BaseException:
        await playwright.stop()
        raise
    return playwright, browser


async def get_browser_pid(browser: Browser) -> Optional[int]:
    """Ask Chromium for the OS pid of its browser process over CDP.

    Returns None when the browser cannot tell us; teardown then relies on
    the graceful close alone.
    """
    try:
        session = await browser.new_browser_cdp_session()
        try:
            info = await session.send("SystemInfo.getProcessInfo")
        finally:
            await session.detach()
    except PlaywrightError as e:
        status_log("setup", f"Could not read the browser pid: {e}")
        return None
    for proc in info.get("processInfo", []):
        if proc.get("type") == "browser":
            return int(proc["id"])
    return None


def process_tree(pid: int) -> List[psutil.Process]:
    """Snapshot a process and all of its descendants, root last.

    Take it while the root is still alive: once it exits its children are
    reparented and can no longer be found from the pid.
    """
    try:
        root = psutil.Process(pid)
        return root.children(recursive=True) + [root]
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return []


def _is_gone(proc: psutil.Process) -> bool:
    try:
        return proc.status() == psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return True


def _kill_tree(pid: int, procs: Optional[List[psutil.Process]] = None) -> bool:
    if procs is None:
        procs = process_tree(pid)
    if not procs:
        return False
    for proc in procs:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            continue
    _, alive = psutil.wait_procs(procs, timeout=KILL_WAIT_SECONDS)
    # Orphans nobody reaps stay zombies; they are dead all the same
    alive = [proc for proc in alive if not _is_gone(proc)]
    if alive:
        raise TeardownFailure(
            f"Failed to kill browser process pid: {pid} "
            f"({len(alive)} process(es) still alive)"
        )
    return True


async def kill_process_tree(pid: int, procs: Optional[List[psutil.Process]] = None) -> bool:
    """SIGKILL a process and all of its descendants.

    A graceful `browser.close()` can leave renderer or zygote processes
    behind, so pass the `process_tree()` snapshot taken before closing.
    Without one the tree is looked up now. Returns False when nothing was
    left to kill, True when it was killed; raises `TeardownFailure` when a
    process survives or access is denied.
    """
    try:
        return await asyncio.to_thread(_kill_tree, pid, procs)
    except psutil.AccessDenied as exc:
        raise TeardownFailure(f"Failed to kill browser process pid: {pid} (access denied)") from exc
