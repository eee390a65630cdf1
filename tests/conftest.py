"""Shared test fixtures for the settingslock test suite."""

from __future__ import annotations

import functools
import os
import pathlib
import shutil
import stat
import tempfile
import threading
from http.server import HTTPServer, SimpleHTTPRequestHandler

import pytest

UI_DIR = pathlib.Path(__file__).resolve().parent.parent / "src" / "settingslock" / "ui"


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    d = tempfile.mkdtemp(prefix="settingslock_test_")
    yield pathlib.Path(d)
    # Read-only files would block rmtree on Windows.
    for root, _dirs, files in os.walk(d):
        for name in files:
            path = os.path.join(root, name)
            os.chmod(path, os.stat(path).st_mode | stat.S_IWRITE)
    shutil.rmtree(d, ignore_errors=True)


def make_read_only(path: pathlib.Path) -> None:
    os.chmod(path, stat.S_IMODE(os.stat(path).st_mode) & ~stat.S_IWRITE)


def is_read_only(path: pathlib.Path) -> bool:
    return not (os.stat(path).st_mode & stat.S_IWRITE)


# --------------------------------------------------------------------------- #
# Playwright UI fixtures
# --------------------------------------------------------------------------- #

MOCK_API_JS = """
window._state = {
    buffer: "", file_label: "Current File: Not Selected",
    status: "Status: Select a settings file to begin.",
    lock_enabled: false, lock_label: "Toggle Read-Only", current_path: null
};
window._saved = [];
window.pywebview = { api: {
    get_state: () => Promise.resolve(JSON.stringify(window._state)),
    get_default_directory: () => Promise.resolve(JSON.stringify({directory: "/tmp"})),
    select_file: (path) => {
        Object.assign(window._state, {
            buffer: '{\\n  "a": 1,\\n  "b": 2\\n}',
            file_label: "Current File: /tmp/ClientAppSettings.json",
            status: "Status: File loaded successfully.",
            lock_enabled: true,
            lock_label: "Toggle Read-Only (UNLOCKED)",
            current_path: "/tmp/ClientAppSettings.json"
        });
        return Promise.resolve(JSON.stringify(window._state));
    },
    save_file: (content) => {
        window._saved.push(content);
        window._state.buffer = content;
        window._state.status = "SUCCESS: Changes saved to file.";
        return Promise.resolve(JSON.stringify(window._state));
    },
    toggle_lock: () => {
        const locked = window._state.lock_label.endsWith("(LOCKED)");
        window._state.lock_label = locked ? "Toggle Read-Only (UNLOCKED)" : "Toggle Read-Only (LOCKED)";
        window._state.status = locked
            ? "Status: File is now Writable (UNLOCKED)."
            : "Status: File is now Read-Only (LOCKED).";
        return Promise.resolve(JSON.stringify(window._state));
    }
}};
"""

FIRE_EVENT_JS = "window.dispatchEvent(new Event('pywebviewready'));"

DEFAULT_MOCK_JS = MOCK_API_JS + FIRE_EVENT_JS


def build_mock_js(*, fire_event: bool = True, **overrides: str) -> str:
    """Build mock JS with selective method overrides applied BEFORE pywebviewready fires.

    Each override value should be a JS expression for the method body, e.g.:
        build_mock_js(select_file='() => Promise.resolve(...)')
    """
    if not overrides:
        return DEFAULT_MOCK_JS if fire_event else MOCK_API_JS
    parts = [MOCK_API_JS.rstrip()]
    for method, body in overrides.items():
        parts.append(f"window.pywebview.api.{method} = {body};")
    if fire_event:
        parts.append(FIRE_EVENT_JS)
    return "\n".join(parts)


def _playwright_browser_installed() -> bool:
    try:
        from playwright.sync_api import sync_playwright
    except Exception:
        return False
    try:
        with sync_playwright() as p:
            path = p.chromium.executable_path
            return bool(path and os.path.exists(path))
    except Exception:
        return False


def pytest_addoption(parser):
    parser.addoption(
        "--ui",
        action="store_true",
        default=False,
        help="Run Playwright UI tests (requires browsers installed).",
    )


def pytest_collection_modifyitems(config, items):
    run_ui = config.getoption("--ui") or os.environ.get("SETTINGSLOCK_UI") == "1"
    if run_ui:
        if _playwright_browser_installed():
            return
        reason = "Playwright browsers not installed. Run `python -m playwright install`."
    else:
        reason = "UI tests skipped. Pass --ui or set SETTINGSLOCK_UI=1."
    skip_ui = pytest.mark.skip(reason=reason)
    for item in items:
        if "ui" in item.keywords:
            item.add_marker(skip_ui)


@pytest.fixture(scope="session")
def ui_server():
    """Start a local HTTP server serving the UI directory."""
    handler = functools.partial(SimpleHTTPRequestHandler, directory=str(UI_DIR))
    server = HTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()


@pytest.fixture()
def ui_page(ui_server, page):
    """Navigate to the UI and inject the default mock pywebview bridge."""
    page.add_init_script(build_mock_js(fire_event=False))
    page.goto(ui_server + "/index.html", wait_until="domcontentloaded")
    page.evaluate(FIRE_EVENT_JS)
    page.wait_for_function(
        "document.getElementById('status-label').textContent.length > 0", timeout=5000
    )
    return page
