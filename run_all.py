#!/usr/bin/env python3
"""Start the dog license API (Uvicorn) and the Streamlit UI."""

import argparse
import os
import signal
import subprocess
import sys
import time
import webbrowser
from pathlib import Path
from urllib.error import URLError
from urllib.request import Request, urlopen

PROJECT_ROOT = Path(__file__).resolve().parent

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
UI_PORT = int(os.getenv("UI_PORT", "8501"))
API_BASE = f"http://{API_HOST}:{API_PORT}"

UVICORN_CMD = [
    sys.executable,
    "-m",
    "uvicorn",
    "doglicense.api.main:app",
    "--host",
    API_HOST,
    "--port",
    str(API_PORT),
]
STREAMLIT_CMD = [
    sys.executable,
    "-m",
    "streamlit",
    "run",
    "doglicense/frontend/Home.py",
    "--server.port",
    str(UI_PORT),
    "--server.headless",
    "true",
]


def _print_box(message: str) -> None:
    border = "═" * (len(message) + 2)
    print(f"\n╔{border}╗")
    print(f"║ {message} ║")
    print(f"╚{border}╝\n")


def wait_for_http(url: str, timeout: float = 30.0) -> bool:
    start = time.time()
    while time.time() - start < timeout:
        try:
            req = Request(url, headers={"User-Agent": "doglicense-runner/1.0"})
            with urlopen(req, timeout=5):
                return True
        except (URLError, ConnectionError, TimeoutError):
            time.sleep(0.5)
    return False


def start_process(cmd: list[str]) -> subprocess.Popen:
    creationflags = 0
    if os.name == "nt":
        creationflags = subprocess.CREATE_NEW_PROCESS_GROUP
    return subprocess.Popen(cmd, cwd=str(PROJECT_ROOT), creationflags=creationflags)


def stop_process(proc: subprocess.Popen | None, name: str) -> None:
    if proc is None or proc.poll() is not None:
        return
    if os.name == "nt":
        proc.send_signal(signal.CTRL_BREAK_EVENT)
    else:
        proc.terminate()
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()
    print(f"⏹  {name} stopped.")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the API (Uvicorn) and the UI (Streamlit)")
    parser.add_argument("--lite", action="store_true", help="Run only the FastAPI app")
    parser.add_argument("--no-browser", action="store_true", help="Do not open a browser window")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    mode = "API (lite mode)" if args.lite else "API + UI"
    _print_box(f"Starting Dog License: {mode}")

    print("▶️  Starting FastAPI (uvicorn)...")
    api_proc = start_process(UVICORN_CMD)
    if wait_for_http(f"{API_BASE}/health/", timeout=60.0):
        print(f"✅ API available at {API_BASE}")
    else:
        print("❌ API did not answer the health check in time.")

    ui_proc: subprocess.Popen | None = None
    if not args.lite:
        print("▶️  Starting UI (Streamlit)...")
        ui_proc = start_process(STREAMLIT_CMD)
        ui_url = f"http://127.0.0.1:{UI_PORT}"
        if wait_for_http(ui_url, timeout=60.0):
            print(f"✅ UI available at {ui_url}")
            if not args.no_browser:
                webbrowser.open(ui_url, new=2)
        else:
            print("❌ UI did not answer in time. Check the Streamlit logs.")

    _print_box("Running. Press Ctrl+C to stop.")
    try:
        while True:
            if api_proc.poll() is not None:
                print(f"⚠️ API exited with code {api_proc.returncode}. Stopping...")
                break
            if ui_proc is not None and ui_proc.poll() is not None:
                print(f"⚠️ UI exited with code {ui_proc.returncode}. Stopping API...")
                break
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\n🧹 Shutting down...")

    stop_process(ui_proc, "UI")
    stop_process(api_proc, "API")
    print("✅ Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
