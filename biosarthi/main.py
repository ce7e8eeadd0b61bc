"""BioSarthi server entry point.

Integrated mode (default) serves the relay API and the NiceGUI screens from
one uvicorn process on PORT. Separate mode starts the API on API_PORT and the
screens on UI_PORT as two processes.
"""

import logging
import os
import sys

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000
DEFAULT_UI_PORT = 8080


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated() -> None:
    """Serve the relay API and the chat screens from one server on PORT."""
    import uvicorn
    from nicegui import ui

    from biosarthi.api.app import create_app
    from biosarthi.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="BioSarthi",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "biosarthi-secret"),
    )

    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    logger.info(f"Chat screens on http://localhost:{port}/, relay on /api/chat")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def separate_commands(
    host: str, api_port: int, ui_port: int
) -> tuple[list[str], list[str], dict[str, str]]:
    """Build the API command, the UI command and the UI process environment.

    The UI process is pointed at the API port unless API_BASE_URL is set.
    """
    api_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "biosarthi.api.app:app",
        "--host",
        host,
        "--port",
        str(api_port),
    ]
    ui_cmd = [sys.executable, "-c", "from biosarthi.ui.chat_page import main; main()"]

    ui_env = dict(os.environ)
    ui_env.setdefault("API_BASE_URL", f"http://localhost:{api_port}")
    ui_env["UI_PORT"] = str(ui_port)
    return api_cmd, ui_cmd, ui_env


def run_separate() -> None:
    """Run the relay API and the chat screens as two processes."""
    import subprocess
    import time

    api_port = int(os.getenv("API_PORT", str(DEFAULT_PORT)))
    ui_port = int(os.getenv("UI_PORT", str(DEFAULT_UI_PORT)))
    api_cmd, ui_cmd, ui_env = separate_commands(
        os.getenv("HOST", "0.0.0.0"), api_port, ui_port
    )

    logger.info(f"Relay API on http://localhost:{api_port}, screens on http://localhost:{ui_port}")

    api_proc = subprocess.Popen(api_cmd)
    ui_proc = subprocess.Popen(ui_cmd, env=ui_env)

    try:
        while api_proc.poll() is None and ui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Stopping relay and UI processes")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
            proc.wait()


def main() -> None:
    """Load .env, configure logging and start in RUN_MODE (integrated or separate)."""
    load_dotenv()
    configure_logging()

    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting BioSarthi in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
