#!/usr/bin/env python3
"""Development server runner for the TeamsBot messaging extension.

Sets development defaults and starts the API with auto-reload. Point the bot
registration's messaging endpoint (through a tunnel) at ``/api/messages``.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent  # .../backend
repo_root = project_root.parent  # repo root
src_path = project_root / "src"  # .../backend/src
sys.path.insert(0, str(src_path))


def setup_dev_environment():
    """Set up development environment variables."""
    os.environ["TEAMSBOT_ENVIRONMENT"] = "development"
    os.environ["TEAMSBOT_DEBUG"] = "true"
    os.environ.setdefault("TEAMSBOT_LOG_LEVEL", "DEBUG")
    os.environ["TEAMSBOT_RELOAD"] = "true"

    print("Development environment configured:")
    print(f"  Data file: {os.environ.get('TEAMSBOT_DATA_FILE', './data/avengers.json')}")
    print(f"  Debug Mode: {os.environ.get('TEAMSBOT_DEBUG')}")
    print(f"  Log Level: {os.environ.get('TEAMSBOT_LOG_LEVEL')}")


def start_dev_server():
    """Start the development server."""
    try:
        from teamsbot.core.config import get_settings_instance

        settings = get_settings_instance()

        cmd = [
            sys.executable,
            "-m",
            "uvicorn",
            "teamsbot.main:app",
            "--app-dir",
            str(src_path),
            "--reload",
            "--host",
            settings.api_host,
            "--port",
            str(settings.api_port),
            "--log-level",
            "debug",
        ]
        print(f"Running: {' '.join(cmd)}")
        print(f"Messaging endpoint: http://{settings.api_host}:{settings.api_port}{settings.api_prefix}/messages")
        print("Press Ctrl+C to stop the server")

        # Run from repo root so relative paths (e.g., ./data/avengers.json) resolve to <repo>/data
        subprocess.run(cmd, cwd=repo_root, check=False)

    except KeyboardInterrupt:
        print("\nShutting down development server...")
    except Exception as e:
        print(f"Error starting development server: {e}")
        sys.exit(1)


def main():
    """Main function."""
    setup_dev_environment()
    start_dev_server()


if __name__ == "__main__":
    main()
