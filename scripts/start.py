#!/usr/bin/env python
"""Deployment entry point.

Routes to the correct process based on SERVICE_TYPE environment variable:
  - "warp"    -> Django migrate + one warp_calendar run (for a cron job)
  - (default) -> Django migrate + Gunicorn web server (OAuth callback, admin)
"""
import os
import subprocess
import sys


def _migrate():
    subprocess.run(
        [sys.executable, "manage.py", "migrate", "--noinput"],
        check=True,
    )


def main():
    service_type = os.environ.get("SERVICE_TYPE", "")

    if service_type == "warp":
        print("Starting calendar warp...", flush=True)
        _migrate()
        result = subprocess.run([sys.executable, "manage.py", "warp_calendar"])
        sys.exit(result.returncode)

    else:
        print("Starting web server...", flush=True)
        _migrate()
        port_str = os.environ.get("PORT", "8000")
        os.execvp(
            "gunicorn",
            [
                "gunicorn",
                "warp_site.wsgi:application",
                "--bind", f"0.0.0.0:{port_str}",
                "--workers", "2",
                "--log-file", "-",
            ],
        )


if __name__ == "__main__":
    main()
