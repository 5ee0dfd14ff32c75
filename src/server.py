"""Scheduled job runner for environments driven by cron.

Runs one registered reminder job to completion and exits. Hosts that ping
the HTTP ``/jobs/{name}`` endpoint instead do not need this script.

Usage:
    python src/server.py --job session-reminders
    python src/server.py --job workout-reminders
    python src/server.py --list
"""

import argparse
import asyncio
import sys

from app import build_services
from shared.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


async def run(job_name: str) -> bool:
    services = build_services()
    outcome = await services.platform.run_job(job_name)
    if not outcome.ok:
        logger.error("Scheduled job reported failure", job=job_name, error=outcome.error)
    return outcome.ok


def main():
    parser = argparse.ArgumentParser(description="Coaching reminder job runner")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--job", help="Name of the scheduled job to run once")
    group.add_argument("--list", action="store_true", help="List registered jobs and schedules")
    args = parser.parse_args()

    configure_logging()

    if args.list:
        for job in build_services().platform.jobs:
            print(f"{job.name}\t{job.schedule}")
        return

    ok = asyncio.run(run(args.job))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
