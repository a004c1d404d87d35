#!/usr/bin/env python3
"""Health check script for the stock tracker container."""

import os
import sys
import time

import redis
from dotenv import load_dotenv

load_dotenv()


def check_redis_connection() -> bool:
    """Check if Redis connection is working."""
    try:
        r = redis.Redis(
            host=os.getenv('REDIS_HOST', 'localhost'),
            port=int(os.getenv('REDIS_PORT', 6379)),
            db=int(os.getenv('REDIS_DB', 0)),
            ssl=os.getenv('REDIS_SSL', 'false').lower() in ('true', '1', 'yes'),
            password=os.getenv('REDIS_PASSWORD'),
            socket_connect_timeout=5,
            socket_timeout=5
        )
        r.ping()
        return True
    except redis.RedisError as e:
        print(f"Redis health check failed: {e}", file=sys.stderr)
        return False


def check_last_fetch_time() -> bool:
    """Check if prices were fetched within HEALTHCHECK_INTERVAL seconds."""
    timestamp_file = os.getenv('LAST_FETCH_FILE', '.last_fetch_timestamp')

    # The tracker writes the file after its first successful poll
    if not os.path.exists(timestamp_file):
        print("No previous fetch timestamp found (first run), considering healthy", file=sys.stderr)
        return True

    try:
        with open(timestamp_file, 'r') as f:
            last_fetch_time = float(f.read().strip())
    except (OSError, ValueError) as e:
        print(f"Error checking last fetch time: {e}", file=sys.stderr)
        return False

    time_diff = time.time() - last_fetch_time
    max_age = int(os.getenv("HEALTHCHECK_INTERVAL", "900"))

    if time_diff > max_age:
        print(f"❌ Last price fetch was {time_diff:.0f} seconds ago (> {max_age} seconds)", file=sys.stderr)
        return False

    print(f"✅ Last price fetch was {time_diff:.0f} seconds ago", file=sys.stderr)
    return True


def main() -> None:
    """Run health checks."""
    checks = [("last_fetch_time", check_last_fetch_time())]

    if os.getenv('SYMBOL_STORE', 'file').lower() == 'redis':
        checks.append(("redis", check_redis_connection()))

    if all(result for _, result in checks):
        print("✅ Health check passed")
        sys.exit(0)

    failed_checks = [name for name, result in checks if not result]
    print(f"❌ Health check failed: {', '.join(failed_checks)}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
