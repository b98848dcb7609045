# demo_wait_requests.py
# Version: v1

r"""
Quick demo for the request waiter.

Usage (bash):

  export VRA_SERVER_URL=https://vra.example.com
  export VRA_ACCESS_TOKEN=...
  export VRA_TEST_REQUESTS="1001,1002"
  export VRA_POLL_INTERVAL_SECONDS=10
  python demo_wait_requests.py
"""

import os

from vra_helpers_mcp.tools.tasks import wait_for_requests


REQUESTS = [
    int(n) for n in os.environ.get("VRA_TEST_REQUESTS", "").split(",") if n.strip()
]


def main() -> None:
    if not REQUESTS:
        print("Set VRA_TEST_REQUESTS to a comma separated list of request numbers.")
        return

    print(f"Waiting for requests: {REQUESTS}")
    result = wait_for_requests(REQUESTS)

    for r in result.get("results", []):
        print(f"- request {r['request_number']}: {r['completion_status']}")


if __name__ == "__main__":
    main()
