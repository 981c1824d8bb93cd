# examples/full_page.py

"""
Full page screenshot with wait options, using the blocking client.

Usage:
    PXSHOT_API_KEY=px_your_api_key python examples/full_page.py [url]
"""

import sys

from pxshot import BlockingPxshot, PxshotError, ScreenshotRequest, WaitUntil, setup_logging


def main(url: str) -> int:
    setup_logging()

    request = (
        ScreenshotRequest.builder()
        .url(url)
        .full_page(True)
        .wait_until(WaitUntil.NETWORK_IDLE)
        .wait_for_timeout(500)  # lazy-loaded content
        .device_scale_factor(2.0)
        .build()
    )

    with BlockingPxshot() as client:
        print("Capturing full page screenshot...")
        response = client.screenshot(request)

    path = response.save("full_page.png")
    print(f"Saved {path} ({len(response.image_bytes):,} bytes)")
    return 0


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "https://en.wikipedia.org/wiki/Python_(programming_language)"
    try:
        sys.exit(main(target))
    except PxshotError as e:
        print(f"Failed [{e.error_code}]: {e.message}", file=sys.stderr)
        sys.exit(1)
