# examples/basic.py

"""
Example script demonstrating screenshot capture.

This script shows how to:
1. Capture a screenshot as raw bytes and save it
2. Capture a screenshot stored by the API and print its URL
3. Check usage for the current billing period

Usage:
    PXSHOT_API_KEY=px_your_api_key python examples/basic.py
"""

import asyncio
import sys

from pxshot import ImageFormat, Pxshot, PxshotError, ScreenshotRequest, setup_logging


async def main() -> int:
    setup_logging()

    async with Pxshot() as client:
        print("Capturing screenshot...")
        response = await client.screenshot(
            ScreenshotRequest.builder()
            .url("https://example.com")
            .format(ImageFormat.PNG)
            .viewport(1280, 720)
            .build()
        )
        path = response.save("screenshot.png")
        print(f"Saved {path} ({len(response.image_bytes):,} bytes)")

        print("\nCapturing with storage...")
        response = await client.screenshot(
            ScreenshotRequest.builder()
            .url("https://example.com")
            .store(True)
            .build()
        )
        stored = response.stored
        print(f"Screenshot URL: {stored.url}")
        print(f"Dimensions: {stored.width}x{stored.height}")
        if stored.size_bytes is not None:
            print(f"Size: {stored.size_bytes:,} bytes")
        print(f"Expires at: {stored.expires_at.isoformat()}")

        print("\nChecking usage...")
        usage = await client.usage()
        print(f"Screenshots this period: {usage.screenshots}")
        print(f"Bytes used: {usage.bytes:,}")

    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except PxshotError as e:
        print(f"Failed [{e.error_code}]: {e.message}", file=sys.stderr)
        sys.exit(1)
