#!/usr/bin/env python3
"""
Range request probe for a running Media Stream System.

Checks that a media item answers full, partial, suffix and unsatisfiable
range requests the way browsers and media players expect.

Usage:
    python stream_probe.py MEDIA_ID [--base-url http://localhost:5000]
"""

import argparse
import sys

import requests


def probe(base_url: str, media_id: str) -> bool:
    """Run the range checks and return True when all pass"""
    url = f"{base_url}/media/{media_id}/stream"
    ok = True

    try:
        info = requests.get(f"{base_url}/media/{media_id}/info", timeout=10)
    except requests.exceptions.ConnectionError:
        print(f"❌ Could not connect to {base_url}")
        print("   Start the server first: python main.py")
        return False

    if info.status_code != 200:
        print(f"❌ /info returned {info.status_code}: {info.text}")
        return False

    size = info.json()["file_size_bytes"]
    print(f"📼 {media_id}: {size} bytes")

    def check(label, headers, expected_status, expected_range=None, expected_length=None):
        nonlocal ok
        response = requests.get(url, headers=headers, timeout=30)
        passed = response.status_code == expected_status
        if expected_range is not None:
            passed = passed and response.headers.get("Content-Range") == expected_range
        if expected_length is not None:
            passed = passed and len(response.content) == expected_length
        print(f"{'✅' if passed else '❌'} {label}: {response.status_code} {response.headers.get('Content-Range', '')}")
        ok = ok and passed

    check("full content", {}, 200, expected_length=size)
    if size > 0:
        end = min(size, 100) - 1
        check("first bytes", {"Range": f"bytes=0-{end}"}, 206, f"bytes 0-{end}/{size}", end + 1)
        suffix = min(size, 100)
        check("suffix", {"Range": f"bytes=-{suffix}"}, 206, f"bytes {size - suffix}-{size - 1}/{size}", suffix)
    check("beyond end", {"Range": f"bytes={size}-"}, 416, f"bytes */{size}")

    return ok


def main():
    parser = argparse.ArgumentParser(description="Probe range support of a media stream")
    parser.add_argument("media_id", type=str, help="Media identifier")
    parser.add_argument("--base-url", type=str, default="http://localhost:5000", help="API base URL")
    args = parser.parse_args()

    sys.exit(0 if probe(args.base_url.rstrip("/"), args.media_id) else 1)


if __name__ == "__main__":
    main()
