"""
PixelPhraser - Web Server Entry Point
=====================================

Run this to start the event receiver:
    python main.py

Pub/Sub push subscriptions should target http://<host>:<port>/event
"""

import os
import sys
from pathlib import Path

import uvicorn

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    """Start the web server."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    print("\n" + "=" * 50)
    print("   PixelPhraser - Event Receiver")
    print("=" * 50)
    print(f"\n   Listening on http://{host}:{port}/event")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "src.web.app:app",
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    main()
