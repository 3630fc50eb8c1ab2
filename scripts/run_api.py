#!/usr/bin/env python3
"""Run the FastAPI server for Talebook."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn


def main():
    """Run the API server.

    Logging is configured when talebook.api.main is imported, so the
    reload worker process gets the same handlers.
    """
    uvicorn.run(
        "talebook.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload for development
        log_config=None,  # Keep the handlers installed by configure_logging
    )


if __name__ == "__main__":
    main()
