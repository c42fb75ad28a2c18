#!/usr/bin/env python3
"""Run the spelling safari API server."""

import os

import uvicorn

from core.config import DEFAULT_PORT


def main():
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', DEFAULT_PORT))
    print("Starting Spelling Safari API server...")
    print(f"API documentation available at: http://localhost:{port}/docs")
    uvicorn.run(
        "server.app:app",
        host=host,
        port=port,
        reload=True
    )


if __name__ == "__main__":
    main()
