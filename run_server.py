#!/usr/bin/env python3
"""
Startup script for the shopping pricing API.

Usage:
    # Run on the default host/port
    python run_server.py

    # Run with custom port
    python run_server.py --port 8001

    # Run with reload for development
    python run_server.py --reload
"""

import argparse


def main():
    parser = argparse.ArgumentParser(description="Run the shopping pricing API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    import uvicorn

    if args.log_level:
        import os
        os.environ["LOG_LEVEL"] = args.log_level

    print(f"Starting shopping pricing API on {args.host}:{args.port}")
    uvicorn.run(
        "shopping_pricing.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
