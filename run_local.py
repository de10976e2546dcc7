#!/usr/bin/env python3
"""
Local development server runner.

Runs the FastAPI application using uvicorn for fast local development.
Point DYNAMODB_ENDPOINT_URL at DynamoDB Local and set STAGE=local plus
DEV_USER_ID/DEV_USER_EMAIL to call authenticated routes without a JWT.

Usage:
    python run_local.py
    python run_local.py --port 8000
    python run_local.py --reload  # Auto-reload on code changes
"""

import argparse
import shutil
import sys
from pathlib import Path

project_root = Path(__file__).parent

try:
    import uvicorn
except ImportError:
    print("ERROR: uvicorn is not installed.")
    print("Please install dependencies: pip install -e '.[dev]'")
    sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        description="Run the Kefir Tracker API locally with uvicorn"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on (default: 8000)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level for uvicorn (default: info)"
    )

    args = parser.parse_args()

    env_file = project_root / ".env"
    if not env_file.exists():
        print("WARNING: .env file not found!")
        env_example = project_root / ".env.example"
        if env_example.exists():
            shutil.copy(env_example, env_file)
            print("Created .env from .env.example. Please edit it with your configuration.")
        else:
            print("ERROR: .env.example not found. Please create a .env file manually.")
            print("Required environment variables:")
            print("  - TABLE_NAME")
            print("  - PHOTOS_BUCKET_NAME")
            sys.exit(1)

    print("=" * 60)
    print("Starting Kefir Tracker API (Local Development)")
    print("=" * 60)
    print(f"Server: http://{args.host}:{args.port}")
    print(f"API Docs: http://{args.host}:{args.port}/docs")
    print(f"Health: http://{args.host}:{args.port}/health")
    print("=" * 60)
    if args.reload:
        print("Auto-reload: ENABLED (code changes will restart server)")
    print()

    # Stay in project root so .env loads correctly
    uvicorn.run(
        "kefir_tracker.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        reload_dirs=[str(project_root / "src")] if args.reload else None
    )


if __name__ == "__main__":
    main()
