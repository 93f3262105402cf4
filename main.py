"""
Lead Quality Engine - Main Entry Point
======================================
Run this file to start the FastAPI server.

Usage:
    python main.py                    # Start server on port 8000
    python main.py --port 8080        # Start server on custom port
    python main.py --reload           # Start with auto-reload (dev mode)
    python main.py --profile enhanced # Default weighting profile

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import logging
import os
import uvicorn
from dotenv import load_dotenv

from lead_engine import __version__

# Load environment variables
load_dotenv()


def banner(host, port, width=62):
    """Startup box, widened to fit long host names"""
    title = ["LEAD QUALITY ENGINE", f"Version {__version__}"]
    body = [
        f"Server starting on http://{host}:{port}",
        f"API Docs: http://{host}:{port}/docs",
        f"Health:   http://{host}:{port}/api/health",
    ]
    width = max(width, *(len(line) + 4 for line in body))

    rows = [f"╔{'═' * width}╗"]
    rows += [f"║{line:^{width}}║" for line in title]
    rows.append(f"╠{'═' * width}╣")
    rows += [f"║  {line:<{width - 2}}║" for line in body]
    rows.append(f"╚{'═' * width}╝")
    return "\n".join(rows)


def main():
    parser = argparse.ArgumentParser(description="Lead Quality Engine API Server")
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: API_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on (default: API_PORT or 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)",
    )
    parser.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Default weighting profile (overrides LEAD_SCORING_PROFILE)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    args = parser.parse_args()

    # Settings read the environment on import
    if args.profile:
        os.environ["LEAD_SCORING_PROFILE"] = args.profile

    from lead_engine.config.settings import API_CONFIG, LOG_LEVEL

    host = args.host or API_CONFIG["host"]
    port = args.port or API_CONFIG["port"]
    log_level = (args.log_level or LOG_LEVEL).upper()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(banner(host, port))

    uvicorn.run(
        "lead_engine.api.endpoints:app",
        host=host,
        port=port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
