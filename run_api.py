#!/usr/bin/env python
"""
Run the TrueNamePath API server.

Host, port, reload and log level default to the HOST, PORT, RELOAD and
LOG_LEVEL settings (environment or .env); the flags below override them.
SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set for anything
beyond /health, and SUPABASE_JWT_SECRET for authenticated routes.

Usage:
    python run_api.py
    python run_api.py --reload --log-level debug  # Development mode
"""

import argparse
import logging
import uvicorn

from shared.config import get_settings
from shared.database import is_database_configured

logger = logging.getLogger("run_api")

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def main():
    parser = argparse.ArgumentParser(description="Run the TrueNamePath name resolution API")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to (default: HOST)")
    parser.add_argument("--port", type=int, help="Port to bind to (default: PORT)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level (default: LOG_LEVEL)")
    args = parser.parse_args()

    settings = get_settings()
    log_level = args.log_level or settings.log_level.lower()
    logging.basicConfig(level=log_level.upper())

    if not is_database_configured():
        logger.warning("Supabase is not configured; /ready will report 503 and data routes will fail")
    if not settings.supabase_jwt_secret:
        logger.warning("SUPABASE_JWT_SECRET is empty; authenticated routes will reject every token")

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
