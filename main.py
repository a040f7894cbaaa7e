"""Main entry point for the buildtrace ingestion server."""

import os
import sys

import uvicorn
from dotenv import load_dotenv

from buildtrace.api import create_fastapi_app
from buildtrace.config import (
    PROJECT_ROOT,
    resolve_output_destination,
    select_output_settings,
)
from buildtrace.errors import ConfigError, SinkError
from buildtrace.logging_config import get_logger, setup_logging
from buildtrace.output import FileTraceSink
from buildtrace.session import TraceSession


def main():
    """Serve host notifications; the trace is written on /api/run/finish.

    Optional arguments select the output: trace=FILENAME or trace-dir=DIRECTORY.
    Without them the BUILDTRACE_TRACE_FILE / BUILDTRACE_TRACE_DIR environment
    variables apply.
    """
    load_dotenv(PROJECT_ROOT / ".env")
    setup_logging()
    logger = get_logger(__name__)

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    try:
        settings = select_output_settings(sys.argv[1:])
        destination = resolve_output_destination(
            trace_file=settings.trace_file,
            trace_dir=settings.trace_dir,
        )
        sink = FileTraceSink(destination)
    except (ConfigError, SinkError) as e:
        logger.error("Invalid trace output: %s", e)
        sys.exit(1)

    logger.info("Writing trace to %s", destination)
    session = TraceSession(sink)

    app = create_fastapi_app(session)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
