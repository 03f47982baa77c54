"""Process entry point: `python -m showroom`.

Invariants:
    - Invalid or missing settings (MONGODB_URI) exit with status 1 before serving
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from showroom.config import get_settings
from showroom.core.errors import ConfigurationError, format_validation_details
from showroom.infrastructure.observability import setup_logging

logger = logging.getLogger("showroom")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        fields = ", ".join(
            d["field"] for d in format_validation_details(e.errors())
        )
        error = ConfigurationError(f"Invalid configuration: {fields}")
        setup_logging()
        logger.critical(error.message, extra={"error_code": error.code})
        sys.exit(1)

    uvicorn.run(
        "showroom.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    main()
