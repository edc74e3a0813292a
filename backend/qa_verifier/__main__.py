"""Run the QA verifier with uvicorn: ``python -m qa_verifier``."""

import sys

import uvicorn
from pydantic import ValidationError

from .config import Settings


def main() -> int:
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 1

    uvicorn.run(
        "qa_verifier.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
