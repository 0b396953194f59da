"""Run the API with uvicorn: python -m hiring_portal"""

import uvicorn

from hiring_portal.config import settings


def main():
    # Single process: the hub and the in-memory store are process-local
    uvicorn.run(
        "hiring_portal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        workers=1,
        log_config=None,
    )


if __name__ == "__main__":
    main()
