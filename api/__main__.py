from __future__ import annotations

import uvicorn

from core.config import get_api_settings


def main() -> None:
    settings = get_api_settings()
    uvicorn.run("api.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
