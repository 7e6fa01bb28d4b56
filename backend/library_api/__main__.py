"""Run the API with uvicorn: python -m library_api"""

import uvicorn

from library_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("library_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
