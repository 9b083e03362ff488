"""Run the API under uvicorn on the configured port."""

import os

import uvicorn


def main() -> None:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.prod")

    from django.conf import settings

    uvicorn.run("config.asgi:application", host="0.0.0.0", port=settings.PORT)  # noqa: S104


if __name__ == "__main__":
    main()
