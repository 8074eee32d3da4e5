import uvicorn

from i18n_router.config import settings
from i18n_router.main import create_app
from i18n_router.middleware.logging import setup_structured_logging

setup_structured_logging(log_level=settings.log_level, json_format=settings.json_logs)

app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
