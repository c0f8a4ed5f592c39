import logging


def configure_logging(level: str) -> None:
    # Handlers come from gunicorn/uvicorn; only the package level is ours
    logging.getLogger("eshealth").setLevel(level.upper())
