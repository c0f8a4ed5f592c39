import os

# gunicorn -c gunicorn_conf.py eshealth.main:app
bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# ASGI app; the probe is async
worker_class = "uvicorn.workers.UvicornWorker"

# Each worker owns its own client registry, so keep this small
workers = int(os.getenv("WEB_CONCURRENCY", "1"))

forwarded_allow_ips = "*"

# Must outlast HEALTH_CHECK_TIMEOUT / ES_REQUEST_TIMEOUT
timeout = int(os.getenv("TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("KEEPALIVE", "75"))

# Logging to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
