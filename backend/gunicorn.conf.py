import os

# App
wsgi_app = "streamhub:create_app()"

# Bind & workers (stateless; session state and relationships live in the DB)
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "1"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Honour proxy headers (ProxyFix handles them in the app)
forwarded_allow_ips = "*"
proxy_protocol = False
