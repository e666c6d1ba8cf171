import os

# App
wsgi_app = "firehearts:create_app()"

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:3001")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
# Threads let one worker serve requests in parallel while others wait on I/O
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "8"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
