"""
Gunicorn configuration for production deployment

The chat hub, its rooms and the in-memory store live inside one process,
so the server runs exactly one Uvicorn worker. Scale by running separate
deployments, not more workers.
"""
import os

# Server socket
bind = os.getenv("BIND", "0.0.0.0:5000")
backlog = 2048

# Worker processes
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000

# Timeouts
timeout = 30
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "hiring_portal_api"

# Server mechanics
daemon = False
pidfile = None
umask = 0
tmp_upload_dir = None

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Gunicorn server")

def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Gunicorn server is ready. Spawning worker")

def worker_int(worker):
    """Called when a worker receives the SIGINT or SIGQUIT signal."""
    worker.log.info("Worker received INT or QUIT signal")

def worker_abort(worker):
    """Called when a worker is aborted."""
    worker.log.info("Worker received SIGABRT signal")
