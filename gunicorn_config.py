"""Gunicorn configuration for production."""
import multiprocessing
import os

# Server socket
port = os.getenv("PORT", "3000")
bind = f"0.0.0.0:{port}"
backlog = 2048

# Worker processes
# Each request blocks on the facilitator for up to FACILITATOR_TIMEOUT seconds
# per call, so concurrency comes from workers and threads.
workers_env = os.getenv("GUNICORN_WORKERS")
if workers_env:
    workers = int(workers_env)
else:
    cpu_count = multiprocessing.cpu_count()
    if cpu_count <= 2:
        workers = 2
    elif cpu_count <= 4:
        workers = 4
    else:
        workers = min(cpu_count, 8)

worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 120  # Above two facilitator calls at FACILITATOR_TIMEOUT
keepalive = 5
graceful_timeout = 30

# Logging
accesslog = "-"  # stdout
errorlog = "-"  # stdout
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
capture_output = True

# Process naming
proc_name = "x402-sales-server"
