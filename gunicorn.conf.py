import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# The invoice list cache lives in process memory and is invalidated in the
# worker that handled the mutation, so run exactly one worker process and
# scale with threads instead.
worker_class = "gthread"
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30
