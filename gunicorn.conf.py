import os
import sys

# Add src directory to Python path so 'ghana_law' package can be found
sys.path.append(os.path.join(os.getcwd(), 'src'))

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The corpus is a read-only SQLite file; each request opens its own connection,
# so threads inside one worker are fine.
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
threads = int(os.environ.get('GUNICORN_THREADS', '4'))
worker_class = "gthread"
worker_tmp_dir = "/dev/shm"

preload_app = False
accesslog = "-"
errorlog = "-"
loglevel = "info"
timeout = 60
