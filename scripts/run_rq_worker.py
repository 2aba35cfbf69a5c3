"""Run an RQ worker inside the Flask app context.

Usage:
  export REDIS_URL=redis://localhost:6379/0
  python scripts/run_rq_worker.py

Notification jobs use `current_app` for config and logging, and read the same
DATA_FILE snapshot as the web process, so the worker needs the app and its
store initialized.
"""

import sys
import os

# Ensure project root is on sys.path when running from scripts/ or other cwd
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
  sys.path.insert(0, ROOT)

from hrms import create_app
import redis
from rq import Worker, Queue


def main():
  app = create_app()
  redis_url = app.config.get('REDIS_URL')
  if not redis_url:
    print('REDIS_URL is empty; notifications run inline in the web process, no worker needed')
    raise SystemExit(1)
  conn = redis.from_url(redis_url)
  with app.app_context():
    q = Queue(app.config.get('NOTIFY_QUEUE', 'default'), connection=conn)
    worker = Worker([q], connection=conn)
    print('RQ worker starting (pid', os.getpid(), ')')
    try:
      worker.work(burst=False, with_scheduler=True, logging_level=app.config.get('LOG_LEVEL', 'INFO'))
    finally:
      print('RQ worker exiting (pid', os.getpid(), ')')


if __name__ == '__main__':
  main()
