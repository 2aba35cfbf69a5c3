from redis import Redis
from rq import Queue
from flask import current_app

from .store import EntityStore

# RQ-only options that must not leak into an inline call
RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description', 'failure_ttl'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url:
            self.redis = None
            self.queue = None
            return
        try:
            self.redis = Redis.from_url(url)
            self.queue = Queue(app.config.get("NOTIFY_QUEUE", "default"), connection=self.redis)
        except Exception:
            # no Redis on this machine: run jobs inline
            app.logger.exception('Redis/RQ init failed, falling back to sync execution')
            self.redis = None
            self.queue = None

    def _run_inline(self, func, *args, **kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        try:
            return func(*args, **safe_kwargs)
        except Exception:
            current_app.logger.exception('Synchronous execution of %s failed', getattr(func, '__name__', func))
            return None

    def enqueue(self, func, *args, **kwargs):
        """Queue ``func`` on RQ, or run it inline when Redis is absent.

        Never raises: callers use this after a transition has committed.
        """
        if not self.queue:
            return self._run_inline(func, *args, **kwargs)
        try:
            return self.queue.enqueue(func, *args, **kwargs)
        except Exception:
            current_app.logger.exception('RQ enqueue failed, falling back to sync execution')
            return self._run_inline(func, *args, **kwargs)


store = EntityStore()
rq = RQWrapper()
