"""
Background Jobs - note expiry sweep
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging

logger = logging.getLogger('main')


class JobScheduler:
    """Owns the background scheduler for one application"""

    def __init__(self):
        self.scheduler = BackgroundScheduler(timezone='UTC')
        self._jobs_registered = False

    def init_app(self, app, sweep_seconds):
        """Register jobs against the Flask app and start the scheduler"""
        self._register_jobs(app, sweep_seconds)
        self.scheduler.start()
        app.extensions['scheduler'] = self
        logger.info("Job scheduler initialized")

    def _register_jobs(self, app, sweep_seconds):
        if self._jobs_registered:
            return

        self.scheduler.add_job(
            func=self._expire_notes_job,
            trigger=IntervalTrigger(seconds=sweep_seconds),
            id='expire_notes',
            name='Expire Notes',
            args=[app],
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )

        self._jobs_registered = True
        logger.info(f"Note expiry sweep registered (every {sweep_seconds}s)")

    def _expire_notes_job(self, app):
        with app.app_context():
            try:
                app.extensions['opsboard'].expire_notes()
            except Exception as e:
                logger.error(f"Note expiry sweep failed: {e}")

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Job scheduler shutdown")
