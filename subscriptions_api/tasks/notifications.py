"""Celery tasks for out-of-band delivery of account notifications."""

import logging

from subscriptions_api.celery_app import app as celery_app

logger = logging.getLogger(__name__)


@celery_app.task
def deliver_reset_code(email: str, code: str) -> dict:
    """Deliver a password reset code to its owner.

    No mail transport is wired up yet; the code is written to the worker log
    so an operator can relay it.

    Returns:
        dict with the recipient and delivery channel
    """
    logger.info(f"Password reset code for {email}: {code}")
    return {"email": email, "channel": "log"}
