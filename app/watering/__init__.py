"""Watering reminder module (API, Celery sweep, FCM dispatcher).

The HTTP side computes the first due timestamp when a crop is planted; the
Celery beat side sweeps due crops every 15 minutes and pushes reminders.
"""
