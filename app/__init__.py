"""
UrbanRoots Notifications Backend

Schedules watering reminders for planted crops and pushes them via FCM.
"""
