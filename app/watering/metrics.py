from prometheus_client import Counter


crops_scheduled_total = Counter(
    "watering_crops_scheduled_total",
    "Total planted crops given a first watering time via API",
)

sweeps_total = Counter(
    "watering_sweeps_total",
    "Total reminder sweep cycles",
)

sweeps_aborted_total = Counter(
    "watering_sweeps_aborted_total",
    "Total reminder sweeps stopped early by a store failure",
)

reminders_sent_total = Counter(
    "watering_reminders_sent_total",
    "Total successful watering push dispatches",
)

reminders_failed_total = Counter(
    "watering_reminders_failed_total",
    "Total failed watering push dispatches",
)

reminders_skipped_total = Counter(
    "watering_reminders_skipped_total",
    "Total due crops skipped for lack of a farmer or FCM token",
)

crops_rescheduled_total = Counter(
    "watering_crops_rescheduled_total",
    "Total due crops moved to their next watering time",
)
