# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/temporal/config.py for parsing and defaults.
"""

ENV_VARS = {
    # App / logging
    "TEMPORAL_APP_NAME": "Name used in log lines (default: temporal).",
    "TEMPORAL_LOG_LEVEL": "Console logging level (default: INFO).",
    "TEMPORAL_LOG_DIR": "Directory for temporal.log (default: .local/temporal; empty => no file).",
    # Scheduler
    "TEMPORAL_RESOLUTION": "Initial clock resolution factor: 1 (1 ms), 0.1 or 0.01 (default: 1).",
    "TEMPORAL_DEFAULT_INTERVAL": (
        "Interval used when a callback is passed in place of the interval (default: 10)."
    ),
}
