ERROR_TRACKER = "LogTracker"  # LogTracker | NullTracker
