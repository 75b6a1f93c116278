import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

ANALYTICS_SETTINGS = {
    "daily_window": int(os.getenv("ANALYTICS_DAILY_WINDOW", "7")),
    "monthly_window": int(os.getenv("ANALYTICS_MONTHLY_WINDOW", "6")),
    "earnings_daily_window": int(os.getenv("ANALYTICS_EARNINGS_DAILY_WINDOW", "30")),
    "top_workers": int(os.getenv("ANALYTICS_TOP_WORKERS", "5")),
    "chart_workers": int(os.getenv("ANALYTICS_CHART_WORKERS", "10")),
    "distribution_top_k": int(os.getenv("ANALYTICS_DISTRIBUTION_TOP_K", "8")),
    "job_distribution_top_k": int(os.getenv("ANALYTICS_JOB_DISTRIBUTION_TOP_K", "5")),
    "recent_limit": int(os.getenv("ANALYTICS_RECENT_LIMIT", "10")),
    "alert_limit": int(os.getenv("ANALYTICS_ALERT_LIMIT", "5")),
    "unknown_label": os.getenv("ANALYTICS_UNKNOWN_LABEL", "Unknown"),
}
