SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

# Defaults only; tests must not depend on the environment.
ANALYTICS_SETTINGS = {}
