''' Last lookup for any config value, after the ini section and the
    package's own `_meta/defaults.py`.
'''

LOG_LEVEL = "info"
LOG_FORMATTER = (
    "[%(asctime)-8s] "
    "[%(name)20.20s - %(filename)16.16s:%(lineno)-4d]%(levelname)6s "
    "%(message)s"
)
LOG_DATEFMT = "%H:%M:%S"
LOG_OUTPUT = None
LOG_COLORED = False

# Print module configuration. Accept the name of a module. E.g. "thngreactor.client"
DEBUG_MODULE_CONFIG = None
