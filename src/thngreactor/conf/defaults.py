''' Package wide defaults. Sub-packages read their own `_meta/defaults.py`
    first and fall back to `sysdefaults` for anything not listed there.
'''

DEBUG_APP_EXCEPTION = False
LOG_LEVEL = "info"
LOG_OUTPUT = "stderr"
