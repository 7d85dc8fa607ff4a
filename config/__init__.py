"""
Configuration package.

    - settings: all tunable values (env / .env overridable)
    - logging_setup: console and rotating file logging
"""
