"""Five tick-driven arcade games on a shared pygame scaffold."""

__version__ = "0.1.0"
