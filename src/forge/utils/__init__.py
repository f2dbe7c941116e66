"""Utilities."""

from .log_sanitizer import LogSanitizationFilter, install_log_sanitizer, sanitize_string

__all__ = ["LogSanitizationFilter", "install_log_sanitizer", "sanitize_string"]
