"""Utility functions."""

from .detectors import (
    categorize_links,
    code_indicator_count,
    convert_windows_path,
    count_scripts,
    extract_dates,
    extract_emails,
    extract_formats,
    extract_ip_addresses,
    extract_links,
    extract_paths,
    extract_phone_numbers,
    generate_repository_links,
    looks_like_table,
)

__all__ = [
    "categorize_links",
    "code_indicator_count",
    "convert_windows_path",
    "count_scripts",
    "extract_dates",
    "extract_emails",
    "extract_formats",
    "extract_ip_addresses",
    "extract_links",
    "extract_paths",
    "extract_phone_numbers",
    "generate_repository_links",
    "looks_like_table",
]
