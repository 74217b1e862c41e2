"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import math


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def group_digits(value: int) -> str:
        """
        Format an integer with the current locale's digit grouping ("1,234,567" in en_US).
        Falls back to no grouping under the C locale.
        """
        return f"{value:n}"

    @staticmethod
    def human_to_seconds(value: str) -> float:
        """
        Convert a duration such as '90', '1.5s', '2m' or '1h' to seconds.
        Raises ValueError for negative or malformed input.
        """
        value = value.strip().lower()
        units = {'h': 3600, 'm': 60, 's': 1}

        multiplier = 1
        if value and value[-1] in units:
            multiplier = units[value[-1]]
            value = value[:-1].strip()

        try:
            seconds = float(value) * multiplier
        except ValueError:
            raise ValueError(
                f"Invalid duration format: '{value}'. "
                f"Supported formats: 30, 1.5s, 2m, 1h"
            )

        if not math.isfinite(seconds):
            raise ValueError(f"Duration must be finite: '{value}'")
        if seconds < 0:
            raise ValueError(f"Negative duration not allowed: '{value}'")
        return seconds
