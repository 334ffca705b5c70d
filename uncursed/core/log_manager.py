"""
Log management for the toolkit.

This module provides centralized logging with categorization, filtering,
and bounded storage. A terminal UI owns the screen, so messages are kept in
memory and written to a file on request instead of being printed.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Surface start-up, shutdown, configuration
    WINDOW = auto()     # Window creation, movement and destruction
    MENU = auto()       # Menu layout and results
    LAYOUT = auto()     # Text layout decisions
    INPUT = auto()      # Key handling
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.WINDOW: "WIN",
    LogCategory.MENU: "MNU",
    LogCategory.LAYOUT: "LAY",
    LogCategory.INPUT: "INP",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


@dataclass
class LogMessage:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []
        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")
        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")
        parts.append(self.text)
        return " ".join(parts)


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class LogManager:
    """Collects toolkit messages with categorization and filtering."""

    def __init__(self, max_messages: int = 1000, default_level: LogLevel = LogLevel.INFO):
        """Initialize the log manager.

        Args:
            max_messages: Maximum number of messages to keep
            default_level: Default log level for filtering
        """
        self.messages: deque[LogMessage] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)

        # Window churn and key presses are noisy, keep them at DEBUG
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.WINDOW: LogLevel.DEBUG,
            LogCategory.INPUT: LogLevel.DEBUG,
            LogCategory.LAYOUT: LogLevel.DEBUG,
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
        }

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Add a message to the log.

        Messages are always stored; filtering happens when they are read.
        """
        self.messages.append(LogMessage(text=text, category=category))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def window(self, text: str) -> None:
        self.log(text, LogCategory.WINDOW)

    def menu(self, text: str) -> None:
        self.log(text, LogCategory.MENU)

    def layout(self, text: str) -> None:
        self.log(text, LogCategory.LAYOUT)

    def input(self, text: str) -> None:
        self.log(text, LogCategory.INPUT)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogMessage]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include (None for all enabled
                categories at or above the current log level)

        Returns:
            List of recent messages, oldest first
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = []
            for msg in self.messages:
                if msg.category not in self.enabled_categories:
                    continue
                message_level = self.category_levels.get(msg.category, LogLevel.INFO)
                if message_level.value < self.log_level.value:
                    continue
                filtered.append(msg)

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Save all messages to a timestamped log file.

        Every stored message is written, whatever the current filters.

        Returns:
            The path written, or None if the file could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(log_dir, f"uncursed_{timestamp}.log")
        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write("uncursed - Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")
                if not self.messages:
                    f.write("No messages to save.\n")
                for msg in self.messages:
                    timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                    f.write(f"[{timestamp_str}] [{msg.category.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Log saved to {filepath}")
        return filepath
