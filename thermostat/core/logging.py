"""
Colored console logging for the thermostat.
"""

import sys
import logging
from datetime import datetime

import structlog
from colorama import init, Fore, Style

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

class ColoredConsoleRenderer:
    """Colored console renderer using colorama."""

    level_colors = {
        "debug": Fore.CYAN,
        "info": Fore.BLUE,
        "warning": Fore.YELLOW,
        "error": Fore.RED,
    }

    def __init__(self, stream=None):
        self.stream = stream

    def _event_color(self, event: str, level_color: str) -> str:
        lowered = event.lower()
        if "🔥" in event or "heating" in lowered:
            return Fore.RED + Style.BRIGHT
        if "❄️" in event or "cooling" in lowered:
            return Fore.CYAN + Style.BRIGHT
        if "⏸️" in event or "idle" in lowered:
            return Fore.WHITE
        if "🎯" in event or "target" in lowered:
            return Fore.YELLOW + Style.BRIGHT
        if "✅" in event or "settled" in lowered:
            return Fore.GREEN + Style.BRIGHT
        return level_color

    def _format_context(self, event_dict: dict) -> list[str]:
        context_parts = []
        for key, value in event_dict.items():
            if key in ("current_temp", "target_temp", "new_target"):
                context_parts.append(f"{Fore.CYAN}{key}={value}°C")
            elif key == "mode":
                context_parts.append(f"{Fore.MAGENTA}mode={value}")
            elif key == "fan_speed":
                context_parts.append(f"{Fore.GREEN}fan={value}")
            elif key == "error":
                # Reasons are shown in full
                context_parts.append(f"{Fore.RED}error={value}")
            elif key in ("current_state", "previous_state"):
                context_parts.append(f"{Fore.YELLOW}{key.replace('_', '')}={value}")
            elif isinstance(value, bool):
                color = Fore.GREEN if value else Fore.RED
                context_parts.append(f"{color}{key}={value}")
            elif isinstance(value, (int, float)):
                context_parts.append(f"{Fore.CYAN}{key}={value}")
            elif isinstance(value, str) and len(value) < 40:
                context_parts.append(f"{key}={value}")
        return context_parts

    def __call__(self, logger, name, event_dict):
        """Render log entry with colors."""

        event = str(event_dict.pop("event", ""))
        level = event_dict.pop("level", "info")
        logger_name = event_dict.pop("logger", name)
        timestamp = event_dict.pop("timestamp", "")

        time_str = ""
        if timestamp:
            try:
                dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
                time_str = dt.strftime("%H:%M:%S")
            except ValueError:
                time_str = timestamp[:8]

        level_color = self.level_colors.get(level, Fore.WHITE)
        event_color = self._event_color(event, level_color)

        parts = []
        if time_str:
            parts.append(f"{Fore.WHITE}{Style.DIM}[{time_str}]")

        parts.append(f"{level_color}{level.upper():<5}")

        # Logger name (shortened)
        if logger_name:
            short_name = logger_name.split(".")[-1]
            parts.append(f"{Fore.WHITE}{Style.DIM}{short_name}:")

        parts.append(f"{event_color}{event}")

        context_parts = self._format_context(event_dict)
        if context_parts:
            parts.append(f"{Fore.WHITE}{Style.DIM}({', '.join(context_parts)})")

        line = " ".join(parts) + Style.RESET_ALL
        print(line, file=self.stream or sys.stderr)

        # Already printed; keep stdlib from emitting an empty record
        raise structlog.DropEvent

def setup_colored_logging(log_level: str = "info") -> None:
    """Setup colored logging configuration."""

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        ColoredConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Accept LogLevel members as well as plain strings
    level_name = str(getattr(log_level, "value", log_level)).lower()

    logging.basicConfig(
        level=LEVEL_MAP.get(level_name, logging.INFO),
        force=True,
        handlers=[],  # structlog renders
    )
