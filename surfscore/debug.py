# ABOUTME: Debug logging helper gated on the DEBUG environment flag
# ABOUTME: Prints tagged lines to stdout so scheduler logs show engine decisions

from surfscore.config import Config


def debug_log(message: str, category: str = "DEBUG") -> None:
    """Print a tagged debug line when Config.DEBUG is enabled."""
    if Config.DEBUG:
        print(f"[{category}] {message}", flush=True)
