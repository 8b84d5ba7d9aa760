import logging
import sys

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once per process (Streamlit reruns the script)."""
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    # Streamlit may already have attached its own handler
    if not any(getattr(h, "_shopping_list", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler._shopping_list = True
        root.addHandler(handler)

    _configured = True
