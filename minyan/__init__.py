# minyan/__init__.py
__all__ = ["parse_times_command", "find_pair", "is_yom_tov"]

from .commands import parse_times_command
from .yomtov import find_pair, is_yom_tov

try:
    from importlib.metadata import version as _dist_version
    __version__ = _dist_version("minyan")
except Exception:
    # Fallback during editable installs or if metadata is unavailable
    __version__ = "0.0.0"
