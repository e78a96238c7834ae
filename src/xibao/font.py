import logging
import threading
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

logger = logging.getLogger(__name__)

DEFAULT_FONT_PATH = Path(__file__).parent / "assets" / "font.ttf"


class FontLoadError(RuntimeError):
    """Raised when the configured font file cannot be loaded."""


class FontContext:
    """Configured font path plus the lazily loaded TTFont handle.

    Setting `font_path` never touches the disk. The font is (re)loaded on the
    next access of `font` when the configured path differs from the loaded
    one. Both operations hold the same lock, so a render never sees a handle
    half way through a swap.
    """

    def __init__(self, font_path=DEFAULT_FONT_PATH):
        self._lock = threading.Lock()
        self._font_path = Path(font_path)
        self._loaded_path = None
        self._font = None

    @property
    def font_path(self) -> Path:
        with self._lock:
            return self._font_path

    @font_path.setter
    def font_path(self, font_path):
        with self._lock:
            self._font_path = Path(font_path)

    @property
    def loaded_path(self):
        with self._lock:
            return self._loaded_path

    @property
    def font(self) -> TTFont:
        with self._lock:
            if self._font is None or self._font_path != self._loaded_path:
                self._font = self._load(self._font_path)
                self._loaded_path = self._font_path
            return self._font

    @staticmethod
    def _load(font_path):
        logger.info(f"Loading font: {font_path}")
        try:
            font = TTFont(font_path)
            # NOTE: TTFont is lazy, touch the tables we need so errors surface here
            font["head"]
            font["hhea"]
            cmap = font.getBestCmap()
        except (OSError, TTLibError, KeyError) as e:
            raise FontLoadError(f"Failed to load font {font_path}: {e}") from e
        if cmap is None:
            raise FontLoadError(f"Font {font_path} has no Unicode cmap")
        return font
