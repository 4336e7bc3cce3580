"""RPB - version constants.

Keep this module tiny and dependency-free. It is imported by the CLI,
the widget and the renderer, and must not have side effects.
"""

APP_NAME = "RusticProgressBar"
APP_SHORT = "RPB"

APP_VERSION = "0.1.0"

# Nominal widget size (px) used as sizeHint / CLI default.
DEFAULT_BAR_SIZE = (100, 20)

# Hard defaults of the style fallback chain.
# NOTE: colors use the "#rrggbbaa" convention (alpha last).
DEFAULT_BG = "#ff0000aa"
DEFAULT_FG = "#ff0000"
DEFAULT_TICKS_COLOR = "#000000aa"
DEFAULT_TICKS_GAP = 1.0
DEFAULT_TICKS_SIZE = 4.0
