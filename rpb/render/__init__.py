"""Progress-bar rendering.

`progressbar` holds the pure geometry + draw-call sequence; the surfaces
(`surface`, `qt_surface`) are the only place that knows about a backend.
"""

from __future__ import annotations
