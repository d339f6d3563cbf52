"""
Render configuration.  The module-level names are the reference values; a
RenderSettings instance carries them into render_image and cast_ray so tests
and the command line can change them.
"""

import numpy as np

WIDTH = 1024
HEIGHT = 768
FOV = np.pi / 2          # vertical field of view, radians
MAX_DEPTH = 4            # rays deeper than this see the background
EPSILON = 1e-3           # offset of secondary ray origins along the normal
HORIZON = 1000.          # hits at or beyond this distance are ignored
BG_COLOR = (0.2, 0.7, 0.8)     # seen by rays that hit nothing


class RenderSettings:

    FIELDS = ('width', 'height', 'fov', 'max_depth', 'epsilon', 'horizon', 'verbose')

    def __init__(self, width=WIDTH, height=HEIGHT, fov=FOV, max_depth=MAX_DEPTH,
                 epsilon=EPSILON, horizon=HORIZON, verbose=False):
        """Collect the tunable constants of a render.

        Parameters:
          width, height : int -- image size in pixels
          fov : float -- full vertical field of view in radians
          max_depth : int -- recursion depth cutoff for reflected/refracted rays
          epsilon : float -- distance secondary rays are pushed off the surface
          horizon : float -- visibility horizon for every scene query
          verbose : bool -- print per-row progress while rendering
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if not 0 < fov < np.pi:
            raise ValueError(f"fov must lie strictly between 0 and pi radians, got {fov}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self.width = int(width)
        self.height = int(height)
        self.fov = float(fov)
        self.max_depth = int(max_depth)
        self.epsilon = float(epsilon)
        self.horizon = float(horizon)
        self.verbose = verbose

    @property
    def aspect(self):
        return self.width / self.height

    @classmethod
    def FromDict(cls, d):
        if not isinstance(d, dict):
            raise ValueError(f"render settings must be a mapping, got {type(d).__name__}")
        unknown = set(d) - set(cls.FIELDS)
        if unknown:
            raise ValueError(f"unknown render settings: {', '.join(sorted(unknown))}")
        try:
            return cls(**d)
        except TypeError as e:
            raise ValueError(f"bad render settings {d}: {e}") from None

    def copy(self, **changes):
        """Return new settings with the given fields replaced."""
        fields = {name: getattr(self, name) for name in self.FIELDS}
        fields.update(changes)
        return RenderSettings(**fields)
