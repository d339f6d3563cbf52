import numpy as np
from utils import normalize
from materials import default_material

class Hit:
    def __init__(self, t, point=None, normal=None, material=default_material):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the 3D outward-facing unit normal to the surface at the hit point
          material : (Material) -- the material of the surface
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.material = material

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Sphere:

    def __init__(self, center, radius, material):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          material : Material -- the material of the surface
        """
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = np.array(center, np.float64)
        self.radius = float(radius)
        self.material = material

    def ray_intersect(self, origin, direction):
        """Distance along a unit-direction ray to this sphere, or None on a miss.

        The near root is preferred; if it lies behind the origin (the origin is
        inside the sphere or past the near surface) the far root is used instead.
        """
        L = self.center - origin
        tca = np.dot(L, direction)
        d2 = np.dot(L, L) - tca * tca
        r2 = self.radius * self.radius
        if d2 > r2:
            return None
        thc = np.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return t0

    def intersect(self, ray):
        """Computes the first intersection between a ray and this sphere.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data, or no_hit
        """
        t = self.ray_intersect(ray.origin, ray.direction)
        if t is None or not (ray.start <= t < ray.end):
            return no_hit
        point = ray.origin + t * ray.direction
        return Hit(t, point, normalize(point - self.center), self.material)
