import numpy as np
from geometry import Sphere, Hit, no_hit
from materials import Material
from settings import RenderSettings, HORIZON, BG_COLOR
from utils import *

"""
Core implementation of the ray tracer.  Rays are traced Whitted-style: Phong
shading from point lights with hard shadows, plus recursively traced mirror
reflection and refraction, cut off at a fixed recursion depth.

Directions handed to the scene are expected to be unit length; everything in
this module reports edge cases (misses, occlusion, total internal reflection,
depth exhaustion) as ordinary return values.
"""


class Ray:

    def __init__(self, origin, direction, start=0., end=np.inf):
        """Create a ray with the given origin and direction.

        Parameters:
          origin : (3,) -- the start point of the ray, a 3D point
          direction : (3,) -- the direction of the ray, a unit 3D vector
          start, end : float -- the range of t values that count as intersections
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)
        self.start = start
        self.end = end

class Camera:

    def __init__(self, eye=vec([0,0,0]), target=vec([0,0,-1]), up=vec([0,1,0]),
                 vfov=90.0, aspect=1.0):
        """Create a camera with given viewing parameters.

        Parameters:
          eye : (3,) -- the camera's location, aka viewpoint (a 3D point)
          target : (3,) -- a 3D point that appears centered in the view
          up : (3,) -- a 3D vector that appears straight up in the view
          vfov : float -- the full vertical field of view in degrees
          aspect : float -- the aspect ratio of the camera's view (ratio of width to height)
        """
        self.eye = np.array(eye, np.float64)
        self.target = np.array(target, np.float64)
        self.up = np.array(up, np.float64)
        self.aspect = aspect
        self.vfov = vfov

        self.w = normalize(self.eye - self.target)
        self.u = normalize(np.cross(self.up, self.w))
        self.v = np.cross(self.w, self.u)

        rads = np.radians(self.vfov)

        self.img_h_half = np.tan(rads / 2.0)
        self.img_w_half = self.aspect * self.img_h_half

    @classmethod
    def from_settings(cls, settings):
        """The reference camera: at the origin, looking down -z, sized from the settings."""
        return cls(vfov=np.degrees(settings.fov), aspect=settings.aspect)

    def with_aspect(self, aspect):
        """The same view, framed for an image of a different shape."""
        return Camera(self.eye, self.target, self.up, self.vfov, aspect)

    def generate_ray(self, img_point):
        """Compute the ray corresponding to a point in the image.

        Parameters:
          img_point : (2,) -- a 2D point in [0,1] x [0,1], where (0,0) is the upper left
                      corner of the image and (1,1) is the lower right.
        Return:
          Ray -- the ray through that image location, with unit direction
        """
        alpha = self.img_w_half * (img_point[0] * 2.0 - 1.0)
        beta = self.img_h_half * (1.0 - img_point[1] * 2.0)

        direction = (alpha * self.u) + (beta * self.v) - self.w

        return Ray(self.eye, normalize(direction))


def offset_origin(point, direction, normal, eps):
    """Push a secondary ray origin off the surface on the side the ray leaves through."""
    if np.dot(direction, normal) < 0:
        return point - normal * eps
    return point + normal * eps


class PointLight:
    def __init__(self, position, intensity):
        """Create a point light at given position and with given scalar intensity"""
        if intensity < 0:
            raise ValueError(f"light intensity must be non-negative, got {intensity}")
        self.position = np.array(position, np.float64)
        self.intensity = float(intensity)

    def illuminate(self, ray, hit, scene, settings):
        """Compute the diffuse and specular intensity this light adds at a hit.

        Parameters:
          ray : Ray -- the ray that hit the surface
          hit : Hit -- the hit data
          scene : Scene -- the scene, for shadow rays
          settings : RenderSettings -- supplies the shadow-ray offset and horizon
        Return:
          (float, float) -- diffuse and specular intensity, zero when occluded
        """
        light_vec_full = self.position - hit.point
        dist = norm(light_vec_full)
        light_vec = normalize(light_vec_full)
        if not light_vec.any():
            return 0., 0.

        normal_hit = hit.normal
        shadow_ray = Ray(
            origin=offset_origin(hit.point, light_vec, normal_hit, settings.epsilon),
            direction=light_vec,
            end=dist
        )
        if scene.is_occluded(shadow_ray, settings.horizon):
            return 0., 0.

        diffuse = self.intensity * max(0.0, np.dot(light_vec, normal_hit))
        spec_angle = max(0.0, -np.dot(reflect(-light_vec, normal_hit), ray.direction))
        specular = self.intensity * spec_angle ** hit.material.specular_exponent
        return diffuse, specular


class Scene:

    def __init__(self, surfs, bg_color=BG_COLOR):
        """Create a scene containing the given objects.

        Parameters:
          surfs : [Sphere] -- list of the surfaces in the scene
          bg_color : (3,) -- RGB color that is seen where no objects appear
        """
        self.surfs = list(surfs)
        self.bg_color = vec(bg_color)

    def intersect(self, ray, horizon=HORIZON):
        """Computes the first (smallest t) intersection between a ray and the scene.

        Parameters:
          ray : Ray -- the ray to intersect with the scene
          horizon : float -- hits at this distance or farther count as misses
        Return:
          Hit -- the hit data, or no_hit
        """
        closest_hit = no_hit
        for surf in self.surfs:
            hit = surf.intersect(ray)
            if hit.t < closest_hit.t:
                closest_hit = hit

        if closest_hit.t >= horizon:
            return no_hit
        return closest_hit

    def is_occluded(self, ray, horizon=HORIZON):
        """Return True if any surface blocks the ray before its end (and the horizon)."""
        limit = min(ray.end, horizon)
        for surf in self.surfs:
            if surf.intersect(ray).t < limit:
                return True
        return False


_reference_settings = RenderSettings()

def cast_ray(ray, scene, lights, depth=0, settings=None):
    """Compute the color seen along a ray.

    Parameters:
      ray : Ray -- the ray, with unit direction
      scene : Scene -- the scene
      lights : [PointLight] -- the lights
      depth : int -- the recursion depth so far
      settings : RenderSettings -- depth cutoff, ray offset and horizon
    Return:
      (3,) -- the scene-linear color seen along this ray
    Beyond settings.max_depth the background color is returned without
    touching the scene.
    """
    if settings is None:
        settings = _reference_settings
    if depth > settings.max_depth:
        return scene.bg_color.copy()

    hit = scene.intersect(ray, settings.horizon)
    if hit.t == np.inf:
        return scene.bg_color.copy()

    mat = hit.material
    point = hit.point
    n = hit.normal
    k_d, k_s, k_m, k_t = mat.albedo

    diffuse_intensity = 0.
    specular_intensity = 0.
    for light in lights:
        diffuse, specular = light.illuminate(ray, hit, scene, settings)
        diffuse_intensity += diffuse
        specular_intensity += specular

    reflect_color = np.zeros(3)
    if k_m != 0:
        reflect_dir = normalize(reflect(ray.direction, n))
        reflect_ray = Ray(offset_origin(point, reflect_dir, n, settings.epsilon), reflect_dir)
        reflect_color = cast_ray(reflect_ray, scene, lights, depth + 1, settings)

    refract_color = np.zeros(3)
    if k_t != 0:
        refract_dir = normalize(refract(ray.direction, n, mat.refractive_index))
        # zero direction: total internal reflection, nothing is transmitted
        if refract_dir.any():
            refract_ray = Ray(offset_origin(point, refract_dir, n, settings.epsilon), refract_dir)
            refract_color = cast_ray(refract_ray, scene, lights, depth + 1, settings)

    return (mat.diffuse_color * diffuse_intensity * k_d
            + np.ones(3) * specular_intensity * k_s
            + reflect_color * k_m
            + refract_color * k_t)


def render_image(camera, scene, lights, nx=None, ny=None, settings=None):
    """Render a ray traced image.

    Parameters:
      camera : Camera or None -- the camera defining the view; None builds the
               reference camera from settings.fov and the image shape
      scene : Scene -- the scene to be rendered
      lights : [PointLight] -- the lights illuminating the scene
      nx, ny : int -- the dimensions of the rendered image (default settings.width, settings.height)
      settings : RenderSettings -- tracing parameters (reference values if omitted)
    Returns:
      (ny, nx, 3) float32 -- the scene-linear RGB image, row 0 at the top
    A camera whose field of view or aspect ratio disagrees with settings.fov
    and nx/ny raises ValueError.
    """
    if settings is None:
        settings = _reference_settings
    nx = settings.width if nx is None else nx
    ny = settings.height if ny is None else ny

    if camera is None:
        camera = Camera(vfov=np.degrees(settings.fov), aspect=nx / ny)
    elif not np.isclose(np.radians(camera.vfov), settings.fov):
        raise ValueError(f"camera fov {camera.vfov} degrees does not match settings fov {np.degrees(settings.fov)}")
    elif not np.isclose(camera.aspect, nx / ny):
        raise ValueError(f"camera aspect {camera.aspect} does not match a {nx}x{ny} image")

    output_image = np.zeros((ny, nx, 3), np.float32)
    for i in range(ny):
        if settings.verbose:
            print(f"rendering row {i+1}/{ny}...")
        for j in range(nx):
            pixel_uv = np.array([(j + 0.5) / nx, (i + 0.5) / ny])
            ray = camera.generate_ray(pixel_uv)
            output_image[i, j] = cast_ray(ray, scene, lights, 0, settings)

    return output_image
