import json

import ray
import materials
from ImLite import Image
from settings import RenderSettings
from utils import *


class ExampleSceneDef(object):
    def __init__(self, camera, scene, lights, settings=None):
        self.camera = camera;
        self.scene = scene;
        self.lights = lights;
        self.settings = settings if settings is not None else RenderSettings();

    def render(self, output_path=None, output_shape=None):
        """Trace the scene; return the encoded Image, or write it to output_path.

        output_shape is [height, width] and defaults to the settings' image size;
        the camera is reframed to match it.
        """
        settings = self.settings;
        camera = self.camera;
        if(output_shape is not None):
            settings = settings.copy(height=output_shape[0], width=output_shape[1]);
            camera = camera.with_aspect(settings.aspect);
        pix = ray.render_image(camera, self.scene, self.lights, settings.width, settings.height, settings);
        im = Image.FromFramebuffer(pix);
        if(output_path is None):
            return im;
        else:
            im.writeToFile(output_path);

    @staticmethod
    def SettingsFromDict(doc):
        """The RenderSettings named by a scene document's "settings" section."""
        return RenderSettings.FromDict(_mapping(doc, 'scene document').get('settings', {}))

    @classmethod
    def FromDict(cls, doc, settings=None):
        """Build a scene definition from a mapping (e.g. parsed JSON).

        Keys: "settings" (RenderSettings fields), "background" ([r, g, b]),
        "materials" (name -> material fields), "spheres" (list of
        {"center", "radius", "material"}) and "lights" (list of
        {"position", "intensity"}).  A sphere's material is a name from
        "materials", a preset name, or an inline material mapping.
        Malformed documents raise ValueError.
        """
        _mapping(doc, 'scene document')
        unknown = set(doc) - {'settings', 'background', 'materials', 'spheres', 'lights'}
        if unknown:
            raise ValueError(f"unknown scene keys: {', '.join(sorted(unknown))}")

        if settings is None:
            settings = cls.SettingsFromDict(doc)

        named = dict(materials.PRESETS)
        for name, fields in _mapping(doc.get('materials', {}), 'materials').items():
            named[name] = _material_from_dict(fields)

        surfs = []
        for entry in _sequence(doc.get('spheres', []), 'spheres'):
            _mapping(entry, 'sphere')
            mat = entry.get('material', 'ivory')
            if isinstance(mat, dict):
                mat = _material_from_dict(mat)
            elif isinstance(mat, str) and mat in named:
                mat = named[mat]
            else:
                raise ValueError(f"unknown material: {mat}")
            surfs.append(ray.Sphere(_vector3(entry, 'center', 'sphere'), _number(entry, 'radius', 'sphere'), mat))

        lights = []
        for entry in _sequence(doc.get('lights', []), 'lights'):
            _mapping(entry, 'light')
            lights.append(ray.PointLight(_vector3(entry, 'position', 'light'), _number(entry, 'intensity', 'light')))

        scene = ray.Scene(surfs, _vector3(doc, 'background', 'scene', ray.BG_COLOR))
        camera = ray.Camera.from_settings(settings)
        return cls(camera=camera, scene=scene, lights=lights, settings=settings);

    @classmethod
    def FromFile(cls, path, settings=None):
        with open(path, 'r') as f:
            return cls.FromDict(json.load(f), settings=settings);


def _mapping(value, what):
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value

def _sequence(value, what):
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return value

def _require(entry, key, what):
    try:
        return entry[key]
    except KeyError:
        raise ValueError(f"{what} is missing '{key}'") from None

def _number(entry, key, what):
    value = _require(entry, key, what)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} '{key}' must be a number, got {value!r}")
    return float(value)

def _vector3(entry, key, what, default=None):
    value = entry.get(key, default) if default is not None else _require(entry, key, what)
    try:
        v = np.array(value, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValueError(f"{what} '{key}' must be 3 numbers, got {value!r}") from None
    if v.shape != (3,):
        raise ValueError(f"{what} '{key}' must be 3 numbers, got {value!r}")
    return v

def _material_from_dict(fields):
    try:
        return materials.Material(**_mapping(fields, 'material'))
    except TypeError as e:
        raise ValueError(f"bad material {fields}: {e}") from None


def FourSpheresExample(settings=None):
    if settings is None:
        settings = RenderSettings();
    scene = ray.Scene([
        ray.Sphere(vec([-3, 0, -16]), 2, materials.ivory),
        ray.Sphere(vec([-1.0, -1.5, -12]), 2, materials.glass),
        ray.Sphere(vec([1.5, -0.5, -18]), 3, materials.red_rubber),
        ray.Sphere(vec([7, 5, -18]), 4, materials.mirror),
    ])

    lights = [
        ray.PointLight(vec([-20, 20, 20]), 1.5),
        ray.PointLight(vec([30, 50, -25]), 1.8),
        ray.PointLight(vec([30, 20, 30]), 1.7),
    ]
    camera = ray.Camera.from_settings(settings)
    return ExampleSceneDef(camera=camera, scene=scene, lights=lights, settings=settings);


def SingleSphereExample(settings=None):
    if settings is None:
        settings = RenderSettings();
    # ivory, but with the specular weight dropped: diffuse only
    matte_ivory = materials.Material(materials.ivory.diffuse_color, (0.6, 0.0, 0.0, 0.0), 50.)

    scene = ray.Scene([
        ray.Sphere(vec([-3, 0, -16]), 2, matte_ivory),
    ])

    lights = [
        ray.PointLight(vec([-20, 20, 20]), 1.5),
    ]
    camera = ray.Camera.from_settings(settings)
    return ExampleSceneDef(camera=camera, scene=scene, lights=lights, settings=settings);


EXAMPLES = {
    'four_spheres': FourSpheresExample,
    'single_sphere': SingleSphereExample,
}
