import argparse
import json
import sys
import time

import numpy as np

from ExampleSceneDef import ExampleSceneDef, EXAMPLES
from ImLite import Image
from ray import render_image
from settings import RenderSettings, WIDTH, HEIGHT, FOV, MAX_DEPTH, EPSILON, HORIZON


def render(camera, scene, lights, output_path='out.ppm', settings=None):
    """Render a scene with the given camera and write it to output_path."""
    if settings is None:
        settings = RenderSettings(verbose=True)
    start_time = time.time()
    pix = render_image(camera, scene, lights, settings.width, settings.height, settings)
    Image.FromFramebuffer(pix).writeToFile(output_path)
    print(f"Wrote {output_path} ({settings.width}x{settings.height}) in {time.time() - start_time:.2f} seconds")


def build_parser():
    parser = argparse.ArgumentParser(prog='tinytrace', description='Whitted-style sphere ray tracer')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--scene', type=str, help='JSON scene document to render')
    source.add_argument('--example', choices=sorted(EXAMPLES), default='four_spheres',
                        help='built-in scene to render (default: %(default)s)')
    parser.add_argument('-o', '--output', type=str, default='out.ppm',
                        help='output image; the extension picks the format (default: %(default)s)')
    parser.add_argument('--width', type=int, default=None, help=f'image width (default: {WIDTH})')
    parser.add_argument('--height', type=int, default=None, help=f'image height (default: {HEIGHT})')
    parser.add_argument('--fov', type=float, default=None,
                        help=f'vertical field of view in degrees (default: {np.degrees(FOV):g})')
    parser.add_argument('--max-depth', type=int, default=None, help=f'recursion depth limit (default: {MAX_DEPTH})')
    parser.add_argument('--epsilon', type=float, default=None, help=f'secondary ray offset (default: {EPSILON:g})')
    parser.add_argument('--horizon', type=float, default=None, help=f'visibility horizon (default: {HORIZON:g})')
    parser.add_argument('--quiet', action='store_true', help='do not print progress')
    return parser


def settings_from_args(args, base=None):
    """Overlay the command line flags that were given on base settings."""
    fields = {}
    if base is not None:
        fields = {name: getattr(base, name) for name in RenderSettings.FIELDS}
    overrides = {
        'width': args.width,
        'height': args.height,
        'fov': np.radians(args.fov) if args.fov is not None else None,
        'max_depth': args.max_depth,
        'epsilon': args.epsilon,
        'horizon': args.horizon,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    fields['verbose'] = not args.quiet
    return RenderSettings(**fields)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.scene:
            with open(args.scene, 'r') as f:
                doc = json.load(f)
            settings = settings_from_args(args, ExampleSceneDef.SettingsFromDict(doc))
            scene_def = ExampleSceneDef.FromDict(doc, settings=settings)
        else:
            settings = settings_from_args(args)
            scene_def = EXAMPLES[args.example](settings)
        if not args.quiet:
            print(f"Loaded {len(scene_def.scene.surfs)} spheres and {len(scene_def.lights)} lights.")
        render(scene_def.camera, scene_def.scene, scene_def.lights, args.output, settings)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
