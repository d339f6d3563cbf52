from ExampleSceneDef import FourSpheresExample
from settings import RenderSettings
from cli import render

example = FourSpheresExample(RenderSettings(verbose=True))

render(example.camera, example.scene, example.lights, "out.ppm", example.settings)
