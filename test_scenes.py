import json
import os
import tempfile
import unittest
import numpy as np
import materials
from ExampleSceneDef import ExampleSceneDef, FourSpheresExample, SingleSphereExample
from settings import RenderSettings


DOC = {
    "settings": {"width": 8, "height": 6, "max_depth": 2},
    "background": [0.1, 0.2, 0.3],
    "materials": {
        "chalk": {"diffuse_color": [0.9, 0.9, 0.9], "albedo": [1.0, 0.0]},
    },
    "spheres": [
        {"center": [0, 0, -10], "radius": 2, "material": "chalk"},
        {"center": [3, 0, -12], "radius": 1, "material": "mirror"},
        {"center": [-3, 0, -12], "radius": 1,
         "material": {"diffuse_color": [1, 0, 0], "albedo": [0.5, 0.5, 0, 0], "specular_exponent": 20}},
    ],
    "lights": [{"position": [0, 10, 0], "intensity": 1.2}],
}


class TestSceneDocuments(unittest.TestCase):

    def test_from_dict(self):
        scene_def = ExampleSceneDef.FromDict(DOC)
        self.assertEqual(scene_def.settings.width, 8)
        self.assertEqual(scene_def.settings.max_depth, 2)
        self.assertEqual(len(scene_def.scene.surfs), 3)
        np.testing.assert_allclose(scene_def.scene.bg_color, [0.1, 0.2, 0.3], rtol=1e-6)
        chalk, mirror, inline = [s.material for s in scene_def.scene.surfs]
        np.testing.assert_array_equal(chalk.albedo, [1, 0, 0, 0])
        self.assertIs(mirror, materials.mirror)
        self.assertEqual(inline.specular_exponent, 20)
        self.assertEqual(scene_def.lights[0].intensity, 1.2)
        self.assertAlmostEqual(scene_def.camera.aspect, 8 / 6)

    def test_explicit_settings_win(self):
        scene_def = ExampleSceneDef.FromDict(DOC, settings=RenderSettings(width=2, height=2))
        self.assertEqual(scene_def.settings.width, 2)

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'scene.json')
            with open(path, 'w') as f:
                json.dump(DOC, f)
            scene_def = ExampleSceneDef.FromFile(path)
        self.assertEqual(len(scene_def.lights), 1)

    def test_invalid_documents(self):
        bad_docs = [
            {"spheres": [{"center": [0, 0, -5], "radius": 1, "material": "unobtainium"}]},
            {"spheres": [{"center": [0, 0, -5], "radius": -1}]},
            {"spheres": [{"radius": 1}]},
            {"lights": [{"position": [0, 0, 0]}]},
            {"lights": [{"position": [0, 0, 0], "intensity": -2}]},
            {"materials": {"m": {"diffuse_color": [1, 1, 1], "shininess": 3}}},
            {"settings": {"samples": 4}},
            {"cameras": []},
            {"spheres": [{"center": [0, 0, -5], "radius": "big"}]},
            {"spheres": [{"center": [0, 0, -5], "radius": [1]}]},
            {"spheres": [{"center": [0, 0, -5], "radius": 1, "material": [1, 0, 0]}]},
            {"spheres": [{"center": [0, -5], "radius": 1}]},
            {"spheres": [{"center": "origin", "radius": 1}]},
            {"spheres": {"center": [0, 0, -5], "radius": 1}},
            {"spheres": [[0, 0, -5]]},
            {"lights": [{"position": [0, 0, 0], "intensity": "bright"}]},
            {"lights": [{"position": [[0, 0, 0]], "intensity": 1}]},
            {"background": [0.1, 0.2]},
            {"materials": {"m": {"diffuse_color": [1, 1]}}},
            {"materials": {"m": [1, 1, 1]}},
            {"materials": []},
            [{"center": [0, 0, -5], "radius": 1}],
            "scene",
        ]
        for doc in bad_docs:
            with self.assertRaises(ValueError, msg=str(doc)):
                ExampleSceneDef.FromDict(doc)

    def test_render_small(self):
        im = ExampleSceneDef.FromDict(DOC).render(output_shape=[6, 8])
        self.assertEqual(tuple(im.shape), (6, 8, 3))
        self.assertEqual(im.dtype, np.uint8)

    def test_render_other_shape(self):
        scene_def = ExampleSceneDef.FromDict(DOC)
        im = scene_def.render(output_shape=[4, 10])
        self.assertEqual(tuple(im.shape), (4, 10, 3))
        # the bundle keeps its own settings and camera
        self.assertEqual(scene_def.settings.width, 8)
        self.assertAlmostEqual(scene_def.camera.aspect, 8 / 6)


class TestExamples(unittest.TestCase):

    def test_four_spheres(self):
        example = FourSpheresExample()
        self.assertEqual(len(example.scene.surfs), 4)
        self.assertEqual(len(example.lights), 3)
        self.assertEqual(example.settings.width, 1024)
        self.assertEqual(example.settings.height, 768)

    def test_four_spheres_renders(self):
        im = FourSpheresExample(RenderSettings(width=12, height=9)).render()
        self.assertEqual(tuple(im.shape), (9, 12, 3))

    def test_single_sphere_is_diffuse(self):
        mat = SingleSphereExample().scene.surfs[0].material
        np.testing.assert_array_equal(mat.albedo[1:], [0, 0, 0])


if __name__ == '__main__':
    unittest.main()
