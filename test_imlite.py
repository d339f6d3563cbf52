import os
import tempfile
import unittest
import numpy as np
from ImLite import Image


class TestFramebufferEncoding(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.fb = np.array([[[2.0, 1.0, 0.5], [0.5, 0.2, -0.1]],
                            [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]], dtype=np.float32)

    def tearDown(self):
        self.tmp.cleanup()

    def test_from_framebuffer(self):
        im = Image.FromFramebuffer(self.fb)
        self.assertEqual(im.dtype, np.uint8)
        self.assertEqual(im.width, 2)
        self.assertEqual(im.height, 2)
        np.testing.assert_array_equal(im.pixels[0], [[255, 128, 64], [128, 51, 0]])
        np.testing.assert_array_equal(im.pixels[1], [[0, 0, 0], [255, 255, 255]])

    def test_bad_framebuffer_shape(self):
        with self.assertRaises(ValueError):
            Image.FromFramebuffer(np.zeros((4, 4)))

    def test_ppm_layout(self):
        path = os.path.join(self.tmp.name, 'out.ppm')
        im = Image.FromFramebuffer(self.fb)
        im.writePPM(path)
        with open(path, 'rb') as f:
            data = f.read()
        header = b'P6\n2 2\n255\n'
        self.assertTrue(data.startswith(header))
        # RGB interleaved, left to right, top to bottom
        self.assertEqual(data[len(header):], bytes([255, 128, 64, 128, 51, 0, 0, 0, 0, 255, 255, 255]))

    def test_format_follows_extension(self):
        ppm = os.path.join(self.tmp.name, 'a.ppm')
        png = os.path.join(self.tmp.name, 'a.png')
        im = Image.FromFramebuffer(self.fb)
        im.writeToFile(ppm)
        im.writeToFile(png)
        with open(ppm, 'rb') as f:
            self.assertEqual(f.read(2), b'P6')
        np.testing.assert_array_equal(Image(png).pixels, im.pixels)

    def test_write_failure_propagates(self):
        path = os.path.join(self.tmp.name, 'missing', 'out.ppm')
        with self.assertRaises(OSError):
            Image.FromFramebuffer(self.fb).writeToFile(path)

    def test_float_pixels_quantize_on_write(self):
        path = os.path.join(self.tmp.name, 'f.ppm')
        Image(pixels=np.full((1, 1, 3), 0.5)).writePPM(path)
        np.testing.assert_array_equal(Image(path).pixels, [[[128, 128, 128]]])


if __name__ == '__main__':
    unittest.main()
