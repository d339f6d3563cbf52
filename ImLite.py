from PIL import Image as PIM
import numpy as np

from utils import tone_map, to_uint8

class Image(object):
    """Image

    Thin wrapper around an (h, w, c) pixel array.  Float pixels are in [0, 1],
    integer pixels in [0, 255].
    """

    def __init__(self, path=None, pixels=None, **kwargs):
        # You can do Image(pixels) or Image(path)
        self._samples = None;
        self.file_path = None;
        if (isinstance(path, np.ndarray) and (pixels is None)):
            # if the path looks like pixels and pixels are undefined, treat the path as pixels
            self.pixels = path;
        else:
            self.pixels = pixels;
            self.file_path = path;
            if(self.file_path is not None and pixels is None):
                self.loadImageData(self.file_path);

    def clone(self, share_data = False):
        selfclass = type(self);
        new_copy = selfclass(pixels=self.pixels if share_data else self.pixels.copy());
        new_copy.file_path = self.file_path;
        return new_copy;

    @classmethod
    def FromFramebuffer(cls, framebuffer):
        """Encode a scene-linear framebuffer for output.

        Pixels brighter than 1 are rescaled by 1/max so their hue survives, then
        every channel is clamped to [0, 1] and quantised to round(255 * c).
        """
        fb = np.asarray(framebuffer, dtype=np.float64);
        if (fb.ndim != 3 or fb.shape[2] != 3):
            raise ValueError("framebuffer must have shape (height, width, 3), got {}".format(fb.shape));
        return cls(pixels=to_uint8(tone_map(fb)));

    @property
    def pixels(self):
        return self.samples;

    @pixels.setter
    def pixels(self, data):
        self.samples = data;

    @property
    def samples(self):
        return self._samples;

    @samples.setter
    def samples(self, value):
        self._samples = value;

    @property
    def n_color_channels(self):
        if (len(self.pixels.shape) < 3):
            return 1;
        else:
            return self.pixels.shape[2];

    @property
    def dtype(self):
        return self.pixels.dtype;

    @property
    def _is_float(self):
        return (self.dtype.kind in 'f');

    @property
    def _is_int(self):
        return (self.dtype.kind in 'iu');

    @property
    def fpixels(self):
        if (self._is_float):
            return self.pixels;
        else:
            return self.pixels.astype(float) * np.true_divide(1.0, 255.0);

    @property
    def ipixels(self):
        if (self._is_int):
            return self.pixels;
        else:
            return to_uint8(self.pixels);

    @property
    def shape(self):
        return np.asarray(self.pixels.shape)[:];

    @property
    def width(self):
        return self.shape[1];

    @property
    def height(self):
        return self.shape[0];

    def loadImageData(self, path=None):
        if (path):
            self.file_path = path;
        if (self.file_path):
            with PIM.open(fp=self.file_path) as pim:
                self._samples = np.array(pim.convert('RGB'));

    def PIL(self):
        return PIM.fromarray(np.uint8(self.ipixels));

    def writeToFile(self, output_path=None, format=None, **kwargs):
        """Save through Pillow; the format follows the file extension unless given.

        Errors creating or writing the file are raised to the caller.
        """
        if (output_path is None):
            output_path = self.file_path;
        if (output_path is None):
            raise ValueError("no output path given");
        self.PIL().save(output_path, format=format, **kwargs);
        self.file_path = output_path;

    def writePPM(self, output_path=None):
        """Write a binary (P6) PPM: 'P6', width, height, 255, then RGB bytes row by row."""
        self.writeToFile(output_path, format='PPM');
