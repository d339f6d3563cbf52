import numpy as np

def vec(list):
    """Handy shorthand to make a single-precision float array."""
    return np.array(list, dtype=np.float32)

def norm(v):
    """Return the Euclidean length of the vector v."""
    return np.sqrt(np.dot(v, v))

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    A zero-length vector has no direction; the zero vector is returned and
    callers treat it as "no contribution".
    """
    v = np.asarray(v, np.float64)
    length = norm(v)
    if length < 1e-12:
        return np.zeros_like(v)
    return v * (1.0 / length)


def reflect(I, N):
    """Mirror the incident direction I about the unit normal N."""
    return I - N * 2.0 * np.dot(I, N)

def refract(I, N, eta_t, eta_i=1.0):
    """Bend the unit direction I through a surface with normal N using Snell's law.

    Parameters:
      I : (3,) -- incident direction (unit length)
      N : (3,) -- outward surface normal (unit length)
      eta_t : float -- refractive index of the material
      eta_i : float -- refractive index outside the material
    Return:
      (3,) -- the transmitted direction, or the zero vector on total internal reflection
    """
    cosi = -np.clip(np.dot(I, N), -1.0, 1.0)
    if cosi < 0:
        # leaving the material
        cosi = -cosi
        N = -N
        eta_i, eta_t = eta_t, eta_i
    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    if k < 0:
        return np.zeros(3)
    return I * eta + N * (eta * cosi - np.sqrt(k))


def tone_map(img):
    """Rescale every pixel whose brightest channel exceeds 1 so that channel becomes 1.

    Hue is preserved; pixels already inside [0, 1] are left alone.
    """
    img = np.asarray(img, dtype=np.float64)
    peak = np.max(img, axis=-1, keepdims=True)
    scale = np.where(peak > 1.0, 1.0 / np.maximum(peak, 1.0), 1.0)
    return img * scale

def to_uint8(img):
    return np.round(255.0 * np.clip(img, 0, 1)).astype(np.uint8)
