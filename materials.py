import numpy as np
from utils import vec

class Material:

    def __init__(self, diffuse_color, albedo=(1., 0., 0., 0.), specular_exponent=0., refractive_index=1.0):
        """
        Create a new material with the given parameters.

        Parameters:
          diffuse_color : (3,) -- Diffuse color
          albedo : (2,), (3,) or (4,) -- Weights of the diffuse, specular, reflected
                   and refracted terms; missing trailing weights are zero
          specular_exponent : float -- Phong exponent (shininess)
          refractive_index : float -- Index of refraction (1.0 for air, 1.5 for glass)
        """
        albedo = np.array(albedo, dtype=np.float64).ravel()
        if not 2 <= albedo.size <= 4:
            raise ValueError(f"albedo needs 2 to 4 weights, got {albedo.size}")

        diffuse_color = np.array(diffuse_color, dtype=np.float64)
        if diffuse_color.shape != (3,):
            raise ValueError(f"diffuse_color needs 3 channels, got shape {diffuse_color.shape}")

        self.diffuse_color = diffuse_color
        self.albedo = np.concatenate([albedo, np.zeros(4 - albedo.size)])
        self.specular_exponent = float(specular_exponent)
        self.refractive_index = float(refractive_index)

    def __repr__(self):
        return (f"Material(diffuse_color={self.diffuse_color.tolist()}, albedo={self.albedo.tolist()}, "
                f"specular_exponent={self.specular_exponent}, refractive_index={self.refractive_index})")


# Neutral material carried by a miss
default_material = Material(vec([0, 0, 0]))

ivory = Material(vec([0.4, 0.4, 0.3]), (0.6, 0.3, 0.1, 0.0), 50.)
glass = Material(vec([0.6, 0.7, 0.8]), (0.0, 0.5, 0.1, 0.8), 125., refractive_index=1.5)
red_rubber = Material(vec([0.3, 0.1, 0.1]), (0.9, 0.1, 0.0, 0.0), 10.)
mirror = Material(vec([1.0, 1.0, 1.0]), (0.0, 10.0, 0.8, 0.0), 1425.)

PRESETS = {
    'ivory': ivory,
    'glass': glass,
    'red_rubber': red_rubber,
    'mirror': mirror,
}
