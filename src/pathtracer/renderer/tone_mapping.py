# src/pathtracer/renderer/tone_mapping.py
import numpy as np

# Largest representable intensity before scaling to 8 bits, so 1.0 maps to 255.
MAX_INTENSITY = 0.999


def linear_to_gamma(linear):
    """
    Gamma 2 transform. Negative components map to 0.
    """
    return np.sqrt(np.maximum(linear, 0.0))


def to_rgb8(linear: np.ndarray) -> np.ndarray:
    """
    Converts a (h, w, 3) linear image to 8-bit sRGB-ish bytes.

    Gamma 2, clamp to [0, 0.999], then scale by 256 and truncate.
    """
    gamma = linear_to_gamma(np.asarray(linear, dtype=np.float64))
    clamped = np.clip(gamma, 0.0, MAX_INTENSITY)
    return (clamped * 256).astype(np.uint8)


def reinhard_tone_mapping(linear, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Apply Reinhard tone mapping to a linear radiance image.
    """
    scaled = np.maximum(np.asarray(linear, dtype=np.float64), 0.0) * exposure
    mapped = scaled / (1.0 + scaled / white_point)
    mapped = mapped ** (1.0 / gamma)
    return (mapped * 255).clip(0, 255).astype(np.uint8)


def auto_exposure_tone_mapping(linear, gamma=2.2, target_midgray=0.18):
    """
    Compute an exposure value based on the average scene luminance and then
    apply Reinhard tone mapping.
    """
    linear = np.asarray(linear, dtype=np.float64)
    luminance = 0.2126 * linear[:, :, 0] + 0.7152 * linear[:, :, 1] + 0.0722 * linear[:, :, 2]
    avg_lum = luminance.mean() + 1e-5  # avoid division by zero
    exposure = target_midgray / avg_lum
    return reinhard_tone_mapping(linear, exposure=exposure, white_point=1.0, gamma=gamma)


TONE_MAPPERS = {
    'gamma': to_rgb8,
    'reinhard': reinhard_tone_mapping,
    'auto': auto_exposure_tone_mapping,
}
