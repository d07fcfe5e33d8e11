"""Unit tests for materials and textures.

Tests cover:
- Lambertian scattering distribution and attenuation
- Metal mirror reflection, fuzz clamping and absorption
- Dielectric refraction, total internal reflection and matched media
- Solid, checker, image and noise textures
"""

import math

import numpy as np
import pytest
from PIL import Image

from pathtracer.core.ray import Ray
from pathtracer.core.utils import make_rng
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.dielectric import Dielectric, reflectance
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.perlin import Perlin
from pathtracer.materials.texture_loader import create_image_material, load_texture
from pathtracer.materials.textures import (
    DEBUG_COLOR,
    CheckerTexture,
    ImageTexture,
    NoiseTexture,
    SolidColor,
)

UP = Vector3(0.0, 1.0, 0.0)


def make_record(ray, normal=UP, front_face=True, t=1.0):
    """Hit record whose surface has the given outward normal."""
    rec = HitRecord(p=ray.at(t), t=t, front_face=front_face)
    rec.normal = normal if front_face else -normal
    return rec


class TestLambertian:
    """Tests for diffuse scattering."""

    def test_always_scatters_with_albedo(self, rng):
        albedo = Color(0.2, 0.4, 0.6)
        ray = Ray(Point3(0, 1, 0), Vector3(0, -1, 0), time=0.25)
        attenuation, scattered = Lambertian(albedo).scatter(ray, make_record(ray), rng)
        assert attenuation == albedo
        assert scattered.time == 0.25

    def test_mean_direction_is_normal(self, rng):
        """Test that scattered directions average out to the normal."""
        ray = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        rec = make_record(ray)
        material = Lambertian(Color(0.5, 0.5, 0.5))
        total = Vector3(0, 0, 0)
        n = 4000
        for _ in range(n):
            _, scattered = material.scatter(ray, rec, rng)
            assert scattered.direction.dot(UP) >= 0
            total = total + scattered.direction
        mean = total / n
        assert mean.x == pytest.approx(0.0, abs=0.05)
        assert mean.y == pytest.approx(1.0, abs=0.05)
        assert mean.z == pytest.approx(0.0, abs=0.05)

    def test_textured_albedo(self, rng):
        """Test that a texture is sampled at the hit point."""
        checker = CheckerTexture(1.0, Color(1, 0, 0), Color(0, 0, 1))
        ray = Ray(Point3(0.5, 1, 0.5), Vector3(0, -1, 0))
        rec = make_record(ray, t=0.5)
        attenuation, _ = Lambertian(checker).scatter(ray, rec, rng)
        assert attenuation == Color(1, 0, 0)


class TestMetal:
    """Tests for metal reflection."""

    def test_mirror_reflection(self, rng):
        ray = Ray(Point3(-1, 1, 0), Vector3(1, -1, 0))
        attenuation, scattered = Metal(Color(0.8, 0.8, 0.8)).scatter(ray, make_record(ray), rng)
        inv_sqrt2 = 1.0 / math.sqrt(2.0)
        assert attenuation == Color(0.8, 0.8, 0.8)
        assert scattered.direction.x == pytest.approx(inv_sqrt2)
        assert scattered.direction.y == pytest.approx(inv_sqrt2)
        assert scattered.direction.z == pytest.approx(0.0)

    def test_fuzz_is_clamped(self):
        assert Metal(Color(1, 1, 1), 5.0).fuzz == 1.0
        assert Metal(Color(1, 1, 1), -1.0).fuzz == 0.0

    def test_absorbs_below_surface(self, rng):
        """Test that a reflection pointing into the surface is absorbed."""
        ray = Ray(Point3(0, -1, 0), Vector3(0, 1, 0))
        assert Metal(Color(1, 1, 1)).scatter(ray, make_record(ray), rng) is None

    def test_fuzzy_reflection_stays_above(self, rng):
        """Test that any returned fuzzy reflection leaves the surface."""
        ray = Ray(Point3(-1, 1, 0), Vector3(1, -1, 0))
        material = Metal(Color(1, 1, 1), 0.5)
        for _ in range(200):
            result = material.scatter(ray, make_record(ray), rng)
            if result is not None:
                assert result[1].direction.dot(UP) > 0


class TestDielectric:
    """Tests for refractive materials."""

    def test_attenuation_is_white(self, rng):
        ray = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        attenuation, _ = Dielectric(1.5).scatter(ray, make_record(ray), rng)
        assert attenuation == Color(1.0, 1.0, 1.0)

    @pytest.mark.parametrize("front_face", [True, False])
    def test_matched_index_passes_straight(self, rng, front_face):
        """Test that index 1.0 never bends or reflects the ray."""
        direction = Vector3(1, -2, 0.5)
        ray = Ray(Point3(0, 1, 0), direction)
        material = Dielectric(1.0)
        expected = direction.normalize()
        for _ in range(50):
            rec = make_record(ray, normal=UP if front_face else -UP, front_face=front_face)
            _, scattered = material.scatter(ray, rec, rng)
            assert scattered.direction.x == pytest.approx(expected.x)
            assert scattered.direction.y == pytest.approx(expected.y)
            assert scattered.direction.z == pytest.approx(expected.z)

    def test_total_internal_reflection(self, rng):
        """Test that a grazing ray leaving glass is always reflected."""
        ray = Ray(Point3(0, 0, 0), Vector3(1, -0.1, 0))
        # Back face: the ray is inside the glass heading out.
        rec = make_record(ray, normal=-UP, front_face=False)
        for _ in range(20):
            _, scattered = Dielectric(1.5).scatter(ray, rec, rng)
            assert scattered.direction.y > 0

    def test_reflectance_bounds(self):
        assert reflectance(1.0, 1.5) == pytest.approx(0.04)
        assert reflectance(0.0, 1.5) == pytest.approx(1.0)
        assert reflectance(0.3, 1.0) == 0.0


class TestTextures:
    """Tests for texture lookups."""

    def test_solid_color(self):
        assert SolidColor(Color(0.1, 0.2, 0.3)).value(0, 0, Point3(5, 5, 5)) == Color(0.1, 0.2, 0.3)

    def test_checker_alternates(self):
        checker = CheckerTexture(1.0, Color(1, 1, 1), Color(0, 0, 0))
        assert checker.value(0, 0, Point3(0.5, 0.5, 0.5)) == Color(1, 1, 1)
        assert checker.value(0, 0, Point3(1.5, 0.5, 0.5)) == Color(0, 0, 0)
        assert checker.value(0, 0, Point3(1.5, 1.5, 0.5)) == Color(1, 1, 1)

    def test_missing_image_gives_debug_color(self, tmp_path):
        texture = ImageTexture(str(tmp_path / "missing.png"))
        assert texture.data is None
        assert texture.value(0.5, 0.5, Point3(0, 0, 0)) == DEBUG_COLOR

    def test_image_lookup(self, tmp_path):
        """Test that v=1 is the top row of the image."""
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[0, 0] = (255, 0, 0)    # top left
        pixels[1, 1] = (0, 0, 255)    # bottom right
        path = tmp_path / "tex.png"
        Image.fromarray(pixels, "RGB").save(path)

        texture = ImageTexture(str(path))
        assert texture.value(0.0, 1.0, Point3(0, 0, 0)) == Color(1.0, 0.0, 0.0)
        assert texture.value(1.0, 0.0, Point3(0, 0, 0)) == Color(0.0, 0.0, 1.0)

    def test_oversized_image_gives_debug_color(self, tmp_path, monkeypatch):
        """Test that an image Pillow refuses as too large falls back too."""
        def refuse(*args, **kwargs):
            raise Image.DecompressionBombError("too many pixels")

        monkeypatch.setattr(Image, "open", refuse)
        texture = ImageTexture(str(tmp_path / "huge.png"))
        assert texture.data is None
        assert texture.value(0.5, 0.5, Point3(0, 0, 0)) == DEBUG_COLOR

    def test_load_texture_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_texture(str(tmp_path / "missing.png"))

    def test_create_image_material(self, tmp_path):
        path = tmp_path / "tex.png"
        Image.new("RGB", (4, 4), (0, 255, 0)).save(path)
        material = create_image_material(str(path), Metal, fuzz=0.2)
        assert isinstance(material, Metal)
        assert material.fuzz == 0.2

    def test_noise_texture_range(self, rng):
        texture = NoiseTexture(4.0, rng)
        for _ in range(50):
            c = texture.value(0, 0, Point3(*rng.uniform(-5, 5, 3)))
            assert 0.0 <= c.x <= 1.0
            assert c.x == c.y == c.z


class TestPerlin:
    """Tests for gradient noise."""

    def test_zero_on_lattice(self, rng):
        noise = Perlin(rng)
        assert noise.noise(Point3(3.0, -2.0, 7.0)) == pytest.approx(0.0, abs=1e-12)

    def test_repeatable_with_seed(self):
        p = Point3(0.3, 1.7, -2.2)
        assert Perlin(make_rng(5)).noise(p) == Perlin(make_rng(5)).noise(p)

    def test_turbulence_is_non_negative(self, rng):
        noise = Perlin(rng)
        for _ in range(20):
            assert noise.turb(Point3(*rng.uniform(-3, 3, 3))) >= 0.0
