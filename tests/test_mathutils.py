import math

import numpy as np
import pytest

from serikagl import mathutils as mu


NORMALS = [
    (0.0, 1.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0),
    tuple(np.array([1.0, 2.0, -3.0]) / np.linalg.norm([1.0, 2.0, -3.0])),
]


@pytest.mark.parametrize("normal", NORMALS)
def test_to_world_maps_z_axis_onto_normal(normal):
    assert np.allclose(mu.to_world((0.0, 0.0, 1.0), normal), normal)


@pytest.mark.parametrize("normal", NORMALS)
def test_to_world_builds_orthonormal_basis(normal):
    b = mu.to_world((1.0, 0.0, 0.0), normal)
    c = mu.to_world((0.0, 1.0, 0.0), normal)
    assert abs(np.dot(b, normal)) < 1e-9
    assert abs(np.dot(c, normal)) < 1e-9
    assert abs(np.dot(b, c)) < 1e-9
    assert np.linalg.norm(b) == pytest.approx(1.0)
    assert np.linalg.norm(c) == pytest.approx(1.0)


def test_uniform_hemisphere_sample_with_sobol_is_deterministic():
    normal = (0.0, 1.0, 0.0)
    wo1, pdf1 = mu.uniform_hemisphere_sample((0, 0, 0), normal, 0, 3)
    wo2, pdf2 = mu.uniform_hemisphere_sample((0, 0, 0), normal, 0, 3)
    assert np.allclose(wo1, wo2)
    assert pdf1 == pdf2
    assert np.linalg.norm(wo1) == pytest.approx(1.0)
    assert np.dot(wo1, normal) > 0
    assert pdf1 == pytest.approx(0.5 / math.pi)


@pytest.mark.parametrize("normal", NORMALS)
def test_uniform_hemisphere_sample_random_stays_in_hemisphere(normal):
    for _ in range(50):
        wo, pdf = mu.uniform_hemisphere_sample((0, 0, 0), normal)
        assert np.dot(wo, normal) >= -1e-12
        assert np.linalg.norm(wo) == pytest.approx(1.0)
        assert pdf in (0.0, pytest.approx(0.5 / math.pi))


def test_hemisphere_sample_by_volume_scales_near_origin():
    normal = (0.0, 0.0, 1.0)
    wo, pdf = mu.uniform_hemisphere_sample_by_volume((0, 0, 0), normal, True, 0, 3)
    length = np.linalg.norm(wo)
    assert 0.1 <= length <= 1.0
    assert length < 1.0
    assert pdf == pytest.approx(0.5 / math.pi)


def test_hemisphere_sample_by_volume_without_scaling_is_unit():
    normal = (0.0, 0.0, 1.0)
    wo, _ = mu.uniform_hemisphere_sample_by_volume((0, 0, 0), normal, False, 0, 7)
    assert np.linalg.norm(wo) == pytest.approx(1.0)


def test_random_float_within_bounds():
    for _ in range(200):
        value = mu.random_float(-2.0, 3.0)
        assert -2.0 <= value <= 3.0


def test_solve_quadratic_two_roots_ordered():
    roots = mu.solve_quadratic(1.0, -5.0, 6.0)
    small, great = roots
    assert small <= great
    for r in roots:
        assert 1.0 * r * r - 5.0 * r + 6.0 == pytest.approx(0.0, abs=1e-9)


def test_solve_quadratic_double_root():
    small, great = mu.solve_quadratic(1.0, 2.0, 1.0)
    assert small == great
    assert small * small + 2.0 * small + 1.0 == pytest.approx(0.0)


def test_solve_quadratic_no_real_roots():
    assert mu.solve_quadratic(1.0, 0.0, 1.0) is None


def test_reflect_is_involution_and_keeps_length():
    incident = np.array([0.3, -0.8, 0.2])
    normal = (0.0, 1.0, 0.0)
    reflected = mu.reflect(incident, normal)
    assert np.linalg.norm(reflected) == pytest.approx(np.linalg.norm(incident))
    assert np.allclose(mu.reflect(reflected, normal), incident)


def test_refract_with_unit_ior_passes_straight_through():
    incident = np.array([0.6, -0.8, 0.0])
    assert np.allclose(mu.refract(incident, (0.0, 1.0, 0.0), 1.0), incident)


def test_refract_total_internal_reflection_gives_zero_vector():
    incident = np.array([0.99, 0.1, 0.0])
    incident /= np.linalg.norm(incident)
    assert np.allclose(mu.refract(incident, (0.0, 1.0, 0.0), 1.5), np.zeros(3))


def test_fresnel_total_internal_reflection():
    incident = np.array([0.99, 0.1, 0.0])
    incident /= np.linalg.norm(incident)
    assert mu.fresnel(incident, (0.0, 1.0, 0.0), 1.5) == 1.0


def test_fresnel_matched_media_reflects_nothing():
    incident = np.array([0.6, -0.8, 0.0])
    assert mu.fresnel(incident, (0.0, 1.0, 0.0), 1.0) == pytest.approx(0.0)


def test_fresnel_in_unit_range():
    incident = np.array([0.6, -0.8, 0.0])
    kr = mu.fresnel(incident, (0.0, 1.0, 0.0), 1.5)
    assert 0.0 < kr < 1.0


def test_ggx_d_with_unit_roughness_is_independent_of_half_vector():
    normal = (0.0, 1.0, 0.0)
    h1 = mu.trowbridge_reitz_ggx_d(normal, (0.0, 1.0, 0.0), 1.0)
    h2 = mu.trowbridge_reitz_ggx_d(normal, (0.6, 0.8, 0.0), 1.0)
    assert h1 == pytest.approx(h2)
    assert h1 > 0


def test_schlick_ggx_full_visibility():
    assert mu.schlick_ggx(1.0, 0.3) == pytest.approx(1.0)


def test_schlick_ggx_smith_g_range():
    normal = (0.0, 1.0, 0.0)
    g = mu.schlick_ggx_smith_g(normal, (0.0, 1.0, 0.0), (0.6, 0.8, 0.0), 0.5)
    assert 0.0 < g <= 1.0
    aligned = mu.schlick_ggx_smith_g(normal, normal, normal, 0.5)
    assert aligned == pytest.approx(1.0)


def test_schlick_fresnel_endpoints():
    assert mu.schlick_fresnel_f(1.0, 0.04) == pytest.approx(0.04)
    assert mu.schlick_fresnel_f(0.0, 0.04) == pytest.approx(1.0)


@pytest.mark.parametrize("base", [2, 3, 5, 7])
def test_radical_inverse_variants_agree(base):
    for i in range(200):
        assert mu.integer_radical_inverse(base, i) == pytest.approx(
            mu.radical_inverse(base, i)
        )
        assert 0.0 <= mu.radical_inverse(base, i) < 1.0


def test_radical_inverse_rejects_bad_arguments():
    with pytest.raises(ValueError):
        mu.radical_inverse(1, 3)
    with pytest.raises(ValueError):
        mu.radical_inverse(2, -1)
    with pytest.raises(ValueError):
        mu.integer_radical_inverse(0, 3)


def test_sieve_of_eratosthenes_small():
    assert mu.sieve_of_eratosthenes(30) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    assert mu.sieve_of_eratosthenes(1) == []


def test_generate_coprimes_gives_first_primes():
    primes = mu.generate_coprimes(20)
    assert len(primes) >= 20
    assert primes[:20] == mu.sieve_of_eratosthenes(200)[:20]


def test_nth_prime_matches_sieve():
    reference = mu.sieve_of_eratosthenes(200)
    for n in range(1, 30):
        assert mu.nth_prime_number(n) == reference[n - 1]


def test_nth_prime_rejects_zero():
    with pytest.raises(ValueError):
        mu.nth_prime_number(0)


def test_halton_uses_prime_bases():
    for i in range(50):
        assert mu.halton(0, i) == mu.radical_inverse(2, i)
        assert mu.halton(2, i) == mu.radical_inverse(5, i)


def test_hammersley_first_dimension_is_fraction():
    for i in range(10):
        assert mu.hammersley(0, i, 10) == pytest.approx(i / 10)
        assert mu.hammersley(1, i, 10) == mu.radical_inverse(2, i)


def test_gray_code_neighbours_differ_by_one_bit():
    assert mu.gray_code(0) == 0
    for i in range(500):
        diff = mu.gray_code(i) ^ mu.gray_code(i + 1)
        assert bin(diff).count("1") == 1


def test_gray_code_is_bijective_on_range():
    codes = {mu.gray_code(i) for i in range(1024)}
    assert codes == set(range(1024))


@pytest.mark.parametrize("dimension", range(8))
def test_sobol_first_values(dimension):
    assert mu.sobol(dimension, 0) == 0.0
    assert mu.sobol(dimension, 1) == pytest.approx(2147483648 / 0xFFFFFFFF)
    for i in range(100):
        assert 0.0 <= mu.sobol(dimension, i) <= 1.0


def test_sobol_first_dimension_is_distinct_per_index():
    values = {mu.sobol(0, i) for i in range(256)}
    assert len(values) == 256


def test_sobol_rejects_unknown_dimension():
    with pytest.raises(IndexError):
        mu.sobol(8, 1)


def test_sobol_global_index_advances():
    first = mu.sobol_global_index(0)
    second = mu.sobol_global_index(0)
    index = next(k for k in range(1, 1 << 16) if mu.sobol(0, k) == first)
    assert second == mu.sobol(0, index + 1)