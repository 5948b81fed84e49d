"""Sampling, shading and low-discrepancy sequence helpers."""

from __future__ import annotations

import itertools
import math
import random
from typing import Optional, Sequence, Tuple

import numpy as np

_UINT32_MASK = 0xFFFFFFFF

# Direction numbers of the Sobol generator, one row per dimension.
_SOBOL_MATRIX: Tuple[Tuple[int, ...], ...] = (
    tuple(1 << (31 - k) for k in range(32)),
    (
        2147483648, 3221225472, 2684354560, 4026531840, 2281701376, 3422552064,
        2852126720, 4278190080, 2155872256, 3233808384, 2694840320, 4042260480,
        2290614272, 3435921408, 2863267840, 4294901760, 2147516416, 3221274624,
        2684395520, 4026593280, 2281736192, 3422604288, 2852170240, 4278255360,
        2155905152, 3233857728, 2694881440, 4042322160, 2290649224, 3435973836,
        2863311530, 4294967295,
    ),
    (
        2147483648, 3221225472, 1610612736, 2415919104, 3892314112, 1543503872,
        2382364672, 3305111552, 1753219072, 2629828608, 3999268864, 1435500544,
        2154299392, 3231449088, 1626210304, 2421489664, 3900735488, 1556135936,
        2388680704, 3314585600, 1751705600, 2627492864, 4008611328, 1431684352,
        2147543168, 3221249216, 1610649184, 2415969680, 3892340840, 1543543964,
        2382425838, 3305133397,
    ),
    (
        2147483648, 3221225472, 536870912, 1342177280, 4160749568, 1946157056,
        2717908992, 2466250752, 3632267264, 624951296, 1507852288, 3872391168,
        2013790208, 3020685312, 2181169152, 3271884800, 546275328, 1363623936,
        4226424832, 1977167872, 2693105664, 2437829632, 3689389568, 635137280,
        1484783744, 3846176960, 2044723232, 3067084880, 2148008184, 3222012020,
        537002146, 1342505107,
    ),
    (
        2147483648, 1073741824, 536870912, 2952790016, 4160749568, 3690987520,
        2046820352, 2634022912, 1518338048, 801112064, 2707423232, 4038066176,
        3666345984, 1875116032, 2170683392, 1085997056, 579305472, 3016343552,
        4217741312, 3719483392, 2013407232, 2617981952, 1510979072, 755882752,
        2726789248, 4090085440, 3680870432, 1840435376, 2147625208, 1074478300,
        537900666, 2953698205,
    ),
    (
        2147483648, 1073741824, 1610612736, 805306368, 2818572288, 335544320,
        2113929216, 3472883712, 2290089984, 3829399552, 3059744768, 1127219200,
        3089629184, 4199809024, 3567124480, 1891565568, 394297344, 3988799488,
        920674304, 4193267712, 2950604800, 3977188352, 3250028032, 129093376,
        2231568512, 2963678272, 4281226848, 432124720, 803643432, 1633613396,
        2672665246, 3170194367,
    ),
    (
        2147483648, 3221225472, 2684354560, 3489660928, 1476395008, 2483027968,
        1040187392, 3808428032, 3196059648, 599785472, 505413632, 4077912064,
        1182269440, 1736704000, 2017853440, 2221342720, 3329785856, 2810494976,
        3628507136, 1416089600, 2658719744, 864310272, 3863387648, 3076993792,
        553150080, 272922560, 4167467040, 1148698640, 1719673080, 2009075780,
        2149644390, 3222291575,
    ),
    (
        2147483648, 1073741824, 2684354560, 1342177280, 2281701376, 1946157056,
        436207616, 2566914048, 2625634304, 3208642560, 2720006144, 2098200576,
        111673344, 2354315264, 3464626176, 4027383808, 2886631424, 3770826752,
        1691164672, 3357462528, 1993345024, 3752330240, 873073152, 2870150400,
        1700563072, 87021376, 1097028000, 1222351248, 1560027592, 2977959924,
        23268898, 437609937,
    ),
)

_rng = random.Random()
_coprimes: list[int] = []
_global_sobol_counter = itertools.count(1)


def _vec(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float)


def to_world(local: Sequence[float], normal: Sequence[float]) -> np.ndarray:
    """Map a vector from the tangent frame around ``normal`` into world space.

    The tangent basis is chosen arbitrarily around the normal, which is fine
    for sampling but does not preserve a particular rotation.
    """
    n = _vec(normal)
    loc = _vec(local)
    if abs(n[0]) > abs(n[1]):
        inv_len = 1.0 / math.sqrt(n[0] * n[0] + n[2] * n[2])
        c = np.array([n[2] * inv_len, 0.0, -n[0] * inv_len])
    else:
        inv_len = 1.0 / math.sqrt(n[1] * n[1] + n[2] * n[2])
        c = np.array([0.0, n[2] * inv_len, -n[1] * inv_len])
    b = np.cross(c, n)
    return loc[0] * b + loc[1] * c + loc[2] * n


def _sample_values(depth: int, sobol_index: int, count: int) -> list[float]:
    if sobol_index <= -1:
        return [random_float() for _ in range(count)]
    return [sobol(depth * count + k, sobol_index) for k in range(count)]


def _hemisphere_direction(x1: float, x2: float, normal: np.ndarray) -> np.ndarray:
    z = abs(1.0 - 2.0 * x1)
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * x2
    return to_world((r * math.cos(phi), r * math.sin(phi), z), normal)


def _hemisphere_pdf(wo: np.ndarray, normal: np.ndarray) -> float:
    return 0.5 / math.pi if float(np.dot(wo, normal)) > 0.0 else 0.0


def uniform_hemisphere_sample(
    wi: Sequence[float],
    normal: Sequence[float],
    depth: int = 0,
    sobol_index: int = -1,
) -> Tuple[np.ndarray, float]:
    """Sample a direction uniformly on the hemisphere around ``normal``.

    A negative ``sobol_index`` uses random numbers, otherwise the Sobol
    sequence at dimensions ``2*depth`` and ``2*depth+1``. Returns ``(wo, pdf)``.
    """
    n = _vec(normal)
    x1, x2 = _sample_values(depth, sobol_index, 2)
    wo = _hemisphere_direction(x1, x2, n)
    return wo, _hemisphere_pdf(wo, n)


def uniform_hemisphere_sample_by_volume(
    wi: Sequence[float],
    normal: Sequence[float],
    near_origin: bool = False,
    depth: int = 0,
    sobol_index: int = -1,
) -> Tuple[np.ndarray, float]:
    """Sample a hemisphere direction, optionally scaled to fill its volume.

    With ``near_origin`` the direction is scaled by a factor in [0.1, 1]
    that favours points close to the origin. Returns ``(wo, pdf)``.
    """
    n = _vec(normal)
    x1, x2, x3 = _sample_values(depth, sobol_index, 3)
    wo = _hemisphere_direction(x1, x2, n)
    if near_origin:
        wo = wo * (0.1 + (1.0 - 0.1) * x3 * x3)
    return wo, _hemisphere_pdf(wo, n)


def random_float(lower: float = 0.0, upper: float = 1.0) -> float:
    """Return a uniformly distributed float in ``[lower, upper)``."""
    return lower + (upper - lower) * _rng.random()


def solve_quadratic(a: float, b: float, c: float) -> Optional[Tuple[float, float]]:
    """Solve ``a*x^2 + b*x + c = 0``; return the roots in ascending order, or None."""
    discr = b * b - 4.0 * a * c
    if discr < 0:
        return None
    if discr == 0:
        root = -0.5 * b / a
        return root, root
    q = -0.5 * (b + math.sqrt(discr)) if b > 0 else -0.5 * (b - math.sqrt(discr))
    x0, x1 = q / a, c / q
    return (x1, x0) if x0 > x1 else (x0, x1)


def reflect(incident: Sequence[float], normal: Sequence[float]) -> np.ndarray:
    """Reflect ``incident`` about ``normal``."""
    i, n = _vec(incident), _vec(normal)
    return i - 2.0 * float(np.dot(i, n)) * n


def refract(incident: Sequence[float], normal: Sequence[float], ior: float) -> np.ndarray:
    """Refract ``incident`` through a surface; zero vector on total internal reflection."""
    i, n = _vec(incident), _vec(normal)
    cosi = min(max(float(np.dot(i, n)), -1.0), 1.0)
    etai, etat = 1.0, ior
    if cosi < 0:
        cosi = -cosi
    else:
        etai, etat = etat, etai
        n = -n
    eta = etai / etat
    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    if k < 0:
        return np.zeros(3)
    return eta * i + (eta * cosi - math.sqrt(k)) * n


def fresnel(incident: Sequence[float], normal: Sequence[float], ior: float) -> float:
    """Return the reflected fraction of light at a dielectric surface."""
    i, n = _vec(incident), _vec(normal)
    cosi = min(max(float(np.dot(i, n)), -1.0), 1.0)
    etai, etat = 1.0, ior
    if cosi > 0:
        etai, etat = etat, etai
    sint = etai / etat * math.sqrt(max(0.0, 1.0 - cosi * cosi))
    if sint >= 1:
        return 1.0
    cost = math.sqrt(max(0.0, 1.0 - sint * sint))
    cosi = abs(cosi)
    rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
    rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
    return (rs * rs + rp * rp) / 2.0


def trowbridge_reitz_ggx_d(
    normal: Sequence[float], half_vector: Sequence[float], a: float
) -> float:
    """GGX normal distribution term."""
    a2 = a * a
    n_dot_h = max(float(np.dot(_vec(normal), _vec(half_vector))), 0.0)
    denom = n_dot_h * n_dot_h * (a2 - 1.0) + 1.0
    denom = math.pi * denom * denom
    return a2 / max(denom, 0.00001)


def schlick_ggx(n_dot_v: float, k: float) -> float:
    """Schlick-GGX geometry term for one direction."""
    denom = n_dot_v * (1.0 - k) + k
    return n_dot_v / max(denom, 0.00001)


def schlick_ggx_smith_g(
    normal: Sequence[float], view: Sequence[float], light: Sequence[float], k: float
) -> float:
    """Smith geometry term built from two Schlick-GGX terms."""
    k = (k + 1.0) ** 2 / 8.0
    n = _vec(normal)
    n_dot_v = max(float(np.dot(n, _vec(view))), 0.0)
    n_dot_l = max(float(np.dot(n, _vec(light))), 0.0)
    return schlick_ggx(n_dot_v, k) * schlick_ggx(n_dot_l, k)


def schlick_fresnel_f(cos_theta: float, f0: float) -> float:
    """Schlick's approximation of the Fresnel term."""
    return f0 + (1.0 - f0) * (1.0 - cos_theta) ** 5


def _check_base(base: int) -> None:
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")


def integer_radical_inverse(base: int, i: int) -> float:
    """Radical inverse of ``i`` computed with integer digit reversal."""
    _check_base(base)
    num_points = 1
    inverse = 0
    while i > 0:
        inverse = inverse * base + i % base
        num_points *= base
        i //= base
    return inverse / num_points


def radical_inverse(base: int, i: int) -> float:
    """Mirror the digits of ``i`` in ``base`` around the radix point."""
    _check_base(base)
    if i < 0:
        raise ValueError(f"index must be non-negative, got {i}")
    digit = radical = 1.0 / base
    inverse = 0.0
    while i:
        inverse += digit * (i % base)
        digit *= radical
        i //= base
    return inverse


def sieve_of_eratosthenes(limit: int) -> list[int]:
    """Return all primes not greater than ``limit``."""
    if limit < 2:
        return []
    is_prime = [True] * (limit + 1)
    p = 2
    while p * p <= limit:
        if is_prime[p]:
            is_prime[p * p :: p] = [False] * len(range(p * p, limit + 1, p))
        p += 1
    return [p for p in range(2, limit + 1) if is_prime[p]]


def generate_coprimes(n: int) -> list[int]:
    """Return at least the first ``n`` primes, cached between calls."""
    if n > len(_coprimes):
        _coprimes[:] = sieve_of_eratosthenes(10 * n)[:n]
    return list(_coprimes)


def nth_prime_number(n: int) -> int:
    """Return the ``n``-th prime, counting from 1."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    primes = generate_coprimes(n)
    if n > len(primes):
        raise ValueError(f"could not find prime number {n}")
    return primes[n - 1]


def halton(dimension: int, index: int) -> float:
    """Halton sequence value for ``dimension`` at ``index``."""
    return radical_inverse(nth_prime_number(dimension + 1), index)


def hammersley(dimension: int, index: int, num_samples: int) -> float:
    """Hammersley set value; the first dimension is ``index / num_samples``."""
    if dimension == 0:
        return index / num_samples
    return radical_inverse(nth_prime_number(dimension), index)


def gray_code(i: int) -> int:
    """Return the 32-bit Gray code of ``i``."""
    i &= _UINT32_MASK
    return i ^ (i >> 1)


def sobol(dimension: int, i: int) -> float:
    """Sobol sequence value in [0, 1] for ``dimension`` (0-7) at index ``i``."""
    if not 0 <= dimension < len(_SOBOL_MATRIX):
        raise IndexError(f"Sobol dimension out of range: {dimension}")
    i &= _UINT32_MASK
    result = 0
    for direction in _SOBOL_MATRIX[dimension]:
        if not i:
            break
        if i & 1:
            result ^= direction
        i >>= 1
    return result / _UINT32_MASK


def sobol_global_index(dimension: int) -> float:
    """Sobol value at the next index of a process-wide counter starting at 1."""
    return sobol(dimension, next(_global_sobol_counter))