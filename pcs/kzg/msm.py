"""
다중 스칼라 곱셈 (Multi-Scalar Multiplication)
==============================================

    MSM(s, P) = Σᵢ sᵢ · Pᵢ

커밋먼트 계산의 주된 비용이다. 각 구간은 Pippenger 버킷 방식으로
부분합을 구하고, 구간 부분합을 왼쪽부터 더한다. 그룹 덧셈은 정확한
연산이므로 워커 수와 무관하게 같은 점이 나온다.
"""

from py_ecc import bn128

from pcs.kzg.errors import LengthMismatch
from pcs.kzg.field import CURVE_ORDER, ec_add, ec_mul, ensure_fr
from pcs.kzg.parallel import parallel_chunks

SCALAR_BITS = CURVE_ORDER.bit_length()


def _window_bits(count):
    return max(1, min(16, count.bit_length() - 1))


def pippenger(pairs):
    """[(정수 스칼라, 점)] 구간의 MSM. 빈 구간은 항등원(None)."""
    if not pairs:
        return None
    c = _window_bits(len(pairs))
    mask = (1 << c) - 1
    num_windows = (SCALAR_BITS + c - 1) // c

    result = None
    for w in reversed(range(num_windows)):
        if result is not None:
            for _ in range(c):
                result = bn128.double(result)
        buckets = [None] * (1 << c)
        shift = w * c
        for scalar, point in pairs:
            idx = (scalar >> shift) & mask
            if idx:
                buckets[idx] = ec_add(buckets[idx], point)
        # Σ idx·bucket[idx] = 누적합들의 합
        running = None
        window_sum = None
        for bucket in reversed(buckets[1:]):
            running = ec_add(running, bucket)
            window_sum = ec_add(window_sum, running)
        result = ec_add(result, window_sum)
    return result


def naive_msm(scalars, points):
    """Σ sᵢ·Pᵢ를 스칼라 곱 하나씩 더해 계산한다."""
    result = None
    for s, p in zip(scalars, points):
        result = ec_add(result, ec_mul(p, s))
    return result


def msm(scalars, points, config=None):
    """Σ scalars[i] · points[i].

    Raises:
        LengthMismatch: 두 벡터의 길이가 다를 때
    """
    if len(scalars) != len(points):
        raise LengthMismatch(
            f"MSM needs one scalar per point: {len(scalars)} scalars, {len(points)} points"
        )
    pairs = []
    for s, p in zip(scalars, points):
        s = int(ensure_fr(s)) % CURVE_ORDER
        if s and p is not None:
            pairs.append((s, p))

    result = None
    for partial in parallel_chunks(pippenger, pairs, config):
        result = ec_add(result, partial)
    return result
