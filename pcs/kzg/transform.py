"""
평가 도메인 변환 (Evaluation Transform)
=======================================

크기 N(2의 거듭제곱)의 도메인 H = {1, ω, ..., ω^(N-1)} 위에서
계수 표현 ↔ 평가 표현을 변환한다.

- forward: 계수 → 평가값 (FFT)
- inverse: 평가값 → 계수 (IFFT), forward의 정확한 역변환
- inverse_group: G1 점 벡터에 대한 IFFT. SRS를 단항(monomial) 기저에서
  Lagrange 기저로 바꿀 때 사용하며, 스칼라 변환과 같은 단위근을 쓴다.

**병렬 분할**:
  워커가 k개(2의 거듭제곱으로 내림)이면 입력을 k개의 교차 부분열
  v[j::k]로 나누어 각각 ω^k로 변환한 뒤, radix-2 버터플라이 단계로
  합친다. 합치는 순서가 고정되어 있으므로 결과는 워커 수와 무관하다.

호출자는 짧은 벡터를 pad()로 명시적으로 0-패딩해야 한다 (n → 2n).
"""

import logging

from pcs.kzg.errors import LengthMismatch
from pcs.kzg.field import FR, ec_add, ec_mul, ec_sub, ensure_fr, get_root_of_unity, get_roots_of_unity
from pcs.kzg.parallel import flatten, parallel_chunks, parallel_map
from pcs.kzg.polynomial import butterfly, fft

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 버터플라이 / 그룹 FFT
# ─────────────────────────────────────────────────────────────────────

def _group_butterfly(even_vals, odd_vals, omega):
    half = len(even_vals)
    result = [None] * (2 * half)
    omega_k = FR(1)
    for k in range(half):
        t = ec_mul(odd_vals[k], omega_k)
        result[k] = ec_add(even_vals[k], t)
        result[k + half] = ec_sub(even_vals[k], t)
        omega_k = omega_k * omega
    return result


def group_fft(points, omega):
    """G1 점 벡터에 대한 radix-2 FFT. 스칼라 곱 대신 ec_mul을 쓴다."""
    n = len(points)
    if n == 1:
        return [points[0]]
    omega_sq = omega * omega
    even_vals = group_fft(points[0::2], omega_sq)
    odd_vals = group_fft(points[1::2], omega_sq)
    return _group_butterfly(even_vals, odd_vals, omega)


def _fft_task(args):
    values, omega = args
    return fft(values, omega)


def _group_fft_task(args):
    points, omega = args
    return group_fft(points, omega)


def _scale_points(points, scalar):
    return [ec_mul(p, scalar) for p in points]


def _split_factor(n, config):
    if config is None or not config.parallel:
        return 1
    k = 1
    while k * 2 <= min(config.workers, n):
        k *= 2
    return k


def _assemble(subs, start, stride, k, omega, merge):
    # v[start::stride]의 변환 = even(v[start::2·stride]) ⊕ odd(v[start+stride::2·stride])
    if stride == k:
        return subs[start]
    omega_sq = omega * omega
    even_vals = _assemble(subs, start, 2 * stride, k, omega_sq, merge)
    odd_vals = _assemble(subs, start + stride, 2 * stride, k, omega_sq, merge)
    return merge(even_vals, odd_vals, omega)


def _split_transform(values, omega, config, leaf, merge):
    k = _split_factor(len(values), config)
    if k == 1:
        return leaf((values, omega))
    omega_k = omega ** k
    subs = parallel_map(leaf, [(values[j::k], omega_k) for j in range(k)], config)
    return _assemble(subs, 0, 1, k, omega, merge)


# ─────────────────────────────────────────────────────────────────────
# EvaluationDomain
# ─────────────────────────────────────────────────────────────────────

class EvaluationDomain:
    """크기 N의 radix-2 평가 도메인.

    속성:
        size: N
        omega: N차 원시 단위근
        omega_inv: ω^{-1}
        size_inv: N^{-1}

    Raises:
        InvalidDomainSize: N이 2의 거듭제곱이 아닐 때 (생성 시)

    예시 (n=4, 도메인 8):
        >>> domain = EvaluationDomain(8)
        >>> evals = domain.forward(domain.pad([FR(1), FR(2), FR(3), FR(4)]))
        >>> domain.inverse(evals)  # [1, 2, 3, 4, 0, 0, 0, 0]
    """

    def __init__(self, size, config=None):
        self.omega = get_root_of_unity(size)
        self.size = size
        self.omega_inv = FR(1) / self.omega
        self.size_inv = FR(1) / FR(size)
        self.config = config

    def __repr__(self):
        return f"EvaluationDomain(size={self.size})"

    def _check_length(self, values):
        if len(values) != self.size:
            raise LengthMismatch(
                f"vector length {len(values)} does not match domain size {self.size}"
            )

    def elements(self):
        return get_roots_of_unity(self.size)

    def pad(self, values):
        """values를 도메인 크기까지 뒤쪽 0으로 채운다."""
        values = [ensure_fr(v) for v in values]
        if len(values) > self.size:
            raise LengthMismatch(
                f"cannot pad a vector of length {len(values)} into domain size {self.size}"
            )
        return values + [FR(0)] * (self.size - len(values))

    def forward(self, values):
        """계수 → 평가값."""
        self._check_length(values)
        values = [ensure_fr(v) for v in values]
        return _split_transform(values, self.omega, self.config, _fft_task, butterfly)

    def inverse(self, values):
        """평가값 → 계수."""
        self._check_length(values)
        values = [ensure_fr(v) for v in values]
        coeffs = _split_transform(values, self.omega_inv, self.config, _fft_task, butterfly)
        return [c * self.size_inv for c in coeffs]

    def inverse_group(self, points):
        """G1 점 벡터에 대한 IFFT.

        [τ^i·G]에 적용하면 [L_i(τ)·G]가 된다:
            L_i(τ) = (1/N) Σ_j ω^{-ij} τ^j
        """
        self._check_length(points)
        logger.debug("group IFFT over %d points", self.size)
        transformed = _split_transform(
            list(points), self.omega_inv, self.config, _group_fft_task, _group_butterfly
        )
        return flatten(parallel_chunks(_scale_points, transformed, self.config, (self.size_inv,)))
