"""
Structured Reference String (SRS)
=================================

신뢰 설정(trusted setup)을 수행하여 KZG 커밋먼트용 공개 파라미터를 만든다.

**SRS 구성** (도메인 크기 N = 2n):
  monomial_g1: [G, τ·G, τ²·G, ..., τ^(N-1)·G]     (단항 기저)
  lagrange_g1: [L_0(τ)·G, ..., L_(N-1)(τ)·G]        (Lagrange 기저)
  g2_powers:   [H, τ·H]                              (검증 키용)

  Lagrange 기저는 단항 기저 벡터에 그룹 IFFT를 적용해서 얻는다.
  위트니스 변환과 같은 단위근을 쓰므로 Committer와 Opener가 같은
  도메인을 공유한다.

**Toxic waste τ**:
  τ를 아는 사람은 임의의 거짓 열기 증명을 만들 수 있다.
  τ와 그 거듭제곱은 generate() 안에서만 존재하며, SRS 객체나 로그,
  직렬화 결과 어디에도 남지 않는다.

  seed를 주면 τ를 seed에서 결정론적으로 유도한다 (테스트/데모용).
  seed가 없으면 secrets.randbelow로 뽑는다.

사용 예시:
    >>> srs = SRS.generate(domain_size=8, seed=42)
    >>> len(srs.monomial_g1), len(srs.lagrange_g1)   # (8, 8)
    >>> vk = srs.verifying_key()
"""

import hashlib
import logging
import secrets
import time
from dataclasses import dataclass

from pcs.kzg.errors import EntropyError
from pcs.kzg.field import CURVE_ORDER, FR, G1, G2, ec_mul, validate_g1
from pcs.kzg.parallel import flatten, parallel_chunks
from pcs.kzg.transform import EvaluationDomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifyingKey:
    """검증 키: SRS에서 유도되는 공개 값만 담는다.

    속성:
        g1: G (= monomial_g1[0])
        g2: H
        tau_g2: τ·H
    """
    g1: tuple
    g2: tuple
    tau_g2: tuple


# ─────────────────────────────────────────────────────────────────────
# 난수 소스
# ─────────────────────────────────────────────────────────────────────

def _seeded_scalar(seed, label):
    h = hashlib.sha256(f"{label}:{seed}".encode()).digest()
    return int.from_bytes(h, "big") % CURVE_ORDER


def _random_scalar(entropy):
    try:
        value = entropy.randbelow(CURVE_ORDER)
    except Exception as exc:
        raise EntropyError(f"entropy source failed: {exc}") from exc
    if not isinstance(value, int) or not 0 <= value < CURVE_ORDER:
        raise EntropyError("entropy source returned a value outside the scalar field")
    return value


def _draw(seed, entropy, label):
    """0이 아닌 스칼라를 하나 뽑는다. 0이면 진행하지 않는다."""
    if seed is not None:
        value = _seeded_scalar(seed, label)
    else:
        value = _random_scalar(entropy)
    if value == 0:
        raise EntropyError(f"refusing to use a zero {label} scalar")
    return value


def sample_public_evaluations(size, seed=None, entropy=None):
    """공개 평가 벡터 c (길이 size)를 무작위로 생성한다."""
    entropy = entropy or secrets
    if seed is not None:
        return [FR(_seeded_scalar(seed, f"public-eval-{i}")) for i in range(size)]
    return [FR(_random_scalar(entropy)) for _ in range(size)]


def _scale_generator(scalars, point):
    return [ec_mul(point, s) for s in scalars]


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class SRS:
    """KZG 커밋먼트용 공개 파라미터.

    속성:
        monomial_g1: [τ^k·G] (k = 0..N-1)
        lagrange_g1: [L_k(τ)·G] (k = 0..N-1)
        g2_powers: [H, τ·H]
        domain_size: N
    """

    def __init__(self, monomial_g1, lagrange_g1, g2_powers, domain_size):
        self.monomial_g1 = monomial_g1
        self.lagrange_g1 = lagrange_g1
        self.g2_powers = g2_powers
        self.domain_size = domain_size

    def __repr__(self):
        return f"SRS(domain_size={self.domain_size})"

    @property
    def max_degree(self):
        return self.domain_size - 1

    def domain(self, config=None):
        return EvaluationDomain(self.domain_size, config)

    def verifying_key(self):
        return VerifyingKey(
            g1=self.monomial_g1[0],
            g2=self.g2_powers[0],
            tau_g2=self.g2_powers[1],
        )

    @classmethod
    def generate(cls, domain_size, seed=None, generator=None, entropy=None, config=None):
        """SRS를 생성한다.

        Args:
            domain_size: N = 2n (2의 거듭제곱)
            seed: 결정론적 생성을 위한 시드 (테스트/데모용)
            generator: 고정 G1 생성자. None이면 무작위 G를 뽑는다.
            entropy: randbelow()를 제공하는 난수 소스 (기본값 secrets 모듈)
            config: KZGConfig (병렬 실행 정책)

        Raises:
            InvalidDomainSize: N이 2의 거듭제곱이 아닐 때
            EntropyError: 난수 소스 실패 또는 0 스칼라
        """
        domain = EvaluationDomain(domain_size, config)
        entropy = entropy or secrets
        start = time.perf_counter()
        logger.info("starting setup for domain size %d", domain_size)

        if generator is None:
            g1 = ec_mul(G1, _draw(seed, entropy, "g1"))
        else:
            g1 = validate_g1(generator)
        g2 = ec_mul(G2, _draw(seed, entropy, "g2"))

        tau = FR(_draw(seed, entropy, "tau"))
        powers = []
        tau_power = FR(1)
        for _ in range(domain_size):
            powers.append(tau_power)
            tau_power = tau_power * tau

        logger.debug("computing SRS in monomial basis")
        monomial_g1 = flatten(parallel_chunks(_scale_generator, powers, config, (g1,)))
        tau_g2 = ec_mul(g2, tau)
        del tau, tau_power, powers

        logger.debug("converting SRS to Lagrange basis")
        lagrange_g1 = domain.inverse_group(monomial_g1)

        logger.info("setup completed in %.3fs", time.perf_counter() - start)
        return cls(monomial_g1, lagrange_g1, [g2, tau_g2], domain_size)
