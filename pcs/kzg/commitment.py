"""
커밋먼트 (Committer)
====================

공개 평가 벡터 c, 위트니스 평가 벡터 f, Lagrange 기저 SRS로
커밋먼트 하나를 만든다:

    h_k = c_k · f_k                         (아다마르 곱)
    C   = Σ_k h_k · [L_k(τ)]₁ = h(τ) · G    (MSM)

h(x)는 도메인 위에서 값 h_k를 갖는 다항식이다. 따라서 같은 커밋먼트를
단항 기저로도 얻을 수 있다: C = Σ_i coeff_i · [τ^i]₁ (commit_polynomial).

블라인딩 항이 없으므로 바인딩(binding)이지만 하이딩(hiding)은 아니다.
같은 입력은 항상 같은 커밋먼트를 만든다.
"""

import logging

from pcs.kzg.errors import LengthMismatch
from pcs.kzg.field import ensure_fr
from pcs.kzg.msm import msm
from pcs.kzg.parallel import flatten, parallel_chunks

logger = logging.getLogger(__name__)


def _multiply_pairs(pairs):
    return [a * b for a, b in pairs]


def hadamard(a, b, config=None):
    """원소별 곱 [a_k · b_k]."""
    if len(a) != len(b):
        raise LengthMismatch(f"Hadamard product of vectors of length {len(a)} and {len(b)}")
    pairs = [(ensure_fr(x), ensure_fr(y)) for x, y in zip(a, b)]
    return flatten(parallel_chunks(_multiply_pairs, pairs, config))


def commit(public_eval, witness_eval, srs_lagrange, config=None):
    """C = Σ_k (public_eval[k] · witness_eval[k]) · srs_lagrange[k].

    Raises:
        LengthMismatch: 세 입력의 길이가 모두 같지 않을 때
    """
    if not len(public_eval) == len(witness_eval) == len(srs_lagrange):
        raise LengthMismatch(
            "commitment inputs must have equal length: "
            f"public={len(public_eval)}, witness={len(witness_eval)}, srs={len(srs_lagrange)}"
        )
    logger.debug("computing commitment over %d evaluations", len(srs_lagrange))
    h = hadamard(public_eval, witness_eval, config)
    return msm(h, srs_lagrange, config)


def commit_polynomial(poly, srs_monomial, config=None):
    """계수 형태 다항식의 KZG 커밋먼트: Σᵢ cᵢ · [τⁱ]₁ = p(τ)·G.

    Raises:
        LengthMismatch: 다항식 차수가 SRS 최대 차수를 넘을 때
    """
    if len(poly.coeffs) > len(srs_monomial):
        raise LengthMismatch(
            f"polynomial of degree {poly.degree} exceeds SRS max degree {len(srs_monomial) - 1}"
        )
    return msm(poly.coeffs, srs_monomial[:len(poly.coeffs)], config)
