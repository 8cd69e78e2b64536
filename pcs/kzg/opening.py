"""
KZG 열기 증명 (Opening Proof)
=============================

"p(z) = y" 임을 증명한다.

  1. y = p(z)
  2. 몫 다항식 q(x) = (p(x) - y) / (x - z)
     p(z) = y이면 (x - z)가 p(x) - y를 나누므로 나머지는 0이다.
     나머지가 0이 아니면 주장한 y가 틀린 것이므로 InvalidOpening.
  3. 증명 π = q(τ)·G = Σ qᵢ·[τⁱ]₁ (단항 기저 SRS와 MSM)

검증 방정식 (페어링):
    e(C - y·G, H) == e(π, τ·H - z·H)

검증은 거짓 증명에 대해 False를 반환하며, 형식이 잘못된 입력
(FR이 아닌 스칼라, 곡선/부분군 밖의 점)에만 InvalidEncoding을 던진다.

사용 예시:
    >>> opening = open_polynomial(p, FR(7), srs.monomial_g1)
    >>> verify(commit_polynomial(p, srs.monomial_g1), opening, srs.verifying_key())
"""

import logging
from dataclasses import dataclass

from pcs.kzg.commitment import commit_polynomial
from pcs.kzg.errors import InvalidEncoding, InvalidOpening
from pcs.kzg.field import (
    FR, ec_mul, ec_pairing, ec_sub, ensure_fr, validate_g1, validate_g2,
)
from pcs.kzg.polynomial import Polynomial, poly_div
from pcs.kzg.srs import VerifyingKey
from pcs.kzg.transform import EvaluationDomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpeningProof:
    """열기 증명.

    속성:
        point: 평가 점 z
        evaluation: 주장하는 평가값 y = p(z)
        proof: 몫 다항식 커밋먼트 π = q(τ)·G (G1 점)
    """
    point: FR
    evaluation: FR
    proof: tuple


def quotient_polynomial(poly, point, evaluation):
    """q(x) = (p(x) - y) / (x - z).

    Raises:
        InvalidOpening: 나머지가 0이 아닐 때 (y ≠ p(z))
    """
    point = ensure_fr(point)
    evaluation = ensure_fr(evaluation)
    divisor = Polynomial([FR(0) - point, FR(1)])
    quotient, remainder = poly_div(poly - Polynomial([evaluation]), divisor)
    if not remainder.is_zero():
        raise InvalidOpening("claimed evaluation does not match p(z): non-zero remainder")
    return quotient


def open_polynomial(poly, point, srs_monomial, config=None):
    """계수 형태 다항식 p를 z에서 연다.

    Returns:
        OpeningProof
    """
    point = ensure_fr(point)
    evaluation = poly.evaluate(point)
    quotient = quotient_polynomial(poly, point, evaluation)
    proof = commit_polynomial(quotient, srs_monomial, config)
    return OpeningProof(point=point, evaluation=evaluation, proof=proof)


def open_evaluations(evals, point, srs_monomial, config=None):
    """평가 형태 벡터를 IFFT로 계수로 바꾼 뒤 z에서 연다."""
    logger.debug("creating opening proof from %d evaluations", len(evals))
    coeffs = EvaluationDomain(len(evals), config).inverse(evals)
    return open_polynomial(Polynomial(coeffs), point, srs_monomial, config)


def verify_opening(commitment, proof, point, evaluation, vk):
    """e(C - y·G, H) == e(π, τ·H - z·H)를 확인한다.

    Args:
        commitment: 커밋먼트 C (G1 점)
        proof: 열기 증명 π (G1 점)
        point: 평가 점 z
        evaluation: 주장하는 평가값 y
        vk: VerifyingKey

    Returns:
        bool: 페어링 등식 성립 여부

    Raises:
        InvalidEncoding: 입력 원소의 형식이 잘못되었을 때
    """
    if not isinstance(vk, VerifyingKey):
        raise InvalidEncoding("verification requires a VerifyingKey")
    validate_g1(commitment)
    validate_g1(proof)
    point = ensure_fr(point)
    evaluation = ensure_fr(evaluation)
    validate_g1(vk.g1)
    validate_g2(vk.g2)
    validate_g2(vk.tau_g2)

    c_minus_y = ec_sub(commitment, ec_mul(vk.g1, evaluation))
    tau_minus_z = ec_sub(vk.tau_g2, ec_mul(vk.g2, point))

    lhs = ec_pairing(vk.g2, c_minus_y)
    rhs = ec_pairing(tau_minus_z, proof)
    result = lhs == rhs
    logger.info("verification result: %s", result)
    return result


def verify(commitment, opening, vk):
    """OpeningProof 하나를 검증한다."""
    if not isinstance(opening, OpeningProof):
        raise InvalidEncoding("expected an OpeningProof")
    return verify_opening(commitment, opening.proof, opening.point, opening.evaluation, vk)
