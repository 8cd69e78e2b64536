"""
Prover — 커밋먼트 라운드 오케스트레이터
=======================================

한 라운드의 흐름:

  ┌──────────────────────────────────────────────────────────┐
  │  UNINITIALIZED                                           │
  │    │  load_srs(srs, c)        SRS와 공개 평가 벡터 c     │
  │    ▼                                                     │
  │  SRS_READY                                               │
  │    │  load_witness(x)         f_i = Hash(x_i), i < n     │
  │    ▼                                                     │
  │  WITNESS_READY                                           │
  │    │  commit()                f → 2n 패딩 → FFT          │
  │    │                          C = MSM(c ∘ f, [L]₁)       │
  │    ▼                                                     │
  │  COMMITTED                                               │
  │    │  open(z)                 π = [(h(x)-h(z))/(x-z)]₁   │
  │    ▼                                                     │
  │  OPENED  (open(z)는 여러 번 호출 가능)                   │
  └──────────────────────────────────────────────────────────┘

전이는 한 방향이다. 새 입력으로 load_witness()를 다시 호출하면
같은 SRS 위에서 독립적인 새 라운드가 시작된다. SRS는 읽기 전용이므로
여러 Prover가 동시에 공유해도 된다.

사용 예시:
    >>> srs = SRS.generate(domain_size=8, seed=1)
    >>> prover = Prover(srs, sample_public_evaluations(8, seed=1))
    >>> commitment, opening = prover.prove(inputs, point=FR(7))
"""

import enum
import logging
import secrets
import time

from pcs.kzg.commitment import commit, hadamard
from pcs.kzg.config import DEFAULT_CONFIG
from pcs.kzg.errors import LengthMismatch, ProverStateError
from pcs.kzg.field import CURVE_ORDER, FR, ensure_fr
from pcs.kzg.opening import open_evaluations
from pcs.kzg.witness import generate_witness, random_inputs

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    UNINITIALIZED = "uninitialized"
    SRS_READY = "srs_ready"
    WITNESS_READY = "witness_ready"
    COMMITTED = "committed"
    OPENED = "opened"


class Prover:
    """위트니스 생성 → 해싱 → 변환 → 커밋 → (선택) 열기.

    속성:
        stage: 현재 상태 (Stage)
        srs: 공유 SRS
        public_evals: 공개 평가 벡터 c (길이 2n)
        witness: f (길이 n)
        witness_evals: 2n 도메인 위의 f 평가값
        commitment: 마지막 커밋먼트
        openings: 현재 라운드의 열기 증명 목록
    """

    def __init__(self, srs=None, public_evals=None, config=None):
        self.config = config or DEFAULT_CONFIG
        self.stage = Stage.UNINITIALIZED
        self.srs = None
        self.domain = None
        self.public_evals = None
        self._reset_round()
        if srs is not None:
            self.load_srs(srs, public_evals)

    def _reset_round(self):
        self.witness = None
        self.witness_evals = None
        self.commitment = None
        self.openings = []

    def _require(self, *stages):
        if self.stage not in stages:
            allowed = ", ".join(s.name for s in stages)
            raise ProverStateError(f"prover is {self.stage.name}; expected one of: {allowed}")

    @classmethod
    def from_public_coefficients(cls, srs, public_coeffs, config=None):
        """공개 계수 벡터(길이 ≤ 2n)를 0-패딩하고 FFT해서 c를 만든다."""
        domain = srs.domain(config)
        return cls(srs, domain.forward(domain.pad(public_coeffs)), config)

    @property
    def n(self):
        return self.srs.domain_size // 2

    def load_srs(self, srs, public_evals):
        self._require(Stage.UNINITIALIZED)
        if public_evals is None or len(public_evals) != srs.domain_size:
            got = None if public_evals is None else len(public_evals)
            raise LengthMismatch(
                f"public evaluation vector must have length {srs.domain_size}, got {got}"
            )
        self.srs = srs
        self.domain = srs.domain(self.config)
        self.public_evals = [ensure_fr(c) for c in public_evals]
        self.stage = Stage.SRS_READY

    def load_witness(self, inputs):
        """입력 x_0..x_{n-1}을 해싱해 위트니스를 만든다. 새 라운드를 시작한다."""
        self._require(Stage.SRS_READY, Stage.WITNESS_READY, Stage.COMMITTED, Stage.OPENED)
        if len(inputs) != self.n:
            raise LengthMismatch(f"expected {self.n} witness inputs, got {len(inputs)}")
        self._reset_round()
        self.witness = generate_witness(inputs, self.config)
        self.stage = Stage.WITNESS_READY
        return self.witness

    def commit(self):
        self._require(Stage.WITNESS_READY)
        start = time.perf_counter()
        logger.debug("computing FFT over domain of size %d", self.domain.size)
        self.witness_evals = self.domain.forward(self.domain.pad(self.witness))
        self.commitment = commit(
            self.public_evals, self.witness_evals, self.srs.lagrange_g1, self.config
        )
        self.stage = Stage.COMMITTED
        logger.info("commitment computed in %.3fs", time.perf_counter() - start)
        return self.commitment

    def product_evals(self):
        """h = c ∘ f: 커밋된 다항식의 도메인 평가값."""
        self._require(Stage.COMMITTED, Stage.OPENED)
        return hadamard(self.public_evals, self.witness_evals, self.config)

    def open(self, point=None):
        """커밋된 다항식 h를 point에서 연다 (None이면 무작위 점)."""
        self._require(Stage.COMMITTED, Stage.OPENED)
        if point is None:
            point = FR(secrets.randbelow(CURVE_ORDER))
        opening = open_evaluations(self.product_evals(), point, self.srs.monomial_g1, self.config)
        self.openings.append(opening)
        self.stage = Stage.OPENED
        return opening

    def prove(self, inputs=None, point=None):
        """한 라운드 전체를 실행한다.

        Args:
            inputs: n개의 입력 (None이면 무작위)
            point: 열기 점. None이면 열기 없이 커밋먼트만 반환한다.

        Returns:
            커밋먼트, 또는 (커밋먼트, OpeningProof)
        """
        if self.stage is Stage.UNINITIALIZED:
            raise ProverStateError("prover has no SRS; call load_srs() first")
        if inputs is None:
            inputs = random_inputs(self.n)
        self.load_witness(inputs)
        commitment = self.commit()
        if point is None:
            return commitment
        return commitment, self.open(point)
