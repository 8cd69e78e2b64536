"""
KZG 커밋먼트 E2E 데모
=====================

실행:
    python -m pcs.kzg.example [--log-n 3] [--workers 4] [--seed 7]

흐름:
    1. SRS 생성 (trusted setup) + 공개 평가 벡터 c
    2. 위트니스 생성 → 해싱 → FFT → 아다마르 곱 → MSM 커밋
    3. 열기 증명 생성 및 검증
    4. 조작된 증명 검증 (실패해야 함)
    5. 시간 요약
"""

import argparse
import dataclasses
import logging
import time

from kzg_serializers import fr_short, g1_short
from pcs.kzg.config import KZGConfig
from pcs.kzg.field import FR
from pcs.kzg.prover import Prover
from pcs.kzg.srs import SRS, sample_public_evaluations
from pcs.kzg.verifier import Verifier


def run(config, seed=None, openings=3):
    print("=" * 60)
    print("  KZG Hadamard Commitment Demo (bn128)")
    print(f"  n = 2^{config.log_n} = {config.n}, domain 2n = {config.two_n}")
    print(f"  workers = {config.workers} ({config.executor})")
    print("=" * 60)

    # ── 1. Setup ──
    print("\n[1] SRS 생성 (trusted setup)...")
    t0 = time.perf_counter()
    srs = SRS.generate(config.two_n, seed=seed, config=config)
    public_evals = sample_public_evaluations(config.two_n, seed=seed)
    setup_time = time.perf_counter() - t0
    print(f"    SRS 원소 수: {len(srs.monomial_g1)} (monomial), {len(srs.lagrange_g1)} (Lagrange)")

    # ── 2. Prove ──
    print("\n[2] 커밋먼트 생성...")
    prover = Prover(srs, public_evals, config)
    t0 = time.perf_counter()
    commitment = prover.prove()
    prove_time = time.perf_counter() - t0
    print(f"    커밋먼트: {g1_short(commitment)}")

    # ── 3. Open + verify ──
    verifier = Verifier.from_srs(srs)
    verify_time = 0.0
    for i in range(1, openings + 1):
        opening = prover.open()
        t0 = time.perf_counter()
        ok = verifier.verify(commitment, opening)
        verify_time += time.perf_counter() - t0
        print(f"\n[3.{i}] 열기 증명")
        print(f"    z = {fr_short(opening.point)}")
        print(f"    y = {fr_short(opening.evaluation)}")
        print(f"    검증 결과: {'성공 ✓' if ok else '실패 ✗'}")

    # ── 4. Tampered ──
    print("\n[4] 조작된 증명 검증...")
    opening = prover.open()
    tampered = dataclasses.replace(opening, evaluation=opening.evaluation + FR(1))
    ok = verifier.verify(commitment, tampered)
    print(f"    검증 결과: {'성공 ✗ (보안 문제!)' if ok else '실패 ✓ (공격 탐지)'}")

    # ── 5. Summary ──
    print("\n" + "-" * 60)
    print(f"  setup:  {setup_time:.3f}s")
    print(f"  prove:  {prove_time:.3f}s")
    print(f"  verify: {verify_time / max(openings, 1):.3f}s / opening")
    print("-" * 60)
    return commitment


def main(argv=None):
    parser = argparse.ArgumentParser(description="KZG Hadamard commitment demo")
    parser.add_argument("--log-n", type=int, default=KZGConfig.test().log_n)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--executor", choices=["thread", "process"], default="thread")
    parser.add_argument("--seed", default=None)
    parser.add_argument("--openings", type=int, default=3)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = KZGConfig(log_n=args.log_n, workers=args.workers, executor=args.executor)
    run(config, seed=args.seed, openings=args.openings)


if __name__ == "__main__":
    main()
