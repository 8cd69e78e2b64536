"""
성능 벤치마크
=============

실행:
    python -m pcs.kzg.benchmark --sizes 2 3 4 --workers 4

크기별로 setup → prove → open → verify를 실행하고 표로 출력한다.
"""

import argparse
import logging
import time
from dataclasses import dataclass

from pcs.kzg.config import KZGConfig
from pcs.kzg.prover import Prover
from pcs.kzg.srs import SRS, sample_public_evaluations
from pcs.kzg.verifier import Verifier


@dataclass
class BenchmarkResult:
    log_n: int
    elements: int
    setup_time: float
    prover_time: float
    throughput: float
    verify_time: float


def bench(log_n, workers=1, executor="thread", seed=None):
    config = KZGConfig(log_n=log_n, workers=workers, executor=executor)

    start = time.perf_counter()
    srs = SRS.generate(config.two_n, seed=seed, config=config)
    public_evals = sample_public_evaluations(config.two_n, seed=seed)
    setup_time = time.perf_counter() - start

    prover = Prover(srs, public_evals, config)
    start = time.perf_counter()
    commitment = prover.prove()
    prover_time = time.perf_counter() - start

    opening = prover.open()
    start = time.perf_counter()
    valid = Verifier.from_srs(srs).verify(commitment, opening)
    verify_time = time.perf_counter() - start
    if not valid:
        raise AssertionError(f"verification failed for n=2^{log_n}")

    return BenchmarkResult(
        log_n=log_n,
        elements=config.n,
        setup_time=setup_time,
        prover_time=prover_time,
        throughput=config.n / prover_time,
        verify_time=verify_time,
    )


def format_table(results):
    lines = [
        "| Size | Elements | Setup Time | Prover Time | Throughput | Verification |",
        "|------|----------|------------|-------------|------------|--------------|",
    ]
    for r in results:
        lines.append(
            f"| n=2^{r.log_n} | {r.elements} | {r.setup_time:.1f}s | "
            f"{r.prover_time * 1000:.0f}ms | {r.throughput:.0f} elem/s | "
            f"~{r.verify_time * 1000:.0f}ms |"
        )
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="KZG Hadamard commitment benchmark")
    parser.add_argument("--sizes", type=int, nargs="+", default=[2, 3, 4])
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--executor", choices=["thread", "process"], default="thread")
    parser.add_argument("--seed", default=None)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING)

    results = []
    for log_n in args.sizes:
        print(f"Benchmarking n = 2^{log_n} ({1 << log_n} elements)...")
        results.append(bench(log_n, args.workers, args.executor, args.seed))
        print(f"✓ Completed n = 2^{log_n}\n")

    print("Benchmark Results:")
    print(format_table(results))


if __name__ == "__main__":
    main()
