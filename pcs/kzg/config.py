"""
프로토콜 설정
=============

도메인 크기(n = 2^log_n, SRS 길이 2n)와 병렬 실행 정책을 담는다.
병렬 실행 여부는 스케줄링 정책일 뿐이며 결과값에는 영향을 주지 않는다.

환경 변수:
    KZG_LOG_N     (기본값 10)
    KZG_WORKERS   (기본값 1 → 직렬 실행)
    KZG_EXECUTOR  ("thread" 또는 "process", 기본값 "thread")
"""

import os
from dataclasses import dataclass

from pcs.kzg.field import TWO_ADICITY

# 운영 환경 크기: n = 2^17
PRODUCTION_LOG_N = 17

EXECUTORS = ("thread", "process")


@dataclass(frozen=True)
class KZGConfig:
    """프로토콜 크기와 워커 풀 설정.

    속성:
        log_n: 위트니스 길이 n = 2^log_n
        workers: 병렬 워커 수 (1 이하이면 직렬)
        executor: "thread" 또는 "process"
    """
    log_n: int = 10
    workers: int = 1
    executor: str = "thread"

    def __post_init__(self):
        if not isinstance(self.log_n, int) or self.log_n < 0:
            raise ValueError(f"log_n must be a non-negative integer: {self.log_n!r}")
        # SRS 길이 2n = 2^(log_n + 1)이 도메인 한계를 넘으면 안 된다
        if self.log_n + 1 > TWO_ADICITY:
            raise ValueError(f"log_n must be at most {TWO_ADICITY - 1}: {self.log_n}")
        if not isinstance(self.workers, int) or self.workers < 0:
            raise ValueError(f"workers must be a non-negative integer: {self.workers!r}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}: {self.executor!r}")

    @property
    def n(self):
        return 1 << self.log_n

    @property
    def two_n(self):
        return 2 * self.n

    @property
    def parallel(self):
        return self.workers > 1

    @classmethod
    def production(cls, **kwargs):
        return cls(log_n=PRODUCTION_LOG_N, **kwargs)

    @classmethod
    def test(cls, **kwargs):
        """테스트용 작은 크기: n = 4, 도메인 8."""
        return cls(log_n=2, **kwargs)

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            log_n=int(env.get("KZG_LOG_N", 10)),
            workers=int(env.get("KZG_WORKERS", 1)),
            executor=env.get("KZG_EXECUTOR", "thread").lower(),
        )


DEFAULT_CONFIG = KZGConfig()
