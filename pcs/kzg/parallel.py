"""
병렬 실행 정책
==============

SRS 생성, 아다마르 곱, MSM 부분합, 위트니스 해싱, FFT 부분 변환은
서로 겹치지 않는 인덱스 구간으로 나누어 독립적으로 계산할 수 있다.

- workers ≤ 1: 현재 프로세스에서 순서대로 실행
- executor="thread": ThreadPoolExecutor
- executor="process": ProcessPoolExecutor (작업 함수는 모듈 최상위 함수여야 함)

executor.map은 입력 순서대로 결과를 돌려주므로, 구간 결과를 순서대로
이어 붙이거나 왼쪽부터 더하면 워커 수와 무관하게 같은 결과를 얻는다.
"""

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from pcs.kzg.config import DEFAULT_CONFIG


def chunk_bounds(length, parts):
    """[0, length)를 최대 parts개의 연속 구간 (start, stop)으로 나눈다."""
    parts = max(1, min(parts, length))
    size, extra = divmod(length, parts)
    bounds = []
    start = 0
    for i in range(parts):
        stop = start + size + (1 if i < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


def parallel_map(func, tasks, config=None):
    """func를 각 task에 적용한 결과 리스트를 task 순서대로 반환한다."""
    config = config or DEFAULT_CONFIG
    tasks = list(tasks)
    if not config.parallel or len(tasks) <= 1:
        return [func(task) for task in tasks]

    pool_cls = ProcessPoolExecutor if config.executor == "process" else ThreadPoolExecutor
    with pool_cls(max_workers=config.workers) as pool:
        return list(pool.map(func, tasks))


def parallel_chunks(func, seq, config=None, extra=()):
    """seq를 워커 수만큼 연속 구간으로 나누어 func(chunk, *extra)를 실행한다.

    Returns:
        list: 구간별 결과 (구간 순서대로)
    """
    config = config or DEFAULT_CONFIG
    seq = list(seq)
    parts = config.workers if config.parallel else 1
    tasks = [(seq[start:stop],) + tuple(extra) for start, stop in chunk_bounds(len(seq), parts)]
    return parallel_map(_Star(func), tasks, config)


class _Star:
    """튜플 인자를 풀어 호출하는 피클 가능한 래퍼."""

    def __init__(self, func):
        self.func = func

    def __call__(self, args):
        return self.func(*args)


def flatten(chunks):
    out = []
    for c in chunks:
        out.extend(c)
    return out
