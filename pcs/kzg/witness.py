"""
위트니스 생성: 입력 → FR 해시
=============================

n개의 입력 x_i에서 위트니스 f_i = Hash(x_i)를 결정론적으로 만든다.

    Hash(x) = SHA-256(x의 32바이트 빅엔디안 정규 인코딩) mod r

Fiat-Shamir 챌린지가 아니라 위트니스 유도에만 쓰인다.
"""

import hashlib
import secrets

from pcs.kzg.field import CURVE_ORDER, FR, ensure_fr, fr_to_bytes
from pcs.kzg.parallel import flatten, parallel_chunks


def hash_to_field(x):
    """x ∈ FR을 SHA-256으로 해싱해 FR 원소로 사상한다."""
    digest = hashlib.sha256(fr_to_bytes(ensure_fr(x))).digest()
    return FR(int.from_bytes(digest, "big") % CURVE_ORDER)


def _hash_chunk(xs):
    return [hash_to_field(x) for x in xs]


def generate_witness(inputs, config=None):
    """[Hash(x_0), ..., Hash(x_{n-1})].

    Raises:
        InvalidEncoding: 입력이 FR로 해석되지 않을 때 (base field 원소 등)
    """
    inputs = [ensure_fr(x) for x in inputs]
    return flatten(parallel_chunks(_hash_chunk, inputs, config))


def random_inputs(n, entropy=None):
    """무작위 입력 x_i ∈ FR을 n개 뽑는다."""
    entropy = entropy or secrets
    return [FR(entropy.randbelow(CURVE_ORDER)) for _ in range(n)]
