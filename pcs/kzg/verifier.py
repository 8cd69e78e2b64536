"""
Verifier
========

공개 데이터(커밋먼트, 열기 증명, 검증 키)만으로 검증한다.
τ나 SRS 전체는 필요 없다.
"""

from pcs.kzg.errors import InvalidEncoding
from pcs.kzg.opening import verify
from pcs.kzg.srs import VerifyingKey


class Verifier:
    """VerifyingKey를 보관하고 열기 증명을 검증한다.

    예시:
        >>> verifier = Verifier(srs.verifying_key())
        >>> verifier.verify(commitment, opening)  # True / False
    """

    def __init__(self, vk):
        if not isinstance(vk, VerifyingKey):
            raise InvalidEncoding("Verifier requires a VerifyingKey")
        self.vk = vk

    @classmethod
    def from_srs(cls, srs):
        return cls(srs.verifying_key())

    def verify(self, commitment, opening):
        return verify(commitment, opening, self.vk)
