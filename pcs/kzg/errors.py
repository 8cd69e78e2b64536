"""
KZG 커밋먼트 프로토콜의 오류 분류
==================================

모든 오류는 호출자에게 타입이 있는 예외로 전달되며 자동 재시도는 없다.

- InvalidDomainSize: 도메인/벡터 크기가 요구되는 2의 거듭제곱이 아님
- LengthMismatch:    변환/커밋 입력 벡터 길이 불일치
- InvalidEncoding:   잘못된 형식의 원소, 곡선/부분군 밖의 점, FR/FQ 혼용
- InvalidOpening:    몫 다항식 나눗셈의 나머지가 0이 아님 (호출자 버그)
- EntropyError:      setup 중 난수 소스 실패 (치명적)
- ProverStateError:  Prover 상태 기계의 허용되지 않는 전이

검증(verify)은 거짓 증명에 대해 예외가 아니라 False를 반환한다.
"""


class KZGError(Exception):
    """이 패키지의 모든 오류의 기반 클래스."""


class InvalidDomainSize(KZGError, ValueError):
    pass


class LengthMismatch(KZGError, ValueError):
    pass


class InvalidEncoding(KZGError, ValueError):
    pass


class InvalidOpening(KZGError, ValueError):
    pass


class EntropyError(KZGError, RuntimeError):
    pass


class ProverStateError(KZGError, RuntimeError):
    pass
