"""
KZG 기반 모듈: 스칼라 필드, 타원곡선 그룹, 페어링
====================================================

이 모듈은 커밋먼트 프로토콜 전체에서 사용되는 기본 대수적 도구를 정의한다.
필드/그룹/페어링 연산 자체는 py_ecc가 제공하며, 여기서는 그것을
프로토콜이 기대하는 형태로 감싸고 입력 검증을 추가한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 위트니스, 공개 평가 벡터, SRS 지수,
  평가 점 등 모든 스칼라 값은 FR 원소이다.
  - 위수 r ≈ 2^254
  - r - 1 = 2^28 × m (m은 홀수) → 최대 2^28 크기의 평가 도메인

**그룹 G1 / G2**:
  py_ecc.bn128의 아핀(affine) 좌표 튜플. 항등원은 None.

**페어링**:
  e: G1 × G2 → GT. 결과(FQ12)는 동등 비교에만 사용한다.

**입력 검증**:
  base field FQ 원소를 FR 자리에 넣거나, 곡선 위에 있지 않은 점,
  r-위수 부분군 밖의 G2 점은 InvalidEncoding으로 거부한다.

사용 예시:
    >>> from pcs.kzg.field import FR, G1, ec_mul
    >>> a = FR(3) * FR(7)   # FR(21)
    >>> P = ec_mul(G1, 5)   # 5·G1
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import bn128_FQ2 as FQ2
from py_ecc.fields import bn128_FQ12 as FQ12
from py_ecc import bn128

from pcs.kzg.errors import InvalidDomainSize, InvalidEncoding


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 그대로 사용한다.
    field_modulus만 곡선 위수로 바꾼다.

    예시:
        >>> FR(1) / FR(3) * FR(3)   # FR(1)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = bn128.curve_order

# base field 크기 (점 좌표의 필드)
FIELD_MODULUS = bn128.field_modulus

# FR*의 생성자와 2-adicity
PRIMITIVE_ROOT = 5
TWO_ADICITY = 28


def ensure_fr(value):
    """값을 FR 원소로 정규화한다.

    FR은 그대로, 정수는 FR로 변환한다. base field 원소(FQ)나
    다른 타입은 필드 혼용이므로 거부한다.

    Raises:
        InvalidEncoding: FR로 해석할 수 없는 값
    """
    if isinstance(value, FR):
        return value
    if isinstance(value, FQ):
        raise InvalidEncoding("base field element supplied where a scalar (FR) is required")
    if isinstance(value, int) and not isinstance(value, bool):
        return FR(value)
    raise InvalidEncoding(f"cannot interpret {type(value).__name__} as a scalar field element")


def fr_to_bytes(value):
    """FR 원소의 정규(canonical) 32바이트 빅엔디안 인코딩."""
    return int(value).to_bytes(32, "big")


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# 항등원 (point at infinity). bn128에서는 None으로 표현한다.
Z1 = None
Z2 = None


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if point is None:
        return None
    if isinstance(scalar, FQ):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2. None(항등원)을 허용한다."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    if point is None:
        return None
    return bn128.neg(point)


def ec_sub(p1, p2):
    """p1 - p2."""
    return bn128.add(p1, ec_neg(p2))


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
        어느 한쪽이 항등원이면 결과는 GT의 항등원 1이다.
    """
    if g2_point is None or g1_point is None:
        return FQ12.one()
    return bn128.pairing(g2_point, g1_point)


# ─────────────────────────────────────────────────────────────────────
# 원소 검증 (InvalidEncoding)
# ─────────────────────────────────────────────────────────────────────

def _check_coordinate(c, cls):
    # FR도 FQ의 하위 클래스이므로 정확한 타입으로 비교한다
    if type(c) is not cls:
        raise InvalidEncoding(f"point coordinate must be {cls.__name__}, got {type(c).__name__}")


def validate_g1(point):
    """G1 점을 검증한다. bn128 G1은 cofactor가 1이므로 곡선 검사로 충분하다."""
    if point is None:
        return point
    if not isinstance(point, tuple) or len(point) != 2:
        raise InvalidEncoding("G1 point must be an (x, y) tuple or None")
    for c in point:
        _check_coordinate(c, FQ)
    if not bn128.is_on_curve(point, bn128.b):
        raise InvalidEncoding("G1 point is not on the curve")
    return point


def validate_g2(point):
    """G2 점을 검증한다: 꼬인 곡선(twist) 위의 점이며 r-위수 부분군에 속해야 한다."""
    if point is None:
        return point
    if not isinstance(point, tuple) or len(point) != 2:
        raise InvalidEncoding("G2 point must be an (x, y) tuple or None")
    for c in point:
        _check_coordinate(c, FQ2)
    if not bn128.is_on_curve(point, bn128.b2):
        raise InvalidEncoding("G2 point is not on the twisted curve")
    if bn128.multiply(point, CURVE_ORDER) is not None:
        raise InvalidEncoding("G2 point is outside the prime-order subgroup")
    return point


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def is_power_of_two(n):
    return isinstance(n, int) and n >= 1 and (n & (n - 1)) == 0


def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    생성자 g = FR(5)에 대해 ω = g^((r-1)/n)이면 ω^n = g^(r-1) = 1이다.

    Args:
        n: 도메인 크기 (2의 거듭제곱, ≤ 2^28)

    Returns:
        FR: n차 원시 단위근

    Raises:
        InvalidDomainSize: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때

    예시:
        >>> omega = get_root_of_unity(8)
        >>> omega ** 8 == FR(1)   # True
        >>> omega ** 4 != FR(1)   # True (원시 단위근)
    """
    if not is_power_of_two(n):
        raise InvalidDomainSize(f"domain size must be a power of two: {n}")
    if n > (1 << TWO_ADICITY):
        raise InvalidDomainSize(f"domain size must be at most 2^{TWO_ADICITY}: {n}")
    if n == 1:
        return FR(1)
    return FR(PRIMITIVE_ROOT) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """[1, ω, ω², ..., ω^(n-1)]."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
