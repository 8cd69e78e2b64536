"""
KZG 데이터 직렬화/역직렬화 헬퍼
===============================

TinyDB와 JSON 응답에 담을 수 있는 형태로 프로토콜 객체를 변환한다.
FR, G1, G2, SRS, VerifyingKey, OpeningProof.

- FR: 10진 문자열 (0 ≤ v < r)
- G1: [x, y] 10진 문자열 또는 None (항등원)
- G2: [[x0, x1], [y0, y1]] 또는 None

역직렬화는 형식, 정규 범위, 곡선/부분군 소속을 확인하고
문제가 있으면 InvalidEncoding을 던진다.
SRS 직렬화 결과에는 공개 그룹 원소만 들어간다 (τ 없음).
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from pcs.kzg.errors import InvalidEncoding
from pcs.kzg.field import CURVE_ORDER, FIELD_MODULUS, FR, is_power_of_two, validate_g1, validate_g2
from pcs.kzg.opening import OpeningProof
from pcs.kzg.srs import SRS, VerifyingKey


def _parse_int(data, modulus, what):
    if isinstance(data, bool):
        raise InvalidEncoding(f"{what}: expected a decimal string")
    if isinstance(data, int):
        value = data
    elif isinstance(data, str) and data.isascii() and data.isdigit():
        if len(data) > len(str(modulus)):
            raise InvalidEncoding(f"{what}: value is not reduced modulo {modulus}")
        value = int(data)
    else:
        raise InvalidEncoding(f"{what}: expected a decimal string, got {data!r}")
    if not 0 <= value < modulus:
        raise InvalidEncoding(f"{what}: value is not reduced modulo {modulus}")
    return value


def _pair(data, what):
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise InvalidEncoding(f"{what}: expected a pair")
    return data


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(_parse_int(s, CURVE_ORDER, "scalar"))


def serialize_fr_list(lst):
    return [serialize_fr(v) for v in lst]


def deserialize_fr_list(data):
    if not isinstance(data, list):
        raise InvalidEncoding("expected a list of scalars")
    return [deserialize_fr(s) for s in data]


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    x, y = _pair(data, "G1 point")
    point = (
        FQ(_parse_int(x, FIELD_MODULUS, "G1 x")),
        FQ(_parse_int(y, FIELD_MODULUS, "G1 y")),
    )
    return validate_g1(point)


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))],
    ]


def deserialize_g2(data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return None
    coords = []
    for name, coord in zip("xy", _pair(data, "G2 point")):
        c0, c1 = _pair(coord, f"G2 {name}")
        coords.append(bn128.FQ2([
            _parse_int(c0, FIELD_MODULUS, f"G2 {name}0"),
            _parse_int(c1, FIELD_MODULUS, f"G2 {name}1"),
        ]))
    return validate_g2(tuple(coords))


# ─── SRS / VerifyingKey ───

def serialize_srs(srs):
    """SRS → dict (공개 원소만)"""
    return {
        "domain_size": srs.domain_size,
        "monomial_g1": [serialize_g1(p) for p in srs.monomial_g1],
        "lagrange_g1": [serialize_g1(p) for p in srs.lagrange_g1],
        "g2_powers": [serialize_g2(p) for p in srs.g2_powers],
    }


def deserialize_srs(data):
    """dict → SRS"""
    try:
        size = data["domain_size"]
        monomial = data["monomial_g1"]
        lagrange = data["lagrange_g1"]
        g2_powers = data["g2_powers"]
    except (KeyError, TypeError) as exc:
        raise InvalidEncoding(f"malformed SRS: {exc}") from exc
    if not is_power_of_two(size):
        raise InvalidEncoding(f"SRS domain size is not a power of two: {size!r}")
    if not all(isinstance(v, list) for v in (monomial, lagrange, g2_powers)):
        raise InvalidEncoding("SRS vectors must be lists")
    if len(monomial) != size or len(lagrange) != size or len(g2_powers) != 2:
        raise InvalidEncoding("SRS vectors do not match the domain size")
    return SRS(
        [deserialize_g1(p) for p in monomial],
        [deserialize_g1(p) for p in lagrange],
        [deserialize_g2(p) for p in g2_powers],
        size,
    )


def serialize_vk(vk):
    return {
        "g1": serialize_g1(vk.g1),
        "g2": serialize_g2(vk.g2),
        "tau_g2": serialize_g2(vk.tau_g2),
    }


def deserialize_vk(data):
    try:
        return VerifyingKey(
            g1=deserialize_g1(data["g1"]),
            g2=deserialize_g2(data["g2"]),
            tau_g2=deserialize_g2(data["tau_g2"]),
        )
    except (KeyError, TypeError) as exc:
        raise InvalidEncoding(f"malformed verifying key: {exc}") from exc


# ─── OpeningProof ───

def serialize_opening(opening):
    return {
        "point": serialize_fr(opening.point),
        "evaluation": serialize_fr(opening.evaluation),
        "proof": serialize_g1(opening.proof),
    }


def deserialize_opening(data):
    try:
        return OpeningProof(
            point=deserialize_fr(data["point"]),
            evaluation=deserialize_fr(data["evaluation"]),
            proof=deserialize_g1(data["proof"]),
        )
    except (KeyError, TypeError) as exc:
        raise InvalidEncoding(f"malformed opening proof: {exc}") from exc


# ─── display helpers ───

def _shorten(s):
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (표시용)"""
    if point is None:
        return "∞"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def fr_short(val):
    """FR → 축약 문자열 (표시용)"""
    if val is None:
        return "None"
    return _shorten(str(int(val)))
