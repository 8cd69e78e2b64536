"""
KZG 기반 모듈 테스트: field, polynomial.

테스트 대상:
  - FR 산술과 ensure_fr 정규화 (FQ 혼용 거부)
  - 단위근: 원시성, 크기 검증
  - G1/G2 점 검증
  - Polynomial 연산, FFT/IFFT, poly_div
"""

import pytest
from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import bn128_FQ2 as FQ2
from py_ecc.fields import bn128_FQ12 as FQ12

from pcs.kzg.errors import InvalidDomainSize, InvalidEncoding
from pcs.kzg.field import (
    FR, CURVE_ORDER, G1, G2,
    ec_add, ec_mul, ec_neg, ec_pairing, ec_sub,
    ensure_fr, fr_to_bytes,
    get_root_of_unity, get_roots_of_unity, is_power_of_two,
    validate_g1, validate_g2,
)
from pcs.kzg.polynomial import Polynomial, fft, ifft, poly_div


# ─────────────────────────────────────────────────────────────────────
# FR
# ─────────────────────────────────────────────────────────────────────

class TestFR:

    def test_arithmetic(self):
        assert FR(3) * FR(7) == FR(21)
        assert FR(1) / FR(3) * FR(3) == FR(1)
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)

    def test_reduction(self):
        assert FR(CURVE_ORDER) == FR(0)
        assert FR(CURVE_ORDER + 5) == FR(5)

    def test_ensure_fr_int(self):
        assert ensure_fr(9) == FR(9)
        assert isinstance(ensure_fr(9), FR)

    def test_ensure_fr_passthrough(self):
        x = FR(11)
        assert ensure_fr(x) is x

    def test_ensure_fr_rejects_base_field(self):
        """base field 원소를 스칼라 자리에 넣으면 거부한다."""
        with pytest.raises(InvalidEncoding):
            ensure_fr(FQ(3))

    @pytest.mark.parametrize("value", ["5", 1.5, None, True])
    def test_ensure_fr_rejects_other_types(self, value):
        with pytest.raises(InvalidEncoding):
            ensure_fr(value)

    def test_fr_to_bytes(self):
        assert fr_to_bytes(FR(1)) == b"\x00" * 31 + b"\x01"
        assert len(fr_to_bytes(FR(CURVE_ORDER - 1))) == 32


# ─────────────────────────────────────────────────────────────────────
# 단위근
# ─────────────────────────────────────────────────────────────────────

class TestRootsOfUnity:

    @pytest.mark.parametrize("n", [2, 4, 8, 16])
    def test_primitive(self, n):
        omega = get_root_of_unity(n)
        assert omega ** n == FR(1)
        assert omega ** (n // 2) != FR(1)

    def test_size_one(self):
        assert get_root_of_unity(1) == FR(1)

    def test_roots_are_distinct(self):
        roots = get_roots_of_unity(8)
        assert len(roots) == 8
        for i in range(8):
            for j in range(i + 1, 8):
                assert roots[i] != roots[j]

    @pytest.mark.parametrize("n", [0, 3, 6, 12, -4])
    def test_not_power_of_two(self, n):
        with pytest.raises(InvalidDomainSize):
            get_root_of_unity(n)

    def test_exceeds_two_adicity(self):
        with pytest.raises(InvalidDomainSize):
            get_root_of_unity(1 << 29)

    def test_is_power_of_two(self):
        assert is_power_of_two(1)
        assert is_power_of_two(1024)
        assert not is_power_of_two(0)
        assert not is_power_of_two(24)


# ─────────────────────────────────────────────────────────────────────
# 그룹 연산과 점 검증
# ─────────────────────────────────────────────────────────────────────

class TestGroup:

    def test_identity_handling(self):
        assert ec_mul(None, 5) is None
        assert ec_neg(None) is None
        assert ec_add(None, G1) == G1
        assert ec_sub(G1, G1) is None

    def test_scalar_mul_accepts_fr(self):
        assert ec_mul(G1, FR(3)) == ec_mul(G1, 3)
        assert ec_mul(G1, CURVE_ORDER + 2) == ec_mul(G1, 2)

    def test_pairing_with_identity(self):
        assert ec_pairing(None, G1) == FQ12.one()
        assert ec_pairing(G2, None) == FQ12.one()

    def test_validate_g1(self):
        assert validate_g1(G1) == G1
        assert validate_g1(ec_mul(G1, 7)) == ec_mul(G1, 7)
        assert validate_g1(None) is None

    def test_validate_g1_off_curve(self):
        with pytest.raises(InvalidEncoding):
            validate_g1((FQ(1), FQ(1)))

    def test_validate_g1_wrong_coordinate_field(self):
        """FR 좌표는 FQ 좌표가 아니다."""
        with pytest.raises(InvalidEncoding):
            validate_g1((FR(int(G1[0])), FR(int(G1[1]))))

    def test_validate_g1_wrong_shape(self):
        with pytest.raises(InvalidEncoding):
            validate_g1((1, 2))
        with pytest.raises(InvalidEncoding):
            validate_g1([G1[0], G1[1]])

    def test_validate_g2(self):
        assert validate_g2(G2) == G2
        assert validate_g2(None) is None

    def test_validate_g2_off_curve(self):
        with pytest.raises(InvalidEncoding):
            validate_g2((FQ2([1, 0]), FQ2([1, 0])))


# ─────────────────────────────────────────────────────────────────────
# Polynomial
# ─────────────────────────────────────────────────────────────────────

class TestPolynomial:

    def test_evaluate(self):
        p = Polynomial([1, 2, 3])  # 1 + 2x + 3x²
        assert p.evaluate(FR(2)) == FR(17)
        assert p.evaluate(0) == FR(1)

    def test_trim_and_degree(self):
        p = Polynomial([1, 2, 0, 0])
        assert p.coeffs == [FR(1), FR(2)]
        assert p.degree == 1
        assert Polynomial([]).is_zero()
        assert Polynomial.zero().degree == 0

    def test_add_sub(self):
        p = Polynomial([1, 2])
        q = Polynomial([3, 4, 5])
        assert p + q == Polynomial([4, 6, 5])
        assert q - p == Polynomial([2, 2, 5])
        assert (p - p).is_zero()
        assert p + 1 == Polynomial([2, 2])

    def test_mul(self):
        p = Polynomial([1, 2])  # 1 + 2x
        q = Polynomial([3, 4])  # 3 + 4x
        assert p * q == Polynomial([3, 10, 8])
        assert p * FR(3) == Polynomial([3, 6])
        assert 2 * p == Polynomial([2, 4])

    def test_neg(self):
        assert -Polynomial([1, 2]) + Polynomial([1, 2]) == Polynomial.zero()

    def test_rejects_base_field_coefficients(self):
        with pytest.raises(InvalidEncoding):
            Polynomial([FQ(1)])

    def test_repr(self):
        assert repr(Polynomial([5, 0, 1])) == "Poly(5 + 1*x^2)"
        assert repr(Polynomial.zero()) == "Poly(0)"


class TestFFT:

    def test_roundtrip(self):
        omega = get_root_of_unity(4)
        coeffs = [FR(1), FR(2), FR(3), FR(0)]
        assert ifft(fft(coeffs, omega), omega) == coeffs

    def test_fft_matches_evaluation(self):
        omega = get_root_of_unity(8)
        p = Polynomial([7, 0, 3, 1])
        evals = fft(p.coeffs + [FR(0)] * 4, omega)
        for i, root in enumerate(get_roots_of_unity(8)):
            assert evals[i] == p.evaluate(root)

    def test_from_evaluations(self):
        omega = get_root_of_unity(4)
        p = Polynomial([4, 3, 2, 1])
        evals = [p.evaluate(r) for r in get_roots_of_unity(4)]
        assert Polynomial.from_evaluations(evals, omega) == p


class TestPolyDiv:

    def test_exact(self):
        # (x² - 1) / (x - 1) = x + 1
        q, r = poly_div(Polynomial([-1, 0, 1]), Polynomial([-1, 1]))
        assert q == Polynomial([1, 1])
        assert r.is_zero()

    def test_with_remainder(self):
        # (x² + 1) / (x - 1) = (x + 1), 나머지 2
        q, r = poly_div(Polynomial([1, 0, 1]), Polynomial([-1, 1]))
        assert q == Polynomial([1, 1])
        assert r == Polynomial([2])

    def test_lower_degree_dividend(self):
        q, r = poly_div(Polynomial([5]), Polynomial([-1, 1]))
        assert q.is_zero()
        assert r == Polynomial([5])

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            poly_div(Polynomial([1, 2]), Polynomial.zero())
