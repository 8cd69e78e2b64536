"""
계수 표현 다항식과 radix-2 NTT 커널
===================================

열기 증명은 커밋된 벡터를 계수 형태로 되돌린 뒤 다음을 계산한다:

    y    = p(z)                       (Horner)
    q(x) = (p(x) - y) / (x - z)       (긴 나눗셈, 나머지 0)

fft / ifft는 도메인 검증이 없는 순수 커널이다. 길이 검사, 패딩,
병렬 분할은 transform.EvaluationDomain이 맡는다.

    >>> p = Polynomial([1, 2, 3])    # 1 + 2x + 3x²
    >>> p.evaluate(2)                # FR(17)
"""

from pcs.kzg.field import FR, ensure_fr


ZERO = FR(0)
ONE = FR(1)


class Polynomial:
    """FR 계수 다항식. coeffs[i]는 xⁱ의 계수이며 최고차 0은 잘라낸다."""

    def __init__(self, coeffs=None):
        coeffs = [ensure_fr(c) for c in (coeffs or [])]
        while coeffs and coeffs[-1] == ZERO:
            coeffs.pop()
        self.coeffs = coeffs or [ZERO]

    @staticmethod
    def _lift(other):
        if isinstance(other, Polynomial):
            return other
        return Polynomial([other])

    def _coeff(self, i):
        return self.coeffs[i] if i < len(self.coeffs) else ZERO

    def _combine(self, other, op):
        other = self._lift(other)
        size = max(len(self.coeffs), len(other.coeffs))
        return Polynomial([op(self._coeff(i), other._coeff(i)) for i in range(size)])

    @property
    def degree(self):
        # 영 다항식도 0차로 취급
        return len(self.coeffs) - 1

    def is_zero(self):
        return self.coeffs == [ZERO]

    def evaluate(self, point):
        """p(point), Horner 방식."""
        point = ensure_fr(point)
        acc = ZERO
        for c in reversed(self.coeffs):
            acc = acc * point + c
        return acc

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    __radd__ = __add__

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __neg__(self):
        return Polynomial([ZERO - c for c in self.coeffs])

    def __mul__(self, other):
        if not isinstance(other, Polynomial):
            scalar = ensure_fr(other)
            return Polynomial([c * scalar for c in self.coeffs])
        out = [ZERO] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == ZERO:
                continue
            for j, b in enumerate(other.coeffs):
                out[i + j] = out[i + j] + a * b
        return Polynomial(out)

    __rmul__ = __mul__

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        return isinstance(other, Polynomial) and self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == ZERO:
                continue
            power = "" if i == 0 else ("*x" if i == 1 else f"*x^{i}")
            terms.append(f"{int(c)}{power}")
        return f"Poly({' + '.join(terms) or '0'})"

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def from_evaluations(cls, evals, omega):
        """{ωⁱ}에서의 값으로부터 보간한다."""
        return cls(ifft(evals, omega))


# ─────────────────────────────────────────────────────────────────────
# NTT 커널
# ─────────────────────────────────────────────────────────────────────

def butterfly(even_vals, odd_vals, omega):
    """두 절반 변환을 합친다.

        out[k]         = E[k] + ωᵏ·O[k]
        out[k + N/2]   = E[k] - ωᵏ·O[k]
    """
    half = len(even_vals)
    out = [ZERO] * (2 * half)
    twiddle = ONE
    for k in range(half):
        t = twiddle * odd_vals[k]
        out[k] = even_vals[k] + t
        out[k + half] = even_vals[k] - t
        twiddle = twiddle * omega
    return out


def fft(coeffs, omega):
    """계수 → [p(1), p(ω), ..., p(ω^(N-1))]. N은 2의 거듭제곱이어야 한다."""
    if len(coeffs) == 1:
        return [ensure_fr(coeffs[0])]
    omega_sq = omega * omega
    return butterfly(fft(coeffs[0::2], omega_sq), fft(coeffs[1::2], omega_sq), omega)


def ifft(evals, omega):
    """fft의 역변환: ω⁻¹로 변환한 뒤 N⁻¹을 곱한다."""
    scale = ONE / FR(len(evals))
    return [v * scale for v in fft(evals, ONE / omega)]


def poly_div(a, b):
    """a = b·q + r (deg r < deg b)인 (q, r).

    Raises:
        ZeroDivisionError: b가 영 다항식일 때
    """
    if b.is_zero():
        raise ZeroDivisionError("polynomial division by zero")
    deg_b = b.degree
    if a.degree < deg_b:
        return Polynomial(), Polynomial(a.coeffs)

    rem = list(a.coeffs)
    lead_inv = ONE / b.coeffs[-1]
    quot = [ZERO] * (len(rem) - deg_b)
    for shift in reversed(range(len(quot))):
        factor = rem[shift + deg_b] * lead_inv
        quot[shift] = factor
        if factor == ZERO:
            continue
        for j, bj in enumerate(b.coeffs):
            rem[shift + j] = rem[shift + j] - factor * bj
    return Polynomial(quot), Polynomial(rem[:deg_b])
