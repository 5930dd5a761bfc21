"""
BabyJubJub 타원곡선 연산
========================

Zether 커밋먼트와 Schnorr 서명에서 사용하는 기본 대수적 도구를 정의한다.

**BabyJubJub**:
  bn128 스칼라 필드 위에서 정의된 twisted Edwards 곡선.

      a·x² + y² = 1 + d·x²·y²     (a = 168700, d = 168696)

  - 필드 위수 p = bn128.curve_order (≈ 2^254). 곡선 좌표는 이 필드의 원소이며,
    그래서 circom 회로 안에서 점 연산을 그대로 표현할 수 있다.
  - 곡선 위수 = 8 · ℓ (cofactor 8), ℓ은 소수인 부분군 위수
  - 생성자 G는 circomlib의 Base8 (위수 ℓ인 부분군의 생성자)

**덧셈 공식**:
  d가 제곱수가 아니므로 twisted Edwards 덧셈 공식은 완전(complete)하다.
  항등원 (0, 1)과 자기 자신과의 덧셈(doubling)을 포함한 모든 입력에서
  분모가 0이 되지 않는다.

      x₃ = (x₁y₂ + y₁x₂) / (1 + d·x₁x₂y₁y₂)
      y₃ = (y₁y₂ - a·x₁x₂) / (1 - d·x₁x₂y₁y₂)

**점 표현**:
  점은 정수 쌍 (x, y)이다. 항등원은 (0, 1).
  (0, 0)은 곡선 위의 점이 아니며, 원장에서는 "미등록 계정"을 뜻한다.

곡선 파라미터는 전역 상태가 아니라 불변 값(Curve)으로 만들어
모든 연산에 명시적으로 전달한다.

사용 예시:
    >>> from zether.curve import BABYJUB
    >>> P = BABYJUB.base_mul(5)          # 5·G
    >>> Q = BABYJUB.add(P, BABYJUB.neg(P))
    >>> Q == BABYJUB.identity            # True
"""

from dataclasses import dataclass

from py_ecc import bn128

from zether.errors import CurveError
from zether.randomness import random_scalar


# ─────────────────────────────────────────────────────────────────────
# 곡선 파라미터
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Curve:
    """twisted Edwards 곡선 파라미터와 그 위의 군 연산.

    속성:
        name: 곡선 이름
        field_modulus: 좌표 필드의 위수 p
        a, d: 곡선 계수
        generator: 부분군 생성자 G
        subgroup_order: 소수 부분군 위수 ℓ (모든 스칼라는 mod ℓ)
        cofactor: 곡선 위수 / ℓ
    """

    name: str
    field_modulus: int
    a: int
    d: int
    generator: tuple
    subgroup_order: int
    cofactor: int

    @property
    def identity(self):
        return (0, 1)

    # ── 검사 ──

    def is_on_curve(self, point):
        """점이 곡선 방정식 a·x² + y² = 1 + d·x²·y² 를 만족하는지 확인한다."""
        if not isinstance(point, (tuple, list)) or len(point) != 2:
            return False
        x, y = point
        if not isinstance(x, int) or not isinstance(y, int):
            return False
        p = self.field_modulus
        if not (0 <= x < p and 0 <= y < p):
            return False
        xx = x * x % p
        yy = y * y % p
        return (self.a * xx + yy) % p == (1 + self.d * xx * yy) % p

    def validate(self, point):
        """곡선 위의 점이 아니면 CurveError를 발생시킨다."""
        if not self.is_on_curve(point):
            raise CurveError(f"point is not on {self.name}: {point!r}")
        return tuple(point)

    def validate_scalar(self, scalar):
        """스칼라가 [0, ℓ) 범위의 정수인지 확인한다."""
        if isinstance(scalar, bool) or not isinstance(scalar, int):
            raise CurveError(f"scalar must be an int, got {type(scalar).__name__}")
        if not 0 <= scalar < self.subgroup_order:
            raise CurveError("scalar out of range [0, subgroup_order)")
        return scalar

    def is_in_subgroup(self, point):
        """ℓ·P == O 이면 P는 소수 부분군의 원소이다."""
        self.validate(point)
        return self._mul(point, self.subgroup_order) == self.identity

    # ── 군 연산 ──

    def add(self, p1, p2):
        """점 덧셈 p1 + p2."""
        return self.add_unchecked(self.validate(p1), self.validate(p2))

    def neg(self, point):
        """점의 역원 -P = (-x, y)."""
        x, y = self.validate(point)
        return ((-x) % self.field_modulus, y)

    def sub(self, p1, p2):
        """점 뺄셈 p1 - p2."""
        return self.add(p1, self.neg(p2))

    def mul(self, point, scalar):
        """스칼라 곱셈 scalar · point.

        Args:
            point: 곡선 위의 점
            scalar: [0, ℓ) 범위의 정수. 0이면 항등원을 반환한다.

        Raises:
            CurveError: 점이 곡선 밖이거나 스칼라가 범위 밖일 때
        """
        point = self.validate(point)
        self.validate_scalar(scalar)
        return self._mul(point, scalar)

    def base_mul(self, scalar):
        """scalar · G"""
        return self.mul(self.generator, scalar)

    @staticmethod
    def eq(p1, p2):
        return tuple(p1) == tuple(p2)

    # ── 내부 구현 ──

    def add_unchecked(self, p1, p2):
        """곡선 위에 있다고 이미 확인된 두 점을 검사 없이 더한다."""
        # 분모 두 개를 한 번의 역원으로 처리한다
        p = self.field_modulus
        x1, y1 = p1
        x2, y2 = p2
        x1x2 = x1 * x2 % p
        y1y2 = y1 * y2 % p
        t = self.d * x1x2 * y1y2 % p
        num_x = (x1 * y2 + y1 * x2) % p
        num_y = (y1y2 - self.a * x1x2) % p
        den_x = (1 + t) % p
        den_y = (1 - t) % p
        inv = pow(den_x * den_y % p, -1, p)
        return (num_x * den_y * inv % p, num_y * den_x * inv % p)

    def _padd(self, q1, q2):
        # 사영 좌표 (X:Y:Z) 덧셈, add-2008-bbjlp
        p = self.field_modulus
        X1, Y1, Z1 = q1
        X2, Y2, Z2 = q2
        A = Z1 * Z2 % p
        B = A * A % p
        C = X1 * X2 % p
        D = Y1 * Y2 % p
        E = self.d * C * D % p
        F = (B - E) % p
        G = (B + E) % p
        X3 = A * F * ((X1 + Y1) * (X2 + Y2) - C - D) % p
        Y3 = A * G * (D - self.a * C) % p
        Z3 = F * G % p
        return (X3, Y3, Z3)

    def _mul(self, point, scalar):
        p = self.field_modulus
        acc = (0, 1, 1)
        base = (point[0], point[1], 1)
        while scalar:
            if scalar & 1:
                acc = self._padd(acc, base)
            base = self._padd(base, base)
            scalar >>= 1
        X, Y, Z = acc
        z_inv = pow(Z, -1, p)
        return (X * z_inv % p, Y * z_inv % p)


# ─────────────────────────────────────────────────────────────────────
# BabyJubJub 인스턴스
# ─────────────────────────────────────────────────────────────────────

BABYJUB = Curve(
    name="babyjubjub",
    field_modulus=bn128.curve_order,
    a=168700,
    d=168696,
    generator=(
        5299619240641551281634865583518297030282874472190772894086521144482721001553,
        16950150798460657717958625567821834550301663161624707787222815936182638968203,
    ),
    subgroup_order=2736030358979909402780800718157159386076813972158567259200215660948447373041,
    cofactor=8,
)


def is_zero_point(point):
    """원장이 미등록 계정에 대해 돌려주는 (0, 0)인지 확인한다."""
    return tuple(int(c) for c in point) == (0, 0)


# ─────────────────────────────────────────────────────────────────────
# 계정
# ─────────────────────────────────────────────────────────────────────

class Account:
    """BabyJubJub 키 쌍.

    공개키는 항상 private_key · G 로부터 계산되며 따로 지정할 수 없다.
    개인키는 이 프로세스 밖으로 나가지 않아야 한다 (repr에도 나타나지 않는다).
    """

    __slots__ = ("_private_key", "_public_key", "curve")

    def __init__(self, private_key, curve=BABYJUB):
        curve.validate_scalar(private_key)
        if private_key == 0:
            raise CurveError("private key must be non-zero")
        self._private_key = private_key
        self._public_key = curve.base_mul(private_key)
        self.curve = curve

    @classmethod
    def generate(cls, curve=BABYJUB):
        return cls(random_scalar(curve.subgroup_order, exclude_zero=True), curve)

    @property
    def private_key(self):
        return self._private_key

    @property
    def public_key(self):
        return self._public_key

    def __eq__(self, other):
        if not isinstance(other, Account):
            return NotImplemented
        return self.curve == other.curve and self._private_key == other._private_key

    def __hash__(self):
        return hash((self.curve.name, self._public_key))

    def __repr__(self):
        return f"Account(public_key={self._public_key!r})"
