"""
Tests for BabyJubJub arithmetic (zether.curve).

Covers:
- generator / identity membership, subgroup order
- group laws: identity, inverse, commutativity, scalar distributivity
- validation of off-curve points and out-of-range scalars
- Account key derivation and repr hiding the private key
"""

import pytest

from zether.curve import BABYJUB, Account, Curve, is_zero_point
from zether.errors import CurveError


G = BABYJUB.generator
L = BABYJUB.subgroup_order


# ─────────────────────────────────────────────────────────────────────
# 곡선 파라미터
# ─────────────────────────────────────────────────────────────────────

class TestParameters:
    """BabyJubJub 상수 테스트."""

    def test_generator_on_curve(self):
        assert BABYJUB.is_on_curve(G)

    def test_identity_on_curve(self):
        assert BABYJUB.is_on_curve(BABYJUB.identity)

    def test_generator_in_subgroup(self):
        assert BABYJUB.is_in_subgroup(G)

    def test_order_times_generator_is_identity(self):
        """ℓ·G == O (내부 곱셈으로 확인, mul 은 ℓ 을 범위 밖으로 본다)."""
        assert BABYJUB._mul(G, L) == BABYJUB.identity

    def test_curve_is_hashable(self):
        assert hash(BABYJUB) == hash(BABYJUB)

    def test_zero_point_not_on_curve(self):
        """(0, 0)은 미등록 표시이지 곡선 위의 점이 아니다."""
        assert not BABYJUB.is_on_curve((0, 0))

    @pytest.mark.parametrize("name", [
        "add", "neg", "sub", "mul", "base_mul", "eq", "is_on_curve",
        "validate", "validate_scalar", "is_in_subgroup", "add_unchecked",
    ])
    def test_group_operations_are_curve_methods(self, name):
        assert callable(getattr(Curve, name))

    def test_account_curve_argument(self):
        acct = Account(5, curve=BABYJUB)
        assert acct.curve is BABYJUB
        assert acct.public_key == BABYJUB.base_mul(5)


# ─────────────────────────────────────────────────────────────────────
# 군 연산
# ─────────────────────────────────────────────────────────────────────

class TestGroupLaw:

    def test_add_identity(self):
        assert BABYJUB.add(G, BABYJUB.identity) == G

    def test_add_inverse_is_identity(self):
        P = BABYJUB.base_mul(5)
        assert BABYJUB.add(P, BABYJUB.neg(P)) == BABYJUB.identity

    def test_add_commutative(self):
        P = BABYJUB.base_mul(3)
        Q = BABYJUB.base_mul(11)
        assert BABYJUB.add(P, Q) == BABYJUB.add(Q, P)

    def test_doubling(self):
        assert BABYJUB.add(G, G) == BABYJUB.base_mul(2)

    def test_mul_matches_repeated_add(self):
        acc = BABYJUB.identity
        for _ in range(7):
            acc = BABYJUB.add(acc, G)
        assert acc == BABYJUB.base_mul(7)

    def test_mul_zero_is_identity(self):
        assert BABYJUB.base_mul(0) == BABYJUB.identity

    def test_scalar_distributivity(self):
        """(a + b)·G == a·G + b·G"""
        a, b = 123456789, 987654321
        assert BABYJUB.base_mul(a + b) == BABYJUB.add(BABYJUB.base_mul(a), BABYJUB.base_mul(b))

    def test_wraparound(self):
        """(ℓ - 1)·G + G == O"""
        assert BABYJUB.add(BABYJUB.base_mul(L - 1), G) == BABYJUB.identity

    def test_sub(self):
        P = BABYJUB.base_mul(10)
        Q = BABYJUB.base_mul(4)
        assert BABYJUB.sub(P, Q) == BABYJUB.base_mul(6)

    def test_mul_of_non_generator_point(self):
        P = BABYJUB.base_mul(9)
        assert BABYJUB.mul(P, 3) == BABYJUB.base_mul(27)

    def test_results_are_int_tuples(self):
        P = BABYJUB.base_mul(42)
        assert isinstance(P, tuple)
        assert all(isinstance(c, int) for c in P)

    def test_accepts_list_points(self):
        assert BABYJUB.add(list(G), [0, 1]) == G


# ─────────────────────────────────────────────────────────────────────
# 검증
# ─────────────────────────────────────────────────────────────────────

class TestValidation:

    def test_off_curve_point_rejected(self):
        with pytest.raises(CurveError):
            BABYJUB.add((1, 2), G)

    def test_zero_point_rejected_by_mul(self):
        with pytest.raises(CurveError):
            BABYJUB.mul((0, 0), 5)

    def test_coordinate_out_of_field_rejected(self):
        x, y = G
        assert not BABYJUB.is_on_curve((x + BABYJUB.field_modulus, y))

    def test_scalar_out_of_range_rejected(self):
        with pytest.raises(CurveError):
            BABYJUB.base_mul(L)

    def test_negative_scalar_rejected(self):
        with pytest.raises(CurveError):
            BABYJUB.base_mul(-1)

    def test_bool_scalar_rejected(self):
        with pytest.raises(CurveError):
            BABYJUB.base_mul(True)

    def test_curve_error_is_value_error(self):
        with pytest.raises(ValueError):
            BABYJUB.validate((3, 4))

    def test_is_zero_point(self):
        assert is_zero_point((0, 0))
        assert is_zero_point(["0", "0"])
        assert not is_zero_point(BABYJUB.identity)


# ─────────────────────────────────────────────────────────────────────
# Account
# ─────────────────────────────────────────────────────────────────────

class TestAccount:
    """BabyJubJub 키 쌍 테스트."""

    def test_public_key_derived(self):
        acct = Account(12345)
        assert acct.public_key == BABYJUB.base_mul(12345)

    def test_zero_private_key_rejected(self):
        with pytest.raises(CurveError):
            Account(0)

    def test_private_key_out_of_range_rejected(self):
        with pytest.raises(CurveError):
            Account(L)

    def test_generate(self):
        acct = Account.generate()
        assert 1 <= acct.private_key < L
        assert BABYJUB.is_on_curve(acct.public_key)

    def test_generate_distinct(self):
        assert Account.generate() != Account.generate()

    def test_equality(self):
        assert Account(77) == Account(77)
        assert hash(Account(77)) == hash(Account(77))

    def test_repr_hides_private_key(self):
        acct = Account(987654321)
        assert "987654321" not in repr(acct)

    def test_custom_curve_instance(self):
        """같은 파라미터로 만든 Curve 는 BABYJUB 과 같다."""
        clone = Curve(
            name=BABYJUB.name,
            field_modulus=BABYJUB.field_modulus,
            a=BABYJUB.a,
            d=BABYJUB.d,
            generator=BABYJUB.generator,
            subgroup_order=BABYJUB.subgroup_order,
            cofactor=BABYJUB.cofactor,
        )
        assert Account(5, clone) == Account(5)
