"""
Zether 커밋먼트 코덱
====================

잔액을 twisted ElGamal 방식의 점 쌍 (CL, CR)로 암호화하고 복호화한다.

**암호화**:
  공개키 y = sk·G, 잔액 b, 랜덤 r 에 대해

      CL = b·G + r·y
      CR = r·G

  두 커밋먼트를 점 단위로 더하면 잔액도 더해진다 (준동형성):
      (CL₁ + CL₂, CR₁ + CR₂) 는 b₁ + b₂ 를 r₁ + r₂ 로 암호화한 것

**복호화**:
  개인키 sk 를 알면

      CL - sk·CR = b·G + r·sk·G - sk·r·G = b·G

  로 b·G 를 얻는다. b 자체는 이산로그이므로 b가 작다는 사실을 이용해 찾는다.

**이산로그 탐색 (bound 필수)**:
  탐색 범위는 항상 [0, bound) 이다. bound 이상의 값은 전송자가 범위 증명 때문에
  만들 수 없으므로 찾을 이유가 없고, 무제한 탐색은 서비스 거부 위험이다.

  - 선형 탐색: i·G 를 한 번의 덧셈으로 갱신하며 비교. O(bound)
  - baby-step giant-step: m = ⌈√bound⌉ 개의 j·G 표를 만들고
    M - i·(m·G) 가 표에 있는지 본다. O(√bound)

  두 방법은 같은 입력에 같은 결과를 낸다. bound 가 linear_search_limit 이하면
  선형 탐색, 그보다 크면 baby-step giant-step 을 쓴다.

사용 예시:
    >>> from zether.curve import BABYJUB, Account
    >>> acct = Account(12345)
    >>> CL, CR = encrypt_balance(10000, acct.public_key, 7, BABYJUB)
    >>> decode_balance(CL, CR, acct.private_key, 4294967295, BABYJUB)  # 10000
"""

import logging
from functools import lru_cache
from math import isqrt

from zether.errors import CurveError


logger = logging.getLogger(__name__)

# 이 값 이하의 bound 는 선형 탐색으로 충분히 빠르다
LINEAR_SEARCH_LIMIT = 1 << 16


# ─────────────────────────────────────────────────────────────────────
# 커밋먼트 대수
# ─────────────────────────────────────────────────────────────────────

def encrypt_balance(amount, public_key, r, curve):
    """(amount·G + r·y, r·G) 를 만든다."""
    _check_amount(amount)
    CL = curve.add(curve.base_mul(amount), curve.mul(public_key, r))
    CR = curve.base_mul(r)
    return CL, CR


def zero_commitment(curve):
    """잔액 0을 r = 0 으로 암호화한 (O, O)."""
    return curve.identity, curve.identity


def add_commitments(c1, c2, curve):
    return curve.add(c1[0], c2[0]), curve.add(c1[1], c2[1])


def subtract_commitments(c1, c2, curve):
    return curve.sub(c1[0], c2[0]), curve.sub(c1[1], c2[1])


def message_point(CL, CR, private_key, curve):
    """M = CL - sk·CR (= b·G)."""
    return curve.sub(CL, curve.mul(CR, private_key))


# ─────────────────────────────────────────────────────────────────────
# 잔액 복호화
# ─────────────────────────────────────────────────────────────────────

def decode_balance(CL, CR, private_key, bound, curve, linear_search_limit=LINEAR_SEARCH_LIMIT):
    """커밋먼트 (CL, CR) 에서 잔액을 복원한다.

    Args:
        CL, CR: 커밋먼트 점
        private_key: 계정 개인키 sk
        bound: 탐색 상한 (배타적). 양의 정수여야 한다.
        curve: 곡선 파라미터
        linear_search_limit: 이 값 이하의 bound 에는 선형 탐색을 쓴다

    Returns:
        int | None: 0 ≤ b < bound 인 잔액, 범위 안에서 찾지 못하면 None

    Raises:
        CurveError: 점이 곡선 밖이거나 bound 가 잘못되었을 때
    """
    _check_bound(bound)
    M = message_point(CL, CR, private_key, curve)
    if bound <= linear_search_limit:
        logger.debug("decoding balance by linear search, bound=%d", bound)
        return linear_search(M, bound, curve)
    logger.debug("decoding balance by baby-step giant-step, bound=%d", bound)
    return baby_step_giant_step(M, bound, curve)


def linear_search(M, bound, curve):
    """i = 0, 1, 2, ... 에 대해 i·G == M 인 i 를 찾는다."""
    _check_bound(bound)
    M = curve.validate(M)
    acc = curve.identity
    G = curve.generator
    for i in range(bound):
        if acc == M:
            return i
        acc = curve.add_unchecked(acc, G)
    return None


def baby_step_giant_step(M, bound, curve):
    """M = b·G, 0 ≤ b < bound 인 b 를 O(√bound) 에 찾는다.

    b = i·m + j (0 ≤ j < m) 로 쓰면 M - i·(m·G) = j·G 이다.
    j·G 표(baby steps)를 만든 뒤 M 에서 m·G 를 반복해서 빼며(giant steps) 표를 조회한다.
    """
    _check_bound(bound)
    M = curve.validate(M)
    m = isqrt(bound - 1) + 1
    table = _baby_steps(curve, m)
    giant = curve.neg(curve.base_mul(m))

    Q = M
    for i in range((bound + m - 1) // m):
        j = table.get(Q)
        if j is not None:
            value = i * m + j
            return value if value < bound else None
        Q = curve.add_unchecked(Q, giant)
    return None


@lru_cache(maxsize=4)
def _baby_steps(curve, m):
    table = {}
    acc = curve.identity
    for j in range(m):
        table.setdefault(acc, j)
        acc = curve.add_unchecked(acc, curve.generator)
    logger.debug("built baby-step table of %d points", m)
    return table


def _check_bound(bound):
    if isinstance(bound, bool) or not isinstance(bound, int) or bound < 1:
        raise CurveError(f"bound must be a positive int: {bound!r}")


def _check_amount(amount):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise CurveError(f"amount must be a non-negative int: {amount!r}")
