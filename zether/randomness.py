"""
균등 난수 스칼라
================

[0, n) (또는 [1, n)) 범위에서 편향 없는 스칼라를 뽑는다.

**왜 단순히 `int(bytes) % n` 을 쓰지 않는가?**
  256비트 난수를 n으로 나눈 나머지는 2^256이 n의 배수가 아닌 한
  작은 값 쪽으로 치우친다. 대신 거부 샘플링(rejection sampling)을 한다:

  1. byte_len = ceil(bit_length(n) / 8) 바이트를 뽑는다
  2. limit = floor(2^(8·byte_len) / n) · n
  3. 값 ≥ limit 이면 버리고 다시 뽑는다
  4. 값 mod n 을 반환 (limit 아래에서는 모든 나머지가 같은 횟수로 등장)

매 호출마다 새로 뽑으며 상태를 공유하지 않는다. Schnorr 논스나 블라인딩 값을
두 번 재사용하면 개인키가 드러나므로, 값을 캐시하지 말고 필요할 때마다 호출한다.

사용 예시:
    >>> from zether.curve import BABYJUB
    >>> r = random_scalar(BABYJUB.subgroup_order)
    >>> 1 <= r < BABYJUB.subgroup_order  # True
"""

import secrets


def random_scalar(order, exclude_zero=True, randbytes=secrets.token_bytes):
    """[0, order) 에서 균등하게 스칼라를 뽑는다.

    Args:
        order: 상한 (보통 부분군 위수 ℓ). 2 이상이어야 한다.
        exclude_zero: True면 0을 제외하고 [1, order) 에서 뽑는다.
        randbytes: n을 받아 n바이트를 돌려주는 암호학적 난수원.

    Returns:
        int: 균등 분포 스칼라

    Raises:
        ValueError: order < 2
    """
    if order < 2:
        raise ValueError(f"order must be > 1: {order}")

    byte_len = (order.bit_length() + 7) // 8
    limit = ((1 << (8 * byte_len)) // order) * order

    while True:
        value = int.from_bytes(randbytes(byte_len), "big")
        if value >= limit:
            continue
        value %= order
        if exclude_zero and value == 0:
            continue
        return value


def random_curve_scalar(curve, exclude_zero=True):
    """curve.subgroup_order 에 대한 random_scalar."""
    return random_scalar(curve.subgroup_order, exclude_zero=exclude_zero)
