"""
Schnorr 소유 증명 (proof-of-possession)
=========================================

계정 등록 시, 공개키 y 에 대응하는 개인키 sk 를 안다는 것을 sk 를 드러내지 않고 증명한다.

**서명**:
  1. 논스 r ← [1, ℓ)   (매 서명마다 새로 뽑는다)
  2. R = r·G
  3. c = keccak256(abi.encode(contract, account, y, R)) mod ℓ
  4. s = (r + c·sk) mod ℓ
  → (c, s)

**검증** (원장이 수행):
  R' = s·G - c·y  를 계산하고  c' = H(contract, account, y, R') 가 c 와 같은지 본다.
  s·G = r·G + c·sk·G = R + c·y 이므로 정직한 서명은 R' = R 이 된다.

**도메인 결합**:
  해시 입력에 컨트랙트 주소와 계정 주소가 들어가므로, 다른 배포본이나 다른 계정으로
  서명을 재사용(replay)할 수 없다.

**인코딩**:
  해시 입력은 Solidity 의 abi.encode(address, address, (uint256,uint256), (uint256,uint256))
  과 바이트 단위로 같아야 한다. 모든 값은 32바이트 빅엔디안 워드이며
  주소는 왼쪽을 0으로 채운다. 원장이 같은 인코딩으로 c 를 다시 계산한다.

사용 예시:
    >>> sig = sign(contract, account, acct.public_key, acct.private_key, BABYJUB)
    >>> verify(contract, account, acct.public_key, sig, BABYJUB)  # True
"""

from collections import namedtuple

from Crypto.Hash import keccak
from eth_abi import encode

from zether.curve import is_zero_point
from zether.errors import CurveError
from zether.randomness import random_curve_scalar


SchnorrSignature = namedtuple("SchnorrSignature", ["challenge", "response"])

CHALLENGE_TYPES = ["address", "address", "(uint256,uint256)", "(uint256,uint256)"]


def challenge_preimage(contract_address, account_address, public_key, R):
    """해시 입력 바이트열 abi.encode(contract, account, (y.x, y.y), (R.x, R.y))."""
    return encode(
        CHALLENGE_TYPES,
        [contract_address, account_address, tuple(public_key), tuple(R)],
    )


def challenge(contract_address, account_address, public_key, R, curve):
    """Fiat-Shamir 챌린지 c = keccak256(preimage) mod ℓ."""
    preimage = challenge_preimage(contract_address, account_address, public_key, R)
    digest = keccak.new(digest_bits=256).update(preimage).digest()
    return int.from_bytes(digest, "big") % curve.subgroup_order


def sign(contract_address, account_address, public_key, private_key, curve):
    """(contract, account, y) 에 묶인 Schnorr 서명을 만든다.

    Args:
        contract_address: 원장 컨트랙트 주소
        account_address: 등록하는 지갑 주소
        public_key: y = sk·G
        private_key: sk
        curve: 곡선 파라미터

    Returns:
        SchnorrSignature(challenge, response)

    Raises:
        CurveError: public_key 가 private_key·G 가 아닐 때
    """
    if curve.base_mul(private_key) != curve.validate(public_key):
        raise CurveError("public key does not match private key")

    r = random_curve_scalar(curve, exclude_zero=True)
    curve.validate_scalar(r)
    R = curve.base_mul(r)

    c = challenge(contract_address, account_address, public_key, R, curve)
    s = (r + c * private_key) % curve.subgroup_order
    return SchnorrSignature(c, s)


def verify(contract_address, account_address, public_key, signature, curve):
    """서명을 원장과 같은 방식으로 검증한다. 잘못된 입력에는 False 를 반환한다."""
    c, s = signature
    order = curve.subgroup_order
    if not (0 <= c < order and 0 <= s < order):
        return False
    if is_zero_point(public_key) or not curve.is_on_curve(public_key):
        return False

    # R' = s·G - c·y
    R = curve.sub(curve.base_mul(s), curve.mul(public_key, c))
    return challenge(contract_address, account_address, public_key, R, curve) == c
