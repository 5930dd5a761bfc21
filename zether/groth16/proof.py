"""
Groth16 증명 데이터와 직렬화
=============================

외부 증명 엔진(snarkjs)의 출력을 담고, 온체인 calldata 형태로 바꾼다.

**snarkjs 증명 JSON**:
  {
    "pi_a": [x, y, "1"],
    "pi_b": [[x_c0, x_c1], [y_c0, y_c1], ["1", "0"]],
    "pi_c": [x, y, "1"],
    "protocol": "groth16", "curve": "bn128"
  }
  pi_a, pi_c 는 bn128 G1, pi_b 는 G2 (FQ2 좌표 c0 + c1·i) 이며 z = 1 인 사영 좌표로 나온다.

**Solidity calldata 순서**:
  EVM 의 pairing precompile 은 FQ2 원소를 (c1, c0) 순서로 받는다.
  그래서 pB 의 각 좌표 쌍을 뒤집는다 (snarkjs exportSolidityCallData 와 같음):

      pB_sol = [[x_c1, x_c0], [y_c1, y_c0]]
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from zether.calldata import flatten_proof


class ProofResult:
    """증명 엔진 출력.

    속성:
        pA: G1 점 (x, y) 정수 쌍
        pB: G2 점 ((x_c0, x_c1), (y_c0, y_c1)), snarkjs 순서
        pC: G1 점 (x, y)
        public_signals: 공개 신호 리스트 (bn128 스칼라 필드 원소, int)
    """

    def __init__(self, pA, pB, pC, public_signals):
        self.pA = tuple(int(c) for c in pA)
        self.pB = tuple(tuple(int(c) for c in coord) for coord in pB)
        self.pC = tuple(int(c) for c in pC)
        self.public_signals = [int(s) for s in public_signals]
        for s in self.public_signals:
            if not 0 <= s < bn128.curve_order:
                raise ValueError(f"public signal out of field range: {s}")

    @classmethod
    def from_snarkjs(cls, proof, public_signals):
        """snarkjs proof.json / public.json 내용 → ProofResult"""
        pi_a = proof["pi_a"]
        pi_b = proof["pi_b"]
        pi_c = proof["pi_c"]
        return cls(
            pA=_affine_g1(pi_a),
            pB=_affine_g2(pi_b),
            pC=_affine_g1(pi_c),
            public_signals=public_signals,
        )

    def g1_a(self):
        return deserialize_g1(self.pA)

    def g2_b(self):
        return deserialize_g2(self.pB)

    def g1_c(self):
        return deserialize_g1(self.pC)

    def is_well_formed(self):
        """pA, pC 가 G1 위에, pB 가 G2 위에 있는지 확인한다."""
        try:
            return (
                bn128.is_on_curve(self.g1_a(), bn128.b)
                and bn128.is_on_curve(self.g2_b(), bn128.b2)
                and bn128.is_on_curve(self.g1_c(), bn128.b)
            )
        except (TypeError, ValueError):
            return False

    def to_calldata(self):
        """(pA, pB_sol, pC, public_signals). G2 좌표 순서를 Solidity 용으로 바꾼다."""
        pB_sol = ((self.pB[0][1], self.pB[0][0]), (self.pB[1][1], self.pB[1][0]))
        return self.pA, pB_sol, self.pC, list(self.public_signals)

    def to_snarkjs(self):
        """ProofResult → snarkjs proof.json 형태의 dict"""
        return {
            "pi_a": serialize_g1(self.g1_a()) + ["1"],
            "pi_b": serialize_g2(self.g2_b()) + [["1", "0"]],
            "pi_c": serialize_g1(self.g1_c()) + ["1"],
            "protocol": "groth16",
            "curve": "bn128",
        }

    def flatten(self):
        """uint256[8] calldata 레이아웃"""
        pA, pB, pC, _ = self.to_calldata()
        return flatten_proof(pA, pB, pC)

    def __eq__(self, other):
        if not isinstance(other, ProofResult):
            return NotImplemented
        return (self.pA, self.pB, self.pC, self.public_signals) == (
            other.pA, other.pB, other.pC, other.public_signals
        )

    def __repr__(self):
        return f"ProofResult(pA={self.pA}, pC={self.pC}, signals={len(self.public_signals)})"


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[int|str, int|str] or None → G1 point (FQ 튜플)"""
    if data is None:
        return None
    return (FQ(int(data[0])), FQ(int(data[1])))


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(data):
    """[[c0,c1],[c0,c1]] or None → G2 point (FQ2 튜플)"""
    if data is None:
        return None
    return (
        bn128.FQ2([int(data[0][0]), int(data[0][1])]),
        bn128.FQ2([int(data[1][0]), int(data[1][1])])
    )


# ─── snarkjs 좌표 ───

def _affine_g1(coords):
    # snarkjs 는 항상 z = "1" 인 아핀 좌표를 출력한다
    if len(coords) > 2 and int(coords[2]) != 1:
        raise ValueError(f"expected affine G1 coordinates, got z={coords[2]}")
    return (int(coords[0]), int(coords[1]))


def _affine_g2(coords):
    if len(coords) > 2 and [int(c) for c in coords[2]] != [1, 0]:
        raise ValueError(f"expected affine G2 coordinates, got z={coords[2]}")
    return (
        (int(coords[0][0]), int(coords[0][1])),
        (int(coords[1][0]), int(coords[1][1])),
    )
