from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from zether.groth16.proof import deserialize_g1, deserialize_g2


class FR(FQ):
    field_modulus = bn128.curve_order

# Elliptic Curve operations
mult = bn128.multiply
pairing = bn128.pairing
add = bn128.add


class VerifyingKey:
    """snarkjs verification_key.json 의 Groth16 검증키.

    alpha1: G1, beta2 / gamma2 / delta2: G2, ic: 공개 입력 수 + 1 개의 G1 점
    """

    def __init__(self, alpha1, beta2, gamma2, delta2, ic):
        self.alpha1 = alpha1
        self.beta2 = beta2
        self.gamma2 = gamma2
        self.delta2 = delta2
        self.ic = ic

    @property
    def n_public(self):
        return len(self.ic) - 1

    @classmethod
    def from_snarkjs(cls, data):
        if data.get("protocol", "groth16") != "groth16":
            raise ValueError(f"unsupported protocol: {data.get('protocol')}")
        return cls(
            alpha1=deserialize_g1(data["vk_alpha_1"][:2]),
            beta2=deserialize_g2(data["vk_beta_2"][:2]),
            gamma2=deserialize_g2(data["vk_gamma_2"][:2]),
            delta2=deserialize_g2(data["vk_delta_2"][:2]),
            ic=[deserialize_g1(p[:2]) for p in data["IC"]],
        )


def vk_x(vk, public_signals):
    # IC[0] + Σ pub_i·IC[i+1]
    if len(public_signals) != vk.n_public:
        raise ValueError(
            "expected {} public signals, got {}".format(vk.n_public, len(public_signals))
        )
    acc = vk.ic[0]
    for ic, s in zip(vk.ic[1:], public_signals):
        acc = add(acc, mult(ic, int(FR(int(s)))))
    return acc


def lhs(prf_A, prf_B):
    return pairing(prf_B, prf_A)

def rhs(prf_C, vk, public_signals):
    RHS = pairing(vk.beta2, vk.alpha1)
    RHS = (RHS * pairing(vk.gamma2, vk_x(vk, public_signals))) * pairing(vk.delta2, prf_C)
    return RHS

# e(A, B) == e(alpha, beta) · e(vk_x, gamma) · e(C, delta)
def verify(vk, proof, public_signals=None):

    if public_signals is None:
        public_signals = proof.public_signals

    if not proof.is_well_formed():
        return False

    prf_A = proof.g1_a()
    prf_B = proof.g2_b()
    prf_C = proof.g1_c()

    LHS = lhs(prf_A, prf_B)
    RHS = rhs(prf_C, vk, public_signals)

    return LHS == RHS
