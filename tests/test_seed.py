"""
Tests for seed derivation from a mnemonic and passphrase
"""
from walletcore.wallet import mnemonic_to_seed

ABANDON_ABOUT = " ".join(["abandon"] * 11 + ["about"])


def test_known_seeds():
    """
    Known vectors with and without a passphrase
    """
    assert mnemonic_to_seed("punch shock entire north file identify").hex() == (
        "e1ca8d8539fb054eda16c35dcff74c5f88202b88cb03f2824193f4e6c5e87dd2"
        "e24a0edb218901c3e71e900d95e9573d9ffbf870b242e927682e381d109ae882"
    ), "Failed to generate known seed from known phrase"

    assert mnemonic_to_seed(ABANDON_ABOUT, "TREZOR").hex() == (
        "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
        "1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04"
    ), "Failed to generate known seed with passphrase"

    assert mnemonic_to_seed(ABANDON_ABOUT).hex() == (
        "5eb00bbddcf069084889a8ab9155568165f5c453ccb85e70811aaed6f6da5fc1"
        "9a5ac40b389cd370d086206dec8aa6c43daea6690f20ad3d8d48b2d2ce9e38e4"
    )


def test_seed_properties():
    seed = mnemonic_to_seed(ABANDON_ABOUT)
    assert len(seed) == 64
    assert mnemonic_to_seed(ABANDON_ABOUT) == seed, "Seed derivation must be deterministic"
    assert mnemonic_to_seed(ABANDON_ABOUT, "x") != seed, "Passphrase must change the seed"


def test_passphrase_is_normalised():
    """
    Composed and decomposed forms of the same passphrase give the same seed
    """
    composed = "caf\u00e9"
    decomposed = "cafe\u0301"
    assert mnemonic_to_seed(ABANDON_ABOUT, composed) == mnemonic_to_seed(ABANDON_ABOUT, decomposed)
