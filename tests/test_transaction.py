"""
Tests for legacy transaction encoding and EIP-155 signing
"""
import pytest

from walletcore.core import ValidationError, EncodingError, CryptoError
from walletcore.wallet import Transaction, SignedTransaction, build_and_sign, address_from_private_key

# Example from EIP-155
EIP155_KEY = bytes.fromhex("46" * 32)
EIP155_TO = "0x" + "35" * 20
EIP155_SIGNING_DATA = "ec098504a817c800825208943535353535353535353535353535353535353535880de0b6b3a764000080018080"
EIP155_SIGNING_HASH = "daf5a779ae972f972197303d7b574746c7ef83eadac0f2791ad23db92e4c8e53"
EIP155_SIGNED = (
    "0xf86c098504a817c800825208943535353535353535353535353535353535353535880de0b6b3a76400008025a028ef61340bd939bc2195"
    "fe537567866003e1a15d3c71ff63e1590620aa636276a067cbe9d8997f761aecb703304b3800ccf555c9f3dc64214b297fb1966a3b6d83"
)


def _eip155_tx(**overrides) -> Transaction:
    params = dict(to_address=EIP155_TO, value=10 ** 18, nonce=9, gas_price=20 * 10 ** 9, gas_limit=21000, chain_id=1)
    params.update(overrides)
    return Transaction.build(**params)


def test_signing_payload():
    """
    The unsigned encoding ends with chain_id, 0, 0 and its Keccak-256 is the signing hash
    """
    tx = _eip155_tx()
    assert tx.to_bytes().hex() == EIP155_SIGNING_DATA
    assert tx.signing_hash().hex() == EIP155_SIGNING_HASH
    assert Transaction.from_bytes(tx.to_bytes()) == tx


def test_eip155_example():
    """
    The signed example transaction is reproduced exactly
    """
    signed = _eip155_tx().sign(EIP155_KEY)
    assert signed.v == 37
    assert signed.r == 0x28ef61340bd939bc2195fe537567866003e1a15d3c71ff63e1590620aa636276
    assert signed.s == 0x67cbe9d8997f761aecb703304b3800ccf555c9f3dc64214b297fb1966a3b6d83
    assert signed.hex() == EIP155_SIGNED, "Signed payload mismatch"

    assert build_and_sign(EIP155_KEY, EIP155_TO, 10 ** 18, 9, 20 * 10 ** 9, 21000, 1) == EIP155_SIGNED


def test_parse_signed():
    signed = SignedTransaction.from_hex(EIP155_SIGNED)
    assert signed.hex() == EIP155_SIGNED
    assert signed.chain_id == 1
    assert signed.recovery_id == 0
    assert signed.nonce == 9
    assert signed.unsigned() == _eip155_tx()
    assert signed.recover_sender() == address_from_private_key(EIP155_KEY), "Recovered wrong sender"
    assert len(signed.hash()) == 32


def test_signing_is_deterministic():
    tx = _eip155_tx(nonce=0, chain_id=11155111)
    assert tx.sign(EIP155_KEY).hex() == tx.sign(EIP155_KEY).hex()
    assert tx.sign(EIP155_KEY).hex() != _eip155_tx(nonce=1, chain_id=11155111).sign(EIP155_KEY).hex()


@pytest.mark.parametrize("chain_id", [1, 5, 137, 11155111])
def test_v_encodes_chain_id(chain_id):
    """
    v = recovery_id + 2 * chain_id + 35
    """
    signed = _eip155_tx(chain_id=chain_id).sign(EIP155_KEY)
    assert signed.v in (2 * chain_id + 35, 2 * chain_id + 36)
    assert signed.chain_id == chain_id
    assert signed.recover_sender() == address_from_private_key(EIP155_KEY)


def test_checksum_and_lowercase_recipient_agree():
    lower = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
    checksum = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
    assert _eip155_tx(to_address=lower) == _eip155_tx(to_address=checksum)
    assert _eip155_tx(to_address=lower).to_dict()["to"] == checksum


def test_data_field():
    tx = Transaction(nonce=0, gas_price=1, gas_limit=100000, to=b'\x35' * 20, value=0, chain_id=1, data=b'\xde\xad')
    signed = tx.sign(EIP155_KEY)
    assert SignedTransaction.from_bytes(signed.to_bytes()).data == b'\xde\xad'
    assert signed.to_dict()["data"] == "0xdead"


def test_build_errors():
    with pytest.raises(EncodingError):
        _eip155_tx(to_address="0x" + "zz" * 20)
    with pytest.raises(ValidationError):
        _eip155_tx(to_address="0x1234")
    with pytest.raises(ValidationError):
        # 19 characters
        build_and_sign(EIP155_KEY, "0x" + "a" * 17, 1, 0, 1, 21000, 1)
    with pytest.raises(ValidationError):
        _eip155_tx(nonce=-1)
    with pytest.raises(ValidationError):
        _eip155_tx(value=1.5)
    with pytest.raises(CryptoError):
        _eip155_tx().sign(b'\x00' * 32)
    with pytest.raises(CryptoError):
        build_and_sign(b'\x01' * 31, EIP155_TO, 1, 0, 1, 21000, 1)


def test_decode_errors(nested_rlp):
    with pytest.raises(EncodingError):
        SignedTransaction.from_hex("0xnothex")
    with pytest.raises(EncodingError):
        # Unsigned payload has only empty signature fields, so v < 35
        SignedTransaction.from_bytes(bytes.fromhex(EIP155_SIGNING_DATA))
    with pytest.raises(EncodingError):
        SignedTransaction.from_hex(EIP155_SIGNED[:-2])
    with pytest.raises(EncodingError):
        Transaction.from_bytes(bytes.fromhex("c0"))
    with pytest.raises(EncodingError):
        SignedTransaction.from_bytes(nested_rlp(5000))
    with pytest.raises(EncodingError):
        SignedTransaction.from_hex("0x" + nested_rlp(5000).hex())
