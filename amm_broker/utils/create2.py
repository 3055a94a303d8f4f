"""CREATE2 address derivation used by the pair and pool factories"""

from web3 import Web3


def _to_bytes(value):
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def create2_address(deployer, salt, init_code_hash):
    """
    Address of a contract created with CREATE2.

    keccak256(0xff ++ deployer ++ salt ++ init_code_hash)[12:]
    """
    payload = b"\xff" + _to_bytes(deployer) + _to_bytes(salt) + _to_bytes(init_code_hash)
    return Web3.to_checksum_address(Web3.keccak(payload)[12:])


def sort_tokens(token_a, token_b):
    """Order two token addresses the way the factories do (numerically)."""
    if int(token_a, 16) == int(token_b, 16):
        raise ValueError(f"Identical token addresses: {token_a}")
    if int(token_a, 16) < int(token_b, 16):
        return Web3.to_checksum_address(token_a), Web3.to_checksum_address(token_b)
    return Web3.to_checksum_address(token_b), Web3.to_checksum_address(token_a)
