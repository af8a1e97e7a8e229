"""
Resolvable Private Address resolution, Core Specification Vol 6, Part B, 1.3.2.3 and the random address
hash function ah (Vol 3, Part H, 2.2.2).
"""
import hmac
import logging
from typing import *
from cryptography.hazmat.primitives.ciphers import algorithms, Cipher, CipherContext
from cryptography.hazmat.primitives.ciphers.modes import ECB
from cryptography.hazmat.backends import default_backend
from .addr import *
from .serialize import *

logger = logging.getLogger(__name__)


class IdentityResolvingKey(ByteSerializable):
	"""
	128 bit IRK. key_bytes are kept least significant octet first, the way HCI and SMP carry them.
	from_str/from_int/hex use the most significant octet first form the Core Specification writes keys in.
	"""
	KEY_LEN: int = 16
	__slots__ = 'key_bytes',

	def __init__(self, key_bytes: bytes):
		self.key_bytes = check_len(bytes(key_bytes), self.KEY_LEN, "identity resolving key")

	@classmethod
	def from_bytes(cls, b: bytes) -> 'IdentityResolvingKey':
		return cls(b)

	@classmethod
	def from_int(cls, i: int) -> 'IdentityResolvingKey':
		return cls(i.to_bytes(cls.KEY_LEN, byteorder="little"))

	@classmethod
	def from_str(cls, s: str) -> 'IdentityResolvingKey':
		s = s.strip()
		if s.lower().startswith("0x"):
			s = s[2:]
		s = s.replace(":", "").replace("-", "")
		if len(s) != cls.KEY_LEN * 2:
			raise ValueError(f"key must be {cls.KEY_LEN * 2} hex digits not {len(s)}")
		return cls(reverse_octets(bytes.fromhex(s)))

	@classmethod
	def coerce(cls, irk: Union['IdentityResolvingKey', bytes, Sequence[int]]) -> 'IdentityResolvingKey':
		return irk if isinstance(irk, IdentityResolvingKey) else cls(irk)

	def cipher_key(self) -> bytes:
		return reverse_octets(self.key_bytes)

	def hex(self) -> str:
		return self.cipher_key().hex()

	def to_bytes(self) -> bytes:
		return self.key_bytes

	def __len__(self) -> int:
		return len(self.key_bytes)

	def __repr__(self) -> str:
		h = self.hex()
		return f"IdentityResolvingKey({h[:4]}...{h[-4:]})"

	def __eq__(self, other: Any) -> bool:
		return isinstance(other, IdentityResolvingKey) and hmac.compare_digest(self.key_bytes, other.key_bytes)

	def __hash__(self) -> int:
		return hash(self.key_bytes)


IRKLike = Union[IdentityResolvingKey, bytes, Sequence[int]]


def aes_ecb_encrypt(key: bytes, clear_text: bytes) -> bytes:
	encryptor = Cipher(algorithms.AES(key), ECB(), default_backend()).encryptor()  # type: CipherContext
	return encryptor.update(clear_text) + encryptor.finalize()


def ah(irk: IRKLike, prand: bytes) -> bytes:
	"""
	Random address hash function.
	:param irk: identity resolving key
	:param prand: 3 octets, least significant first
	:return: 3 octet hash, least significant first
	"""
	irk = IdentityResolvingKey.coerce(irk)
	check_len(prand, ResolvablePrivateAddress.HASH_LEN, "prand")
	r = reverse_octets(bytes(prand) + bytes(IdentityResolvingKey.KEY_LEN - len(prand)))
	return reverse_octets(aes_ecb_encrypt(irk.cipher_key(), r)[-ResolvablePrivateAddress.HASH_LEN:])


def rpa_matches(rpa: ResolvablePrivateAddress, irk: IRKLike) -> bool:
	computed = ah(irk, rpa.prand())
	matched = hmac.compare_digest(computed, rpa.hash())
	logger.debug("rpa %s %s", rpa, "resolved" if matched else "did not resolve")
	return matched


AnyAddress = Union[Address, DeviceAddress, RawAddress, bytes, Sequence[int]]


def as_resolvable(address: AnyAddress) -> ResolvablePrivateAddress:
	"""
	Narrows an address to a ResolvablePrivateAddress. Raw octets are classified as a LE random address.
	:raises InvalidAddressType: if it's not a LE random address with the resolvable tag
	"""
	if isinstance(address, Address):
		candidate = address.value if address.address_type == AddressType.LE_RANDOM else None
	elif isinstance(address, DeviceAddress):
		candidate = address
	else:
		candidate = RandomDeviceAddress.new(address if isinstance(address, RawAddress) else RawAddress(address))
	if not isinstance(candidate, ResolvablePrivateAddress):
		logger.debug("refusing to resolve %r", address)
		raise InvalidAddressType(address)
	return candidate


def resolve(address: AnyAddress, irk: IRKLike) -> bool:
	"""
	:return: True if the address is a RPA generated from irk, False if it's a RPA of some other key
	:raises InvalidAddressType: if the address isn't a resolvable private address
	"""
	return rpa_matches(as_resolvable(address), irk)


def resolve_any(address: AnyAddress, irks: Iterable[IRKLike]) -> Optional[IRKLike]:
	"""
	:return: the first of irks that resolves the address or None
	:raises InvalidAddressType: if the address isn't a resolvable private address
	"""
	rpa = as_resolvable(address)
	for irk in irks:
		if rpa_matches(rpa, irk):
			return irk
	return None
