"""
Bluetooth Device Addresses, Core Specification Vol 6, Part B, 1.3 Device Address.

Octets are stored in the order they are transmitted (least significant octet first) and displayed
most significant octet first ("55:44:33:22:11:00" is stored as 00 11 22 33 44 55).
"""
from typing import *
from enum import IntEnum
from string import hexdigits
from .serialize import *


class AddressParseError(ValueError):
	pass


class AddressType(IntEnum):
	BR_EDR = 0
	LE_PUBLIC = 1
	LE_RANDOM = 2


class RandomAddressType(IntEnum):
	"""
	Sub-type of a LE random address, valued by the two most significant bits of the address.
	"""
	NON_RESOLVABLE = 0b00
	RESOLVABLE = 0b01
	UNKNOWN = 0b10  # reserved for future use
	STATIC = 0b11


class InvalidAddressTag(ValueError):
	def __init__(self, expected: RandomAddressType, actual: RandomAddressType) -> None:
		super().__init__(f"expected {expected.name} tag {expected.value:02b} but got {actual.name} tag {actual.value:02b}")
		self.expected = expected
		self.actual = actual


class InvalidAddressType(ValueError):
	def __init__(self, address: Any, expected: str = "resolvable private address") -> None:
		super().__init__(f"{address!r} is not a {expected}")
		self.address = address


class RawAddress(ByteSerializable):
	__slots__ = "_octets",
	LEN = 6
	SEPARATOR = ":"
	TAG_MASK = 0xC0
	TAG_SHIFT = 6

	def __init__(self, octets: Union[bytes, bytearray, Sequence[int]]) -> None:
		if isinstance(octets, str):
			raise TypeError(f"raw address takes octets not text (use {type(self).__name__}.from_str)")
		if isinstance(octets, int):
			raise TypeError(f"raw address takes {self.LEN} octets not an int")
		self._octets = check_len(bytes(octets), self.LEN, "address")

	@property
	def octets(self) -> bytes:
		return self._octets

	def tag(self) -> RandomAddressType:
		return RandomAddressType((self._octets[5] & self.TAG_MASK) >> self.TAG_SHIFT)

	def to_bytes(self) -> bytes:
		return self._octets

	@classmethod
	def from_bytes(cls, b: bytes) -> 'RawAddress':
		return cls(b)

	@classmethod
	def from_str(cls, s: str) -> 'RawAddress':
		parts = s.split(cls.SEPARATOR)
		if len(parts) != cls.LEN:
			raise AddressParseError(f"expected {cls.LEN} octets got {len(parts)}: {s!r}")
		for part in parts:
			if len(part) != 2 or not all(c in hexdigits for c in part):
				raise AddressParseError(f"bad octet {part!r} in {s!r}")
		return cls(reverse_octets([int(part, 16) for part in parts]))

	def __bytes__(self) -> bytes:
		return self._octets

	def __str__(self) -> str:
		return self.SEPARATOR.join(f"{octet:02x}" for octet in reverse_octets(self._octets))

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self})"

	def __eq__(self, other: Any) -> bool:
		return isinstance(other, RawAddress) and self._octets == other._octets

	def __hash__(self) -> int:
		return hash(self._octets)


def _raw(b: Union[RawAddress, bytes, Sequence[int]]) -> RawAddress:
	return b if isinstance(b, RawAddress) else RawAddress(b)


class DeviceAddress(ByteSerializable):
	"""
	A classified LE address. Owns its RawAddress and remembers what kind of address it is.
	"""
	__slots__ = "_raw",

	def __init__(self, raw: RawAddress) -> None:
		self._raw = raw

	@property
	def raw(self) -> RawAddress:
		return self._raw

	def to_bytes(self) -> bytes:
		return self.raw.to_bytes()

	def to_address(self) -> 'Address':
		raise NotImplementedError()

	def __str__(self) -> str:
		return str(self.raw)

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.raw})"

	def __eq__(self, other: Any) -> bool:
		return type(self) is type(other) and self.raw == other.raw

	def __hash__(self) -> int:
		return hash((type(self).__name__, self.raw))


class PublicDeviceAddress(DeviceAddress):
	__slots__ = ()

	@classmethod
	def from_bytes(cls, b: bytes) -> 'PublicDeviceAddress':
		return cls(RawAddress(b))

	@classmethod
	def from_str(cls, s: str) -> 'PublicDeviceAddress':
		return cls(RawAddress.from_str(s))

	def to_address(self) -> 'Address':
		return Address(AddressType.LE_PUBLIC, self)


class RandomDeviceAddress(DeviceAddress):
	__slots__ = ()
	RANDOM_TYPE: RandomAddressType

	def __init__(self, raw: RawAddress) -> None:
		if type(self) is RandomDeviceAddress:
			raise TypeError("use RandomDeviceAddress.new to classify a random address")
		if raw.tag() != self.RANDOM_TYPE:
			raise InvalidAddressTag(self.RANDOM_TYPE, raw.tag())
		super().__init__(raw)

	@staticmethod
	def new(raw: RawAddress) -> 'RandomDeviceAddress':
		"""
		Classifies any random address by its tag bits. Never fails, reserved tags become UnknownRandomAddress.
		"""
		tag = raw.tag()
		if tag == RandomAddressType.NON_RESOLVABLE:
			return NonResolvablePrivateAddress(raw)
		elif tag == RandomAddressType.RESOLVABLE:
			return ResolvablePrivateAddress(raw)
		elif tag == RandomAddressType.STATIC:
			return StaticDeviceAddress(raw)
		return UnknownRandomAddress(raw)

	@classmethod
	def try_from(cls, b: Union[RawAddress, bytes, Sequence[int]]) -> 'RandomDeviceAddress':
		"""
		Strict construction: the tag bits must match the requested sub-type.
		:raises InvalidAddressTag: carrying the expected and actual tag
		"""
		if cls is RandomDeviceAddress:
			return cls.new(_raw(b))
		return cls(_raw(b))

	@classmethod
	def from_bytes(cls, b: bytes) -> 'RandomDeviceAddress':
		return cls.try_from(b)

	@classmethod
	def from_str(cls, s: str) -> 'RandomDeviceAddress':
		return cls.try_from(RawAddress.from_str(s))

	@property
	def random_type(self) -> RandomAddressType:
		return self.RANDOM_TYPE

	def to_address(self) -> 'Address':
		return Address(AddressType.LE_RANDOM, self)


class NonResolvablePrivateAddress(RandomDeviceAddress):
	__slots__ = ()
	RANDOM_TYPE = RandomAddressType.NON_RESOLVABLE


class ResolvablePrivateAddress(RandomDeviceAddress):
	__slots__ = ()
	RANDOM_TYPE = RandomAddressType.RESOLVABLE
	HASH_LEN = 3

	def hash(self) -> bytes:
		return self.raw.octets[:self.HASH_LEN]

	def prand(self) -> bytes:
		return self.raw.octets[self.HASH_LEN:]

	def matches(self, irk: Union['IdentityResolvingKey', bytes]) -> bool:
		"""
		Tests whether this address was generated from the Identity Resolving Key.
		:param irk: IdentityResolvingKey or its 16 raw (least significant octet first) bytes
		"""
		from .crypto import rpa_matches
		return rpa_matches(self, irk)


class StaticDeviceAddress(RandomDeviceAddress):
	__slots__ = ()
	RANDOM_TYPE = RandomAddressType.STATIC


class UnknownRandomAddress(RandomDeviceAddress):
	__slots__ = ()
	RANDOM_TYPE = RandomAddressType.UNKNOWN


AddressValue = Union[RawAddress, PublicDeviceAddress, RandomDeviceAddress]


class Address(Serializable):
	"""
	Bluetooth Device Address: a BR/EDR address, a LE public address or a classified LE random address.
	"""
	__slots__ = "_address_type", "_value"
	VALUE_TYPES = {
		AddressType.BR_EDR: RawAddress,
		AddressType.LE_PUBLIC: PublicDeviceAddress,
		AddressType.LE_RANDOM: RandomDeviceAddress,
	}

	def __init__(self, address_type: AddressType, value: AddressValue) -> None:
		address_type = AddressType(address_type)
		if not isinstance(value, self.VALUE_TYPES[address_type]):
			raise TypeError(f"{address_type.name} address can't hold {value!r}")
		self._address_type = address_type
		self._value = value

	@property
	def address_type(self) -> AddressType:
		return self._address_type

	@property
	def value(self) -> AddressValue:
		return self._value

	@classmethod
	def bredr_from(cls, b: bytes) -> 'Address':
		return cls(AddressType.BR_EDR, RawAddress(b))

	@classmethod
	def le_public_from(cls, b: bytes) -> 'Address':
		return cls(AddressType.LE_PUBLIC, PublicDeviceAddress.from_bytes(b))

	@classmethod
	def le_random_from(cls, b: bytes) -> 'Address':
		return cls(AddressType.LE_RANDOM, RandomDeviceAddress.new(RawAddress(b)))

	@classmethod
	def bredr_from_str(cls, s: str) -> 'Address':
		return cls(AddressType.BR_EDR, RawAddress.from_str(s))

	@classmethod
	def le_public_from_str(cls, s: str) -> 'Address':
		return cls(AddressType.LE_PUBLIC, PublicDeviceAddress.from_str(s))

	@classmethod
	def le_random_from_str(cls, s: str) -> 'Address':
		return cls(AddressType.LE_RANDOM, RandomDeviceAddress.new(RawAddress.from_str(s)))

	@classmethod
	def from_raw(cls, address_type: AddressType, raw: RawAddress) -> 'Address':
		if address_type == AddressType.BR_EDR:
			return cls(address_type, raw)
		elif address_type == AddressType.LE_PUBLIC:
			return cls(address_type, PublicDeviceAddress(raw))
		elif address_type == AddressType.LE_RANDOM:
			return cls(address_type, RandomDeviceAddress.new(raw))
		raise ValueError(f"unknown address type {address_type}")

	def into_bd_addr(self) -> RawAddress:
		if self.address_type == AddressType.BR_EDR:
			return self.value
		return self.value.raw

	def random_address(self) -> RandomDeviceAddress:
		if self.address_type != AddressType.LE_RANDOM:
			raise InvalidAddressType(self, "random device address")
		return self.value

	def to_bytes(self) -> bytes:
		return self.into_bd_addr().to_bytes()

	def to_dict(self) -> DictValue:
		return {
			"type": self.address_type.name.lower(),
			"address": str(self),
		}

	@classmethod
	def from_dict(cls, d: DictValue) -> 'Address':
		name = d["type"]
		try:
			address_type = AddressType[name.upper()]
		except KeyError:
			raise ValueError(f"unknown address type {name!r}")
		return cls.from_raw(address_type, RawAddress.from_str(d["address"]))

	def __str__(self) -> str:
		return str(self.value)

	def __repr__(self) -> str:
		return f"Address({self.address_type.name}, {self.value!r})"

	def __eq__(self, other: Any) -> bool:
		return isinstance(other, Address) and self.address_type == other.address_type \
			   and self.into_bd_addr() == other.into_bd_addr()

	def __hash__(self) -> int:
		return hash((self.address_type, self.into_bd_addr()))
