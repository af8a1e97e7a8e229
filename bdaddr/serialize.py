from typing import *

DictValue = Dict[str, Any]


class ByteSerializable:
	__slots__ = ()

	def to_bytes(self) -> bytes:
		raise NotImplementedError()

	@classmethod
	def from_bytes(cls, b: bytes) -> Any:
		raise NotImplementedError()


class Serializable:
	__slots__ = ()

	def to_dict(self) -> DictValue:
		raise NotImplementedError()

	@classmethod
	def from_dict(cls, d: DictValue) -> Any:
		raise NotImplementedError()


def reverse_octets(b: Union[bytes, bytearray, Sequence[int]]) -> bytes:
	"""
	Flips between storage order (least significant octet first, as transmitted over the air)
	and display/cipher order (most significant octet first).
	:param b: octets in either order
	:return: the same octets in the other order
	"""
	return bytes(b)[::-1]


def check_len(b: bytes, length: int, what: str) -> bytes:
	if len(b) != length:
		raise ValueError(f"{what} must be {length} bytes not {len(b)}")
	return b
