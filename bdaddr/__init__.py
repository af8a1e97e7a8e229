"""
Bluetooth Device Address.

    from bdaddr import Address
    addr = Address.le_random_from_str("53:03:8c:bc:bd:82")
    str(addr)  # "53:03:8c:bc:bd:82"
"""
import logging

from .addr import (
	Address,
	AddressType,
	RandomAddressType,
	RawAddress,
	DeviceAddress,
	PublicDeviceAddress,
	RandomDeviceAddress,
	NonResolvablePrivateAddress,
	ResolvablePrivateAddress,
	StaticDeviceAddress,
	UnknownRandomAddress,
	AddressParseError,
	InvalidAddressTag,
	InvalidAddressType,
)
from .crypto import (
	IdentityResolvingKey,
	ah,
	resolve,
	resolve_any,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
	"Address",
	"AddressType",
	"RandomAddressType",
	"RawAddress",
	"DeviceAddress",
	"PublicDeviceAddress",
	"RandomDeviceAddress",
	"NonResolvablePrivateAddress",
	"ResolvablePrivateAddress",
	"StaticDeviceAddress",
	"UnknownRandomAddress",
	"AddressParseError",
	"InvalidAddressTag",
	"InvalidAddressType",
	"IdentityResolvingKey",
	"ah",
	"resolve",
	"resolve_any",
]
