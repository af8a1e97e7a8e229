from ..serialize import *
import unittest


class ReverseOctetsTest(unittest.TestCase):
	def test_address_len(self):
		self.assertEqual(bytes.fromhex("554433221100"), reverse_octets(bytes.fromhex("001122334455")))

	def test_block_len(self):
		b = bytes(range(16))
		self.assertEqual(bytes(range(15, -1, -1)), reverse_octets(b))

	def test_prand_block(self):
		# 3 prand octets followed by 13 zero octets end up as the last 3 octets of the block
		block = reverse_octets(b"\x94\x81\x70" + bytes(13))
		self.assertEqual(16, len(block))
		self.assertEqual(bytes(13) + b"\x70\x81\x94", block)

	def test_int_sequence(self):
		self.assertEqual(b"\x03\x02\x01", reverse_octets([1, 2, 3]))
		self.assertEqual(b"\x03\x02\x01", reverse_octets(bytearray(b"\x01\x02\x03")))

	def test_involution(self):
		for n in range(0, 17):
			b = bytes(range(100, 100 + n))
			self.assertEqual(b, reverse_octets(reverse_octets(b)))

	def test_empty(self):
		self.assertEqual(b"", reverse_octets(b""))

	def test_returns_bytes(self):
		self.assertIsInstance(reverse_octets(bytearray(2)), bytes)


class CheckLenTest(unittest.TestCase):
	def test_ok(self):
		self.assertEqual(b"abc", check_len(b"abc", 3, "thing"))

	def test_bad_len(self):
		with self.assertRaises(ValueError) as cm:
			check_len(b"ab", 3, "thing")
		self.assertIn("thing must be 3 bytes not 2", str(cm.exception))


if __name__ == "__main__":
	unittest.main()
