"""SHA-1 digest of an in-memory buffer (single-call implementation).

This module provides a small, readable implementation of SHA-1 (FIPS 180-4)
that hashes a complete byte buffer in one call. There is no incremental
update interface: the whole message has to be available up front.

Full 64-byte blocks are compressed straight out of the caller's buffer;
only the final one or two blocks, which carry the padding and the bit
length, are copied into a scratch buffer.
"""

# Initial hash state h0..h4
IV = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476, 0xc3d2e1f0)


class InvalidArguments(ValueError):
    """Raised when a call cannot produce any output or its input is inconsistent."""


def _choose(b, c, d):
    return (b & c) | (~b & d)


def _parity(b, c, d):
    return b ^ c ^ d


def _majority(b, c, d):
    return (b & c) | (b & d) | (c & d)


# (round function, additive constant) for rounds 0-19, 20-39, 40-59, 60-79
ROUND_TABLE = [(_choose, 0x5a827999),
               (_parity, 0x6ed9eba1),
               (_majority, 0x8f1bbcdc),
               (_parity, 0xca62c1d6)]


def _to_bytes(data):
    """Return a byte view of data; str input is UTF-8 encoded."""
    if isinstance(data, str):
        return memoryview(data.encode("utf-8"))
    if isinstance(data, (bytes, bytearray)):
        return memoryview(data)
    if isinstance(data, memoryview):
        if data.format not in ("B", "b", "c"):
            raise TypeError("memoryview must be of a byte-oriented format")
        return data.cast("B") if data.ndim == 1 and data.c_contiguous else memoryview(data.tobytes())
    raise TypeError("data must be bytes-like or str, not %s" % type(data).__name__)


class SHA1:

    block_size = 64
    digest_size = 20

    def __init__(self):
        """Initialize to the SHA-1 initial hash state."""
        self.h = list(IV)

    @staticmethod
    def ROT(x, n):
        """Rotate x left by n bits, modulo 2^32."""
        x = x & 0xffffffff
        return ((x << n) | (x >> (32 - n))) & 0xffffffff

    @staticmethod
    def F(b, c, d, i):
        """SHA-1 non-linear function for round i, looked up by round quartile.

        Rounds  0-19: choose    (b & c) | (~b & d)
        Rounds 20-39: parity    b ^ c ^ d
        Rounds 40-59: majority  (b & c) | (b & d) | (c & d)
        Rounds 60-79: parity    b ^ c ^ d
        """
        if not 0 <= i < 80:
            raise ValueError("Invalid round index")
        return ROUND_TABLE[i // 20][0](b, c, d) & 0xffffffff

    @staticmethod
    def K(i):
        """Return the additive constant for round i."""
        if not 0 <= i < 80:
            raise ValueError("Invalid round index")
        return ROUND_TABLE[i // 20][1]

    @staticmethod
    def sha1_padded(input_bytes):
        """Return input_bytes padded to a multiple of 64 bytes per SHA-1.

        Padding: 0x80 byte, then 0x00 bytes up to 56 mod 64, then the
        64-bit big-endian length (in bits).
        The digest path only builds the tail of this (see sha1_tail); the
        full padded message is the reference that tail is checked against.
        """
        input_bytes = bytes(input_bytes)
        num_bits = len(input_bytes) * 8
        pad_len = (55 - len(input_bytes)) % 64
        return input_bytes + b"\x80" + b"\x00" * pad_len + \
            (num_bits & 0xffffffffffffffff).to_bytes(8, 'big')

    @staticmethod
    def sha1_tail(input_bytes):
        """Return the padded final block(s) of input_bytes.

        Only the bytes past the last full 64-byte block are copied; the
        result is 64 bytes when the length field fits after them, else 128.
        """
        total = len(input_bytes)
        remainder = total % 64
        tail = bytearray(input_bytes[total - remainder:])
        tail.append(0x80)
        tail.extend(b"\x00" * ((55 - remainder) % 64))
        tail.extend(((total * 8) & 0xffffffffffffffff).to_bytes(8, 'big'))
        return bytes(tail)

    @staticmethod
    def message_schedule(block):
        """Expand a 64-byte block into the 80-word message schedule."""
        w = [int.from_bytes(block[t*4:t*4+4], 'big') for t in range(16)]
        for t in range(16, 80):
            w.append(SHA1.ROT(w[t-3] ^ w[t-8] ^ w[t-14] ^ w[t-16], 1))
        return w

    @staticmethod
    def sha1_iteration(a, b, c, d, e, w, i):
        """Perform SHA-1 round i on working variables (a,b,c,d,e) with word w."""
        temp = (SHA1.ROT(a, 5) + SHA1.F(b, c, d, i) + e + SHA1.K(i) + w) & 0xffffffff
        return temp, a, SHA1.ROT(b, 30), c, d

    def sha1_chunk(self, input_bytes):
        """Process one 64-byte block and update internal state."""
        assert len(input_bytes) == 64
        w = SHA1.message_schedule(input_bytes)
        a, b, c, d, e = self.h

        for i in range(80):
            a, b, c, d, e = SHA1.sha1_iteration(a, b, c, d, e, w[i], i)

        self.h = [(x + y) & 0xffffffff for x, y in zip(self.h, (a, b, c, d, e))]

    def sha1_digest(self, input_bytes):
        """Compute the SHA-1 digest of input_bytes as 20 bytes.

        Full blocks are read from input_bytes in place; the padded tail is
        built separately by sha1_tail.
        """
        view = _to_bytes(input_bytes)
        full = len(view) - len(view) % 64
        for i in range(0, full, 64):
            self.sha1_chunk(view[i:i+64])
        tail = SHA1.sha1_tail(view)
        for i in range(0, len(tail), 64):
            self.sha1_chunk(tail[i:i+64])
        return b"".join(word.to_bytes(4, 'big') for word in self.h)


def sha1digest(data, databytes=None, digest=True, hexdigest=True):
    """Hash the first databytes bytes of data.

    Returns a (digest, hexdigest) pair: the 20-byte binary digest and its
    40-character lowercase hex rendering. An output that is not requested
    is returned as None. Requesting neither raises InvalidArguments without
    touching data.

    data may be None only when databytes is 0 or omitted.
    """
    if not digest and not hexdigest:
        raise InvalidArguments("at least one of digest or hexdigest must be requested")

    if data is None:
        if databytes:
            raise InvalidArguments("data is None but databytes is %d" % databytes)
        view = memoryview(b"")
    else:
        view = _to_bytes(data)
        if databytes is not None:
            if databytes < 0 or databytes > len(view):
                raise InvalidArguments(
                    "databytes %d out of range for a %d-byte buffer" % (databytes, len(view)))
            view = view[:databytes]

    raw = SHA1().sha1_digest(view)
    return (raw if digest else None,
            ''.join('%02x' % x for x in raw) if hexdigest else None)
