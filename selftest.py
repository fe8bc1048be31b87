"""Known-answer tests for the SHA-1 engine.

Digests are computed with sha1digest() and compared to published values.
Included are the vectors from http://www.di-mgt.com.au/sha_testvectors.html,
a few examples from https://en.wikipedia.org/wiki/SHA-1, an optional 1 GiB
test, and support for the NIST NSRL sample vectors
(http://www.nsrl.nist.gov/testdata/NSRLvectors.zip, downloaded and unzipped
manually).

Usage:
    python selftest.py [-l] [--nsrl DIR] [-v]
"""
import argparse
import logging
import os
import sys
from collections import namedtuple

from sha1 import sha1digest

logger = logging.getLogger(__name__)

Vector = namedtuple("Vector", ["name", "data", "expected"])

KNOWN_VECTORS = [
    Vector("abc", b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    Vector("empty", b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
    Vector("448-bit",
           b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
           "84983e441c3bd26ebaae4aa1f95129e5e54670f1"),
    Vector("896-bit",
           b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
           b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu",
           "a49b2446a02c645bf419f995b67091253a04a259"),
    Vector("million-a", b"a" * 1000000, "34aa973cd4c4daa4f61eeb2bdbad27316534016f"),
    Vector("quick-brown-dog", b"The quick brown fox jumps over the lazy dog",
           "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12"),
    Vector("quick-brown-cog", b"The quick brown fox jumps over the lazy cog",
           "de9f2c7fd25e1b3afad3e85a0bd17d9b100db4b3"),
]

LARGE_BASE = b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmnhijklmno"
LARGE_REPEAT = 16777216
LARGE_DIGEST = "7789f0c9ef7bfc40d93311143dfbe69e2017f592"

NSRL_HASH_FILE = "byte-hashes.sha1"
NSRL_DATA_FILE = "byte%04d.dat"


class NSRLError(Exception):
    """An NSRL vector file is missing or unreadable."""


def large_vector():
    """Build the 1 GiB vector (16,777,216 repetitions of a 64-byte base)."""
    return Vector("large", LARGE_BASE * LARGE_REPEAT, LARGE_DIGEST)


def testhash(data, expected, out=None):
    """Hash data, compare both outputs with expected, print a report.

    Returns the number of mismatches (0, 1 or 2).
    """
    out = out or sys.stdout
    digest, hexdigest = sha1digest(data)
    binhexdigest = ''.join('%02x' % x for x in digest)

    mismatch = 0
    if hexdigest.lower() != expected.lower():
        hexstatus = "does NOT match"
        mismatch += 1
    else:
        hexstatus = "matches"
    if binhexdigest.lower() != expected.lower():
        binstatus = "does NOT match"
        mismatch += 1
    else:
        binstatus = "matches"

    print("Known digest:  '%s'  data length: %d" % (expected, len(data)), file=out)
    print("  Hex digest:  '%s'  %s" % (hexdigest, hexstatus), file=out)
    print("  Bin digest:  '%s'  %s" % (binhexdigest, binstatus), file=out)
    print(file=out)
    return mismatch


def read_nsrl_hashes(directory):
    """Return the known hex digests listed in the NSRL hash file, in order.

    Hash lines look like "DA39A3EE5E6B4B0D3255BFEF95601890AFD80709 ^".
    """
    path = os.path.join(directory, NSRL_HASH_FILE)
    try:
        with open(path, "r") as f:
            lines = f.readlines()
    except OSError as e:
        raise NSRLError("Error opening %s: %s" % (path, e.strerror)) from e

    hashes = [line[:40] for line in lines
              if len(line) >= 42 and line[40] == ' ' and line[41] == '^']
    logger.info("hash count: %d", len(hashes))
    return hashes


def read_nsrl_vectors(directory):
    """Yield a Vector per NSRL data file, paired with its known digest.

    Zero-length data files are valid vectors for the empty message.
    """
    for idx, expected in enumerate(read_nsrl_hashes(directory)):
        path = os.path.join(directory, NSRL_DATA_FILE % idx)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise NSRLError("Error opening %s: %s" % (path, e.strerror)) from e
        logger.debug("read %d bytes from %s", len(data), path)
        yield Vector(path, data, expected)


def run(large=False, nsrl=None, out=None):
    """Run every selected vector and return the total failure count."""
    out = out or sys.stdout
    vectors = list(KNOWN_VECTORS)
    if large:
        logger.info("building %d-byte large vector", len(LARGE_BASE) * LARGE_REPEAT)
        vectors.append(large_vector())

    failures = 0
    for vector in vectors:
        failures += testhash(vector.data, vector.expected, out)

    if nsrl:
        for vector in read_nsrl_vectors(nsrl):
            print("File: %s" % vector.name, file=out)
            failures += testhash(vector.data, vector.expected, out)

    print("Failures: %d" % failures, file=out)
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="SHA-1 known-answer tests")
    parser.add_argument("-l", "--large", action="store_true",
                        help="Perform a large (1GB) test")
    parser.add_argument("--nsrl", "-nsrl", metavar="DIR",
                        default=os.environ.get("SHA1_NSRL_DIR"),
                        help="Directory holding the unzipped NSRL test vectors")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        failures = run(large=args.large, nsrl=args.nsrl)
    except NSRLError as e:
        logger.error("%s", e)
        return 1

    # exit statuses are truncated to 8 bits
    return min(failures, 255)


if __name__ == "__main__":
    sys.exit(main())
