def isPowerOfTwo(n):
    # bit-arithmetic trick
    return n > 0 and n & (n-1) == 0


def nearestPowerOfTwo(n):
    if isPowerOfTwo(n): return n
    return 2 ** n.bit_length()


def log2(n):
    assert isPowerOfTwo(n), "n must be a power of 2"
    return n.bit_length() - 1
