def extendedEuclideanAlgorithm(a, b):
    """
    Returns (x, y, d) such that a*x + b*y = d = gcd(a, b).
    """
    x0, x1 = 1, 0
    y0, y1 = 0, 1
    while b != 0:
        q, r = divmod(a, b)
        a, b = b, r
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return x0, y0, a
