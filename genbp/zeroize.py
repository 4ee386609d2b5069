class Zeroizing(object):
    """
    Scope for secret material. On leaving the `with` block, however it is
    left, every wrapped object has its `zeroize()` called, overwriting the
    scalars it holds with zero.

        with Zeroizing(witness, s_l, s_r) as secrets:
            ...

    More secrets can be registered inside the block with `add`.
    """

    def __init__(self, *secrets):
        self.secrets = list(secrets)

    def add(self, *secrets):
        self.secrets.extend(secrets)
        return secrets[0] if len(secrets) == 1 else secrets

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        for secret in self.secrets:
            secret.zeroize()
        self.secrets = []
        return False
