"""Generate a VAPID key pair for web-push.

    python3 scripts/generate_vapid_keys.py >> .env
"""

from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from py_vapid.utils import b64urlencode


def generate_keys():
    """Return (public_key, private_key), both base64url without padding.

    The public key is the uncompressed P-256 point browsers expect as
    `applicationServerKey`; the private key is the raw 32-byte scalar.
    """
    vapid = Vapid()
    vapid.generate_keys()
    public = vapid.public_key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    private = vapid.private_key.private_numbers().private_value.to_bytes(32, "big")
    return b64urlencode(public), b64urlencode(private)


if __name__ == "__main__":
    public_key, private_key = generate_keys()
    print(f"VAPID_PUBLIC_KEY={public_key}")
    print(f"VAPID_PRIVATE_KEY={private_key}")
