"""
Génère un hash bcrypt pour ADMIN_SECRET_HASH.

Usage:
    python -m storefront.tools.hash_secret "<secret admin>"
"""
import sys

import bcrypt

def generate_hash(secret: str) -> str:
    # Hash bcrypt avec salt auto
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(secret.encode("utf-8"), salt)
    return hashed.decode("utf-8")

def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1 or not args[0]:
        print("usage: python -m storefront.tools.hash_secret <secret>", file=sys.stderr)
        return 2
    print(f"ADMIN_SECRET_HASH={generate_hash(args[0])}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
