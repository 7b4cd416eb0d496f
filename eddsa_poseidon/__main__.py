"""Sign and verify one message from the command line.

    python -m eddsa_poseidon [private_key] [message]

Without arguments a random private key signs the message ``2``.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from .eddsa import EdDSAPoseidon, pack_signature


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    private_key = args[0] if args else None
    message = args[1] if len(args) > 1 else 2

    identity = EdDSAPoseidon(private_key)
    signature = identity.sign_message(message)
    packed = pack_signature(signature)

    print("Public key        :", identity.public_key)
    print("Packed public key :", identity.packed_public_key)
    print("Signature R8      :", signature.R8)
    print("Signature S       :", signature.S)
    print("Packed signature  :", packed.hex())
    print("Valid signature?  ", identity.verify_signature(message, signature))


if __name__ == "__main__":
    main()
