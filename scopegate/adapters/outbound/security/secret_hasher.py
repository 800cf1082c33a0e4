# scopegate/adapters/outbound/security/secret_hasher.py

from passlib.context import CryptContext

from scopegate.application.ports.outbound import ISecretHasher


class ClientSecretHasher(ISecretHasher):
    """
    One-way hashing of client secrets.

    ``verify`` compares in constant time; ``dummy_verify`` burns the same
    amount of time when there is no stored hash to compare against.
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    async def hash_secret(cls, secret: str) -> str:
        """
        Generate a secure hash of the secret for storage in the database.
        """
        return cls.crypt_context.hash(secret)

    @classmethod
    async def verify_secret(cls, plain_secret: str, hashed_secret: str) -> bool:
        """
        Compare a plain text secret with the stored hash.
        """
        try:
            return cls.crypt_context.verify(plain_secret, hashed_secret)
        except (ValueError, TypeError):
            # Unrecognised or corrupt hash in the store
            return False

    @classmethod
    async def dummy_verify(cls) -> bool:
        """Spend the time of a verification that always fails."""
        return cls.crypt_context.dummy_verify()


if __name__ == "__main__":
    import asyncio
    import getpass

    print("Client secret hash generator")
    secret = getpass.getpass("Client secret to hash: ")

    hashed = asyncio.run(ClientSecretHasher.hash_secret(secret))

    print("\nHash generated, store it in clients.client_secret:\n")
    print(hashed)

# Usage:
# python -m scopegate.adapters.outbound.security.secret_hasher
