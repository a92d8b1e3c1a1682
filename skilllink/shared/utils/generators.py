"""ID generators (CUID2 for client-assigned Firestore document ids)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Used for documents whose id must be known before the write, e.g. a
    connection record committed together with its pair guard.

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def pair_key(user_a: str, user_b: str) -> str:
    """Return the order-independent key for two user ids ("a_b", sorted).

    Shared by chat conversation ids and connection pair guards so that
    both users address the same document.
    """
    first, second = sorted((user_a, user_b))
    return f"{first}_{second}"
