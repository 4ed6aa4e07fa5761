"""Issue a bearer token for calling the protected upload/delete endpoints.

Usage:
    python -m scripts.create_access_token <user_id> [email] [rol]
Signs with SECRET_KEY, so the token is only valid against a deployment
sharing that key. Intended for local testing and admin batch jobs.
"""

import sys

from citaya.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Print a signed token for the given user."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.create_access_token <user_id> [email] [rol]",
            file=sys.stderr,
        )
        sys.exit(1)
    claims = {"sub": sys.argv[1], "userId": sys.argv[1]}
    if len(sys.argv) > 2:
        claims["email"] = sys.argv[2]
    if len(sys.argv) > 3:
        claims["rol"] = sys.argv[3]
    print(create_access_token(claims))


if __name__ == "__main__":
    main()
