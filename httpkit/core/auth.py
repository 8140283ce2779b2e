import logging
import secrets
from typing import Callable, Mapping

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials


logger = logging.getLogger(__name__)

UserPass = Mapping[str, str]


def check_credentials(users: UserPass, username: str, password: str) -> bool:
    """Accept ``username``/``password`` if they match an entry in ``users``.

    Unknown users are rejected without a password comparison. Known users are
    compared with ``secrets.compare_digest`` so the time taken does not depend
    on where the passwords first differ.
    """
    expected = users.get(username)
    if expected is None:
        return False
    return secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


def basic_auth(users: UserPass, realm: str = "Restricted") -> Callable[..., str]:
    """Build a dependency enforcing HTTP Basic authentication against ``users``.

    Use it per route or app-wide::

        app = FastAPI(dependencies=[Depends(basic_auth({"alice": "secret"}))])

    Missing credentials are challenged by ``HTTPBasic`` itself. The dependency
    returns the authenticated username.
    """
    table = dict(users)
    security = HTTPBasic(realm=realm)

    def authenticate(credentials: HTTPBasicCredentials = Depends(security)) -> str:
        if check_credentials(table, credentials.username, credentials.password):
            return credentials.username
        logger.warning(f"Basic auth rejected for user {credentials.username!r}")
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": f'Basic realm="{realm}"'},
        )

    return authenticate
